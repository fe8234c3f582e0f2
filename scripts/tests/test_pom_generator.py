"""Tests for pom_generator.py — canonical POM XML generation."""

import xml.etree.ElementTree as ET

import pytest

from pom_manager.pom_constants import MAVEN_SCHEMA_LOCATION, MAVEN_XML_NAMESPACE
from pom_manager.pom_errors import (
    GenerationFailedError,
    InvalidProjectError,
    MissingRequiredError,
    PermissionDeniedError,
)
from pom_manager.pom_generator import PomGenerator, generate_pom
from pom_manager.pom_models import (
    Activation,
    ActivationProperty,
    Build,
    Dependency,
    Exclusion,
    MavenProject,
    Parent,
    Plugin,
    PluginExecution,
    Profile,
)
from pom_manager.pom_parser import PomParser

M = "{%s}" % MAVEN_XML_NAMESPACE


class MemoryStorage:
    def __init__(self, fail_with=None):
        self.files = {}
        self.fail_with = fail_with

    def write(self, path, data):
        if self.fail_with is not None:
            raise self.fail_with
        self.files[path] = data


def child_tags(xml_bytes):
    root = ET.fromstring(xml_bytes)
    return [el.tag.replace(M, "") for el in root]


class TestGenerate:
    def test_declaration_and_root_attributes(self, simple_project):
        output = generate_pom(simple_project).decode("utf-8")
        assert output.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<project ')
        assert f'xmlns="{MAVEN_XML_NAMESPACE}"' in output
        assert 'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"' in output
        assert f'xsi:schemaLocation="{MAVEN_SCHEMA_LOCATION}"' in output

    def test_four_space_indentation(self, simple_project):
        lines = generate_pom(simple_project).decode("utf-8").splitlines()
        assert "    <modelVersion>4.0.0</modelVersion>" in lines
        assert "        <java.version>21</java.version>" in lines

    def test_element_order(self):
        project = MavenProject(
            group_id="com.example",
            artifact_id="ordered",
            version="1.0.0",
            packaging="pom",
            name="Ordered",
            description="Checks order",
            parent=Parent("org.example", "base", "2.0.0"),
            modules=["core"],
            properties={"a": "1"},
            dependencies=[Dependency("org.slf4j", "slf4j-api", "2.0.9")],
            build=Build(),
            profiles=[Profile("ci")],
        )
        assert child_tags(generate_pom(project)) == [
            "modelVersion", "parent", "groupId", "artifactId", "version",
            "packaging", "name", "description", "modules", "properties",
            "dependencies", "build", "profiles",
        ]

    def test_default_packaging_omitted(self, simple_project):
        assert "<packaging>" not in generate_pom(simple_project).decode("utf-8")

    def test_non_default_packaging_written(self, simple_project):
        simple_project.packaging = "war"
        assert "<packaging>war</packaging>" in generate_pom(simple_project).decode("utf-8")

    def test_compile_scope_omitted(self, simple_project):
        output = generate_pom(simple_project).decode("utf-8")
        assert "<scope>compile</scope>" not in output
        assert output.count("<scope>") == 1
        assert "<scope>test</scope>" in output

    def test_properties_sorted_regardless_of_insertion_order(self):
        forward = MavenProject("com.example", "demo", "1.0.0", properties={"b": "2", "a": "1", "c": "3"})
        backward = MavenProject("com.example", "demo", "1.0.0", properties={"c": "3", "a": "1", "b": "2"})
        output = generate_pom(forward)
        assert output == generate_pom(backward)
        text = output.decode("utf-8")
        assert text.index("<a>") < text.index("<b>") < text.index("<c>")

    def test_deterministic(self, simple_project):
        assert generate_pom(simple_project) == generate_pom(simple_project)

    def test_dependency_details(self):
        project = MavenProject(
            "com.example", "demo", "1.0.0",
            dependencies=[Dependency(
                "org.springframework.boot", "spring-boot-starter-web", "3.2.0",
                optional=True,
                exclusions=[Exclusion("org.springframework.boot", "spring-boot-starter-tomcat")],
            )],
        )
        root = ET.fromstring(generate_pom(project))
        dep = root.find(f"{M}dependencies/{M}dependency")
        assert dep.find(f"{M}optional").text == "true"
        excl = dep.find(f"{M}exclusions/{M}exclusion")
        assert excl.find(f"{M}artifactId").text == "spring-boot-starter-tomcat"

    def test_plugin_configuration_and_executions(self):
        project = MavenProject(
            "com.example", "demo", "1.0.0",
            build=Build(plugins=[Plugin(
                "org.apache.maven.plugins", "maven-compiler-plugin", "3.11.0",
                configuration={"release": "21", "compilerArgs": {"arg": ["-Xlint", "-parameters"]}},
                executions=[PluginExecution("default-compile", "compile", ["compile"])],
            )]),
        )
        root = ET.fromstring(generate_pom(project))
        plugin = root.find(f"{M}build/{M}plugins/{M}plugin")
        assert [el.tag.replace(M, "") for el in plugin] == [
            "groupId", "artifactId", "version", "configuration", "executions",
        ]
        args = plugin.findall(f"{M}configuration/{M}compilerArgs/{M}arg")
        assert [a.text for a in args] == ["-Xlint", "-parameters"]
        execution = plugin.find(f"{M}executions/{M}execution")
        assert execution.find(f"{M}phase").text == "compile"

    def test_plugin_without_version_omits_element(self):
        project = MavenProject(
            "com.example", "demo", "1.0.0",
            build=Build(plugins=[Plugin("org.apache.maven.plugins", "maven-jar-plugin")]),
        )
        plugin = ET.fromstring(generate_pom(project)).find(f"{M}build/{M}plugins/{M}plugin")
        assert plugin.find(f"{M}version") is None

    def test_empty_relative_path_kept(self):
        project = MavenProject(
            "com.example", "demo", "1.0.0",
            parent=Parent("org.springframework.boot", "spring-boot-starter-parent", "3.4.1", ""),
        )
        assert "<relativePath />" in generate_pom(project).decode("utf-8")

    def test_profile_activation_written(self):
        project = MavenProject(
            "com.example", "demo", "1.0.0",
            profiles=[Profile(
                "ci",
                activation=Activation(
                    active_by_default=True,
                    property=ActivationProperty("env", "ci"),
                ),
                properties={"skipTests": "false"},
            )],
        )
        root = ET.fromstring(generate_pom(project))
        profile = root.find(f"{M}profiles/{M}profile")
        assert profile.find(f"{M}id").text == "ci"
        assert profile.find(f"{M}activation/{M}activeByDefault").text == "true"
        assert profile.find(f"{M}activation/{M}property/{M}name").text == "env"
        assert profile.find(f"{M}properties/{M}skipTests").text == "false"


class TestGenerateErrors:
    def test_none_project(self):
        with pytest.raises(InvalidProjectError):
            PomGenerator(storage=MemoryStorage()).generate(None)

    @pytest.mark.parametrize("field", ["group_id", "artifact_id", "version"])
    def test_missing_coordinate(self, simple_project, field):
        setattr(simple_project, field, "")
        with pytest.raises(MissingRequiredError):
            generate_pom(simple_project)

    @pytest.mark.parametrize("key", ["my key", "1st", "a<b", "ns:prop", ""])
    def test_invalid_property_name(self, simple_project, key):
        simple_project.properties[key] = "v"
        with pytest.raises(GenerationFailedError):
            generate_pom(simple_project)

    def test_invalid_configuration_name(self):
        project = MavenProject(
            "com.example", "demo", "1.0.0",
            build=Build(plugins=[Plugin(
                "org.example", "tool", configuration={"nested": {"bad key": "x"}},
            )]),
        )
        with pytest.raises(GenerationFailedError):
            generate_pom(project)

    def test_dotted_and_hyphenated_names_accepted(self):
        project = MavenProject(
            "com.example", "demo", "1.0.0",
            properties={"project.build.sourceEncoding": "UTF-8", "_x-y": "1"},
        )
        assert PomParser().parse(generate_pom(project)) == project

    def test_unserializable_value(self, simple_project):
        simple_project.properties["count"] = 3
        with pytest.raises(GenerationFailedError):
            generate_pom(simple_project)


class TestGenerateToFile:
    def test_writes_through_storage(self, simple_project):
        storage = MemoryStorage()
        PomGenerator(storage=storage).generate_to_file(simple_project, "out/pom.xml")
        assert storage.files["out/pom.xml"] == generate_pom(simple_project)

    def test_storage_error_keeps_kind_and_adds_path(self, simple_project):
        storage = MemoryStorage(fail_with=PermissionDeniedError("out"))
        with pytest.raises(PermissionDeniedError) as exc_info:
            PomGenerator(storage=storage).generate_to_file(simple_project, "out/pom.xml")
        assert exc_info.value.context == ("writing file out/pom.xml",)

    def test_writes_to_disk(self, simple_project, tmp_path):
        target = tmp_path / "nested" / "pom.xml"
        PomGenerator().generate_to_file(simple_project, target)
        assert PomParser().parse_file(target) == simple_project


class TestRoundTrip:
    def test_full_document_round_trip(self):
        project = MavenProject(
            group_id="com.example",
            artifact_id="full",
            version="2.1.0-SNAPSHOT",
            packaging="pom",
            name="Full",
            description="Everything the model knows",
            parent=Parent("org.example", "base", "1.0.0", "../base/pom.xml"),
            modules=["core", "web"],
            properties={"z.last": "1", "a.first": "2"},
            dependencies=[
                Dependency("org.slf4j", "slf4j-api", "2.0.9"),
                Dependency(
                    "org.example", "lib", "1.0", scope="provided", optional=True,
                    exclusions=[Exclusion("commons-logging", "commons-logging")],
                ),
            ],
            build=Build(
                source_directory="src",
                plugins=[Plugin(
                    "org.example", "tool-maven-plugin", None,
                    configuration={"flag": "on", "items": {"item": ["a", "b"]}},
                    executions=[PluginExecution(
                        "gen", "generate-sources", ["generate", "check"],
                        configuration={"target": "out"},
                    )],
                )],
            ),
            profiles=[Profile(
                "release",
                activation=Activation(jdk="17"),
                properties={"gpg.skip": "false"},
                dependencies=[Dependency("junit", "junit", "4.13.2", scope="test")],
                build=Build(plugins=[Plugin("org.apache.maven.plugins", "maven-gpg-plugin", "3.1.0")]),
                modules=["docs"],
            )],
        )
        assert PomParser().parse(generate_pom(project)) == project
