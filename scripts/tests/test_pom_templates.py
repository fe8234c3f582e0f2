"""Tests for pom_templates.py — template construction and round-trips."""

import pytest

from pom_manager.pom_errors import TemplateNotFoundError
from pom_manager.pom_generator import generate_pom
from pom_manager.pom_parser import PomParser
from pom_manager.pom_templates import TEMPLATES, TemplateManager
from pom_manager.pom_validator import validate_pom

manager = TemplateManager()


class TestCreate:
    def test_basic_java_output(self, coords):
        project = manager.create("basic-java", coords)
        output = generate_pom(project).decode("utf-8")
        assert 'xmlns="http://maven.apache.org/POM/4.0.0"' in output
        assert "<packaging>" not in output
        assert (
            "    <properties>\n"
            "        <maven.compiler.source>11</maven.compiler.source>\n"
            "        <maven.compiler.target>11</maven.compiler.target>\n"
            "        <project.build.sourceEncoding>UTF-8</project.build.sourceEncoding>\n"
            "    </properties>\n"
        ) in output
        assert len(project.build.plugins) == 1
        plugin = project.build.plugins[0]
        assert plugin.artifact_id == "maven-compiler-plugin"
        assert plugin.version == "3.11.0"

    def test_web_app_is_war(self, coords):
        project = manager.create("web-app", coords)
        assert project.packaging == "war"
        assert "<packaging>war</packaging>" in generate_pom(project).decode("utf-8")

    def test_javacard_binds_cap_to_package(self, coords):
        project = manager.create("javacard", coords)
        ant = project.build.plugins[-1]
        assert ant.artifact_id == "ant-javacard"
        assert ant.executions[0].phase == "package"
        assert ant.executions[0].goals == ["cap"]

    def test_instances_are_independent(self, coords):
        first = manager.create("java-library", coords)
        first.dependencies.clear()
        assert manager.create("java-library", coords).dependencies

    def test_unknown_template(self, coords):
        with pytest.raises(TemplateNotFoundError) as exc_info:
            manager.create("nonexistent", coords)
        message = str(exc_info.value)
        for name in ("basic-java", "java-library", "web-app", "javacard"):
            assert name in message


class TestList:
    def test_names_in_order(self):
        assert [t.name for t in manager.list()] == ["basic-java", "java-library", "web-app", "javacard"]

    def test_descriptions_present(self):
        assert all(t.description for t in manager.list())


@pytest.mark.parametrize("name", list(TEMPLATES))
class TestTemplateRoundTrip:
    def test_round_trip(self, name, coords):
        project = manager.create(name, coords)
        assert PomParser().parse(generate_pom(project)) == project

    def test_generation_is_stable(self, name, coords):
        project = manager.create(name, coords)
        first = generate_pom(project)
        assert generate_pom(PomParser().parse(first)) == first

    def test_templates_validate(self, name, coords):
        assert validate_pom(manager.create(name, coords)).valid
