"""Canned project templates.

Each template is a plain function returning a fresh :class:`MavenProject`
for the given coordinates. The set is closed; unknown names raise
:class:`TemplateNotFoundError` listing what is available.
"""

from .pom_constants import (
    DEFAULT_PLUGIN_GROUP_ID,
    PACKAGING_JAR,
    PACKAGING_WAR,
    SCOPE_PROVIDED,
    SCOPE_TEST,
)
from .pom_errors import TemplateNotFoundError
from .pom_models import (
    Build,
    Coordinates,
    Dependency,
    MavenProject,
    Plugin,
    PluginExecution,
    TemplateInfo,
)

COMPILER_PLUGIN_VERSION = "3.11.0"
JUNIT_VERSION = "4.13.2"


def _java_properties(release: str) -> dict:
    return {
        "project.build.sourceEncoding": "UTF-8",
        "maven.compiler.source": release,
        "maven.compiler.target": release,
    }


def _compiler_plugin() -> Plugin:
    return Plugin(DEFAULT_PLUGIN_GROUP_ID, "maven-compiler-plugin", COMPILER_PLUGIN_VERSION)


def _junit() -> Dependency:
    return Dependency("junit", "junit", JUNIT_VERSION, scope=SCOPE_TEST)


def _project(coords: Coordinates, packaging: str, **kwargs) -> MavenProject:
    return MavenProject(
        group_id=coords.group_id,
        artifact_id=coords.artifact_id,
        version=coords.version,
        packaging=packaging,
        **kwargs,
    )


def basic_java(coords: Coordinates) -> MavenProject:
    return _project(
        coords, PACKAGING_JAR,
        properties=_java_properties("11"),
        build=Build(plugins=[_compiler_plugin()]),
    )


def java_library(coords: Coordinates) -> MavenProject:
    return _project(
        coords, PACKAGING_JAR,
        properties=_java_properties("11"),
        dependencies=[_junit()],
        build=Build(plugins=[
            _compiler_plugin(),
            Plugin(DEFAULT_PLUGIN_GROUP_ID, "maven-jar-plugin", "3.3.0"),
        ]),
    )


def web_app(coords: Coordinates) -> MavenProject:
    return _project(
        coords, PACKAGING_WAR,
        properties=_java_properties("11"),
        dependencies=[
            Dependency("javax.servlet", "javax.servlet-api", "4.0.1", scope=SCOPE_PROVIDED),
            _junit(),
        ],
        build=Build(plugins=[
            _compiler_plugin(),
            Plugin(DEFAULT_PLUGIN_GROUP_ID, "maven-war-plugin", "3.3.2"),
        ]),
    )


def javacard(coords: Coordinates) -> MavenProject:
    # CAP files are built from the JAR output, so packaging stays jar.
    properties = _java_properties("1.8")
    properties.update({
        "javacard.version": "3.0.5",
        "globalplatform.version": "1.7.0",
    })
    return _project(
        coords, PACKAGING_JAR,
        properties=properties,
        dependencies=[
            Dependency("com.github.martinpaljak", "globalplatform", "1.7.0", scope=SCOPE_PROVIDED),
            Dependency("com.github.martinpaljak", "javacard-api", "3.0.5u3", scope=SCOPE_PROVIDED),
            _junit(),
        ],
        build=Build(plugins=[
            _compiler_plugin(),
            Plugin(
                "com.github.martinpaljak", "ant-javacard", "23.08.08",
                executions=[PluginExecution("build-cap", "package", ["cap"])],
            ),
        ]),
    )


# name → (description, factory), in listing order.
TEMPLATES = {
    "basic-java": ("Basic Java JAR project with compiler plugin", basic_java),
    "java-library": ("Java library project with compiler and JAR plugins", java_library),
    "web-app": ("Java web application (WAR) project", web_app),
    "javacard": ("JavaCard applet project for smart cards (CAP packaging)", javacard),
}


class TemplateManager:
    """Create projects from the named templates in :data:`TEMPLATES`."""

    def create(self, template_name: str, coords: Coordinates) -> MavenProject:
        """Build a new project from a named template.

        Raises:
            TemplateNotFoundError: ``template_name`` is not a known template.
        """
        entry = TEMPLATES.get(template_name)
        if entry is None:
            raise TemplateNotFoundError(
                f"unknown template '{template_name}', available templates: "
                f"{', '.join(TEMPLATES)}"
            )
        _, factory = entry
        return factory(coords)

    def list(self) -> list:
        return [TemplateInfo(name, description) for name, (description, _) in TEMPLATES.items()]
