"""POM XML generation.

Serializes a :class:`MavenProject` into canonical ``pom.xml`` bytes. Output is
byte-reproducible: element order is fixed, properties are sorted by key,
indentation is four spaces, and values equal to a parser default are left
out (``jar`` packaging, ``compile`` scope).
"""

import logging
import re
import xml.etree.ElementTree as ET
from typing import Optional

from .pom_constants import DEFAULT_MODEL_VERSION, DEFAULT_PACKAGING, DEFAULT_SCOPE
from .pom_errors import GenerationFailedError, InvalidProjectError, MissingRequiredError, PomError
from .pom_models import Activation, Build, Dependency, MavenProject, Parent, Plugin, PluginExecution, Profile
from .pom_storage import FileStorage

logger = logging.getLogger("pom_manager.generator")

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'
INDENT = "    "
# Element names for property and configuration keys; no namespace prefixes.
XML_NAME_RE = re.compile(r"[A-Za-z_][\w.\-]*")


def _add_text(parent, tag: str, value: Optional[str]):
    """Append ``<tag>value</tag>`` unless ``value`` is ``None``."""
    if value is None:
        return None
    child = ET.SubElement(parent, tag)
    child.text = value
    return child


def _check_name(key) -> str:
    if not isinstance(key, str) or not XML_NAME_RE.fullmatch(key):
        raise GenerationFailedError(f"invalid element name {key!r}")
    return key


def _add_properties(parent, properties: dict) -> None:
    if not properties:
        return
    props_el = ET.SubElement(parent, "properties")
    for key in sorted(properties):
        _add_text(props_el, _check_name(key), properties[key])


def _add_modules(parent, modules: list) -> None:
    if not modules:
        return
    modules_el = ET.SubElement(parent, "modules")
    for module in modules:
        _add_text(modules_el, "module", module)


def _add_configuration_entries(parent, data: dict) -> None:
    for key, value in data.items():
        _check_name(key)
        for item in value if isinstance(value, list) else [value]:
            if isinstance(item, dict):
                _add_configuration_entries(ET.SubElement(parent, key), item)
            else:
                _add_text(parent, key, str(item))


def _add_configuration(parent, configuration: dict) -> None:
    if configuration:
        _add_configuration_entries(ET.SubElement(parent, "configuration"), configuration)


def _add_dependency(parent, dep: Dependency) -> None:
    dep_el = ET.SubElement(parent, "dependency")
    _add_text(dep_el, "groupId", dep.group_id)
    _add_text(dep_el, "artifactId", dep.artifact_id)
    _add_text(dep_el, "version", dep.version)
    if dep.scope and dep.scope != DEFAULT_SCOPE:
        _add_text(dep_el, "scope", dep.scope)
    if dep.optional:
        _add_text(dep_el, "optional", "true")
    if dep.exclusions:
        excls_el = ET.SubElement(dep_el, "exclusions")
        for group_id, artifact_id in dep.exclusions:
            excl_el = ET.SubElement(excls_el, "exclusion")
            _add_text(excl_el, "groupId", group_id)
            _add_text(excl_el, "artifactId", artifact_id)


def _add_dependencies(parent, dependencies: list) -> None:
    if not dependencies:
        return
    deps_el = ET.SubElement(parent, "dependencies")
    for dep in dependencies:
        _add_dependency(deps_el, dep)


def _add_execution(parent, execution: PluginExecution) -> None:
    exec_el = ET.SubElement(parent, "execution")
    _add_text(exec_el, "id", execution.execution_id or None)
    _add_text(exec_el, "phase", execution.phase or None)
    if execution.goals:
        goals_el = ET.SubElement(exec_el, "goals")
        for goal in execution.goals:
            _add_text(goals_el, "goal", goal)
    _add_configuration(exec_el, execution.configuration)


def _add_plugin(parent, plugin: Plugin) -> None:
    plugin_el = ET.SubElement(parent, "plugin")
    _add_text(plugin_el, "groupId", plugin.group_id)
    _add_text(plugin_el, "artifactId", plugin.artifact_id)
    _add_text(plugin_el, "version", plugin.version or None)
    _add_configuration(plugin_el, plugin.configuration)
    if plugin.executions:
        execs_el = ET.SubElement(plugin_el, "executions")
        for execution in plugin.executions:
            _add_execution(execs_el, execution)


def _add_build(parent, build: Build) -> None:
    build_el = ET.SubElement(parent, "build")
    _add_text(build_el, "sourceDirectory", build.source_directory or None)
    _add_text(build_el, "testSourceDirectory", build.test_source_directory or None)
    _add_text(build_el, "outputDirectory", build.output_directory or None)
    if build.plugins:
        plugins_el = ET.SubElement(build_el, "plugins")
        for plugin in build.plugins:
            _add_plugin(plugins_el, plugin)


def _add_parent(parent, ref: Parent) -> None:
    parent_el = ET.SubElement(parent, "parent")
    _add_text(parent_el, "groupId", ref.group_id)
    _add_text(parent_el, "artifactId", ref.artifact_id)
    _add_text(parent_el, "version", ref.version)
    # An empty <relativePath/> is meaningful to Maven, so only None is skipped.
    _add_text(parent_el, "relativePath", ref.relative_path)


def _add_activation(parent, activation: Activation) -> None:
    act_el = ET.SubElement(parent, "activation")
    if activation.active_by_default:
        _add_text(act_el, "activeByDefault", "true")
    _add_text(act_el, "jdk", activation.jdk or None)
    if activation.property is not None:
        prop_el = ET.SubElement(act_el, "property")
        _add_text(prop_el, "name", activation.property.name)
        _add_text(prop_el, "value", activation.property.value)
    if activation.os is not None:
        os_el = ET.SubElement(act_el, "os")
        for tag in ("name", "family", "arch", "version"):
            _add_text(os_el, tag, getattr(activation.os, tag) or None)
    if activation.file is not None:
        file_el = ET.SubElement(act_el, "file")
        _add_text(file_el, "exists", activation.file.exists or None)
        _add_text(file_el, "missing", activation.file.missing or None)


def _add_profile(parent, profile: Profile) -> None:
    profile_el = ET.SubElement(parent, "profile")
    _add_text(profile_el, "id", profile.profile_id)
    if profile.activation is not None:
        _add_activation(profile_el, profile.activation)
    _add_modules(profile_el, profile.modules)
    _add_properties(profile_el, profile.properties)
    _add_dependencies(profile_el, profile.dependencies)
    if profile.build is not None:
        _add_build(profile_el, profile.build)


def build_project_element(project: MavenProject):
    """Build the ``<project>`` element tree in canonical element order.

    Order: modelVersion, parent, groupId, artifactId, version, packaging,
    name, description, modules, properties, dependencies, build, profiles.
    """
    root = ET.Element("project")
    root.set("xmlns", project.xmlns)
    root.set("xmlns:xsi", project.xsi)
    root.set("xsi:schemaLocation", project.schema_location)

    _add_text(root, "modelVersion", project.model_version or DEFAULT_MODEL_VERSION)
    if project.parent is not None:
        _add_parent(root, project.parent)
    _add_text(root, "groupId", project.group_id)
    _add_text(root, "artifactId", project.artifact_id)
    _add_text(root, "version", project.version)
    if project.packaging and project.packaging != DEFAULT_PACKAGING:
        _add_text(root, "packaging", project.packaging)
    _add_text(root, "name", project.name or None)
    _add_text(root, "description", project.description or None)
    _add_modules(root, project.modules)
    _add_properties(root, project.properties)
    _add_dependencies(root, project.dependencies)
    if project.build is not None:
        _add_build(root, project.build)
    if project.profiles:
        profiles_el = ET.SubElement(root, "profiles")
        for profile in project.profiles:
            _add_profile(profiles_el, profile)
    return root


class PomGenerator:
    """Generate POM XML from :class:`MavenProject` instances.

    Args:
        storage: Object with a ``write(path, data)`` method. Defaults to
            :class:`FileStorage`.
    """

    def __init__(self, storage=None):
        self.storage = storage if storage is not None else FileStorage()

    def generate(self, project: Optional[MavenProject]) -> bytes:
        """Serialize ``project`` to UTF-8 XML bytes.

        Raises:
            InvalidProjectError: ``project`` is ``None``.
            MissingRequiredError: groupId, artifactId or version is empty.
            GenerationFailedError: The serializer rejected a value.
        """
        if project is None:
            raise InvalidProjectError("project is None")

        missing = [
            tag for tag, value in (
                ("groupId", project.group_id),
                ("artifactId", project.artifact_id),
                ("version", project.version),
            ) if not value
        ]
        if missing:
            raise MissingRequiredError(f"{', '.join(missing)} in <project>")

        root = build_project_element(project)
        ET.indent(root, space=INDENT)
        try:
            body = ET.tostring(root, encoding="unicode")
        except (TypeError, ValueError) as exc:
            raise GenerationFailedError(str(exc)) from exc

        xml_bytes = (XML_DECLARATION + body + "\n").encode("utf-8")
        logger.debug("Generated %d bytes for %s", len(xml_bytes), project.coordinates)
        return xml_bytes

    def generate_to_file(self, project: Optional[MavenProject], path) -> None:
        """Generate XML and write it through the storage layer.

        Generation errors propagate as-is; storage errors gain only the
        ``writing file <path>`` context.
        """
        xml_bytes = self.generate(project)
        try:
            self.storage.write(path, xml_bytes)
        except PomError as err:
            raise err.wrap(f"writing file {path}") from err


def generate_pom(project: MavenProject) -> bytes:
    """Serialize ``project`` with a default :class:`PomGenerator`."""
    return PomGenerator().generate(project)
