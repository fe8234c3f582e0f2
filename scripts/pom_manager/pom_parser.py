"""Maven POM parsing and XML lookup helpers.

Turns ``pom.xml`` bytes into a :class:`MavenProject`. Each nested element has
its own sub-parser that enforces its own required children and wraps any
failure with the name of the step that failed, so callers see the whole
chain (``parsing build: parsing plugin: missing required fields: ...``).
Elements the model does not cover are ignored.
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional

from .pom_constants import (
    DEFAULT_MODEL_VERSION,
    DEFAULT_PACKAGING,
    DEFAULT_SCOPE,
    MAX_FILE_SIZE_BYTES,
    NS,
    ROOT_TAG,
)
from .pom_errors import FileTooBigError, InvalidXmlError, MissingRequiredError, PomError
from .pom_models import (
    Activation,
    ActivationFile,
    ActivationOS,
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
from .pom_storage import FileStorage

logger = logging.getLogger("pom_manager.parser")


def _local(tag: str) -> str:
    """Strip a ``{namespace}`` prefix from an ElementTree tag."""
    return tag.split("}")[-1] if "}" in tag else tag


def _find(el, tag, ns=NS):
    """Find a direct child XML element, trying with and without the Maven namespace.

    Args:
        el: Parent XML element to search within.
        tag: Tag name to look for (without namespace prefix).
        ns: Namespace mapping (defaults to Maven POM 4.0.0).

    Returns:
        The first matching child element, or ``None`` if not found.
    """
    result = el.find(f"m:{tag}", ns)
    if result is not None:
        return result
    return el.find(tag)


def _findall(el, tag, ns=NS) -> list:
    return list(el.findall(f"m:{tag}", ns)) + list(el.findall(tag))


def _text(el, tag, ns=NS) -> Optional[str]:
    """Extract the stripped text of a child element.

    Returns:
        ``None`` when the child is absent, ``""`` when it is present but empty.
    """
    child = _find(el, tag, ns)
    if child is None:
        return None
    return child.text.strip() if child.text else ""


def _is_true(el, tag) -> bool:
    value = _text(el, tag)
    return bool(value) and value.lower() == "true"


def _require(el, tags, owner: str) -> None:
    missing = [tag for tag in tags if _find(el, tag) is None]
    if missing:
        raise MissingRequiredError(f"{', '.join(missing)} in <{owner}>")


def _parse_properties(props_el) -> dict:
    """Read a ``<properties>`` block; each child tag is a key, its text the value."""
    properties = {}
    if props_el is None:
        return properties
    for child in props_el:
        if not isinstance(child.tag, str):
            continue
        key = _local(child.tag)
        if key in properties:
            logger.warning("Duplicate property '%s', keeping the last value", key)
        properties[key] = child.text.strip() if child.text else ""
    return properties


def _parse_configuration(config_el) -> dict:
    """Recursively read a ``<configuration>`` block into a nested dict.

    Leaf elements become string values keyed by their tag. Elements with
    children become sub-dicts. A tag that repeats among siblings collects
    its values into a list in document order.

    Args:
        config_el: The ``<configuration>`` XML element, or ``None``.

    Returns:
        The nested mapping, or an empty dict if config_el is ``None``.
    """
    if config_el is None:
        return {}
    result = {}
    for child in config_el:
        if not isinstance(child.tag, str):
            continue
        tag = _local(child.tag)
        if len(child) > 0:
            value = _parse_configuration(child)
        else:
            value = child.text.strip() if child.text else ""
        if tag in result:
            existing = result[tag]
            if not isinstance(existing, list):
                result[tag] = existing = [existing]
            existing.append(value)
        else:
            result[tag] = value
    return result


def _parse_modules(modules_el) -> list:
    if modules_el is None:
        return []
    return [m.text.strip() if m.text else "" for m in _findall(modules_el, "module")]


def _parse_exclusion(excl_el) -> Exclusion:
    _require(excl_el, ("groupId", "artifactId"), "exclusion")
    return Exclusion(_text(excl_el, "groupId"), _text(excl_el, "artifactId"))


def _parse_dependency(dep_el) -> Dependency:
    """Parse a ``<dependency>`` XML element into a Dependency dataclass.

    groupId, artifactId and version are required. Scope falls back to
    ``compile``; exclusions are parsed in order and each needs both fields.
    """
    _require(dep_el, ("groupId", "artifactId", "version"), "dependency")
    exclusions = []
    excl_el = _find(dep_el, "exclusions")
    if excl_el is not None:
        for ex in _findall(excl_el, "exclusion"):
            try:
                exclusions.append(_parse_exclusion(ex))
            except PomError as err:
                raise err.wrap("parsing exclusion") from err
    return Dependency(
        group_id=_text(dep_el, "groupId"),
        artifact_id=_text(dep_el, "artifactId"),
        version=_text(dep_el, "version"),
        scope=_text(dep_el, "scope") or DEFAULT_SCOPE,
        optional=_is_true(dep_el, "optional"),
        exclusions=exclusions,
    )


def _parse_dependencies(deps_el, context: str = "parsing dependency") -> list:
    dependencies = []
    if deps_el is None:
        return dependencies
    for dep_el in _findall(deps_el, "dependency"):
        try:
            dependencies.append(_parse_dependency(dep_el))
        except PomError as err:
            raise err.wrap(context) from err
    return dependencies


def _parse_execution(exec_el) -> PluginExecution:
    goals = []
    goals_el = _find(exec_el, "goals")
    if goals_el is not None:
        goals = [g.text.strip() if g.text else "" for g in _findall(goals_el, "goal")]
    return PluginExecution(
        execution_id=_text(exec_el, "id") or None,
        phase=_text(exec_el, "phase") or None,
        goals=goals,
        configuration=_parse_configuration(_find(exec_el, "configuration")),
    )


def _parse_plugin(plugin_el) -> Plugin:
    """Parse a ``<plugin>`` XML element into a Plugin dataclass.

    groupId and artifactId are required; version is optional because Maven
    lets plugins inherit it from pluginManagement.
    """
    _require(plugin_el, ("groupId", "artifactId"), "plugin")
    executions = []
    execs_el = _find(plugin_el, "executions")
    if execs_el is not None:
        for exec_el in _findall(execs_el, "execution"):
            try:
                executions.append(_parse_execution(exec_el))
            except PomError as err:
                raise err.wrap("parsing execution") from err
    return Plugin(
        group_id=_text(plugin_el, "groupId"),
        artifact_id=_text(plugin_el, "artifactId"),
        version=_text(plugin_el, "version") or None,
        configuration=_parse_configuration(_find(plugin_el, "configuration")),
        executions=executions,
    )


def _parse_build(build_el) -> Build:
    plugins = []
    plugins_el = _find(build_el, "plugins")
    if plugins_el is not None:
        for plugin_el in _findall(plugins_el, "plugin"):
            try:
                plugins.append(_parse_plugin(plugin_el))
            except PomError as err:
                raise err.wrap("parsing plugin") from err
    return Build(
        source_directory=_text(build_el, "sourceDirectory") or None,
        test_source_directory=_text(build_el, "testSourceDirectory") or None,
        output_directory=_text(build_el, "outputDirectory") or None,
        plugins=plugins,
    )


def _parse_parent(parent_el) -> Parent:
    _require(parent_el, ("groupId", "artifactId", "version"), "parent")
    return Parent(
        group_id=_text(parent_el, "groupId"),
        artifact_id=_text(parent_el, "artifactId"),
        version=_text(parent_el, "version"),
        relative_path=_text(parent_el, "relativePath"),
    )


def _parse_activation(act_el) -> Activation:
    """Parse ``<activation>``: activeByDefault, jdk, property, os and file."""
    activation = Activation(
        active_by_default=_is_true(act_el, "activeByDefault"),
        jdk=_text(act_el, "jdk") or None,
    )
    prop_el = _find(act_el, "property")
    if prop_el is not None:
        try:
            _require(prop_el, ("name",), "property")
        except PomError as err:
            raise err.wrap("parsing activation property") from err
        activation.property = ActivationProperty(
            name=_text(prop_el, "name"),
            value=_text(prop_el, "value"),
        )
    os_el = _find(act_el, "os")
    if os_el is not None:
        activation.os = ActivationOS(
            name=_text(os_el, "name") or None,
            family=_text(os_el, "family") or None,
            arch=_text(os_el, "arch") or None,
            version=_text(os_el, "version") or None,
        )
    file_el = _find(act_el, "file")
    if file_el is not None:
        activation.file = ActivationFile(
            exists=_text(file_el, "exists") or None,
            missing=_text(file_el, "missing") or None,
        )
    return activation


def _parse_profile(profile_el) -> Profile:
    """Parse a ``<profile>`` XML element into a Profile dataclass.

    The ``<id>`` is required. Dependencies and build reuse the top-level
    sub-parsers.
    """
    _require(profile_el, ("id",), "profile")
    profile = Profile(profile_id=_text(profile_el, "id"))

    act_el = _find(profile_el, "activation")
    if act_el is not None:
        try:
            profile.activation = _parse_activation(act_el)
        except PomError as err:
            raise err.wrap("parsing activation") from err

    profile.properties = _parse_properties(_find(profile_el, "properties"))
    profile.dependencies = _parse_dependencies(
        _find(profile_el, "dependencies"), "parsing profile dependency"
    )

    build_el = _find(profile_el, "build")
    if build_el is not None:
        try:
            profile.build = _parse_build(build_el)
        except PomError as err:
            raise err.wrap("parsing profile build") from err

    profile.modules = _parse_modules(_find(profile_el, "modules"))
    return profile


def _parse_project(root) -> MavenProject:
    _require(root, ("groupId", "artifactId", "version"), "project")
    project = MavenProject(
        group_id=_text(root, "groupId"),
        artifact_id=_text(root, "artifactId"),
        version=_text(root, "version"),
        packaging=_text(root, "packaging") or DEFAULT_PACKAGING,
        name=_text(root, "name") or None,
        description=_text(root, "description") or None,
        model_version=_text(root, "modelVersion") or DEFAULT_MODEL_VERSION,
    )

    project.properties = _parse_properties(_find(root, "properties"))
    project.dependencies = _parse_dependencies(_find(root, "dependencies"))

    build_el = _find(root, "build")
    if build_el is not None:
        try:
            project.build = _parse_build(build_el)
        except PomError as err:
            raise err.wrap("parsing build") from err

    parent_el = _find(root, "parent")
    if parent_el is not None:
        try:
            project.parent = _parse_parent(parent_el)
        except PomError as err:
            raise err.wrap("parsing parent") from err

    project.modules = _parse_modules(_find(root, "modules"))

    profiles_el = _find(root, "profiles")
    if profiles_el is not None:
        for prof_el in _findall(profiles_el, "profile"):
            try:
                project.profiles.append(_parse_profile(prof_el))
            except PomError as err:
                raise err.wrap("parsing profile") from err

    return project


class PomParser:
    """Parse POM XML into :class:`MavenProject` instances.

    Args:
        storage: Object with a ``read(path) -> bytes`` method. Defaults to
            :class:`FileStorage`.
    """

    def __init__(self, storage=None):
        self.storage = storage if storage is not None else FileStorage()

    def parse(self, data) -> MavenProject:
        """Parse POM bytes.

        The size ceiling is checked before any XML tokenization.

        Raises:
            FileTooBigError: ``data`` exceeds 10 MiB.
            InvalidXmlError: Not well-formed, or the root is not ``<project>``.
            MissingRequiredError: A required element is absent.
        """
        if isinstance(data, str):
            data = data.encode("utf-8")
        if len(data) > MAX_FILE_SIZE_BYTES:
            raise FileTooBigError(
                f"size {len(data)} exceeds maximum {MAX_FILE_SIZE_BYTES} bytes"
            )

        try:
            root = ET.fromstring(data)
        except ET.ParseError as exc:
            raise InvalidXmlError(str(exc)) from exc

        if _local(root.tag) != ROOT_TAG:
            raise InvalidXmlError(f"missing <{ROOT_TAG}> root element, found <{_local(root.tag)}>")

        project = _parse_project(root)
        logger.debug(
            "Parsed %s (%d dependencies, %d profiles)",
            project.coordinates, len(project.dependencies), len(project.profiles),
        )
        return project

    def parse_file(self, path) -> MavenProject:
        """Read ``path`` through the storage layer and parse it.

        Storage errors (not found, permission denied, too big) propagate
        unchanged.
        """
        return self.parse(self.storage.read(path))


def parse_pom(pom_path: Path) -> MavenProject:
    """Parse a ``pom.xml`` file from disk with the default storage."""
    return PomParser().parse_file(pom_path)
