"""Maven POM document model.

Pure data structures representing a POM document tree and validation
results. Every child object is owned by exactly one parent collection; there
are no back-references. Imports nothing from other pom_manager modules except
the vocabulary constants and error kinds.
"""

from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from .pom_constants import (
    DEFAULT_MODEL_VERSION,
    DEFAULT_PACKAGING,
    DEFAULT_SCOPE,
    MAVEN_SCHEMA_LOCATION,
    MAVEN_XML_NAMESPACE,
    XSI_NAMESPACE,
)
from .pom_errors import ErrorKind


@dataclass(frozen=True)
class Coordinates:
    """The ``groupId:artifactId:version`` triple identifying an artifact."""
    group_id: str
    artifact_id: str
    version: str

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"


class Exclusion(NamedTuple):
    """A transitive dependency to suppress, as a ``(groupId, artifactId)`` pair."""
    group_id: str
    artifact_id: str


@dataclass
class Dependency:
    """A Maven ``<dependency>`` element.

    Attributes:
        group_id: Maven groupId (e.g. ``org.slf4j``).
        artifact_id: Maven artifactId (e.g. ``slf4j-api``).
        version: Version string; required by both parser and validator.
        scope: One of compile, provided, runtime, test, system, import.
            Absent on parse means ``compile``; ``compile`` is not written back.
        optional: Whether the dependency is marked ``<optional>true</optional>``.
        exclusions: Ordered list of :class:`Exclusion` pairs.
    """
    group_id: str
    artifact_id: str
    version: str = ""
    scope: str = DEFAULT_SCOPE
    optional: bool = False
    exclusions: list = field(default_factory=list)

    @property
    def key(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"


@dataclass
class PluginExecution:
    """A ``<execution>`` binding plugin goals to a lifecycle phase.

    Attributes:
        execution_id: The ``<id>``, or ``None``.
        phase: Lifecycle phase name, or ``None``. Custom phases are kept as-is.
        goals: Ordered goal names.
        configuration: Opaque nested mapping of the ``<configuration>`` block.
    """
    execution_id: Optional[str] = None
    phase: Optional[str] = None
    goals: list = field(default_factory=list)
    configuration: dict = field(default_factory=dict)


@dataclass
class Plugin:
    """A Maven ``<plugin>`` element.

    Attributes:
        group_id: Plugin groupId.
        artifact_id: Plugin artifactId (e.g. ``maven-compiler-plugin``).
        version: Explicit version, or ``None`` if inherited.
        configuration: Opaque nested mapping of the ``<configuration>`` block.
            Leaf elements map to their text, elements with children map to a
            nested dict, and repeated sibling tags collect into a list.
        executions: Ordered list of :class:`PluginExecution`.
    """
    group_id: str
    artifact_id: str
    version: Optional[str] = None
    configuration: dict = field(default_factory=dict)
    executions: list = field(default_factory=list)


@dataclass
class Build:
    """The ``<build>`` section: directory overrides and plugins."""
    source_directory: Optional[str] = None
    test_source_directory: Optional[str] = None
    output_directory: Optional[str] = None
    plugins: list = field(default_factory=list)


@dataclass
class Parent:
    """Reference to a parent POM. Never resolved or loaded."""
    group_id: str
    artifact_id: str
    version: str
    relative_path: Optional[str] = None


@dataclass
class ActivationProperty:
    name: str
    value: Optional[str] = None


@dataclass
class ActivationOS:
    name: Optional[str] = None
    family: Optional[str] = None
    arch: Optional[str] = None
    version: Optional[str] = None


@dataclass
class ActivationFile:
    exists: Optional[str] = None
    missing: Optional[str] = None


@dataclass
class Activation:
    """Profile activation conditions. Stored only, never evaluated."""
    active_by_default: bool = False
    jdk: Optional[str] = None
    property: Optional[ActivationProperty] = None
    os: Optional[ActivationOS] = None
    file: Optional[ActivationFile] = None


@dataclass
class Profile:
    """A Maven ``<profile>`` element.

    Structurally a nested sub-document reusing :class:`Dependency` and
    :class:`Build`.

    Attributes:
        profile_id: The ``<id>`` of the profile.
        activation: Activation conditions, or ``None``.
        properties: Profile-scoped properties.
        dependencies: Profile-scoped dependencies.
        build: Profile-scoped build section, or ``None``.
        modules: Profile-scoped module paths.
    """
    profile_id: str
    activation: Optional[Activation] = None
    properties: dict = field(default_factory=dict)
    dependencies: list = field(default_factory=list)
    build: Optional[Build] = None
    modules: list = field(default_factory=list)


@dataclass
class MavenProject:
    """Root of a parsed or constructed ``pom.xml``.

    The coordinate fields may be empty while a document is being edited;
    completeness is checked by the validator and by the generator, not here.

    Attributes:
        group_id: Maven groupId.
        artifact_id: Maven artifactId.
        version: Project version.
        packaging: Packaging type, ``jar`` unless declared otherwise.
        name: Human-readable ``<name>``.
        description: ``<description>``.
        model_version: ``<modelVersion>``, ``4.0.0`` unless declared.
        properties: ``<properties>`` mapping. Output order is always by key.
        dependencies: Direct ``<dependencies>`` in declaration order.
        build: ``<build>`` section, or ``None``.
        modules: Child module paths from ``<modules>``.
        parent: ``<parent>`` reference, or ``None``.
        profiles: ``<profiles>`` list.
        xmlns: Default namespace written on the root element.
        xsi: XML Schema instance namespace.
        schema_location: ``xsi:schemaLocation`` value.
    """
    group_id: str = ""
    artifact_id: str = ""
    version: str = ""
    packaging: str = DEFAULT_PACKAGING
    name: Optional[str] = None
    description: Optional[str] = None
    model_version: str = DEFAULT_MODEL_VERSION
    properties: dict = field(default_factory=dict)
    dependencies: list = field(default_factory=list)
    build: Optional[Build] = None
    modules: list = field(default_factory=list)
    parent: Optional[Parent] = None
    profiles: list = field(default_factory=list)
    xmlns: str = MAVEN_XML_NAMESPACE
    xsi: str = XSI_NAMESPACE
    schema_location: str = MAVEN_SCHEMA_LOCATION

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(self.group_id, self.artifact_id, self.version)


@dataclass(frozen=True)
class ValidationError:
    """A single validation failure.

    Attributes:
        field: Dotted field path, e.g. ``dependencies.dependency[1].scope``.
        value: The offending value rendered as text.
        message: Human-readable explanation.
        kind: Classification used for programmatic branching.
    """
    field: str
    value: str
    message: str
    kind: ErrorKind = ErrorKind.INVALID_FORMAT

    def __str__(self) -> str:
        return f"field '{self.field}' with value '{self.value}': {self.message}"


@dataclass
class ValidationErrors:
    """Validation failures grouped by concern."""
    coordinates: list = field(default_factory=list)
    dependencies: list = field(default_factory=list)
    build: list = field(default_factory=list)
    general: list = field(default_factory=list)

    def has_errors(self) -> bool:
        return bool(self.coordinates or self.dependencies or self.build or self.general)

    def all_errors(self) -> list:
        """Concatenate the buckets in fixed order: coordinates, dependencies, build, general."""
        return self.coordinates + self.dependencies + self.build + self.general


@dataclass
class ValidationResult:
    """Outcome of one ``validate`` call. Built fresh per call."""
    valid: bool = True
    errors: ValidationErrors = field(default_factory=ValidationErrors)

    def all_errors(self) -> list:
        return self.errors.all_errors()


@dataclass(frozen=True)
class TemplateInfo:
    name: str
    description: str
