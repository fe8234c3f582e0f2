"""Rule-based POM validation.

A :class:`PomValidator` runs an ordered list of independent rules over a
:class:`MavenProject` and sorts every reported :class:`ValidationError` into
one of four buckets by its field path. Validation never raises for a
malformed document; problems are returned as data.
"""

import logging
import re
from typing import Optional

import semver

from .pom_constants import DEPENDENCY_SCOPES, LIFECYCLE_PHASES, PACKAGING_TYPES
from .pom_errors import ErrorKind
from .pom_models import Build, MavenProject, ValidationError, ValidationErrors, ValidationResult

logger = logging.getLogger("pom_manager.validator")

GROUP_ID_RE = re.compile(r"[a-z0-9][a-z0-9\-.]*[a-z0-9]")
ARTIFACT_ID_RE = re.compile(r"[a-z0-9][a-z0-9\-]*[a-z0-9]")
SIMPLE_VERSION_RE = re.compile(r"\d+(\.\d+)*(-SNAPSHOT)?")
SNAPSHOT_SUFFIX = "-SNAPSHOT"

COORDINATE_FIELDS = ("groupId", "artifactId", "version", "packaging")


def is_valid_group_id(group_id: str) -> bool:
    """Lowercase alphanumerics, dots and hyphens, with at least one dot."""
    return bool(GROUP_ID_RE.fullmatch(group_id)) and "." in group_id


def is_valid_artifact_id(artifact_id: str) -> bool:
    return bool(ARTIFACT_ID_RE.fullmatch(artifact_id))


def is_valid_version(version: str) -> bool:
    """Accept strict semver, semver plus ``-SNAPSHOT``, or a plain dotted number.

    The three checks run in that order and the first success wins.
    """
    if any(ch.isspace() for ch in version):
        return False
    if semver.Version.is_valid(version):
        return True
    if version.endswith(SNAPSHOT_SUFFIX):
        if semver.Version.is_valid(version[: -len(SNAPSHOT_SUFFIX)]):
            return True
    return bool(SIMPLE_VERSION_RE.fullmatch(version))


def is_valid_packaging(packaging: str) -> bool:
    return packaging in PACKAGING_TYPES


def is_valid_scope(scope: str) -> bool:
    return scope in DEPENDENCY_SCOPES


def is_valid_phase(phase: str) -> bool:
    return phase in LIFECYCLE_PHASES


def _required(path: str, label: str) -> ValidationError:
    return ValidationError(path, "", f"{label} is required", ErrorKind.MISSING_REQUIRED)


def check_dependencies(dependencies: list, prefix: str = "dependencies") -> list:
    """Check required fields, scope and direct duplicates for a dependency list.

    A second dependency with the same ``groupId:artifactId`` is reported once
    per extra occurrence.
    """
    errors = []
    seen = set()
    for i, dep in enumerate(dependencies):
        path = f"{prefix}.dependency[{i}]"
        if not dep.group_id:
            errors.append(_required(f"{path}.groupId", "dependency groupId"))
        if not dep.artifact_id:
            errors.append(_required(f"{path}.artifactId", "dependency artifactId"))
        if not dep.version:
            errors.append(_required(f"{path}.version", "dependency version"))
        if dep.scope and not is_valid_scope(dep.scope):
            errors.append(ValidationError(
                f"{path}.scope", dep.scope,
                f"scope must be one of: {', '.join(DEPENDENCY_SCOPES)}",
                ErrorKind.INVALID_SCOPE,
            ))
        if dep.key in seen:
            errors.append(ValidationError(
                path, dep.key, "duplicate dependency detected",
                ErrorKind.DUPLICATE_DEPENDENCY,
            ))
        seen.add(dep.key)
    return errors


def check_build(build: Optional[Build], prefix: str = "build") -> list:
    """Check plugin identity and execution phases of a build section."""
    errors = []
    if build is None:
        return errors
    for i, plugin in enumerate(build.plugins):
        path = f"{prefix}.plugins.plugin[{i}]"
        if not plugin.group_id:
            errors.append(_required(f"{path}.groupId", "plugin groupId"))
        if not plugin.artifact_id:
            errors.append(_required(f"{path}.artifactId", "plugin artifactId"))
        for j, execution in enumerate(plugin.executions):
            if execution.phase and not is_valid_phase(execution.phase):
                errors.append(ValidationError(
                    f"{path}.executions.execution[{j}].phase", execution.phase,
                    "phase must be a valid Maven lifecycle phase",
                    ErrorKind.INVALID_PHASE,
                ))
    return errors


class ValidationRule:
    """A single independent check over a whole project."""

    name = "rule"

    def validate(self, project: MavenProject) -> list:
        raise NotImplementedError


class CoordinatesRule(ValidationRule):
    name = "coordinates"

    def validate(self, project):
        errors = []

        if not project.group_id:
            errors.append(_required("groupId", "groupId"))
        elif not is_valid_group_id(project.group_id):
            errors.append(ValidationError(
                "groupId", project.group_id,
                "groupId must be lowercase with dot separators (e.g., 'com.example')",
            ))

        if not project.artifact_id:
            errors.append(_required("artifactId", "artifactId"))
        elif not is_valid_artifact_id(project.artifact_id):
            errors.append(ValidationError(
                "artifactId", project.artifact_id,
                "artifactId must be lowercase with hyphens (e.g., 'my-app')",
            ))

        if not project.version:
            errors.append(_required("version", "version"))
        elif not is_valid_version(project.version):
            errors.append(ValidationError(
                "version", project.version,
                "version must follow semantic versioning or Maven snapshot conventions",
            ))

        if project.packaging and not is_valid_packaging(project.packaging):
            errors.append(ValidationError(
                "packaging", project.packaging,
                f"packaging must be one of: {', '.join(PACKAGING_TYPES)}",
                ErrorKind.INVALID_PACKAGING,
            ))
        return errors


class DependenciesRule(ValidationRule):
    name = "dependencies"

    def validate(self, project):
        return check_dependencies(project.dependencies)


class BuildRule(ValidationRule):
    name = "build"

    def validate(self, project):
        return check_build(project.build)


class ParentRule(ValidationRule):
    name = "parent"

    def validate(self, project):
        parent = project.parent
        if parent is None:
            return []
        errors = []
        for tag, value in (
            ("groupId", parent.group_id),
            ("artifactId", parent.artifact_id),
            ("version", parent.version),
        ):
            if not value:
                errors.append(_required(f"parent.{tag}", f"parent {tag}"))
        return errors


class ProfilesRule(ValidationRule):
    """Profile ids must be present and unique; nested sections get the top-level checks."""

    name = "profiles"

    def validate(self, project):
        errors = []
        seen = set()
        for i, profile in enumerate(project.profiles):
            path = f"profiles.profile[{i}]"
            if not profile.profile_id:
                errors.append(_required(f"{path}.id", "profile id"))
            elif profile.profile_id in seen:
                errors.append(ValidationError(
                    f"{path}.id", profile.profile_id, "duplicate profile id",
                ))
            seen.add(profile.profile_id)
            errors.extend(check_dependencies(profile.dependencies, f"{path}.dependencies"))
            errors.extend(check_build(profile.build, f"{path}.build"))
        return errors


def default_rules() -> list:
    return [CoordinatesRule(), DependenciesRule(), BuildRule(), ParentRule(), ProfilesRule()]


def categorize(errors: ValidationErrors, error: ValidationError) -> None:
    """Append ``error`` to the bucket chosen by its field path."""
    path = error.field
    if path.startswith(COORDINATE_FIELDS):
        errors.coordinates.append(error)
    elif "dependency" in path or "scope" in path:
        errors.dependencies.append(error)
    elif "plugin" in path or "phase" in path or "build" in path:
        errors.build.append(error)
    else:
        errors.general.append(error)


class PomValidator:
    """Run validation rules in order and collect categorized errors.

    Args:
        rules: Ordered rule objects, each with ``validate(project) -> list``.
            Defaults to :func:`default_rules`.
    """

    def __init__(self, rules: Optional[list] = None):
        self.rules = list(rules) if rules is not None else default_rules()

    def validate(self, project: Optional[MavenProject]) -> ValidationResult:
        result = ValidationResult()

        if project is None:
            result.valid = False
            result.errors.general.append(ValidationError(
                "project", "None", "project cannot be None", ErrorKind.INVALID_PROJECT,
            ))
            return result

        for rule in self.rules:
            for error in rule.validate(project):
                categorize(result.errors, error)

        result.valid = not result.errors.has_errors()
        logger.debug(
            "Validated %s: %d error(s)", project.coordinates, len(result.all_errors())
        )
        return result


def validate_pom(project: Optional[MavenProject]) -> ValidationResult:
    return PomValidator().validate(project)
