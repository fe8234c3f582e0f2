"""Maven POM document engine: parse, generate, validate and organize pom.xml files."""

__version__ = "0.1.0"

from .execution_organizer import ExecutionOrganizer
from .pom_errors import ErrorKind, PomError, StorageError
from .pom_generator import PomGenerator, generate_pom
from .pom_models import (
    Activation,
    Build,
    Coordinates,
    Dependency,
    Exclusion,
    MavenProject,
    Parent,
    Plugin,
    PluginExecution,
    Profile,
    ValidationError,
    ValidationResult,
)
from .pom_parser import PomParser, parse_pom
from .pom_storage import FileStorage
from .pom_templates import TemplateManager
from .pom_validator import PomValidator, validate_pom

__all__ = [
    "ExecutionOrganizer", "ErrorKind", "PomError", "StorageError", "PomGenerator", "generate_pom",
    "Activation", "Build", "Coordinates", "Dependency", "Exclusion", "MavenProject",
    "Parent", "Plugin", "PluginExecution", "Profile", "ValidationError", "ValidationResult",
    "PomParser", "parse_pom", "FileStorage", "TemplateManager", "PomValidator", "validate_pom",
]
