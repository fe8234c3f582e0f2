"""Maven POM vocabulary tables and fixed limits.

Pure constants with no XML parsing, no file I/O, and no internal package
imports. Ordered tuples are used wherever the order carries meaning.
"""

# POM model version written to every generated file and assumed when absent.
DEFAULT_MODEL_VERSION = "4.0.0"

# XML namespace and schema location reproduced on the generated <project> root.
MAVEN_XML_NAMESPACE = "http://maven.apache.org/POM/4.0.0"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
MAVEN_SCHEMA_LOCATION = (
    "http://maven.apache.org/POM/4.0.0 http://maven.apache.org/xsd/maven-4.0.0.xsd"
)

# Namespace mapping for ElementTree lookups.
NS = {"m": MAVEN_XML_NAMESPACE}

ROOT_TAG = "project"

# Upper bound on POM input and output, in bytes (10 MiB).
MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024

# Maven default lifecycle phases, in execution order.
LIFECYCLE_PHASES = (
    "validate",
    "initialize",
    "generate-sources",
    "process-sources",
    "generate-resources",
    "process-resources",
    "compile",
    "process-classes",
    "generate-test-sources",
    "process-test-sources",
    "generate-test-resources",
    "process-test-resources",
    "test-compile",
    "process-test-classes",
    "test",
    "prepare-package",
    "package",
    "pre-integration-test",
    "integration-test",
    "post-integration-test",
    "verify",
    "install",
    "deploy",
)

SCOPE_COMPILE = "compile"
SCOPE_PROVIDED = "provided"
SCOPE_RUNTIME = "runtime"
SCOPE_TEST = "test"
SCOPE_SYSTEM = "system"
SCOPE_IMPORT = "import"

DEPENDENCY_SCOPES = (
    SCOPE_COMPILE,
    SCOPE_PROVIDED,
    SCOPE_RUNTIME,
    SCOPE_TEST,
    SCOPE_SYSTEM,
    SCOPE_IMPORT,
)

PACKAGING_JAR = "jar"
PACKAGING_WAR = "war"
PACKAGING_EAR = "ear"
PACKAGING_POM = "pom"
PACKAGING_MAVEN_PLUGIN = "maven-plugin"
PACKAGING_RAR = "rar"
PACKAGING_PAR = "par"

PACKAGING_TYPES = (
    PACKAGING_JAR,
    PACKAGING_WAR,
    PACKAGING_EAR,
    PACKAGING_POM,
    PACKAGING_MAVEN_PLUGIN,
    PACKAGING_RAR,
    PACKAGING_PAR,
)

# Parser fills these in when the element is absent; the generator omits the
# element when the value equals the default. Keep both sides in step.
DEFAULT_PACKAGING = PACKAGING_JAR
DEFAULT_SCOPE = SCOPE_COMPILE

DEFAULT_PLUGIN_GROUP_ID = "org.apache.maven.plugins"
