"""Error kinds and exceptions raised by the POM core.

``ErrorKind`` is the full taxonomy. Kinds that can abort an operation have a
``PomError`` subclass; the rest only appear on ``ValidationError.kind``.
Callers branch on the class (or ``err.kind``), never on the message text.
"""

from enum import Enum


class ErrorKind(Enum):
    """Failure categories; each value is the text used in error messages."""

    INVALID_XML = "invalid XML structure"
    MISSING_REQUIRED = "missing required fields"
    INVALID_FORMAT = "invalid format"
    FILE_TOO_BIG = "file size exceeds limit"
    FILE_NOT_FOUND = "file not found"
    PERMISSION_DENIED = "permission denied"
    DUPLICATE_DEPENDENCY = "duplicate direct dependency"
    INVALID_SCOPE = "invalid dependency scope"
    INVALID_PACKAGING = "invalid packaging type"
    INVALID_PHASE = "invalid Maven lifecycle phase"
    INVALID_PROJECT = "invalid project structure"
    GENERATION_FAILED = "XML generation failed"
    TEMPLATE_NOT_FOUND = "template not found"
    IO_FAILED = "file I/O failed"


class PomError(Exception):
    """Base class for classified POM failures.

    The rendered message is ``<context>: ... : <kind text>: <detail>``, where
    context entries are added outermost-first by :meth:`wrap` as the error
    travels up through nested parse or write steps.

    Attributes:
        detail: Free-text description supplied where the error originated.
        context: Tuple of context labels, outermost first.
    """

    kind = ErrorKind.INVALID_PROJECT

    def __init__(self, detail: str = "", context: tuple = ()):
        self.detail = detail
        self.context = tuple(context)
        parts = list(self.context) + [self.kind.value]
        if detail:
            parts.append(detail)
        super().__init__(": ".join(parts))

    def wrap(self, context: str) -> "PomError":
        """Return a copy of this error with ``context`` prepended.

        Intended for ``raise err.wrap("parsing build") from err``.
        """
        return type(self)(self.detail, (context,) + self.context)


class InvalidXmlError(PomError):
    kind = ErrorKind.INVALID_XML


class MissingRequiredError(PomError):
    kind = ErrorKind.MISSING_REQUIRED


class FileTooBigError(PomError):
    kind = ErrorKind.FILE_TOO_BIG


class NotFoundError(PomError):
    kind = ErrorKind.FILE_NOT_FOUND


class PermissionDeniedError(PomError):
    kind = ErrorKind.PERMISSION_DENIED


class InvalidProjectError(PomError):
    kind = ErrorKind.INVALID_PROJECT


class GenerationFailedError(PomError):
    kind = ErrorKind.GENERATION_FAILED


class TemplateNotFoundError(PomError):
    kind = ErrorKind.TEMPLATE_NOT_FOUND


class StorageError(PomError):
    """Any other operating-system failure while reading or writing a file."""

    kind = ErrorKind.IO_FAILED
