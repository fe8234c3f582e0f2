"""Byte-level file access for POM files.

The only place where OS errors are classified. Parser and generator take a
storage object so tests can substitute an in-memory one.
"""

import logging
from pathlib import Path

from .pom_constants import MAX_FILE_SIZE_BYTES
from .pom_errors import FileTooBigError, NotFoundError, PermissionDeniedError, StorageError

logger = logging.getLogger("pom_manager.storage")


class FileStorage:
    """Read and write POM files on the local filesystem.

    Args:
        max_size: Size ceiling in bytes applied to both reads and writes.
    """

    def __init__(self, max_size: int = MAX_FILE_SIZE_BYTES):
        self.max_size = max_size

    def read(self, path) -> bytes:
        """Read a file, refusing anything over the size ceiling.

        Raises:
            NotFoundError: The file does not exist.
            PermissionDeniedError: The file cannot be stat'ed or opened.
            StorageError: Any other OS failure, e.g. the path is a directory.
            FileTooBigError: The file is larger than ``max_size``.
        """
        path = Path(path)
        try:
            size = path.stat().st_size
        except FileNotFoundError as exc:
            raise NotFoundError(str(path)) from exc
        except PermissionError as exc:
            raise PermissionDeniedError(str(path)) from exc
        except OSError as exc:
            raise StorageError(f"stat file {path}: {exc}") from exc

        if size > self.max_size:
            raise FileTooBigError(
                f"file {path} size {size} exceeds maximum {self.max_size} bytes"
            )

        try:
            data = path.read_bytes()
        except FileNotFoundError as exc:
            raise NotFoundError(str(path)) from exc
        except PermissionError as exc:
            raise PermissionDeniedError(str(path)) from exc
        except OSError as exc:
            raise StorageError(f"reading file {path}: {exc}") from exc
        logger.debug("Read %d bytes from %s", len(data), path)
        return data

    def write(self, path, data: bytes) -> None:
        """Write bytes to a file, creating parent directories as needed.

        Raises:
            PermissionDeniedError: The directory or file is not writable.
            StorageError: Any other OS failure.
            FileTooBigError: ``data`` is larger than ``max_size``.
        """
        path = Path(path)
        if len(data) > self.max_size:
            raise FileTooBigError(
                f"output for {path} size {len(data)} exceeds maximum {self.max_size} bytes"
            )
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError as exc:
            raise PermissionDeniedError(str(path.parent)) from exc
        except OSError as exc:
            raise StorageError(f"creating directory {path.parent}: {exc}") from exc
        try:
            path.write_bytes(data)
        except PermissionError as exc:
            raise PermissionDeniedError(str(path)) from exc
        except OSError as exc:
            raise StorageError(f"writing file {path}: {exc}") from exc
        logger.debug("Wrote %d bytes to %s", len(data), path)

    def exists(self, path) -> bool:
        return Path(path).exists()
