"""Persistence of the dependency record.

The record lives in a single JSON file (``gopackage.json`` in the working
directory by default). Writes replace the whole file atomically; reads
return the record exactly as stored. There is no partial update and no
format migration.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from gopackage.constants import DEFAULT_RECORD_FILE
from gopackage.exceptions import FileOperationError
from gopackage.models import DepsRecord
from gopackage.utils.filesystem import safe_read_file, safe_write_file
from gopackage.utils.logger import get_logger

logger = get_logger("store")

__all__ = ["RecordStore"]


class RecordStore:
    """Read and write a :class:`DepsRecord` at a fixed path.

    Args:
        path: Record file location. Relative paths are resolved against
            ``base_dir``.
        base_dir: Directory relative paths are anchored to (defaults to
            the current working directory).
    """

    def __init__(
        self,
        path: Union[str, Path] = DEFAULT_RECORD_FILE,
        *,
        base_dir: Optional[Union[str, Path]] = None,
    ) -> None:
        record_path = Path(path)
        if not record_path.is_absolute():
            record_path = Path(base_dir or Path.cwd()) / record_path
        self.path = record_path

    def exists(self) -> bool:
        """True when a record file is present at :attr:`path`."""
        return self.path.is_file()

    def write(self, record: DepsRecord) -> Path:
        """Persist ``record``, replacing any previous snapshot.

        Raises:
            FileOperationError: The file could not be written.
        """
        written = safe_write_file(self.path, record.to_json())
        logger.info(
            "Wrote record with %d packages and %d dependencies to %s",
            len(record.packages),
            len(record.dependencies),
            written,
        )
        return written

    def read(self) -> DepsRecord:
        """Load the stored record.

        Raises:
            FileOperationError: The file is missing or unreadable.
            RecordError: The file content is not a valid record.
        """
        if not self.exists():
            raise FileOperationError(
                f"No record found at {self.path}; run 'gopackage load' first",
                file_path=str(self.path),
                operation="read",
            )

        text = safe_read_file(self.path)
        record = DepsRecord.from_json(text, source=str(self.path))
        logger.debug("Loaded record from %s: %s", self.path, record)
        return record
