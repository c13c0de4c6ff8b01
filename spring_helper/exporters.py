# File: spring_helper/exporters.py
"""
spring-helper - Artifact Writer (File-System Manager)
=======================================================

Writes rendered ``GeneratedFile``s beneath an output root:

    1. Creates the artifact directory when missing (re-creating is a no-op).
    2. Writes UTF-8 content through a temp file renamed over the target, so
       an existing file is overwritten without confirmation.
    3. Returns a ``FileRecord`` (size, lines, checksum) per written file.

There is no rollback: when one write fails, files written before it stay on
disk.  The failure is raised as ``ArtifactWriteError`` and the caller
decides what else to skip.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

from spring_helper.models import GeneratedFile
from spring_helper.utils import count_lines, sha256_hex, write_text_file

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("spring_helper.exporters")


# ---------------------------------------------------------------------------
# Records & errors
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FileRecord:
    """Immutable record of a single written file."""

    relative_path: str
    absolute_path: str
    size_bytes: int
    line_count: int
    sha256: str


class ArtifactWriteError(OSError):
    """Creating the directory for, or writing, one artifact failed."""

    def __init__(self, relative_path: str, cause: OSError) -> None:
        self.relative_path: str = relative_path
        self.cause: OSError = cause
        super().__init__(
            f"Failed to write {relative_path}: {type(cause).__name__}: {cause}"
        )


# ---------------------------------------------------------------------------
# ArtifactWriter
# ---------------------------------------------------------------------------


class ArtifactWriter:
    """
    Writes generated files under one output directory.

    Usage::

        writer = ArtifactWriter(Path("."))
        record = writer.write(generated_file)
    """

    def __init__(self, output_dir: Path) -> None:
        self._output_dir: Path = Path(output_dir)

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def target_path(self, generated: GeneratedFile) -> Path:
        return self._output_dir / generated.relative_directory / generated.file_name

    def write(self, generated: GeneratedFile) -> FileRecord:
        """Persist *generated*, replacing any existing file at its path."""
        full_path: Path = self.target_path(generated)
        try:
            size_bytes: int = write_text_file(full_path, generated.content)
        except OSError as exc:
            logger.error("Failed to write %s: %s", generated.relative_path, exc)
            raise ArtifactWriteError(generated.relative_path, exc) from exc

        logger.debug(
            "Wrote file: %s (%d bytes).", generated.relative_path, size_bytes
        )
        return FileRecord(
            relative_path=generated.relative_path,
            absolute_path=str(full_path.resolve()),
            size_bytes=size_bytes,
            line_count=count_lines(generated.content),
            sha256=sha256_hex(generated.content),
        )


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "FileRecord",
    "ArtifactWriteError",
    "ArtifactWriter",
]
