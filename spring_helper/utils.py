# File: spring_helper/utils.py
"""
spring-helper - Utility Functions & Helpers
=============================================
Identifier case conversion, file I/O and timing helpers shared by the
quick-start pipeline and the ``init`` / ``model`` commands.

The case converters are the single source of every name that appears in
generated sources.  They are decorated with ``@lru_cache(maxsize=None)``
and must stay pure: the entity, repository, service and controller files
are rendered independently and only agree with each other because the
same input always yields the same identifier.
"""

from __future__ import annotations

import functools
import hashlib
import logging
import os
import re
import tempfile
import time
from pathlib import Path
from typing import List, Optional, Tuple

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("spring_helper.utils")

# ---------------------------------------------------------------------------
# Pre-compiled regex patterns
# ---------------------------------------------------------------------------

_NON_ALPHANUM_RE: re.Pattern[str] = re.compile(r"[^a-zA-Z0-9]+")
_LOWER_UPPER_RE: re.Pattern[str] = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM_RE: re.Pattern[str] = re.compile(r"([A-Z]+)([A-Z][a-z])")


# ---------------------------------------------------------------------------
# Cached string transformation functions
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=None)
def _extract_words(identifier: str) -> Tuple[str, ...]:
    """
    Split a catalog identifier into lowercase words.

    Any run of non-alphanumeric characters (``_``, ``-``, spaces, ...) is a
    separator, and so is a lower→upper case boundary (``userId``) or the end
    of an acronym (``HTTPServer``).  Empty words are dropped.
    """
    split: str = _ACRONYM_RE.sub(r"\1_\2", identifier)
    split = _LOWER_UPPER_RE.sub(r"\1_\2", split)
    return tuple(
        word.lower() for word in _NON_ALPHANUM_RE.split(split) if word
    )


@functools.lru_cache(maxsize=None)
def to_upper_camel(identifier: str) -> str:
    """
    Convert a snake/kebab/camel identifier to UpperCamel (PascalCase).

    Examples:
        >>> to_upper_camel("user_account")
        'UserAccount'
        >>> to_upper_camel("order-line_item")
        'OrderLineItem'
        >>> to_upper_camel("address_line_2")
        'AddressLine2'
        >>> to_upper_camel("UserAccount")
        'UserAccount'
    """
    return "".join(word.capitalize() for word in _extract_words(identifier))


@functools.lru_cache(maxsize=None)
def to_camel(identifier: str) -> str:
    """
    Convert a snake/kebab/camel identifier to camelCase.

    Examples:
        >>> to_camel("user_account")
        'userAccount'
        >>> to_camel("ID")
        'id'
        >>> to_camel("userId")
        'userId'
    """
    words: Tuple[str, ...] = _extract_words(identifier)
    if not words:
        return ""
    return words[0] + "".join(word.capitalize() for word in words[1:])


# ---------------------------------------------------------------------------
# File I/O helpers
# ---------------------------------------------------------------------------


def ensure_directory(path: Path) -> None:
    """Create directory (and parents) if it doesn't exist."""
    path.mkdir(parents=True, exist_ok=True)
    logger.debug("Ensured directory exists: %s", path)


def write_bytes_atomic(path: Path, data: bytes) -> None:
    """
    Write *data* to *path* through a temporary file in the same directory.

    The temporary file is renamed over the target with ``os.replace`` so an
    existing file is overwritten in one step.  On failure the temporary file
    is removed and the original ``OSError`` propagates.
    """
    ensure_directory(path.parent)

    fd, tmp_path = tempfile.mkstemp(
        dir=str(path.parent),
        prefix=f".{path.name}.",
        suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        os.replace(tmp_path, str(path))
    except OSError:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise

    logger.debug("Wrote %d bytes to %s", len(data), path)


def write_text_file(path: Path, content: str) -> int:
    """Write UTF-8 *content* to *path*; returns the number of bytes written."""
    encoded: bytes = content.encode("utf-8")
    write_bytes_atomic(path, encoded)
    return len(encoded)


# ---------------------------------------------------------------------------
# Checksum & metrics
# ---------------------------------------------------------------------------


def sha256_hex(content: str) -> str:
    """Return SHA-256 hex digest of a string."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def count_lines(content: str) -> int:
    """Count the number of lines in a string."""
    if not content:
        return 0
    return content.count("\n") + (1 if not content.endswith("\n") else 0)


# ---------------------------------------------------------------------------
# Timer context manager
# ---------------------------------------------------------------------------


class Timer:
    """
    Simple context-manager timer for profiling pipeline steps.

    Usage:
        with Timer("list tables") as t:
            ...
        print(t.elapsed)
    """

    __slots__ = ("label", "start_time", "end_time", "elapsed")

    def __init__(self, label: str = "operation") -> None:
        self.label: str = label
        self.start_time: float = 0.0
        self.end_time: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[object],
    ) -> None:
        self.end_time = time.perf_counter()
        self.elapsed = self.end_time - self.start_time
        logger.debug("Timer [%s]: %.4f seconds", self.label, self.elapsed)

    def __repr__(self) -> str:
        return f"<Timer {self.label}: {self.elapsed:.4f}s>"


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "to_upper_camel",
    "to_camel",
    "ensure_directory",
    "write_bytes_atomic",
    "write_text_file",
    "sha256_hex",
    "count_lines",
    "Timer",
]
