# File: spring_helper/validators.py
"""
spring-helper - Argument Validators
=====================================
Checks the raw command-line arguments of every subcommand before anything
touches the network, the database or the filesystem.  Validation never
raises: problems are collected into a ``ValidationResult`` which the CLI
prints before returning early without side effects.

Usage by downstream modules:
    from spring_helper.validators import validate_quick_start_args
    result = validate_quick_start_args(url, schema_name, package_name)
    if not result:
        print(result.format_report())
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, FrozenSet, List, Optional

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("spring_helper.validators")

# ---------------------------------------------------------------------------
# Validation result container
# ---------------------------------------------------------------------------


class ValidationError:
    """Lightweight error descriptor."""

    __slots__ = ("level", "code", "message", "context")

    def __init__(
        self,
        level: str,
        code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.level: str = level  # "error" | "warning"
        self.code: str = code
        self.message: str = message
        self.context: Dict[str, Any] = context or {}

    @property
    def is_error(self) -> bool:
        return self.level == "error"

    @property
    def is_warning(self) -> bool:
        return self.level == "warning"

    def __repr__(self) -> str:
        return f"[{self.level.upper()}] {self.code}: {self.message}"

    def __str__(self) -> str:
        return self.__repr__()


class ValidationResult:
    """Accumulates ``ValidationError`` instances produced by the checks."""

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: List[ValidationError] = []

    # -- Mutation -----------------------------------------------------------

    def add_error(
        self,
        code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._items.append(ValidationError("error", code, message, context))

    def add_warning(
        self,
        code: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._items.append(ValidationError("warning", code, message, context))

    def merge(self, other: "ValidationResult") -> None:
        self._items.extend(other._items)

    # -- Query --------------------------------------------------------------

    @property
    def errors(self) -> List[ValidationError]:
        return [e for e in self._items if e.is_error]

    @property
    def warnings(self) -> List[ValidationError]:
        return [e for e in self._items if e.is_warning]

    @property
    def is_valid(self) -> bool:
        return not any(e.is_error for e in self._items)

    def __bool__(self) -> bool:
        """Truthy when there are NO errors (i.e. valid)."""
        return self.is_valid

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return (
            f"<ValidationResult {len(self.errors)} error(s), "
            f"{len(self.warnings)} warning(s)>"
        )

    def format_report(self) -> str:
        """Human-readable multi-line report."""
        lines: List[str] = []
        for item in self._items:
            prefix: str = "✗" if item.is_error else "⚠"
            lines.append(f"  {prefix} [{item.code}] {item.message}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Patterns & reserved words
# ---------------------------------------------------------------------------

_JAVA_IDENTIFIER_RE: re.Pattern[str] = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_SCHEMA_NAME_RE: re.Pattern[str] = re.compile(r"^[A-Za-z_][A-Za-z0-9_$]*$")

_JAVA_RESERVED_WORDS: FrozenSet[str] = frozenset(
    {
        "abstract", "assert", "boolean", "break", "byte", "case", "catch",
        "char", "class", "const", "continue", "default", "do", "double",
        "else", "enum", "extends", "final", "finally", "float", "for",
        "goto", "if", "implements", "import", "instanceof", "int",
        "interface", "long", "native", "new", "package", "private",
        "protected", "public", "return", "short", "static", "strictfp",
        "super", "switch", "synchronized", "this", "throw", "throws",
        "transient", "try", "void", "volatile", "while", "true", "false",
        "null", "_",
    }
)

# postgres:// is rewritten to postgresql:// before connecting
_SUPPORTED_BACKENDS: FrozenSet[str] = frozenset({"postgresql", "postgres"})


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def is_valid_java_identifier(name: str) -> bool:
    """True if *name* can be used as a Java identifier."""
    return bool(_JAVA_IDENTIFIER_RE.match(name)) and name not in _JAVA_RESERVED_WORDS


def is_valid_java_package(name: str) -> bool:
    """True for dotted Java package names such as ``tw.mingchang.app``."""
    if not name:
        return False
    return all(is_valid_java_identifier(part) for part in name.split("."))


# ---------------------------------------------------------------------------
# Individual checks
# ---------------------------------------------------------------------------


def validate_package_name(package_name: str) -> ValidationResult:
    result = ValidationResult()
    if not package_name:
        result.add_error("PKG001", "Package name must not be empty.")
        return result

    for part in package_name.split("."):
        if not part:
            result.add_error(
                "PKG002",
                f"Package name '{package_name}' contains an empty segment.",
            )
        elif part in _JAVA_RESERVED_WORDS:
            result.add_error(
                "PKG003",
                f"Package segment '{part}' is a Java reserved word.",
                {"package": package_name},
            )
        elif not _JAVA_IDENTIFIER_RE.match(part):
            result.add_error(
                "PKG004",
                f"Package segment '{part}' is not a valid Java identifier.",
                {"package": package_name},
            )
        elif part != part.lower():
            result.add_warning(
                "PKG005",
                f"Package segment '{part}' is not lowercase.",
            )
    return result


def validate_schema_name(schema_name: str) -> ValidationResult:
    """
    Schema names are passed as query parameters, so any non-empty name is
    usable; names that need quoting in SQL only get a warning.
    """
    result = ValidationResult()
    if not schema_name:
        result.add_error("SCH001", "Schema name must not be empty.")
    elif not _SCHEMA_NAME_RE.match(schema_name):
        result.add_warning(
            "SCH002",
            f"Schema name '{schema_name}' is not a plain SQL identifier; "
            "it is matched exactly as stored in the catalog.",
        )
    return result


def validate_connection_url(url: str) -> ValidationResult:
    """
    Check that *url* parses as a SQLAlchemy URL for PostgreSQL.

    Only the URL shape is checked here; reachability is the introspector's
    concern.
    """
    result = ValidationResult()
    try:
        parsed = make_url(url)
    except ArgumentError as exc:
        result.add_error("URL001", f"Could not parse connection URL: {exc}")
        return result

    backend: str = parsed.get_backend_name()
    if backend not in _SUPPORTED_BACKENDS:
        result.add_error(
            "URL002",
            f"Unsupported database '{backend}'; only PostgreSQL is supported.",
        )
    if not parsed.database:
        result.add_error("URL003", "Connection URL does not name a database.")
    return result


def validate_model_name(model_name: str) -> ValidationResult:
    result = ValidationResult()
    if not is_valid_java_identifier(model_name):
        result.add_error(
            "MDL001",
            f"Model name '{model_name}' is not a valid Java class name.",
        )
    elif not model_name[0].isupper():
        result.add_warning(
            "MDL002",
            f"Model name '{model_name}' does not start with an uppercase letter.",
        )
    return result


# ---------------------------------------------------------------------------
# Per-command entry points
# ---------------------------------------------------------------------------


def validate_quick_start_args(
    url: str,
    schema_name: str,
    package_name: str,
) -> ValidationResult:
    """Run every check that applies to ``quick-start``."""
    result = ValidationResult()
    result.merge(validate_connection_url(url))
    result.merge(validate_schema_name(schema_name))
    result.merge(validate_package_name(package_name))
    logger.debug("quick-start argument validation: %r", result)
    return result


def validate_model_args(model_name: str, package_name: str) -> ValidationResult:
    """Run every check that applies to ``model``."""
    result = ValidationResult()
    result.merge(validate_model_name(model_name))
    result.merge(validate_package_name(package_name))
    return result


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "ValidationError",
    "ValidationResult",
    "is_valid_java_identifier",
    "is_valid_java_package",
    "validate_package_name",
    "validate_schema_name",
    "validate_connection_url",
    "validate_model_name",
    "validate_quick_start_args",
    "validate_model_args",
]
