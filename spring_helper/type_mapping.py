# File: spring_helper/type_mapping.py
"""
spring-helper - Column Type Resolution
========================================
Maps PostgreSQL column types (``udt_name``) to Java field types.

Resolution is a chain of ``TypeResolver`` objects tried in order:

    FixedTableResolver  →  InteractiveTypeResolver

The fixed table answers every type it knows without any I/O.  Anything it
does not know falls through to the interactive resolver, which asks the
operator for a Java type and uses the answer verbatim.  The pipeline itself
never reads or writes a terminal; tests substitute their own resolvers.
"""

from __future__ import annotations

import abc
import logging
import sys
from typing import Dict, List, Optional, Sequence, Set, TextIO

from spring_helper.models import ColumnDescriptor, ResolvedColumn

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("spring_helper.type_mapping")

# ---------------------------------------------------------------------------
# Fixed mapping table (PostgreSQL udt_name → Java type)
# ---------------------------------------------------------------------------

JAVA_TYPE_MAP: Dict[str, str] = {
    "int4": "Integer",
    "_int4": "List<Integer>",
    "varchar": "String",
    "_varchar": "List<String>",
    "text": "String",
    "date": "LocalDate",
    "time": "LocalTime",
    "timestamp": "LocalDateTime",
    "bool": "Boolean",
    "numeric": "BigDecimal",
}

# Java simple type name → fully-qualified import
_JAVA_TYPE_IMPORTS: Dict[str, str] = {
    "List": "java.util.List",
    "LocalDate": "java.time.LocalDate",
    "LocalTime": "java.time.LocalTime",
    "LocalDateTime": "java.time.LocalDateTime",
    "BigDecimal": "java.math.BigDecimal",
}


def java_imports_for(mapped_type: str) -> Set[str]:
    """
    Return the imports a field of *mapped_type* needs.

    Examples:
        >>> sorted(java_imports_for("List<LocalDate>"))
        ['java.time.LocalDate', 'java.util.List']
        >>> java_imports_for("String")
        set()
    """
    names: List[str] = (
        mapped_type.replace("<", " ").replace(">", " ").replace(",", " ").split()
    )
    return {_JAVA_TYPE_IMPORTS[name] for name in names if name in _JAVA_TYPE_IMPORTS}


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class UnresolvedTypeError(LookupError):
    """No resolver in the chain produced a type for a column."""

    def __init__(self, column_name: str, native_type: str) -> None:
        self.column_name: str = column_name
        self.native_type: str = native_type
        super().__init__(
            f'Column "{column_name}" has unknown type "{native_type}" '
            f"and no resolver could map it."
        )


# ---------------------------------------------------------------------------
# Resolvers
# ---------------------------------------------------------------------------


class TypeResolver(abc.ABC):
    """One link of the resolution chain."""

    @abc.abstractmethod
    def resolve(self, native_type: str, column_name: str) -> Optional[str]:
        """Return a Java type for *native_type*, or ``None`` to pass."""


class FixedTableResolver(TypeResolver):
    """Pure lookup in a fixed mapping table."""

    def __init__(self, table: Optional[Dict[str, str]] = None) -> None:
        self._table: Dict[str, str] = dict(JAVA_TYPE_MAP if table is None else table)

    def resolve(self, native_type: str, column_name: str) -> Optional[str]:
        return self._table.get(native_type)


class InteractiveTypeResolver(TypeResolver):
    """
    Ask the operator for a Java type.

    Writes one diagnostic naming the column and its native type to *output*,
    then blocks on a single line from *input_stream*.  The line is returned
    as typed, minus its line ending.  There is no timeout.

    With ``reject_empty=True`` an empty answer re-prompts instead of being
    accepted.  End of input always returns whatever was read.
    """

    def __init__(
        self,
        input_stream: Optional[TextIO] = None,
        output: Optional[TextIO] = None,
        *,
        reject_empty: bool = False,
    ) -> None:
        self._input: Optional[TextIO] = input_stream
        self._output: Optional[TextIO] = output
        self._reject_empty: bool = reject_empty

    def resolve(self, native_type: str, column_name: str) -> Optional[str]:
        input_stream: TextIO = self._input or sys.stdin
        output: TextIO = self._output or sys.stdout

        print(
            f'\nColumn name "{column_name}" has unknown type "{native_type}".\n'
            "Please specify a valid Java type: "
            "(Press Enter/Return to continue, Ctrl+C to cancel)\n",
            file=output,
            flush=True,
        )

        while True:
            line: str = input_stream.readline()
            at_eof: bool = not line.endswith("\n")
            answer: str = _strip_line_ending(line)
            if answer or at_eof or not self._reject_empty:
                break
            print("A Java type is required, please try again:", file=output, flush=True)

        if not answer:
            logger.warning(
                "Empty type supplied for column %r (%s); writing it verbatim.",
                column_name,
                native_type,
            )
        else:
            logger.info(
                "Operator mapped column %r (%s) to %r.", column_name, native_type, answer
            )
        return answer


def _strip_line_ending(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


# ---------------------------------------------------------------------------
# TypeMapper
# ---------------------------------------------------------------------------


class TypeMapper:
    """
    Resolve native column types through a chain of ``TypeResolver``s.

    Usage::

        mapper = TypeMapper.default()
        resolved = mapper.map_column(ColumnDescriptor(name="id", native_type="int4", position=0))
        resolved.mapped_type  # 'Integer'
    """

    def __init__(self, resolvers: Sequence[TypeResolver]) -> None:
        self._resolvers: List[TypeResolver] = list(resolvers)

    @classmethod
    def default(
        cls,
        input_stream: Optional[TextIO] = None,
        output: Optional[TextIO] = None,
        *,
        reject_empty: bool = False,
    ) -> "TypeMapper":
        """Fixed table first, operator prompt for everything else."""
        return cls(
            [
                FixedTableResolver(),
                InteractiveTypeResolver(input_stream, output, reject_empty=reject_empty),
            ]
        )

    def map_type(self, native_type: str, column_name: str = "") -> str:
        for resolver in self._resolvers:
            mapped: Optional[str] = resolver.resolve(native_type, column_name)
            if mapped is not None:
                return mapped
        raise UnresolvedTypeError(column_name, native_type)

    def map_column(self, column: ColumnDescriptor) -> ResolvedColumn:
        mapped_type: str = self.map_type(column.native_type, column.name)
        logger.debug("%s, Java type: %s", column.name, mapped_type)
        return ResolvedColumn(column=column, mapped_type=mapped_type)

    def map_columns(self, columns: Sequence[ColumnDescriptor]) -> List[ResolvedColumn]:
        """Resolve *columns* one after another, in order."""
        return [self.map_column(column) for column in columns]


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "JAVA_TYPE_MAP",
    "java_imports_for",
    "UnresolvedTypeError",
    "TypeResolver",
    "FixedTableResolver",
    "InteractiveTypeResolver",
    "TypeMapper",
]
