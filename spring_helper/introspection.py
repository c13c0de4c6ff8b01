# File: spring_helper/introspection.py
"""
spring-helper - Schema Introspection
======================================
Reads table and column metadata for one schema from PostgreSQL's
``information_schema`` using SQLAlchemy 2.0 Core.

A run holds exactly one connection, opened by ``open_introspector`` and
released on every exit path.  On PostgreSQL the connection runs at
``REPEATABLE READ`` so the table listing and every column listing see the
same catalog snapshot.

Every database failure (bad URL, unreachable server, rejected query) is
re-raised as ``IntrospectionError``.  There is no retry and no reconnect: a
failed query ends the run.
"""

from __future__ import annotations

import contextlib
import logging
from typing import Iterator, List

from sqlalchemy import create_engine, make_url, text
from sqlalchemy.engine import URL, Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from spring_helper.models import ColumnDescriptor, SchemaRef, TableDescriptor

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("spring_helper.introspection")

# ---------------------------------------------------------------------------
# Catalog queries
# ---------------------------------------------------------------------------

_LIST_TABLES_SQL = text(
    "SELECT table_name FROM information_schema.tables "
    "WHERE table_schema = :schema_name"
)

_LIST_COLUMNS_SQL = text(
    "SELECT column_name, udt_name FROM information_schema.columns "
    "WHERE table_name = :table_name AND table_schema = :schema_name "
    "ORDER BY ordinal_position"
)

_SNAPSHOT_ISOLATION: str = "REPEATABLE READ"


class IntrospectionError(RuntimeError):
    """Connecting to the catalog or querying it failed.  Fatal for the run."""


# ---------------------------------------------------------------------------
# SchemaIntrospector
# ---------------------------------------------------------------------------


class SchemaIntrospector:
    """
    Catalog queries over one open connection.

    The introspector never opens or closes the connection itself; use
    ``open_introspector`` for that.
    """

    def __init__(self, connection: Connection) -> None:
        self._connection: Connection = connection

    def list_tables(self, schema_ref: SchemaRef) -> List[TableDescriptor]:
        """Tables of ``schema_ref.schema_name`` in catalog order.  May be empty."""
        logger.debug("Listing tables of schema %r.", schema_ref.schema_name)
        try:
            rows = self._connection.execute(
                _LIST_TABLES_SQL, {"schema_name": schema_ref.schema_name}
            ).all()
        except SQLAlchemyError as exc:
            raise IntrospectionError(
                f'Could not list tables of schema "{schema_ref.schema_name}": {exc}'
            ) from exc

        tables: List[TableDescriptor] = [TableDescriptor(name=row[0]) for row in rows]
        logger.info(
            "Found %d table(s) in schema %r.", len(tables), schema_ref.schema_name
        )
        return tables

    def list_columns(
        self, table_name: str, schema_ref: SchemaRef
    ) -> List[ColumnDescriptor]:
        """Columns of *table_name* in declared order; ``position`` is 0-based."""
        logger.debug(
            "Listing columns of %s.%s.", schema_ref.schema_name, table_name
        )
        try:
            rows = self._connection.execute(
                _LIST_COLUMNS_SQL,
                {"table_name": table_name, "schema_name": schema_ref.schema_name},
            ).all()
        except SQLAlchemyError as exc:
            raise IntrospectionError(
                f'Could not list columns of table "{table_name}" '
                f'in schema "{schema_ref.schema_name}": {exc}'
            ) from exc

        return [
            ColumnDescriptor(name=row[0], native_type=row[1], position=position)
            for position, row in enumerate(rows)
        ]


# ---------------------------------------------------------------------------
# Connection scoping
# ---------------------------------------------------------------------------


def normalize_connection_url(endpoint: str) -> URL:
    """
    Parse *endpoint*, mapping the ``postgres`` scheme alias to ``postgresql``.

    Examples:
        >>> normalize_connection_url("postgres://u:p@db:5432/app").drivername
        'postgresql'
        >>> normalize_connection_url("postgres+psycopg2://u@db/app").drivername
        'postgresql+psycopg2'
    """
    url: URL = make_url(endpoint)
    backend, plus, driver = url.drivername.partition("+")
    if backend == "postgres":
        url = url.set(drivername=f"postgresql{plus}{driver}")
    return url


def _create_engine(schema_ref: SchemaRef) -> Engine:
    try:
        return create_engine(normalize_connection_url(schema_ref.connection_endpoint))
    except SQLAlchemyError as exc:
        raise IntrospectionError(f"Invalid connection URL: {exc}") from exc


@contextlib.contextmanager
def open_introspector(schema_ref: SchemaRef) -> Iterator[SchemaIntrospector]:
    """
    Open one connection for a whole run and yield an introspector over it.

    The connection and its engine are released when the block exits,
    normally or by exception.
    """
    engine: Engine = _create_engine(schema_ref)
    try:
        try:
            connection: Connection = engine.connect()
        except SQLAlchemyError as exc:
            raise IntrospectionError(
                f"Could not connect to the database: {exc}"
            ) from exc

        with connection:
            if engine.dialect.name == "postgresql":
                try:
                    connection.execution_options(isolation_level=_SNAPSHOT_ISOLATION)
                except SQLAlchemyError as exc:
                    raise IntrospectionError(
                        f"Could not configure the connection: {exc}"
                    ) from exc
            logger.info("Connected to %s database.", engine.dialect.name)
            yield SchemaIntrospector(connection)
    finally:
        engine.dispose()
        logger.debug("Database engine disposed.")


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "IntrospectionError",
    "SchemaIntrospector",
    "open_introspector",
    "normalize_connection_url",
]
