# File: spring_helper/generator.py
"""
spring-helper - Quick-Start Pipeline (Orchestrator)
=====================================================

Connects every phase of ``quick-start`` together:

    Connect → List Tables → for each table:
        List Columns → Resolve Types → Derive Names → Emit All
    → Done | Aborted

Workflow::

    1. Open ONE catalog connection for the whole run (introspection.py).
    2. List the schema's tables in catalog order.
    3. Per table: list its columns, resolve each column type in order
       (possibly asking the operator), derive the ``IdentifierSet`` once,
       render the five artifacts (templates.py) and write them in order
       (exporters.py).
    4. Return a ``RunReport`` with one ``TableOutcome`` per table.

Error handling strategy:
    - ``IntrospectionError`` (connect or any catalog query) ends the run in
      ``RunState.ABORTED``; nothing further is written.
    - A table whose name yields no entity name, or the same entity name as
      an earlier table of the run, is skipped before any file is written.
    - A write failure stops the remaining artifacts of that table only.
      Files already written stay; the table's outcome records the error and
      the next table is processed.
    - ``RunState.DONE`` is reached whenever no query failed; use
      ``RunReport.fully_emitted`` to tell a clean run from a partial one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, ContextManager, Dict, List, Optional

from spring_helper.exporters import ArtifactWriteError, ArtifactWriter, FileRecord
from spring_helper.introspection import (
    IntrospectionError,
    SchemaIntrospector,
    open_introspector,
)
from spring_helper.models import (
    ARTIFACT_ORDER,
    ColumnDescriptor,
    GeneratedFile,
    IdentifierSet,
    QuickStartConfig,
    ResolvedColumn,
    SchemaRef,
    TableDescriptor,
)
from spring_helper.templates import render_table
from spring_helper.type_mapping import TypeMapper, UnresolvedTypeError
from spring_helper.utils import Timer

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("spring_helper.generator")

IntrospectorFactory = Callable[[SchemaRef], ContextManager[SchemaIntrospector]]
ProgressCallback = Callable[[str], None]


# ---------------------------------------------------------------------------
# Run report
# ---------------------------------------------------------------------------


class RunState(str, Enum):
    """Terminal states of a quick-start run."""

    DONE = "done"
    ABORTED = "aborted"


@dataclass(slots=True)
class TableOutcome:
    """What happened to one table."""

    table_name: str
    entity_name: str = ""
    files: List[FileRecord] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class RunReport:
    """
    Report produced by ``QuickStartGenerator.run()``.

    ``state`` is the terminal state; ``tables`` holds one outcome per table
    processed before the run ended.
    """

    state: RunState = RunState.DONE
    schema_name: str = ""
    package_name: str = ""
    output_directory: str = ""
    tables: List[TableOutcome] = field(default_factory=list)
    fatal_error: Optional[str] = None
    total_elapsed_seconds: float = 0.0

    @property
    def total_files(self) -> int:
        return sum(len(outcome.files) for outcome in self.tables)

    @property
    def failed_tables(self) -> List[TableOutcome]:
        return [outcome for outcome in self.tables if not outcome.success]

    @property
    def fully_emitted(self) -> bool:
        """Done, and every table got all of its artifacts."""
        return self.state is RunState.DONE and not self.failed_tables

    def summary(self) -> str:
        """Return a human-readable summary string."""
        lines: List[str] = []
        if self.state is RunState.ABORTED:
            status: str = "❌ ABORTED"
        elif self.failed_tables:
            status = "⚠ DONE (with failures)"
        else:
            status = "✅ DONE"
        lines.append(f"{'='*60}")
        lines.append("  spring-helper quick-start — Run Report")
        lines.append(f"{'='*60}")
        lines.append(f"  Status:           {status}")
        lines.append(f"  Schema:           {self.schema_name}")
        lines.append(f"  Package:          {self.package_name}")
        lines.append(f"  Output:           {self.output_directory}")
        lines.append(f"  Tables processed: {len(self.tables)}")
        lines.append(f"  Files written:    {self.total_files}")
        lines.append(f"  Total time:       {self.total_elapsed_seconds:.3f}s")

        if self.failed_tables:
            lines.append(f"{'─'*60}")
            lines.append(f"  Failed Tables ({len(self.failed_tables)}):")
            for outcome in self.failed_tables:
                lines.append(f"    ✗ {outcome.table_name}: {outcome.error}")

        if self.fatal_error:
            lines.append(f"{'─'*60}")
            lines.append(f"  Fatal Error: {self.fatal_error}")

        lines.append(f"{'='*60}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# QuickStartGenerator — orchestrator
# ---------------------------------------------------------------------------


class QuickStartGenerator:
    """
    Drives one quick-start run end to end.

    Usage::

        config = QuickStartConfig(package_name="tw.mingchang.app")
        generator = QuickStartGenerator(config)
        report = generator.run(SchemaRef(connection_endpoint=url, schema_name="public"))
        print(report.summary())

    Every collaborator can be injected: tests pass a scripted ``TypeMapper``,
    an introspector factory over a prepared connection and a progress sink.
    """

    def __init__(
        self,
        config: QuickStartConfig,
        *,
        type_mapper: Optional[TypeMapper] = None,
        introspector_factory: Optional[IntrospectorFactory] = None,
        writer: Optional[ArtifactWriter] = None,
        progress: Optional[ProgressCallback] = None,
    ) -> None:
        self._config: QuickStartConfig = config
        self._type_mapper: TypeMapper = type_mapper or TypeMapper.default(
            reject_empty=config.reject_empty_types
        )
        self._introspector_factory: IntrospectorFactory = (
            introspector_factory or open_introspector
        )
        self._writer: ArtifactWriter = writer or ArtifactWriter(Path(config.output_dir))
        self._progress: ProgressCallback = progress or print

    # -----------------------------------------------------------------
    # Public: run
    # -----------------------------------------------------------------

    def run(self, schema_ref: SchemaRef) -> RunReport:
        report: RunReport = RunReport(
            schema_name=schema_ref.schema_name,
            package_name=self._config.package_name,
            output_directory=str(self._writer.output_dir.resolve()),
        )

        with Timer("quick_start") as t:
            try:
                with self._introspector_factory(schema_ref) as introspector:
                    tables: List[TableDescriptor] = introspector.list_tables(schema_ref)
                    # entity name → table that claimed it in this run
                    claimed: Dict[str, str] = {}
                    for table in tables:
                        report.tables.append(
                            self._process_table(introspector, table, schema_ref, claimed)
                        )
            except IntrospectionError as exc:
                report.state = RunState.ABORTED
                report.fatal_error = str(exc)
                logger.error("Quick-start aborted: %s", exc)

        report.total_elapsed_seconds = t.elapsed
        if report.state is RunState.DONE:
            logger.info(
                "Quick-start done: %d table(s), %d file(s), %d failed table(s).",
                len(report.tables),
                report.total_files,
                len(report.failed_tables),
            )
        return report

    # -----------------------------------------------------------------
    # Internal: one table
    # -----------------------------------------------------------------

    def _process_table(
        self,
        introspector: SchemaIntrospector,
        table: TableDescriptor,
        schema_ref: SchemaRef,
        claimed: Dict[str, str],
    ) -> TableOutcome:
        identifiers: IdentifierSet = IdentifierSet.from_table_name(table.name)
        outcome: TableOutcome = TableOutcome(
            table_name=table.name, entity_name=identifiers.entity_name
        )

        if not identifiers.entity_name:
            outcome.error = f'Table name "{table.name}" yields no Java identifier.'
            logger.error("Skipping table %r: %s", table.name, outcome.error)
            return outcome

        owner: Optional[str] = claimed.get(identifiers.entity_name)
        if owner is not None:
            outcome.error = (
                f'Entity name "{identifiers.entity_name}" is already generated '
                f'for table "{owner}".'
            )
            logger.error("Skipping table %r: %s", table.name, outcome.error)
            return outcome
        claimed[identifiers.entity_name] = table.name

        columns: List[ColumnDescriptor] = introspector.list_columns(table.name, schema_ref)

        try:
            resolved: List[ResolvedColumn] = self._type_mapper.map_columns(columns)
        except UnresolvedTypeError as exc:
            outcome.error = str(exc)
            logger.error("Skipping table %r: %s", table.name, exc)
            return outcome

        files: List[GeneratedFile] = render_table(
            table.name,
            resolved,
            identifiers,
            self._config.package_name,
            schema_name=schema_ref.schema_name,
            primary_key_type=self._config.primary_key_type,
            file_extension=self._config.file_extension,
        )

        for kind, generated in zip(ARTIFACT_ORDER, files):
            try:
                record: FileRecord = self._writer.write(generated)
            except ArtifactWriteError as exc:
                outcome.error = str(exc)
                logger.error(
                    "Stopped emitting table %r after %d file(s): %s",
                    table.name,
                    len(outcome.files),
                    exc,
                )
                break
            outcome.files.append(record)
            self._progress(
                f'Created {kind.label} for table "{table.name}" as {record.relative_path}.'
            )

        return outcome


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "RunState",
    "TableOutcome",
    "RunReport",
    "QuickStartGenerator",
]

logger.debug("spring_helper.generator loaded.")
