# File: spring_helper/__init__.py
"""
spring-helper — Spring Web Project Scaffolding
================================================

Reads a PostgreSQL schema through ``information_schema`` and emits, for every
table, a Spring Data R2DBC entity, a reactive repository, a service
interface, its implementation and a REST controller.  Two side commands
download a project skeleton from Spring Initializr (``init``) and turn a
pasted field document into a model class (``model``).

Architecture overview::

    ┌──────────────┐     ┌─────────────────────┐     ┌────────────────┐
    │  CLI / Entry │────▶│ QuickStartGenerator │────▶│   templates    │
    │   (cli.py)   │     │   (generator.py)    │     │ (templates.py) │
    └──────────────┘     └──────────┬──────────┘     └────────────────┘
                                    │
                 ┌──────────────────┼──────────────────┐
                 ▼                  ▼                  ▼
          ┌──────────────┐   ┌──────────────┐   ┌───────────┐
          │introspection │   │ type_mapping │   │ exporters │
          │    (.py)     │   │    (.py)     │   │   (.py)   │
          └──────────────┘   └──────────────┘   └───────────┘

Usage::

    # As a library
    from spring_helper import QuickStartConfig, QuickStartGenerator, SchemaRef
    report = QuickStartGenerator(QuickStartConfig(package_name="tw.mingchang.app")).run(
        SchemaRef(connection_endpoint=url, schema_name="public")
    )

    # From the command line
    python -m spring_helper quick-start postgresql://user:pw@localhost/db public tw.mingchang.app
"""

from __future__ import annotations

from typing import List

__version__: str = "0.2.0"
__license__: str = "MIT"

from spring_helper.models import (
    ARTIFACT_ORDER,
    ArtifactKind,
    ColumnDescriptor,
    GeneratedFile,
    IdentifierSet,
    InitRequest,
    QuickStartConfig,
    ResolvedColumn,
    SchemaRef,
    TableDescriptor,
)
from spring_helper.validators import ValidationResult, validate_quick_start_args
from spring_helper.type_mapping import (
    JAVA_TYPE_MAP,
    FixedTableResolver,
    InteractiveTypeResolver,
    TypeMapper,
    TypeResolver,
    UnresolvedTypeError,
)
from spring_helper.introspection import (
    IntrospectionError,
    SchemaIntrospector,
    open_introspector,
)
from spring_helper.templates import render_artifact, render_table
from spring_helper.exporters import ArtifactWriteError, ArtifactWriter, FileRecord
from spring_helper.generator import QuickStartGenerator, RunReport, RunState, TableOutcome
from spring_helper.utils import Timer, to_camel, to_upper_camel

# ---------------------------------------------------------------------------
# Public API surface
# ---------------------------------------------------------------------------

__all__: List[str] = [
    # Version info
    "__version__",
    "__license__",
    # Core orchestrator
    "QuickStartGenerator",
    "RunReport",
    "RunState",
    "TableOutcome",
    # Models
    "ARTIFACT_ORDER",
    "ArtifactKind",
    "ColumnDescriptor",
    "GeneratedFile",
    "IdentifierSet",
    "InitRequest",
    "QuickStartConfig",
    "ResolvedColumn",
    "SchemaRef",
    "TableDescriptor",
    # Validation
    "ValidationResult",
    "validate_quick_start_args",
    # Type resolution
    "JAVA_TYPE_MAP",
    "FixedTableResolver",
    "InteractiveTypeResolver",
    "TypeMapper",
    "TypeResolver",
    "UnresolvedTypeError",
    # Introspection
    "IntrospectionError",
    "SchemaIntrospector",
    "open_introspector",
    # Templates & export
    "render_artifact",
    "render_table",
    "ArtifactWriteError",
    "ArtifactWriter",
    "FileRecord",
    # Utilities
    "Timer",
    "to_camel",
    "to_upper_camel",
]
