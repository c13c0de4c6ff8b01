# File: spring_helper/templates.py
"""
spring-helper - Java Source Templates
=======================================
Renders the five Spring sources emitted per table:

    1. R2DBC entity             model/<Entity>.java
    2. Reactive repository      repository/<Entity>Repository.java
    3. Service interface        service/<Entity>Service.java
    4. Service implementation   service/impl/<Entity>ServiceImpl.java
    5. REST controller          controller/<Entity>Controller.java

Each kind is one fixed ``string.Template``; ``render_artifact`` substitutes
the values of a single ``IdentifierSet`` into it.  No template reads the
output of another, so the files agree on every type and field name simply
because they are rendered from the same identifiers.

The service interface and the controller are deliberate stubs: they carry
no CRUD method or endpoint declarations.
"""

from __future__ import annotations

import logging
from string import Template
from typing import Dict, List, Sequence, Set

from spring_helper.models import (
    ARTIFACT_ORDER,
    ArtifactKind,
    GeneratedFile,
    IdentifierSet,
    ResolvedColumn,
)
from spring_helper.type_mapping import java_imports_for

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("spring_helper.templates")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_INDENT: str = "    "

# Imports every entity needs regardless of its columns
_ENTITY_BASE_IMPORTS: Set[str] = {
    "lombok.AllArgsConstructor",
    "lombok.Data",
    "lombok.NoArgsConstructor",
    "org.springframework.data.relational.core.mapping.Column",
    "org.springframework.data.relational.core.mapping.Table",
}

_ID_IMPORT: str = "org.springframework.data.annotation.Id"


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

_TEMPLATES: Dict[ArtifactKind, Template] = {
    ArtifactKind.ENTITY: Template(
        """package ${package}.model;

${imports}

@Data
@AllArgsConstructor
@NoArgsConstructor
@Table(schema = "${schema_name}", value = "${table_name}")
public class ${entity_name} {
${fields}
}
"""
    ),
    ArtifactKind.REPOSITORY: Template(
        """package ${package}.repository;

import ${package}.model.${entity_name};
import org.springframework.data.r2dbc.repository.R2dbcRepository;
import org.springframework.stereotype.Repository;

@Repository
public interface ${repository_name} extends R2dbcRepository<${entity_name}, ${primary_key_type}> {
}
"""
    ),
    ArtifactKind.SERVICE_INTERFACE: Template(
        """package ${package}.service;

public interface ${service_name} {
}
"""
    ),
    ArtifactKind.SERVICE_IMPL: Template(
        """package ${package}.service.impl;

import ${package}.repository.${repository_name};
import ${package}.service.${service_name};
import org.springframework.stereotype.Service;

@Service
public class ${service_impl_name} implements ${service_name} {

    private final ${repository_name} ${repository_field};

    public ${service_impl_name}(${repository_name} ${repository_field}) {
        this.${repository_field} = ${repository_field};
    }
}
"""
    ),
    ArtifactKind.CONTROLLER: Template(
        """package ${package}.controller;

import ${package}.service.${service_name};
import org.springframework.web.bind.annotation.RequestMapping;
import org.springframework.web.bind.annotation.RestController;

@RestController
@RequestMapping("/${path_segment}")
public class ${controller_name} {

    private final ${service_name} ${service_field};

    public ${controller_name}(${service_name} ${service_field}) {
        this.${service_field} = ${service_field};
    }
}
"""
    ),
}


# ---------------------------------------------------------------------------
# Entity body helpers
# ---------------------------------------------------------------------------


def _entity_imports(columns: Sequence[ResolvedColumn]) -> str:
    imports: Set[str] = set(_ENTITY_BASE_IMPORTS)
    for col in columns:
        imports |= java_imports_for(col.mapped_type)
        if col.is_primary_key:
            imports.add(_ID_IMPORT)
    return "\n".join(f"import {name};" for name in sorted(imports))


def _entity_fields(columns: Sequence[ResolvedColumn]) -> str:
    """One annotated ``private`` field per column, blank line between fields."""
    blocks: List[str] = []
    for col in columns:
        lines: List[str] = []
        if col.is_primary_key:
            lines.append(f"{_INDENT}@Id")
        lines.append(f'{_INDENT}@Column("{col.column.name}")')
        lines.append(f"{_INDENT}private {col.mapped_type} {col.field_name};")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


# ---------------------------------------------------------------------------
# Public rendering API
# ---------------------------------------------------------------------------


def render_artifact(
    kind: ArtifactKind,
    identifiers: IdentifierSet,
    columns: Sequence[ResolvedColumn],
    package_name: str,
    *,
    schema_name: str = "",
    table_name: str = "",
    primary_key_type: str = "Integer",
) -> str:
    """
    Render the source text of one artifact.

    Only the entity uses *columns*, *schema_name* and *table_name*; every
    other kind depends on *identifiers* and *package_name* alone.
    """
    values: Dict[str, str] = {
        "package": package_name,
        "entity_name": identifiers.entity_name,
        "repository_name": identifiers.repository_name,
        "service_name": identifiers.service_name,
        "service_impl_name": identifiers.service_impl_name,
        "controller_name": identifiers.controller_name,
        "repository_field": identifiers.repository_field,
        "service_field": identifiers.service_field,
        "path_segment": identifiers.path_segment,
        "primary_key_type": primary_key_type,
        "schema_name": schema_name,
        "table_name": table_name,
    }
    if kind is ArtifactKind.ENTITY:
        values["imports"] = _entity_imports(columns)
        values["fields"] = _entity_fields(columns)

    return _TEMPLATES[kind].substitute(values)


def render_table(
    table_name: str,
    columns: Sequence[ResolvedColumn],
    identifiers: IdentifierSet,
    package_name: str,
    *,
    schema_name: str,
    primary_key_type: str = "Integer",
    file_extension: str = ".java",
) -> List[GeneratedFile]:
    """
    Render all five artifacts of one table, in emission order.

    Returns ``GeneratedFile``s laid out under the conventional directories.
    """
    files: List[GeneratedFile] = []
    for kind in ARTIFACT_ORDER:
        content: str = render_artifact(
            kind,
            identifiers,
            columns,
            package_name,
            schema_name=schema_name,
            table_name=table_name,
            primary_key_type=primary_key_type,
        )
        files.append(
            GeneratedFile(
                relative_directory=kind.directory,
                file_name=f"{identifiers.type_name_for(kind)}{file_extension}",
                content=content,
            )
        )

    logger.debug(
        "Rendered %d artifacts for table %r (%d columns).",
        len(files),
        table_name,
        len(columns),
    )
    return files


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "render_artifact",
    "render_table",
]
