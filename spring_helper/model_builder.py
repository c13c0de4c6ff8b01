# File: spring_helper/model_builder.py
"""
spring-helper - Document-to-Class Conversion
==============================================
Backs the ``model`` command: turns one pasted mapping of field name → Java
type, e.g. ``{"id": "Integer", "tags": "List<String>"}``, into a Lombok
model class.

The document is parsed as JSON first and as YAML when JSON fails, so flow
style such as ``{id: Integer, name: String}`` is accepted too.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Set

import yaml

from spring_helper.type_mapping import java_imports_for
from spring_helper.utils import write_text_file

logger: logging.Logger = logging.getLogger("spring_helper.model_builder")

_MODEL_IMPORTS: Set[str] = {
    "lombok.AllArgsConstructor",
    "lombok.Data",
    "lombok.NoArgsConstructor",
}


class DocumentParseError(ValueError):
    """The pasted document is not a mapping of field names to type names."""


def parse_field_document(document: str) -> Dict[str, str]:
    """
    Parse *document* into an ordered ``{field: JavaType}`` mapping.

    Raises ``DocumentParseError`` when the text is neither JSON nor YAML, or
    when it is not a flat mapping of strings to strings.
    """
    data: Any
    try:
        data = json.loads(document)
    except json.JSONDecodeError as json_exc:
        logger.debug("Document is not JSON (%s); trying YAML.", json_exc)
        try:
            data = yaml.safe_load(document)
        except yaml.YAMLError as exc:
            raise DocumentParseError(f"Invalid document: {exc}") from exc

    if not isinstance(data, dict):
        raise DocumentParseError(
            f"Expected a mapping of field names to Java types, got {type(data).__name__}."
        )

    fields: Dict[str, str] = {}
    for key, value in data.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise DocumentParseError(
                f"Field {key!r} must map a name to a Java type string, got {value!r}."
            )
        fields[key] = value
    return fields


def render_model_class(model_name: str, package_name: str, fields: Dict[str, str]) -> str:
    """Render a Lombok data class with one ``private`` field per entry."""
    imports: Set[str] = set(_MODEL_IMPORTS)
    for java_type in fields.values():
        imports |= java_imports_for(java_type)

    lines: List[str] = [f"package {package_name}.model;", ""]
    lines.extend(f"import {name};" for name in sorted(imports))
    lines.extend(
        [
            "",
            "@Data",
            "@AllArgsConstructor",
            "@NoArgsConstructor",
            f"public class {model_name} {{",
        ]
    )
    for field_name, java_type in fields.items():
        lines.append(f"    private {java_type} {field_name};")
    lines.extend(["}", ""])
    return "\n".join(lines)


def build_model(
    model_name: str,
    package_name: str,
    document: str,
    *,
    output_dir: Path = Path("."),
    progress: Optional[Callable[[str], None]] = None,
) -> Path:
    """
    Parse *document* and write ``<output_dir>/<model_name>.java``.

    Nothing is written when the document does not parse.
    """
    progress = progress or print
    fields: Dict[str, str] = parse_field_document(document)

    progress("\nDocument parsed successfully, will create model class with following fields:")
    for field_name, java_type in fields.items():
        progress(f"{field_name}, Java type: {java_type}")
    progress("")

    file_name: str = f"{model_name}.java"
    target: Path = Path(output_dir) / file_name
    write_text_file(target, render_model_class(model_name, package_name, fields))
    progress(f"Model created successfully as {file_name}.")
    return target


__all__: List[str] = [
    "DocumentParseError",
    "parse_field_document",
    "render_model_class",
    "build_model",
]
