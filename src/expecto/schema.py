"""Generate JSON Schema and docs for the report config YAML format."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from expecto.config import ReportConfig


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def generate_json_schema() -> dict:
    schema = ReportConfig.model_json_schema()
    schema["title"] = "expecto report config"
    return schema


def write_json_schema(path: Path) -> None:
    _ensure_parent(path)
    schema = generate_json_schema()
    path.write_text(json.dumps(schema, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def _describe_field(name: str, prop: dict) -> str:
    kind = prop.get("type")
    if kind is None and "anyOf" in prop:
        kind = " | ".join(
            option.get("type", "object") for option in prop["anyOf"]
        )
    default = prop.get("default")
    if default is None and "default" not in prop:
        return f"- `{name}`: {kind or 'object'}"
    return f"- `{name}`: {kind or 'object'} (default: `{default}`)"


def _format_fields(fields: Iterable[str]) -> str:
    return ", ".join(fields)


def generate_schema_doc() -> str:
    schema = generate_json_schema()
    defs = schema.get("$defs", {})

    lines: list[str] = []
    lines.append("# expecto config schema")
    lines.append("")
    lines.append("This doc is generated from the Pydantic models.")
    lines.append("Point `EXPECTO_CONFIG` at a file in this format to change report output.")
    lines.append("")
    lines.append("## Top-level keys")
    for name, prop in schema.get("properties", {}).items():
        if name == "markers":
            marker_fields = defs.get("Markers", {}).get("properties", {}).keys()
            lines.append(f"- `markers`: {{ {_format_fields(marker_fields)} }}")
            continue
        lines.append(_describe_field(name, prop))
    lines.append("")
    lines.append("## Markers")
    for name, prop in defs.get("Markers", {}).get("properties", {}).items():
        lines.append(_describe_field(name, prop))
    lines.append("")
    return "\n".join(lines)


def write_schema_doc(path: Path) -> None:
    _ensure_parent(path)
    path.write_text(generate_schema_doc(), encoding="utf-8")
