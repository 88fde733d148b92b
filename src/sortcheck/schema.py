"""Generate JSON Schema and docs for the check suite YAML format."""

from __future__ import annotations

import json
from pathlib import Path
from typing import get_args

from pydantic import BaseModel

from sortcheck.config import Assertion, EntrySpec, SuiteConfig

SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"


def generate_json_schema() -> dict:
    schema = SuiteConfig.model_json_schema()
    schema["$schema"] = SCHEMA_DIALECT
    schema["title"] = "sortcheck suite"
    if "$defs" in schema:
        schema["$defs"] = dict(sorted(schema["$defs"].items()))
    return schema


def write_json_schema(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(generate_json_schema(), indent=2) + "\n")


def _assertion_line(model: type[BaseModel]) -> str:
    type_key, field = next(
        (name, f) for name, f in model.model_fields.items() if name != "weight"
    )
    if field.annotation is EntrySpec:
        return f"- `{type_key}`: {{ {', '.join(EntrySpec.model_fields)} }}"
    return f"- `{type_key}`: any scalar"


def generate_schema_doc() -> str:
    lines = [
        "# sortcheck YAML Schema",
        "",
        "This doc is generated from the Pydantic models.",
        "",
        "## Top-level keys",
        "- `subjects`: mapping of subject names to ordered collections.",
        "- `checks`: list of check definitions.",
        "",
        "## Subject",
        "- `kind`: string (required) - one of: map, set",
        "- `entries`: array of [key, value] pairs (map subjects)",
        "- `elements`: array (set subjects)",
        "- `order`: string (optional) - one of: natural, nulls_first, nulls_last",
        "- `reverse`: boolean (optional) - order descending",
        "",
        "## Assertions",
        *(_assertion_line(model) for model in get_args(Assertion)),
        "",
        "Every assertion also accepts an optional `weight` (default 1.0).",
        "",
    ]
    return "\n".join(lines)


def write_schema_doc(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(generate_schema_doc())
