"""Load schema text from SDL files or introspection results."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from graphql import build_client_schema, print_schema
from graphql.error import GraphQLError


class SchemaLoadError(Exception):
    """The schema file could not be read or converted to SDL."""


def introspection_to_sdl(data: dict[str, Any]) -> str:
    """Convert an introspection result (with or without the ``data`` envelope)."""
    payload = data.get("data", data)
    if not isinstance(payload, dict) or "__schema" not in payload:
        raise SchemaLoadError("introspection result has no __schema")
    try:
        schema = build_client_schema(payload)  # type: ignore[arg-type]
    except (GraphQLError, TypeError, KeyError) as e:
        raise SchemaLoadError(f"invalid introspection result: {e}") from e
    return print_schema(schema)


def load_schema_text(path: str | Path) -> str:
    """Read SDL from ``path``; ``.json`` files are treated as introspection."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SchemaLoadError(f"cannot read {path}: {e}") from e
    if path.suffix.lower() != ".json":
        return text
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"{path}:{e.lineno}:{e.colno}: invalid JSON: {e.msg}") from e
    if not isinstance(data, dict):
        raise SchemaLoadError(f"{path}: introspection result must be a JSON object")
    return introspection_to_sdl(data)
