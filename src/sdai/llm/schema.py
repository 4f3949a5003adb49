from __future__ import annotations

import copy
from typing import Any, Dict, Protocol

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError as _JsonSchemaError
from pydantic import BaseModel

from .errors import SchemaConversionError

STRUCTURED_OUTPUT_NAME = "sdai_schema"
STRUCTURED_OUTPUT_TOOL = "structured_output"
STRUCTURED_OUTPUT_TOOL_DESCRIPTION = "Output structured data according to the schema"

_DROPPED_KEYS = frozenset({"title"})
# keywords whose values are instance data, not subschemas
_DATA_KEYS = frozenset({"default", "const", "enum", "examples"})


class SchemaAdapter(Protocol):
    """Converts a schema description into provider-native structured output."""

    def to_openai(self, schema: Any) -> Any:
        raise NotImplementedError

    def to_json_schema(self, schema: Any) -> Dict[str, Any]:
        raise NotImplementedError


def _is_model_class(schema: Any) -> bool:
    return isinstance(schema, type) and issubclass(schema, BaseModel)


def _resolve_ref(ref: str, defs: Dict[str, Any]) -> tuple[str, Dict[str, Any]]:
    for prefix in ("#/$defs/", "#/definitions/"):
        if ref.startswith(prefix):
            name = ref[len(prefix) :]
            if name in defs:
                return name, defs[name]
    raise SchemaConversionError(f"Unresolvable schema reference: {ref}")


def _inline(node: Any, defs: Dict[str, Any], seen: tuple[str, ...]) -> Any:
    if isinstance(node, list):
        return [_inline(item, defs, seen) for item in node]
    if not isinstance(node, dict):
        return node

    if "$ref" in node:
        name, target = _resolve_ref(node["$ref"], defs)
        if name in seen:
            raise SchemaConversionError(f"Recursive schema reference: {name}")
        merged = {k: v for k, v in node.items() if k != "$ref"}
        resolved = _inline(target, defs, seen + (name,))
        return {**resolved, **_inline(merged, defs, seen)}

    out: Dict[str, Any] = {}
    for key, value in node.items():
        if key in ("$defs", "definitions"):
            continue
        if key in _DATA_KEYS:
            out[key] = copy.deepcopy(value)
            continue
        if key in _DROPPED_KEYS and isinstance(value, str):
            continue
        if key == "properties" and isinstance(value, dict):
            # property names are data, not keywords; never drop them
            out[key] = {name: _inline(v, defs, seen) for name, v in value.items()}
            continue
        out[key] = _inline(value, defs, seen)
    return out


class JsonSchemaAdapter:
    """Default adapter: pydantic models or JSON Schema dicts.

    - OpenAI: pydantic classes are handed to the SDK as-is (it builds a strict
      response_format and returns `parsed`); dicts become a strict json_schema
      response_format.
    - Gemini / Anthropic: a self-contained JSON Schema with `$ref`s inlined and
      `title` noise removed.
    """

    def to_openai(self, schema: Any) -> Any:
        if _is_model_class(schema):
            return schema
        return {
            "type": "json_schema",
            "json_schema": {
                "name": STRUCTURED_OUTPUT_NAME,
                "schema": self._raw_json_schema(schema),
                "strict": True,
            },
        }

    def to_json_schema(self, schema: Any) -> Dict[str, Any]:
        raw = self._raw_json_schema(schema)
        defs = {**raw.get("definitions", {}), **raw.get("$defs", {})}
        return _inline(raw, defs, ())

    def _raw_json_schema(self, schema: Any) -> Dict[str, Any]:
        if _is_model_class(schema):
            try:
                return schema.model_json_schema()
            except Exception as e:  # noqa: BLE001
                raise SchemaConversionError(
                    f"Cannot build JSON schema for {schema.__name__}: {e}"
                ) from e

        if isinstance(schema, dict):
            try:
                Draft202012Validator.check_schema(schema)
            except _JsonSchemaError as e:
                raise SchemaConversionError(f"Invalid JSON schema: {e.message}") from e
            return copy.deepcopy(schema)

        raise SchemaConversionError(
            f"Unsupported schema description: {type(schema).__name__}"
        )
