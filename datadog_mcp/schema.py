"""
Datadog MCP Tool Schemas

Every tool declares its parameters once, as a pydantic model. That model is
both the runtime validator for incoming arguments and the source of the
inputSchema advertised in tools/list. Nothing is hand-written twice.

Handlers answer with a list of text blocks. The MCP layer wraps the list as
{"content": [...]}, so that list is the response envelope.
"""

import json
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional, TypeVar

from mcp.types import TextContent, Tool
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic.json_schema import GenerateJsonSchema, NoDefault


ParamsT = TypeVar("ParamsT", bound=BaseModel)

ToolHandler = Callable[[Optional[dict[str, Any]]], Awaitable[list[TextContent]]]
ToolHandlers = dict[str, ToolHandler]


class ToolParams(BaseModel):
    """Base for tool parameters whose wire names are camelCase."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class SnakeCaseToolParams(BaseModel):
    """Base for tool parameters that keep snake_case wire names."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)


# =============================================================================
# SCHEMA PROJECTION
# =============================================================================

class WireSchemaGenerator(GenerateJsonSchema):
    """
    JSON Schema flavour used for the advertised inputSchema.

    Optional fields are rendered as their inner type, a None default is
    dropped, and field titles are left out. What remains per field is
    type, description, default, enum and numeric bounds.
    """

    def nullable_schema(self, schema):
        return self.generate_inner(schema["schema"])

    def get_default_value(self, schema):
        default = super().get_default_value(schema)
        if default is None:
            return NoDefault
        return default

    def field_title_should_be_set(self, schema) -> bool:
        return False


def _inline_refs(node: Any, defs: dict[str, Any]) -> Any:
    """Replace $ref pointers with the referenced definition, recursively."""
    if isinstance(node, list):
        return [_inline_refs(item, defs) for item in node]
    if not isinstance(node, dict):
        return node

    # pydantic may wrap a single $ref in allOf when it carries siblings
    all_of = node.get("allOf")
    if isinstance(all_of, list) and len(all_of) == 1:
        merged = {k: v for k, v in node.items() if k != "allOf"}
        merged.update(all_of[0])
        node = merged

    ref = node.get("$ref")
    if isinstance(ref, str) and ref.startswith("#/$defs/"):
        target = defs.get(ref[len("#/$defs/"):], {})
        siblings = {k: v for k, v in node.items() if k != "$ref"}
        node = {**target, **siblings}

    inlined = {}
    for key, value in node.items():
        if key == "title":
            continue
        if key == "properties" and isinstance(value, dict):
            inlined[key] = {name: _inline_refs(prop, defs) for name, prop in value.items()}
        else:
            inlined[key] = _inline_refs(value, defs)
    return inlined


def schema_definitions(model: type[BaseModel], name: str) -> dict[str, Any]:
    """
    Render a parameter model into a definitions namespace keyed by tool name.

    Nested models are inlined so composite parameters keep their structure
    instead of pointing at shared $defs entries.
    """
    full = model.model_json_schema(schema_generator=WireSchemaGenerator)
    defs = full.pop("$defs", {})
    return {"definitions": {name: _inline_refs(full, defs)}}


def pick_root_object_property(full_schema: dict[str, Any], schema_name: str) -> dict[str, Any]:
    """
    Pull the named root object out of a definitions namespace.

    An absent name still yields a valid object schema with no properties.
    """
    definitions = full_schema.get("definitions") or {}
    root = definitions.get(schema_name) or {}
    return {
        "type": "object",
        "properties": dict(root.get("properties") or {}),
        "required": list(root.get("required") or []),
    }


def create_tool_schema(model: type[BaseModel], name: str, description: str) -> Tool:
    """
    Build the MCP tool descriptor for a parameter model.

    The name is both the advertised tool name and the key used to find the
    root definition.
    """
    return Tool(
        name=name,
        description=description,
        inputSchema=pick_root_object_property(schema_definitions(model, name), name),
    )


def parse_arguments(model: type[ParamsT], arguments: Optional[dict[str, Any]]) -> ParamsT:
    """Validate raw call arguments. Raises pydantic.ValidationError."""
    return model.model_validate(arguments or {})


# =============================================================================
# RESPONSE ENVELOPE
# =============================================================================

def to_json(value: Any, indent: Optional[int] = None) -> str:
    """Compact JSON (no separator spaces) unless an indent is given."""
    if indent is None:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
    return json.dumps(value, indent=indent, ensure_ascii=False, default=str)


def text_content(text: str) -> TextContent:
    return TextContent(type="text", text=text)


def epoch_to_iso(epoch_seconds: float) -> str:
    """Epoch seconds to an ISO-8601 UTC string with millisecond precision."""
    moment = datetime.fromtimestamp(epoch_seconds, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def drop_none(values: dict[str, Any]) -> dict[str, Any]:
    """Request bodies leave unset optional fields out rather than sending null."""
    return {key: value for key, value in values.items() if value is not None}
