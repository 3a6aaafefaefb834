"""Schema node -> TypeScript type expression resolution."""

from __future__ import annotations

import json
from typing import Any, Final

from ..shared import sanitize_field_name
from .document import (
    ArrayNode,
    EnumNode,
    ObjectNode,
    Primitive,
    Reference,
    SchemaNode,
    UnknownNode,
)
from .enums import EnumTable

ANY_TYPE: Final[str] = "any"

# Namespace tag modules import the shared type module under
TYPES_NAMESPACE: Final[str] = "Types"

PRIMITIVE_TYPES: Final[dict[str, str]] = {
    "string": "string",
    "integer": "number",
    "number": "number",
    "boolean": "boolean",
    "object": "any",
}

PRIMITIVE_VALIDATORS: Final[dict[str, str]] = {
    "string": "IsString",
    "integer": "IsNumber",
    "number": "IsNumber",
    "boolean": "IsBoolean",
    "object": "IsObject",
}


def qualify(name: str, namespace: str | None) -> str:
    return f"{namespace}.{name}" if namespace else name


def literal(value: Any) -> str:
    """Render an enum value as a TypeScript literal."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return json.dumps(value)
    if value is None:
        return "null"
    escaped = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def literal_union(values: tuple) -> str:
    return " | ".join(literal(v) for v in values) or ANY_TYPE


def resolve(
    node: SchemaNode | None,
    enum_table: EnumTable,
    namespace: str | None = TYPES_NAMESPACE,
) -> str:
    """Resolve a schema node to a TypeScript type expression.

    References and unified enums are qualified with ``namespace`` (pass
    ``None`` inside the shared type module itself). Enums missing from the
    table fall back to an inline union of literals. Missing or unrecognized
    nodes degrade to ``any``.
    """
    if node is None or isinstance(node, UnknownNode):
        return ANY_TYPE
    if isinstance(node, Reference):
        return qualify(node.name, namespace)
    if isinstance(node, ArrayNode):
        return f"{_wrap(resolve(node.items, enum_table, namespace))}[]"
    if isinstance(node, EnumNode):
        name = enum_table.lookup(node)
        return qualify(name, namespace) if name else literal_union(node.values)
    if isinstance(node, Primitive):
        return PRIMITIVE_TYPES.get(node.type_name, ANY_TYPE)
    if isinstance(node, ObjectNode):
        # Inline objects become named classes in the emitter; this structural
        # form is only reached through nested arrays the emitter does not name.
        fields = "; ".join(
            f"{sanitize_field_name(name)}{'' if node.is_required(name) else '?'}: "
            f"{resolve(prop, enum_table, namespace)}"
            for name, prop in node.properties
        )
        return f"{{ {fields} }}"
    return ANY_TYPE


def _wrap(expression: str) -> str:
    return f"({expression})" if " | " in expression else expression


def validators(
    node: SchemaNode | None,
    enum_table: EnumTable,
    namespace: str | None = TYPES_NAMESPACE,
) -> list[str]:
    """Return the class-validator decorators for a field of type ``node``."""
    if isinstance(node, Reference):
        return ["@ValidateNested()"]
    if isinstance(node, ArrayNode):
        return ["@IsArray()"]
    if isinstance(node, EnumNode):
        entry = enum_table.entry(node)
        # Literal-type aliases have no runtime object to validate against
        if entry and entry.declarable:
            return [f"@IsEnum({qualify(entry.name, namespace)})"]
        return [f"@IsEnum([{', '.join(literal(v) for v in node.values)}])"]
    if isinstance(node, ObjectNode):
        return ["@ValidateNested()"]
    if isinstance(node, Primitive):
        return [f"@{PRIMITIVE_VALIDATORS.get(node.type_name, 'IsObject')}()"]
    return ["@IsObject()"]
