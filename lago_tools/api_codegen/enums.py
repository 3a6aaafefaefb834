"""Enum unification across named schemas."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from ..shared import to_pascal_case
from .document import EnumNode, ObjectNode, SchemaNode


@dataclass(frozen=True, slots=True)
class UnifiedEnum:
    name: str
    values: tuple

    @property
    def declarable(self) -> bool:
        return EnumNode(self.values).declarable


class EnumTable:
    """Read-only signature -> generated enum table.

    Built once per run by :func:`build_enum_table`; lookups never mutate it.
    """

    __slots__ = ("_by_signature",)

    def __init__(self, entries: Mapping[str, UnifiedEnum] | None = None) -> None:
        self._by_signature = MappingProxyType(dict(entries or {}))

    def entry(self, node: EnumNode) -> UnifiedEnum | None:
        return self._by_signature.get(node.signature)

    def lookup(self, node: EnumNode) -> str | None:
        """Return the generated name for ``node``, or None if it was never unified."""
        entry = self.entry(node)
        return entry.name if entry else None

    def __iter__(self):
        return iter(self._by_signature.values())

    def __len__(self) -> int:
        return len(self._by_signature)

    def __contains__(self, signature: object) -> bool:
        return signature in self._by_signature


def build_enum_table(schemas: Mapping[str, SchemaNode]) -> EnumTable:
    """Collapse identical enum properties of named schemas into one type each.

    Only direct properties of named object schemas take part. The first
    declaration in document order names the type
    (``{Schema}{Property}``); later ones with the same ordered values reuse it.
    """
    entries: dict[str, UnifiedEnum] = {}
    for schema_name, schema in schemas.items():
        if not isinstance(schema, ObjectNode):
            continue
        for prop_name, prop in schema.properties:
            if not isinstance(prop, EnumNode):
                continue
            if prop.signature in entries:
                continue
            entries[prop.signature] = UnifiedEnum(
                name=f"{schema_name}{to_pascal_case(prop_name)}",
                values=prop.values,
            )
    return EnumTable(entries)
