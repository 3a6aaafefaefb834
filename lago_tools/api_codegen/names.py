"""
Deterministic identifier allocation for generated bindings.

Each generation pass (types, request functions, binding wrappers) owns its
own :class:`NamePool`. Pools are created per tag group and never shared, so
two runs in one process cannot leak collisions into each other.
"""

from __future__ import annotations

from enum import Enum
from typing import Final

from ..shared import is_plural, singularize, to_camel_case, to_pascal_case

# Leading path segment dropped before naming
API_ROOT_MARKER: Final[str] = "api"

FALLBACK_BASE_NAME: Final[str] = "root"

# Appended once when a base name is already taken in the current pool
ROLE_SUFFIXES: Final[dict[str, str]] = {
    "GET": "Detail",
    "POST": "Create",
    "PUT": "Update",
    "PATCH": "Patch",
    "DELETE": "Delete",
}


class NameKind(Enum):
    TYPE = "type"
    FUNCTION = "function"
    WRAPPER = "wrapper"


class NamePool:
    """Identifiers already handed out within one generation pass."""

    __slots__ = ("kind", "_names")

    def __init__(self, kind: NameKind) -> None:
        self.kind = kind
        self._names: dict[str, None] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self):
        return iter(self._names)

    def add(self, name: str) -> str:
        self._names[name] = None
        return name


def base_name(path: str, method: str, *, root_marker: str = API_ROOT_MARKER) -> str:
    """Derive the candidate base name of an operation from its path and verb.

    >>> base_name("/api/products/{id}/like", "POST")
    'productLike'
    >>> base_name("/api/products", "GET")
    'products'
    """
    segments = [segment for segment in path.split("/") if segment]
    if segments and segments[0] == root_marker:
        segments = segments[1:]
    segments = [s for s in segments if not (s.startswith("{") and s.endswith("}"))]
    if not segments:
        return FALLBACK_BASE_NAME

    if len(segments) > 1 and is_plural(segments[0]):
        segments[0] = singularize(segments[0])

    name = to_camel_case(segments[0]) + "".join(to_pascal_case(s) for s in segments[1:])
    if method.upper() != "GET" and is_plural(name):
        name = singularize(name)
    return name or FALLBACK_BASE_NAME


def allocate(pool: NamePool, path: str, method: str, *, root_marker: str = API_ROOT_MARKER) -> str:
    """Allocate a collision-free camelCase name for an operation in ``pool``.

    A taken base name gets the verb's role suffix on its singular form; a
    taken suffixed name additionally gets the first free numeric counter.
    """
    candidate = base_name(path, method, root_marker=root_marker)
    if candidate in pool:
        candidate = singularize(candidate) + ROLE_SUFFIXES.get(method.upper(), to_pascal_case(method.lower()))
        if candidate in pool:
            stem, counter = candidate, 1
            while f"{stem}{counter}" in pool:
                counter += 1
            candidate = f"{stem}{counter}"
    return pool.add(candidate)


def type_name(allocated: str, suffix: str) -> str:
    """Name of a generated type: ``PathParams``, ``QueryParams``, ``DTO`` or ``Response``."""
    return f"{to_pascal_case(allocated)}{suffix}"


def wrapper_name(allocated: str) -> str:
    return f"use{to_pascal_case(allocated)}"
