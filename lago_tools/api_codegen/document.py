"""
Description document model.

Raw OpenAPI/Swagger mappings are converted once into frozen dataclasses so
the rest of the generator matches on node classes instead of probing
``type`` strings.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Final, Mapping, Union

from ..shared import SchemaValidationError

# HTTP methods the generator emits bindings for, in emission order
HTTP_METHODS: Final[tuple[str, ...]] = ("get", "post", "put", "patch", "delete")

# Methods whose request functions send a body
BODY_METHODS: Final[frozenset[str]] = frozenset({"POST", "PUT", "PATCH"})

SUCCESS_STATUSES: Final[tuple[str, ...]] = ("200", "201", "204")

JSON_MEDIA_TYPE: Final[str] = "application/json"
FORM_MEDIA_TYPE: Final[str] = "multipart/form-data"

_REF_PREFIXES: Final[tuple[str, ...]] = ("#/components/schemas/", "#/definitions/")


@dataclass(frozen=True, slots=True)
class Primitive:
    """A scalar schema (``string``, ``integer``, ``number``, ``boolean``, bare ``object``)."""

    type_name: str


@dataclass(frozen=True, slots=True)
class ArrayNode:
    items: SchemaNode | None


@dataclass(frozen=True, slots=True)
class Reference:
    """A ``$ref`` to a named schema, stored by name only."""

    name: str


@dataclass(frozen=True, slots=True)
class ObjectNode:
    """An object schema with at least one declared property."""

    properties: tuple[tuple[str, SchemaNode], ...]
    required: frozenset[str] = frozenset()

    def is_required(self, name: str) -> bool:
        return name in self.required


@dataclass(frozen=True, slots=True)
class EnumNode:
    values: tuple[Any, ...]

    @property
    def signature(self) -> str:
        """Ordered value list as JSON; reordered values give a different signature."""
        return json.dumps(list(self.values), default=str)

    @property
    def declarable(self) -> bool:
        """True if every value can initialize a TypeScript enum member."""
        return all(
            isinstance(value, str) or (isinstance(value, (int, float)) and not isinstance(value, bool))
            for value in self.values
        )


@dataclass(frozen=True, slots=True)
class UnknownNode:
    """A schema shape the generator does not recognize; resolves to ``any``."""

    raw_type: str | None = None


SchemaNode = Union[Primitive, ArrayNode, Reference, ObjectNode, EnumNode, UnknownNode]


@dataclass(frozen=True, slots=True)
class Parameter:
    name: str
    location: str
    schema: SchemaNode
    required: bool = False


@dataclass(frozen=True, slots=True)
class Operation:
    """One (path, method) entry of the description document."""

    path: str
    method: str
    parameters: tuple[Parameter, ...] = ()
    request_body: SchemaNode | None = None
    form_data: bool = False
    response: SchemaNode | None = None
    tags: tuple[str, ...] = ()
    summary: str = ""

    @property
    def tag(self) -> str:
        """Functional domain tag used to group output files."""
        return self.tags[0] if self.tags else "Default"

    @property
    def owner(self) -> str | None:
        """Owning target project tag, if the operation declares one."""
        return self.tags[1] if len(self.tags) > 1 else None

    @property
    def path_params(self) -> tuple[Parameter, ...]:
        """Path parameters in the order their placeholders appear in the path."""
        declared = {p.name: p for p in self.parameters if p.location == "path"}
        result: list[Parameter] = []
        for name in path_placeholders(self.path):
            param = declared.get(name, Parameter(name=name, location="path", schema=Primitive("string")))
            result.append(Parameter(name=name, location="path", schema=param.schema, required=True))
        return tuple(result)

    @property
    def query_params(self) -> tuple[Parameter, ...]:
        return tuple(p for p in self.parameters if p.location == "query")

    @property
    def sends_body(self) -> bool:
        return self.method in BODY_METHODS and self.request_body is not None


@dataclass(frozen=True, slots=True)
class DescriptionDocument:
    schemas: Mapping[str, SchemaNode] = field(default_factory=dict)
    operations: tuple[Operation, ...] = ()


def path_placeholders(path: str) -> list[str]:
    """Return the ``{name}`` placeholders of a path, in order."""
    return [
        segment[1:-1]
        for segment in path.split("/")
        if segment.startswith("{") and segment.endswith("}")
    ]


def parse_schema(raw: Any) -> SchemaNode:
    """Convert a raw schema mapping into a SchemaNode."""
    if not isinstance(raw, dict):
        return UnknownNode()

    ref = raw.get("$ref")
    if isinstance(ref, str):
        for prefix in _REF_PREFIXES:
            if ref.startswith(prefix):
                return Reference(ref[len(prefix):])
        return Reference(ref.rsplit("/", 1)[-1])

    if "enum" in raw and isinstance(raw["enum"], list):
        return EnumNode(tuple(raw["enum"]))

    schema_type = raw.get("type")
    if schema_type == "array":
        items = raw.get("items")
        return ArrayNode(parse_schema(items) if items is not None else None)

    properties = raw.get("properties")
    if (schema_type == "object" or schema_type is None) and isinstance(properties, dict) and properties:
        required = raw.get("required") or []
        return ObjectNode(
            properties=tuple((str(name), parse_schema(prop)) for name, prop in properties.items()),
            required=frozenset(str(name) for name in required),
        )

    if isinstance(schema_type, str):
        return Primitive(schema_type)
    return UnknownNode(None if schema_type is None else str(schema_type))


def _parse_parameter(raw: Any, where: str) -> Parameter | None:
    if not isinstance(raw, dict):
        raise SchemaValidationError("parameter must be a mapping", where)
    location = raw.get("in")
    if location not in ("path", "query"):
        return None
    name = raw.get("name")
    if not name:
        raise SchemaValidationError("parameter is missing 'name'", where)
    # Swagger 2 keeps the type on the parameter itself
    raw_schema = raw.get("schema") or {
        key: raw[key] for key in ("type", "items", "enum") if key in raw
    } or {"type": "string"}
    return Parameter(
        name=str(name),
        location=location,
        schema=parse_schema(raw_schema),
        required=bool(raw.get("required", location == "path")),
    )


def _content_schema(content: Any, media_type: str) -> SchemaNode | None:
    if not isinstance(content, dict):
        return None
    media = content.get(media_type)
    if not isinstance(media, dict) or "schema" not in media:
        return None
    return parse_schema(media["schema"])


def _parse_request_body(raw: Any) -> tuple[SchemaNode | None, bool]:
    if not isinstance(raw, dict):
        return None, False
    content = raw.get("content")
    json_schema = _content_schema(content, JSON_MEDIA_TYPE)
    if json_schema is not None:
        return json_schema, False
    form_schema = _content_schema(content, FORM_MEDIA_TYPE)
    if form_schema is not None:
        return form_schema, True
    return None, False


def _parse_response(raw: Any) -> SchemaNode | None:
    if not isinstance(raw, dict):
        return None
    for status in SUCCESS_STATUSES:
        response = raw.get(status)
        if not isinstance(response, dict):
            continue
        schema = _content_schema(response.get("content"), JSON_MEDIA_TYPE)
        if schema is not None:
            return schema
    return None


def parse_document(raw: Mapping[str, Any], source: str | None = None) -> DescriptionDocument:
    """Build a DescriptionDocument from a parsed OpenAPI/Swagger mapping.

    Operations keep document order: paths as listed, then methods in the
    order they appear under each path.

    Raises:
        SchemaValidationError: If ``paths`` or a schema table is malformed.
    """
    components = raw.get("components") or {}
    raw_schemas = components.get("schemas") if isinstance(components, dict) else None
    if raw_schemas is None:
        raw_schemas = raw.get("definitions") or {}
    if not isinstance(raw_schemas, dict):
        raise SchemaValidationError("schemas must be a mapping", source, field="components.schemas")

    schemas = {str(name): parse_schema(schema) for name, schema in raw_schemas.items()}

    paths = raw.get("paths") or {}
    if not isinstance(paths, dict):
        raise SchemaValidationError("paths must be a mapping", source, field="paths")

    operations: list[Operation] = []
    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue
        shared_params = path_item.get("parameters") or []
        for method, details in path_item.items():
            if method not in HTTP_METHODS or not isinstance(details, dict):
                continue
            where = f"{method.upper()} {path}"
            parameters = [
                _parse_parameter(p, where)
                for p in list(shared_params) + list(details.get("parameters") or [])
            ]
            body, form_data = _parse_request_body(details.get("requestBody"))
            operations.append(Operation(
                path=str(path),
                method=method.upper(),
                parameters=tuple(p for p in parameters if p is not None),
                request_body=body,
                form_data=form_data,
                response=_parse_response(details.get("responses")),
                tags=tuple(str(tag) for tag in details.get("tags") or ()),
                summary=str(details.get("summary") or "").strip(),
            ))

    return DescriptionDocument(schemas=schemas, operations=tuple(operations))
