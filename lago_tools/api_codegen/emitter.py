"""
Code emitter - turns the partitioned operation set into TypeScript modules.

For one target project this produces:
- a shared ``types`` module (unified enums + every named schema)
- one module per tag group (types, request functions, React Query hooks)
- an ``index`` module re-exporting all of the above

Each tag group runs three naming passes over its operations with a fresh
:class:`NamePool` each; the passes allocate identically, so a function and
its hook and parameter types always agree on the same base name.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final, Iterable, Mapping

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..shared import (
    SchemaValidationError,
    property_access,
    sanitize_field_name,
    to_constant_case,
    to_pascal_case,
    to_words,
)
from .document import (
    ArrayNode,
    DescriptionDocument,
    EnumNode,
    ObjectNode,
    Operation,
    Parameter,
    SchemaNode,
)
from .enums import EnumTable, build_enum_table
from .names import NameKind, NamePool, allocate, type_name, wrapper_name
from .projects import ProjectConfig, group_by_tag, partition
from .resolver import TYPES_NAMESPACE, literal, literal_union, resolve, validators

TEMPLATE_DIR: Final[Path] = Path(__file__).parent / "templates"

TYPES_MODULE: Final[str] = "types"
INDEX_MODULE: Final[str] = "index"
MODULE_SUFFIX: Final[str] = ".ts"

GENERATED_BANNER: Final[str] = (
    "// Auto-generated by lago_tools/api_codegen. Do not edit manually."
)

RUNTIME_PACKAGE: Final[str] = "@lago/common"
QUERY_PACKAGE: Final[str] = "@tanstack/react-query"
VALIDATOR_PACKAGE: Final[str] = "class-validator"

_PLACEHOLDER_RE: Final[re.Pattern[str]] = re.compile(r"\{([^}]+)\}")


@dataclass(frozen=True, slots=True)
class FieldDecl:
    name: str
    type_expr: str
    optional: bool
    validators: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ClassDecl:
    name: str
    fields: tuple[FieldDecl, ...]


@dataclass(frozen=True, slots=True)
class EnumMember:
    key: str
    value: str


@dataclass(frozen=True, slots=True)
class EnumDecl:
    name: str
    members: tuple[EnumMember, ...]


@dataclass(frozen=True, slots=True)
class TypeAliasDecl:
    name: str
    type_expr: str


@dataclass(frozen=True, slots=True)
class RequestFunction:
    name: str
    summary: str
    method: str
    url: str
    params: tuple[str, ...]
    response_type: str
    body: str | None = None
    json_body: bool = False
    forwards_query: bool = False


@dataclass(frozen=True, slots=True)
class BindingWrapper:
    name: str
    summary: str
    is_query: bool
    params: tuple[str, ...]
    call: str
    query_key: tuple[str, ...] = ()
    mutation_arg: str = ""
    invalidate: tuple[str, ...] = ()


@dataclass(slots=True)
class OutputUnit:
    """One emitted module and the operations it was derived from."""

    module_name: str
    kind: str = "tag"
    declarations: list[ClassDecl] = field(default_factory=list)
    enums: list[EnumDecl] = field(default_factory=list)
    aliases: list[TypeAliasDecl] = field(default_factory=list)
    functions: list[RequestFunction] = field(default_factory=list)
    wrappers: list[BindingWrapper] = field(default_factory=list)
    operations: list[Operation] = field(default_factory=list)
    exports: list[str] = field(default_factory=list)
    content: str = ""

    @property
    def filename(self) -> str:
        return f"{self.module_name}{MODULE_SUFFIX}"


@dataclass
class GeneratorContext:
    """Context for code generation with cached resources."""

    template_env: Environment = field(init=False)

    def __post_init__(self) -> None:
        self.template_env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            auto_reload=False,
        )
        self.template_env.globals.update(
            banner=GENERATED_BANNER,
            types_module=TYPES_MODULE,
            runtime_package=RUNTIME_PACKAGE,
            query_package=QUERY_PACKAGE,
            validator_package=VALIDATOR_PACKAGE,
        )
        # Pre-compile templates
        self._types_template = self.template_env.get_template("types_module.ts.jinja")
        self._tag_template = self.template_env.get_template("tag_module.ts.jinja")
        self._index_template = self.template_env.get_template("index_module.ts.jinja")

    @property
    def types_template(self):
        return self._types_template

    @property
    def tag_template(self):
        return self._tag_template

    @property
    def index_template(self):
        return self._index_template


class TypeCollector:
    """Accumulates class declarations for one module.

    Inline object schemas become named classes; nested ones are named
    ``{Parent}{Property}`` (``...Item`` for array elements) and numbered if
    that name is already declared in the module.
    """

    def __init__(
        self,
        enum_table: EnumTable,
        namespace: str | None,
        reserved: Iterable[str] = (),
    ) -> None:
        self.enum_table = enum_table
        self.namespace = namespace
        self.declarations: list[ClassDecl] = []
        self._taken: set[str] = set(reserved)

    def declare(self, name: str, node: ObjectNode, *, exact: bool = False) -> str:
        """Declare a class for ``node`` and return the name it was given."""
        if not exact:
            name = self._unique(name)
        self._taken.add(name)
        slot = len(self.declarations)
        self.declarations.append(ClassDecl(name, ()))
        fields = tuple(
            self._field(name, prop_name, prop, optional=not node.is_required(prop_name))
            for prop_name, prop in node.properties
        )
        self.declarations[slot] = ClassDecl(name, fields)
        return name

    def declare_params(self, name: str, params: Iterable[Parameter]) -> str:
        self._taken.add(name)
        slot = len(self.declarations)
        self.declarations.append(ClassDecl(name, ()))
        fields = tuple(
            self._field(name, p.name, p.schema, optional=not p.required) for p in params
        )
        self.declarations[slot] = ClassDecl(name, fields)
        return name

    def inline_type(self, node: SchemaNode | None, hint: str, *, exact: bool = False) -> str:
        """Resolve ``node``, declaring classes for any inline objects it contains."""
        if isinstance(node, ObjectNode):
            return self.declare(hint, node, exact=exact)
        if isinstance(node, ArrayNode) and _contains_object(node):
            return f"{_wrap(self.inline_type(node.items, hint + 'Item', exact=exact))}[]"
        return resolve(node, self.enum_table, self.namespace)

    def _field(self, owner: str, prop_name: str, node: SchemaNode, *, optional: bool) -> FieldDecl:
        type_expr = self.inline_type(node, f"{owner}{to_pascal_case(prop_name)}")
        return FieldDecl(
            name=sanitize_field_name(prop_name),
            type_expr=type_expr,
            optional=optional,
            validators=tuple(validators(node, self.enum_table, self.namespace)),
        )

    def _unique(self, name: str) -> str:
        if name not in self._taken:
            return name
        counter = 1
        while f"{name}{counter}" in self._taken:
            counter += 1
        return f"{name}{counter}"


def _contains_object(node: SchemaNode | None) -> bool:
    while isinstance(node, ArrayNode):
        node = node.items
    return isinstance(node, ObjectNode)


def _wrap(expression: str) -> str:
    return f"({expression})" if " | " in expression else expression


def inline_type_name(node: SchemaNode | None, hint: str, enum_table: EnumTable) -> str:
    """The type expression :meth:`TypeCollector.inline_type` gives a top-level node."""
    if isinstance(node, ObjectNode):
        return hint
    if isinstance(node, ArrayNode) and _contains_object(node):
        return f"{_wrap(inline_type_name(node.items, hint + 'Item', enum_table))}[]"
    return resolve(node, enum_table, TYPES_NAMESPACE)


def enum_members(values: tuple) -> tuple[EnumMember, ...]:
    members: list[EnumMember] = []
    seen: set[str] = set()
    for value in values:
        key = to_constant_case(str(value))
        if key in seen:
            counter = 2
            while f"{key}_{counter}" in seen:
                counter += 1
            key = f"{key}_{counter}"
        seen.add(key)
        members.append(EnumMember(key=key, value=literal(value)))
    return tuple(members)


def humanize(op: Operation, allocated: str) -> str:
    return op.summary or to_words(allocated)


def _comment_safe(text: str) -> str:
    return text.replace("*/", "*\\/")


def build_url(path: str) -> str:
    """Render the request URL, substituting ``{name}`` from ``pathParams``."""
    if not _PLACEHOLDER_RE.search(path):
        return f'"{path}"'
    url = _PLACEHOLDER_RE.sub(
        lambda m: "${" + property_access("pathParams", m.group(1)) + "}", path
    )
    return f"`{url}`"


# ---------------------------------------------------------------------------
# Tag module passes
# ---------------------------------------------------------------------------


def _types_pass(ops: list[Operation], enum_table: EnumTable) -> list[ClassDecl]:
    pool = NamePool(NameKind.TYPE)
    collector = TypeCollector(enum_table, TYPES_NAMESPACE)
    for op in ops:
        name = allocate(pool, op.path, op.method)
        if op.path_params:
            collector.declare_params(type_name(name, "PathParams"), op.path_params)
        if op.method == "GET" and op.query_params:
            collector.declare_params(type_name(name, "QueryParams"), op.query_params)
        if op.sends_body:
            collector.inline_type(op.request_body, type_name(name, "DTO"), exact=True)
        collector.inline_type(op.response, type_name(name, "Response"), exact=True)
    return collector.declarations


def _function_pass(ops: list[Operation], enum_table: EnumTable) -> list[RequestFunction]:
    pool = NamePool(NameKind.FUNCTION)
    functions: list[RequestFunction] = []
    for op in ops:
        name = allocate(pool, op.path, op.method)
        params: list[str] = []
        if op.path_params:
            params.append(f"pathParams: {type_name(name, 'PathParams')}")

        body: str | None = None
        if op.sends_body:
            params.append(f"data: {inline_type_name(op.request_body, type_name(name, 'DTO'), enum_table)}")
            body = "jsonToFormData(data)" if op.form_data else "JSON.stringify(data)"

        forwards_query = op.method == "GET" and bool(op.query_params)
        if forwards_query:
            params.append(f"queryParams?: {type_name(name, 'QueryParams')}")
        params.append("noAuthorize?: boolean")

        functions.append(RequestFunction(
            name=name,
            summary=_comment_safe(op.summary or name),
            method=op.method,
            url=build_url(op.path),
            params=tuple(params),
            response_type=inline_type_name(op.response, type_name(name, "Response"), enum_table),
            body=body,
            json_body=body is not None and not op.form_data,
            forwards_query=forwards_query,
        ))
    return functions


def _wrapper_pass(
    ops: list[Operation],
    enum_table: EnumTable,
    tag: str,
    project: ProjectConfig,
) -> list[BindingWrapper]:
    pool = NamePool(NameKind.WRAPPER)
    scope = tag.lower()
    wrappers: list[BindingWrapper] = []
    for op in ops:
        name = allocate(pool, op.path, op.method)
        response_type = inline_type_name(op.response, type_name(name, "Response"), enum_table)
        result_type = f"HTTPResponse<{response_type}>"
        params: list[str] = []
        call_args: list[str] = []
        if op.path_params:
            params.append(f"pathParams: {type_name(name, 'PathParams')}")
            call_args.append("pathParams")

        if op.method == "GET":
            key = [literal(scope), literal(humanize(op, name))]
            key.extend(property_access("pathParams", p.name) for p in op.path_params)
            if op.query_params:
                params.append(f"queryParams?: {type_name(name, 'QueryParams')}")
                call_args.append("queryParams")
                key.extend(property_access("queryParams?", p.name) for p in op.query_params)
            params.append(f"options?: Partial<UseQueryOptions<{result_type}, Error>>")
            wrappers.append(BindingWrapper(
                name=wrapper_name(name),
                summary=_comment_safe(humanize(op, name)),
                is_query=True,
                params=tuple(params),
                call=f"{name}({', '.join(call_args)})",
                query_key=tuple(key),
            ))
            continue

        variables = "void"
        mutation_arg = ""
        if op.sends_body:
            variables = inline_type_name(op.request_body, type_name(name, "DTO"), enum_table)
            mutation_arg = "data"
            call_args.append("data")
        params.append(f"options?: UseMutationOptions<{result_type}, Error, {variables}>")
        wrappers.append(BindingWrapper(
            name=wrapper_name(name),
            summary=_comment_safe(humanize(op, name)),
            is_query=False,
            params=tuple(params),
            call=f"{name}({', '.join(call_args)})",
            mutation_arg=mutation_arg,
            invalidate=(literal(scope), literal(project.name)),
        ))
    return wrappers


def module_name_for_tag(tag: str) -> str:
    """File stem of a tag module: the lowercased tag, reduced to path-safe characters."""
    stem = re.sub(r"[^a-z0-9_-]+", "", tag.lower()) or "default"
    if stem in (TYPES_MODULE, INDEX_MODULE):
        stem = f"{stem}_api"
    return stem


def build_tag_unit(
    tag: str,
    ops: list[Operation],
    enum_table: EnumTable,
    project: ProjectConfig,
) -> OutputUnit:
    """Run the type, function and wrapper passes for one tag group."""
    return OutputUnit(
        module_name=module_name_for_tag(tag),
        declarations=_types_pass(ops, enum_table),
        functions=_function_pass(ops, enum_table),
        wrappers=_wrapper_pass(ops, enum_table, tag, project),
        operations=list(ops),
    )


def _check_enum_names(schemas: Mapping[str, SchemaNode], enum_table: EnumTable) -> None:
    seen: set[str] = set()
    clashes: list[str] = []
    for entry in enum_table:
        if entry.name in seen or entry.name in schemas:
            clashes.append(entry.name)
        seen.add(entry.name)
    if clashes:
        raise SchemaValidationError(
            f"generated enum name clashes with another type: {', '.join(clashes)}",
            field="components.schemas",
        )


def _enum_or_alias(unit: OutputUnit, name: str, values: tuple) -> None:
    # TypeScript enum members only take string or numeric initializers
    if EnumNode(values).declarable:
        unit.enums.append(EnumDecl(name, enum_members(values)))
    else:
        unit.aliases.append(TypeAliasDecl(name, literal_union(values)))


def build_types_unit(schemas: Mapping[str, SchemaNode], enum_table: EnumTable) -> OutputUnit:
    """Build the shared type module: unified enums first, then named schemas.

    Raises:
        SchemaValidationError: If a unified enum name is already taken.
    """
    _check_enum_names(schemas, enum_table)
    unit = OutputUnit(module_name=TYPES_MODULE, kind="types")
    for entry in enum_table:
        _enum_or_alias(unit, entry.name, entry.values)

    reserved = [entry.name for entry in enum_table] + list(schemas)
    collector = TypeCollector(enum_table, None, reserved=reserved)
    for name, schema in schemas.items():
        if isinstance(schema, ObjectNode):
            collector.declare(name, schema, exact=True)
        elif isinstance(schema, EnumNode):
            _enum_or_alias(unit, name, schema.values)
        else:
            unit.aliases.append(TypeAliasDecl(name, collector.inline_type(schema, name)))
    unit.declarations = collector.declarations
    return unit


def build_index_unit(modules: Iterable[str]) -> OutputUnit:
    return OutputUnit(module_name=INDEX_MODULE, kind="index", exports=[TYPES_MODULE, *modules])


def render_unit(ctx: GeneratorContext, unit: OutputUnit) -> str:
    if unit.kind == "index":
        template = ctx.index_template
    elif unit.kind == "types":
        template = ctx.types_template
    else:
        template = ctx.tag_template
    unit.content = template.render(unit=unit)
    return unit.content


def generate(
    document: DescriptionDocument,
    project: ProjectConfig,
    ctx: GeneratorContext | None = None,
) -> list[OutputUnit]:
    """Generate every output unit for one target project.

    The enum table is built from the whole document before any tag group is
    processed. Units come back in write order: types, tag modules, index.
    """
    ctx = ctx or GeneratorContext()
    enum_table = build_enum_table(document.schemas)
    groups = group_by_tag(partition(document.operations, project))

    units = [build_types_unit(document.schemas, enum_table)]
    units.extend(build_tag_unit(tag, ops, enum_table, project) for tag, ops in groups.items())
    units.append(build_index_unit(unit.module_name for unit in units[1:]))

    for unit in units:
        render_unit(ctx, unit)
    return units


def summarize(units: list[OutputUnit]) -> dict[str, Any]:
    tag_units = [u for u in units if u.kind == "tag"]
    return {
        "modules": len(tag_units),
        "operations": sum(len(u.operations) for u in tag_units),
    }
