"""API Code Generator - Generates typed TypeScript bindings from an OpenAPI document."""

from .document import DescriptionDocument, Operation, parse_document
from .emitter import GeneratorContext, OutputUnit, generate
from .enums import EnumTable, build_enum_table
from .names import NameKind, NamePool, allocate, base_name
from .projects import PROJECTS, ProjectConfig, get_project, partition
from .resolver import resolve

__all__ = [
    "DescriptionDocument",
    "Operation",
    "parse_document",
    "GeneratorContext",
    "OutputUnit",
    "generate",
    "EnumTable",
    "build_enum_table",
    "NameKind",
    "NamePool",
    "allocate",
    "base_name",
    "PROJECTS",
    "ProjectConfig",
    "get_project",
    "partition",
    "resolve",
]
