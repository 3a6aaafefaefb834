"""Shared utilities for build tools."""

from .schema_loader import load_schema
from .naming import (
    TS_RESERVED,
    is_plural,
    property_access,
    sanitize_field_name,
    singularize,
    to_camel_case,
    to_constant_case,
    to_pascal_case,
    to_words,
)
from .errors import (
    ConfigurationError,
    DocumentNotFoundError,
    SchemaError,
    SchemaValidationError,
)

__all__ = [
    # Document loading
    "load_schema",
    # Naming utilities
    "TS_RESERVED",
    "is_plural",
    "property_access",
    "sanitize_field_name",
    "singularize",
    "to_camel_case",
    "to_constant_case",
    "to_pascal_case",
    "to_words",
    # Errors
    "ConfigurationError",
    "DocumentNotFoundError",
    "SchemaError",
    "SchemaValidationError",
]
