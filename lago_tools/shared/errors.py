"""Custom exceptions for build tools."""

from __future__ import annotations


class SchemaError(Exception):
    """Base exception for description-document and generator errors."""

    def __init__(self, message: str, schema_path: str | None = None) -> None:
        self.schema_path = schema_path
        full_message = f"{message}" if not schema_path else f"[{schema_path}] {message}"
        super().__init__(full_message)


class SchemaValidationError(SchemaError):
    """Raised when the description document is structurally invalid."""

    def __init__(
        self,
        message: str,
        schema_path: str | None = None,
        field: str | None = None,
    ) -> None:
        self.field = field
        if field:
            message = f"Field '{field}': {message}"
        super().__init__(message, schema_path)


class DocumentNotFoundError(SchemaError):
    """Raised when the description document does not exist."""

    def __init__(self, schema_path: str) -> None:
        super().__init__(
            "API description document not found; start the server once to export it",
            schema_path,
        )


class ConfigurationError(SchemaError):
    """Raised for unknown or incomplete target-project configuration."""

    def __init__(
        self,
        message: str,
        project: str | None = None,
        schema_path: str | None = None,
    ) -> None:
        self.project = project
        if project is not None:
            message = f"Project '{project}': {message}"
        super().__init__(message, schema_path)
