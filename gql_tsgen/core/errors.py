"""Exceptions raised while loading documents and building declarations."""

from typing import Any


class CodegenError(Exception):
    """Base class for all gql-tsgen errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UnsupportedOperationKind(CodegenError):
    """The model contains an operation kind other than query, mutation or subscription."""

    def __init__(self, kind: str, operation: str | None = None):
        self.kind = kind
        self.operation = operation
        where = f" in operation {operation!r}" if operation else ""
        super().__init__(f'Unsupported operation type "{kind}"{where}')


class UnresolvedNamedType(CodegenError):
    """A composite type reached declaration building without any usable name."""

    def __init__(self, type_name: str, property_name: str):
        self.type_name = type_name
        self.property_name = property_name
        super().__init__(
            f"Cannot resolve a declaration name for composite type {type_name!r} "
            f"(property {property_name!r})"
        )


class MalformedSelection(CodegenError):
    """A composite field selects no fields, inline fragments or fragment spreads."""

    def __init__(self, property_name: str, type_name: str):
        self.property_name = property_name
        self.type_name = type_name
        super().__init__(
            f"Composite property {property_name!r} of type {type_name!r} has an empty selection"
        )


class SchemaLoadError(CodegenError):
    """The schema could not be read or built."""


class DocumentValidationError(CodegenError):
    """Query documents failed validation against the schema."""

    def __init__(self, message: str, errors: list[Any]):
        self.errors = errors
        super().__init__(message)


class SchemaFetchError(CodegenError):
    """Fetching a schema from a GraphQL endpoint failed."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        self.errors = errors or []
        super().__init__(message)


class ConfigError(CodegenError):
    """The configuration file is missing or invalid."""
