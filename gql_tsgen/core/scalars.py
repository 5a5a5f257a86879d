"""Scalar type mapping for TypeScript declarations.

Maps GraphQL scalar names to TypeScript type names. The five built-in
scalars are always registered; custom scalars can be added per project.

Example usage:
    from gql_tsgen.core.scalars import ScalarRegistry

    registry = ScalarRegistry()
    registry.register("DateTime", "string")
    registry.resolve("DateTime")   # "string"
    registry.resolve("Money")      # "any"
"""

from collections.abc import Mapping

BUILTIN_SCALARS: dict[str, str] = {
    "ID": "string",
    "String": "string",
    "Int": "number",
    "Float": "number",
    "Boolean": "boolean",
}

UNKNOWN_SCALAR_TYPE = "any"


class ScalarRegistry:
    """Registry of GraphQL scalar -> TypeScript type names.

    Example:
        registry = ScalarRegistry({"JSON": "Record<string, unknown>"})
        registry.resolve("JSON")  # "Record<string, unknown>"

    Unmapped custom scalars resolve to ``any`` unless ``passthrough`` is
    set, in which case the scalar's own name is used as the type.
    """

    def __init__(self, custom: Mapping[str, str] | None = None, passthrough: bool = False):
        self._types: dict[str, str] = dict(BUILTIN_SCALARS)
        self.passthrough = passthrough
        for name, ts_type in (custom or {}).items():
            self.register(name, ts_type)

    def register(self, scalar_name: str, ts_type: str):
        """Register the TypeScript type for a scalar."""
        self._types[scalar_name] = ts_type

    def has(self, scalar_name: str) -> bool:
        """Check if a mapping is registered for a scalar."""
        return scalar_name in self._types

    def resolve(self, scalar_name: str) -> str:
        """Return the TypeScript type for a scalar."""
        if scalar_name in self._types:
            return self._types[scalar_name]
        if self.passthrough:
            return scalar_name
        return UNKNOWN_SCALAR_TYPE
