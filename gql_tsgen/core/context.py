"""Immutable context threaded through every declaration-building call."""

from dataclasses import dataclass, field

from .ir import NamedTypeResolver, NameResolver
from .scalars import ScalarRegistry


@dataclass(frozen=True)
class GenerationContext:
    """Name resolution plus scalar mapping for one generation pass."""
    name_resolver: NameResolver = field(default_factory=NamedTypeResolver)
    scalars: ScalarRegistry = field(default_factory=ScalarRegistry)

    def with_resolver(self, name_resolver: NameResolver) -> "GenerationContext":
        return GenerationContext(name_resolver=name_resolver, scalars=self.scalars)
