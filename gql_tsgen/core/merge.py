"""Merging of base fields with fields contributed by inline fragments."""

from collections.abc import Iterable, Sequence

from .context import GenerationContext
from .fields import map_field
from .ir import FieldDescriptor, InlineFragment, Property


def is_duplicate(first: Property, second: Property) -> bool:
    """Two properties collide when names match and both resolve to a type."""
    return (
        first.property_name == second.property_name
        and bool(first.type_name)
        and bool(second.type_name)
    )


def unique_properties(properties: Iterable[Property]) -> list[Property]:
    """Stable dedup: keep the earliest of each duplicate group, in order."""
    kept: list[Property] = []
    for prop in properties:
        if not any(is_duplicate(existing, prop) for existing in kept):
            kept.append(prop)
    return kept


def merge_fields(
    context: GenerationContext,
    base_fields: Sequence[FieldDescriptor],
    inline_fragments: Sequence[InlineFragment] = (),
) -> list[Property]:
    """Map base fields, then inline-fragment fields as optional, and dedup.

    Fields from a type-conditional branch are only present when that branch
    matches, so they are always nullable in the merged shape.
    """
    properties = [map_field(context, f, force_nullable=False) for f in base_fields]
    for fragment in inline_fragments:
        properties.extend(map_field(context, f, force_nullable=True) for f in fragment.fields)
    return unique_properties(properties)
