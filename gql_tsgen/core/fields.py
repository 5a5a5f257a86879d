"""Field -> Property mapping."""

from .context import GenerationContext
from .errors import UnresolvedNamedType
from .ir import FieldDescriptor, Property, TypeKind, TypeRef
from .naming import bare_element_name, input_type_declaration_name


def leaf_type_name(context: GenerationContext, type_ref: TypeRef) -> str:
    """Return the declared type name for a scalar, enum or input object."""
    named = type_ref.named_type
    if named.kind is TypeKind.SCALAR:
        return context.scalars.resolve(named.name)
    if named.kind is TypeKind.ENUM:
        return named.name
    if named.kind is TypeKind.INPUT_OBJECT:
        return input_type_declaration_name(named.name)
    raise ValueError(f"{named.name} ({named.kind.name}) is not a leaf type")


def map_field(
    context: GenerationContext,
    field: FieldDescriptor,
    force_nullable: bool = False,
) -> Property:
    """Convert one field descriptor into a Property.

    Args:
        context: Name resolver and scalar table for this pass
        field: The selected field, variable or input field
        force_nullable: Treat the field as possibly absent regardless of a
            NonNull wrapper (fields from inline fragments, operation roots)
    """
    property_name = field.name or field.response_name
    type_ref = field.type
    is_array = type_ref.is_list
    is_nullable = force_nullable or not type_ref.is_non_null

    if not type_ref.is_composite:
        return Property(
            property_name=property_name,
            type_name=leaf_type_name(context, type_ref),
            is_composite=False,
            is_array=is_array,
            is_nullable=is_nullable,
            description=field.description,
        )

    bare_type_name = bare_element_name(property_name) if property_name else ""
    type_name = context.name_resolver.declared_name(type_ref) or bare_type_name
    if not type_name:
        raise UnresolvedNamedType(type_ref.named_type.name, property_name)

    return Property(
        property_name=property_name,
        type_name=type_name,
        bare_type_name=bare_type_name,
        is_composite=True,
        is_array=is_array,
        is_nullable=is_nullable,
        fields=field.fields,
        fragment_spreads=field.fragment_spreads,
        inline_fragments=field.inline_fragments,
        description=field.description,
    )
