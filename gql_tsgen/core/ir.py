"""Intermediate Representation (IR) for resolved GraphQL documents.

This module defines the descriptor dataclasses the declaration compiler
consumes (operations, fragments, fields, enums, input objects) and the
declaration nodes it produces. Descriptors are immutable; declaration nodes
are created fresh for every generation pass.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, Union


class TypeKind(Enum):
    """Closed set of GraphQL type kinds a TypeRef can carry."""
    SCALAR = "scalar"
    ENUM = "enum"
    OBJECT = "object"
    INTERFACE = "interface"
    UNION = "union"
    INPUT_OBJECT = "input_object"
    LIST = "list"
    NON_NULL = "non_null"


COMPOSITE_KINDS = frozenset({TypeKind.OBJECT, TypeKind.INTERFACE, TypeKind.UNION})
WRAPPER_KINDS = frozenset({TypeKind.LIST, TypeKind.NON_NULL})


class OperationKind(str, Enum):
    """Operation kinds the compiler knows how to name."""
    QUERY = "query"
    MUTATION = "mutation"
    SUBSCRIPTION = "subscription"


@dataclass(frozen=True)
class TypeRef:
    """A named type optionally wrapped by List and/or NonNull modifiers.

    Named kinds carry ``name``; LIST and NON_NULL carry ``of_type``.
    """
    kind: TypeKind
    name: str | None = None
    of_type: "TypeRef | None" = None

    def __post_init__(self):
        if self.kind in WRAPPER_KINDS:
            if self.of_type is None:
                raise ValueError(f"{self.kind.name} TypeRef requires of_type")
        elif not self.name:
            raise ValueError(f"{self.kind.name} TypeRef requires a name")

    @classmethod
    def named(cls, kind: TypeKind, name: str) -> "TypeRef":
        return cls(kind=kind, name=name)

    @classmethod
    def list_of(cls, of_type: "TypeRef") -> "TypeRef":
        return cls(kind=TypeKind.LIST, of_type=of_type)

    @classmethod
    def non_null(cls, of_type: "TypeRef") -> "TypeRef":
        return cls(kind=TypeKind.NON_NULL, of_type=of_type)

    @property
    def named_type(self) -> "TypeRef":
        """Return the innermost named type, stripping every modifier."""
        current = self
        while current.of_type is not None:
            current = current.of_type
        return current

    @property
    def is_non_null(self) -> bool:
        return self.kind is TypeKind.NON_NULL

    @property
    def nullable_type(self) -> "TypeRef":
        """Return this type with an outer NonNull stripped."""
        return self.of_type if self.is_non_null else self

    @property
    def is_list(self) -> bool:
        """True if the type, after stripping an outer NonNull, is a List."""
        return self.nullable_type.kind is TypeKind.LIST

    @property
    def is_composite(self) -> bool:
        return self.named_type.kind in COMPOSITE_KINDS

    def __str__(self) -> str:
        if self.kind is TypeKind.NON_NULL:
            return f"{self.of_type}!"
        if self.kind is TypeKind.LIST:
            return f"[{self.of_type}]"
        return self.name


@dataclass(frozen=True)
class InlineFragment:
    """A type-conditional sub-selection embedded in a selection set."""
    type_condition: str
    fields: tuple["FieldDescriptor", ...] = ()


@dataclass(frozen=True)
class FieldDescriptor:
    """One selected field (or variable, or input field) in a selection set."""
    name: str
    type: TypeRef
    response_name: str = ""
    fields: tuple["FieldDescriptor", ...] = ()
    fragment_spreads: tuple[str, ...] = ()
    inline_fragments: tuple[InlineFragment, ...] = ()
    description: str | None = None


@dataclass(frozen=True)
class Property:
    """Declaration-oriented view of a FieldDescriptor."""
    property_name: str
    type_name: str
    bare_type_name: str = ""
    is_composite: bool = False
    is_array: bool = False
    is_nullable: bool = True
    fields: tuple[FieldDescriptor, ...] = ()
    fragment_spreads: tuple[str, ...] = ()
    inline_fragments: tuple[InlineFragment, ...] = ()
    description: str | None = None

    @property
    def has_selection(self) -> bool:
        """True if the property carries nested fields or inline fragments."""
        return bool(self.fields or self.inline_fragments)


@dataclass(frozen=True)
class OperationDescriptor:
    """A named query, mutation or subscription.

    ``kind`` is a plain string so that unknown kinds reach the namer and
    are reported there.
    """
    name: str
    kind: str
    variables: tuple[FieldDescriptor, ...] = ()
    fields: tuple[FieldDescriptor, ...] = ()
    fragment_spreads: tuple[str, ...] = ()
    fragments_referenced: tuple[str, ...] = ()
    source: str = ""


@dataclass(frozen=True)
class FragmentDescriptor:
    """A named fragment bound to a type condition."""
    name: str
    type_condition: str
    fields: tuple[FieldDescriptor, ...] = ()
    inline_fragments: tuple[InlineFragment, ...] = ()
    fragment_spreads: tuple[str, ...] = ()
    source: str = ""


@dataclass(frozen=True)
class EnumValueDescriptor:
    """A single value in a GraphQL enum."""
    value: str
    description: str | None = None


@dataclass(frozen=True)
class EnumTypeDescriptor:
    """A GraphQL enum type with values in declared order."""
    name: str
    values: tuple[EnumValueDescriptor, ...] = ()
    description: str | None = None


@dataclass(frozen=True)
class InputObjectDescriptor:
    """A GraphQL input object type."""
    name: str
    fields: tuple[FieldDescriptor, ...] = ()
    description: str | None = None


class NameResolver(Protocol):
    """Maps a composite TypeRef to its declared name, if it has one."""

    def declared_name(self, type_ref: TypeRef) -> str | None:
        ...


class NamedTypeResolver:
    """Resolver that names object and interface types after themselves.

    Unions are treated as anonymous positions so callers fall back to a
    name derived from the property.
    """

    def declared_name(self, type_ref: TypeRef) -> str | None:
        named = type_ref.named_type
        if named.kind in (TypeKind.OBJECT, TypeKind.INTERFACE):
            return named.name
        return None


@dataclass
class CompilationModel:
    """Complete resolved input for one generation pass."""
    types_used: list[EnumTypeDescriptor | InputObjectDescriptor] = field(default_factory=list)
    operations: list[OperationDescriptor] = field(default_factory=list)
    fragments: list[FragmentDescriptor] = field(default_factory=list)
    name_resolver: NameResolver = field(default_factory=NamedTypeResolver)


# Declaration nodes


@dataclass
class EnumValue:
    value: str
    description: str | None = None


@dataclass
class EnumDeclaration:
    name: str
    values: list[EnumValue] = field(default_factory=list)
    description: str | None = None


@dataclass
class TypeReference:
    """Leaf type reference (scalar, enum, input object, or a named composite)."""
    name: str


@dataclass
class PropertyDeclaration:
    name: str
    type: Union[TypeReference, "InterfaceDeclaration"]
    is_array: bool = False
    is_nullable: bool = True
    description: str | None = None

    @property
    def is_nested(self) -> bool:
        return isinstance(self.type, InterfaceDeclaration)


@dataclass
class InterfaceDeclaration:
    name: str
    extends: list[str] = field(default_factory=list)
    properties: list[PropertyDeclaration] = field(default_factory=list)
    description: str | None = None


Declaration = EnumDeclaration | InterfaceDeclaration


@dataclass
class OperationFacts:
    """Facts about one operation that the emitter needs for registration."""
    name: str
    kind: str
    declaration_name: str
    has_variables: bool
    variables_declaration_name: str | None = None
    source: str = ""
    fragments_referenced: tuple[str, ...] = ()


@dataclass
class OperationUnit:
    facts: OperationFacts
    declarations: list[InterfaceDeclaration] = field(default_factory=list)


@dataclass
class GenerationFailure:
    """A declaration unit that was aborted, with the error that stopped it."""
    unit: str
    error: Exception


@dataclass
class GenerationResult:
    """Ordered output of one generation pass."""
    types: list[Declaration] = field(default_factory=list)
    operations: list[OperationUnit] = field(default_factory=list)
    fragments: list[InterfaceDeclaration] = field(default_factory=list)
    failures: list[GenerationFailure] = field(default_factory=list)

    @property
    def declarations(self) -> list[Declaration]:
        """Return every declaration in emission order."""
        result: list[Declaration] = list(self.types)
        for unit in self.operations:
            result.extend(unit.declarations)
        result.extend(self.fragments)
        return result

    @property
    def ok(self) -> bool:
        return not self.failures
