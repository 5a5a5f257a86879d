"""Tests for the declaration builder."""

import pytest

from gql_tsgen.core.declarations import DeclarationBuilder
from gql_tsgen.core.errors import MalformedSelection, UnresolvedNamedType, UnsupportedOperationKind
from gql_tsgen.core.ir import (
    CompilationModel,
    EnumDeclaration,
    EnumTypeDescriptor,
    EnumValueDescriptor,
    FieldDescriptor,
    FragmentDescriptor,
    InlineFragment,
    InputObjectDescriptor,
    InterfaceDeclaration,
    OperationDescriptor,
    Property,
    TypeKind,
    TypeRef,
    TypeReference,
)

ID = TypeRef.named(TypeKind.SCALAR, "ID")
STRING = TypeRef.named(TypeKind.SCALAR, "String")
USER = TypeRef.named(TypeKind.OBJECT, "User")


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def builder():
    return DeclarationBuilder()


@pytest.fixture
def color_enum():
    return EnumTypeDescriptor(
        name="Color",
        values=(EnumValueDescriptor("RED"), EnumValueDescriptor("GREEN")),
    )


@pytest.fixture
def get_user():
    """GetUser query spreading UserFields, without variables."""
    return OperationDescriptor(
        name="GetUser",
        kind="query",
        fields=(
            FieldDescriptor(
                name="user",
                type=TypeRef.non_null(USER),
                fields=(FieldDescriptor(name="id", type=TypeRef.non_null(ID)),),
            ),
        ),
        fragment_spreads=("UserFields",),
        fragments_referenced=("UserFields",),
        source="query GetUser { ...UserFields user { id } }",
    )


@pytest.fixture
def user_fields():
    return FragmentDescriptor(
        name="UserFields",
        type_condition="Query",
        fields=(FieldDescriptor(name="viewerId", type=ID),),
        source="fragment UserFields on Query { viewerId }",
    )


# =============================================================================
# Tests
# =============================================================================


class TestEnumDeclaration:
    """Tests for enum declarations."""

    def test_color_example(self, builder, color_enum):
        declaration = builder.build_enum_declaration(color_enum)
        assert isinstance(declaration, EnumDeclaration)
        assert declaration.name == "Color"
        assert [v.value for v in declaration.values] == ["RED", "GREEN"]

    def test_keeps_order_and_descriptions(self, builder):
        enum = EnumTypeDescriptor(
            name="Episode",
            values=(
                EnumValueDescriptor("NEWHOPE", "Released in 1977"),
                EnumValueDescriptor("EMPIRE"),
                EnumValueDescriptor("JEDI", "Released in 1983"),
            ),
            description="A film",
        )
        declaration = builder.build_enum_declaration(enum)
        assert [v.value for v in declaration.values] == ["NEWHOPE", "EMPIRE", "JEDI"]
        assert declaration.values[0].description == "Released in 1977"
        assert declaration.values[1].description is None
        assert declaration.description == "A film"


class TestInputAndVariables:
    """Tests for input object and variables declarations."""

    def test_input_object(self, builder):
        input_type = InputObjectDescriptor(
            name="CreateUserInput",
            fields=(
                FieldDescriptor(name="name", type=TypeRef.non_null(STRING)),
                FieldDescriptor(name="nickname", type=STRING),
            ),
        )
        declaration = builder.build_input_object_declaration(input_type)
        assert declaration.name == "CreateUserInput"
        assert [(p.name, p.is_nullable) for p in declaration.properties] == [
            ("name", False),
            ("nickname", True),
        ]

    def test_no_variables(self, builder, get_user):
        assert builder.build_variables_declaration(get_user) is None

    def test_variables(self, builder):
        operation = OperationDescriptor(
            name="GetUser",
            kind="query",
            variables=(
                FieldDescriptor(name="id", type=TypeRef.non_null(ID)),
                FieldDescriptor(name="filter", type=TypeRef.named(TypeKind.INPUT_OBJECT, "UserFilter")),
            ),
        )
        declaration = builder.build_variables_declaration(operation)
        assert declaration.name == "GetUserQueryVariables"
        assert declaration.properties[0].is_nullable is False
        assert declaration.properties[1].type == TypeReference("UserFilter")


class TestOperationDeclaration:
    """Tests for operation declarations."""

    def test_name_and_extends(self, builder, get_user):
        declaration = builder.build_operation_declaration(get_user)
        assert declaration.name == "GetUserQuery"
        assert declaration.extends == ["UserFieldsFragment"]

    def test_root_fields_forced_nullable(self, builder, get_user):
        declaration = builder.build_operation_declaration(get_user)
        user = declaration.properties[0]
        assert user.is_nullable is True
        # Nested fields keep their schema nullability.
        assert isinstance(user.type, InterfaceDeclaration)
        assert user.type.properties[0].is_nullable is False

    def test_unit_without_variables(self, builder, get_user):
        unit = builder.build_operation_unit(get_user)
        assert unit.facts.has_variables is False
        assert unit.facts.variables_declaration_name is None
        assert unit.facts.declaration_name == "GetUserQuery"
        assert [d.name for d in unit.declarations] == ["GetUserQuery"]

    def test_unit_with_variables(self, builder):
        operation = OperationDescriptor(
            name="addUser",
            kind="mutation",
            variables=(FieldDescriptor(name="name", type=TypeRef.non_null(STRING)),),
            fields=(FieldDescriptor(name="ok", type=TypeRef.named(TypeKind.SCALAR, "Boolean")),),
        )
        unit = builder.build_operation_unit(operation)
        assert unit.facts.has_variables is True
        assert unit.facts.variables_declaration_name == "AddUserMutationVariables"
        assert [d.name for d in unit.declarations] == [
            "AddUserMutationVariables",
            "AddUserMutation",
        ]

    def test_unsupported_kind(self, builder):
        with pytest.raises(UnsupportedOperationKind):
            builder.build_operation_unit(OperationDescriptor(name="X", kind="fetch"))


class TestFragmentDeclaration:
    """Tests for fragment declarations."""

    def test_merges_inline_fragments(self, builder):
        fragment = FragmentDescriptor(
            name="HeroFields",
            type_condition="Character",
            fields=(FieldDescriptor(name="name", type=TypeRef.non_null(STRING)),),
            inline_fragments=(
                InlineFragment("Droid", (
                    FieldDescriptor(name="name", type=TypeRef.non_null(STRING)),
                    FieldDescriptor(name="primaryFunction", type=TypeRef.non_null(STRING)),
                )),
            ),
            fragment_spreads=("CharacterId",),
        )
        declaration = builder.build_fragment_declaration(fragment)
        assert declaration.name == "HeroFieldsFragment"
        assert declaration.extends == ["CharacterIdFragment"]
        assert [(p.name, p.is_nullable) for p in declaration.properties] == [
            ("name", False),
            ("primaryFunction", True),
        ]


class TestPropertyDeclaration:
    """Tests for leaf and nested property declarations."""

    def test_scalar_leaf(self, builder):
        prop = Property(property_name="id", type_name="string", is_nullable=False)
        declaration = builder.build_property_declaration(prop)
        assert declaration.type == TypeReference("string")
        assert declaration.is_nested is False
        assert declaration.is_nullable is False

    def test_nested_uses_bare_name(self, builder):
        prop = Property(
            property_name="friends",
            type_name="User",
            bare_type_name="Friend",
            is_composite=True,
            is_array=True,
            fields=(FieldDescriptor(name="id", type=ID),),
        )
        declaration = builder.build_property_declaration(prop)
        assert declaration.is_nested
        assert declaration.type.name == "Friend"
        assert declaration.is_array is True

    def test_nested_inline_fragments_are_merged(self, builder):
        prop = Property(
            property_name="hero",
            type_name="Character",
            bare_type_name="Hero",
            is_composite=True,
            fields=(FieldDescriptor(name="name", type=STRING),),
            inline_fragments=(
                InlineFragment("Human", (FieldDescriptor(name="name", type=STRING),
                                         FieldDescriptor(name="height", type=TypeRef.non_null(STRING)))),
            ),
        )
        nested = builder.build_property_declaration(prop).type
        assert [(p.name, p.is_nullable) for p in nested.properties] == [
            ("name", True),
            ("height", True),
        ]

    def test_spread_only_selection_extends_fragment(self, builder):
        prop = Property(
            property_name="user",
            type_name="User",
            bare_type_name="User",
            is_composite=True,
            fragment_spreads=("UserFields",),
        )
        nested = builder.build_property_declaration(prop).type
        assert nested.extends == ["UserFieldsFragment"]
        assert nested.properties == []

    def test_empty_composite_selection_raises(self, builder):
        prop = Property(property_name="user", type_name="User", bare_type_name="User", is_composite=True)
        with pytest.raises(MalformedSelection):
            builder.build_property_declaration(prop)


class TestBuild:
    """Tests for building a whole model."""

    def test_ordering(self, builder, color_enum, get_user, user_fields):
        model = CompilationModel(
            types_used=[color_enum],
            operations=[get_user],
            fragments=[user_fields],
        )
        result = builder.build(model)
        assert result.ok
        assert [d.name for d in result.declarations] == [
            "Color",
            "GetUserQuery",
            "UserFieldsFragment",
        ]

    def test_failed_operation_does_not_stop_others(self, builder, get_user):
        bad = OperationDescriptor(name="Broken", kind="fetch")
        result = builder.build(CompilationModel(operations=[bad, get_user]))

        assert len(result.failures) == 1
        assert result.failures[0].unit == "operation Broken"
        assert isinstance(result.failures[0].error, UnsupportedOperationKind)
        assert [u.facts.name for u in result.operations] == ["GetUser"]

    def test_malformed_fragment_propagates(self, builder, get_user):
        bad = FragmentDescriptor(
            name="Bad",
            type_condition="User",
            fields=(FieldDescriptor(name="friend", type=USER),),
        )
        with pytest.raises(MalformedSelection):
            builder.build(CompilationModel(operations=[get_user], fragments=[bad]))

    def test_unresolved_type_propagates(self, builder):
        class EmptyResolver:
            def declared_name(self, type_ref):
                return None

        operation = OperationDescriptor(
            name="GetUser",
            kind="query",
            fields=(FieldDescriptor(name="", type=USER, fields=(FieldDescriptor(name="id", type=ID),)),),
        )
        model = CompilationModel(operations=[operation], name_resolver=EmptyResolver())
        with pytest.raises(UnresolvedNamedType):
            builder.build(model)

    def test_deterministic(self, builder, color_enum, get_user, user_fields):
        model = CompilationModel(types_used=[color_enum], operations=[get_user], fragments=[user_fields])
        assert builder.build(model) == builder.build(model)

    def test_uses_model_resolver(self, builder):
        class PrefixResolver:
            def declared_name(self, type_ref):
                return f"Api{type_ref.named_type.name}"

        operation = OperationDescriptor(
            name="GetUser",
            kind="query",
            fields=(FieldDescriptor(name="user", type=USER, fields=(FieldDescriptor(name="id", type=ID),)),),
        )
        fragment = FragmentDescriptor(
            name="F",
            type_condition="Query",
            fields=(FieldDescriptor(name="user", type=USER, fragment_spreads=("UserFields",)),),
        )
        result = builder.build(
            CompilationModel(operations=[operation], fragments=[fragment], name_resolver=PrefixResolver())
        )
        assert result.ok
        # Nested shapes are named after the property, not the resolved type.
        nested = result.operations[0].declarations[0].properties[0].type
        assert nested.name == "User"
