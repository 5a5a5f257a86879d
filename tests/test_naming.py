"""Tests for declaration naming."""

import pytest

from gql_tsgen.core.errors import UnsupportedOperationKind
from gql_tsgen.core.naming import (
    bare_element_name,
    fragment_declaration_name,
    input_type_declaration_name,
    operation_declaration_name,
    pascal_case,
    variables_declaration_name,
)


class TestCaseConversion:
    """Tests for pascal_case."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("getUser", "GetUser"),
            ("GetUser", "GetUser"),
            ("get_user", "GetUser"),
            ("get-user", "GetUser"),
            ("user", "User"),
            ("getURL", "GetUrl"),
            ("GET_USER", "GetUser"),
            ("get_URL_list", "GetUrlList"),
            ("HTTPResponse", "HttpResponse"),
        ],
    )
    def test_pascal_case(self, name, expected):
        assert pascal_case(name) == expected


class TestOperationNames:
    """Tests for operation declaration names."""

    def test_query(self):
        assert operation_declaration_name("GetUser", "query") == "GetUserQuery"

    def test_mutation(self):
        assert operation_declaration_name("addUser", "mutation") == "AddUserMutation"

    def test_subscription(self):
        assert operation_declaration_name("onMessage", "subscription") == "OnMessageSubscription"

    def test_unsupported_kind(self):
        with pytest.raises(UnsupportedOperationKind) as exc_info:
            operation_declaration_name("GetUser", "fetch")
        assert exc_info.value.kind == "fetch"
        assert exc_info.value.operation == "GetUser"
        assert '"fetch"' in str(exc_info.value)

    def test_upper_snake_operation(self):
        assert operation_declaration_name("get_URL_list", "query") == "GetUrlListQuery"

    def test_variables_name(self):
        assert variables_declaration_name("GetUser", "query") == "GetUserQueryVariables"


class TestOtherNames:
    """Tests for fragment, input and bare element names."""

    def test_fragment(self):
        assert fragment_declaration_name("UserFields") == "UserFieldsFragment"
        assert fragment_declaration_name("userFields") == "UserFieldsFragment"
        assert fragment_declaration_name("USER_FIELDS") == "UserFieldsFragment"

    def test_input_type(self):
        assert input_type_declaration_name("CreateUserInput") == "CreateUserInput"

    @pytest.mark.parametrize(
        "property_name,expected",
        [
            ("friends", "Friend"),
            ("user", "User"),
            ("categories", "Category"),
            ("searchResults", "SearchResult"),
        ],
    )
    def test_bare_element_name(self, property_name, expected):
        assert bare_element_name(property_name) == expected
