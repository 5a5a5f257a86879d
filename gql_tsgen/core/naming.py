"""Declaration naming rules.

All functions are pure string transforms.
"""

import re

import inflection

from .errors import UnsupportedOperationKind
from .ir import OperationKind

_WORD_BOUNDARY = re.compile(r"[_\-\s]+")

OPERATION_SUFFIXES = {
    OperationKind.QUERY.value: "Query",
    OperationKind.MUTATION.value: "Mutation",
    OperationKind.SUBSCRIPTION.value: "Subscription",
}


def snake_case(name: str) -> str:
    """Convert PascalCase or camelCase to snake_case."""
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


def pascal_case(name: str) -> str:
    """Convert snake_case, kebab-case, camelCase or UPPER_CASE to PascalCase.

    Each word is capitalised and the rest of it lower-cased
    (``GET_USER`` -> ``GetUser``, ``getURL`` -> ``GetUrl``).
    """
    words = snake_case(_WORD_BOUNDARY.sub("_", name)).split("_")
    return "".join(word.capitalize() for word in words if word)


def singularize(word: str) -> str:
    return inflection.singularize(word)


def operation_declaration_name(name: str, kind: str) -> str:
    """Return e.g. ``GetUserQuery`` for operation ``getUser`` of kind ``query``."""
    suffix = OPERATION_SUFFIXES.get(kind)
    if suffix is None:
        raise UnsupportedOperationKind(kind, operation=name)
    return pascal_case(name) + suffix


def variables_declaration_name(name: str, kind: str) -> str:
    return operation_declaration_name(name, kind) + "Variables"


def fragment_declaration_name(name: str) -> str:
    return pascal_case(name) + "Fragment"


def input_type_declaration_name(name: str) -> str:
    return pascal_case(name)


def bare_element_name(property_name: str) -> str:
    """Name for an anonymous nested shape, e.g. ``friends`` -> ``Friend``."""
    return pascal_case(singularize(property_name))
