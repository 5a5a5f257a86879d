"""Request headers for authenticated schema introspection.

Implement the Auth protocol for custom schemes, or use a built-in handler.
"""

import base64
from typing import Protocol, runtime_checkable


@runtime_checkable
class Auth(Protocol):
    """Anything that can produce headers for an introspection request."""

    def get_headers(self) -> dict[str, str]:
        ...


class BearerAuth:
    """``Authorization: Bearer <token>``."""

    def __init__(self, token: str):
        self.token = token

    def get_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class BasicAuth:
    """HTTP Basic authentication."""

    def __init__(self, username: str, password: str):
        self.username = username
        self.password = password

    def get_headers(self) -> dict[str, str]:
        encoded = base64.b64encode(f"{self.username}:{self.password}".encode()).decode()
        return {"Authorization": f"Basic {encoded}"}


class HeaderAuth:
    """Arbitrary static headers, e.g. ``HeaderAuth({"X-API-Key": "..."})``."""

    def __init__(self, headers: dict[str, str]):
        self._headers = dict(headers)

    @classmethod
    def from_pairs(cls, pairs: list[str]) -> "HeaderAuth":
        """Build from ``Name: value`` strings as given on the command line."""
        headers = {}
        for pair in pairs:
            name, sep, value = pair.partition(":")
            if not sep or not name.strip():
                raise ValueError(f"Invalid header {pair!r}, expected 'Name: value'")
            headers[name.strip()] = value.strip()
        return cls(headers)

    def get_headers(self) -> dict[str, str]:
        return self._headers.copy()


class CombinedAuth:
    """Merges headers from several handlers; later handlers win."""

    def __init__(self, *handlers: Auth):
        self.handlers = handlers

    def get_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        for handler in self.handlers:
            headers.update(handler.get_headers())
        return headers


class NoAuth:
    """No authentication (public endpoints, tests)."""

    def get_headers(self) -> dict[str, str]:
        return {}
