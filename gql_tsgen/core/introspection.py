"""Schema introspection over HTTP.

Posts the standard introspection query to a GraphQL endpoint and builds a
client schema from the result.
"""

import logging
from typing import Any

import httpx
from graphql import GraphQLError, GraphQLSchema, build_client_schema, get_introspection_query

from .auth import Auth, NoAuth
from .errors import SchemaFetchError

logger = logging.getLogger(__name__)


def fetch_introspection(
    url: str,
    auth: Auth | None = None,
    timeout: float = 30.0,
    transport: httpx.BaseTransport | None = None,
) -> dict[str, Any]:
    """Run the introspection query and return the ``data`` portion.

    Args:
        url: GraphQL endpoint URL
        auth: Authentication handler (implements the Auth protocol)
        timeout: Request timeout in seconds
        transport: Optional httpx transport (used by tests)

    Raises:
        SchemaFetchError: On transport errors, non-2xx responses, or GraphQL errors
    """
    headers = {"Content-Type": "application/json"}
    headers.update((auth or NoAuth()).get_headers())
    payload = {"query": get_introspection_query(descriptions=True)}

    logger.info("Introspecting %s", url)
    try:
        with httpx.Client(timeout=timeout, headers=headers, transport=transport) as client:
            response = client.post(url, json=payload)
            response.raise_for_status()
            result = response.json()
    except httpx.HTTPStatusError as e:
        raise SchemaFetchError(
            f"Introspection request failed with HTTP {e.response.status_code}"
        ) from e
    except httpx.HTTPError as e:
        raise SchemaFetchError(f"Introspection request failed: {e}") from e
    except ValueError as e:
        raise SchemaFetchError(f"Introspection response is not JSON: {e}") from e

    if not isinstance(result, dict):
        raise SchemaFetchError("Introspection response is not a JSON object")

    if result.get("errors"):
        error_messages = "; ".join(e.get("message", str(e)) for e in result["errors"])
        raise SchemaFetchError(f"GraphQL errors: {error_messages}", result["errors"])

    data = result.get("data")
    if not data or "__schema" not in data:
        raise SchemaFetchError("Introspection response has no __schema")
    return data


def fetch_schema(
    url: str,
    auth: Auth | None = None,
    timeout: float = 30.0,
    transport: httpx.BaseTransport | None = None,
) -> GraphQLSchema:
    """Fetch and build the schema served at ``url``."""
    data = fetch_introspection(url, auth=auth, timeout=timeout, transport=transport)
    try:
        return build_client_schema(data)
    except (GraphQLError, TypeError) as e:
        raise SchemaFetchError(f"Invalid introspection result: {e}") from e
