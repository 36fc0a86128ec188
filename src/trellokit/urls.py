"""URL construction for the Trello REST API."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

import httpx

from .exceptions import TrelloValidationError

DEFAULT_BASE_URL = "https://api.trello.com/1"


def _encode_scalar(value: Any) -> str:
    """Encode a single query value the way Trello expects it."""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query_params(params: Mapping[str, Any] | None) -> dict[str, str]:
    """Flatten query parameters into Trello's string form.

    - Booleans become "true"/"false"
    - Lists and tuples are comma-joined
    - Nested mappings become "parent/child" keys (e.g. prefs/permissionLevel)
    - None values are dropped

    Args:
        params: Parameter mapping, possibly with compound values

    Returns:
        Ordered mapping of parameter name to encoded string
    """
    encoded: dict[str, str] = {}
    if not params:
        return encoded

    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, Mapping):
            for sub_key, sub_value in encode_query_params(value).items():
                encoded[f"{key}/{sub_key}"] = sub_value
        elif isinstance(value, list | tuple):
            encoded[key] = ",".join(_encode_scalar(item) for item in value)
        else:
            encoded[key] = _encode_scalar(value)
    return encoded


def make_url(
    page: str,
    query_params: Mapping[str, Any] | None = None,
    *,
    auth_params: Mapping[str, str] | None = None,
    base_url: str = DEFAULT_BASE_URL,
) -> str:
    """Build a request URL for an API page.

    Auth parameters are appended after the caller's parameters.

    Args:
        page: API page relative to the base URL, e.g. "/boards" (cannot be empty)
        query_params: Extra parameters, e.g. {"fields": ["name", "desc"]}
        auth_params: Credential parameters (key, token)
        base_url: API base URL

    Returns:
        The full URL

    Raises:
        TrelloValidationError: If page is empty or already carries a query string
    """
    if not page or not page.strip("/"):
        raise TrelloValidationError("URL page cannot be empty")
    if "?" in page:
        raise TrelloValidationError(
            f"URL page must not contain a query string, pass query_params instead: {page!r}"
        )

    params = encode_query_params(query_params)
    # Caller parameters may not override credentials
    for key in auth_params or {}:
        params.pop(key, None)
    params.update(auth_params or {})

    url = f"{base_url.rstrip('/')}/{page.lstrip('/')}"
    return str(httpx.URL(url, params=params or None))
