"""Trello account entity holding API credentials."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from .exceptions import (
    TrelloAuthError,
    TrelloDecodeError,
    TrelloValidationError,
)
from .models import MemberData
from .transport import TransportProtocol, TrelloTransport
from .urls import DEFAULT_BASE_URL, make_url

if TYPE_CHECKING:
    from .config import Settings

logger = logging.getLogger(__name__)

_READ_METHODS = frozenset({"GET", "HEAD"})


class Entity:
    """A Trello account.

    The entity is the only holder of the API key and token. Every resource
    request goes through `request()`, which builds the authenticated URL and
    enforces that writes carry a token.

    Credentials cannot be changed after construction. The entity does not
    track the boards created or fetched through it.

    Usage:
        with Entity("my-key", "my-token") as entity:
            board = Board.create(entity, "Roadmap")
    """

    def __init__(
        self,
        key: str | None,
        token: str | None = None,
        pedantic_assert: bool = False,
        *,
        transport: TransportProtocol | None = None,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        """Initialize the entity.

        Args:
            key: Developer API key. Cannot be empty.
            token: User token. Optional when only reading public boards.
            pedantic_assert: Raise on an empty key instead of logging a warning
            transport: HTTP transport (defaults to TrelloTransport)
            base_url: API base URL

        Raises:
            TrelloValidationError: If key is empty and pedantic_assert is set
        """
        self._valid = bool(key)
        if not self._valid:
            if pedantic_assert:
                raise TrelloValidationError("Trello API key cannot be empty")
            logger.warning(
                "Trello API key is empty; entity is degraded and will refuse write operations"
            )

        self._key = key or ""
        self._token = token or None
        self._base_url = base_url
        self._transport = transport or TrelloTransport()
        self._user: MemberData | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> Entity:
        """Create an entity from Settings (TRELLO_* environment variables).

        Args:
            settings: Loaded settings

        Returns:
            Configured Entity
        """
        return cls(
            settings.api_key,
            settings.token,
            settings.pedantic_assert,
            transport=TrelloTransport(timeout=settings.timeout),
            base_url=settings.base_url,
        )

    def close(self) -> None:
        """Close the underlying transport."""
        self._transport.close()

    def __enter__(self) -> Entity:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "valid" if self._valid else "degraded"
        return f"Entity({state}, token={'set' if self._token else 'none'})"

    @property
    def is_valid(self) -> bool:
        """Whether the entity was constructed with a non-empty key."""
        return self._valid

    @property
    def can_write(self) -> bool:
        """Whether write operations are allowed (valid key and a token)."""
        return self._valid and self._token is not None

    @property
    def auth_params(self) -> dict[str, str]:
        """Credential query parameters appended to every URL."""
        if not self._valid:
            return {}
        params = {"key": self._key}
        if self._token:
            params["token"] = self._token
        return params

    @property
    def auth(self) -> str:
        """The authentication query string. Do not expose it to end users."""
        return "&".join(f"{k}={v}" for k, v in self.auth_params.items())

    @property
    def user(self) -> str | None:
        """Username of the account, resolved on first access.

        Returns None without a token, since there is no member to look up.
        """
        member = self.get_member()
        return member.username if member else None

    def get_member(self) -> MemberData | None:
        """Fetch (once) the member record for this account."""
        if self._user is not None:
            return self._user
        if not self.can_write:
            logger.debug("Skipping member lookup: no token")
            return None

        data = self.request("GET", "/members/me", {"fields": ["username", "fullName"]})
        try:
            self._user = MemberData.model_validate(data)
        except ValidationError as e:
            raise TrelloDecodeError(f"Unexpected member payload: {e}") from e
        logger.debug("Resolved member %s", self._user.username)
        return self._user

    def make_url(self, page: str, query_params: Mapping[str, Any] | None = None) -> str:
        """Create an authenticated URL for an API page.

        Args:
            page: Page relative to the API root, e.g. "/boards" (cannot be empty)
            query_params: Extra parameters, e.g. {"fields": ["name", "desc"]}

        Returns:
            A URL requests can be made to

        Raises:
            TrelloValidationError: If page is empty
        """
        return make_url(
            page,
            query_params,
            auth_params=self.auth_params,
            base_url=self._base_url,
        )

    def require_write(self) -> None:
        """Raise TrelloAuthError unless this entity may write."""
        if not self._valid:
            raise TrelloAuthError("Entity has no API key; write operations are not allowed")
        if self._token is None:
            raise TrelloAuthError("A token is required for write operations")

    def request(
        self,
        method: str,
        page: str,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Perform one authenticated request.

        Args:
            method: HTTP method
            page: API page, e.g. "/cards/abc123/name"
            params: Query parameters

        Returns:
            Decoded JSON response

        Raises:
            TrelloAuthError: Write attempted without credentials, or rejected
            TrelloValidationError: Empty page
        """
        method = method.upper()
        if method not in _READ_METHODS:
            self.require_write()
        url = self.make_url(page, params)
        logger.debug("%s %s params=%s", method, page, sorted((params or {}).keys()))
        return self._transport.request(method, url)
