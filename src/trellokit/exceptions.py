"""Exceptions raised by trellokit."""

from __future__ import annotations


class TrelloError(Exception):
    """Base exception for trellokit errors."""

    pass


class TrelloValidationError(TrelloError):
    """Invalid input, detected before any request is made."""

    pass


class TrelloAuthError(TrelloError):
    """Missing credentials or authorization rejected by Trello."""

    pass


class TrelloNotFoundError(TrelloError):
    """Resource not found."""

    pass


class TrelloTransportError(TrelloError):
    """The HTTP request failed or returned an unexpected status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TrelloDecodeError(TrelloError):
    """Response body is not valid JSON or lacks an expected field."""

    pass


class TrelloInvalidStateError(TrelloError):
    """Operation attempted on a handle whose remote resource was deleted."""

    pass
