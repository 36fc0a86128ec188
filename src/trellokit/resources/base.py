"""Shared behavior for Trello resource handles."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ValidationError

from ..entity import Entity
from ..exceptions import TrelloDecodeError, TrelloInvalidStateError, TrelloValidationError
from ..models import SyncPolicy

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

MAX_NAME_LENGTH = 16384


def validate_name(name: str, what: str = "Name") -> str:
    """Check a resource name is a non-empty string of at most 16384 characters."""
    if not isinstance(name, str) or not name:
        raise TrelloValidationError(f"{what} must be a non-empty string")
    if len(name) > MAX_NAME_LENGTH:
        raise TrelloValidationError(
            f"{what} is {len(name)} characters long; the maximum is {MAX_NAME_LENGTH}"
        )
    return name


def parse_record(record_type: type[RecordT], data: Any) -> RecordT:
    """Validate a decoded response against its record type.

    Raises:
        TrelloDecodeError: If the payload is not an object or lacks fields
    """
    if not isinstance(data, Mapping):
        raise TrelloDecodeError(
            f"Expected a JSON object for {record_type.__name__}, got {type(data).__name__}"
        )
    try:
        return record_type.model_validate(data)
    except ValidationError as e:
        raise TrelloDecodeError(f"Unexpected {record_type.__name__} payload: {e}") from e


def parse_records(record_type: type[RecordT], data: Any) -> list[RecordT]:
    """Validate a decoded JSON array of records."""
    if data is None:
        return []
    if not isinstance(data, list):
        raise TrelloDecodeError(
            f"Expected a JSON array of {record_type.__name__}, got {type(data).__name__}"
        )
    return [parse_record(record_type, item) for item in data]


class RemoteResource:
    """A local handle bound to one remote Trello object.

    Subclasses set `path` (e.g. "/cards") and `sync_policy`. A handle is
    bound to exactly one remote id for its whole life. Once `delete()`
    succeeds the handle is invalidated and every further operation raises
    TrelloInvalidStateError without touching the network.

    Handles are not thread-safe.
    """

    path: ClassVar[str]
    sync_policy: ClassVar[SyncPolicy]

    def __init__(self, entity: Entity, remote_id: str) -> None:
        if not remote_id:
            raise TrelloValidationError(f"{type(self).__name__} remote id cannot be empty")
        self._entity = entity
        self._remote_id = remote_id
        self._deleted = False

    def __repr__(self) -> str:
        state = " deleted" if self._deleted else ""
        return f"{type(self).__name__}({self._remote_id!r}{state})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RemoteResource):
            return NotImplemented
        return type(self) is type(other) and self._remote_id == other._remote_id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._remote_id))

    @property
    def remote_id(self) -> str:
        """The Trello id this handle is bound to."""
        return self._remote_id

    @property
    def entity(self) -> Entity:
        """The entity whose credentials this handle uses."""
        return self._entity

    @property
    def is_deleted(self) -> bool:
        """Whether the remote object was deleted through this handle."""
        return self._deleted

    def _ensure_usable(self) -> None:
        if self._deleted:
            raise TrelloInvalidStateError(
                f"{type(self).__name__} {self._remote_id} was deleted; the handle is no longer usable"
            )

    def _page(self, *parts: str) -> str:
        return "/".join([f"{self.path}/{self._remote_id}", *parts])

    def _request(
        self,
        method: str,
        *parts: str,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Issue a request against this resource (or a sub-page of it)."""
        self._ensure_usable()
        return self._entity.request(method, self._page(*parts), params)

    def _delete_remote(self) -> None:
        """Delete the remote object, then invalidate this handle."""
        self._ensure_usable()
        self._entity.request("DELETE", self._page())
        self._deleted = True
        logger.info("Deleted %s %s", type(self).__name__, self._remote_id)


class ReadThroughResource(RemoteResource):
    """A resource whose fields are always read fresh and written immediately.

    Each getter costs one GET of the full object and returns the server's
    current value. Each setter is one PUT against `/<path>/<id>/<field>`.
    Two setters in a row are independent requests; if the second fails the
    first has still been applied.
    """

    sync_policy: ClassVar[SyncPolicy] = SyncPolicy.READ_THROUGH

    def _fetch_json(self) -> Any:
        return self._request("GET")

    def set_property(self, field: str, value: Any) -> None:
        """Write one field on the remote object.

        Args:
            field: Trello field name, e.g. "name" or "closed"
            value: New value (encoded like any query parameter)
        """
        if not field:
            raise TrelloValidationError("Field name cannot be empty")
        self._request("PUT", field, params={"value": value})
        logger.debug("Set %s.%s on %s", type(self).__name__, field, self._remote_id)
