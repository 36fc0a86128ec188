"""Trello board handle with buffered metadata changes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar

from ..entity import Entity
from ..exceptions import TrelloAuthError, TrelloNotFoundError
from ..models import BoardData, LabelColor, PermissionLevel, SyncPolicy
from .base import RemoteResource, parse_record, parse_records, validate_name

if TYPE_CHECKING:
    from .card import Card
    from .label import Label
    from .list import TrelloList

logger = logging.getLogger(__name__)

BOARD_FIELDS = ["name", "desc", "closed", "url", "prefs"]

# Board field -> Trello parameter used by PUT /boards/{id}
_COMMIT_PARAMS = {
    "name": "name",
    "description": "desc",
    "closed": "closed",
    "public": "prefs/permissionLevel",
}


def _permission_level(public: bool) -> str:
    return PermissionLevel.PUBLIC.value if public else PermissionLevel.PRIVATE.value


class Board(RemoteResource):
    """A Trello board.

    Metadata (name, description, visibility, closed state) is read from a
    snapshot taken when the handle is created or refreshed. Setting a field
    only records it in a dirty buffer; nothing reaches Trello until
    `commit()`. Lists, cards and labels on the board are not buffered.

    Usage:
        board = Board.create(entity, "Roadmap")
        board.description = "Q3 planning"
        board.public = True
        board.commit()  # one PUT with both changes
    """

    path: ClassVar[str] = "/boards"
    sync_policy: ClassVar[SyncPolicy] = SyncPolicy.BUFFERED

    def __init__(self, entity: Entity, data: BoardData) -> None:
        """Wrap board data that is already known to be on Trello.

        Prefer `create`, `from_remote` or `fetch_all_from`.
        """
        super().__init__(entity, data.id)
        self._data = data
        self._dirty: dict[str, Any] = {}

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def create(cls, entity: Entity, name: str, public: bool = False) -> Board:
        """Create a new board on Trello.

        Args:
            entity: The entity the board will be assigned to
            name: Board name, non-empty and at most 16384 characters
            public: Whether the board is public (private by default)

        Returns:
            A Board bound to the newly created remote board

        Raises:
            TrelloValidationError: Invalid name (no request is made)
            TrelloAuthError: Entity cannot write
        """
        validate_name(name, "Board name")
        data = entity.request(
            "POST",
            cls.path,
            {
                "name": name,
                "defaultLists": False,
                "prefs_permissionLevel": _permission_level(public),
            },
        )
        board = cls(entity, parse_record(BoardData, data))
        logger.info("Created board %s", board.remote_id)
        return board

    @classmethod
    def from_remote(cls, entity: Entity, remote_id: str) -> Board | None:
        """Fetch an existing board.

        Args:
            entity: The entity the board will be assigned to
            remote_id: The board's id

        Returns:
            The board, or None if it does not exist or is not accessible
        """
        if not remote_id:
            return None
        try:
            data = entity.request("GET", f"{cls.path}/{remote_id}", {"fields": BOARD_FIELDS})
        except (TrelloNotFoundError, TrelloAuthError) as e:
            logger.debug("Board %s not available: %s", remote_id, e)
            return None
        return cls(entity, parse_record(BoardData, data))

    @classmethod
    def fetch_all_from(cls, entity: Entity) -> list[Board]:
        """Fetch every open board the entity's member belongs to.

        Args:
            entity: The entity to fetch boards for

        Returns:
            Zero or more boards
        """
        if not entity.can_write:
            logger.debug("fetch_all_from: entity has no token, no editable boards")
            return []
        try:
            data = entity.request(
                "GET",
                "/members/me/boards",
                {"filter": "open", "fields": BOARD_FIELDS},
            )
        except TrelloNotFoundError:
            return []
        return [cls(entity, record) for record in parse_records(BoardData, data)]

    # =========================================================================
    # Buffered metadata
    # =========================================================================

    def _get(self, field: str) -> Any:
        self._ensure_usable()
        if field in self._dirty:
            return self._dirty[field]
        if field == "description":
            return self._data.desc
        if field == "public":
            return self._data.public
        return getattr(self._data, field)

    def _set(self, field: str, value: Any) -> None:
        self._ensure_usable()
        self._dirty[field] = value

    @property
    def name(self) -> str:
        return self._get("name")

    @name.setter
    def name(self, value: str) -> None:
        self._set("name", validate_name(value, "Board name"))

    @property
    def description(self) -> str:
        return self._get("description")

    @description.setter
    def description(self, value: str) -> None:
        self._set("description", value or "")

    @property
    def public(self) -> bool:
        return self._get("public")

    @public.setter
    def public(self, value: bool) -> None:
        self._set("public", bool(value))

    @property
    def closed(self) -> bool:
        return self._get("closed")

    @closed.setter
    def closed(self, value: bool) -> None:
        self._set("closed", bool(value))

    @property
    def url(self) -> str | None:
        """Board URL on trello.com, from the last snapshot."""
        self._ensure_usable()
        return self._data.url

    @property
    def is_dirty(self) -> bool:
        """Whether there are local changes not yet committed."""
        return bool(self._dirty)

    @property
    def dirty_fields(self) -> frozenset[str]:
        """Names of fields changed locally since the last commit."""
        return frozenset(self._dirty)

    def commit(self, force: bool = False) -> None:
        """Push metadata changes to Trello in a single request.

        Does nothing if no field changed and force is not set. The dirty
        buffer is cleared only after Trello accepts the update, so a failed
        commit can be retried.

        Args:
            force: Push every metadata field even if nothing changed
        """
        self._ensure_usable()
        if not self._dirty and not force:
            logger.debug("Board %s: nothing to commit", self._remote_id)
            return

        fields = list(_COMMIT_PARAMS) if force else list(self._dirty)
        params: dict[str, Any] = {}
        for field in fields:
            if field == "public":
                # Keep org/enterprise visibility unless public was set locally
                if "public" in self._dirty:
                    value = _permission_level(self._dirty["public"])
                else:
                    value = self._data.prefs.permission_level
            else:
                value = self._get(field)
            params[_COMMIT_PARAMS[field]] = value

        data = self._request("PUT", params=params)
        self._data = parse_record(BoardData, data)
        self._dirty.clear()
        logger.info("Board %s: committed %s", self._remote_id, ", ".join(sorted(fields)))

    def refresh(self) -> None:
        """Reload the snapshot from Trello. Uncommitted changes are kept."""
        data = self._request("GET", params={"fields": BOARD_FIELDS})
        self._data = parse_record(BoardData, data)

    def delete(self) -> None:
        """Delete this board from Trello and invalidate the handle."""
        self._delete_remote()
        self._dirty.clear()

    # =========================================================================
    # Children (not buffered)
    # =========================================================================

    def get_lists(self, include_archived: bool = False) -> list[TrelloList]:
        """Fetch the lists on this board."""
        from .list import TrelloList

        data = self._request("GET", "lists", params={"filter": "all" if include_archived else "open"})
        return [TrelloList.from_data(self._entity, item) for item in data or []]

    def get_cards(self) -> list[Card]:
        """Fetch the open cards on this board."""
        from .card import Card

        data = self._request("GET", "cards")
        return [Card.from_data(self._entity, item) for item in data or []]

    def get_labels(self) -> list[Label]:
        """Fetch the labels defined on this board."""
        from .label import Label

        data = self._request("GET", "labels")
        return [Label.from_data(self._entity, item) for item in data or []]

    def create_list(self, name: str) -> TrelloList:
        """Create a list at the bottom of this board."""
        from .list import TrelloList

        return TrelloList.create(self, name)

    def create_label(self, name: str, color: LabelColor = LabelColor.NONE) -> Label:
        """Create a label on this board."""
        from .label import Label

        return Label.create(self, name, color)
