"""Trello list handle."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from ..entity import Entity
from ..models import ListData
from .base import ReadThroughResource, parse_record, validate_name
from .board import Board

if TYPE_CHECKING:
    from .card import Card

logger = logging.getLogger(__name__)


class TrelloList(ReadThroughResource):
    """A list (column) on a Trello board.

    Every getter re-fetches the list and every setter is written
    immediately. Trello cannot delete lists; archive them instead.
    """

    path: ClassVar[str] = "/lists"

    @classmethod
    def create(cls, board: Board, name: str) -> TrelloList:
        """Create a new list at the bottom of a board.

        Args:
            board: Board to add the list to
            name: List title (non-empty)
        """
        board._ensure_usable()
        validate_name(name, "List name")
        data = board.entity.request(
            "POST",
            cls.path,
            {"name": name, "idBoard": board.remote_id, "pos": "bottom"},
        )
        record = parse_record(ListData, data)
        logger.info("Created list %s on board %s", record.id, board.remote_id)
        return cls(board.entity, record.id)

    @classmethod
    def bind(cls, entity: Entity, remote_id: str) -> TrelloList:
        """Wrap an existing list id without a request."""
        return cls(entity, remote_id)

    @classmethod
    def from_data(cls, entity: Entity, data: Mapping[str, Any] | ListData) -> TrelloList:
        """Wrap a list from an already fetched payload."""
        record = data if isinstance(data, ListData) else parse_record(ListData, data)
        return cls(entity, record.id)

    def get_data(self) -> ListData:
        """Fetch the list from Trello."""
        return parse_record(ListData, self._fetch_json())

    def get_name(self) -> str:
        return self.get_data().name

    def is_archived(self) -> bool:
        return self.get_data().closed

    def get_position(self) -> float | None:
        return self.get_data().pos

    def get_board(self) -> Board | None:
        """Fetch the board this list currently belongs to."""
        return Board.from_remote(self._entity, self.get_data().id_board)

    def set_name(self, name: str) -> None:
        self.set_property("name", validate_name(name, "List name"))

    def set_archived(self, archived: bool) -> None:
        self.set_property("closed", bool(archived))

    def set_board(self, board: Board) -> None:
        """Move the list to another board."""
        board._ensure_usable()
        self.set_property("idBoard", board.remote_id)

    def set_position(self, pos: float | str) -> None:
        """Set the list position ("top", "bottom" or a number)."""
        self.set_property("pos", pos)

    def get_cards(self) -> list[Card]:
        """Fetch the open cards in this list."""
        from .card import Card

        data = self._request("GET", "cards")
        return [Card.from_data(self._entity, item) for item in data or []]

    def create_card(self, name: str, description: str = "") -> Card:
        """Create a card at the bottom of this list."""
        from .card import Card

        return Card.create(self, name, description)
