"""Trello card handle."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, ClassVar

from ..entity import Entity
from ..exceptions import TrelloValidationError
from ..models import CardData
from .base import ReadThroughResource, parse_record, validate_name
from .board import Board
from .label import Label
from .list import TrelloList

logger = logging.getLogger(__name__)


class Card(ReadThroughResource):
    """A card on a Trello list.

    Nothing is cached: every getter fetches the whole card with
    `get_data()` and every setter is its own PUT. Fetch the data once and
    read several fields from it when the round trips matter.
    """

    path: ClassVar[str] = "/cards"

    @classmethod
    def create(cls, trello_list: TrelloList, name: str, description: str = "") -> Card:
        """Create a new card at the bottom of a list.

        Args:
            trello_list: List to add the card to
            name: Card title (non-empty)
            description: Card description
        """
        trello_list._ensure_usable()
        validate_name(name, "Card name")
        data = trello_list.entity.request(
            "POST",
            cls.path,
            {
                "idList": trello_list.remote_id,
                "name": name,
                "desc": description,
                "pos": "bottom",
            },
        )
        record = parse_record(CardData, data)
        logger.info("Created card %s in list %s", record.id, trello_list.remote_id)
        return cls(trello_list.entity, record.id)

    @classmethod
    def bind(cls, entity: Entity, remote_id: str) -> Card:
        """Wrap an existing card id without a request."""
        return cls(entity, remote_id)

    @classmethod
    def from_data(cls, entity: Entity, data: Mapping[str, Any] | CardData) -> Card:
        """Wrap a card from an already fetched payload."""
        record = data if isinstance(data, CardData) else parse_record(CardData, data)
        return cls(entity, record.id)

    # =========================================================================
    # Reads (one GET each)
    # =========================================================================

    def get_data(self) -> CardData:
        """Fetch the card from Trello."""
        return parse_record(CardData, self._fetch_json())

    def get_name(self) -> str:
        return self.get_data().name

    def get_description(self) -> str:
        return self.get_data().desc

    def is_archived(self) -> bool:
        return self.get_data().closed

    def is_subscribed(self) -> bool:
        return self.get_data().subscribed

    def get_position(self) -> float | None:
        return self.get_data().pos

    def get_list(self) -> TrelloList:
        return TrelloList.bind(self._entity, self.get_data().id_list)

    def get_board(self) -> Board | None:
        return Board.from_remote(self._entity, self.get_data().id_board)

    def get_labels(self) -> list[Label]:
        """Labels currently assigned to the card."""
        return [Label.from_data(self._entity, label) for label in self.get_data().labels]

    # =========================================================================
    # Writes (one request each)
    # =========================================================================

    def set_name(self, name: str) -> None:
        self.set_property("name", validate_name(name, "Card name"))

    def set_description(self, description: str) -> None:
        self.set_property("desc", description or "")

    def set_archived(self, archived: bool) -> None:
        self.set_property("closed", bool(archived))

    def set_subscribed(self, subscribed: bool) -> None:
        self.set_property("subscribed", bool(subscribed))

    def set_position(self, pos: float | str) -> None:
        """Set the card position ("top", "bottom" or a number)."""
        self.set_property("pos", pos)

    def set_board(self, board: Board) -> None:
        """Move the card to another board."""
        board._ensure_usable()
        self.set_property("idBoard", board.remote_id)

    def set_list(self, trello_list: TrelloList) -> None:
        """Move the card to another list."""
        trello_list._ensure_usable()
        self.set_property("idList", trello_list.remote_id)

    def comment(self, text: str) -> None:
        """Add a comment to the card."""
        if not text:
            raise TrelloValidationError("Comment cannot be empty")
        self._request("POST", "actions", "comments", params={"text": text})
        logger.debug("Commented on card %s", self._remote_id)

    def assign_labels(self, labels: Iterable[Label]) -> None:
        """Replace the card's labels with the given ones in a single request.

        An empty iterable removes every label.
        """
        labels = list(labels)
        for label in labels:
            label._ensure_usable()
        self.set_property("idLabels", [label.remote_id for label in labels])

    def delete(self) -> None:
        """Delete this card from Trello and invalidate the handle."""
        self._delete_remote()
