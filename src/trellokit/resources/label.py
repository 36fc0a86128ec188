"""Trello label handle."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, ClassVar

from ..entity import Entity
from ..exceptions import TrelloValidationError
from ..models import LabelColor, LabelData
from .base import ReadThroughResource, parse_record
from .board import Board

logger = logging.getLogger(__name__)


def _coerce_color(color: LabelColor | str) -> LabelColor:
    """Convert a color token to LabelColor, rejecting unknown colors."""
    try:
        return LabelColor(color)
    except ValueError as e:
        choices = ", ".join(c.value for c in LabelColor)
        raise TrelloValidationError(
            f"Unknown label color {color!r}; expected one of: {choices}"
        ) from e


class Label(ReadThroughResource):
    """A label defined on a board."""

    path: ClassVar[str] = "/labels"

    @classmethod
    def create(cls, board: Board, name: str, color: LabelColor = LabelColor.NONE) -> Label:
        """Create a label on a board.

        Args:
            board: Board the label belongs to
            name: Label text (may be empty for a color-only label)
            color: Label color
        """
        board._ensure_usable()
        color = _coerce_color(color)
        data = board.entity.request(
            "POST",
            cls.path,
            {"name": name, "color": color, "idBoard": board.remote_id},
        )
        record = parse_record(LabelData, data)
        logger.info("Created label %s on board %s", record.id, board.remote_id)
        return cls(board.entity, record.id)

    @classmethod
    def bind(cls, entity: Entity, remote_id: str) -> Label:
        """Wrap an existing label id without a request."""
        return cls(entity, remote_id)

    @classmethod
    def from_data(cls, entity: Entity, data: Mapping[str, Any] | LabelData) -> Label:
        """Wrap a label from an already fetched payload."""
        record = data if isinstance(data, LabelData) else parse_record(LabelData, data)
        return cls(entity, record.id)

    def get_data(self) -> LabelData:
        """Fetch the label from Trello."""
        return parse_record(LabelData, self._fetch_json())

    def get_name(self) -> str:
        return self.get_data().name

    def get_color(self) -> LabelColor:
        return self.get_data().color

    def get_board(self) -> Board | None:
        board_id = self.get_data().id_board
        return Board.from_remote(self._entity, board_id) if board_id else None

    def set_name(self, name: str) -> None:
        self.set_property("name", name)

    def set_color(self, color: LabelColor) -> None:
        self.set_property("color", _coerce_color(color))

    def delete(self) -> None:
        """Delete this label from Trello and invalidate the handle."""
        self._delete_remote()
