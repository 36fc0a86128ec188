"""Resource handles."""

from .base import MAX_NAME_LENGTH, ReadThroughResource, RemoteResource
from .board import Board
from .card import Card
from .label import Label
from .list import TrelloList

__all__ = [
    "MAX_NAME_LENGTH",
    "Board",
    "Card",
    "Label",
    "ReadThroughResource",
    "RemoteResource",
    "TrelloList",
]
