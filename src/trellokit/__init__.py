"""trellokit - typed handles over the Trello REST API.

An Entity holds the API key and token. Boards, lists, cards and labels are
handles bound to remote Trello objects:

    Entity
      │
      ▼
    Board (buffered, commit())
      │
      ├── TrelloList (read-through)
      │     └── Card (read-through)
      └── Label (read-through)
"""

__version__ = "0.1.0"

from trellokit.entity import Entity
from trellokit.exceptions import (
    TrelloAuthError,
    TrelloDecodeError,
    TrelloError,
    TrelloInvalidStateError,
    TrelloNotFoundError,
    TrelloTransportError,
    TrelloValidationError,
)
from trellokit.models import LabelColor, SyncPolicy
from trellokit.resources import Board, Card, Label, TrelloList
from trellokit.transport import TransportProtocol, TrelloTransport

__all__ = [
    "__version__",
    "Board",
    "Card",
    "Entity",
    "Label",
    "LabelColor",
    "SyncPolicy",
    "TransportProtocol",
    "TrelloAuthError",
    "TrelloDecodeError",
    "TrelloError",
    "TrelloInvalidStateError",
    "TrelloList",
    "TrelloNotFoundError",
    "TrelloTransport",
    "TrelloTransportError",
    "TrelloValidationError",
]
