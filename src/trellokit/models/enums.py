"""Enumerations for Trello resources."""

from enum import Enum


class LabelColor(str, Enum):
    """Fixed label colors accepted by Trello."""

    NONE = "null"
    BLACK = "black"
    RED = "red"
    ORANGE = "orange"
    YELLOW = "yellow"
    LIME_GREEN = "lime"
    GREEN = "green"
    SKY_BLUE = "sky"
    BLUE = "blue"
    PURPLE = "purple"
    PINK = "pink"

    @classmethod
    def from_api(cls, value: str | None) -> "LabelColor":
        """Map a color token from a Trello response (null means no color)."""
        if value is None:
            return cls.NONE
        return cls(value)


class SyncPolicy(str, Enum):
    """How a resource handle keeps its fields in step with Trello."""

    BUFFERED = "buffered"  # Cached snapshot; setters buffer until commit()
    READ_THROUGH = "read_through"  # Every getter fetches, every setter writes


class PermissionLevel(str, Enum):
    """Board visibility."""

    PRIVATE = "private"
    PUBLIC = "public"
    ORG = "org"
    ENTERPRISE = "enterprise"
