"""Data models."""

from .enums import LabelColor, PermissionLevel, SyncPolicy
from .records import (
    BoardData,
    BoardPrefs,
    CardData,
    LabelData,
    ListData,
    MemberData,
)

__all__ = [
    "BoardData",
    "BoardPrefs",
    "CardData",
    "LabelColor",
    "LabelData",
    "ListData",
    "MemberData",
    "PermissionLevel",
    "SyncPolicy",
]
