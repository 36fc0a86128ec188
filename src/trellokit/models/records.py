"""Typed records for Trello JSON payloads.

Each record mirrors the subset of a Trello object this library reads.
Field names are snake_case; Trello's camelCase keys are accepted through
aliases and unknown keys are ignored.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import LabelColor, PermissionLevel


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class BoardPrefs(_Record):
    """Board preferences (only visibility is tracked)."""

    permission_level: str = Field(default=PermissionLevel.PRIVATE.value, alias="permissionLevel")


class BoardData(_Record):
    """Board metadata as returned by GET /boards/{id}."""

    id: str = Field(..., min_length=1)
    name: str
    desc: str = ""
    closed: bool = False
    url: str | None = None
    prefs: BoardPrefs = Field(default_factory=BoardPrefs)

    @property
    def public(self) -> bool:
        """Whether the board is visible to anyone."""
        return self.prefs.permission_level == PermissionLevel.PUBLIC.value


class LabelData(_Record):
    """Label as returned by GET /labels/{id} or embedded in a card."""

    id: str = Field(..., min_length=1)
    id_board: str | None = Field(default=None, alias="idBoard")
    name: str = ""
    color: LabelColor = LabelColor.NONE

    @field_validator("color", mode="before")
    @classmethod
    def parse_color(cls, v: str | LabelColor | None) -> LabelColor:
        """Treat a null color as LabelColor.NONE."""
        if isinstance(v, LabelColor):
            return v
        return LabelColor.from_api(v)


class ListData(_Record):
    """List as returned by GET /lists/{id}."""

    id: str = Field(..., min_length=1)
    name: str
    closed: bool = False
    id_board: str = Field(..., alias="idBoard")
    pos: float | None = None


class CardData(_Record):
    """Card as returned by GET /cards/{id}."""

    id: str = Field(..., min_length=1)
    name: str
    desc: str = ""
    closed: bool = False
    id_board: str = Field(..., alias="idBoard")
    id_list: str = Field(..., alias="idList")
    subscribed: bool = False
    pos: float | None = None
    labels: list[LabelData] = Field(default_factory=list)


class MemberData(_Record):
    """The authenticated member, from GET /members/me."""

    id: str
    username: str
    full_name: str | None = Field(default=None, alias="fullName")
