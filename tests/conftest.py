"""Shared fixtures: an in-memory Trello behind httpx.MockTransport."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest

from trellokit import Entity, TrelloTransport


@dataclass
class RecordedRequest:
    """A request seen by FakeTrello."""

    method: str
    path: str  # API path without the /1 prefix, e.g. "/cards/c1/name"
    params: dict[str, str]


def _as_bool(value: str) -> bool:
    return value == "true"


def _as_pos(value: str) -> float:
    if value == "top":
        return 0.0
    if value == "bottom":
        return 1e9
    return float(value)


@dataclass
class FakeTrello:
    """Minimal in-memory Trello API.

    Stores boards, lists, cards and labels as plain dicts shaped like
    Trello's JSON, and records every request it receives.
    """

    boards: dict[str, dict[str, Any]] = field(default_factory=dict)
    lists: dict[str, dict[str, Any]] = field(default_factory=dict)
    cards: dict[str, dict[str, Any]] = field(default_factory=dict)
    labels: dict[str, dict[str, Any]] = field(default_factory=dict)
    comments: dict[str, list[str]] = field(default_factory=dict)
    requests: list[RecordedRequest] = field(default_factory=list)
    member: dict[str, Any] = field(
        default_factory=lambda: {"id": "m1", "username": "testuser", "fullName": "Test User"}
    )
    _ids: itertools.count = field(default_factory=lambda: itertools.count(1))
    _queued: list[httpx.Response] = field(default_factory=list)

    # -------------------------------------------------------------------------
    # Test helpers
    # -------------------------------------------------------------------------

    def queue_response(self, response: httpx.Response) -> None:
        """Return this response for the next request instead of routing it."""
        self._queued.append(response)

    def calls(self, method: str | None = None) -> list[RecordedRequest]:
        """Recorded requests, optionally filtered by method."""
        if method is None:
            return list(self.requests)
        return [r for r in self.requests if r.method == method]

    def add_board(self, name: str, **extra: Any) -> dict[str, Any]:
        board = {
            "id": self._new_id("b"),
            "name": name,
            "desc": extra.pop("desc", ""),
            "closed": extra.pop("closed", False),
            "url": "https://trello.com/b/fake",
            "prefs": {"permissionLevel": extra.pop("permission_level", "private")},
        }
        self.boards[board["id"]] = board
        return board

    def add_list(self, board_id: str, name: str) -> dict[str, Any]:
        trello_list = {
            "id": self._new_id("l"),
            "name": name,
            "closed": False,
            "idBoard": board_id,
            "pos": float(len(self.lists) + 1) * 1024,
        }
        self.lists[trello_list["id"]] = trello_list
        return trello_list

    def add_card(self, list_id: str, name: str, desc: str = "") -> dict[str, Any]:
        card = {
            "id": self._new_id("c"),
            "name": name,
            "desc": desc,
            "closed": False,
            "idBoard": self.lists[list_id]["idBoard"],
            "idList": list_id,
            "idLabels": [],
            "subscribed": False,
            "pos": float(len(self.cards) + 1) * 1024,
        }
        self.cards[card["id"]] = card
        return card

    def add_label(self, board_id: str, name: str, color: str | None) -> dict[str, Any]:
        label = {"id": self._new_id("lb"), "idBoard": board_id, "name": name, "color": color}
        self.labels[label["id"]] = label
        return label

    def _new_id(self, prefix: str) -> str:
        return f"{prefix}{next(self._ids)}"

    # -------------------------------------------------------------------------
    # Routing
    # -------------------------------------------------------------------------

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/1")
        params = dict(request.url.params)
        self.requests.append(RecordedRequest(request.method, path, params))

        if self._queued:
            return self._queued.pop(0)

        if "key" not in params:
            return httpx.Response(401, text="invalid key")
        if request.method != "GET" and "token" not in params:
            return httpx.Response(401, text="unauthorized permission requested")

        parts = path.strip("/").split("/")
        route = getattr(self, f"_route_{parts[0]}", None)
        if route is None:
            return httpx.Response(404, text="Cannot find route")
        return route(request.method, parts[1:], params)

    def _card_json(self, card: dict[str, Any]) -> dict[str, Any]:
        data = {k: v for k, v in card.items() if k != "idLabels"}
        data["idLabels"] = list(card["idLabels"])
        data["labels"] = [self.labels[i] for i in card["idLabels"] if i in self.labels]
        return data

    def _route_members(self, method: str, parts: list[str], params: dict[str, str]):
        if parts == ["me"]:
            return httpx.Response(200, json=self.member)
        if parts == ["me", "boards"]:
            boards = [b for b in self.boards.values() if not b["closed"]]
            return httpx.Response(200, json=boards)
        return httpx.Response(404, text="not found")

    def _route_boards(self, method: str, parts: list[str], params: dict[str, str]):
        if method == "POST" and not parts:
            board = self.add_board(
                params["name"], permission_level=params.get("prefs_permissionLevel", "private")
            )
            return httpx.Response(200, json=board)

        board = self.boards.get(parts[0]) if parts else None
        if board is None:
            return httpx.Response(400, text="invalid id")

        if len(parts) == 1:
            if method == "GET":
                return httpx.Response(200, json=board)
            if method == "PUT":
                if "name" in params:
                    board["name"] = params["name"]
                if "desc" in params:
                    board["desc"] = params["desc"]
                if "closed" in params:
                    board["closed"] = _as_bool(params["closed"])
                if "prefs/permissionLevel" in params:
                    board["prefs"]["permissionLevel"] = params["prefs/permissionLevel"]
                return httpx.Response(200, json=board)
            if method == "DELETE":
                del self.boards[board["id"]]
                return httpx.Response(200, json={"_value": None})

        if method == "GET" and parts[1] == "lists":
            lists = [lst for lst in self.lists.values() if lst["idBoard"] == board["id"]]
            if params.get("filter") == "open":
                lists = [lst for lst in lists if not lst["closed"]]
            return httpx.Response(200, json=lists)
        if method == "GET" and parts[1] == "cards":
            cards = [
                self._card_json(c)
                for c in self.cards.values()
                if c["idBoard"] == board["id"] and not c["closed"]
            ]
            return httpx.Response(200, json=cards)
        if method == "GET" and parts[1] == "labels":
            labels = [lb for lb in self.labels.values() if lb["idBoard"] == board["id"]]
            return httpx.Response(200, json=labels)
        return httpx.Response(404, text="not found")

    def _route_lists(self, method: str, parts: list[str], params: dict[str, str]):
        if method == "POST" and not parts:
            if params.get("idBoard") not in self.boards:
                return httpx.Response(400, text="invalid value for idBoard")
            return httpx.Response(200, json=self.add_list(params["idBoard"], params["name"]))

        trello_list = self.lists.get(parts[0]) if parts else None
        if trello_list is None:
            return httpx.Response(404, text="The requested resource was not found.")

        if method == "GET" and len(parts) == 1:
            return httpx.Response(200, json=trello_list)
        if method == "GET" and parts[1] == "cards":
            cards = [
                self._card_json(c)
                for c in self.cards.values()
                if c["idList"] == trello_list["id"] and not c["closed"]
            ]
            return httpx.Response(200, json=cards)
        if method == "PUT" and len(parts) == 2:
            value = params.get("value", "")
            if parts[1] == "closed":
                trello_list["closed"] = _as_bool(value)
            elif parts[1] == "pos":
                trello_list["pos"] = _as_pos(value)
            else:
                trello_list[parts[1]] = value
            return httpx.Response(200, json=trello_list)
        return httpx.Response(404, text="not found")

    def _route_cards(self, method: str, parts: list[str], params: dict[str, str]):
        if method == "POST" and not parts:
            if params.get("idList") not in self.lists:
                return httpx.Response(400, text="invalid value for idList")
            card = self.add_card(params["idList"], params["name"], params.get("desc", ""))
            return httpx.Response(200, json=self._card_json(card))

        card = self.cards.get(parts[0]) if parts else None
        if card is None:
            return httpx.Response(404, text="The requested resource was not found.")

        if len(parts) == 1:
            if method == "GET":
                return httpx.Response(200, json=self._card_json(card))
            if method == "DELETE":
                del self.cards[card["id"]]
                return httpx.Response(200, json={"limits": {}})
        if method == "POST" and parts[1:] == ["actions", "comments"]:
            self.comments.setdefault(card["id"], []).append(params["text"])
            return httpx.Response(200, json={"id": self._new_id("a"), "type": "commentCard"})
        if method == "PUT" and len(parts) == 2:
            name, value = parts[1], params.get("value", "")
            if name in ("closed", "subscribed"):
                card[name] = _as_bool(value)
            elif name == "idLabels":
                card["idLabels"] = [i for i in value.split(",") if i]
            elif name == "pos":
                card["pos"] = _as_pos(value)
            else:
                card[name] = value
            return httpx.Response(200, json=self._card_json(card))
        return httpx.Response(404, text="not found")

    def _route_labels(self, method: str, parts: list[str], params: dict[str, str]):
        if method == "POST" and not parts:
            color = params.get("color")
            label = self.add_label(
                params["idBoard"], params.get("name", ""), None if color == "null" else color
            )
            return httpx.Response(200, json=label)

        label = self.labels.get(parts[0]) if parts else None
        if label is None:
            return httpx.Response(404, text="The requested resource was not found.")

        if len(parts) == 1:
            if method == "GET":
                return httpx.Response(200, json=label)
            if method == "DELETE":
                del self.labels[label["id"]]
                return httpx.Response(200, json={})
        if method == "PUT" and len(parts) == 2:
            value = params.get("value", "")
            if parts[1] == "color":
                value = None if value == "null" else value
            label[parts[1]] = value
            return httpx.Response(200, json=label)
        return httpx.Response(404, text="not found")


@pytest.fixture
def fake_trello():
    """An empty in-memory Trello."""
    return FakeTrello()


@pytest.fixture
def make_entity(fake_trello):
    """Factory for entities whose transport talks to the fake."""
    created: list[Entity] = []

    def _make(
        key: str | None = "test-key",
        token: str | None = "test-token",
        pedantic_assert: bool = False,
    ) -> Entity:
        client = httpx.Client(transport=httpx.MockTransport(fake_trello.handler))
        entity = Entity(key, token, pedantic_assert, transport=TrelloTransport(client=client))
        created.append(entity)
        return entity

    yield _make
    for entity in created:
        entity.close()


@pytest.fixture
def entity(fake_trello):
    """An entity with key and token, wired to the fake."""
    client = httpx.Client(transport=httpx.MockTransport(fake_trello.handler))
    entity = Entity("test-key", "test-token", transport=TrelloTransport(client=client))
    yield entity
    entity.close()


@pytest.fixture
def read_only_entity(make_entity):
    """An entity with a key but no token."""
    return make_entity(token=None)
