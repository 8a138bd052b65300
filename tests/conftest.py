"""Test doubles for the front manager's collaborators.

StubStore        in-memory RemoteStore with server-side toggle semantics
ScriptedDialogs  answers prompts from a queue of (button, values) pairs
RecordingNotifier / RecordingRenderer  capture what the user would see
"""

import asyncio
import copy
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import pytest

from front_manager.client import StoreError
from front_manager.models import FrontsDocument, Portent, Secret
from front_manager.orchestrator import FrontManager


class StubStore:
    def __init__(self, fronts: list[dict[str, Any]] | None = None) -> None:
        self.fronts = copy.deepcopy(fronts or [])
        self.saves: list[dict[str, Any]] = []
        self.fetches = 0
        self.toggles: list[tuple[str, str, str]] = []
        self.fail_fetch: StoreError | None = None
        self.fail_save: Exception | None = None
        self.fail_toggle: StoreError | None = None

    async def fetch_all(self) -> FrontsDocument:
        self.fetches += 1
        await asyncio.sleep(0)
        if self.fail_fetch:
            raise self.fail_fetch
        return FrontsDocument.model_validate({"fronts": copy.deepcopy(self.fronts)})

    async def save_all(self, document: FrontsDocument) -> None:
        payload = document.to_payload()
        self.saves.append(payload)
        await asyncio.sleep(0)
        if self.fail_save:
            raise self.fail_save
        self.fronts = copy.deepcopy(payload["fronts"])

    def _danger(self, danger_id: str) -> dict[str, Any]:
        for front in self.fronts:
            for danger in front["dangers"]:
                if danger["id"] == danger_id:
                    return danger
        raise StoreError("Server error: 404")

    async def toggle_secret(self, danger_id: str, secret_id: str) -> Secret:
        self.toggles.append(("secret", danger_id, secret_id))
        if self.fail_toggle:
            raise self.fail_toggle
        secret = next(s for s in self._danger(danger_id)["secrets"] if s["id"] == secret_id)
        secret["revealed"] = not secret["revealed"]
        secret["revealedAt"] = datetime.now(timezone.utc).isoformat() if secret["revealed"] else None
        return Secret.model_validate(secret)

    async def toggle_portent(self, danger_id: str, portent_id: str) -> Portent:
        self.toggles.append(("portent", danger_id, portent_id))
        if self.fail_toggle:
            raise self.fail_toggle
        portent = next(p for p in self._danger(danger_id)["grimPortents"] if p["id"] == portent_id)
        portent["completed"] = not portent["completed"]
        return Portent.model_validate(portent)


class ScriptedDialogs:
    """Each prompt pops the next scripted answer; an empty queue cancels."""

    def __init__(self) -> None:
        self.answers: list[tuple[str, dict[str, str], Callable[[], None] | None]] = []
        self.prompts: list[dict[str, Any]] = []

    def answer(
        self,
        button: str,
        values: dict[str, str] | None = None,
        before: Callable[[], None] | None = None,
    ) -> "ScriptedDialogs":
        self.answers.append((button, values or {}, before))
        return self

    async def prompt(self, title, content, buttons, default=None) -> None:
        self.prompts.append({"title": title, "content": content, "buttons": buttons})
        button, values, before = self.answers.pop(0) if self.answers else ("cancel", {}, None)
        if before is not None:
            before()
        await asyncio.sleep(0)
        callback = buttons[button].callback if button in buttons else None
        if callback is not None:
            await callback(values)


class RecordingNotifier:
    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def warn(self, message: str) -> None:
        self.messages.append(("warn", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def of(self, level: str) -> list[str]:
        return [m for lvl, m in self.messages if lvl == level]


class RecordingRenderer:
    def __init__(self) -> None:
        self.contexts: list[dict[str, Any]] = []
        self.scroll = 0.0
        self.restored: list[float] = []

    def scroll_position(self) -> float:
        return self.scroll

    def render(self, context: dict[str, Any]) -> None:
        self.contexts.append(context)

    def restore_scroll(self, position: float) -> None:
        self.restored.append(position)


SAMPLE_FRONTS: list[dict[str, Any]] = [
    {
        "id": "front-1",
        "name": "The Hollow King",
        "type": "campaign",
        "cast": ["Mayor Aldric", "Sister Mara"],
        "stakes": ["Will Greyhollow survive?"],
        "playerHooks": [],
        "dangers": [
            {
                "id": "danger-1",
                "name": "Cult of Ash",
                "dangerType": "Ambitious Organizations",
                "impulse": "to spread corruption",
                "impendingDoom": "Usurpation",
                "grimPortents": [
                    {"id": "portent-1", "text": "Ash falls on the market.", "completed": False},
                ],
                "secrets": [
                    {
                        "id": "secret-1",
                        "xp": 30,
                        "text": "The cult leader is the mayor's brother.",
                        "revealed": False,
                        "revealedAt": None,
                    },
                ],
                "locations": ["The old mill"],
            },
        ],
    },
    {
        "id": "front-2",
        "name": "The Drowned Road",
        "type": "adventure",
        "cast": [],
        "stakes": [],
        "playerHooks": [],
        "dangers": [],
    },
]


@pytest.fixture
def store() -> StubStore:
    return StubStore(SAMPLE_FRONTS)


@pytest.fixture
def dialogs() -> ScriptedDialogs:
    return ScriptedDialogs()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def manager(store, dialogs, notifier, renderer) -> FrontManager:
    return FrontManager(store, dialogs, notifier=notifier, renderer=renderer)


@pytest.fixture
async def loaded(manager, store) -> FrontManager:
    """A manager that has fetched the sample document."""
    await manager.load()
    store.fetches = 0
    return manager
