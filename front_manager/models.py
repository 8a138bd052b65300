"""Core domain models.

The fronts document is a strict tree:

    FrontsDocument
      fronts[]          Front
        dangers[]       Danger
          grimPortents[]  Portent
          secrets[]       Secret

Pydantic is used for validation and serialisation at the wire boundary.
Attributes are snake_case in Python; the JSON wire format uses camelCase
(`playerHooks`, `dangerType`, `revealedAt`, ...). Both spellings are accepted
on input, and `to_payload()` always emits the wire spelling. Keys the client
does not model are kept as extras, so a save never strips server-side data.
"""

from __future__ import annotations

import random
import string
import time
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

FrontType = Literal["campaign", "adventure"]

XP_VALUES = (20, 30, 50)

_WIRE = ConfigDict(populate_by_name=True, extra="allow")


def new_id(prefix: str) -> str:
    """Return a client-side id: "{prefix}-{millis}-{9 random chars}".

    Uniqueness rests on the timestamp plus random suffix; nothing checks for
    collisions.
    """
    millis = int(time.time() * 1000)
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"{prefix}-{millis}-{suffix}"


class Portent(BaseModel):
    """A grim portent: one escalation step of a danger."""

    model_config = _WIRE

    id: str
    text: str
    completed: bool = False


class Secret(BaseModel):
    """Discoverable lore tied to a danger, worth XP when revealed.

    `revealed_at` is stamped by the server on toggle. The client never sets
    or reformats it, so it stays the exact string the server sent.
    """

    model_config = _WIRE

    id: str
    xp: int = 20
    text: str
    revealed: bool = False
    revealed_at: str | None = Field(default=None, alias="revealedAt")


class Danger(BaseModel):
    model_config = _WIRE

    id: str
    name: str
    danger_type: str = Field(default="", alias="dangerType")
    impulse: str = ""
    impending_doom: str = Field(default="", alias="impendingDoom")
    grim_portents: list[Portent] = Field(default_factory=list, alias="grimPortents")
    secrets: list[Secret] = Field(default_factory=list)
    locations: list[str] = Field(default_factory=list)


class Front(BaseModel):
    """A campaign or adventure front. Owns its dangers exclusively."""

    model_config = _WIRE

    id: str
    name: str
    type: FrontType = "campaign"
    cast: list[str] = Field(default_factory=list)
    stakes: list[str] = Field(default_factory=list)
    player_hooks: list[str] = Field(default_factory=list, alias="playerHooks")
    dangers: list[Danger] = Field(default_factory=list)


class FrontsDocument(BaseModel):
    """The unit of persistence: every front, fetched and saved wholesale."""

    model_config = _WIRE

    fronts: list[Front] = Field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict in the wire format (camelCase keys)."""
        return self.model_dump(mode="json", by_alias=True)
