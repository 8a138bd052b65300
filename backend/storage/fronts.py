"""The fronts document: whole-file reads and writes, plus server-side toggles.

Saves replace the stored list wholesale (last writer wins). Toggles are the
only edits the server computes itself: it flips the flag and, for secrets,
stamps or clears `revealedAt`.
"""

import json
from datetime import datetime, timezone
from typing import Any

from .core import fronts_path


def get_fronts() -> list[dict[str, Any]]:
    """Load all fronts. Returns [] if nothing has been saved yet."""
    path = fronts_path()
    if not path.is_file():
        return []
    return json.loads(path.read_text()).get("fronts", [])


def save_fronts(fronts: list[dict[str, Any]]) -> None:
    """Replace the stored fronts."""
    fronts_path().write_text(json.dumps({"fronts": fronts}, indent=2))


def _find_danger(fronts: list[dict[str, Any]], danger_id: str) -> dict[str, Any]:
    for front in fronts:
        for danger in front.get("dangers", []):
            if danger.get("id") == danger_id:
                return danger
    raise KeyError(f"Danger {danger_id!r} not found")


def _find_item(items: list[dict[str, Any]], item_id: str, kind: str) -> dict[str, Any]:
    for item in items:
        if item.get("id") == item_id:
            return item
    raise KeyError(f"{kind} {item_id!r} not found")


def toggle_secret(danger_id: str, secret_id: str) -> dict[str, Any]:
    """Flip a secret's `revealed` flag and return the updated secret.

    Raises KeyError if the danger or secret does not exist.
    """
    fronts = get_fronts()
    danger = _find_danger(fronts, danger_id)
    secret = _find_item(danger.get("secrets", []), secret_id, "Secret")
    secret["revealed"] = not secret.get("revealed", False)
    secret["revealedAt"] = (
        datetime.now(timezone.utc).isoformat() if secret["revealed"] else None
    )
    save_fronts(fronts)
    return secret


def toggle_portent(danger_id: str, portent_id: str) -> dict[str, Any]:
    """Flip a grim portent's `completed` flag and return the updated portent."""
    fronts = get_fronts()
    danger = _find_danger(fronts, danger_id)
    portent = _find_item(danger.get("grimPortents", []), portent_id, "Portent")
    portent["completed"] = not portent.get("completed", False)
    save_fronts(fronts)
    return portent
