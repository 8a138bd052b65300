"""Local UI state: everything the view needs that the store never sees.

Expanded fronts/dangers are plain id sets. They are never pruned when the
document is replaced, so they may name ids that no longer exist; build_view()
only asks "is this id expanded?", which makes stale entries harmless.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from front_manager.models import FrontsDocument


@dataclass
class UiState:
    expanded_fronts: set[str] = field(default_factory=set)
    expanded_dangers: set[str] = field(default_factory=set)
    scroll_position: float = 0.0
    loading: bool = False
    error: str | None = None

    def toggle_front(self, front_id: str) -> bool:
        """Flip a front's expansion. Returns the new state."""
        return _toggle(self.expanded_fronts, front_id)

    def toggle_danger(self, danger_id: str) -> bool:
        return _toggle(self.expanded_dangers, danger_id)

    def expand_front(self, front_id: str) -> None:
        self.expanded_fronts.add(front_id)

    def expand_danger(self, danger_id: str) -> None:
        self.expanded_dangers.add(danger_id)

    def begin_loading(self) -> None:
        self.loading = True
        self.error = None

    def finish_loading(self) -> None:
        self.loading = False


def _toggle(ids: set[str], item_id: str) -> bool:
    if item_id in ids:
        ids.discard(item_id)
        return False
    ids.add(item_id)
    return True


def build_view(document: FrontsDocument | None, ui: UiState) -> dict[str, Any]:
    """Render context: wire-format fronts annotated with `expanded` flags.

    A missing document renders as no fronts. While loading, whatever document
    is already held is still shown; an error sits beside it rather than
    replacing it.
    """
    fronts: list[dict[str, Any]] = []
    for front in document.fronts if document else []:
        data = front.model_dump(mode="json", by_alias=True)
        data["expanded"] = front.id in ui.expanded_fronts
        for danger in data["dangers"]:
            danger["expanded"] = danger["id"] in ui.expanded_dangers
        fronts.append(data)

    return {
        "fronts": fronts,
        "loading": ui.loading,
        "error": ui.error,
    }
