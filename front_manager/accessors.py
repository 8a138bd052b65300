"""Pure lookups over the in-memory fronts tree.

A danger does not point back at its front. The owner is found by scanning
every front's dangers, or through a DangerIndex rebuilt whenever the
document is replaced. Every function tolerates a None document and returns
None for "absent".
"""

from __future__ import annotations

from typing import NamedTuple

from front_manager.models import Danger, Front, FrontsDocument, Portent, Secret


class DangerRef(NamedTuple):
    front: Front
    danger: Danger


class DangerIndex:
    """Map of danger id -> owning front id for one document snapshot."""

    def __init__(self, owners: dict[str, str] | None = None) -> None:
        self._owners = owners or {}

    @classmethod
    def build(cls, document: FrontsDocument | None) -> DangerIndex:
        owners: dict[str, str] = {}
        for front in document.fronts if document else []:
            for danger in front.dangers:
                owners.setdefault(danger.id, front.id)
        return cls(owners)

    def owner_of(self, danger_id: str) -> str | None:
        return self._owners.get(danger_id)

    def __len__(self) -> int:
        return len(self._owners)


def find_front(document: FrontsDocument | None, front_id: str) -> Front | None:
    if document is None:
        return None
    for front in document.fronts:
        if front.id == front_id:
            return front
    return None


def find_danger(
    document: FrontsDocument | None,
    danger_id: str,
    index: DangerIndex | None = None,
) -> DangerRef | None:
    """Find a danger and its owning front. First match wins.

    With an index, only the indexed owner is searched; a stale index entry
    falls back to the full scan.
    """
    if document is None:
        return None
    if index is not None:
        owner = find_front(document, index.owner_of(danger_id) or "")
        if owner is not None:
            for danger in owner.dangers:
                if danger.id == danger_id:
                    return DangerRef(owner, danger)
    for front in document.fronts:
        for danger in front.dangers:
            if danger.id == danger_id:
                return DangerRef(front, danger)
    return None


def find_portent(danger: Danger | None, portent_id: str) -> Portent | None:
    if danger is None:
        return None
    return next((p for p in danger.grim_portents if p.id == portent_id), None)


def find_secret(danger: Danger | None, secret_id: str) -> Secret | None:
    if danger is None:
        return None
    return next((s for s in danger.secrets if s.id == secret_id), None)
