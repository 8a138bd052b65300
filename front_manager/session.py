"""Single-instance handle for the open front manager window.

The manager itself is an ordinary object owned by whoever opened it. This
module only remembers which one is open, so a launcher button can ask "is
one already open?" and close it instead of opening a second.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from front_manager.orchestrator import FrontManager

logger = logging.getLogger(__name__)

_current: FrontManager | None = None


def current_manager() -> FrontManager | None:
    return _current


def is_open() -> bool:
    return _current is not None


def open_manager(manager: FrontManager) -> FrontManager:
    """Register `manager` as the open instance. Raises if one is already open."""
    global _current
    if _current is not None and _current is not manager:
        raise RuntimeError("A front manager is already open")
    _current = manager
    logger.debug("front manager opened")
    return manager


def close_manager() -> None:
    global _current
    _current = None
    logger.debug("front manager closed")


async def toggle_manager(factory: Callable[[], FrontManager]) -> FrontManager | None:
    """Close the open manager, or build, open and load a new one.

    Returns the newly opened manager, or None when one was closed.
    """
    if _current is not None:
        close_manager()
        return None
    manager = open_manager(factory())
    await manager.load()
    return manager
