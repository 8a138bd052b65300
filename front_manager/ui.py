"""Presentation collaborators the manager drives but does not implement.

    Notifier  — transient toasts: info / warn / error
    Renderer  — draws a build_view() context and owns the scroll offset

The defaults here log notifications and render nothing, which is enough for
headless use and tests.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def info(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class Renderer(Protocol):
    def scroll_position(self) -> float: ...

    def render(self, context: dict[str, Any]) -> None: ...

    def restore_scroll(self, position: float) -> None: ...


class LoggingNotifier:
    def info(self, message: str) -> None:
        logger.info("%s", message)

    def warn(self, message: str) -> None:
        logger.warning("%s", message)

    def error(self, message: str) -> None:
        logger.error("%s", message)


class NullRenderer:
    """Keeps the last context so headless callers can inspect it."""

    def __init__(self) -> None:
        self.last_context: dict[str, Any] | None = None
        self._scroll = 0.0

    def scroll_position(self) -> float:
        return self._scroll

    def render(self, context: dict[str, Any]) -> None:
        self.last_context = context

    def restore_scroll(self, position: float) -> None:
        self._scroll = position
