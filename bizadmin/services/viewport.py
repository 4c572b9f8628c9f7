from __future__ import annotations

import logging
from typing import Callable, List

from bizadmin.schemas.editor import ViewMode

logger = logging.getLogger(__name__)

DEFAULT_BREAKPOINT_PX = 1000

ViewModeListener = Callable[[ViewMode], None]


# PUBLIC_INTERFACE
def view_mode_for(width: int, breakpoint: int = DEFAULT_BREAKPOINT_PX) -> ViewMode:
    """Narrow viewports render a list, wide ones a table."""
    return "list" if width < breakpoint else "table"


class ViewportObserver:
    """
    Tracks a client's viewport width and publishes the derived view mode.

    Listeners are notified on every resize notification. `subscribe` returns
    the matching unsubscribe callable.
    """

    def __init__(self, width: int, breakpoint: int = DEFAULT_BREAKPOINT_PX) -> None:
        self._width = width
        self._breakpoint = breakpoint
        self._listeners: List[ViewModeListener] = []

    @property
    def width(self) -> int:
        return self._width

    @property
    def view_mode(self) -> ViewMode:
        return view_mode_for(self._width, self._breakpoint)

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)

    # PUBLIC_INTERFACE
    def subscribe(self, listener: ViewModeListener) -> Callable[[], None]:
        """Register `listener` and return a callable that removes it (idempotent)."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # PUBLIC_INTERFACE
    def resize(self, width: int) -> ViewMode:
        """Record a new width and notify listeners of the recomputed view mode."""
        self._width = width
        mode = self.view_mode
        logger.debug("Viewport resized to %dpx; view mode=%s", width, mode)
        for listener in list(self._listeners):
            listener(mode)
        return mode
