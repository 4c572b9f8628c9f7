from __future__ import annotations

from collections import Counter
from typing import List, Optional

NO_SCROLL_CLASS = "no-scroll"


class DocumentBody:
    """
    Class list of a client's document body, mirrored into rendered views.

    Classes are reference counted so several holders can share one body.
    """

    def __init__(self) -> None:
        self._holds: Counter[str] = Counter()

    def add_class(self, name: str) -> None:
        self._holds[name] += 1

    def remove_class(self, name: str) -> None:
        if self._holds[name] <= 1:
            self._holds.pop(name, None)
        else:
            self._holds[name] -= 1

    @property
    def classes(self) -> List[str]:
        return sorted(self._holds)


class ScrollLock:
    """
    Scoped hold of the body's no-scroll class.

    `acquire` and `release` are idempotent; the lock can also be used as a
    context manager so the class is released on every exit path.
    """

    def __init__(self, body: Optional[DocumentBody] = None, class_name: str = NO_SCROLL_CLASS) -> None:
        self.body = body if body is not None else DocumentBody()
        self._class_name = class_name
        self._held = False

    @property
    def held(self) -> bool:
        return self._held

    def acquire(self) -> None:
        if not self._held:
            self.body.add_class(self._class_name)
            self._held = True

    def release(self) -> None:
        if self._held:
            self.body.remove_class(self._class_name)
            self._held = False

    def __enter__(self) -> "ScrollLock":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
