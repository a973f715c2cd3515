"""
Small append-only event registries for game lifecycle callbacks.

Each registry holds zero-argument callbacks and fires them synchronously, in the
order they were added. There is intentionally no way to remove a callback.
"""

import logging
from typing import Callable, Iterator, List

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class EventRegistry:
    """An ordered, append-only list of callbacks for one kind of event."""

    def __init__(self, name: str):
        self.name = name
        self._callbacks: List[Callback] = []

    def add(self, callback: Callback) -> Callback:
        """
        Register a callback to run when this event fires.

        Returns the callback unchanged, so this also works as a decorator.
        """
        if not callable(callback):
            raise TypeError(f"{self.name} callback must be callable, got {type(callback).__name__}")
        self._callbacks.append(callback)
        return callback

    def fire(self) -> None:
        """Run every registered callback once, in registration order."""
        logger.debug("Firing %s event to %d callback(s)", self.name, len(self._callbacks))
        for callback in list(self._callbacks):
            callback()

    def __len__(self) -> int:
        return len(self._callbacks)

    def __iter__(self) -> Iterator[Callback]:
        return iter(list(self._callbacks))

    def __repr__(self) -> str:
        return f"EventRegistry({self.name!r}, callbacks={len(self._callbacks)})"
