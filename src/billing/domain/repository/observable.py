"""Live-update support shared by the repository ports.

Callers subscribe with a listener that receives a fresh snapshot of the
whole collection after every write, mirroring a real-time document
store's collection listener.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ObservableCollection(Generic[T]):

    def __init__(self) -> None:
        self._listeners: list[Callable[[list[T]], None]] = []

    def subscribe(self, listener: Callable[[list[T]], None]) -> Callable[[], None]:
        """Register *listener* and return a function that unregisters it.

        The listener is called once immediately with the current snapshot.
        """
        self._listeners.append(listener)
        listener(self.list_all())

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def list_all(self) -> list[T]:
        raise NotImplementedError

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.list_all()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Collection listener %r failed", listener)
