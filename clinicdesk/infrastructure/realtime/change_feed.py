"""In-process change feed delivering collection change events to subscribers."""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from typing import Callable, DefaultDict, List

from clinicdesk.domain.entities import ChangeEvent, ChangeKind

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[ChangeEvent], None]


class ChangeFeed:
    """Manage change subscriptions grouped by collection name.

    Callbacks run synchronously on the publishing thread, which is usually a
    worker thread executing a store call. Subscribers that live on an event
    loop must hop back onto it themselves.
    """

    def __init__(self) -> None:
        self._subscribers: DefaultDict[str, List[ChangeCallback]] = defaultdict(list)
        self._lock = threading.Lock()

    def subscribe(self, collection: str, callback: ChangeCallback) -> Callable[[], None]:
        """Register ``callback`` for ``collection`` and return an unsubscribe hook."""

        with self._lock:
            self._subscribers[collection].append(callback)

        def _unsubscribe() -> None:
            self.unsubscribe(collection, callback)

        return _unsubscribe

    def unsubscribe(self, collection: str, callback: ChangeCallback) -> None:
        """Remove ``callback`` from the subscribers of ``collection``."""

        with self._lock:
            callbacks = self._subscribers.get(collection)
            if not callbacks:
                return
            try:
                callbacks.remove(callback)
            except ValueError:
                return
            if not callbacks:
                self._subscribers.pop(collection, None)

    def subscriber_count(self, collection: str) -> int:
        with self._lock:
            return len(self._subscribers.get(collection, ()))

    def publish(self, collection: str, kind: ChangeKind) -> None:
        """Deliver a :class:`ChangeEvent` for ``collection`` to every subscriber."""

        with self._lock:
            callbacks = list(self._subscribers.get(collection, ()))
        if not callbacks:
            return

        event = ChangeEvent(collection=collection, kind=kind)
        for callback in callbacks:
            try:
                callback(event)
            except Exception:  # pragma: no cover - logged and skipped
                logger.exception("Change subscriber failed for %s", collection)


change_feed = ChangeFeed()


__all__ = ["ChangeCallback", "ChangeFeed", "change_feed"]
