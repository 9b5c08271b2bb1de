"""In-process change feed for live views.

Repositories call ``publish(collection)`` after every write; each open
subscription on that collection reloads its snapshot through its own loader.
A subscription keeps at most one pending snapshot: an unread one is replaced
by the newer one.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Callable, Generic, Iterator, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription(Generic[T]):
    def __init__(self, feed: "ChangeFeed", collection: str, loader: Callable[[], T]):
        self._feed = feed
        self.collection = collection
        self._loader = loader
        self._pending: "queue.Queue[T]" = queue.Queue(maxsize=1)
        self._lock = threading.Lock()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def refresh(self) -> None:
        # load and store under one lock: the last load is the one kept
        with self._lock:
            if self.closed:
                return
            snapshot = self._loader()
            try:
                self._pending.get_nowait()
            except queue.Empty:
                pass
            self._pending.put_nowait(snapshot)

    def get(self, timeout: Optional[float] = None) -> Optional[T]:
        """Next snapshot, or None when nothing arrived within ``timeout``."""

        try:
            return self._pending.get(timeout=timeout)
        except queue.Empty:
            return None

    def snapshots(self, heartbeat: float = 15.0) -> Iterator[Optional[T]]:
        """Yield snapshots until closed; ``None`` marks an idle heartbeat."""

        while not self.closed:
            yield self.get(timeout=heartbeat)

    def close(self) -> None:
        if not self.closed:
            self._closed.set()
            self._feed._remove(self)

    def __enter__(self) -> "Subscription[T]":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class ChangeFeed:
    def __init__(self):
        self._subscriptions: dict[str, list[Subscription]] = {}
        self._lock = threading.Lock()

    def subscribe(self, collection: str, loader: Callable[[], T]) -> Subscription[T]:
        """Open a subscription; the current snapshot is delivered immediately."""

        sub: Subscription[T] = Subscription(self, collection, loader)
        with self._lock:
            self._subscriptions.setdefault(collection, []).append(sub)
        sub.refresh()
        return sub

    def publish(self, collection: str) -> None:
        with self._lock:
            subs = list(self._subscriptions.get(collection, ()))
        for sub in subs:
            try:
                sub.refresh()
            except Exception:
                # Publishing never fails the write that triggered it.
                logger.exception("Change feed refresh failed for %s", collection)

    def subscriber_count(self, collection: str) -> int:
        with self._lock:
            return len(self._subscriptions.get(collection, ()))

    def _remove(self, sub: Subscription) -> None:
        with self._lock:
            subs = self._subscriptions.get(sub.collection, [])
            if sub in subs:
                subs.remove(sub)
