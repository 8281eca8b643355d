"""
Fan-out hub delivering feed events to every connected subscriber.

Each subscriber owns a bounded :class:`queue.Queue`. Publishing enqueues
without blocking; a subscriber whose queue is full misses that event and
everybody else still receives it. Late subscribers get no replay.
"""

from __future__ import annotations

import itertools
import logging
import queue
import threading
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)

Event = Mapping[str, Any]


class Subscription:
    """
    Handle for one listener registered on a :class:`FeedHub`.

    The handle is consumed by the transport that owns the connection: it
    calls :meth:`get` in a loop and passes the handle back to
    :meth:`FeedHub.unsubscribe` when the client goes away.
    """

    __slots__ = ("id", "_queue", "_closed")

    def __init__(self, subscription_id: int, max_queue_size: int) -> None:
        self.id = subscription_id
        self._queue: queue.Queue[Event] = queue.Queue(maxsize=max_queue_size)
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def get(self, timeout: float | None = None) -> Event | None:
        """
        Wait up to ``timeout`` seconds for the next event.

        :returns: The event, or ``None`` on timeout or once the subscription
            is closed.
        """
        if self.closed:
            return None
        try:
            event = self._queue.get(timeout=timeout)
        except queue.Empty:
            return None
        # Closed while waiting: whatever was queued must not be observed.
        if self.closed:
            return None
        return event

    def _offer(self, event: Event) -> bool:
        try:
            self._queue.put_nowait(event)
        except queue.Full:
            return False
        return True

    def _close(self) -> None:
        self._closed.set()
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                break

    def __repr__(self) -> str:
        return f"<Subscription id={self.id} closed={self.closed}>"


class FeedHub:
    """
    Thread-safe publish/subscribe hub for feed events.

    :param max_queue_size: Capacity of each subscriber queue.

    Notes
    -----
    - Membership changes and delivery share one lock, so a listener removed
      by :meth:`unsubscribe` can never receive an event published afterwards.
    - Delivery is ``put_nowait``; :meth:`publish` never blocks on a slow
      listener.
    - After :meth:`shutdown` the hub refuses new subscriptions.
    """

    def __init__(self, *, max_queue_size: int = 100) -> None:
        if max_queue_size < 1:
            raise ValueError("max_queue_size must be >= 1")
        self.max_queue_size = max_queue_size
        self._lock = threading.Lock()
        self._subscribers: dict[int, Subscription] = {}
        self._ids = itertools.count(1)
        self._shut_down = False

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def subscribe(self) -> Subscription:
        """Register a new listener and return its handle."""
        with self._lock:
            if self._shut_down:
                raise RuntimeError("Feed hub is shut down.")
            sub = Subscription(next(self._ids), self.max_queue_size)
            self._subscribers[sub.id] = sub
            count = len(self._subscribers)
        logger.info(
            "Feed subscriber added",
            extra={"subscription_id": sub.id, "subscribers": count},
        )
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        """Remove ``sub`` and discard its pending events. Idempotent."""
        with self._lock:
            removed = self._subscribers.pop(sub.id, None)
            sub._close()
            count = len(self._subscribers)
        if removed is not None:
            logger.info(
                "Feed subscriber removed",
                extra={"subscription_id": sub.id, "subscribers": count},
            )

    def publish(self, event: Event) -> int:
        """
        Deliver ``event`` to every current subscriber.

        :returns: Number of subscribers the event was enqueued for.
        """
        dropped: list[int] = []
        delivered = 0
        with self._lock:
            for sub in self._subscribers.values():
                if sub._offer(event):
                    delivered += 1
                else:
                    dropped.append(sub.id)

        for sub_id in dropped:
            logger.warning(
                "Feed event dropped for slow subscriber",
                extra={"subscription_id": sub_id, "action": event.get("action")},
            )
        logger.debug(
            "Feed event published",
            extra={
                "action": event.get("action"),
                "delivered": delivered,
                "dropped": len(dropped),
            },
        )
        return delivered

    def shutdown(self) -> None:
        """Close every subscription and refuse new ones."""
        with self._lock:
            self._shut_down = True
            subs = list(self._subscribers.values())
            self._subscribers.clear()
            for sub in subs:
                sub._close()
        if subs:
            logger.info("Feed hub shut down", extra={"subscribers": len(subs)})
