"""Server-Sent Events framing for hub subscriptions."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from typing import Any

from livefeed.realtime.events import CHANNEL
from livefeed.realtime.hub import FeedHub, Subscription

logger = logging.getLogger(__name__)

HEARTBEAT = ": keep-alive\n\n"

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def sse_line(event: Mapping[str, Any], *, channel: str = CHANNEL) -> str:
    """Format an event as one SSE message."""
    return f"event: {channel}\ndata: {json.dumps(event, ensure_ascii=False)}\n\n"


def stream_subscription(
    hub: FeedHub,
    sub: Subscription,
    *,
    heartbeat_seconds: float,
) -> Iterator[str]:
    """
    Yield SSE messages for ``sub`` until it is closed or the client leaves.

    A heartbeat comment goes out whenever no event arrived within
    ``heartbeat_seconds``. Closing the generator (client disconnect) always
    unsubscribes.
    """
    try:
        yield ": connected\n\n"
        while not sub.closed:
            event = sub.get(timeout=heartbeat_seconds)
            if event is None:
                if sub.closed:
                    break
                yield HEARTBEAT
                continue
            yield sse_line(event)
    finally:
        hub.unsubscribe(sub)
        logger.info("Feed stream closed", extra={"subscription_id": sub.id})
