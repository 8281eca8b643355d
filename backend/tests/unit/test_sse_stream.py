"""Tests for SSE framing of hub subscriptions."""

from __future__ import annotations

import json

from livefeed.realtime.hub import FeedHub
from livefeed.realtime.sse import HEARTBEAT, sse_line, stream_subscription


def test_sse_line_names_channel_and_serializes_event():
    line = sse_line({"action": "delete", "post": 7})
    assert line.startswith("event: posts\n")
    assert line.endswith("\n\n")
    payload = line.split("data: ", 1)[1].strip()
    assert json.loads(payload) == {"action": "delete", "post": 7}


def test_stream_yields_events_then_heartbeats():
    hub = FeedHub()
    sub = hub.subscribe()
    stream = stream_subscription(hub, sub, heartbeat_seconds=0.01)

    assert next(stream) == ": connected\n\n"
    hub.publish({"action": "delete", "post": 3})
    assert next(stream) == sse_line({"action": "delete", "post": 3})
    assert next(stream) == HEARTBEAT
    stream.close()


def test_closing_stream_unsubscribes():
    hub = FeedHub()
    sub = hub.subscribe()
    stream = stream_subscription(hub, sub, heartbeat_seconds=0.01)
    next(stream)

    stream.close()

    assert hub.subscriber_count == 0
    assert sub.closed is True


def test_stream_ends_when_hub_shuts_down():
    hub = FeedHub()
    sub = hub.subscribe()
    stream = stream_subscription(hub, sub, heartbeat_seconds=0.01)
    next(stream)

    hub.shutdown()

    assert list(stream) == []
