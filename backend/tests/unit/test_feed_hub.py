"""Unit tests for the in-process fan-out hub."""

from __future__ import annotations

import threading

import pytest
from livefeed.realtime.hub import FeedHub
from tests.helpers.utils import drain, not_raises

EVENT = {"action": "delete", "post": 1}


class TestFeedHub:
    def test_publish_without_subscribers_is_noop(self):
        hub = FeedHub()
        with not_raises(Exception):
            assert hub.publish(EVENT) == 0

    def test_single_subscriber_receives_event(self):
        hub = FeedHub()
        sub = hub.subscribe()

        assert hub.publish(EVENT) == 1
        assert sub.get(timeout=0.1) == EVENT

    def test_every_subscriber_receives_each_event_in_order(self):
        hub = FeedHub()
        subs = [hub.subscribe() for _ in range(3)]

        hub.publish({"action": "delete", "post": 1})
        hub.publish({"action": "delete", "post": 2})

        for sub in subs:
            assert [e["post"] for e in drain(sub)] == [1, 2]

    def test_unsubscribed_listener_gets_nothing_and_others_unaffected(self):
        hub = FeedHub()
        leaving = hub.subscribe()
        staying = hub.subscribe()

        hub.unsubscribe(leaving)
        delivered = hub.publish(EVENT)

        assert delivered == 1
        assert leaving.get(timeout=0.01) is None
        assert drain(staying) == [EVENT]

    def test_unsubscribe_discards_pending_events(self):
        hub = FeedHub()
        sub = hub.subscribe()
        hub.publish(EVENT)

        hub.unsubscribe(sub)

        assert sub.closed is True
        assert sub.pending == 0
        assert sub.get(timeout=0.01) is None

    def test_unsubscribe_is_idempotent(self):
        hub = FeedHub()
        sub = hub.subscribe()
        hub.unsubscribe(sub)
        with not_raises(Exception):
            hub.unsubscribe(sub)
        assert hub.subscriber_count == 0

    def test_full_queue_drops_for_that_listener_only(self, caplog):
        hub = FeedHub(max_queue_size=1)
        slow = hub.subscribe()
        fast = hub.subscribe()

        hub.publish({"action": "delete", "post": 1})
        assert drain(fast) == [{"action": "delete", "post": 1}]
        delivered = hub.publish({"action": "delete", "post": 2})

        assert delivered == 1
        assert drain(fast) == [{"action": "delete", "post": 2}]
        assert drain(slow) == [{"action": "delete", "post": 1}]
        assert "dropped" in caplog.text

    def test_shutdown_closes_all_and_refuses_new_subscribers(self):
        hub = FeedHub()
        sub = hub.subscribe()

        hub.shutdown()

        assert sub.closed is True
        assert hub.subscriber_count == 0
        assert hub.publish(EVENT) == 0
        with pytest.raises(RuntimeError):
            hub.subscribe()

    def test_blocked_reader_wakes_with_none_after_unsubscribe(self):
        hub = FeedHub()
        sub = hub.subscribe()
        results = []

        reader = threading.Thread(target=lambda: results.append(sub.get(timeout=0.5)))
        reader.start()
        hub.unsubscribe(sub)
        reader.join(timeout=2)

        assert results == [None]

    def test_concurrent_publish_and_subscribe(self):
        hub = FeedHub(max_queue_size=1000)
        subs = [hub.subscribe() for _ in range(4)]
        errors: list[BaseException] = []

        def publisher(start: int) -> None:
            try:
                for i in range(start, start + 50):
                    hub.publish({"action": "delete", "post": i})
            except BaseException as exc:  # pragma: no cover - surfaced below
                errors.append(exc)

        def churn() -> None:
            try:
                for _ in range(50):
                    hub.unsubscribe(hub.subscribe())
            except BaseException as exc:  # pragma: no cover - surfaced below
                errors.append(exc)

        threads = [threading.Thread(target=publisher, args=(n * 100,)) for n in range(4)]
        threads.append(threading.Thread(target=churn))
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        assert errors == []
        for sub in subs:
            assert len(drain(sub, timeout=0)) == 200
        assert hub.subscriber_count == 4

    def test_rejects_non_positive_queue_size(self):
        with pytest.raises(ValueError):
            FeedHub(max_queue_size=0)
