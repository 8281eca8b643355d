"""Tiny helpers shared across test modules."""

from __future__ import annotations

from contextlib import contextmanager


@contextmanager
def not_raises(exception: type[BaseException]):
    """Context manager asserting that an exception is *not* raised.

    Parameters
    ----------
    exception: type[BaseException]
        Exception type that should not be raised within the context.
    """
    try:
        yield
    except exception as exc:  # pragma: no cover
        raise AssertionError(f"Did raise {exception}: {exc}") from exc


def assert_json_keys(data: dict, required: set[str]) -> None:
    """Ensure that all required keys are present in ``data``."""
    missing = required - data.keys()
    assert not missing, f"Missing keys: {', '.join(sorted(missing))}"


def drain(sub, *, timeout: float = 0.01) -> list:
    """Collect every event currently queued for ``sub``."""
    events = []
    while True:
        event = sub.get(timeout=timeout)
        if event is None:
            return events
        events.append(event)
