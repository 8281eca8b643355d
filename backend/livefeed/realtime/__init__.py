"""In-process real-time fan-out of post mutations.

``hub`` owns subscriber membership and delivery; ``events`` holds the
publish payload builders; ``sse`` turns a subscription into a
Server-Sent Events stream.
"""

from .events import FeedAction
from .hub import FeedHub, Subscription

__all__ = ["FeedAction", "FeedHub", "Subscription"]
