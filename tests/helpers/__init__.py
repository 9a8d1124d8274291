from .event_helper import EventHistory, FailingListener
from .source_helper import (
    failing_source,
    never_ending_source,
    queue_source,
    settle,
    timed_source,
)

__all__ = (
    "EventHistory",
    "FailingListener",
    "failing_source",
    "never_ending_source",
    "queue_source",
    "settle",
    "timed_source",
)
