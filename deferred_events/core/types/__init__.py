"""Types module for core functionality."""

from deferred_events.core.types.event_types import (
    NO_CONTEXT,
    UNSET,
    EventCallback,
    EventName,
    Subscription,
    event_key,
    same_callable,
)

__all__ = [
    "NO_CONTEXT",
    "UNSET",
    "EventCallback",
    "EventName",
    "Subscription",
    "event_key",
    "same_callable",
]
