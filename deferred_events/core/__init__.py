"""
Package Core

Scheduling primitives and the event registry built on them.
"""

# Errors
from .exceptions import (
    DeferredEventsError,
    SchedulerUnavailableError,
)

# Types
from .types import (
    NO_CONTEXT,
    Subscription,
)

# Scheduling
from .scheduling import (
    Scheduler,
    PendingInvocation,
    EventLoopScheduler,
    TimerScheduler,
    BackgroundLoopScheduler,
    detect_scheduler,
    get_default_scheduler,
    set_default_scheduler,
    reset_default_scheduler,
    schedule_async,
)

# Event system
from .events import (
    EventRegistry,
    EventMixin,
)

__all__ = [
    # Errors
    "DeferredEventsError",
    "SchedulerUnavailableError",
    # Types
    "NO_CONTEXT",
    "Subscription",
    # Scheduling
    "Scheduler",
    "PendingInvocation",
    "EventLoopScheduler",
    "TimerScheduler",
    "BackgroundLoopScheduler",
    "detect_scheduler",
    "get_default_scheduler",
    "set_default_scheduler",
    "reset_default_scheduler",
    "schedule_async",
    # Events
    "EventRegistry",
    "EventMixin",
]
