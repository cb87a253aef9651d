"""
Deferred Events

Unified import layer for the deferred_events package.
"""

from deferred_events.config.settings import (
    get_settings,
    initialize_settings,
    reset_settings,
)
from deferred_events.core import (
    NO_CONTEXT,
    BackgroundLoopScheduler,
    DeferredEventsError,
    EventLoopScheduler,
    EventMixin,
    EventRegistry,
    PendingInvocation,
    Scheduler,
    SchedulerUnavailableError,
    Subscription,
    TimerScheduler,
    detect_scheduler,
    get_default_scheduler,
    reset_default_scheduler,
    schedule_async,
    set_default_scheduler,
)

__all__ = [
    "EventRegistry",
    "EventMixin",
    "Subscription",
    "NO_CONTEXT",
    "Scheduler",
    "PendingInvocation",
    "EventLoopScheduler",
    "TimerScheduler",
    "BackgroundLoopScheduler",
    "detect_scheduler",
    "schedule_async",
    "get_default_scheduler",
    "set_default_scheduler",
    "reset_default_scheduler",
    "DeferredEventsError",
    "SchedulerUnavailableError",
    "get_settings",
    "initialize_settings",
    "reset_settings",
]
