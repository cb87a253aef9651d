"""
Scheduling

Deferred execution of callbacks on an asyncio event loop.
"""

from .scheduler import (
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

__all__ = [
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
]
