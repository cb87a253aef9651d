"""
Event Registry

Maps event names to ordered subscriber lists and hands every subscriber of a
triggered event to a deferred scheduler. Callbacks never run inside the
`trigger` call; they run on a later turn of the event loop, in no guaranteed
order.

Features:
- `on`/`bind`, `off`/`unbind`, `trigger`/`fire`, all chainable
- Optional context bound to each callback
- Snapshot-at-trigger semantics
- Subscriber introspection and trigger statistics
"""

from __future__ import annotations
import threading
import time
from typing import Any, Dict, List, Optional

from deferred_events.config.settings import get_log_level
from deferred_events.core.exceptions import SchedulerUnavailableError
from deferred_events.core.scheduling.scheduler import (
    PendingInvocation,
    Scheduler,
    get_default_scheduler,
)
from deferred_events.core.types.event_types import (
    NO_CONTEXT,
    UNSET,
    EventCallback,
    EventName,
    Subscription,
    event_key,
)
from deferred_events.loggers import Logger


class EventRegistry:
    """
    Asynchronous event registry.

    An entity owns one registry and either exposes it directly or forwards to
    it (see EventMixin). When no scheduler is given the process-wide default is
    used. It is resolved once here so a missing event loop is reported at
    construction, and followed afterwards when the default moves to a new loop.
    """

    def __init__(self, scheduler: Optional[Scheduler] = None, name: str = "registry"):
        self.name = name
        self._follows_default = scheduler is None
        if scheduler is None:
            scheduler = get_default_scheduler()
        self._scheduler = scheduler

        self._events: Dict[str, List[Subscription]] = {}
        self._lock = threading.RLock()
        self.logger = Logger(name=name, type="registry", level=get_log_level())
        self._stats = self._empty_stats()

    @property
    def scheduler(self) -> Scheduler:
        if self._follows_default:
            try:
                self._scheduler = get_default_scheduler()
            except SchedulerUnavailableError as e:
                self.logger.debug(f"Keeping scheduler {self._scheduler!r}: {e}")
        return self._scheduler

    # === Core Event Methods ===

    def on(
        self, event: EventName, callback: EventCallback, context: Any = NO_CONTEXT
    ) -> "EventRegistry":
        """
        Register a callback for an event.

        Args:
            event: The event name
            callback: Called with no arguments, or with `context` if one is given
            context: Optional value the callback is bound to

        Returns:
            self for method chaining
        """
        if not callable(callback):
            self.logger.debug(f"Ignoring non-callable subscriber for '{event}'")
            return self

        name = event_key(event)
        with self._lock:
            self._events.setdefault(name, []).append(Subscription(callback, context))
        return self

    bind = on

    def off(
        self, event: Any = UNSET, callback: Any = UNSET, context: Any = UNSET
    ) -> "EventRegistry":
        """
        Unregister callbacks. How much is removed depends on the arguments:

        - nothing: every subscription of every event
        - event: every subscription of that event
        - event and callback: subscriptions of that event with that callback
        - event, callback and context: only exact callback/context matches

        Without an event, the callback and/or context criteria apply to every
        event. Unknown events are ignored.

        Returns:
            self for method chaining
        """
        with self._lock:
            if event is UNSET and callback is UNSET and context is UNSET:
                self._events.clear()
                return self

            if event is UNSET:
                names = list(self._events)
            else:
                names = [event_key(event)]

            for name in names:
                subscriptions = self._events.get(name)
                if not subscriptions:
                    continue
                if callback is UNSET and context is UNSET:
                    subscriptions.clear()
                    continue
                self._events[name] = [
                    sub
                    for sub in subscriptions
                    if not sub.matches(callback=callback, context=context)
                ]
        return self

    unbind = off

    def trigger(self, event: EventName) -> "EventRegistry":
        """
        Announce that an event occurred.

        Every callback subscribed at this moment is scheduled for a later loop
        turn. Subscriptions added or removed afterwards, including from inside
        the scheduled callbacks, do not affect this trigger.

        Returns:
            self for method chaining
        """
        name = event_key(event)
        with self._lock:
            pending = [
                PendingInvocation(sub.callback, sub.context)
                for sub in self._events.setdefault(name, [])
                if callable(sub.callback)
            ]
            self._stats["events_triggered"] += 1
            self._stats["callbacks_scheduled"] += len(pending)
            by_name = self._stats["events_by_name"]
            by_name[name] = by_name.get(name, 0) + 1
            self._stats["last_event_time"] = time.time()

        if pending:
            scheduler = self.scheduler
            for invocation in pending:
                scheduler.schedule(invocation)

        self.logger.debug(f"Triggered '{name}', scheduled {len(pending)} callback(s)")
        return self

    fire = trigger

    # === Utility Methods ===

    def listeners(self, event: EventName) -> List[Subscription]:
        """Get a copy of the subscriptions for an event."""
        with self._lock:
            return list(self._events.get(event_key(event), []))

    def get_subscriber_count(self, event: EventName) -> int:
        """Get number of subscriptions for an event."""
        with self._lock:
            return len(self._events.get(event_key(event), []))

    def has_subscribers(self, event: EventName) -> bool:
        """Check if an event has any subscriptions."""
        return self.get_subscriber_count(event) > 0

    def event_names(self) -> List[str]:
        """Get every event name the registry has seen and not fully reset."""
        with self._lock:
            return list(self._events)

    # === Statistics and Debugging ===

    @staticmethod
    def _empty_stats() -> Dict[str, Any]:
        return {
            "events_triggered": 0,
            "callbacks_scheduled": 0,
            "events_by_name": {},
            "last_event_time": None,
        }

    def get_stats(self) -> Dict[str, Any]:
        """Get trigger statistics."""
        with self._lock:
            return {
                **self._stats,
                "events_by_name": dict(self._stats["events_by_name"]),
                "total_subscriptions": sum(
                    len(subscriptions) for subscriptions in self._events.values()
                ),
            }

    def clear_stats(self) -> None:
        """Clear trigger statistics."""
        with self._lock:
            self._stats = self._empty_stats()

    def __repr__(self) -> str:
        return (
            f"<EventRegistry name={self.name!r} "
            f"events={len(self._events)} scheduler={self._scheduler!r}>"
        )
