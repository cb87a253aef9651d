from __future__ import annotations
from typing import Any, Optional

from deferred_events.core.events.event_registry import EventRegistry
from deferred_events.core.scheduling.scheduler import Scheduler
from deferred_events.core.types.event_types import (
    NO_CONTEXT,
    UNSET,
    EventCallback,
    EventName,
)


class EventMixin:
    """
    Gives any class `on`/`off`/`trigger` by owning an EventRegistry.

    The registry is created empty when the entity is constructed and lives in
    `self.events`. Every method forwards to it and returns the entity, so calls
    chain on the entity itself:

        class Download(EventMixin):
            ...

        download = Download(scheduler=my_scheduler)
        download.on("done", report).trigger("done")
    """

    def __init__(
        self, *args: Any, scheduler: Optional[Scheduler] = None, **kwargs: Any
    ):
        self.events = EventRegistry(scheduler=scheduler, name=type(self).__name__)
        super().__init__(*args, **kwargs)

    def on(
        self, event: EventName, callback: EventCallback, context: Any = NO_CONTEXT
    ) -> "EventMixin":
        """Register a callback on this entity's registry."""
        self.events.on(event, callback, context)
        return self

    bind = on

    def off(
        self, event: Any = UNSET, callback: Any = UNSET, context: Any = UNSET
    ) -> "EventMixin":
        """Unregister callbacks, see EventRegistry.off for the removal modes."""
        self.events.off(event, callback, context)
        return self

    unbind = off

    def trigger(self, event: EventName) -> "EventMixin":
        """Schedule every current subscriber of `event` for a later loop turn."""
        self.events.trigger(event)
        return self

    fire = trigger
