"""
Exceptions raised by the deferred events package.

Ordinary misuse of an event registry (unknown events, non-callable
subscribers) never raises. The only error surfaced to callers is a missing
asynchronous scheduling primitive, which is reported when a scheduler or
registry is first set up.
"""


class DeferredEventsError(Exception):
    """Base class for all deferred_events errors."""


class SchedulerUnavailableError(DeferredEventsError):
    """No asynchronous scheduling primitive is available in this environment."""
