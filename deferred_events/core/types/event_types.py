from __future__ import annotations
import types
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Union


class _Sentinel:
    """Named marker object that survives copying as the same instance."""

    __slots__ = ("_name",)

    def __init__(self, name: str):
        self._name = name

    def __repr__(self) -> str:
        return self._name

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_Sentinel":
        return self

    def __deepcopy__(self, memo: Any) -> "_Sentinel":
        return self


# Context recorded for callbacks subscribed without one
NO_CONTEXT: Any = _Sentinel("NO_CONTEXT")

# Marks an argument the caller did not pass
UNSET: Any = _Sentinel("UNSET")

EventName = Union[str, Enum]
EventCallback = Callable[..., Any]


def event_key(event: EventName) -> str:
    """Normalise an event name so enum members and their values share an entry."""
    if isinstance(event, Enum):
        return str(event.value)
    return event


def same_callable(registered: Any, candidate: Any) -> bool:
    """
    Reference equality for callbacks.

    Bound methods are rebuilt on every attribute access, so two bound methods
    are the same callback when they wrap the same function on the same object.
    """
    if registered is candidate:
        return True
    if isinstance(registered, types.MethodType) and isinstance(
        candidate, types.MethodType
    ):
        return (
            registered.__func__ is candidate.__func__
            and registered.__self__ is candidate.__self__
        )
    return False


@dataclass(frozen=True, eq=False)
class Subscription:
    """A callback registered against an event, with the context it is bound to."""

    callback: EventCallback
    context: Any = NO_CONTEXT

    @property
    def has_context(self) -> bool:
        return self.context is not NO_CONTEXT

    def matches(self, callback: Any = UNSET, context: Any = UNSET) -> bool:
        """Check this subscription against removal criteria. UNSET matches anything."""
        if callback is not UNSET and not same_callable(self.callback, callback):
            return False
        if context is not UNSET and self.context is not context:
            return False
        return True
