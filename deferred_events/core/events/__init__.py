"""
Event System

Event registry and the mixin that lets any class own one.
"""

from .event_registry import EventRegistry
from .event_mixin import EventMixin

__all__ = [
    "EventRegistry",
    "EventMixin",
]
