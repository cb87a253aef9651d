"""
Logging module for the deferred_events package.
Provides coloured, per-component loggers.
"""

from .base import Logger

__all__ = ["Logger"]
