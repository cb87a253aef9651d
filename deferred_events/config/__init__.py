"""
Configuration

Package settings and logging setup.
"""

from .settings import (
    Settings,
    SchedulerSettings,
    LoggingSettings,
    get_settings,
    get_log_level,
    initialize_settings,
    reset_settings,
)

__all__ = [
    "Settings",
    "SchedulerSettings",
    "LoggingSettings",
    "get_settings",
    "get_log_level",
    "initialize_settings",
    "reset_settings",
]
