"""
Global Package Settings

Centralized configuration for scheduler selection and logging, validated with
pydantic and read from the environment (a local .env file is honoured).
"""

from typing import Any, Dict, Optional
import json
import os

import dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from deferred_events.config.logging import logger

dotenv.load_dotenv()


SCHEDULER_BACKENDS = ("auto", "loop", "timer", "background")

# Environment variable -> (section, field)
ENV_VARS: Dict[str, tuple] = {
    "DEFERRED_EVENTS_SCHEDULER": ("scheduler", "backend"),
    "DEFERRED_EVENTS_ALLOW_BACKGROUND_LOOP": ("scheduler", "allow_background_loop"),
    "DEFERRED_EVENTS_TIMER_DELAY": ("scheduler", "timer_delay"),
    "DEFERRED_EVENTS_LOG_LEVEL": ("logging", "log_level"),
}


class SchedulerSettings(BaseModel):
    """How deferred callbacks get handed to an event loop"""

    backend: str = Field(
        default="auto",
        description="One of 'auto', 'loop', 'timer' or 'background'",
    )
    allow_background_loop: bool = Field(
        default=False,
        description="Let 'auto' start a private loop thread when no loop is running",
    )
    timer_delay: float = Field(
        default=0.0, ge=0.0, description="Delay in seconds used by the timer backend"
    )

    @field_validator("backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in SCHEDULER_BACKENDS:
            raise ValueError(
                f"Unknown scheduler backend '{v}', expected one of {SCHEDULER_BACKENDS}"
            )
        return v


class LoggingSettings(BaseModel):
    """Logging configuration"""

    log_level: str = Field(default="WARNING", description="Level for package loggers")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level '{v}'")
        return v


class Settings(BaseModel):
    """Global package settings"""

    debug: bool = False
    scheduler: SchedulerSettings = Field(default_factory=SchedulerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from DEFERRED_EVENTS_* environment variables"""
        sections: Dict[str, Dict[str, Any]] = {"scheduler": {}, "logging": {}}
        for env_var, (section, key) in ENV_VARS.items():
            value = os.environ.get(env_var)
            if value is not None and value != "":
                sections[section][key] = value

        return cls(
            debug=os.environ.get("DEFERRED_EVENTS_DEBUG", "false"),
            scheduler=SchedulerSettings(**sections["scheduler"]),
            logging=LoggingSettings(**sections["logging"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary"""
        return self.model_dump()

    def save_to_file(self, file_path: str) -> None:
        """Save current settings to a JSON file"""
        with open(file_path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load_from_file(cls, file_path: str) -> "Settings":
        """Load settings from a JSON file"""
        with open(file_path, "r") as f:
            data = json.load(f)
        logger.debug(f"Loaded settings from {file_path}")
        return cls.model_validate(data)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def get_log_level() -> str:
    """
    Level for package loggers. `debug` forces DEBUG, and invalid settings fall
    back to the default level so logging never blocks setup.
    """
    try:
        settings = get_settings()
    except ValidationError:
        return LoggingSettings().log_level
    if settings.debug:
        return "DEBUG"
    return settings.logging.log_level


def initialize_settings(config_file: Optional[str] = None, **overrides) -> Settings:
    """Initialize settings with optional config file and overrides"""
    global _settings

    if config_file and os.path.exists(config_file):
        _settings = Settings.load_from_file(config_file)
    else:
        _settings = Settings.from_env()

    known = {k: v for k, v in overrides.items() if k in Settings.model_fields}
    if known:
        _settings = Settings.model_validate({**_settings.model_dump(), **known})

    return _settings


def reset_settings() -> None:
    """Reset settings to default (useful for testing)"""
    global _settings
    _settings = None
