from typing import Any
from deferred_events.config.logging import (
    class_color_map,
    LoggerAdapter,
    build_formatter,
    logger as package_logger,
)
import logging


class Logger:
    def __init__(self, name: str, type: str, level: str = "warning"):
        self.name = name
        self.type = type

        def get_color(type, level):
            return class_color_map.get(type, {}).get(level, "white")

        colors = {
            level_name: get_color(self.type, level_name)
            for level_name in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        }
        self.formatter = build_formatter(log_colors=colors)

        self._logger = package_logger.getChild(f"{self.type}.{self.name}")
        self._logger.setLevel(getattr(logging, level.upper()))

        # Ensure no duplicate handlers are added
        if not self._logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(self.formatter)
            self._logger.addHandler(handler)
            self._logger.propagate = False

        self.logger = LoggerAdapter(self._logger, {"class_name": self.name})

    def get_logger(self):
        return self._logger

    def log(self, message: str, level: str = "info", exc_info=None):
        self.logger.log(getattr(logging, level.upper()), message, exc_info=exc_info)

    def info(self, message: Any):
        self.logger.info(message)

    def debug(self, message: str):
        self.logger.debug(message)

    def error(self, message: str, exc_info=True):
        self.logger.error(message, exc_info=exc_info)

    def warning(self, message: str, exc_info=None):
        self.logger.warning(message, exc_info=exc_info)

    def critical(self, message: str, exc_info=True):
        self.logger.critical(message, exc_info=exc_info)
