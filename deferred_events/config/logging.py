import logging
from typing import Dict, Optional
from colorlog import StreamHandler, ColoredFormatter


class LoggerAdapter(logging.LoggerAdapter):
    """Adapter that keeps per-call `extra` values alongside the adapter's own."""

    def __init__(self, logger, extra):
        super().__init__(logger, extra)
        self.logger = logger
        self.extra = extra

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


DEFAULT_LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "light_blue",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}

class_color_map = {
    "registry": {
        "INFO": "light_blue",
        "DEBUG": "cyan",
        "ERROR": "red",
        "WARNING": "yellow",
        "CRITICAL": "red,bg_white",
    },
    "scheduler": {
        "INFO": "purple",
        "DEBUG": "light_black",
        "ERROR": "red",
        "WARNING": "yellow",
        "CRITICAL": "red,bg_white",
    },
}


def build_formatter(
    log_colors: Optional[Dict[str, str]] = None, fmt: Optional[str] = None
) -> ColoredFormatter:
    return ColoredFormatter(
        fmt
        or "%(asctime)s %(log_color)s%(class_name)s:%(levelname)s%(reset)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        reset=True,
        log_colors=log_colors or DEFAULT_LOG_COLORS,
    )


# Package logger, parent of every component logger
logger = logging.getLogger("deferred_events")
logger.setLevel(logging.WARNING)

handler = StreamHandler()
handler.setFormatter(
    build_formatter(
        fmt="%(asctime)s %(log_color)s%(name)s:%(levelname)s%(reset)s - %(message)s"
    )
)
logger.addHandler(handler)

# Prevent logs from propagating to the root logger
logger.propagate = False
