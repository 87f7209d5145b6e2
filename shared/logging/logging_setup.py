from datetime import datetime
from pytz import timezone
import logging.config
import logging
import os
from logging import Logger


debug_mode = os.getenv("LOG_LEVEL", "info").lower() == "debug"
loglevel = logging.INFO if not debug_mode else logging.DEBUG

# Supported ANSI color names for the color= parameter
_ANSI_RESET = "\033[0m"
_COLOR_MAP: dict[str, str] = {
    "cyan":    "\033[36m",
    "green":   "\033[32m",
    "yellow":  "\033[33m",
    "red":     "\033[31m",
    "magenta": "\033[35m",
    "blue":    "\033[34m",
    "white":   "\033[37m",
}


class CustomFormatter(logging.Formatter):
    """Formats timestamps in the configured timezone and prefixes warnings and errors."""

    def __init__(self, tz_name, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.tz = timezone(tz_name)

    def formatTime(self, record, datefmt=None):
        dt = datetime.fromtimestamp(record.created, self.tz)
        return dt.strftime(datefmt) if datefmt else dt.isoformat()

    def format(self, record):
        message = record.getMessage()
        if record.levelno >= logging.ERROR:
            message = "⛔ " + message
        elif record.levelno == logging.WARNING:
            message = "⚠️ " + message

        # format a copy so the prefix does not leak into other handlers
        patched = logging.makeLogRecord(record.__dict__)
        patched.msg = message
        patched.args = ()
        return super().format(patched)


class ColoredFormatter(CustomFormatter):
    """Console formatter that colors a line when the record carries a ``color`` attribute."""

    def format(self, record) -> str:
        line = super().format(record)
        color_name = getattr(record, "color", None)
        ansi = _COLOR_MAP.get(color_name, "") if color_name else ""
        return f"{ansi}{line}{_ANSI_RESET}" if ansi else line


class ColorLogger:
    """Thin wrapper around :class:`logging.Logger` that adds an optional
    ``color=`` keyword argument to all log methods.

    Usage::

        logger.info("plain message")
        logger.info("tool registered", color="cyan")

    Colors only reach the console handler; the file handler writes plain text.
    """

    def __init__(self, logger: Logger):
        self._logger = logger

    def _with_color(self, kwargs: dict, color: str | None) -> dict:
        if color is not None:
            extra = dict(kwargs.get("extra") or {})
            extra["color"] = color
            return {**kwargs, "extra": extra}
        return kwargs

    def debug(self, msg, *args, color: str | None = None, **kwargs):
        self._logger.debug(msg, *args, **self._with_color(kwargs, color))

    def info(self, msg, *args, color: str | None = None, **kwargs):
        self._logger.info(msg, *args, **self._with_color(kwargs, color))

    def warning(self, msg, *args, color: str | None = None, **kwargs):
        self._logger.warning(msg, *args, **self._with_color(kwargs, color))

    def error(self, msg, *args, color: str | None = None, **kwargs):
        self._logger.error(msg, *args, **self._with_color(kwargs, color))

    def exception(self, msg, *args, color: str | None = None, **kwargs):
        self._logger.exception(msg, *args, **self._with_color(kwargs, color))

    def __getattr__(self, name):
        """Delegate all other Logger attributes (e.g. setLevel, handlers) transparently."""
        return getattr(self._logger, name)


def setup_logging(console_stream: str = "ext://sys.stdout") -> ColorLogger:
    """Configure console and file logging and return the application logger.

    Args:
        console_stream (str): dictConfig stream reference for the console handler.
            The MCP stdio server passes "ext://sys.stderr" because stdout carries the protocol.
    """
    log_dir = os.path.join(os.getenv("ROOT_DIR", os.getcwd()), "logs")
    tz_name = os.getenv("TIMEZONE", "Europe/Berlin")
    os.makedirs(log_dir, exist_ok=True)

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "()": CustomFormatter,
                "format": "%(asctime)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
                "tz_name": tz_name,
            },
            "colored": {
                "()": ColoredFormatter,
                "format": "%(asctime)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
                "tz_name": tz_name,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "colored",
                "level": loglevel,
                "stream": console_stream,
            },
            "file": {
                "class": "logging.FileHandler",
                "formatter": "standard",
                "level": loglevel,
                "filename": os.path.join(log_dir, "app.log"),
                "encoding": "utf-8",
            },
        },
        "root": {
            "handlers": ["console", "file"],
            "level": loglevel,
        },
    }

    logging.config.dictConfig(logging_config)

    # Suppress httpx request logs unless in debug mode
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug_mode else logging.WARNING)

    return ColorLogger(logging.getLogger("extdata_bridge"))
