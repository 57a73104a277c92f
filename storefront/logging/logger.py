# storefront/logging/logger.py

import logging
import os
import sys
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

ROOT_LOGGER = "storefront"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

RESET = "\033[0m"
COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[41m",
}
MAGENTA = "\033[35m"

_OFF = {"", "0", "off", "false", "no"}


@dataclass(frozen=True)
class LogSettings:
    level: int = logging.INFO
    # None disables the rotating file
    log_file: Optional[Path] = Path("logs") / "storefront.log"
    max_bytes: int = 5_000_000
    backup_count: int = 3
    color: bool = True

    @classmethod
    def from_env(cls) -> "LogSettings":
        """
        LOG_LEVEL              DEBUG/INFO/... (unknown names fall back to INFO)
        STOREFRONT_LOG_DIR     directory of storefront.log (default: logs)
        STOREFRONT_LOG_FILE    set to off/0/false to log to the console only
        NO_COLOR               any value turns the ANSI colors off
        """
        defaults = cls()

        log_file = defaults.log_file
        if os.getenv("STOREFRONT_LOG_FILE", "on").strip().lower() in _OFF:
            log_file = None
        elif os.getenv("STOREFRONT_LOG_DIR"):
            log_file = Path(os.environ["STOREFRONT_LOG_DIR"]) / "storefront.log"

        return cls(
            level=_resolve_log_level(defaults.level),
            log_file=log_file,
            color="NO_COLOR" not in os.environ,
        )


class ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        orig_levelname = record.levelname
        orig_name = record.name
        try:
            color = COLORS.get(record.levelno, RESET)
            record.levelname = f"{color}{orig_levelname}{RESET}"
            record.name = f"{MAGENTA}{orig_name}{RESET}"
            return super().format(record)
        finally:
            record.levelname = orig_levelname
            record.name = orig_name


def _resolve_log_level(default: int = logging.INFO) -> int:
    level = os.getenv("LOG_LEVEL")
    if not level:
        return default
    resolved = getattr(logging, level.upper(), default)
    return resolved if isinstance(resolved, int) else default


def _is_tty(stream) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def configure_logging(settings: Optional[LogSettings] = None, *, force: bool = False) -> logging.Logger:
    """
    Install the console and file handlers on the ``storefront`` logger.

    Module loggers are its children and propagate up to it, so the handlers
    exist once per process however many modules call ``setup_logger``.
    A second call is a no-op unless ``force`` is set, which swaps the
    handlers for ones built from ``settings``.
    """
    root = logging.getLogger(ROOT_LOGGER)
    if root.handlers and not force:
        return root

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    settings = settings or LogSettings.from_env()
    root.setLevel(settings.level)
    root.propagate = False

    console = logging.StreamHandler(sys.stderr)
    if settings.color and _is_tty(console.stream):
        console.setFormatter(ColorFormatter(LOG_FORMAT))
    else:
        console.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(console)

    if settings.log_file is not None:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            settings.log_file,
            maxBytes=settings.max_bytes,
            backupCount=settings.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)

    return root


def setup_logger(
    name: str,
    level: int | None = None,
) -> logging.Logger:
    configure_logging()

    # scripts run with -m log as __main__; keep them under the package tree
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"

    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger
