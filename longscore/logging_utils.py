from __future__ import annotations

import logging
import os
import sys
import traceback
from datetime import datetime
from pathlib import Path

from .errors import SegmentError

_LOGGER = logging.getLogger("longscore.logging")
_LOG_DIR_ENV = "LONGSCORE_LOG_DIR"
_DEBUG_ENV = "LONGSCORE_DEBUG"
_LOG_FILE = "longscore.log"
_CONSOLE_FORMAT = "%(level_prefix)s %(name)s: %(message)s"
_FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_LEVEL_PREFIXES = {
    logging.DEBUG: "🐛",
    logging.INFO: "ℹ️",
    logging.WARNING: "⚠️",
    logging.ERROR: "❌",
    logging.CRITICAL: "💥",
}


class _ConsoleHandler(logging.StreamHandler):
    """Marks the stderr handler this module installs."""


class _ConsoleEmojiFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        record.level_prefix = _LEVEL_PREFIXES.get(record.levelno, "")
        return super().format(record)


def debug_enabled() -> bool:
    return bool(os.environ.get(_DEBUG_ENV))


def get_log_dir() -> Path:
    configured = os.environ.get(_LOG_DIR_ENV)
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".cache" / "longscore" / "logs"


def get_log_path() -> Path:
    return get_log_dir() / _LOG_FILE


def configure_logging(*, log_file: bool | None = None) -> None:
    """Attach longscore's console and file handlers.

    An application that already configured the root logger keeps control of
    output: no console handler is added, and the log file is only opened when
    ``log_file`` is True. With ``log_file=None`` the file is used only when the
    root logger is bare. Safe to call repeatedly; the file handler follows
    ``LONGSCORE_LOG_DIR`` if it changes between calls.
    """

    logger = logging.getLogger("longscore")
    logger.setLevel(logging.DEBUG)
    root_configured = bool(logging.getLogger().handlers)

    has_console = any(isinstance(handler, _ConsoleHandler) for handler in logger.handlers)
    if not root_configured and not has_console:
        console_handler = _ConsoleHandler(stream=sys.__stderr__)
        console_handler.setLevel(logging.DEBUG if debug_enabled() else logging.INFO)
        console_handler.setFormatter(_ConsoleEmojiFormatter(_CONSOLE_FORMAT))
        logger.addHandler(console_handler)

    want_file = (not root_configured) if log_file is None else log_file
    if want_file:
        _attach_file_handler(logger, get_log_path())

    # Allow app/test harness handlers to capture logs.
    logger.propagate = True


def _attach_file_handler(logger: logging.Logger, path: Path) -> None:
    target = os.path.abspath(path)
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.FileHandler):
            continue
        if handler.baseFilename == target:
            return
        logger.removeHandler(handler)
        handler.close()

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
    except OSError as exc:
        _LOGGER.warning("Failed to configure file logging: %s", exc, exc_info=True)
        return
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATE_FORMAT))
    logger.addHandler(file_handler)


def _failed_segment(exc: BaseException) -> SegmentError | None:
    current: BaseException | None = exc
    while current is not None:
        if isinstance(current, SegmentError):
            return current
        current = current.__cause__
    return None


def log_exception(context: str, exc: BaseException) -> Path | None:
    try:
        path = get_log_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().isoformat()
        with path.open("a", encoding="utf-8") as handle:
            handle.write(f"[{timestamp}] {context} failed: {type(exc).__name__}: {exc}\n")
            segment = _failed_segment(exc)
            if segment is not None:
                handle.write(
                    f"  segment index: {segment.index} "
                    f"(cause: {type(segment.cause).__name__}: {segment.cause})\n"
                )
            traceback.print_exception(type(exc), exc, exc.__traceback__, file=handle)
            handle.write("\n")
        return path
    except OSError as log_exc:
        _LOGGER.warning("Failed to write log file: %s", log_exc, exc_info=True)
        return None
