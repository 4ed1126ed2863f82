"""Levelled logging to a text stream, with every line tagged by its source."""

from __future__ import annotations

import sys
from enum import IntEnum
from typing import Any, Optional, TextIO


class Level(IntEnum):
    """Verbosity of a logger.

    A message of a given kind is written when the logger's level is at least
    that kind's level; INFO messages are always written.
    """

    INFO = 0
    WARN = 1
    ERROR = 2
    DEBUG = 3


class Logger:
    """Writes lines of the form ``[src][TAG] message``."""

    def __init__(
        self,
        src: str = "MouseyBox",
        dest: Optional[TextIO] = None,
        level: Level = Level.DEBUG,
    ) -> None:
        self.src = src
        self.dest = dest
        self.level = Level(level)

    @property
    def stream(self) -> TextIO:
        """The stream written to; standard error when no destination is set."""
        return self.dest if self.dest is not None else sys.stderr

    def _emit(
        self,
        threshold: Optional[Level],
        src: str,
        tag: str,
        message: str,
        args: tuple[Any, ...],
    ) -> None:
        if threshold is not None and self.level < threshold:
            return
        text = str(message).format(*args)
        self.stream.write(f"[{src}][{tag}] {text}\n")

    def error(self, message: str, *args: Any) -> None:
        self._emit(Level.ERROR, self.src, "ERROR", message, args)

    def warn(self, message: str, *args: Any) -> None:
        self._emit(Level.WARN, self.src, "WARN", message, args)

    def debug(self, message: str, *args: Any) -> None:
        self._emit(Level.DEBUG, self.src, "DEBUG", message, args)

    def info(self, message: str, *args: Any) -> None:
        self._emit(None, self.src, "INFO", message, args)

    def error_from(self, src: str, message: str, *args: Any) -> None:
        self._emit(Level.ERROR, src, "ERROR", message, args)

    def warn_from(self, src: str, message: str, *args: Any) -> None:
        self._emit(Level.WARN, src, "WARN", message, args)

    def debug_from(self, src: str, message: str, *args: Any) -> None:
        self._emit(Level.DEBUG, src, "DEBUG", message, args)

    def info_from(self, src: str, message: str, *args: Any) -> None:
        self._emit(None, src, "INFO", message, args)


_default = Logger()


def get_logger() -> Logger:
    """Return the shared logger used by the module-level functions."""
    return _default


def set_level(level: Level) -> None:
    _default.level = Level(level)


def set_src(src: str) -> None:
    _default.src = src


def error(message: str, *args: Any) -> None:
    _default.error(message, *args)


def warn(message: str, *args: Any) -> None:
    _default.warn(message, *args)


def debug(message: str, *args: Any) -> None:
    _default.debug(message, *args)


def info(message: str, *args: Any) -> None:
    _default.info(message, *args)