"""Input event model — the record handed to the encoder."""

import logging
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Level(Enum):
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    FATAL = 50

    def __str__(self) -> str:
        return self.name

    @classmethod
    def from_levelno(cls, levelno: int) -> "Level":
        """Map a stdlib ``logging`` level number to the closest level at or below it."""
        if levelno >= logging.CRITICAL:
            return cls.FATAL
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARN
        if levelno >= logging.INFO:
            return cls.INFO
        if levelno >= logging.DEBUG:
            return cls.DEBUG
        return cls.TRACE


@dataclass(frozen=True)
class ThrownInfo:
    class_name: str | None
    message: str | None
    stacktrace: str | None  # error and its cause chain, already rendered

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ThrownInfo":
        exc_type = type(exc)
        if exc_type.__module__ == "builtins":
            class_name = exc_type.__qualname__
        else:
            class_name = f"{exc_type.__module__}.{exc_type.__qualname__}"
        text = str(exc)
        return cls(
            class_name=class_name,
            message=text or None,
            stacktrace="".join(traceback.format_exception(exc_type, exc, exc.__traceback__)),
        )


@dataclass(frozen=True)
class SourceLocation:
    file: str | None
    line: int | None
    class_name: str | None
    method: str | None


@dataclass(frozen=True)
class LogEvent:
    message: str
    timestamp_millis: int
    level: Level
    logger_name: str
    thread_name: str
    thrown: ThrownInfo | None = None
    context_map: dict[str, Any] | None = None
    context_stack: list[str] | None = None
    source: SourceLocation | None = None
