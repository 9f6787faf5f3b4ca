"""A log that appends queued messages to a file, one per line."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import TextIO

from .errors import EmeraldError

DEFAULT_LOG_FILE_PATH = "./emerald.log"


class LogLevel(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LoggingEngine:
    """Queues messages and writes them out on every update.

    Pass ``path=None`` to keep messages without writing them anywhere.
    """

    def __init__(self, path: str | Path | None = DEFAULT_LOG_FILE_PATH) -> None:
        self._logs: list[tuple[LogLevel, str]] = []
        self._file: TextIO | None = None
        if path is not None:
            try:
                self._file = open(path, "a", encoding="utf-8", buffering=1)
            except OSError as exc:
                raise EmeraldError.from_exception(exc) from exc

    def update(self) -> None:
        """Write every queued message to the file and clear the queue."""
        if self._file is not None:
            try:
                for _level, message in self._logs:
                    self._file.write(message)
                    self._file.write("\n")
                self._file.flush()
            except (OSError, ValueError) as exc:
                raise EmeraldError.from_exception(exc) from exc
        self._logs.clear()

    def _log(self, level: LogLevel, message: str) -> None:
        self._logs.append((level, str(message)))
        self.update()

    def info(self, message: str) -> None:
        self._log(LogLevel.INFO, message)

    def warning(self, message: str) -> None:
        self._log(LogLevel.WARNING, message)

    def error(self, message: str) -> None:
        self._log(LogLevel.ERROR, message)

    def close(self) -> None:
        """Close the log file; later messages are no longer written."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "LoggingEngine":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()