"""The single error type raised throughout the engine."""

from __future__ import annotations

import json
import tomllib


class EmeraldError(Exception):
    """An engine error carrying a human readable message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = str(message)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"EmeraldError({self.message!r})"

    @classmethod
    def from_exception(cls, exc: BaseException) -> "EmeraldError":
        """Wrap another exception, naming the kind of failure in the message."""
        if isinstance(exc, EmeraldError):
            return exc

        text = json.dumps(str(exc))
        if isinstance(exc, json.JSONDecodeError):
            message = f"json error {text}"
        elif isinstance(exc, tomllib.TOMLDecodeError):
            message = f"toml error {text}"
        elif isinstance(exc, UnicodeError):
            message = f"utf8 error {text}"
        elif isinstance(exc, OSError):
            message = f"io error {text}"
        else:
            message = f"{type(exc).__name__} {text}"

        error = cls(message)
        error.__cause__ = exc
        return error