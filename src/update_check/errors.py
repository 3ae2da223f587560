"""Error types and the validation error collector."""
from __future__ import annotations


class FetchError(RuntimeError):
    """The version file could not be retrieved."""


class ManifestTypeError(ValueError):
    """A version file value has the wrong JSON type."""


class ErrorCollector:
    """Append-only collection of validation messages.

    Parsers record every failure here instead of raising, so a single pass
    reports all problems in a document.
    """

    def __init__(self):
        self._messages: list[str] = []

    def append(self, message: str) -> None:
        self._messages.append(message)

    @property
    def messages(self) -> list[str]:
        return list(self._messages)

    @property
    def message(self) -> str:
        return "".join(self._messages)

    def __bool__(self) -> bool:
        return bool(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __repr__(self) -> str:
        return f"ErrorCollector({self._messages!r})"
