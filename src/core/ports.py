"""Interfaces the use cases depend on."""
from __future__ import annotations

from typing import Protocol


class TextChannel(Protocol):
    """Line-oriented conversation with the user.

    ``read_line`` shows ``prompt`` and returns exactly one line without its
    trailing newline. It raises ``InputExhaustedError`` at end-of-stream.
    """

    def read_line(self, prompt: str = "") -> str:
        ...

    def write(self, text: str = "", end: str = "\n") -> None:
        ...

    def warn(self, text: str) -> None:
        ...


__all__ = ["TextChannel"]
