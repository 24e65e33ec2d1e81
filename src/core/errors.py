"""Domain errors raised across the assistant's layers."""
from __future__ import annotations


class InputExhaustedError(RuntimeError):
    """The input channel reached end-of-stream while an answer was required."""


class PersistenceError(RuntimeError):
    """A record collection could not be read or written."""


__all__ = ["InputExhaustedError", "PersistenceError"]
