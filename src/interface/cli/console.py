"""Console implementation of the text channel."""
from __future__ import annotations

import sys
from typing import TextIO

from src.core.errors import InputExhaustedError


class ConsoleChannel:
    """Read answers from ``stdin`` and talk back on ``stdout``/``stderr``."""

    def __init__(
        self,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._stderr = stderr or sys.stderr

    def read_line(self, prompt: str = "") -> str:
        if prompt:
            self._stdout.write(prompt)
            self._stdout.flush()
        line = self._stdin.readline()
        if line == "":
            raise InputExhaustedError("The input stream was closed while waiting for an answer.")
        return line.rstrip("\r\n")

    def write(self, text: str = "", end: str = "\n") -> None:
        self._stdout.write(f"{text}{end}")
        self._stdout.flush()

    def warn(self, text: str) -> None:
        self._stderr.write(f"{text}\n")
        self._stderr.flush()


__all__ = ["ConsoleChannel"]
