"""Pytest configuration for the project."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Iterable

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

for candidate in (ROOT, SRC):
    if str(candidate) not in sys.path:
        sys.path.insert(0, str(candidate))

from src.core.entities import Profile  # noqa: E402
from src.core.errors import InputExhaustedError  # noqa: E402


class ScriptedChannel:
    """Text channel fed from a fixed list of answers."""

    def __init__(self, answers: Iterable[str]) -> None:
        self._answers = list(answers)
        self.prompts: list[str] = []
        self.lines: list[str] = []
        self.warnings: list[str] = []

    def read_line(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self._answers:
            raise InputExhaustedError("scripted input exhausted")
        return self._answers.pop(0)

    def write(self, text: str = "", end: str = "\n") -> None:
        self.lines.append(text)

    def warn(self, text: str) -> None:
        self.warnings.append(text)

    @property
    def remaining(self) -> int:
        return len(self._answers)

    @property
    def output(self) -> str:
        return "\n".join(self.lines)

    def prompts_containing(self, fragment: str) -> list[str]:
        return [prompt for prompt in self.prompts if fragment in prompt]


@pytest.fixture
def scripted_channel() -> Callable[..., ScriptedChannel]:
    def factory(*answers: str) -> ScriptedChannel:
        return ScriptedChannel(answers)

    return factory


@pytest.fixture
def profile() -> Profile:
    return Profile(
        full_name="Lucía Martínez",
        phone_number="600 123 456",
        medical_info="Alergia a la penicilina",
        emergency_contact="Ana Martínez: 600 654 321",
    )
