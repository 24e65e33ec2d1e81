"""Run the emergency reporting assistant from a source checkout."""
from __future__ import annotations

import sys
from pathlib import Path

if __package__ is None or __package__ == "":
    _PROJECT_ROOT = str(Path(__file__).resolve().parents[1])
    if _PROJECT_ROOT not in sys.path:
        sys.path.insert(0, _PROJECT_ROOT)

from src.interface.cli.app import main  # noqa: E402


if __name__ == "__main__":
    sys.exit(main())
