"""JSON persistence for incident reports and feedback records.

Each collection lives in a single JSON array that is read, extended and
rewritten in full on every save. The store assumes a single process with one
operation in flight; concurrent writers would need a lock around it.
"""
from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Callable
from uuid import uuid4

from src.core.entities import FeedbackRecord, IncidentReport
from src.core.errors import PersistenceError
from src.utils.logger import logger


class JsonRecordStore:
    """Whole-collection-rewrite store for incidents and feedback."""

    def __init__(
        self,
        logs_dir: Path,
        incidents_file: str = "emergency_history.json",
        feedback_file: str = "user_feedback.json",
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._logs_dir = logs_dir
        self.incidents_path = logs_dir / incidents_file
        self.feedback_path = logs_dir / feedback_file
        self._id_factory = id_factory or (lambda: str(uuid4()))

    def save_incident(self, report: IncidentReport) -> str:
        """Assign a fresh identifier to ``report``, append it and return the identifier."""
        incident_id = self._id_factory()
        stored = report.with_id(incident_id)

        records = self._read_collection(self.incidents_path)
        records.append(stored.to_record())
        self._write_collection(self.incidents_path, records)

        logger.info("Incident {} persisted ({} total)", incident_id, len(records))
        return incident_id

    def save_feedback(self, feedback: FeedbackRecord) -> None:
        """Append ``feedback``; its incident must already be in the incident history."""
        known_ids = {
            record.get("id") for record in self._read_collection(self.incidents_path) if isinstance(record, dict)
        }
        if feedback.incident_id not in known_ids:
            raise PersistenceError(
                f"Feedback refers to unknown incident {feedback.incident_id!r}; nothing was saved."
            )

        records = self._read_collection(self.feedback_path)
        records.append(feedback.to_record())
        self._write_collection(self.feedback_path, records)
        logger.info("Feedback for incident {} persisted", feedback.incident_id)

    def load_incidents(self) -> list[IncidentReport]:
        return [IncidentReport.from_record(record) for record in self._read_collection(self.incidents_path)]

    def load_feedback(self) -> list[FeedbackRecord]:
        return [FeedbackRecord.from_record(record) for record in self._read_collection(self.feedback_path)]

    def ensure_logs_dir(self) -> Path:
        """Create the logs directory if needed. Safe to call repeatedly."""
        try:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise PersistenceError(f"Could not create logs directory {self._logs_dir}: {error}") from error
        return self._logs_dir

    @staticmethod
    def _read_collection(path: Path) -> list[dict[str, Any]]:
        if not path.exists() or path.stat().st_size == 0:
            return []

        try:
            with path.open("r", encoding="utf-8") as file:
                payload = json.load(file)
        except (OSError, json.JSONDecodeError) as error:
            raise PersistenceError(f"Could not read record collection {path}: {error}") from error

        if not isinstance(payload, list):
            raise PersistenceError(f"Record collection {path} does not contain a JSON array.")
        return payload

    def _write_collection(self, path: Path, records: list[dict[str, Any]]) -> None:
        self.ensure_logs_dir()
        try:
            handle, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
            try:
                with os.fdopen(handle, "w", encoding="utf-8") as file:
                    json.dump(records, file, ensure_ascii=False, indent=2)
                    file.write("\n")
                os.replace(temp_name, path)
            except BaseException:
                Path(temp_name).unlink(missing_ok=True)
                raise
        except OSError as error:
            raise PersistenceError(f"Could not write record collection {path}: {error}") from error


__all__ = ["JsonRecordStore"]
