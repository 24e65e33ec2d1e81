"""Unit tests for the domain entities."""
from __future__ import annotations

from datetime import datetime

import pytest

from src.core.entities import (
    NO_COMMENTS,
    RATING_SKIPPED,
    EmergencyType,
    FeedbackRecord,
    IncidentReport,
    Profile,
)


def make_report(**overrides) -> IncidentReport:
    values = {
        "emergency_type": EmergencyType.FIRE,
        "location": "Calle Mayor 3",
        "severity": 6,
        "user_snapshot": "Nombre: Test",
        "created_at": datetime(2024, 5, 1, 10, 15, 0),
    }
    values.update(overrides)
    return IncidentReport(**values)


def test_emergency_type_menu_maps_all_five_options() -> None:
    labels = [EmergencyType.from_menu_choice(str(key)).label for key in range(1, 6)]

    assert labels == ["Accidente de tráfico", "Problema médico", "Incendio", "Agresión", "Otro"]
    assert EmergencyType.from_menu_choice("6") is None
    assert EmergencyType.from_menu_choice("abc") is None


def test_emergency_type_carries_protocol_and_services() -> None:
    medical = EmergencyType.MEDICAL_PROBLEM

    assert medical.response_protocol.startswith("PROTOCOLO DE EMERGENCIA MÉDICA")
    assert "Equipo Médico de Urgencias" in medical.required_services
    assert EmergencyType.from_label("problema médico") is medical
    with pytest.raises(ValueError):
        EmergencyType.from_label("Inundación")


def test_profile_render_lists_every_field() -> None:
    profile = Profile("Ana", "600123456", "Ninguna", "Luis: 600000000")

    assert profile.render().splitlines() == [
        "Nombre: Ana",
        "Teléfono: 600123456",
        "Contacto de emergencia: Luis: 600000000",
        "Información médica: Ninguna",
    ]


@pytest.mark.parametrize("severity", [0, 11, -3])
def test_incident_report_rejects_out_of_range_severity(severity: int) -> None:
    with pytest.raises(ValueError):
        make_report(severity=severity)


def test_incident_report_rejects_blank_location() -> None:
    with pytest.raises(ValueError):
        make_report(location="   ")


def test_with_id_returns_copy_and_cannot_be_repeated() -> None:
    report = make_report()

    stored = report.with_id("abc")

    assert report.incident_id is None
    assert stored.incident_id == "abc"
    assert stored.created_at == report.created_at
    with pytest.raises(ValueError):
        stored.with_id("other")


def test_incident_report_record_round_trip() -> None:
    report = make_report().with_id("abc")

    record = report.to_record()

    assert record == {
        "id": "abc",
        "emergencyType": "Incendio",
        "location": "Calle Mayor 3",
        "severityLevel": 6,
        "timestamp": "2024-05-01T10:15:00",
        "userData": "Nombre: Test",
    }
    assert IncidentReport.from_record(record) == report


def test_feedback_defaults_blank_comments_and_supports_skip() -> None:
    feedback = FeedbackRecord(incident_id="abc", satisfaction_rating=RATING_SKIPPED, comments="  ")

    assert feedback.comments == NO_COMMENTS
    assert feedback.skipped


@pytest.mark.parametrize("rating", [6, -1])
def test_feedback_rejects_invalid_rating(rating: int) -> None:
    with pytest.raises(ValueError):
        FeedbackRecord(incident_id="abc", satisfaction_rating=rating)


def test_feedback_requires_incident_id() -> None:
    with pytest.raises(ValueError):
        FeedbackRecord(incident_id="", satisfaction_rating=3)
