"""Core entities for the emergency reporting domain."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"
MEDICAL_INFO_NOT_SPECIFIED = "No especificada"
NO_COMMENTS = "Sin comentarios"
RATING_SKIPPED = 0
MIN_SEVERITY = 1
MAX_SEVERITY = 10
MIN_RATING = 1
MAX_RATING = 5


def _now() -> datetime:
    # Persisted timestamps carry whole seconds only.
    return datetime.now().replace(microsecond=0)


class EmergencyType(Enum):
    """Closed set of emergency categories with their response metadata."""

    TRAFFIC_ACCIDENT = (
        "1",
        "Accidente de tráfico",
        7,
        "PROTOCOLO DE ACCIDENTE DE TRÁFICO:\n"
        "1. Señalizar la zona para evitar nuevos impactos.\n"
        "2. No mover a los heridos salvo peligro inminente.\n"
        "3. Apagar el motor de los vehículos implicados.\n"
        "4. Esperar a los servicios de emergencia en lugar seguro.",
        ("Ambulancia", "Policía Local", "Guardia Civil de Tráfico"),
    )
    MEDICAL_PROBLEM = (
        "2",
        "Problema médico",
        8,
        "PROTOCOLO DE EMERGENCIA MÉDICA:\n"
        "1. Evaluar la conciencia y respiración del paciente.\n"
        "2. Proporcionar primeros auxilios si es posible y seguro.\n"
        "3. No mover al paciente si hay sospecha de lesión espinal.\n"
        "4. Preparar para la llegada de la ambulancia.",
        ("Ambulancia de Soporte Vital Avanzado (SVA)", "Equipo Médico de Urgencias"),
    )
    FIRE = (
        "3",
        "Incendio",
        9,
        "PROTOCOLO DE INCENDIO:\n"
        "1. Abandonar el lugar por la salida más cercana sin usar ascensores.\n"
        "2. Cerrar puertas tras de sí para contener el fuego.\n"
        "3. Avanzar agachado si hay humo.\n"
        "4. No volver a entrar en el edificio.",
        ("Bomberos", "Ambulancia", "Policía Local"),
    )
    ASSAULT = (
        "4",
        "Agresión",
        8,
        "PROTOCOLO DE AGRESIÓN:\n"
        "1. Alejarse del agresor y buscar un lugar seguro.\n"
        "2. No enfrentarse ni perseguir al agresor.\n"
        "3. Memorizar rasgos del agresor y dirección de huida.\n"
        "4. Esperar a las fuerzas de seguridad.",
        ("Policía Nacional", "Ambulancia"),
    )
    OTHER = (
        "5",
        "Otro",
        5,
        "PROTOCOLO GENERAL:\n"
        "1. Mantener la calma y ponerse a salvo.\n"
        "2. Seguir las indicaciones del operador del 112.",
        ("Centro de Coordinación de Emergencias 112",),
    )

    def __init__(
        self,
        menu_key: str,
        label: str,
        priority: int,
        response_protocol: str,
        required_services: tuple[str, ...],
    ) -> None:
        self.menu_key = menu_key
        self.label = label
        self.priority = priority
        self.response_protocol = response_protocol
        self.required_services = required_services

    @classmethod
    def from_menu_choice(cls, choice: str) -> Optional["EmergencyType"]:
        for member in cls:
            if member.menu_key == choice.strip():
                return member
        return None

    @classmethod
    def from_label(cls, label: str) -> "EmergencyType":
        for member in cls:
            if member.label.casefold() == label.strip().casefold():
                return member
        raise ValueError(f"Unknown emergency type label: {label!r}")

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class Profile:
    """Identity, medical and contact data of the reporting user."""

    full_name: str
    phone_number: str
    medical_info: str = MEDICAL_INFO_NOT_SPECIFIED
    emergency_contact: str = ""

    def render(self) -> str:
        return (
            f"Nombre: {self.full_name}\n"
            f"Teléfono: {self.phone_number}\n"
            f"Contacto de emergencia: {self.emergency_contact}\n"
            f"Información médica: {self.medical_info}"
        )


@dataclass(frozen=True)
class IncidentReport:
    """A confirmed emergency. Only ``incident_id`` is assigned after creation."""

    emergency_type: EmergencyType
    location: str
    severity: int
    user_snapshot: str
    created_at: datetime = field(default_factory=_now)
    incident_id: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.emergency_type, EmergencyType):
            raise ValueError(f"Invalid emergency type: {self.emergency_type!r}")
        if not self.location.strip():
            raise ValueError("An incident report requires a non-empty location.")
        if not MIN_SEVERITY <= self.severity <= MAX_SEVERITY:
            raise ValueError(
                f"Severity must be between {MIN_SEVERITY} and {MAX_SEVERITY}, got {self.severity}."
            )

    def with_id(self, incident_id: str) -> "IncidentReport":
        if self.incident_id is not None:
            raise ValueError(f"Incident report already has identifier {self.incident_id}.")
        return replace(self, incident_id=incident_id)

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.incident_id,
            "emergencyType": self.emergency_type.label,
            "location": self.location,
            "severityLevel": self.severity,
            "timestamp": self.created_at.strftime(TIMESTAMP_FORMAT),
            "userData": self.user_snapshot,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "IncidentReport":
        return cls(
            emergency_type=EmergencyType.from_label(str(record["emergencyType"])),
            location=str(record["location"]),
            severity=int(record["severityLevel"]),
            user_snapshot=str(record.get("userData", "")),
            created_at=datetime.strptime(str(record["timestamp"]), TIMESTAMP_FORMAT),
            incident_id=record.get("id"),
        )

    def __str__(self) -> str:
        first_line = self.user_snapshot.split("\n", 1)[0]
        return (
            f"[{self.created_at:%Y-%m-%d %H:%M}] Emergencia: {self.emergency_type.label}, "
            f"Ubicación: {self.location}, Gravedad: {self.severity}, Usuario: {first_line}"
        )


@dataclass(frozen=True)
class FeedbackRecord:
    """Post-incident satisfaction entry linked to a persisted incident."""

    incident_id: str
    satisfaction_rating: int = RATING_SKIPPED
    comments: str = NO_COMMENTS
    feedback_time: datetime = field(default_factory=_now)

    def __post_init__(self) -> None:
        if not self.incident_id:
            raise ValueError("Feedback must reference a persisted incident identifier.")
        if self.satisfaction_rating != RATING_SKIPPED and not (
            MIN_RATING <= self.satisfaction_rating <= MAX_RATING
        ):
            raise ValueError(
                f"Satisfaction rating must be between {MIN_RATING} and {MAX_RATING}, "
                f"got {self.satisfaction_rating}."
            )
        if not self.comments.strip():
            object.__setattr__(self, "comments", NO_COMMENTS)

    @property
    def skipped(self) -> bool:
        return self.satisfaction_rating == RATING_SKIPPED

    def to_record(self) -> dict[str, Any]:
        return {
            "emergencyId": self.incident_id,
            "satisfactionRating": self.satisfaction_rating,
            "comments": self.comments,
            "feedbackTime": self.feedback_time.strftime(TIMESTAMP_FORMAT),
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "FeedbackRecord":
        return cls(
            incident_id=str(record["emergencyId"]),
            satisfaction_rating=int(record.get("satisfactionRating", RATING_SKIPPED)),
            comments=str(record.get("comments", NO_COMMENTS)),
            feedback_time=datetime.strptime(str(record["feedbackTime"]), TIMESTAMP_FORMAT),
        )


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of a simulated alert dispatch."""

    success: bool
    channel: str = ""


@dataclass(frozen=True)
class HealthCenter:
    """Entry of the regional health-center catalogue."""

    code: str
    name: str
    address: str = ""
    municipality: str = ""
    phone: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def __str__(self) -> str:
        return f"{self.name} (Municipio: {self.municipality}, Tel: {self.phone})"


__all__ = [
    "DispatchResult",
    "EmergencyType",
    "FeedbackRecord",
    "HealthCenter",
    "IncidentReport",
    "MAX_RATING",
    "MAX_SEVERITY",
    "MEDICAL_INFO_NOT_SPECIFIED",
    "MIN_RATING",
    "MIN_SEVERITY",
    "NO_COMMENTS",
    "Profile",
    "RATING_SKIPPED",
    "TIMESTAMP_FORMAT",
]
