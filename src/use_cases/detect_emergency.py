"""Use case guiding the user through the definition of an emergency."""
from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional, Protocol

from src.core.entities import MAX_SEVERITY, MIN_SEVERITY, EmergencyType, IncidentReport, Profile
from src.core.ports import TextChannel
from src.infrastructure.geo.location import LocationFix
from src.infrastructure.health.centers import HealthCenterSuggestion, format_suggestions
from src.utils.logger import logger
from src.utils.text_cleaning import is_affirmative, parse_whole_number


class HealthCenterFinder(Protocol):
    def applies_to(self, location_text: str) -> bool:
        ...

    def nearest(
        self, origin: tuple[float, float] | None, limit: int = 3
    ) -> list[HealthCenterSuggestion]:
        ...


class LocationProvider(Protocol):
    def request_permission(self) -> bool:
        ...

    def current_fix(self) -> LocationFix:
        ...


class DetectEmergencyUseCase:
    """Ask whether there is an emergency and collect its type, location and severity.

    The conversation is a fixed sequence of gates: active emergency, type menu,
    location, severity and final confirmation. Invalid answers repeat the
    current question; a negative answer at either yes/no gate cancels the whole
    report and ``detect`` returns ``None``.
    """

    def __init__(
        self,
        health_centers: HealthCenterFinder | None = None,
        location_provider: LocationProvider | None = None,
        max_suggestions: int = 3,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._health_centers = health_centers
        self._location_provider = location_provider
        self._max_suggestions = max_suggestions
        self._clock = clock or datetime.now

    def detect(self, channel: TextChannel, profile: Profile) -> Optional[IncidentReport]:
        channel.write("\n=== DETECCIÓN DE EMERGENCIA ===")
        if not is_affirmative(channel.read_line("¿Estás en una situación de emergencia? (S/N): ")):
            return self._cancel(channel)

        emergency_type = self._ask_type(channel)
        location = self._ask_location(channel)
        self._offer_health_centers(channel, location)
        severity = self._ask_severity(channel)

        if not self._confirm(channel, emergency_type, location, severity):
            return self._cancel(channel)

        report = IncidentReport(
            emergency_type=emergency_type,
            location=location,
            severity=severity,
            user_snapshot=profile.render(),
            created_at=self._clock().replace(microsecond=0),
        )
        logger.info("Emergency confirmed: {}", report)
        return report

    @staticmethod
    def _cancel(channel: TextChannel) -> None:
        channel.write("Proceso cancelado por el usuario.")
        logger.info("Emergency detection cancelled by the user")
        return None

    @staticmethod
    def _ask_type(channel: TextChannel) -> EmergencyType:
        while True:
            channel.write("\nTipos de emergencia disponibles:")
            for member in EmergencyType:
                channel.write(f"{member.menu_key}. {member.label}")
            choice = channel.read_line(f"Seleccione el tipo de emergencia (1-{len(EmergencyType)}): ")
            emergency_type = EmergencyType.from_menu_choice(choice)
            if emergency_type is not None:
                return emergency_type
            channel.warn(
                f"⚠️  Opción no válida. Por favor, ingrese un número entre 1 y {len(EmergencyType)}."
            )

    @staticmethod
    def _ask_location(channel: TextChannel) -> str:
        while True:
            location = channel.read_line("\nUbicación actual de la emergencia (obligatorio): ").strip()
            if location:
                return location
            channel.warn("⚠️  Error: La ubicación no puede estar vacía. Intente nuevamente.")

    @staticmethod
    def _ask_severity(channel: TextChannel) -> int:
        while True:
            answer = channel.read_line(f"\nNivel de gravedad ({MIN_SEVERITY}-{MAX_SEVERITY}): ")
            severity = parse_whole_number(answer)
            if severity is None:
                channel.warn("⚠️  Por favor, ingrese un número válido.")
                continue

            if MIN_SEVERITY <= severity <= MAX_SEVERITY:
                return severity
            channel.warn(f"⚠️  Por favor, ingrese un valor entre {MIN_SEVERITY} y {MAX_SEVERITY}.")

    @staticmethod
    def _confirm(
        channel: TextChannel, emergency_type: EmergencyType, location: str, severity: int
    ) -> bool:
        channel.write("\n=== RESUMEN DE LA EMERGENCIA ===")
        channel.write(f"Tipo: {emergency_type.label}")
        channel.write(f"Ubicación: {location}")
        channel.write(f"Nivel de gravedad: {severity}/{MAX_SEVERITY}")
        return is_affirmative(channel.read_line("\n¿Confirmar y enviar alerta de emergencia? (S/N): "))

    def _offer_health_centers(self, channel: TextChannel, location: str) -> None:
        if self._health_centers is None or not self._health_centers.applies_to(location):
            return

        origin: tuple[float, float] | None = None
        if self._location_provider is not None:
            self._location_provider.request_permission()
            fix = self._location_provider.current_fix()
            origin = (fix.latitude, fix.longitude)

        suggestions = self._health_centers.nearest(origin, limit=self._max_suggestions)
        if not suggestions:
            return

        logger.debug("Offering {} health centers for location '{}'", len(suggestions), location)
        channel.write("\n🏥 Centros de salud cercanos:")
        for line in format_suggestions(suggestions):
            channel.write(line)


__all__ = ["DetectEmergencyUseCase", "HealthCenterFinder", "LocationProvider"]
