"""Top-level use case driving one interactive reporting session."""
from __future__ import annotations

from typing import Optional, Protocol

from src.core.entities import DispatchResult, FeedbackRecord, IncidentReport, Profile
from src.core.errors import InputExhaustedError, PersistenceError
from src.core.ports import TextChannel
from src.utils.logger import logger
from src.utils.text_cleaning import is_affirmative


class ProfileSource(Protocol):
    def collect(self, channel: TextChannel) -> Profile:
        ...


class EmergencyDetector(Protocol):
    def detect(self, channel: TextChannel, profile: Profile) -> Optional[IncidentReport]:
        ...


class IncidentRepository(Protocol):
    def save_incident(self, report: IncidentReport) -> str:
        ...


class Dispatcher(Protocol):
    def dispatch(self, report: IncidentReport) -> DispatchResult:
        ...

    def notify(self, profile: Profile, report: IncidentReport) -> None:
        ...


class FeedbackCollector(Protocol):
    def execute(self, channel: TextChannel, incident_id: str) -> FeedbackRecord:
        ...


class RunSessionUseCase:
    """Collect the profile once, then loop detect → persist → alert → notify → feedback.

    An exception raised while handling one emergency is reported and the
    session moves on to the "another action?" prompt. Only input exhaustion
    ends the session abruptly.
    """

    def __init__(
        self,
        profile_source: ProfileSource,
        detector: EmergencyDetector,
        repository: IncidentRepository,
        dispatcher: Dispatcher,
        feedback: FeedbackCollector,
        emergency_number: str = "112",
    ) -> None:
        self._profile_source = profile_source
        self._detector = detector
        self._repository = repository
        self._dispatcher = dispatcher
        self._feedback = feedback
        self._emergency_number = emergency_number

    def run(self, channel: TextChannel) -> int:
        """Run the session and return how many incidents were reported."""
        channel.write("Sistema de Gestión de Emergencias - Iniciado")
        channel.write("=" * 41)

        profile = self._profile_source.collect(channel)
        reported = 0

        while True:
            try:
                if self._handle_emergency(channel, profile):
                    reported += 1
            except InputExhaustedError:
                raise
            except PersistenceError as error:
                logger.error("Incident could not be persisted: {}", error)
                channel.warn(f"❌ Error al registrar la emergencia: {error}")
                channel.warn(
                    f"Por favor, llame al {self._emergency_number} manualmente."
                )
            except Exception as error:  # noqa: BLE001
                logger.exception("Unexpected error while handling an emergency")
                channel.warn(f"❌ Error inesperado: {error}")

            answer = channel.read_line("\n¿Desea realizar otra acción? (S/N): ")
            if not is_affirmative(answer):
                channel.write("\nSaliendo del sistema de emergencias. ¡Hasta pronto!")
                break
            channel.write("\n" + "=" * 80 + "\n")

        logger.info("Session finished with {} reported incident(s)", reported)
        return reported

    def _handle_emergency(self, channel: TextChannel, profile: Profile) -> bool:
        report = self._detector.detect(channel, profile)
        if report is None:
            return False

        incident_id = self._repository.save_incident(report)
        stored = report.with_id(incident_id)
        result = self._dispatcher.dispatch(stored)

        if not result.success:
            channel.warn(
                "\nNo se pudo enviar la alerta. Por favor, intente nuevamente o llame al "
                f"{self._emergency_number} manualmente."
            )
            return True

        self._dispatcher.notify(profile, stored)
        channel.write("\n¡Emergencia reportada con éxito!")
        channel.write(f"Se ha creado un registro de la emergencia en el sistema (ID: {incident_id}).")
        self._feedback.execute(channel, incident_id)
        return True


__all__ = ["RunSessionUseCase"]
