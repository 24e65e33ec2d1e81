"""Simulated alert delivery channels.

Every channel satisfies the ``AlertChannel`` protocol. They share the audit log
and the connection simulator by composition.
"""
from __future__ import annotations

import time
from pathlib import Path
from typing import Callable, Protocol

from src.core.entities import MAX_SEVERITY, IncidentReport, Profile
from src.core.ports import TextChannel
from src.utils.logger import logger

DISPLAY_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_EMERGENCY_NUMBER = "112"


class AlertChannel(Protocol):
    def send(self, report: IncidentReport) -> bool:
        ...

    def notify(self, profile: Profile, report: IncidentReport) -> None:
        ...

    def describe(self) -> str:
        ...


class AuditLog:
    """Append-only plain-text log of dispatched alerts. Write failures are not fatal."""

    SEPARATOR = "=" * 80

    def __init__(self, path: Path, output: TextChannel) -> None:
        self.path = path
        self._output = output

    def append(self, alert_text: str) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as file:
                file.write(f"{self.SEPARATOR}\n{alert_text}\n\n")
        except OSError as error:
            logger.error("Could not append alert to {}: {}", self.path, error)
            self._output.warn(
                f"❌ Error crítico: No se pudo guardar la alerta en el archivo de log: {error}"
            )
            return False
        return True


class ConnectionSimulator:
    """Blocking, fixed-interval wait that stands in for dialling an emergency line.

    A ``KeyboardInterrupt`` raised while waiting cancels the connection.
    """

    def __init__(
        self,
        output: TextChannel,
        pauses: int = 3,
        pause_seconds: float = 0.4,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._output = output
        self._pauses = pauses
        self._pause_seconds = pause_seconds
        self._sleep = sleep

    def connect(self, intro: str) -> bool:
        self._output.write(f"\n{intro}")
        try:
            for _ in range(self._pauses):
                self._output.write(".", end="")
                self._sleep(self._pause_seconds)
        except KeyboardInterrupt:
            logger.info("Simulated emergency connection interrupted")
            self._output.write()
            return False
        self._output.write()
        return True


def _alert_header(report: IncidentReport) -> str:
    return f"[{report.created_at.strftime(DISPLAY_TIMESTAMP_FORMAT)}] ALERTA DE EMERGENCIA"


class StandardAlertChannel:
    """Generic alert system: full alert with profile snapshot, then a simulated line."""

    def __init__(
        self,
        output: TextChannel,
        audit_log: AuditLog,
        connection: ConnectionSimulator,
        emergency_number: str = DEFAULT_EMERGENCY_NUMBER,
    ) -> None:
        self._output = output
        self._audit_log = audit_log
        self._connection = connection
        self._emergency_number = emergency_number

    def describe(self) -> str:
        return "Sistema de Alertas de Emergencia Estándar"

    def format_alert(self, report: IncidentReport) -> str:
        return (
            f"{_alert_header(report)}\n"
            f"Tipo: {report.emergency_type.label}\n"
            f"Ubicación: {report.location}\n"
            f"Nivel de gravedad: {report.severity}/{MAX_SEVERITY}\n"
            f"\n--- INFORMACIÓN DEL USUARIO ---\n{report.user_snapshot}"
        )

    def send(self, report: IncidentReport) -> bool:
        alert_text = self.format_alert(report)
        self._output.write("\n=== ALERTA ENVIADA A SERVICIOS DE EMERGENCIA ===")
        self._output.write(alert_text)
        self._audit_log.append(alert_text)

        connected = self._connection.connect(
            f"Conectando con el servicio de emergencias {self._emergency_number}..."
        )
        if not connected:
            self._output.warn("\n❌ Error: La conexión con el servicio de emergencias fue interrumpida.")
            return False

        self._output.write("\n✅ ¡Conexión establecida con el centro de emergencias!")
        self._output.write('   Operador: "Emergencias, ¿cuál es su situación?"')
        self._output.write('   Sistema: "Se reporta una emergencia automatizada."')
        self._output.write(f"   - Tipo: {report.emergency_type.label}")
        self._output.write(f"   - Ubicación: {report.location}")
        self._output.write("\n✅ ¡Ayuda en camino! Los servicios de emergencia han sido despachados.")
        return True

    def notify(self, profile: Profile, report: IncidentReport) -> None:
        self._output.write("\n--- Notificando a Contactos de Emergencia ---")
        if not profile.emergency_contact.strip():
            logger.info("No emergency contact configured; notification skipped")
            self._output.warn("⚠️  No hay contactos de emergencia configurados para notificar.")
            return

        self._output.write(f"✅ Notificación enviada a: {profile.emergency_contact}")
        self._output.write("   Detalles enviados:")
        self._output.write(f"   - Tipo de emergencia: {report.emergency_type.label}")
        self._output.write(f"   - Ubicación: {report.location}")
        self._output.write("-" * 43)
        logger.info("Emergency contact notified for a {} alert", report.emergency_type.label)


class PhoneCallAlertChannel:
    """Phone-call simulation: compact alert, dialling sequence, call to the contact."""

    def __init__(
        self,
        output: TextChannel,
        audit_log: AuditLog,
        connection: ConnectionSimulator,
        emergency_number: str = DEFAULT_EMERGENCY_NUMBER,
    ) -> None:
        self._output = output
        self._audit_log = audit_log
        self._connection = connection
        self._emergency_number = emergency_number

    def describe(self) -> str:
        return "Llamada Telefónica"

    def format_alert(self, report: IncidentReport) -> str:
        return (
            f"{_alert_header(report)}\n"
            f"  - Tipo: {report.emergency_type.label}\n"
            f"  - Ubicación: {report.location}\n"
            f"  - Gravedad: {report.severity}/{MAX_SEVERITY}"
        )

    def send(self, report: IncidentReport) -> bool:
        alert_text = self.format_alert(report)
        self._output.write("\n=== INICIANDO LLAMADA DE EMERGENCIA ===")
        self._output.write(alert_text)
        self._audit_log.append(alert_text)

        if not self._connection.connect(f"Marcando {self._emergency_number}..."):
            self._output.warn("\n❌ La llamada de emergencia fue interrumpida.")
            return False

        self._output.write("✅ ¡Conexión establecida con el operador!")
        self._output.write(
            f'   Sistema: "Se reporta una emergencia de tipo {report.emergency_type.label} '
            f'en {report.location}."'
        )
        return True

    def notify(self, profile: Profile, report: IncidentReport) -> None:
        self._output.write("\n--- Realizando llamada a contactos de emergencia... ---")
        if not profile.emergency_contact.strip():
            logger.info("No emergency contact configured; call skipped")
            self._output.warn("⚠️  No hay contactos de emergencia para llamar.")
            return

        self._output.write(
            f"✅ Llamada de notificación realizada con éxito a: {profile.emergency_contact}"
        )
        self._output.write(
            f"   Motivo: {report.emergency_type.label} en {report.location}"
        )
        self._output.write("-" * 52)
        logger.info("Emergency contact called for a {} alert", report.emergency_type.label)


__all__ = [
    "AlertChannel",
    "AuditLog",
    "ConnectionSimulator",
    "DEFAULT_EMERGENCY_NUMBER",
    "PhoneCallAlertChannel",
    "StandardAlertChannel",
]
