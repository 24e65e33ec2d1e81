"""Alert dispatching over an interchangeable delivery channel."""
from __future__ import annotations

import time
from pathlib import Path
from typing import Callable

from src.core.entities import DispatchResult, IncidentReport, Profile
from src.core.ports import TextChannel
from src.infrastructure.alerts.channels import (
    AlertChannel,
    AuditLog,
    ConnectionSimulator,
    PhoneCallAlertChannel,
    StandardAlertChannel,
)
from src.utils.logger import logger

_CHANNEL_DEFAULTS: dict[str, tuple[str, float]] = {
    "standard": ("emergency_alerts.log", 0.4),
    "call": ("call_alerts.log", 0.5),
}


class AlertDispatcher:
    """Deliver confirmed incidents through the configured ``AlertChannel``."""

    def __init__(self, channel: AlertChannel, output: TextChannel) -> None:
        self._channel = channel
        self._output = output

    @property
    def channel(self) -> AlertChannel:
        return self._channel

    def dispatch(self, report: IncidentReport) -> DispatchResult:
        """Send the alert. Success depends only on the simulated connection."""
        description = self._channel.describe()
        logger.info("Dispatching incident {} via {}", report.incident_id, description)
        success = self._channel.send(report)
        if success:
            self._show_protocol(report)
        else:
            logger.warning("Dispatch of incident {} failed", report.incident_id)
        return DispatchResult(success=success, channel=description)

    def notify(self, profile: Profile, report: IncidentReport) -> None:
        self._channel.notify(profile, report)

    def _show_protocol(self, report: IncidentReport) -> None:
        emergency_type = report.emergency_type
        self._output.write(f"\n{emergency_type.response_protocol}")
        self._output.write("Servicios requeridos:")
        for service in emergency_type.required_services:
            self._output.write(f"  - {service}")


def build_alert_channel(
    kind: str,
    output: TextChannel,
    logs_dir: Path,
    emergency_number: str = "112",
    pauses: int = 3,
    pause_seconds: float | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> AlertChannel:
    """Create the delivery channel named ``kind`` (``standard`` or ``call``)."""
    if kind not in _CHANNEL_DEFAULTS:
        raise ValueError(f"Unknown alert channel '{kind}'.")

    log_name, default_pause = _CHANNEL_DEFAULTS[kind]
    audit_log = AuditLog(logs_dir / log_name, output)
    connection = ConnectionSimulator(
        output,
        pauses=pauses,
        pause_seconds=default_pause if pause_seconds is None else pause_seconds,
        sleep=sleep,
    )
    if kind == "call":
        return PhoneCallAlertChannel(output, audit_log, connection, emergency_number)
    return StandardAlertChannel(output, audit_log, connection, emergency_number)


__all__ = ["AlertDispatcher", "build_alert_channel"]
