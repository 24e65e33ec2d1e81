"""Command-line entry point for the emergency reporting assistant."""
from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import Callable, Sequence

from src.core.errors import InputExhaustedError
from src.core.ports import TextChannel
from src.infrastructure.alerts.dispatcher import AlertDispatcher, build_alert_channel
from src.infrastructure.geo.location import SimulatedLocationService
from src.infrastructure.health.centers import HealthCenterCatalog
from src.infrastructure.profile.collector import ProfileCollector
from src.infrastructure.storage.record_store import JsonRecordStore
from src.interface.cli.console import ConsoleChannel
from src.use_cases.collect_feedback import CollectFeedbackUseCase
from src.use_cases.detect_emergency import DetectEmergencyUseCase
from src.use_cases.run_session import RunSessionUseCase
from src.utils.config import ALERT_CHANNELS, DEFAULT_CONFIG_PATH, Settings, load_config
from src.utils.logger import configure_logging, logger


def build_session(
    settings: Settings,
    channel: TextChannel,
    sleep: Callable[[float], None] = time.sleep,
) -> RunSessionUseCase:
    """Wire every component of the assistant from resolved settings."""
    store = JsonRecordStore(
        settings.logs_dir,
        incidents_file=settings.incidents_file,
        feedback_file=settings.feedback_file,
    )

    catalog: HealthCenterCatalog | None = None
    if settings.health_centers_enabled:
        catalog = HealthCenterCatalog.from_json(
            settings.health_centers_file, keyword=settings.health_centers_keyword
        )
    location = SimulatedLocationService(
        latitude=settings.latitude,
        longitude=settings.longitude,
        description=settings.location_description,
    )

    alert_channel = build_alert_channel(
        settings.alert_channel,
        channel,
        settings.logs_dir,
        emergency_number=settings.emergency_number,
        pauses=settings.pauses,
        pause_seconds=settings.pause_seconds,
        sleep=sleep,
    )

    return RunSessionUseCase(
        profile_source=ProfileCollector(),
        detector=DetectEmergencyUseCase(
            health_centers=catalog,
            location_provider=location,
            max_suggestions=settings.health_centers_max_results,
        ),
        repository=store,
        dispatcher=AlertDispatcher(alert_channel, channel),
        feedback=CollectFeedbackUseCase(store),
        emergency_number=settings.emergency_number,
    )


def resolve_settings(args: argparse.Namespace) -> Settings:
    config = dict(load_config(args.config))
    if args.channel:
        config["alerts"] = {**(config.get("alerts") or {}), "channel": args.channel}
    if args.logs_dir:
        config["paths"] = {**(config.get("paths") or {}), "logs_dir": str(args.logs_dir)}
    return Settings.from_config(config)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Asistente interactivo de reporte de emergencias")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH)
    parser.add_argument("--channel", choices=ALERT_CHANNELS, default=None)
    parser.add_argument("--logs-dir", type=Path, default=None)
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    settings = resolve_settings(args)
    configure_logging(settings.log_level, settings.app_log_path, console=False)

    channel = ConsoleChannel()
    session = build_session(settings, channel)
    try:
        session.run(channel)
    except InputExhaustedError as error:
        logger.error("Session aborted: {}", error)
        channel.warn("\n⚠️  Entrada finalizada. Cerrando el sistema de emergencias.")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
