"""YAML configuration loading and resolved runtime settings."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, TypedDict, cast

import yaml

DEFAULT_CONFIG_PATH = Path("configs/config.yaml")
PROJECT_ROOT = Path(__file__).resolve().parents[2]
PACKAGE_DIR = Path(__file__).resolve().parents[1]
DEFAULT_HEALTH_CENTERS_PATH = PACKAGE_DIR / "infrastructure" / "health" / "health_centers_murcia.json"

ALERT_CHANNELS = ("standard", "call")


class PathsConfig(TypedDict, total=False):
    logs_dir: str
    incidents_file: str
    feedback_file: str
    app_log: str


class AlertsConfig(TypedDict, total=False):
    channel: str
    emergency_number: str
    pause_seconds: float
    pauses: int


class HealthCentersConfig(TypedDict, total=False):
    data_file: str
    keyword: str
    max_results: int
    enabled: bool


class LocationConfig(TypedDict, total=False):
    latitude: float
    longitude: float
    description: str


class LoggingConfig(TypedDict, total=False):
    level: str


class AppConfig(TypedDict, total=False):
    paths: PathsConfig
    alerts: AlertsConfig
    health_centers: HealthCentersConfig
    location: LocationConfig
    logging: LoggingConfig


def load_config(path: Path) -> AppConfig:
    """Read a YAML configuration file; a missing file yields an empty config."""
    if not path.exists():
        return AppConfig()

    with path.open("r", encoding="utf-8") as file:
        data = yaml.safe_load(file)

    if data is None:
        return AppConfig()
    if not isinstance(data, dict):
        raise ValueError("The configuration file must contain a mapping at the top level.")

    return cast(AppConfig, data)


@dataclass(frozen=True)
class Settings:
    """Fully resolved settings with defaults applied."""

    logs_dir: Path = Path("logs")
    incidents_file: str = "emergency_history.json"
    feedback_file: str = "user_feedback.json"
    app_log: str = "assistant.log"
    alert_channel: str = "standard"
    emergency_number: str = "112"
    pause_seconds: float | None = None
    pauses: int = 3
    health_centers_file: Path = DEFAULT_HEALTH_CENTERS_PATH
    health_centers_keyword: str = "murcia"
    health_centers_max_results: int = 3
    health_centers_enabled: bool = True
    latitude: float = 37.9922
    longitude: float = -1.1307
    location_description: str = "Plaza del Cardenal Belluga, Murcia"
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.alert_channel not in ALERT_CHANNELS:
            raise ValueError(
                f"Unknown alert channel '{self.alert_channel}'. Expected one of: {', '.join(ALERT_CHANNELS)}."
            )
        if self.pauses < 0:
            raise ValueError("'alerts.pauses' cannot be negative.")
        if self.health_centers_max_results < 1:
            raise ValueError("'health_centers.max_results' must be at least 1.")

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "Settings":
        paths = _section(config, "paths")
        alerts = _section(config, "alerts")
        centers = _section(config, "health_centers")
        location = _section(config, "location")
        logging_cfg = _section(config, "logging")

        defaults = cls()
        pause_seconds = alerts.get("pause_seconds")
        return cls(
            logs_dir=Path(paths.get("logs_dir", defaults.logs_dir)),
            incidents_file=str(paths.get("incidents_file", defaults.incidents_file)),
            feedback_file=str(paths.get("feedback_file", defaults.feedback_file)),
            app_log=str(paths.get("app_log", defaults.app_log)),
            alert_channel=str(alerts.get("channel", defaults.alert_channel)),
            emergency_number=str(alerts.get("emergency_number", defaults.emergency_number)),
            pause_seconds=float(pause_seconds) if pause_seconds is not None else None,
            pauses=int(alerts.get("pauses", defaults.pauses)),
            health_centers_file=_resolve_data_path(
                Path(centers.get("data_file", defaults.health_centers_file))
            ),
            health_centers_keyword=str(centers.get("keyword", defaults.health_centers_keyword)),
            health_centers_max_results=int(
                centers.get("max_results", defaults.health_centers_max_results)
            ),
            health_centers_enabled=bool(centers.get("enabled", defaults.health_centers_enabled)),
            latitude=float(location.get("latitude", defaults.latitude)),
            longitude=float(location.get("longitude", defaults.longitude)),
            location_description=str(location.get("description", defaults.location_description)),
            log_level=str(logging_cfg.get("level", defaults.log_level)),
        )

    @property
    def app_log_path(self) -> Path:
        return self.logs_dir / self.app_log


def _resolve_data_path(path: Path) -> Path:
    """Relative data paths fall back to the project root when absent from the CWD."""
    if path.is_absolute() or path.exists():
        return path
    return PROJECT_ROOT / path


def _section(config: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = config.get(name) or {}
    if not isinstance(section, Mapping):
        raise ValueError(f"Configuration section '{name}' must be a mapping.")
    return section


__all__ = ["ALERT_CHANNELS", "AppConfig", "DEFAULT_CONFIG_PATH", "Settings", "load_config"]
