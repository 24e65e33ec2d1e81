"""Unit tests for configuration loading."""
from __future__ import annotations

from pathlib import Path

import pytest

from src.utils.config import DEFAULT_HEALTH_CENTERS_PATH, PROJECT_ROOT, Settings, load_config


def test_missing_config_file_uses_defaults(tmp_path) -> None:
    settings = Settings.from_config(load_config(tmp_path / "absent.yaml"))

    assert settings == Settings()
    assert settings.alert_channel == "standard"
    assert settings.emergency_number == "112"
    assert settings.health_centers_file == DEFAULT_HEALTH_CENTERS_PATH


def test_config_overrides_are_applied(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "paths:\n"
        "  logs_dir: custom-logs\n"
        "alerts:\n"
        "  channel: call\n"
        "  pause_seconds: 0\n"
        "health_centers:\n"
        "  keyword: cartagena\n"
        "  max_results: 5\n"
        "logging:\n"
        "  level: DEBUG\n",
        encoding="utf-8",
    )

    settings = Settings.from_config(load_config(path))

    assert settings.logs_dir == Path("custom-logs")
    assert settings.alert_channel == "call"
    assert settings.pause_seconds == 0.0
    assert settings.health_centers_keyword == "cartagena"
    assert settings.health_centers_max_results == 5
    assert settings.app_log_path == Path("custom-logs") / "assistant.log"


def test_repository_config_resolves_bundled_data() -> None:
    settings = Settings.from_config(load_config(PROJECT_ROOT / "configs" / "config.yaml"))

    assert settings.health_centers_file.exists()


def test_default_catalogue_ships_inside_the_package() -> None:
    package_dir = Path(__file__).resolve().parents[2] / "src"

    assert DEFAULT_HEALTH_CENTERS_PATH.is_relative_to(package_dir)
    assert DEFAULT_HEALTH_CENTERS_PATH.exists()
    assert Settings().health_centers_file == DEFAULT_HEALTH_CENTERS_PATH


def test_non_mapping_config_is_rejected(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(path)


def test_unknown_alert_channel_is_rejected() -> None:
    with pytest.raises(ValueError):
        Settings.from_config({"alerts": {"channel": "fax"}})


def test_non_mapping_section_is_rejected() -> None:
    with pytest.raises(ValueError):
        Settings.from_config({"paths": "logs"})
