"""Tests for the health-center catalogue."""
from __future__ import annotations

import json

from src.core.entities import HealthCenter
from src.infrastructure.health.centers import HealthCenterCatalog, center_from_record, format_suggestions
from src.utils.config import DEFAULT_HEALTH_CENTERS_PATH

ORIGIN = (37.9922, -1.1307)


def test_center_from_record_parses_comma_decimals_and_ignores_unknown_keys() -> None:
    center = center_from_record(
        {
            "Código": "CS-1",
            "Nombre": "Centro",
            "Municipio": "Murcia",
            "Teléfono": "968000000",
            "Latitud": "37,98",
            "Longitud": "-1,12",
            "Foto 1": "ignored.jpg",
        }
    )

    assert center == HealthCenter(
        code="CS-1",
        name="Centro",
        municipality="Murcia",
        phone="968000000",
        latitude=37.98,
        longitude=-1.12,
    )


def test_center_without_coordinates_is_kept() -> None:
    center = center_from_record({"Nombre": "Consultorio", "Latitud": "", "Longitud": "n/a"})

    assert not center.has_coordinates


def test_bundled_catalogue_loads() -> None:
    catalog = HealthCenterCatalog.from_json(DEFAULT_HEALTH_CENTERS_PATH)

    assert len(catalog.centers) >= 5
    assert all(center.name for center in catalog.centers)


def test_missing_or_broken_file_yields_empty_catalogue(tmp_path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("[{", encoding="utf-8")

    assert HealthCenterCatalog.from_json(tmp_path / "absent.json").centers == ()
    assert HealthCenterCatalog.from_json(broken).centers == ()


def test_applies_only_to_locations_with_keyword(tmp_path) -> None:
    path = tmp_path / "centers.json"
    path.write_text(json.dumps([{"Nombre": "Centro", "Municipio": "Murcia"}]), encoding="utf-8")
    catalog = HealthCenterCatalog.from_json(path, keyword="murcia")

    assert catalog.applies_to("Avenida Libertad, MURCIA")
    assert not catalog.applies_to("Cartagena puerto")
    assert not HealthCenterCatalog([], keyword="murcia").applies_to("Murcia")


def test_nearest_orders_by_distance_and_puts_unknown_last() -> None:
    catalog = HealthCenterCatalog(
        [
            HealthCenter("C", "Sin coordenadas"),
            HealthCenter("B", "Cartagena", latitude=37.60, longitude=-0.98),
            HealthCenter("A", "Centro", latitude=37.984, longitude=-1.129),
        ]
    )

    suggestions = catalog.nearest(ORIGIN, limit=3)

    assert [item.center.code for item in suggestions] == ["A", "B", "C"]
    assert suggestions[0].distance_km < 2
    assert 40 < suggestions[1].distance_km < 50
    assert suggestions[2].distance_km is None


def test_nearest_without_origin_keeps_name_order() -> None:
    catalog = HealthCenterCatalog(
        [HealthCenter("B", "Zeta", latitude=1.0, longitude=1.0), HealthCenter("A", "Alfa")]
    )

    suggestions = catalog.nearest(None, limit=1)

    assert [item.center.name for item in suggestions] == ["Alfa"]


def test_format_suggestions_includes_distance_and_address() -> None:
    catalog = HealthCenterCatalog(
        [HealthCenter("A", "Centro", address="Calle 1", municipality="Murcia", phone="968", latitude=37.984, longitude=-1.129)]
    )

    lines = format_suggestions(catalog.nearest(ORIGIN))

    assert lines[0].startswith("1. Centro (Municipio: Murcia, Tel: 968) - a ")
    assert lines[0].endswith(" km")
    assert lines[1] == "   Dirección: Calle 1"
