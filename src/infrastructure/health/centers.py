"""Read-only catalogue of regional health centers."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Sequence

from geopy.distance import geodesic

from src.core.entities import HealthCenter
from src.utils.logger import logger
from src.utils.text_cleaning import contains_keyword


@dataclass(frozen=True)
class HealthCenterSuggestion:
    center: HealthCenter
    distance_km: Optional[float]


def _parse_coordinate(raw: Any) -> Optional[float]:
    if raw is None:
        return None
    text = str(raw).strip().replace(",", ".")
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        logger.debug("Ignoring unparsable coordinate {!r}", raw)
        return None


def center_from_record(record: Mapping[str, Any]) -> HealthCenter:
    """Map an open-data export row to a ``HealthCenter``; unknown keys are ignored."""
    return HealthCenter(
        code=str(record.get("Código", "")).strip(),
        name=str(record.get("Nombre", "")).strip(),
        address=str(record.get("Dirección", "")).strip(),
        municipality=str(record.get("Municipio", "")).strip(),
        phone=str(record.get("Teléfono", "")).strip(),
        latitude=_parse_coordinate(record.get("Latitud")),
        longitude=_parse_coordinate(record.get("Longitud")),
    )


class HealthCenterCatalog:
    """Offer nearby health centers when a location mentions the covered region."""

    def __init__(self, centers: Sequence[HealthCenter], keyword: str = "murcia") -> None:
        self._centers: tuple[HealthCenter, ...] = tuple(centers)
        self._keyword = keyword

    @classmethod
    def from_json(cls, path: Path, keyword: str = "murcia") -> "HealthCenterCatalog":
        """Load the bundled document. A missing or broken file yields an empty catalogue."""
        if not path.exists():
            logger.warning("Health center data file {} not found; catalogue disabled", path)
            return cls((), keyword=keyword)

        try:
            with path.open("r", encoding="utf-8") as file:
                payload = json.load(file)
        except (OSError, json.JSONDecodeError) as error:
            logger.error("Could not read health center data from {}: {}", path, error)
            return cls((), keyword=keyword)

        if not isinstance(payload, list):
            logger.error("Health center data in {} is not a list; catalogue disabled", path)
            return cls((), keyword=keyword)

        centers = [center_from_record(entry) for entry in payload if isinstance(entry, Mapping)]
        logger.info("Loaded {} health centers from {}", len(centers), path)
        return cls(centers, keyword=keyword)

    @property
    def centers(self) -> tuple[HealthCenter, ...]:
        return self._centers

    def applies_to(self, location_text: str) -> bool:
        return bool(self._centers) and contains_keyword(location_text, self._keyword)

    def nearest(
        self,
        origin: tuple[float, float] | None,
        limit: int = 3,
    ) -> list[HealthCenterSuggestion]:
        """Rank centers by geodesic distance; centers without coordinates go last."""
        suggestions = [
            HealthCenterSuggestion(center=center, distance_km=self._distance(origin, center))
            for center in self._centers
        ]
        suggestions.sort(
            key=lambda item: (
                item.distance_km is None,
                item.distance_km if item.distance_km is not None else 0.0,
                item.center.name,
            )
        )
        return suggestions[:limit]

    @staticmethod
    def _distance(origin: tuple[float, float] | None, center: HealthCenter) -> Optional[float]:
        if origin is None or not center.has_coordinates:
            return None
        return geodesic(origin, (center.latitude, center.longitude)).kilometers


def format_suggestions(suggestions: Iterable[HealthCenterSuggestion]) -> list[str]:
    lines: list[str] = []
    for index, suggestion in enumerate(suggestions, start=1):
        center = suggestion.center
        distance = (
            f" - a {suggestion.distance_km:.1f} km" if suggestion.distance_km is not None else ""
        )
        lines.append(f"{index}. {center}{distance}")
        if center.address:
            lines.append(f"   Dirección: {center.address}")
    return lines


__all__ = [
    "HealthCenterCatalog",
    "HealthCenterSuggestion",
    "center_from_record",
    "format_suggestions",
]
