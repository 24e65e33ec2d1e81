"""Simulated device location used to rank nearby resources."""
from __future__ import annotations

from dataclasses import dataclass

from src.utils.logger import logger


@dataclass(frozen=True)
class LocationFix:
    latitude: float
    longitude: float
    description: str


class SimulatedLocationService:
    """Stand-in for a GPS receiver that always reports a configured fix.

    Permission is granted automatically the first time it is requested.
    """

    def __init__(
        self,
        latitude: float = 37.9922,
        longitude: float = -1.1307,
        description: str = "Plaza del Cardenal Belluga, Murcia",
    ) -> None:
        self._fix = LocationFix(latitude=latitude, longitude=longitude, description=description)
        self._has_permission = False

    @property
    def has_permission(self) -> bool:
        return self._has_permission

    def request_permission(self) -> bool:
        if not self._has_permission:
            logger.info("Location permission requested and granted (simulated)")
            self._has_permission = True
        return True

    def current_fix(self) -> LocationFix:
        if not self._has_permission:
            logger.warning("Location permission not granted; returning the default fix")
        return self._fix


__all__ = ["LocationFix", "SimulatedLocationService"]
