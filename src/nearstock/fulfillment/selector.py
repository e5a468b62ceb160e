"""Nearest-warehouse selection over the static warehouse registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from nearstock.core.geo import GeoPoint, haversine_m


@dataclass(frozen=True)
class NearestWarehouse:
    postal_code: str
    coordinates: GeoPoint
    distance_m: float


def select_nearest(point: GeoPoint, registry: Mapping[str, GeoPoint]) -> NearestWarehouse | None:
    """Return the registry entry closest to `point`, or None for an empty registry.

    Strict `<` comparison: on an exact tie the first entry in registry order wins.
    """
    nearest: NearestWarehouse | None = None
    for postal_code, coords in registry.items():
        distance = haversine_m(point, coords)
        if nearest is None or distance < nearest.distance_m:
            nearest = NearestWarehouse(postal_code=postal_code, coordinates=coords, distance_m=distance)
    return nearest
