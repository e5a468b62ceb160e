"""
Geocoding client (Nominatim).

Resolves a postal code to coordinates with one search call. Only the first
candidate is used; there is no retry and no caching across requests.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from nearstock.config.settings import Settings
from nearstock.core.errors import GeocodeNotFoundError, UpstreamTimeoutError, UpstreamTransportError
from nearstock.core.geo import GeoPoint
from nearstock.core.http import get_json

logger = logging.getLogger(__name__)

SERVICE = "geocoding"


class GeocodingClient:
    """Looks up a pincode via a Nominatim-compatible `/search` endpoint."""

    def __init__(self, settings: Settings):
        self._settings = settings

    def _search(self, pincode: str) -> Any:
        geo = self._settings.geocoding
        params = {"postalcode": pincode, "country": geo.country, "format": "json"}
        try:
            return get_json(
                geo.base_url,
                params=params,
                headers={"User-Agent": geo.user_agent},
                timeout_seconds=self._settings.app.http_timeout_seconds,
            )
        except httpx.TimeoutException as exc:
            raise UpstreamTimeoutError(SERVICE, f"timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            raise UpstreamTransportError(SERVICE, str(exc)) from exc
        except ValueError as exc:
            raise UpstreamTransportError(SERVICE, f"invalid JSON: {exc}") from exc

    def resolve(self, pincode: str) -> GeoPoint:
        """Return the coordinates of the first candidate for `pincode`.

        Raises:
            GeocodeNotFoundError: The provider returned no candidates.
            UpstreamTransportError: The call failed or the response was malformed.
        """
        candidates = self._search(pincode)
        if not isinstance(candidates, list):
            raise UpstreamTransportError(SERVICE, f"expected a list, got {type(candidates).__name__}")
        if not candidates:
            raise GeocodeNotFoundError(pincode)
        if len(candidates) > 1:
            logger.debug("Geocoding returned %d candidates for %s; using the first", len(candidates), pincode)

        first = candidates[0]
        try:
            point = GeoPoint(latitude=float(first["lat"]), longitude=float(first["lon"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise UpstreamTransportError(SERVICE, f"malformed candidate: {first!r}") from exc

        logger.debug("Resolved pincode %s to lat=%.4f lon=%.4f", pincode, point.latitude, point.longitude)
        return point
