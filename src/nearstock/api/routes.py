"""
API routes.

Endpoints:
- GET `/api/check-pincode`: nearest-warehouse stock check (also served at the legacy
  `/.netlify/functions/checkPincode` path used by existing storefront widgets).
- GET `/api/warehouses`: configured warehouses and registry consistency problems.
- GET `/api/health`: liveness probe.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from nearstock.config.settings import get_settings
from nearstock.fulfillment.service import run_stock_check
from nearstock.ingestion.commerce_client import CommerceClient
from nearstock.ingestion.geocoding_client import GeocodingClient

router = APIRouter()


@lru_cache
def _clients() -> tuple[GeocodingClient, CommerceClient]:
    settings = get_settings()
    return GeocodingClient(settings), CommerceClient(settings)


@router.get("/api/check-pincode")
@router.get("/.netlify/functions/checkPincode", include_in_schema=False)
def check_pincode(pincode: str | None = None, productId: str | None = None) -> JSONResponse:  # noqa: N803
    """Return the warehouse that can fulfill `productId` for a customer at `pincode`."""
    geocoder, commerce = _clients()
    status, body = run_stock_check(
        pincode,
        productId,
        settings=get_settings(),
        geocoder=geocoder,
        commerce=commerce,
    )
    return JSONResponse(status_code=status, content=body)


@router.get("/api/warehouses")
def get_warehouses() -> dict:
    """Return the warehouse registry (no credentials) plus any mapping problems."""
    warehouses = get_settings().warehouses
    return {
        "warehouses": [
            {"postal_code": code, "latitude": point.latitude, "longitude": point.longitude}
            for code, point in warehouses.registry.items()
        ],
        "location_map": dict(warehouses.location_map),
        "problems": warehouses.consistency_problems(),
    }


@router.get("/api/health")
def get_health() -> dict:
    return {"status": "ok"}
