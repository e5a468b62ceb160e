"""
Stock-check pipeline.

resolve coordinates -> fetch inventory -> flatten -> select nearest -> resolve availability

Stages run sequentially and raise typed `nearstock.core.errors` exceptions; the
API/CLI boundary turns them into responses. `render_result` builds the 200 bodies.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from nearstock.config.settings import Settings
from nearstock.core.errors import GeocodeNotFoundError, InputError, NoWarehouseError, StockCheckError
from nearstock.core.geo import GeoPoint
from nearstock.domain.models import SelectionResult
from nearstock.fulfillment.availability import resolve_availability
from nearstock.fulfillment.selector import select_nearest
from nearstock.inventory.flatten import flatten_inventory

logger = logging.getLogger(__name__)

OUT_OF_STOCK_MESSAGE = "Product is out of stock at all locations."


class Geocoder(Protocol):
    def resolve(self, pincode: str) -> GeoPoint: ...


class ProductSource(Protocol):
    def fetch_product(self, product_id: str) -> dict[str, Any]: ...


def check_stock(
    pincode: str | None,
    product_id: str | None,
    *,
    settings: Settings,
    geocoder: Geocoder,
    commerce: ProductSource,
) -> SelectionResult:
    """Decide which warehouse fulfills `product_id` for a customer at `pincode`."""
    if not pincode or not product_id:
        raise InputError()

    try:
        coordinates = geocoder.resolve(pincode)
    except GeocodeNotFoundError as exc:
        if settings.errors.geocode_miss_as_not_found:
            raise exc.as_not_found() from exc
        raise

    product = commerce.fetch_product(product_id)
    inventory = flatten_inventory(product)
    logger.debug("Product %s has %d inventory records", product_id, len(inventory))

    warehouses = settings.warehouses
    nearest = select_nearest(coordinates, warehouses.registry)
    if nearest is None:
        raise NoWarehouseError()
    logger.debug("Nearest warehouse to %s is %s (%.0f m)", pincode, nearest.postal_code, nearest.distance_m)

    result = resolve_availability(inventory, nearest, warehouses.location_map)
    logger.info(
        "Stock check pincode=%s product=%s nearest=%s tier=%s warehouse=%s",
        pincode,
        product_id,
        nearest.postal_code,
        result.tier,
        result.warehouse,
    )
    return result


def render_result(result: SelectionResult) -> tuple[int, dict[str, Any]]:
    """Map a decision to the (status, body) pair returned to clients."""
    if result.tier == "nearest":
        message = f"Product is available at {result.warehouse}."
    elif result.tier == "fallback":
        message = f"Product is not available near your pincode but is available at {result.warehouse}."
    else:
        # Still a 200: the request succeeded even though nothing can ship.
        return 200, {"error": OUT_OF_STOCK_MESSAGE}
    return 200, {"warehouse": result.warehouse, "quantity": result.quantity, "message": message}


def render_error(exc: Exception) -> tuple[int, dict[str, Any]]:
    """Map any pipeline failure to the (status, body) pair returned to clients."""
    if isinstance(exc, StockCheckError):
        return exc.status_code, exc.body()
    return 500, {"error": "Server error"}


def run_stock_check(
    pincode: str | None,
    product_id: str | None,
    *,
    settings: Settings,
    geocoder: Geocoder,
    commerce: ProductSource,
) -> tuple[int, dict[str, Any]]:
    """Run the pipeline and always return a response; failures are logged, never raised."""
    try:
        result = check_stock(pincode, product_id, settings=settings, geocoder=geocoder, commerce=commerce)
    except InputError as exc:
        logger.info("Rejected stock check: %s", exc)
        return render_error(exc)
    except StockCheckError as exc:
        logger.error("Stock check failed (%s): %s", type(exc).__name__, exc, exc_info=exc.__cause__ is not None)
        return render_error(exc)
    except Exception as exc:
        logger.exception("Unexpected error during stock check")
        return render_error(exc)
    return render_result(result)
