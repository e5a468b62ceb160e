from __future__ import annotations

import pytest

from nearstock.config.settings import Settings, get_settings
from nearstock.core.geo import GeoPoint

JODHPUR_LOCATION = "Air force central school scheme Jodhpur"
UDAIPUR_LOCATION = "Udaipur Warehouse"

# Points a few km from each warehouse.
NEAR_JODHPUR = GeoPoint(latitude=26.2800, longitude=73.0200)
NEAR_UDAIPUR = GeoPoint(latitude=24.5800, longitude=73.7100)


def product_payload(*variants: list[tuple[str, int | None]]) -> dict:
    """Build a commerce `product` payload; each variant is a list of (location, available)."""
    return {
        "id": "gid://shopify/Product/1",
        "title": "Blue pottery vase",
        "variants": {
            "edges": [
                {
                    "node": {
                        "id": f"gid://shopify/ProductVariant/{i}",
                        "inventoryItem": {
                            "inventoryLevels": {
                                "edges": [
                                    {
                                        "node": {
                                            "location": {"id": f"loc-{name}", "name": name},
                                            "quantities": (
                                                [] if qty is None else [{"name": "available", "quantity": qty}]
                                            ),
                                        }
                                    }
                                    for name, qty in levels
                                ]
                            }
                        },
                    }
                }
                for i, levels in enumerate(variants)
            ]
        },
    }


@pytest.fixture
def settings() -> Settings:
    base = get_settings()
    commerce = base.commerce.model_copy(update={"access_token": "test-token"})
    return base.model_copy(update={"commerce": commerce})
