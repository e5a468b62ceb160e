"""
Flatten the commerce product payload into per-location inventory records.

Input shape (GraphQL connections):

    product.variants.edges[].node.inventoryItem.inventoryLevels.edges[].node
        .location.name
        .quantities[] -> {name, quantity}

Output: one `InventoryRecord` per (variant, inventory level), in query order.
Records for the same location across variants are intentionally kept separate.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator

from nearstock.domain.models import InventoryRecord

logger = logging.getLogger(__name__)

AVAILABLE_BUCKET = "available"


def _edge_nodes(connection: Any) -> Iterator[dict[str, Any]]:
    if not isinstance(connection, dict):
        return
    for edge in connection.get("edges") or []:
        node = edge.get("node") if isinstance(edge, dict) else None
        if isinstance(node, dict):
            yield node


def bucket_quantity(quantities: Any) -> int:
    """Return the quantity of the `available` bucket.

    An absent bucket, a null quantity and zero all read as 0; a different bucket is
    never used in its place. Negative quantities (oversold stock) clamp to 0.
    """
    for bucket in quantities or []:
        if isinstance(bucket, dict) and bucket.get("name") == AVAILABLE_BUCKET:
            return max(0, int(bucket.get("quantity") or 0))
    return 0


def flatten_inventory(product: dict[str, Any]) -> list[InventoryRecord]:
    """Flatten a product payload into `InventoryRecord`s (variant-major order)."""
    records: list[InventoryRecord] = []
    for variant in _edge_nodes(product.get("variants")):
        item = variant.get("inventoryItem") or {}
        for level in _edge_nodes(item.get("inventoryLevels")):
            location = level.get("location") or {}
            name = location.get("name")
            if not name:
                # Still counts toward the fallback tier; it just never matches a warehouse.
                logger.warning("Inventory level without a location name (variant=%s)", variant.get("id"))
            records.append(
                InventoryRecord(
                    location_name=str(name or ""),
                    quantity=bucket_quantity(level.get("quantities")),
                )
            )
    return records
