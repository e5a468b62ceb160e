"""
Two-tier availability policy.

1. nearest: first record at the nearest warehouse with stock
2. fallback: first record anywhere with stock
3. otherwise out of stock

Proximity is preferred, but availability wins when the nearest location is empty.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from nearstock.domain.models import InventoryRecord, SelectionResult
from nearstock.fulfillment.selector import NearestWarehouse


def resolve_availability(
    inventory: Sequence[InventoryRecord],
    nearest: NearestWarehouse,
    name_to_code: Mapping[str, str],
) -> SelectionResult:
    """Apply the nearest -> fallback -> out-of-stock policy to flattened inventory."""
    for record in inventory:
        if name_to_code.get(record.location_name) == nearest.postal_code and record.quantity > 0:
            return SelectionResult.nearest(record)

    for record in inventory:
        if record.quantity > 0:
            return SelectionResult.fallback(record)

    return SelectionResult.none_available()
