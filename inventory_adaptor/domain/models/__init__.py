"""
Domain models package for the Inventory Adaptor.

Wire names equal attribute names; the envelopes mirror the JSON wrappers the
platform nests payloads in.
"""

from inventory_adaptor.domain.models.inventory_item import (
    InventoryItem,
    InventoryItemResource,
    InventoryItemsResource,
)
from inventory_adaptor.domain.models.options import GetOptions, ListOptions

__all__ = [
    "InventoryItem",
    "InventoryItemResource",
    "InventoryItemsResource",
    "GetOptions",
    "ListOptions",
]
