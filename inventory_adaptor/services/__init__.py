"""
Resource bindings for the Inventory Adaptor.
"""

from inventory_adaptor.services.inventory_item_service import (
    InventoryItemService,
    InventoryItemServiceInterface,
)

__all__ = [
    "InventoryItemService",
    "InventoryItemServiceInterface",
]
