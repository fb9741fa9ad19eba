"""
Inventory Adaptor - typed binding for the Shopify inventory items REST resource.

This package builds resource paths, wraps and unwraps the platform's JSON
envelopes, and exposes the cursor pagination carried in the ``Link`` header.
Transport, authentication headers and error normalization live in the
connector.
"""

from inventory_adaptor.adapters.implementations.ecommerce import ShopifyConnector
from inventory_adaptor.adapters.pagination import Pagination, extract_pagination
from inventory_adaptor.domain.models import GetOptions, InventoryItem, ListOptions
from inventory_adaptor.services import InventoryItemService

__version__ = "0.1.0"

__all__ = [
    "ShopifyConnector",
    "Pagination",
    "extract_pagination",
    "GetOptions",
    "InventoryItem",
    "ListOptions",
    "InventoryItemService",
]
