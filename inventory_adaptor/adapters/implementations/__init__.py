"""
Connector implementations for external platforms.
"""

from inventory_adaptor.adapters.implementations.ecommerce import (
    ShopifyConnector,
    PLATFORM_SHOPIFY,
)

__all__ = [
    "ShopifyConnector",
    "PLATFORM_SHOPIFY",
]
