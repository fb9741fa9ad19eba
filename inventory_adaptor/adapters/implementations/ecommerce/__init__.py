"""
E-commerce connectors package.
Exports the connector class for each supported e-commerce platform.
"""

from inventory_adaptor.adapters.implementations.ecommerce.shopify import (
    ShopifyConnector,
    shop_full_name,
)

PLATFORM_SHOPIFY = "shopify"

__all__ = [
    "ShopifyConnector",
    "shop_full_name",
    "PLATFORM_SHOPIFY",
]
