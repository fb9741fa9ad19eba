from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class InventoryItem(BaseModel):
    """
    Domain model for a Shopify inventory item.

    Any field may be missing from a payload, ``id`` included when the caller
    restricts the response with ``fields``. Missing is not the same as null
    or zero: ``to_payload`` only emits fields that were present in the
    decoded JSON or set by the caller, so partial updates stay partial.
    """

    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    sku: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    cost: Optional[Decimal] = None
    tracked: Optional[bool] = None
    admin_graphql_api_id: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """Serializes the item to its JSON shape, leaving unset fields out."""
        return self.model_dump(mode="json", exclude_unset=True)


class InventoryItemResource(BaseModel):
    """Envelope for single item requests and responses."""

    inventory_item: Optional[InventoryItem] = None

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)


class InventoryItemsResource(BaseModel):
    """Envelope for multiple item responses."""

    inventory_items: List[InventoryItem] = Field(default_factory=list)
