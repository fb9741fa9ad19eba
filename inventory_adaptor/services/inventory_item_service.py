from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Tuple

from inventory_adaptor.adapters.interfaces.connector import APIConnector
from inventory_adaptor.adapters.pagination import Pagination, extract_pagination
from inventory_adaptor.core.exceptions import APIException, PaginationError, ValidationException
from inventory_adaptor.core.logging import get_logger
from inventory_adaptor.domain.models.inventory_item import (
    InventoryItem,
    InventoryItemResource,
    InventoryItemsResource,
)
from inventory_adaptor.domain.models.options import GetOptions, ListOptions

logger = get_logger(__name__)

INVENTORY_ITEMS_BASE_PATH = "inventory_items"


class InventoryItemServiceInterface(ABC):
    """Operations on the inventory items endpoints of the Shopify Admin API."""

    @abstractmethod
    def list(self, options: Optional[ListOptions] = None) -> List[InventoryItem]:
        pass

    @abstractmethod
    def list_with_pagination(
        self, options: Optional[ListOptions] = None
    ) -> Tuple[List[InventoryItem], Pagination]:
        pass

    @abstractmethod
    def get(self, item_id: int, options: Optional[GetOptions] = None) -> Optional[InventoryItem]:
        pass

    @abstractmethod
    def update(self, item: InventoryItem) -> Optional[InventoryItem]:
        pass


class InventoryItemService(InventoryItemServiceInterface):
    """
    Default binding of the inventory items endpoints.

    Builds paths, wraps and unwraps the JSON envelopes and reads page cursors
    from the Link header. Everything else goes through the connector.
    """

    def __init__(self, client: APIConnector):
        """Initialize with the shared connector."""
        self.client = client

    def list(self, options: Optional[ListOptions] = None) -> List[InventoryItem]:
        """Lists inventory items, dropping the page cursors."""
        try:
            items, _ = self.list_with_pagination(options)
        except APIException as e:
            e.context["operation"] = "list"
            raise
        return items

    def list_with_pagination(
        self, options: Optional[ListOptions] = None
    ) -> Tuple[List[InventoryItem], Pagination]:
        """
        Lists inventory items together with the cursors of the adjacent pages.

        Args:
            options: Filters, page size or a cursor from a previous page

        Returns:
            Tuple[List[InventoryItem], Pagination]: Items of this page and
                options for fetching the next and previous ones

        Raises:
            PaginationError: If the list succeeded but its Link header is unreadable
            APIException: For any transport, status or decoding failure
        """
        path = f"{INVENTORY_ITEMS_BASE_PATH}.json"
        params = options.to_params() if options else None
        logger.info(f"Listing inventory items with params: {params}")

        resource, headers = self.client.get_with_headers(path, InventoryItemsResource, params=params)
        link_header = headers.get("Link", "")

        try:
            pagination = extract_pagination(link_header)
        except PaginationError as e:
            logger.error(f"Error getting pagination from link header: {e.detail}")
            e.context["operation"] = "list_with_pagination"
            raise

        logger.debug(
            f"Retrieved {len(resource.inventory_items)} inventory items "
            f"(next page: {pagination.has_next_page}, previous page: {pagination.has_previous_page})"
        )
        return resource.inventory_items, pagination

    def list_all(self, options: Optional[ListOptions] = None) -> Iterator[InventoryItem]:
        """
        Iterates over every inventory item, following next-page cursors.

        Each page costs one request; the first failing page stops iteration
        with its error.
        """
        page_options = options
        while True:
            items, pagination = self.list_with_pagination(page_options)
            yield from items
            if not pagination.has_next_page:
                return
            next_options = pagination.next_page_options
            # Cursors only carry page_info and limit; keep the caller's field selection
            if options and options.fields and next_options.fields is None:
                next_options = next_options.model_copy(update={"fields": options.fields})
            page_options = next_options

    def get(self, item_id: int, options: Optional[GetOptions] = None) -> Optional[InventoryItem]:
        """Gets an inventory item by ID, or None if the envelope is empty."""
        path = f"{INVENTORY_ITEMS_BASE_PATH}/{item_id}.json"
        params = options.to_params() if options else None
        logger.info(f"Getting inventory item {item_id}")

        resource = self.client.get(path, InventoryItemResource, params=params)
        return resource.inventory_item

    def update(self, item: InventoryItem) -> Optional[InventoryItem]:
        """
        Updates an inventory item.

        Only the fields set on ``item`` are sent. The returned item is the
        server's version, which may differ from the input.

        Raises:
            ValidationException: If the item has no id to address it by
        """
        if item.id is None:
            raise ValidationException(
                detail="Inventory item id is required for update",
                field="id"
            )

        path = f"{INVENTORY_ITEMS_BASE_PATH}/{item.id}.json"
        wrapped_data = InventoryItemResource(inventory_item=item)
        logger.info(f"Updating inventory item {item.id}")

        resource = self.client.put(path, wrapped_data.to_payload(), InventoryItemResource)
        return resource.inventory_item
