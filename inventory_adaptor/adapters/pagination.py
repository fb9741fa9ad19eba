"""
Cursor pagination carried in the ``Link`` response header.

The platform pages list endpoints with opaque ``page_info`` cursors and
advertises the neighbouring pages as::

    <https://shop.myshopify.com/admin/api/2024-01/inventory_items.json?limit=50&page_info=abc>; rel="next",
    <https://shop.myshopify.com/admin/api/2024-01/inventory_items.json?limit=50&page_info=xyz>; rel="previous"
"""

import re
from typing import Optional

import httpx
from pydantic import BaseModel, ValidationError

from inventory_adaptor.core.exceptions import PaginationError
from inventory_adaptor.core.logging import get_logger
from inventory_adaptor.domain.models.options import ListOptions

logger = get_logger(__name__)

LINK_PATTERN = re.compile(r'^<([^>]*)>;\s*rel="([^"]*)"$')

REL_NEXT = "next"
REL_PREVIOUS = "previous"


class Pagination(BaseModel):
    """Query options for the pages around the one just fetched."""

    next_page_options: Optional[ListOptions] = None
    previous_page_options: Optional[ListOptions] = None

    @property
    def has_next_page(self) -> bool:
        return self.next_page_options is not None

    @property
    def has_previous_page(self) -> bool:
        return self.previous_page_options is not None


def _options_from_url(raw_url: str, entry: str) -> ListOptions:
    """Keeps only the cursor and page size from a page URL."""
    try:
        params = httpx.URL(raw_url).params
    except httpx.InvalidURL as e:
        raise PaginationError(
            detail=f"Invalid page URL in link header: {e}",
            body=entry
        ) from e

    page_info = params.get("page_info")
    if not page_info:
        raise PaginationError(detail="page_info is missing", body=entry)

    limit = params.get("limit")
    try:
        if limit is None:
            return ListOptions(page_info=page_info)
        return ListOptions(page_info=page_info, limit=int(limit))
    except (ValueError, ValidationError) as e:
        raise PaginationError(
            detail=f"Invalid limit '{limit}' in link header",
            body=entry
        ) from e


def extract_pagination(link_header: str) -> Pagination:
    """
    Parses a Link header value into next/previous page options.

    Args:
        link_header: Raw header value; an empty string means a single page.

    Returns:
        Pagination: Options for the next and previous pages, either may be None.
            A relation that appears twice keeps its last occurrence.

    Raises:
        PaginationError: If any entry is malformed, names an unknown
            relation, or lacks a page_info cursor.
    """
    pagination = Pagination()
    if not link_header or not link_header.strip():
        return pagination

    for raw_entry in link_header.split(","):
        entry = raw_entry.strip()
        match = LINK_PATTERN.match(entry)
        if not match:
            logger.warning(f"Malformed link header entry: {entry!r}")
            raise PaginationError(body=link_header)

        raw_url, rel = match.groups()
        if rel not in (REL_NEXT, REL_PREVIOUS):
            raise PaginationError(
                detail=f"Unknown link relation '{rel}'",
                body=link_header
            )

        options = _options_from_url(raw_url, entry)
        if rel == REL_NEXT:
            pagination.next_page_options = options
        else:
            pagination.previous_page_options = options

    return pagination
