"""Pytest fixtures for connector and inventory item binding tests."""

import json
from typing import Callable, List

import httpx
import pytest

from inventory_adaptor.adapters.implementations.ecommerce import ShopifyConnector
from inventory_adaptor.core.config import get_settings
from inventory_adaptor.services import InventoryItemService

SHOP_NAME = "fooshop"
ACCESS_TOKEN = "shpat_test_token"
API_VERSION = "2024-01"
BASE_URL = f"https://fooshop.myshopify.com/admin/api/{API_VERSION}/"


def json_response(status_code: int, payload, headers=None) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(payload).encode(),
        headers={"Content-Type": "application/json", **(headers or {})},
    )


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)


@pytest.fixture
def make_connector():
    """Builds a connector whose requests are answered by ``handler``."""
    connectors = []

    def _make(handler):
        transport = RecordingTransport(handler)
        connector = ShopifyConnector(
            shop_name=SHOP_NAME,
            access_token=ACCESS_TOKEN,
            api_version=API_VERSION,
            transport=transport,
        )
        connectors.append(connector)
        return connector, transport

    yield _make

    for connector in connectors:
        connector.close()


@pytest.fixture
def make_service(make_connector):
    """Builds an InventoryItemService on top of a mocked connector."""

    def _make(handler):
        connector, transport = make_connector(handler)
        return InventoryItemService(connector), transport

    return _make


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
