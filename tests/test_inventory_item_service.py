import json
from decimal import Decimal
from unittest.mock import MagicMock

import httpx
import pytest

from inventory_adaptor.core.exceptions import (
    IntegrationException,
    NotFoundError,
    PaginationError,
    ResponseDecodingError,
    ValidationException,
)
from inventory_adaptor.domain.models import GetOptions, InventoryItem, InventoryItemResource, ListOptions
from inventory_adaptor.services import InventoryItemService
from tests.conftest import BASE_URL, json_response

ITEMS_PAYLOAD = {
    "inventory_items": [
        {"id": 808950810, "sku": "IPOD2008PINK", "cost": "25.00", "tracked": True},
        {"id": 39072856, "sku": "IPOD2008GREEN", "cost": "25.00"},
    ]
}


def test_list_with_pagination_next_only(make_service):
    service, transport = make_service(
        lambda request: json_response(
            200, ITEMS_PAYLOAD, headers={"Link": '<https://x/y?page_info=abc&limit=50>; rel="next"'}
        )
    )
    items, pagination = service.list_with_pagination()

    assert [item.id for item in items] == [808950810, 39072856]
    assert pagination.next_page_options.page_info == "abc"
    assert pagination.next_page_options.limit == 50
    assert pagination.previous_page_options is None

    request = transport.requests[0]
    assert request.method == "GET"
    assert str(request.url) == f"{BASE_URL}inventory_items.json"


def test_list_with_pagination_without_link_header(make_service):
    service, _ = make_service(lambda request: json_response(200, ITEMS_PAYLOAD))
    items, pagination = service.list_with_pagination()

    assert len(items) == 2
    assert not pagination.has_next_page
    assert not pagination.has_previous_page


def test_list_with_pagination_sends_options(make_service):
    service, transport = make_service(lambda request: json_response(200, {"inventory_items": []}))
    service.list_with_pagination(ListOptions(ids=[808950810, 39072856], limit=10))

    params = transport.requests[0].url.params
    assert params["ids"] == "808950810,39072856"
    assert params["limit"] == "10"


def test_list_with_pagination_rejects_bad_link_header(make_service):
    service, _ = make_service(
        lambda request: json_response(200, ITEMS_PAYLOAD, headers={"Link": '<https://x/y>; rel="bogus"'})
    )
    with pytest.raises(PaginationError) as exc_info:
        service.list_with_pagination()
    assert exc_info.value.context["operation"] == "list_with_pagination"


def test_list_fails_when_pagination_is_unreadable(make_service):
    service, _ = make_service(
        lambda request: json_response(200, ITEMS_PAYLOAD, headers={"Link": '<https://x/y>; rel="bogus"'})
    )
    with pytest.raises(PaginationError) as exc_info:
        service.list()
    assert exc_info.value.context["operation"] == "list"


def test_list_returns_items_only(make_service):
    service, _ = make_service(
        lambda request: json_response(
            200, ITEMS_PAYLOAD, headers={"Link": '<https://x/y?page_info=abc>; rel="next"'}
        )
    )
    items = service.list(ListOptions(limit=2))
    assert [item.sku for item in items] == ["IPOD2008PINK", "IPOD2008GREEN"]
    assert items[0].cost == Decimal("25.00")


def test_list_tags_transport_errors(make_service):
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    service, _ = make_service(handler)
    with pytest.raises(IntegrationException) as exc_info:
        service.list()
    assert exc_info.value.context["operation"] == "list"


def test_list_decode_error_aborts_before_pagination(make_service):
    service, _ = make_service(
        lambda request: httpx.Response(
            200, content=b"{", headers={"Link": '<https://x/y>; rel="bogus"'}
        )
    )
    with pytest.raises(ResponseDecodingError) as exc_info:
        service.list_with_pagination()
    assert not isinstance(exc_info.value, PaginationError)


def test_list_all_follows_next_cursor(make_service):
    pages = {
        None: (
            {"inventory_items": [{"id": 1}, {"id": 2}]},
            {"Link": f'<{BASE_URL}inventory_items.json?limit=2&page_info=p2>; rel="next"'},
        ),
        "p2": (
            {"inventory_items": [{"id": 3}]},
            {"Link": f'<{BASE_URL}inventory_items.json?limit=2&page_info=p1>; rel="previous"'},
        ),
    }

    def handler(request):
        payload, headers = pages[request.url.params.get("page_info")]
        return json_response(200, payload, headers=headers)

    service, transport = make_service(handler)
    items = list(service.list_all(ListOptions(limit=2, fields=["id"])))

    assert [item.id for item in items] == [1, 2, 3]
    assert len(transport.requests) == 2
    second = transport.requests[1].url.params
    assert second["page_info"] == "p2"
    assert second["limit"] == "2"
    assert second["fields"] == "id"


def test_get_returns_item(make_service):
    service, transport = make_service(
        lambda request: json_response(200, {"inventory_item": ITEMS_PAYLOAD["inventory_items"][0]})
    )
    item = service.get(808950810, GetOptions(fields=["id", "sku"]))

    assert item.sku == "IPOD2008PINK"
    request = transport.requests[0]
    assert request.url.path == "/admin/api/2024-01/inventory_items/808950810.json"
    assert request.url.params["fields"] == "id,sku"


def test_get_with_null_item_returns_none(make_service):
    service, _ = make_service(lambda request: json_response(200, {"inventory_item": None}))
    assert service.get(0) is None


def test_get_not_found_propagates(make_service):
    service, _ = make_service(lambda request: json_response(404, {"errors": "Not Found"}))
    with pytest.raises(NotFoundError):
        service.get(1)


def test_update_wraps_item_and_returns_server_version(make_service):
    server_item = {
        "id": 42,
        "sku": "new-sku",
        "cost": "12.50",
        "updated_at": "2024-03-01T10:00:00-05:00",
    }
    service, transport = make_service(lambda request: json_response(200, {"inventory_item": server_item}))

    updated = service.update(InventoryItem(id=42, sku="new-sku", cost=Decimal("12.50")))

    request = transport.requests[0]
    assert request.method == "PUT"
    assert request.url.path == "/admin/api/2024-01/inventory_items/42.json"
    assert json.loads(request.content) == {
        "inventory_item": {"id": 42, "sku": "new-sku", "cost": "12.50"}
    }
    assert updated.updated_at is not None
    assert updated.cost == Decimal("12.50")


def test_update_sends_only_set_fields(make_service):
    service, transport = make_service(lambda request: json_response(200, {"inventory_item": {"id": 7}}))
    service.update(InventoryItem(id=7, tracked=False))

    assert json.loads(transport.requests[0].content) == {"inventory_item": {"id": 7, "tracked": False}}


def test_update_path_uses_item_id_with_stub_connector():
    client = MagicMock()
    client.put.return_value = InventoryItemResource(inventory_item=InventoryItem(id=42))
    service = InventoryItemService(client)

    result = service.update(InventoryItem(id=42, sku="abc"))

    client.put.assert_called_once_with(
        "inventory_items/42.json",
        {"inventory_item": {"id": 42, "sku": "abc"}},
        InventoryItemResource,
    )
    assert result.id == 42


def test_get_with_fields_excluding_id(make_service):
    service, _ = make_service(lambda request: json_response(200, {"inventory_item": {"sku": "IPOD2008PINK"}}))
    item = service.get(808950810, GetOptions(fields=["sku"]))

    assert item.id is None
    assert item.sku == "IPOD2008PINK"


def test_list_with_fields_excluding_id(make_service):
    service, transport = make_service(
        lambda request: json_response(200, {"inventory_items": [{"sku": "IPOD2008PINK"}, {"sku": "IPOD2008GREEN"}]})
    )
    items = service.list(ListOptions(ids=[1, 2], fields=["sku"]))

    assert [item.sku for item in items] == ["IPOD2008PINK", "IPOD2008GREEN"]
    assert all(item.id is None for item in items)
    assert transport.requests[0].url.params["fields"] == "sku"


def test_update_without_id_is_rejected_before_sending(make_service):
    service, transport = make_service(lambda request: json_response(200, {"inventory_item": {"id": 1}}))

    with pytest.raises(ValidationException) as exc_info:
        service.update(InventoryItem(sku="no-id"))

    assert exc_info.value.context == {"field": "id"}
    assert exc_info.value.status_code == 422
    assert transport.requests == []
