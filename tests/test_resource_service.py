import httpx
import pytest

from infrastructure.api_client import ApiError
from services.dto import ClientDetailsDTO, ClientDTO
from services.resource_service import ResourceService


def _client_json(**extra):
    data = {"id": "c1", "name": "Maria", "email": "maria@x.com", "tags": ["vip"], "score": 7}
    data.update(extra)
    return data


def test_get_page_parses_envelope(make_api_client):
    client = make_api_client(
        lambda request: httpx.Response(
            200, json={"data": [_client_json()], "total": 41, "page": 3, "limit": 20}
        )
    )
    service = ResourceService(client, "clients", ClientDTO)

    result = service.get_page(3, 20, " mar ", status="active", country="")

    assert dict(client.requests[0].url.params) == {
        "page": "3",
        "limit": "20",
        "search": "mar",
        "status": "active",
    }
    assert result.total == 41
    assert result.page == 3
    assert isinstance(result.items[0], ClientDTO)
    assert result.items[0].tags == ["vip"]


def test_get_page_accepts_plain_list(make_api_client):
    client = make_api_client(lambda request: httpx.Response(200, json=[_client_json()]))
    result = ResourceService(client, "clients", ClientDTO).get_page(1, 10)
    assert result.total == 1


def test_not_found_collection_is_empty_page(make_api_client):
    client = make_api_client(lambda request: httpx.Response(404, json={"message": "Not Found"}))
    result = ResourceService(client, "calendar", ClientDTO).get_page(2, 10)
    assert list(result.items) == []
    assert result.total == 0


def test_other_errors_propagate(make_api_client):
    client = make_api_client(lambda request: httpx.Response(500, json={}))
    with pytest.raises(ApiError):
        ResourceService(client, "clients", ClientDTO).get_page(1, 10)


def test_get_uses_detail_class(make_api_client):
    detail = _client_json(leads=[], appointments=[], payments=[])
    client = make_api_client(lambda request: httpx.Response(200, json=detail))
    service = ResourceService(client, "clients", ClientDTO, detail_class=ClientDetailsDTO)

    result = service.get("c1")
    assert isinstance(result, ClientDetailsDTO)
    assert client.requests[0].url.path == "/api/clients/c1"


def test_mutations_use_expected_verbs(make_api_client, json_body):
    client = make_api_client(lambda request: httpx.Response(200, json=_client_json()))
    service = ResourceService(client, "clients", ClientDTO)

    created = service.create({"name": "Maria"})
    service.update("c1", {"score": 9})
    service.delete("c1")

    methods = [(r.method, r.url.path) for r in client.requests]
    assert methods == [
        ("POST", "/api/clients"),
        ("PATCH", "/api/clients/c1"),
        ("DELETE", "/api/clients/c1"),
    ]
    assert json_body(client.requests[1]) == {"score": 9}
    assert created.name == "Maria"
