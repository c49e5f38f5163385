import httpx
import pytest

from infrastructure.api_client import TENANT_HEADER, ApiError, UnauthorizedError


def test_requests_carry_token_and_tenant(make_api_client, session_store, admin_user):
    session_store.set("tok-1", admin_user)
    client = make_api_client(lambda request: httpx.Response(200, json={"ok": True}))

    assert client.get("/clients", params={"page": 1, "search": None}) == {"ok": True}

    request = client.requests[0]
    assert request.url.path == "/api/clients"
    assert dict(request.url.params) == {"page": "1"}
    assert request.headers["Authorization"] == "Bearer tok-1"
    assert request.headers[TENANT_HEADER] == "tenant-1"


def test_anonymous_requests_have_no_auth_headers(make_api_client):
    client = make_api_client(lambda request: httpx.Response(204))
    assert client.post("/auth/forgot-password", json={"email": "a@b.c"}) is None
    request = client.requests[0]
    assert "Authorization" not in request.headers
    assert TENANT_HEADER not in request.headers


def test_error_message_taken_from_body(make_api_client):
    client = make_api_client(
        lambda request: httpx.Response(400, json={"message": ["name must be a string"]})
    )
    with pytest.raises(ApiError) as info:
        client.post("/clients", json={})
    assert info.value.status_code == 400
    assert info.value.message == "name must be a string"


def test_not_found_flag(make_api_client):
    client = make_api_client(lambda request: httpx.Response(404, text="nope"))
    with pytest.raises(ApiError) as info:
        client.get("/calendar")
    assert info.value.is_not_found
    assert info.value.message == "HTTP 404"


def test_unauthorized_clears_session_and_notifies(make_api_client, session_store, admin_user):
    session_store.set("expired", admin_user)
    calls = []
    client = make_api_client(
        lambda request: httpx.Response(401, json={"message": "Unauthorized"}),
        on_unauthorized=lambda: calls.append(True),
    )

    with pytest.raises(UnauthorizedError):
        client.get("/leads")
    assert not session_store.is_authenticated
    assert calls == [True]


def test_anonymous_unauthorized_does_not_notify(make_api_client):
    calls = []
    client = make_api_client(
        lambda request: httpx.Response(401, json={"message": "Invalid credentials"}),
        on_unauthorized=lambda: calls.append(True),
    )
    with pytest.raises(UnauthorizedError):
        client.post("/auth/login", json={})
    assert calls == []


def test_transport_error_becomes_api_error(make_api_client):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = make_api_client(handler)
    with pytest.raises(ApiError) as info:
        client.get("/clients")
    assert info.value.status_code is None
