import httpx
import pytest

from infrastructure.api_client import ApiError, UnauthorizedError
from services.auth_service import AuthService
from services.validators import ValidationError

USER = {"id": "u1", "name": "Ana", "email": "ana@clinic.com", "role": "admin", "apiKey": "k1"}


def test_login_stores_session(make_api_client, session_store, json_body):
    client = make_api_client(
        lambda request: httpx.Response(200, json={"accessToken": "tok", "user": USER})
    )
    user = AuthService(client, session_store).login(" Ana@Clinic.com ", "pw")

    assert json_body(client.requests[0]) == {"email": "ana@clinic.com", "password": "pw"}
    assert user.is_admin
    assert session_store.token == "tok"
    assert session_store.tenant_key == "k1"


def test_login_accepts_token_key(make_api_client, session_store):
    client = make_api_client(lambda request: httpx.Response(200, json={"token": "t2", "user": USER}))
    AuthService(client, session_store).login("ana@clinic.com", "pw")
    assert session_store.token == "t2"


def test_login_without_token_is_error(make_api_client, session_store):
    client = make_api_client(lambda request: httpx.Response(200, json={"user": USER}))
    with pytest.raises(ApiError):
        AuthService(client, session_store).login("ana@clinic.com", "pw")
    assert not session_store.is_authenticated


def test_wrong_credentials(make_api_client, session_store):
    client = make_api_client(lambda request: httpx.Response(401, json={"message": "Invalid"}))
    with pytest.raises(UnauthorizedError):
        AuthService(client, session_store).login("ana@clinic.com", "bad")


def test_login_validates_before_request(make_api_client, session_store):
    client = make_api_client(lambda request: httpx.Response(500))
    with pytest.raises(ValidationError):
        AuthService(client, session_store).login("", "pw")
    assert client.requests == []


def test_register_then_login(make_api_client, session_store):
    def handler(request):
        if request.url.path.endswith("/auth/register"):
            return httpx.Response(201, json={"id": "u1"})
        return httpx.Response(200, json={"accessToken": "tok", "user": USER})

    client = make_api_client(handler)
    AuthService(client, session_store).register("Ana", "ana@clinic.com", "pw", "pw")
    assert [r.url.path for r in client.requests] == ["/api/auth/register", "/api/auth/login"]
    assert session_store.is_authenticated


def test_register_password_mismatch(make_api_client, session_store):
    client = make_api_client(lambda request: httpx.Response(201))
    with pytest.raises(ValidationError) as info:
        AuthService(client, session_store).register("Ana", "a@b.c", "pw", "other")
    assert info.value.code == "password_mismatch"


def test_reset_password_payload(make_api_client, session_store, json_body):
    client = make_api_client(lambda request: httpx.Response(200, json={}))
    AuthService(client, session_store).reset_password("A@b.c", "123456", "new", "new")
    assert json_body(client.requests[0]) == {
        "email": "a@b.c",
        "token": "123456",
        "newPassword": "new",
    }
