import json
from types import SimpleNamespace

import httpx
import pytest

from core.list_state import PageResult
from core.session import SessionStore
from infrastructure.api_client import ApiClient
from services.dto import UserDTO


class ManualExecutor:
    """Исполнитель, который копит задачи до явного запуска."""

    def __init__(self):
        self.tasks = []

    def submit(self, fn, on_success, on_error):
        self.tasks.append((fn, on_success, on_error))

    @property
    def pending(self) -> int:
        return len(self.tasks)

    def run(self, index: int = 0):
        fn, on_success, on_error = self.tasks.pop(index)
        try:
            result = fn()
        except Exception as exc:  # noqa: BLE001
            on_error(exc)
        else:
            on_success(result)

    def resolve(self, index: int, result):
        _fn, on_success, _on_error = self.tasks.pop(index)
        on_success(result)

    def reject(self, index: int, exc: BaseException):
        _fn, _on_success, on_error = self.tasks.pop(index)
        on_error(exc)

    def run_all(self):
        while self.tasks:
            self.run(0)


class MemorySessionStorage:
    def __init__(self, data: dict | None = None):
        self.data = dict(data or {})

    def load(self) -> dict:
        return dict(self.data)

    def save(self, data: dict) -> None:
        self.data = dict(data)

    def erase(self) -> None:
        self.data = {}


class RecordingService:
    """Подменяет ResourceService: запоминает вызовы и отдаёт заданные страницы."""

    def __init__(self, items=None, total=None):
        self.items = list(items or [])
        self.total = len(self.items) if total is None else total
        self.calls = []
        self.created = []
        self.updated = []
        self.deleted = []
        self.error: BaseException | None = None

    def get_page(self, page, limit, search=None, **filters):
        self.calls.append({"page": page, "limit": limit, "search": search, **filters})
        if self.error is not None:
            raise self.error
        return PageResult(self.items, self.total, page, limit)

    def create(self, payload):
        if self.error is not None:
            raise self.error
        self.created.append(payload)
        return SimpleNamespace(id="new", **{"payload": payload})

    def update(self, entity_id, payload):
        if self.error is not None:
            raise self.error
        self.updated.append((entity_id, payload))
        return None

    def delete(self, entity_id):
        if self.error is not None:
            raise self.error
        self.deleted.append(entity_id)


@pytest.fixture
def manual_executor():
    return ManualExecutor()


@pytest.fixture
def session_storage():
    return MemorySessionStorage()


@pytest.fixture
def session_store(session_storage):
    return SessionStore(
        load=session_storage.load, save=session_storage.save, erase=session_storage.erase
    )


@pytest.fixture
def admin_user():
    return UserDTO(id="u1", name="Ana", email="ana@clinic.com", role="ADMIN", api_key="tenant-1")


@pytest.fixture
def make_api_client(session_store):
    """Фабрика клиента API поверх ``httpx.MockTransport``.

    ``handler(request) -> httpx.Response``; все запросы складываются в
    ``client.requests``.
    """

    def factory(handler, **kwargs):
        requests = []

        def recorder(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        client = ApiClient(
            "http://api.test/api",
            session_store,
            transport=httpx.MockTransport(recorder),
            **kwargs,
        )
        client.requests = requests
        return client

    return factory


def _json_body(request: httpx.Request):
    return json.loads(request.content.decode("utf-8")) if request.content else None


@pytest.fixture
def json_body():
    return _json_body


@pytest.fixture
def recording_service():
    return RecordingService
