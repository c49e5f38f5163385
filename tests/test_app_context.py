import pytest

from config import Settings
from core.app_context import RESOURCES, AppContext
from services.dto import ClientDetailsDTO, StudentDTO


def _context(session_store):
    created = []

    def api_factory(settings, session):
        created.append((settings, session))
        return object()

    context = AppContext(
        Settings(),
        session_factory=lambda: session_store,
        api_client_factory=api_factory,
    )
    return context, created


def test_api_client_is_created_lazily_once(session_store):
    context, created = _context(session_store)
    assert created == []
    client = context.api_client
    assert context.api_client is client
    assert created == [(context.settings, session_store)]


def test_resource_services_use_mapping(session_store):
    context, _created = _context(session_store)
    students = context.resource("student_service")
    assert students.endpoint == RESOURCES["student_service"][0] == "alunos"
    assert students.dto_class is StudentDTO
    assert context.resource("student_service") is students
    assert context.resource("client_service").detail_class is ClientDetailsDTO


def test_unknown_resource(session_store):
    context, _created = _context(session_store)
    with pytest.raises(KeyError):
        context.resource("invoice_service")


def test_override_replaces_dependency(session_store):
    context, _created = _context(session_store)
    fake = object()
    overridden = context.override(lead_service=fake)
    assert overridden.resource("lead_service") is fake
    assert context.resource("lead_service") is not fake


def test_override_rejects_unknown_names(session_store):
    context, _created = _context(session_store)
    with pytest.raises(ValueError):
        context.override(sms_gateway=object())
