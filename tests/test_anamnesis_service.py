from datetime import date

import httpx
import pytest

from services.anamnesis_service import (
    HABITS_QUESTIONS,
    MEDICAL_ADDITIONAL,
    SOURCE,
    YES,
    AnamnesisForm,
    AnamnesisService,
    build_payload,
)
from services.validators import ValidationError


def _form(**overrides):
    form = AnamnesisForm(
        name=" Maria Souza ",
        email="maria@x.com",
        contact="+55 11 99999-0000",
        age="34",
        form_date=date(2024, 4, 1),
        signature="Maria",
        consent=True,
    )
    for key, value in overrides.items():
        setattr(form, key, value)
    return form


def test_payload_shape():
    form = _form()
    form.habits[HABITS_QUESTIONS[0]] = YES
    form.medical_additional[MEDICAL_ADDITIONAL[1]] = "Tipo 2"

    payload = build_payload(form)

    assert payload["name"] == "Maria Souza"
    assert payload["age"] == 34
    assert payload["source"] == SOURCE
    assert "country" not in payload
    responses = payload["anamnesisResponses"]
    assert responses[HABITS_QUESTIONS[0]] == YES
    assert responses[MEDICAL_ADDITIONAL[1]] == "Tipo 2"
    assert MEDICAL_ADDITIONAL[0] not in responses
    assert responses["Data do preenchimento"] == "2024-04-01"
    assert responses["Concordância com uso de dados"] == YES


def test_name_is_required():
    with pytest.raises(ValidationError):
        build_payload(_form(name=" "))


def test_self_esteem_range():
    with pytest.raises(ValidationError):
        build_payload(_form(self_esteem=11))


def test_submit_posts_to_integration(make_api_client, json_body):
    client = make_api_client(lambda request: httpx.Response(201, json={"id": "c1"}))
    AnamnesisService(client).submit(_form())
    request = client.requests[0]
    assert request.url.path == "/api/integrations/forms/google"
    assert json_body(request)["email"] == "maria@x.com"
