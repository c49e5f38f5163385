"""Анкета анамнеза: каталог вопросов и отправка во внешнюю интеграцию."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from infrastructure.api_client import ApiClient
from services.validators import ValidationError, optional_text, parse_int, require

logger = logging.getLogger(__name__)

YES = "Sim"
NO = "Não"
YES_NO = (YES, NO)

SOURCE = "Anamnese Geral (Web)"
HOW_DID_YOU_KNOW = ("Instagram", "Facebook", "Outros")

HABITS_QUESTIONS = (
    "Já realizou tratamento estético anteriormente?",
    "Usa cosméticos diariamente?",
    "Usa protetor solar diariamente?",
    "Está exposta ao sol?",
    "Consome bebidas alcoólicas ou fuma?",
    "Realiza atividade física?",
    "Usa anticoncepcionais?",
    "Está grávida ou amamentando?",
    "Tem filhos?",
    "Está sob tratamento médico?",
    "Toma medicamentos ou anticoagulantes?",
    "Tem alergias?",
)

HABITS_ADDITIONAL = ("Passa mais tempo em pé ou sentada?",)

MEDICAL_QUESTIONS = (
    "Reação alérgica a anestésicos?",
    "Usa marcapasso?",
    "Alterações cardíacas?",
    "Epilepsia ou convulsões?",
    "Alterações psicológicas ou psiquiátricas?",
    "Pessoa estressada?",
    "Hipo/hipertensão?",
    "Diabetes?",
    "Transtorno circulatório?",
    "Transtorno renal?",
    "Transtorno hormonal?",
    "Transtorno gastrointestinal?",
    "Antecedente oncológico?",
    "Doença autoimune?",
    "Herpes?",
    "Portador(a) de HIV?",
    "Prótese metálica ou implante dental?",
    "Cirurgia plástica ou reparadora?",
    "Uso de PMMA (preenchimento)?",
)

MEDICAL_ADDITIONAL = (
    "Hipo/hipertensão? Usa medicação?",
    "Diabetes (Tipo)",
    "Uso de PMMA (Zona)",
)


@dataclass
class AnamnesisForm:
    name: str = ""
    email: str = ""
    contact: str = ""
    age: str = ""
    country: str = ""
    birth_date: date | None = None
    language: str = ""
    how_did_you_know: str = HOW_DID_YOU_KNOW[0]
    referred_by: str = ""
    self_esteem: int = 5
    consent: bool = False
    form_date: date | None = None
    signature: str = ""
    habits: dict[str, str] = field(
        default_factory=lambda: {question: NO for question in HABITS_QUESTIONS}
    )
    habits_additional: dict[str, str] = field(
        default_factory=lambda: {question: "" for question in HABITS_ADDITIONAL}
    )
    medical: dict[str, str] = field(
        default_factory=lambda: {question: NO for question in MEDICAL_QUESTIONS}
    )
    medical_additional: dict[str, str] = field(
        default_factory=lambda: {question: "" for question in MEDICAL_ADDITIONAL}
    )


def build_responses(form: AnamnesisForm) -> dict[str, str]:
    """Ответы анкеты в порядке: общие, привычки, медицинские, подпись."""
    responses: dict[str, str] = {
        "Como nos conheceu?": form.how_did_you_know,
        "Recomendação de": form.referred_by,
        "Autoestima (0-10)": str(form.self_esteem),
    }
    responses.update(form.habits)
    responses.update({q: a for q, a in form.habits_additional.items() if a})
    responses.update(form.medical)
    responses.update({q: a for q, a in form.medical_additional.items() if a})
    responses["Data do preenchimento"] = form.form_date.isoformat() if form.form_date else ""
    responses["Assinatura"] = form.signature
    responses["Concordância com uso de dados"] = YES if form.consent else NO
    return responses


def build_payload(form: AnamnesisForm) -> dict:
    name = require(form.name, "name")
    if not 0 <= int(form.self_esteem) <= 10:
        raise ValidationError("invalid_integer", "self_esteem")
    payload = {
        "name": name,
        "email": optional_text(form.email),
        "phone": optional_text(form.contact),
        "age": parse_int(form.age, "age"),
        "country": optional_text(form.country),
        "birthDate": form.birth_date.isoformat() if form.birth_date else None,
        "language": optional_text(form.language),
        "source": SOURCE,
        "tags": [],
        "intimateAssessmentPhotos": [],
        "anamnesisResponses": build_responses(form),
    }
    return {key: value for key, value in payload.items() if value is not None}


class AnamnesisService:
    def __init__(self, client: ApiClient):
        self.client = client

    def submit(self, form: AnamnesisForm) -> None:
        payload = build_payload(form)
        logger.info("📝 Отправка анкеты анамнеза для %s", payload["name"])
        self.client.post("/integrations/forms/google", json=payload)
