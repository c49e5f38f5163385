from ui import i18n
from ui import settings as ui_settings


def test_portuguese_default():
    assert i18n.tr("nav.clients") == "Clientes"
    assert i18n.tr_enum("BOOKED") == "Agendada"
    assert i18n.tr_enum("UNKNOWN_CODE") == "UNKNOWN_CODE"
    assert i18n.tr("missing.key") == "missing.key"


def test_validation_message_uses_field_label():
    assert i18n.tr_validation("required", "name") == 'Preencha o campo "Nome".'
    assert "nonexistent" in i18n.tr_validation("required", "nonexistent")


def test_set_language_persists_and_falls_back():
    i18n.set_language("es")
    assert ui_settings.get_app_settings()["language"] == "es"
    assert i18n.tr("nav.clients") == "Pacientes"
    # ключи без испанского перевода берутся из pt-BR
    assert i18n.tr("campaigns.sent") == "Campanha enviada."


def test_unknown_language_normalizes_to_portuguese():
    assert i18n.set_language("fr", persist=False) == "pt-BR"
