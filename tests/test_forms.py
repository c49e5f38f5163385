from datetime import datetime, timedelta

from infrastructure.api_client import ApiError
from services.dto import KnowledgeEntryDTO
from ui.common.combo_helpers import set_selected_by_id
from ui.common.workers import SyncExecutor
from ui.forms.appointment_form import AppointmentForm
from ui.forms.knowledge_form import KnowledgeEntryForm
from ui.forms.user_form import UserForm
from services.dto import UserDTO


def _knowledge():
    return KnowledgeEntryDTO(
        id="k1",
        title="Horários",
        content="Atendemos de segunda a sexta.",
        status="PUBLISHED",
        priority=2,
        tags=["faq", "agenda"],
    )


def test_knowledge_edit_sends_patch_payload(qapp, recording_service):
    service = recording_service()
    form = KnowledgeEntryForm(service, _knowledge(), executor=SyncExecutor())
    assert form.fields["tags"].text() == "faq, agenda"

    form.fields["priority"].setText("5")
    form.save()

    entity_id, payload = service.updated[0]
    assert entity_id == "k1"
    assert payload["priority"] == 5
    assert payload["tags"] == ["faq", "agenda"]
    assert payload["status"] == "PUBLISHED"
    assert "slug" not in payload
    assert form.result() == KnowledgeEntryForm.Accepted


def test_knowledge_priority_must_be_integer(qapp, recording_service):
    service = recording_service()
    form = KnowledgeEntryForm(service, _knowledge(), executor=SyncExecutor())
    form.fields["priority"].setText("alta")
    form.save()

    assert service.updated == []
    assert form.state.is_open and not form.state.is_submitting
    assert form.error_label.text()


def test_server_error_keeps_form_open(qapp, recording_service):
    service = recording_service()
    service.error = ApiError(400, "slug already exists")
    form = KnowledgeEntryForm(service, _knowledge(), executor=SyncExecutor())
    form.save()

    assert form.error_label.text() == "slug already exists"
    assert form.save_btn.isEnabled()
    assert form.state.error == "slug already exists"


def test_cancel_blocked_while_saving(qapp, recording_service, manual_executor):
    form = KnowledgeEntryForm(recording_service(), None, executor=manual_executor)
    form.fields["title"].setText("Nova")
    form.fields["content"].setPlainText("Conteúdo")
    form.save()

    assert form.state.is_submitting
    form.reject()
    assert form.state.is_submitting
    manual_executor.run()
    assert not form.state.is_open


def test_online_appointment_without_link_is_not_sent(qapp, recording_service, manual_executor):
    service = recording_service()
    form = AppointmentForm(
        service, None, client_service=recording_service(), executor=manual_executor
    )
    manual_executor.run_all()

    form.client_picker.set_client("c1", "Maria")
    form.fields["procedure"].setText("Consulta online")
    set_selected_by_id(form.type_combo, "ONLINE")
    start = datetime(2030, 1, 10, 10, 0)
    form.set_widget_value(form.fields["start"], start)
    form.set_widget_value(form.fields["end"], start + timedelta(hours=1))
    form.save()

    assert service.created == []
    assert manual_executor.pending == 0
    assert form.error_label.text()

    form.meeting_link_edit.setText("https://meet.example.com/abc")
    form.save()
    manual_executor.run()
    payload = service.created[0]
    assert payload["clientId"] == "c1"
    assert payload["type"] == "ONLINE"
    assert payload["meetingLink"] == "https://meet.example.com/abc"
    assert payload["start"].endswith("Z")


def test_user_cannot_change_own_role(qapp, recording_service):
    service = recording_service()
    me = UserDTO(id="u1", name="Ana", email="ana@clinic.com", role="ADMIN")
    form = UserForm(service, me, current_user_id="u1", executor=SyncExecutor())
    assert not form.role_combo.isEnabled()

    set_selected_by_id(form.role_combo, "USER")
    form.save()
    assert service.updated == []

    set_selected_by_id(form.role_combo, "ADMIN")
    form.save()
    entity_id, payload = service.updated[0]
    assert entity_id == "u1"
    assert "password" not in payload


def test_form_geometry_is_persisted(qapp, recording_service):
    from ui import settings as ui_settings

    form = KnowledgeEntryForm(recording_service(), _knowledge(), executor=SyncExecutor())
    form.resize(700, 500)
    form.reject()
    stored = ui_settings.get_window_settings("form:KnowledgeEntryForm")
    assert stored.get("geometry")


def test_switching_to_in_person_drops_meeting_link(qapp, recording_service):
    from services.dto import AppointmentDTO

    service = recording_service()
    start = datetime(2030, 1, 10, 10, 0)
    appointment = AppointmentDTO(
        id="a1",
        client_id="c1",
        procedure="Retorno",
        type="ONLINE",
        start=start,
        end=start + timedelta(hours=1),
        meeting_link="https://meet.example.com/old",
        client_name="Maria",
    )
    form = AppointmentForm(
        service, appointment, client_service=recording_service(), executor=SyncExecutor()
    )
    assert form.meeting_link_edit.text() == "https://meet.example.com/old"

    set_selected_by_id(form.type_combo, "IN_PERSON")
    assert form.meeting_link_edit.text() == ""
    form.save()

    entity_id, payload = service.updated[0]
    assert entity_id == "a1"
    assert payload["type"] == "IN_PERSON"
    assert "meetingLink" not in payload
