import pytest

from core.dialog_state import (
    ConfirmPhase,
    ConfirmState,
    FormPhase,
    FormState,
    InvalidTransition,
)


def test_form_create_submit_success():
    state = FormState()
    state.open_create()
    assert state.is_open and not state.is_edit
    state.start_submit()
    assert state.is_submitting
    state.succeed()
    assert state.phase is FormPhase.CLOSED


def test_form_failure_keeps_form_open_with_error():
    state = FormState()
    state.open_edit("c1")
    state.start_submit()
    state.fail("Falha")
    assert state.phase is FormPhase.OPEN
    assert state.entity_id == "c1"
    assert state.error == "Falha"
    state.start_submit()
    assert state.error is None


def test_form_cannot_close_while_submitting():
    state = FormState()
    state.open_create()
    state.start_submit()
    assert not state.close()
    assert state.is_submitting


def test_form_rejects_double_submit():
    state = FormState()
    state.open_create()
    state.start_submit()
    with pytest.raises(InvalidTransition):
        state.start_submit()


def test_invalid_keeps_phase():
    state = FormState()
    state.open_create()
    state.invalid("Campo obrigatório")
    assert state.phase is FormPhase.OPEN
    assert state.error == "Campo obrigatório"


def test_open_edit_requires_id():
    with pytest.raises(ValueError):
        FormState().open_edit(None)


def test_confirm_failure_returns_to_pending_with_target():
    state = ConfirmState()
    state.request("row-1")
    assert state.confirm() == "row-1"
    assert not state.can_cancel
    assert not state.cancel()
    state.fail("Erro")
    assert state.phase is ConfirmPhase.PENDING
    assert state.target == "row-1"
    assert state.cancel()
    assert state.phase is ConfirmPhase.IDLE


def test_confirm_without_request_fails():
    with pytest.raises(InvalidTransition):
        ConfirmState().confirm()
