from types import SimpleNamespace

from infrastructure.api_client import ApiError
from ui.common.confirm_dialog import ConfirmDeleteDialog
from ui.common.workers import SyncExecutor


def test_failed_delete_keeps_dialog_open(qapp, manual_executor):
    deleted = []
    target = SimpleNamespace(id="c1")
    dlg = ConfirmDeleteDialog(target, "Maria", lambda obj: deleted.append(obj.id), executor=manual_executor)

    dlg.confirm()
    assert not dlg.cancel_btn.isEnabled()
    dlg.reject()
    assert dlg.result() == 0 and dlg.state.target is target

    manual_executor.reject(0, ApiError(409, "Cliente possui consultas"))
    assert dlg.error_label.text() == "Cliente possui consultas"
    assert dlg.cancel_btn.isEnabled()
    assert dlg.state.target is target
    assert deleted == []


def test_successful_delete_accepts(qapp):
    deleted = []
    dlg = ConfirmDeleteDialog(
        SimpleNamespace(id="c2"), "Ana", lambda obj: deleted.append(obj.id), executor=SyncExecutor()
    )
    dlg.confirm()
    assert deleted == ["c2"]
    assert dlg.result() == ConfirmDeleteDialog.Accepted
