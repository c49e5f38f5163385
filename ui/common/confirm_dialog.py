"""Диалог подтверждения удаления с ожиданием ответа сервера."""

from __future__ import annotations

import logging
from typing import Any, Callable

from PySide6.QtWidgets import QDialog, QHBoxLayout, QLabel, QVBoxLayout

from core.dialog_state import ConfirmState
from ui.common.message_boxes import error_text
from ui.common.styled_widgets import set_status, status_label, styled_button
from ui.common.workers import Executor, default_executor
from ui.i18n import tr

logger = logging.getLogger(__name__)


class ConfirmDeleteDialog(QDialog):
    """Спрашивает подтверждение и выполняет ``delete_func(target)``.

    Пока запрос выполняется, отмена недоступна. При ошибке диалог остаётся
    открытым с сообщением, при успехе закрывается с ``Accepted``.
    """

    def __init__(
        self,
        target: Any,
        name: str,
        delete_func: Callable[[Any], Any],
        *,
        executor: Executor | None = None,
        text: str | None = None,
        parent=None,
    ):
        super().__init__(parent)
        self.delete_func = delete_func
        self.executor = executor or default_executor()
        self.state = ConfirmState()
        self.state.request(target)

        self.setWindowTitle(tr("confirm.delete_title"))
        self.setModal(True)

        layout = QVBoxLayout(self)
        self.text_label = QLabel(text or tr("confirm.delete_text", name=name))
        self.text_label.setWordWrap(True)
        layout.addWidget(self.text_label)

        self.error_label = status_label("error")
        layout.addWidget(self.error_label)

        buttons = QHBoxLayout()
        buttons.addStretch()
        self.confirm_btn = styled_button(tr("common.delete"), icon="🗑️", role="danger")
        self.cancel_btn = styled_button(tr("common.cancel"), icon="❌")
        self.confirm_btn.clicked.connect(self.confirm)
        self.cancel_btn.clicked.connect(self.reject)
        buttons.addWidget(self.confirm_btn)
        buttons.addWidget(self.cancel_btn)
        layout.addLayout(buttons)

    def confirm(self) -> None:
        if not self.state.can_cancel:
            return
        target = self.state.confirm()
        self._set_busy(True)
        set_status(self.error_label, None)
        self.executor.submit(
            lambda: self.delete_func(target), self._on_deleted, self._on_failed
        )

    def _set_busy(self, busy: bool) -> None:
        self.confirm_btn.setEnabled(not busy)
        self.cancel_btn.setEnabled(not busy)
        self.confirm_btn.setText(
            f"🗑️ {tr('common.deleting') if busy else tr('common.delete')}"
        )

    def _on_deleted(self, _result) -> None:
        logger.info("🗑 Удалено: %s", getattr(self.state.target, "id", self.state.target))
        self.state.succeed()
        self._set_busy(False)
        self.accept()

    def _on_failed(self, exc: BaseException) -> None:
        logger.error("❌ Ошибка при удалении", exc_info=exc)
        message = error_text(exc, "error.delete")
        self.state.fail(message)
        self._set_busy(False)
        set_status(self.error_label, message)

    def reject(self):
        if not self.state.cancel():
            return
        super().reject()

    def closeEvent(self, event):
        if not self.state.can_cancel:
            event.ignore()
            return
        super().closeEvent(event)
