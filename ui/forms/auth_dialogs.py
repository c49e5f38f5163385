"""Диалоги входа, регистрации и восстановления пароля."""

from __future__ import annotations

import logging

from PySide6.QtWidgets import QDialog, QFormLayout, QHBoxLayout, QLineEdit, QVBoxLayout

from services.validators import ValidationError
from ui.common.message_boxes import error_text, show_info
from ui.common.styled_widgets import header_label, set_status, status_label, styled_button
from ui.common.workers import Executor, default_executor
from ui.i18n import tr

logger = logging.getLogger(__name__)


def _password_edit() -> QLineEdit:
    edit = QLineEdit()
    edit.setEchoMode(QLineEdit.Password)
    return edit


class _AuthDialog(QDialog):
    """Общий каркас: поля, строка ошибки и кнопка отправки."""

    TITLE_KEY = "auth.title"
    SUBMIT_KEY = "auth.login"
    FAILURE_KEY = "error.save"

    def __init__(self, auth_service, *, executor: Executor | None = None, parent=None):
        super().__init__(parent)
        self.auth_service = auth_service
        self.executor = executor or default_executor()
        self._busy = False
        self.setWindowTitle(tr(self.TITLE_KEY))
        self.setModal(True)
        self.setMinimumWidth(380)

        self.layout = QVBoxLayout(self)
        self.layout.addWidget(header_label(tr(self.TITLE_KEY)))
        self.form = QFormLayout()
        self.layout.addLayout(self.form)
        self.build_fields()

        self.error_label = status_label("error")
        self.layout.addWidget(self.error_label)

        self.buttons = QHBoxLayout()
        self.submit_btn = styled_button(tr(self.SUBMIT_KEY), role="primary")
        self.submit_btn.setDefault(True)
        self.submit_btn.clicked.connect(self.submit)
        self.buttons.addWidget(self.submit_btn)
        self.layout.addLayout(self.buttons)

    def add_row(self, field: str, widget: QLineEdit) -> QLineEdit:
        self.form.addRow(tr(f"field.{field}") + ":", widget)
        return widget

    def build_fields(self) -> None:
        raise NotImplementedError

    def perform(self):
        """Выполняется в рабочем потоке."""
        raise NotImplementedError

    def submit(self) -> None:
        if self._busy:
            return
        set_status(self.error_label, None)
        self._busy = True
        self.submit_btn.setEnabled(False)
        self.executor.submit(self.perform, self._on_done, self._on_failed)

    def _on_done(self, _result) -> None:
        self._busy = False
        self.submit_btn.setEnabled(True)
        self.accept()

    def _on_failed(self, exc: BaseException) -> None:
        self._busy = False
        self.submit_btn.setEnabled(True)
        if not isinstance(exc, ValidationError):
            logger.warning("Ошибка в %s: %s", type(self).__name__, exc)
        set_status(self.error_label, self.failure_text(exc))

    def failure_text(self, exc: BaseException) -> str:
        return error_text(exc, self.FAILURE_KEY)

    def reject(self):
        if self._busy:
            return
        super().reject()


class LoginDialog(_AuthDialog):
    TITLE_KEY = "auth.title"
    SUBMIT_KEY = "auth.login"
    FAILURE_KEY = "auth.login_failed"

    def build_fields(self) -> None:
        self.email_edit = self.add_row("email", QLineEdit())
        self.password_edit = self.add_row("password", _password_edit())

    def __init__(self, auth_service, *, executor: Executor | None = None, parent=None):
        super().__init__(auth_service, executor=executor, parent=parent)
        links = QHBoxLayout()
        for key, handler in (
            ("auth.register", self.open_register),
            ("auth.forgot", self.open_forgot),
            ("auth.reset", self.open_reset),
        ):
            btn = styled_button(tr(key))
            btn.setFlat(True)
            btn.clicked.connect(handler)
            links.addWidget(btn)
        self.layout.addLayout(links)

    def perform(self):
        return self.auth_service.login(self.email_edit.text(), self.password_edit.text())

    def failure_text(self, exc: BaseException) -> str:
        if isinstance(exc, ValidationError):
            return error_text(exc)
        status = getattr(exc, "status_code", 0)
        if status is None:
            return tr("error.network")
        return tr("auth.login_failed")

    def open_register(self):
        dialog = RegisterDialog(self.auth_service, executor=self.executor, parent=self)
        if dialog.exec() == QDialog.Accepted:
            self.accept()

    def open_forgot(self):
        ForgotPasswordDialog(self.auth_service, executor=self.executor, parent=self).exec()

    def open_reset(self):
        dialog = ResetPasswordDialog(self.auth_service, executor=self.executor, parent=self)
        if dialog.exec() == QDialog.Accepted:
            self.email_edit.setText(dialog.email_edit.text().strip())
            self.password_edit.clear()


class RegisterDialog(_AuthDialog):
    TITLE_KEY = "auth.register"
    SUBMIT_KEY = "auth.register"

    def build_fields(self) -> None:
        self.name_edit = self.add_row("name", QLineEdit())
        self.email_edit = self.add_row("email", QLineEdit())
        self.password_edit = self.add_row("password", _password_edit())
        self.confirm_edit = self.add_row("confirm_password", _password_edit())

    def perform(self):
        return self.auth_service.register(
            self.name_edit.text(),
            self.email_edit.text(),
            self.password_edit.text(),
            self.confirm_edit.text(),
        )


class ForgotPasswordDialog(_AuthDialog):
    TITLE_KEY = "auth.forgot"
    SUBMIT_KEY = "auth.forgot"

    def build_fields(self) -> None:
        self.email_edit = self.add_row("email", QLineEdit())

    def perform(self):
        return self.auth_service.forgot_password(self.email_edit.text())

    def _on_done(self, result) -> None:
        show_info(tr("auth.forgot_sent"), parent=self)
        super()._on_done(result)


class ResetPasswordDialog(_AuthDialog):
    TITLE_KEY = "auth.reset"
    SUBMIT_KEY = "auth.reset"

    def build_fields(self) -> None:
        self.email_edit = self.add_row("email", QLineEdit())
        self.token_edit = self.add_row("token", QLineEdit())
        self.password_edit = self.add_row("password", _password_edit())
        self.confirm_edit = self.add_row("confirm_password", _password_edit())

    def perform(self):
        return self.auth_service.reset_password(
            self.email_edit.text(),
            self.token_edit.text(),
            self.password_edit.text(),
            self.confirm_edit.text(),
        )

    def _on_done(self, result) -> None:
        show_info(tr("auth.reset_done"), parent=self)
        super()._on_done(result)
