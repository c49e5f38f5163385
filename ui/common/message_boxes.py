import logging

from PySide6.QtWidgets import QMessageBox

from infrastructure.api_client import ApiError, UnauthorizedError
from services.validators import ValidationError
from ui.i18n import tr, tr_validation

logger = logging.getLogger(__name__)


def error_text(exc: BaseException, fallback_key: str = "error.load") -> str:
    """Короткое сообщение об ошибке для пользователя."""
    if isinstance(exc, ValidationError):
        return tr_validation(exc.code, exc.field)
    if isinstance(exc, UnauthorizedError):
        return tr("error.unauthorized")
    if isinstance(exc, ApiError):
        if exc.status_code is None:
            return tr("error.network")
        if exc.status_code == 403:
            return tr("error.forbidden")
        if exc.message and not exc.message.startswith("HTTP "):
            return exc.message
    return tr(fallback_key)


def confirm(text: str, title: str | None = None, parent=None) -> bool:
    return (
        QMessageBox.question(
            parent,
            title or tr("common.confirm"),
            text,
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.Yes,
        )
        == QMessageBox.Yes
    )


def show_error(message: str, title: str | None = None, parent=None):
    logger.error("❌ UI ошибка: %s", message)
    QMessageBox.critical(parent, title or tr("common.error"), message)


def show_info(message: str, title: str | None = None, parent=None):
    logger.info("ℹ️ UI: %s", message)
    QMessageBox.information(parent, title or tr("common.info"), message)
