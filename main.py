import logging
import sys

from PySide6.QtGui import QFont
from PySide6.QtWidgets import QApplication, QDialog

from config import Settings, get_settings
from core.app_context import get_app_context
from ui.forms.auth_dialogs import LoginDialog
from ui.main_window import MainWindow
from ui.theme import apply_theme, current_theme
from utils.logging_config import setup_logging

__all__ = ["main"]


def main(settings: Settings | None = None) -> int:
    """Запускает настольное приложение CRM клиники."""

    settings = settings or get_settings()
    setup_logging(settings)
    logger = logging.getLogger(__name__)
    logger.info("🚀 Запуск CRM, API: %s", settings.api_url)

    # ───── GUI ─────
    app = QApplication.instance() or QApplication(sys.argv)
    app.setFont(QFont("Roboto", 10))
    apply_theme(app, current_theme(), persist=False)

    context = get_app_context()
    context.session.hydrate()

    if not context.session.is_authenticated:
        dialog = LoginDialog(context.auth_service)
        if dialog.exec() != QDialog.Accepted:
            logger.info("Вход отменён, завершение")
            return 0

    window = MainWindow(context=context)
    window.show()
    try:
        return app.exec()
    finally:
        context.api_client.close()


if __name__ == "__main__":
    raise SystemExit(main())
