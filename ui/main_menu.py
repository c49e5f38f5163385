from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QMenuBar, QMessageBox

from ui.i18n import tr


class MainMenu(QMenuBar):
    """Главное меню; действия вызывают методы главного окна."""

    def __init__(self, parent=None):
        super().__init__(parent)
        window = parent

        # 🔸 Файл
        file_menu = self.addMenu(tr("menu.file"))

        refresh_action = QAction(f"🔄 {tr('action.refresh')}", self)
        refresh_action.setShortcut(QKeySequence("F5"))
        refresh_action.triggered.connect(window.refresh_current)
        file_menu.addAction(refresh_action)

        anamnesis_action = QAction(f"📋 {tr('nav.anamnesis')}…", self)
        anamnesis_action.triggered.connect(window.open_anamnesis)
        file_menu.addAction(anamnesis_action)

        settings_action = QAction(f"⚙️ {tr('action.configure')}…", self)
        settings_action.triggered.connect(window.open_settings)
        file_menu.addAction(settings_action)

        file_menu.addSeparator()

        logout_action = QAction(f"🚪 {tr('action.logout')}", self)
        logout_action.triggered.connect(window.logout)
        file_menu.addAction(logout_action)

        exit_action = QAction(tr("action.exit"), self)
        exit_action.setShortcut(QKeySequence("Ctrl+Q"))
        exit_action.triggered.connect(window.close)
        file_menu.addAction(exit_action)

        # 🔸 Справка
        help_menu = self.addMenu(tr("menu.help"))
        about_action = QAction(f"ℹ️ {tr('action.about')}", self)
        about_action.triggered.connect(self.show_about)
        help_menu.addAction(about_action)

    def show_about(self):
        QMessageBox.about(self, tr("app.title"), tr("app.about"))
