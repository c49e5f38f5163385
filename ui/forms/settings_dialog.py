from __future__ import annotations

import base64

from PySide6.QtCore import QByteArray
from PySide6.QtWidgets import (
    QApplication,
    QCheckBox,
    QComboBox,
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
)

from ui import settings as ui_settings
from ui.i18n import LANGUAGES, current_language, set_language, tr
from ui.theme import apply_theme, current_theme


SETTINGS_KEY = "settings_dialog"


class SettingsDialog(QDialog):
    """Диалог настроек: язык интерфейса и тёмная тема."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle(tr("settings.title"))
        self.setMinimumWidth(420)

        layout = QVBoxLayout(self)
        form = QFormLayout()
        layout.addLayout(form)

        # --- язык ---
        self.language_combo = QComboBox()
        for code in LANGUAGES:
            self.language_combo.addItem(tr(f"language.{code}"), code)
        form.addRow(tr("settings.language") + ":", self.language_combo)
        language_hint = QLabel(tr("settings.language_hint"))
        language_hint.setWordWrap(True)
        form.addRow(language_hint)

        # --- тема ---
        self.dark_checkbox = QCheckBox(tr("settings.theme"))
        form.addRow(self.dark_checkbox)
        theme_hint = QLabel(tr("settings.theme_hint"))
        theme_hint.setWordWrap(True)
        form.addRow(theme_hint)

        restart_hint = QLabel(tr("settings.restart_hint"))
        restart_hint.setWordWrap(True)
        layout.addWidget(restart_hint)

        btns = QHBoxLayout()
        save = QPushButton(tr("common.save"))
        cancel = QPushButton(tr("common.cancel"))
        save.clicked.connect(self.save)
        cancel.clicked.connect(self.reject)
        btns.addStretch()
        btns.addWidget(save)
        btns.addWidget(cancel)
        layout.addLayout(btns)

        self.load()
        self._restore_geometry()

    # --------------------------------------------------------------
    def load(self) -> None:
        index = self.language_combo.findData(current_language())
        self.language_combo.setCurrentIndex(max(index, 0))
        self.dark_checkbox.setChecked(current_theme() == "dark")

    # --------------------------------------------------------------
    def save(self) -> None:
        set_language(self.language_combo.currentData())
        apply_theme(
            QApplication.instance(), "dark" if self.dark_checkbox.isChecked() else "light"
        )
        self.accept()

    # --------------------------------------------------------------
    def _restore_geometry(self) -> None:
        window_settings = ui_settings.get_window_settings(SETTINGS_KEY)
        geometry = window_settings.get("geometry")
        if geometry:
            try:
                self.restoreGeometry(QByteArray(base64.b64decode(geometry)))
            except (ValueError, TypeError):
                pass

    # --------------------------------------------------------------
    def _save_geometry(self) -> None:
        window_settings = ui_settings.get_window_settings(SETTINGS_KEY)
        window_settings["geometry"] = base64.b64encode(bytes(self.saveGeometry())).decode(
            "ascii"
        )
        ui_settings.set_window_settings(SETTINGS_KEY, window_settings)

    # --------------------------------------------------------------
    def done(self, result) -> None:
        self._save_geometry()
        super().done(result)
