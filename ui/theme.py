"""Светлая и тёмная темы приложения."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtWidgets import QApplication

from ui import settings as ui_settings

logger = logging.getLogger(__name__)

THEMES = ("light", "dark")
RESOURCES_DIR = Path(__file__).resolve().parent.parent / "resources"
_STYLE_FILES = {"light": "style.qss", "dark": "style_dark.qss"}


def normalize_theme(value: str | None) -> str:
    return "dark" if value == "dark" else "light"


def current_theme() -> str:
    return normalize_theme(ui_settings.get_app_settings().get("theme"))


def apply_theme(app: QApplication | None, theme: str, *, persist: bool = True) -> str:
    """Применяет таблицу стилей темы и при необходимости сохраняет выбор."""
    theme = normalize_theme(theme)
    if app is not None:
        style_path = RESOURCES_DIR / _STYLE_FILES[theme]
        try:
            app.setStyleSheet(style_path.read_text(encoding="utf-8"))
        except OSError as e:
            logger.warning("Не удалось загрузить стиль %s: %s", style_path, e)
        app.setProperty("theme", theme)
    if persist:
        app_settings = ui_settings.get_app_settings()
        app_settings["theme"] = theme
        ui_settings.set_app_settings(app_settings)
    return theme
