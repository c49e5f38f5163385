"""Локальные настройки интерфейса: окна, таблицы, язык, тема и сессия.

Всё хранится в одном JSON-файле в каталоге пользователя; файл читается
один раз и кэшируется до ``reset_cache``.
"""

import copy
import json
import logging
from pathlib import Path

from appdirs import user_config_dir

logger = logging.getLogger(__name__)

SETTINGS_PATH = Path(user_config_dir("clinic_crm", appauthor=False)) / "ui_settings.json"
_CACHE: dict | None = None


def _read() -> dict:
    global _CACHE
    if _CACHE is None:
        _CACHE = {}
        if SETTINGS_PATH.exists():
            try:
                _CACHE = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                logger.exception("Не удалось загрузить настройки: %s", e)
    return copy.deepcopy(_CACHE)


def _write(data: dict) -> None:
    global _CACHE
    _CACHE = copy.deepcopy(data)
    try:
        SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
        SETTINGS_PATH.write_text(
            json.dumps(_CACHE, ensure_ascii=False, indent=2), encoding="utf-8"
        )
    except OSError as e:
        logger.exception("Не удалось сохранить настройки: %s", e)


def reset_cache() -> None:
    """Сбрасывает кэш, следующий вызов перечитает файл."""
    global _CACHE
    _CACHE = None


def _get_entry(section: str, name: str) -> dict:
    return _read().get(section, {}).get(name, {})


def _set_entry(section: str, name: str, value: dict) -> None:
    data = _read()
    data.setdefault(section, {})[name] = value
    _write(data)


def get_table_settings(name: str) -> dict:
    return _get_entry("tables", name)


def set_table_settings(name: str, settings: dict) -> None:
    _set_entry("tables", name, settings)


def get_window_settings(name: str) -> dict:
    """Геометрия и прочее состояние окна ``name``."""
    return _get_entry("windows", name)


def set_window_settings(name: str, settings: dict) -> None:
    _set_entry("windows", name, settings)


def get_app_settings() -> dict:
    """Язык, тема."""
    return _read().get("app", {})


def set_app_settings(settings: dict) -> None:
    data = _read()
    data["app"] = settings
    _write(data)


# --- сессия -------------------------------------------------------------------
def get_session_data() -> dict:
    return _read().get("session", {})


def set_session_data(session: dict) -> None:
    data = _read()
    data["session"] = session
    _write(data)


def clear_session_data() -> None:
    data = _read()
    if data.pop("session", None) is not None:
        _write(data)
