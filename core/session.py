"""Хранилище сессии: токен и текущий пользователь."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable

from services.dto import UserDTO

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    token: str
    user: UserDTO


class SessionStore:
    """Процессный стор сессии.

    Чтение безопасно до ``hydrate()``: пока сессии нет, все свойства
    возвращают ``None``. Запись идёт в ``ui.settings`` (или в переданные
    функции ``load``/``save``/``erase`` в тестах).
    """

    def __init__(
        self,
        *,
        load: Callable[[], dict] | None = None,
        save: Callable[[dict], None] | None = None,
        erase: Callable[[], None] | None = None,
    ) -> None:
        if load is None or save is None or erase is None:
            from ui import settings as ui_settings

            load = load or ui_settings.get_session_data
            save = save or ui_settings.set_session_data
            erase = erase or ui_settings.clear_session_data
        self._load = load
        self._save = save
        self._erase = erase
        self._lock = threading.Lock()
        self._session: Session | None = None
        self._hydrated = False

    def hydrate(self) -> Session | None:
        """Читает сохранённую сессию один раз при старте."""
        with self._lock:
            if self._hydrated:
                return self._session
            self._hydrated = True
            data = self._load() or {}
            token = data.get("token")
            user_data = data.get("user")
            if not token or not isinstance(user_data, dict):
                return None
            try:
                user = UserDTO.from_api(user_data)
            except (KeyError, TypeError, ValueError):
                logger.warning("⚠️ Повреждённая сессия в настройках, сбрасываю")
                self._erase()
                return None
            self._session = Session(token=token, user=user)
            logger.info("🔑 Сессия восстановлена для %s", user.email)
            return self._session

    def get(self) -> Session | None:
        return self._session

    def set(self, token: str, user: UserDTO) -> None:
        with self._lock:
            self._session = Session(token=token, user=user)
            self._hydrated = True
        self._save({"token": token, "user": user.to_storage()})
        logger.info("🔑 Вход выполнен: %s", user.email)

    def clear(self) -> None:
        with self._lock:
            had_session = self._session is not None
            self._session = None
            self._hydrated = True
        self._erase()
        if had_session:
            logger.info("🚪 Сессия завершена")

    @property
    def token(self) -> str | None:
        session = self._session
        return session.token if session else None

    @property
    def user(self) -> UserDTO | None:
        session = self._session
        return session.user if session else None

    @property
    def tenant_key(self) -> str | None:
        user = self.user
        return user.api_key if user else None

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None
