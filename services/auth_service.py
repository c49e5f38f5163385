"""Вход, регистрация и восстановление пароля."""

from __future__ import annotations

import logging

from core.session import SessionStore
from infrastructure.api_client import ApiClient, ApiError
from services.dto import UserDTO
from services.validators import (
    ValidationError,
    check_passwords,
    normalize_email,
    require,
)

logger = logging.getLogger(__name__)

_TOKEN_KEYS = ("accessToken", "token", "access_token")


class AuthService:
    def __init__(self, client: ApiClient, session: SessionStore):
        self.client = client
        self.session = session

    def login(self, email: str, password: str) -> UserDTO:
        """Выполняет вход и сохраняет токен с пользователем в сессии."""
        email = normalize_email(email)
        if not email:
            raise ValidationError("required", "email")
        require(password, "password")
        body = self.client.post("/auth/login", json={"email": email, "password": password}) or {}
        token = next((body[key] for key in _TOKEN_KEYS if body.get(key)), None)
        user_data = body.get("user")
        if not token or not isinstance(user_data, dict):
            raise ApiError(None, "Resposta de login inválida")
        user = UserDTO.from_api(user_data)
        self.session.set(token, user)
        return user

    def register(self, name: str, email: str, password: str, confirmation: str) -> UserDTO:
        """Регистрирует аккаунт и сразу входит под ним."""
        name = require(name, "name")
        email = normalize_email(email)
        if not email:
            raise ValidationError("required", "email")
        check_passwords(password, confirmation)
        self.client.post(
            "/auth/register", json={"name": name, "email": email, "password": password}
        )
        logger.info("👤 Зарегистрирован пользователь %s", email)
        return self.login(email, password)

    def forgot_password(self, email: str) -> None:
        email = normalize_email(email)
        if not email:
            raise ValidationError("required", "email")
        self.client.post("/auth/forgot-password", json={"email": email})

    def reset_password(self, email: str, token: str, password: str, confirmation: str) -> None:
        email = normalize_email(email)
        if not email:
            raise ValidationError("required", "email")
        token = require(token, "token")
        check_passwords(password, confirmation)
        self.client.post(
            "/auth/reset-password",
            json={"email": email, "token": token, "newPassword": password},
        )

    def logout(self) -> None:
        self.session.clear()
