"""Состояния модальной формы и диалога подтверждения удаления."""

from __future__ import annotations

from enum import Enum
from typing import Any


class InvalidTransition(RuntimeError):
    """Переход недопустим из текущего состояния."""


class FormPhase(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    SUBMITTING = "submitting"


class FormState:
    """``closed → open(create|edit) → submitting → closed | open(error)``."""

    def __init__(self) -> None:
        self.phase = FormPhase.CLOSED
        self.entity_id: Any | None = None
        self.error: str | None = None

    @property
    def is_edit(self) -> bool:
        return self.entity_id is not None

    @property
    def is_open(self) -> bool:
        return self.phase is not FormPhase.CLOSED

    @property
    def is_submitting(self) -> bool:
        return self.phase is FormPhase.SUBMITTING

    def open_create(self) -> None:
        self._open(None)

    def open_edit(self, entity_id: Any) -> None:
        if entity_id is None:
            raise ValueError("Для редактирования нужен id")
        self._open(entity_id)

    def _open(self, entity_id: Any | None) -> None:
        if self.phase is not FormPhase.CLOSED:
            raise InvalidTransition(f"Форма уже открыта ({self.phase.value})")
        self.phase = FormPhase.OPEN
        self.entity_id = entity_id
        self.error = None

    def start_submit(self) -> None:
        if self.phase is not FormPhase.OPEN:
            raise InvalidTransition(f"Нельзя отправить форму в состоянии {self.phase.value}")
        self.phase = FormPhase.SUBMITTING
        self.error = None

    def invalid(self, message: str) -> None:
        """Ошибка проверки до отправки: форма остаётся открытой."""
        if self.phase is not FormPhase.OPEN:
            raise InvalidTransition(f"Нет открытой формы ({self.phase.value})")
        self.error = message

    def succeed(self) -> None:
        if self.phase is not FormPhase.SUBMITTING:
            raise InvalidTransition("Нет отправки в процессе")
        self._reset()

    def fail(self, message: str) -> None:
        if self.phase is not FormPhase.SUBMITTING:
            raise InvalidTransition("Нет отправки в процессе")
        self.phase = FormPhase.OPEN
        self.error = message

    def close(self) -> bool:
        """Закрывает форму без сохранения; во время отправки запрещено."""
        if self.phase is FormPhase.SUBMITTING:
            return False
        self._reset()
        return True

    def _reset(self) -> None:
        self.phase = FormPhase.CLOSED
        self.entity_id = None
        self.error = None


class ConfirmPhase(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    CONFIRMING = "confirming"


class ConfirmState:
    """``idle → pending(target) → confirming → idle``.

    Ошибка удаления возвращает диалог в ``pending`` с тем же объектом,
    чтобы пользователь мог повторить попытку или отменить.
    """

    def __init__(self) -> None:
        self.phase = ConfirmPhase.IDLE
        self.target: Any | None = None
        self.error: str | None = None

    @property
    def can_cancel(self) -> bool:
        return self.phase is not ConfirmPhase.CONFIRMING

    def request(self, target: Any) -> None:
        if self.phase is ConfirmPhase.CONFIRMING:
            raise InvalidTransition("Удаление уже выполняется")
        self.phase = ConfirmPhase.PENDING
        self.target = target
        self.error = None

    def confirm(self) -> Any:
        if self.phase is not ConfirmPhase.PENDING:
            raise InvalidTransition(f"Нечего подтверждать ({self.phase.value})")
        self.phase = ConfirmPhase.CONFIRMING
        self.error = None
        return self.target

    def succeed(self) -> None:
        if self.phase is not ConfirmPhase.CONFIRMING:
            raise InvalidTransition("Удаление не выполнялось")
        self._reset()

    def fail(self, message: str) -> None:
        if self.phase is not ConfirmPhase.CONFIRMING:
            raise InvalidTransition("Удаление не выполнялось")
        self.phase = ConfirmPhase.PENDING
        self.error = message

    def cancel(self) -> bool:
        if not self.can_cancel:
            return False
        self._reset()
        return True

    def _reset(self) -> None:
        self.phase = ConfirmPhase.IDLE
        self.target = None
        self.error = None
