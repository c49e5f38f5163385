"""Выполнение сетевых запросов вне GUI-потока.

Контроллеры получают исполнитель с методом ``submit(fn, on_success,
on_error)``. ``QtExecutor`` запускает ``fn`` в ``QThreadPool`` и возвращает
результат в GUI-поток через сигналы; ``SyncExecutor`` выполняет всё сразу
и нужен для тестов и коротких операций.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal, Slot

logger = logging.getLogger(__name__)

SuccessCallback = Callable[[Any], None]
ErrorCallback = Callable[[BaseException], None]


class Executor(Protocol):
    def submit(
        self,
        fn: Callable[[], Any],
        on_success: SuccessCallback,
        on_error: ErrorCallback,
    ) -> None: ...


class _Relay(QObject):
    """Живёт в GUI-потоке и доставляет результат колбэкам."""

    succeeded = Signal(object)
    failed = Signal(object)

    def __init__(self, on_success: SuccessCallback, on_error: ErrorCallback, done):
        super().__init__()
        self._on_success = on_success
        self._on_error = on_error
        self._done = done
        self.succeeded.connect(self._deliver_success)
        self.failed.connect(self._deliver_error)

    @Slot(object)
    def _deliver_success(self, result: Any) -> None:
        try:
            self._on_success(result)
        finally:
            self._done(self)

    @Slot(object)
    def _deliver_error(self, exc: BaseException) -> None:
        try:
            self._on_error(exc)
        finally:
            self._done(self)


class _Task(QRunnable):
    def __init__(self, fn: Callable[[], Any], relay: _Relay):
        super().__init__()
        self._fn = fn
        self._relay = relay

    def run(self):
        try:
            result = self._fn()
        except Exception as exc:  # noqa: BLE001 - ошибка передаётся в GUI-поток
            self._relay.failed.emit(exc)
        else:
            self._relay.succeeded.emit(result)


class QtExecutor:
    def __init__(self, pool: QThreadPool | None = None):
        self._pool = pool or QThreadPool.globalInstance()
        self._pending: set[_Relay] = set()

    def submit(
        self,
        fn: Callable[[], Any],
        on_success: SuccessCallback,
        on_error: ErrorCallback,
    ) -> None:
        relay = _Relay(on_success, on_error, self._pending.discard)
        self._pending.add(relay)
        self._pool.start(_Task(fn, relay))

    @property
    def pending_count(self) -> int:
        return len(self._pending)


class SyncExecutor:
    def submit(
        self,
        fn: Callable[[], Any],
        on_success: SuccessCallback,
        on_error: ErrorCallback,
    ) -> None:
        try:
            result = fn()
        except Exception as exc:  # noqa: BLE001
            on_error(exc)
            return
        on_success(result)


_default_executor: Executor | None = None


def default_executor() -> Executor:
    global _default_executor
    if _default_executor is None:
        _default_executor = QtExecutor()
    return _default_executor
