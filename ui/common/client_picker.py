"""Выбор клиента с поиском по API."""

from __future__ import annotations

import logging
from functools import partial

from PySide6.QtCore import QTimer, Signal
from PySide6.QtWidgets import QComboBox, QLineEdit, QVBoxLayout, QWidget

from ui.common.combo_helpers import populate_combo
from ui.common.workers import Executor, default_executor
from ui.i18n import tr

logger = logging.getLogger(__name__)


class ClientPicker(QWidget):
    """Поле поиска и список найденных клиентов.

    Поиск уходит в ``GET /clients?search=..&limit=..`` через 300 мс после
    последнего ввода; ответы устаревших запросов игнорируются.
    """

    client_changed = Signal(object)

    def __init__(
        self,
        service,
        *,
        limit: int = 10,
        debounce_ms: int = 300,
        allow_empty: bool = False,
        executor: Executor | None = None,
        parent=None,
    ):
        super().__init__(parent)
        self.service = service
        self.limit = limit
        self.allow_empty = allow_empty
        self.executor = executor or default_executor()
        self._request_id = 0
        self._selected: tuple[str, str] | None = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText(tr("common.search"))
        self.search_input.setClearButtonEnabled(True)
        layout.addWidget(self.search_input)
        self.combo = QComboBox()
        layout.addWidget(self.combo)

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(debounce_ms)
        self._timer.timeout.connect(self.search_now)
        self.search_input.textChanged.connect(lambda _text: self._timer.start())
        self.combo.currentIndexChanged.connect(self._on_index_changed)

        self._fill([])

    def _placeholder(self) -> str:
        return tr("paypal.no_client") if self.allow_empty else tr("clients.select")

    def _fill(self, clients) -> None:
        items = list(clients)
        if self._selected and all(c.id != self._selected[0] for c in items):
            items.insert(0, _Choice(*self._selected))
        populate_combo(
            self.combo,
            items,
            label_func=lambda c: f"{c.name} ({c.email})" if getattr(c, "email", None) else c.name,
            placeholder=self._placeholder(),
        )
        if self._selected:
            index = self.combo.findData(self._selected[0])
            self.combo.setCurrentIndex(max(index, 0))

    def search_now(self) -> None:
        self._timer.stop()
        self._request_id += 1
        request_id = self._request_id
        term = self.search_input.text().strip() or None
        self.executor.submit(
            lambda: self.service.get_page(1, self.limit, term),
            partial(self._on_loaded, request_id),
            partial(self._on_failed, request_id),
        )

    def _on_loaded(self, request_id: int, result) -> None:
        if request_id != self._request_id:
            return
        self._fill(result.items)

    def _on_failed(self, request_id: int, exc: BaseException) -> None:
        if request_id != self._request_id:
            return
        logger.error("Ошибка при поиске клиентов", exc_info=exc)
        self._fill([])

    def _on_index_changed(self, _index: int) -> None:
        client_id = self.combo.currentData()
        if client_id is None:
            self._selected = None
        else:
            self._selected = (client_id, self.combo.currentText())
        self.client_changed.emit(client_id)

    def selected_id(self) -> str | None:
        return self.combo.currentData()

    def set_client(self, client_id: str | None, name: str | None = None) -> None:
        """Предвыбор клиента, даже если его нет в текущей выдаче."""
        self._selected = (client_id, name or client_id) if client_id else None
        self._fill([])


class _Choice:
    def __init__(self, client_id: str, name: str):
        self.id = client_id
        self.name = name
        self.email = None
