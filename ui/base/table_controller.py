import logging
from functools import partial
from typing import Any, Callable, Mapping

from PySide6.QtCore import QObject, QTimer, Signal

from core.list_state import FetchTicket, ListQuery, ListState, PageResult
from ui.common.message_boxes import error_text
from ui.common.workers import Executor, default_executor


logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_MS = 300

FetchPage = Callable[..., PageResult]


class TableController(QObject):
    """Контроллер таблицы: загрузка данных, пагинация, поиск и фильтры.

    ``fetch_page(page, limit, search, **filters)`` выполняется в исполнителе
    (по умолчанию пул потоков Qt). Правки поиска и фильтров применяются
    после паузы ``debounce_ms``; каждая новая правка перезапускает таймер.
    """

    data_changed = Signal()
    loading_changed = Signal(bool)
    error_changed = Signal(str)

    def __init__(
        self,
        fetch_page: FetchPage,
        *,
        page_size: int = 20,
        default_filters: Mapping[str, Any] | None = None,
        debounce_ms: int | None = None,
        executor: Executor | None = None,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self.fetch_page = fetch_page
        self.state: ListState = ListState(page_size, default_filters)
        self.executor = executor or default_executor()

        self._debounce = QTimer(self)
        self._debounce.setSingleShot(True)
        self._debounce.setInterval(DEFAULT_DEBOUNCE_MS if debounce_ms is None else debounce_ms)
        self._debounce.timeout.connect(self._on_debounce)

    # --- Свойства ---------------------------------------------------------
    @property
    def rows(self) -> list[Any]:
        return self.state.rows

    @property
    def debounce_ms(self) -> int:
        return self._debounce.interval()

    @property
    def is_debounce_pending(self) -> bool:
        return self._debounce.isActive()

    # --- Загрузка данных --------------------------------------------------
    def load_data(self):
        """Первичная загрузка (или перезагрузка текущей страницы)."""
        self._debounce.stop()
        self._dispatch(self.state.refresh_query())

    def refresh(self):
        """Обновить: новые критерии начинают с первой страницы."""
        self.load_data()

    def change_page(self, page: int) -> bool:
        query = self.state.page_query(page)
        if query is None:
            return False
        self._dispatch(query)
        return True

    def next_page(self) -> bool:
        return self.change_page(self.state.effective_page + 1)

    def prev_page(self) -> bool:
        return self.change_page(self.state.effective_page - 1)

    def _dispatch(self, query: ListQuery) -> FetchTicket:
        ticket = self.state.begin(query.page, query.search, query.filters)
        logger.debug(
            "Запрос #%s: page=%s search=%r filters=%s",
            ticket.request_id,
            ticket.page,
            ticket.search,
            ticket.filters,
        )
        self.loading_changed.emit(True)
        task = partial(
            self.fetch_page,
            ticket.page,
            self.state.page_size,
            ticket.search or None,
            **ticket.filters,
        )
        self.executor.submit(
            task, partial(self._on_loaded, ticket), partial(self._on_failed, ticket)
        )
        return ticket

    def _on_loaded(self, ticket: FetchTicket, result: PageResult):
        if not self.state.apply(ticket, result):
            return
        logger.debug(
            "Загружено %d из %d (страница %s)", len(result.items), self.state.total, self.state.page
        )
        clamp = self.state.clamp_query()
        if clamp is not None and clamp.page != ticket.page:
            logger.debug("Страница %s вне диапазона, перехожу на %s", self.state.page, clamp.page)
            self._dispatch(clamp)
            return
        self.loading_changed.emit(False)
        self.error_changed.emit("")
        self.data_changed.emit()

    def _on_failed(self, ticket: FetchTicket, exc: BaseException):
        message = error_text(exc, "error.load")
        if not self.state.fail(ticket, message):
            logger.debug("Ошибка устаревшего запроса #%s проигнорирована", ticket.request_id)
            return
        logger.error("Ошибка при загрузке данных", exc_info=exc)
        self.loading_changed.emit(False)
        self.error_changed.emit(message)
        self.data_changed.emit()

    # --- Поиск и фильтры --------------------------------------------------
    def on_search_changed(self, text: str):
        self.state.set_search(text)
        self._debounce.start()

    def on_filter_changed(self, name: str, value: Any):
        self.state.set_filter(name, value)
        self._debounce.start()

    def set_filters(self, filters: Mapping[str, Any]):
        self.state.set_filters(filters)
        self._debounce.start()

    def clear_filters(self):
        """Сбросить фильтры к значениям по умолчанию и сразу загрузить."""
        self.state.clear_filters()
        self.flush_pending(force=True)

    def flush_pending(self, *, force: bool = False):
        """Выполнить отложенную загрузку немедленно."""
        if self._debounce.isActive() or force:
            self._debounce.stop()
            self._on_debounce()

    def _on_debounce(self):
        if self.state.needs_auto_fetch():
            self._dispatch(self.state.draft_query())
