"""Состояние постраничного списка с поиском и фильтрами.

Модуль не зависит от Qt: контроллер таблицы только вызывает операции
``ListState`` и отображает результат. Ответы на запросы применяются лишь
если они принадлежат последнему выданному запросу (``FetchTicket``).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def normalize_filters(filters: Mapping[str, Any] | None) -> dict[str, Any]:
    """Убирает пустые значения и обрезает пробелы у строк."""
    result: dict[str, Any] = {}
    for key, value in (filters or {}).items():
        if _is_empty(value):
            continue
        result[key] = value.strip() if isinstance(value, str) else value
    return result


def build_params(search: str | None, filters: Mapping[str, Any] | None) -> dict[str, Any]:
    """Параметры запроса без ``None`` и пустых строк."""
    params = normalize_filters(filters)
    if not _is_empty(search):
        params["search"] = search.strip()
    return params


@dataclass
class PageResult(Generic[T]):
    items: Sequence[T]
    total: int
    page: int | None = None
    limit: int | None = None


@dataclass(frozen=True)
class ListQuery:
    page: int
    search: str
    filters: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FetchTicket:
    request_id: int
    page: int
    search: str
    filters: dict[str, Any]
    previous_page: int


class ListState(Generic[T]):
    """Зафиксированное и черновое состояние одной таблицы."""

    def __init__(self, page_size: int = 20, default_filters: Mapping[str, Any] | None = None):
        if page_size < 1:
            raise ValueError("page_size должен быть положительным")
        self.page_size = page_size
        self.default_filters: dict[str, Any] = dict(default_filters or {})

        self.rows: list[T] = []
        self.total = 0
        self.page = 1
        self.loading = False
        self.error: str | None = None

        self.committed_search = ""
        self.committed_filters: dict[str, Any] = normalize_filters(self.default_filters)
        self.draft_search = ""
        self.draft_filters: dict[str, Any] = dict(self.default_filters)

        self._sequence = 0
        self._committed_page = 1
        self._dispatched: tuple[str, dict[str, Any]] | None = None

    # --- запросы ------------------------------------------------------------
    def begin(self, page: int, search: str, filters: Mapping[str, Any]) -> FetchTicket:
        self._sequence += 1
        clean_filters = normalize_filters(filters)
        clean_search = (search or "").strip()
        ticket = FetchTicket(
            request_id=self._sequence,
            page=page,
            search=clean_search,
            filters=clean_filters,
            previous_page=self._committed_page,
        )
        self._dispatched = (clean_search, clean_filters)
        self.page = page
        self.loading = True
        self.error = None
        return ticket

    def is_current(self, ticket: FetchTicket) -> bool:
        return ticket.request_id == self._sequence

    def apply(self, ticket: FetchTicket, result: PageResult[T]) -> bool:
        if not self.is_current(ticket):
            logger.debug(
                "Отброшен устаревший ответ #%s (текущий #%s)",
                ticket.request_id,
                self._sequence,
            )
            return False
        self.rows = list(result.items)
        self.total = max(0, int(result.total or 0))
        self.page = result.page or ticket.page
        self._committed_page = self.effective_page
        self.committed_search = ticket.search
        self.committed_filters = dict(ticket.filters)
        self.loading = False
        self.error = None
        return True

    def fail(self, ticket: FetchTicket, message: str) -> bool:
        if not self.is_current(ticket):
            return False
        self.loading = False
        self.error = message
        if ticket.page != ticket.previous_page:
            self.page = ticket.previous_page
        self._dispatched = (self.committed_search, dict(self.committed_filters))
        return True

    # --- черновик -----------------------------------------------------------
    def set_search(self, text: str) -> None:
        self.draft_search = text or ""

    def set_filter(self, name: str, value: Any) -> None:
        self.draft_filters[name] = value

    def set_filters(self, filters: Mapping[str, Any]) -> None:
        self.draft_filters = dict(filters)

    def clear_filters(self) -> None:
        self.draft_filters = dict(self.default_filters)

    # --- производные --------------------------------------------------------
    @property
    def is_search_dirty(self) -> bool:
        return self.draft_search.strip() != self.committed_search

    @property
    def are_filters_dirty(self) -> bool:
        return normalize_filters(self.draft_filters) != self.committed_filters

    @property
    def is_dirty(self) -> bool:
        return self.is_search_dirty or self.are_filters_dirty

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total / self.page_size))

    @property
    def effective_page(self) -> int:
        return max(1, min(self.page, self.total_pages))

    @property
    def showing_from(self) -> int:
        if self.total == 0:
            return 0
        return (self.effective_page - 1) * self.page_size + 1

    @property
    def showing_to(self) -> int:
        if self.total == 0:
            return 0
        return min(self.effective_page * self.page_size, self.total)

    @property
    def can_go_previous(self) -> bool:
        return not self.loading and self.effective_page > 1

    @property
    def can_go_next(self) -> bool:
        return not self.loading and self.effective_page < self.total_pages

    @property
    def needs_clamp(self) -> bool:
        return not self.loading and self.page > self.total_pages

    # --- построение запросов -----------------------------------------------
    def draft_query(self) -> ListQuery:
        return ListQuery(1, self.draft_search.strip(), normalize_filters(self.draft_filters))

    def refresh_query(self) -> ListQuery:
        if self.is_dirty:
            return self.draft_query()
        return ListQuery(self.effective_page, self.committed_search, dict(self.committed_filters))

    def page_query(self, page: int) -> ListQuery | None:
        if self.loading or page < 1 or page > self.total_pages or page == self.page:
            return None
        return ListQuery(page, self.committed_search, dict(self.committed_filters))

    def clamp_query(self) -> ListQuery | None:
        if not self.needs_clamp:
            return None
        return ListQuery(self.total_pages, self.committed_search, dict(self.committed_filters))

    def needs_auto_fetch(self) -> bool:
        query = self.draft_query()
        return self._dispatched != (query.search, query.filters)
