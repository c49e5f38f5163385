"""Прикладной сервис CRUD для одной коллекции REST API."""

from __future__ import annotations

import logging
from typing import Any, Generic, Mapping, TypeVar

from core.list_state import PageResult, build_params
from infrastructure.api_client import ApiClient, ApiError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResourceService(Generic[T]):
    """Фасад между UI и коллекцией ``/<endpoint>``.

    Постраничный ответ API имеет вид ``{data, total, page?, limit?}``.
    404 на запрос коллекции означает пустую страницу.
    """

    def __init__(
        self,
        client: ApiClient,
        endpoint: str,
        dto_class: type[T],
        *,
        detail_class: type | None = None,
    ):
        self.client = client
        self.endpoint = endpoint.strip("/")
        self.dto_class = dto_class
        self.detail_class = detail_class or dto_class

    def _item_path(self, entity_id: Any) -> str:
        return f"/{self.endpoint}/{entity_id}"

    def _to_dto(self, data: Mapping[str, Any]) -> T:
        return self.dto_class.from_api(data)  # type: ignore[attr-defined]

    def parse_page(self, body: Any, page: int, limit: int) -> PageResult[T]:
        if isinstance(body, list):
            items = [self._to_dto(item) for item in body]
            return PageResult(items, len(items), page, limit)
        body = body or {}
        items = [self._to_dto(item) for item in body.get("data") or []]
        total = body.get("total")
        return PageResult(
            items,
            int(total) if total is not None else len(items),
            body.get("page"),
            body.get("limit", limit),
        )

    def get_page(
        self, page: int, limit: int, search: str | None = None, **filters: Any
    ) -> PageResult[T]:
        params = {"page": page, "limit": limit, **build_params(search, filters)}
        try:
            body = self.client.get(f"/{self.endpoint}", params=params)
        except ApiError as exc:
            if exc.is_not_found:
                logger.info("ℹ️ /%s вернул 404, показываю пустой список", self.endpoint)
                return PageResult([], 0, page, limit)
            raise
        return self.parse_page(body, page, limit)

    def get(self, entity_id: Any):
        """Карточка объекта; для детальной формы может быть расширенный DTO."""
        return self.detail_class.from_api(self.client.get(self._item_path(entity_id)))

    def create(self, payload: Mapping[str, Any]) -> T | None:
        logger.info("➕ POST /%s", self.endpoint)
        body = self.client.post(f"/{self.endpoint}", json=dict(payload))
        return self._to_dto(body) if isinstance(body, dict) and "id" in body else None

    def update(self, entity_id: Any, payload: Mapping[str, Any]) -> T | None:
        logger.info("✏️ PATCH /%s/%s", self.endpoint, entity_id)
        body = self.client.patch(self._item_path(entity_id), json=dict(payload))
        return self._to_dto(body) if isinstance(body, dict) and "id" in body else None

    def delete(self, entity_id: Any) -> None:
        logger.info("🗑️ DELETE /%s/%s", self.endpoint, entity_id)
        self.client.delete(self._item_path(entity_id))
