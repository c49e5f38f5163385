"""Платежи: ручные записи и транзакции PayPal."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from core.list_state import PageResult, build_params
from infrastructure.api_client import ApiClient, ApiError
from services.dto import PaymentDTO, PaypalTransactionDTO
from services.resource_service import ResourceService
from services.validators import local_to_iso_utc

logger = logging.getLogger(__name__)

PAYMENT_STATUSES = ("PENDING", "CONFIRMED", "FAILED", "REFUNDED")

PAYPAL_PAGE_SIZE = 20
PAYPAL_SYNC_WINDOW = timedelta(days=7)
PAYPAL_SYNC_PAGE_SIZE = 200
PAYPAL_SYNC_MAX_PAGES = 5


class PaymentService(ResourceService[PaymentDTO]):
    def __init__(self, client: ApiClient):
        super().__init__(client, "payments", PaymentDTO)

    def confirm(self, payment_id: str) -> None:
        """Отмечает платёж как подтверждённый."""
        logger.info("✅ Подтверждение платежа %s", payment_id)
        self.client.patch(f"/payments/{payment_id}", json={"status": "CONFIRMED"})


@dataclass
class PaypalSyncResult:
    imported: int = 0
    created: int = 0
    updated: int = 0
    processed_pages: int = 0
    total_pages: int = 0


class PaypalTransactionService:
    """Транзакции PayPal, импортированные сервером.

    Ответ списка имеет вид ``{items, pagination{page, pageSize, totalItems,
    totalPages}}`` и приводится к ``PageResult``, чтобы таблица работала с
    ним так же, как с остальными коллекциями.
    """

    endpoint = "/payments/paypal/transactions"

    def __init__(self, client: ApiClient):
        self.client = client

    def get_page(
        self, page: int, limit: int = PAYPAL_PAGE_SIZE, search: str | None = None, **filters: Any
    ) -> PageResult[PaypalTransactionDTO]:
        params = {"page": page, "pageSize": limit, **build_params(search, filters)}
        try:
            body = self.client.get(self.endpoint, params=params) or {}
        except ApiError as exc:
            if exc.is_not_found:
                return PageResult([], 0, page, limit)
            raise
        pagination = body.get("pagination") or {}
        items = [PaypalTransactionDTO.from_api(item) for item in body.get("items") or []]
        return PageResult(
            items,
            int(pagination.get("totalItems", len(items))),
            pagination.get("page"),
            pagination.get("pageSize", limit),
        )

    def sync(self, now: datetime | None = None) -> PaypalSyncResult:
        """Запускает импорт транзакций за последние 7 дней."""
        end = now or datetime.now(timezone.utc)
        start = end - PAYPAL_SYNC_WINDOW
        payload = {
            "startDate": local_to_iso_utc(start),
            "endDate": local_to_iso_utc(end),
            "pageSize": PAYPAL_SYNC_PAGE_SIZE,
            "maxPages": PAYPAL_SYNC_MAX_PAGES,
        }
        logger.info("🔄 Синхронизация PayPal с %s по %s", payload["startDate"], payload["endDate"])
        body = self.client.post("/payments/paypal/sync", json=payload) or {}
        result = PaypalSyncResult(
            imported=int(body.get("imported") or 0),
            created=int(body.get("created") or 0),
            updated=int(body.get("updated") or 0),
            processed_pages=int(body.get("processedPages") or 0),
            total_pages=int(body.get("totalPages") or 0),
        )
        logger.info(
            "✅ PayPal: новых %s, обновлено %s", result.created, result.updated
        )
        return result

    def link_client(self, transaction_id: str, client_id: str | None) -> None:
        """Привязывает транзакцию к клиенту; ``None`` снимает привязку."""
        self.client.patch(
            f"{self.endpoint}/{transaction_id}", json={"clientId": client_id or None}
        )
