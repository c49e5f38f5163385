"""Маркетинговые кампании."""

from __future__ import annotations

import logging

from infrastructure.api_client import ApiClient
from services.dto import CampaignDTO
from services.resource_service import ResourceService

logger = logging.getLogger(__name__)

CAMPAIGN_STATUSES = ("DRAFT", "SCHEDULED", "ACTIVE", "COMPLETED", "CANCELLED")


class CampaignService(ResourceService[CampaignDTO]):
    def __init__(self, client: ApiClient):
        super().__init__(client, "campaigns", CampaignDTO)

    def send(self, campaign_id: str) -> None:
        """Ставит рассылку кампании в очередь на сервере."""
        logger.info("📨 Отправка кампании %s", campaign_id)
        self.client.post(f"/campaigns/{campaign_id}/send")
