"""Отчёты и сводка для главной вкладки."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from infrastructure.api_client import ApiClient
from services.dto import (
    AppointmentsReport,
    FunnelReport,
    RevenueReport,
    SeriesItem,
)

logger = logging.getLogger(__name__)

REVENUE_PERIODS = ("day", "month")
UNKNOWN_ORIGIN = "Não informado"
DASHBOARD_LEADS_LIMIT = 100


def _date_param(value: date | str | None) -> str | None:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


@dataclass
class DashboardSummary:
    funnel: FunnelReport
    revenue: RevenueReport
    appointments: AppointmentsReport
    leads_by_origin: list[SeriesItem] = field(default_factory=list)

    @property
    def leads_count(self) -> int:
        return self.funnel.counts.get("lead_created", 0)

    @property
    def appointments_count(self) -> int:
        return self.funnel.counts.get("appointment_booked", 0)

    @property
    def payments_count(self) -> int:
        return self.funnel.counts.get("payment_confirmed", 0)

    def top_origins(self, limit: int = 4) -> list[SeriesItem]:
        return self.leads_by_origin[:limit]


def group_by_origin(leads: list[dict[str, Any]]) -> list[SeriesItem]:
    """Группирует лиды по источнику, по убыванию количества."""
    counter = Counter((lead.get("source") or UNKNOWN_ORIGIN) for lead in leads)
    ordered = sorted(counter.items(), key=lambda item: (-item[1], item[0]))
    return [SeriesItem(label=label, total=float(total)) for label, total in ordered]


class ReportService:
    def __init__(self, client: ApiClient):
        self.client = client

    def funnel(self) -> FunnelReport:
        return FunnelReport.from_api(self.client.get("/reports/funnel") or {})

    def revenue(
        self,
        period: str = "day",
        start: date | str | None = None,
        end: date | str | None = None,
    ) -> RevenueReport:
        if period not in REVENUE_PERIODS:
            raise ValueError(f"Неизвестный период: {period}")
        params = {"period": period, "start": _date_param(start), "end": _date_param(end)}
        return RevenueReport.from_api(self.client.get("/reports/revenue", params=params) or {})

    def appointments(
        self, start: date | str | None = None, end: date | str | None = None
    ) -> AppointmentsReport:
        params = {"start": _date_param(start), "end": _date_param(end)}
        return AppointmentsReport.from_api(
            self.client.get("/reports/appointments", params=params) or {}
        )

    def dashboard(self) -> DashboardSummary:
        """Данные главной вкладки: воронка, выручка по месяцам, лиды по источникам."""
        leads = self.client.get("/leads", params={"limit": DASHBOARD_LEADS_LIMIT}) or {}
        items = leads.get("data") if isinstance(leads, dict) else leads
        return DashboardSummary(
            funnel=self.funnel(),
            revenue=self.revenue("month"),
            appointments=self.appointments(),
            leads_by_origin=group_by_origin(list(items or [])),
        )
