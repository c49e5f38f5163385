"""Вкладка отчётов: выручка за период и консультации по статусам и неделям."""

import logging

from PySide6.QtWidgets import QComboBox, QHBoxLayout, QLabel, QVBoxLayout, QWidget

from core.app_context import AppContext, get_app_context
from services.report_service import REVENUE_PERIODS
from ui.common.charts import bar_chart, counts_to_series, make_chart_view
from ui.common.date_utils import get_date_or_none, make_optional_date_edit
from ui.common.message_boxes import error_text
from ui.common.styled_widgets import header_label, set_status, status_label, styled_button
from ui.common.workers import Executor, default_executor
from ui.i18n import tr, tr_enum
from utils.money import format_money

logger = logging.getLogger(__name__)


class ReportsTab(QWidget):
    def __init__(
        self,
        parent=None,
        *,
        context: AppContext | None = None,
        executor: Executor | None = None,
        auto_load: bool = True,
    ):
        super().__init__(parent)
        self.context = context or get_app_context()
        self.executor = executor or default_executor()
        self._request_id = 0

        layout = QVBoxLayout(self)
        layout.addWidget(header_label(tr("reports.title")))

        controls = QHBoxLayout()
        controls.addWidget(QLabel(tr("field.period") + ":"))
        self.period_combo = QComboBox()
        for period in REVENUE_PERIODS:
            self.period_combo.addItem(tr(f"reports.period_{period}"), period)
        controls.addWidget(self.period_combo)
        controls.addWidget(QLabel(tr("field.start") + ":"))
        self.start_edit = make_optional_date_edit()
        controls.addWidget(self.start_edit)
        controls.addWidget(QLabel(tr("field.end") + ":"))
        self.end_edit = make_optional_date_edit()
        controls.addWidget(self.end_edit)
        self.apply_btn = styled_button(tr("reports.apply"), icon="📊", role="primary")
        self.apply_btn.clicked.connect(self.load_reports)
        controls.addWidget(self.apply_btn)
        controls.addStretch()
        layout.addLayout(controls)

        self.error_label = status_label("error")
        layout.addWidget(self.error_label)
        self.total_label = QLabel()
        layout.addWidget(self.total_label)

        self.revenue_chart = make_chart_view()
        layout.addWidget(self.revenue_chart, 1)
        bottom = QHBoxLayout()
        self.status_chart = make_chart_view()
        self.week_chart = make_chart_view()
        bottom.addWidget(self.status_chart)
        bottom.addWidget(self.week_chart)
        layout.addLayout(bottom, 1)

        if auto_load:
            self.load_reports()

    def current_query(self) -> dict:
        return {
            "period": self.period_combo.currentData(),
            "start": get_date_or_none(self.start_edit),
            "end": get_date_or_none(self.end_edit),
        }

    def load_reports(self):
        query = self.current_query()
        self._request_id += 1
        request_id = self._request_id
        self.apply_btn.setEnabled(False)
        set_status(self.error_label, None)
        service = self.context.report_service

        def fetch():
            revenue = service.revenue(query["period"], query["start"], query["end"])
            appointments = service.appointments(query["start"], query["end"])
            return revenue, appointments

        self.executor.submit(
            fetch,
            lambda result: self._on_loaded(request_id, result),
            lambda exc: self._on_failed(request_id, exc),
        )

    def _on_loaded(self, request_id: int, result):
        if request_id != self._request_id:
            return
        self.apply_btn.setEnabled(True)
        revenue, appointments = result
        self.total_label.setText(f"{tr('reports.revenue')}: <b>{format_money(revenue.total)}</b>")
        self.revenue_chart.setChart(bar_chart(revenue.series, tr("reports.revenue")))
        self.status_chart.setChart(
            bar_chart(
                counts_to_series(appointments.by_status, tr_enum),
                tr("nav.appointments"),
                tr("reports.by_status"),
            )
        )
        self.week_chart.setChart(
            bar_chart(appointments.by_week, tr("nav.appointments"), tr("reports.by_week"))
        )

    def _on_failed(self, request_id: int, exc: BaseException):
        if request_id != self._request_id:
            return
        self.apply_btn.setEnabled(True)
        logger.error("Ошибка загрузки отчётов", exc_info=exc)
        set_status(self.error_label, error_text(exc, "reports.load_failed"))
