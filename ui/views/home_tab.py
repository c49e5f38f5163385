import logging

from PySide6.QtWidgets import QGridLayout, QHBoxLayout, QVBoxLayout, QWidget

from core.app_context import AppContext, get_app_context
from ui.common.charts import bar_chart, make_chart_view, pie_chart
from ui.common.message_boxes import error_text
from ui.common.refresh_button import RefreshButton
from ui.common.styled_widgets import MetricCard, header_label, set_status, status_label
from ui.common.workers import Executor, default_executor
from ui.i18n import tr
from utils.money import format_money

logger = logging.getLogger(__name__)


def format_percent(rate: float) -> str:
    return f"{rate * 100:.1f}%"


class HomeTab(QWidget):
    """Стартовая страница: ключевые показатели, выручка по месяцам, источники лидов."""

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
        self.summary = None
        self._loading = False

        layout = QVBoxLayout(self)
        top = QHBoxLayout()
        top.addWidget(header_label(tr("dashboard.title")))
        top.addStretch()
        self.refresh_btn = RefreshButton(self.update_stats)
        top.addWidget(self.refresh_btn)
        layout.addLayout(top)

        cards = QGridLayout()
        self.leads_card = MetricCard(tr("dashboard.leads"))
        self.appointments_card = MetricCard(tr("dashboard.appointments"))
        self.payments_card = MetricCard(tr("dashboard.payments"))
        self.conversion_card = MetricCard(tr("dashboard.conversion"))
        for column, card in enumerate(
            (self.leads_card, self.appointments_card, self.payments_card, self.conversion_card)
        ):
            cards.addWidget(card, 0, column)
        layout.addLayout(cards)

        self.error_label = status_label("error")
        layout.addWidget(self.error_label)

        charts = QHBoxLayout()
        self.revenue_chart = make_chart_view()
        self.origins_chart = make_chart_view()
        charts.addWidget(self.revenue_chart, 3)
        charts.addWidget(self.origins_chart, 2)
        layout.addLayout(charts, 1)

        if auto_load:
            self.update_stats()

    def update_stats(self):
        if self._loading:
            return
        self._loading = True
        self.refresh_btn.setEnabled(False)
        set_status(self.error_label, None)
        self.executor.submit(
            self.context.report_service.dashboard, self._on_loaded, self._on_failed
        )

    def _on_loaded(self, summary):
        self._loading = False
        self.refresh_btn.setEnabled(True)
        self.summary = summary
        self.leads_card.set_value(summary.leads_count)
        self.appointments_card.set_value(summary.appointments_count)
        self.payments_card.set_value(summary.payments_count)
        self.conversion_card.set_value(format_percent(summary.funnel.conversion_rate))
        self.revenue_chart.setChart(
            bar_chart(
                summary.revenue.series,
                tr("reports.revenue"),
                f"{tr('dashboard.revenue_monthly')}: {format_money(summary.revenue.total)}",
            )
        )
        self.origins_chart.setChart(pie_chart(summary.top_origins(), tr("dashboard.origins")))

    def _on_failed(self, exc: BaseException):
        self._loading = False
        self.refresh_btn.setEnabled(True)
        logger.error("Ошибка загрузки дашборда", exc_info=exc)
        set_status(self.error_label, error_text(exc, "dashboard.load_failed"))
