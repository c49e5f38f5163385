import logging

from services.campaign_service import CAMPAIGN_STATUSES
from ui.base.base_table_model import Column
from ui.base.base_table_view import BaseTableView, FilterSpec
from ui.common.message_boxes import confirm, error_text, show_error, show_info
from ui.common.styled_widgets import styled_button
from ui.forms.campaign_form import CampaignForm
from ui.i18n import tr, tr_enum

logger = logging.getLogger(__name__)


class CampaignTableView(BaseTableView):
    TITLE_KEY = "nav.campaigns"
    SERVICE = "campaign_service"
    FORM_CLASS = CampaignForm
    COLUMNS = (
        Column("name", "field.name"),
        Column("channel", "field.channel"),
        Column("status", "field.status", formatter=tr_enum),
        Column("scheduled_at", "field.scheduled_at"),
        Column("message", "field.message"),
    )
    FILTERS = (FilterSpec("status", "field.status", choices=CAMPAIGN_STATUSES),)

    def build_extra_actions(self, toolbar):
        self.send_btn = styled_button(tr("campaigns.send"), icon="📨")
        self.send_btn.clicked.connect(self.send_selected)
        toolbar.addWidget(self.send_btn)

    def send_selected(self):
        campaign = self._require_selection()
        if campaign is None:
            return
        if not confirm(tr("campaigns.send_confirm", name=campaign.name), parent=self):
            return
        self.send_btn.setEnabled(False)
        self.executor.submit(
            lambda: self.service.send(campaign.id),
            self._on_sent,
            self._on_send_failed,
        )

    def _on_sent(self, _result):
        self.send_btn.setEnabled(True)
        show_info(tr("campaigns.sent"), parent=self)
        self.refresh()

    def _on_send_failed(self, exc: BaseException):
        self.send_btn.setEnabled(True)
        logger.error("Ошибка при отправке кампании", exc_info=exc)
        show_error(error_text(exc, "error.save"), parent=self)
