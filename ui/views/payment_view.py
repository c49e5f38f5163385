"""Вкладка платежей: ручные записи и транзакции PayPal."""

from __future__ import annotations

import logging

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QDialog, QHBoxLayout, QLabel, QTabWidget, QVBoxLayout, QWidget

from services.payment_service import PAYMENT_STATUSES, PAYPAL_PAGE_SIZE
from ui.base.base_table_model import Column
from ui.base.base_table_view import BaseTableView, FilterSpec
from ui.common.client_picker import ClientPicker
from ui.common.message_boxes import error_text, show_error, show_info
from ui.common.styled_widgets import header_label, set_status, status_label, styled_button
from ui.common.workers import Executor, default_executor
from ui.forms.payment_form import PaymentForm
from ui.i18n import tr, tr_enum
from utils.money import format_money

logger = logging.getLogger(__name__)

PAYPAL_CLIENT_SEARCH_LIMIT = 50


class PaymentTableView(BaseTableView):
    SERVICE = "payment_service"
    FORM_CLASS = PaymentForm
    COLUMNS = (
        Column("client_name", "field.client"),
        Column("procedure", "field.procedure"),
        Column("value", "field.value", formatter=format_money),
        Column("method", "field.method"),
        Column("status", "field.status", formatter=tr_enum),
        Column("pix_txid", "field.pix_txid"),
        Column("created_at", "field.created_at"),
    )
    FILTERS = (FilterSpec("status", "field.status", choices=PAYMENT_STATUSES),)

    def object_label(self, obj) -> str:
        return f"{obj.procedure or obj.id} ({format_money(obj.value)})"

    def create_form(self, instance=None):
        return PaymentForm(
            self.service,
            instance,
            appointment_service=self.context.resource("appointment_service"),
            executor=self.executor,
            parent=self,
        )

    def build_extra_actions(self, toolbar):
        self.confirm_btn = styled_button(tr("payments.confirm"), icon="✅")
        self.confirm_btn.clicked.connect(self.confirm_selected)
        toolbar.addWidget(self.confirm_btn)

    def confirm_selected(self):
        payment = self._require_selection()
        if payment is None or payment.status == "CONFIRMED":
            return
        self.confirm_btn.setEnabled(False)
        self.executor.submit(
            lambda: self.service.confirm(payment.id),
            self._on_confirmed,
            self._on_confirm_failed,
        )

    def _on_confirmed(self, _result):
        self.confirm_btn.setEnabled(True)
        self.refresh()

    def _on_confirm_failed(self, exc: BaseException):
        self.confirm_btn.setEnabled(True)
        logger.error("Ошибка при подтверждении платежа", exc_info=exc)
        show_error(error_text(exc, "error.save"), parent=self)


class PaypalLinkDialog(QDialog):
    """Привязка транзакции PayPal к клиенту (или снятие привязки)."""

    def __init__(
        self,
        paypal_service,
        client_service,
        transaction,
        *,
        executor: Executor | None = None,
        parent=None,
    ):
        super().__init__(parent)
        self.paypal_service = paypal_service
        self.transaction = transaction
        self.executor = executor or default_executor()
        self._busy = False
        self.setWindowTitle(tr("paypal.link"))
        self.setMinimumWidth(420)

        layout = QVBoxLayout(self)
        payer = transaction.payer_name or transaction.payer_email or "-"
        layout.addWidget(QLabel(f"{transaction.transaction_id} · {payer}"))
        self.picker = ClientPicker(
            client_service,
            limit=PAYPAL_CLIENT_SEARCH_LIMIT,
            allow_empty=True,
            executor=self.executor,
        )
        if transaction.client_id:
            self.picker.set_client(transaction.client_id)
        layout.addWidget(self.picker)
        self.error_label = status_label("error")
        layout.addWidget(self.error_label)

        btns = QHBoxLayout()
        btns.addStretch()
        self.save_btn = styled_button(tr("common.save"), icon="💾", role="primary")
        self.save_btn.clicked.connect(self.save)
        self.cancel_btn = styled_button(tr("common.cancel"))
        self.cancel_btn.clicked.connect(self.reject)
        btns.addWidget(self.save_btn)
        btns.addWidget(self.cancel_btn)
        layout.addLayout(btns)
        self.picker.search_now()

    def save(self):
        if self._busy:
            return
        self._busy = True
        self.save_btn.setEnabled(False)
        self.cancel_btn.setEnabled(False)
        client_id = self.picker.selected_id()
        self.executor.submit(
            lambda: self.paypal_service.link_client(self.transaction.id, client_id),
            self._on_saved,
            self._on_failed,
        )

    def _on_saved(self, _result):
        self._busy = False
        show_info(tr("paypal.link_done"), parent=self)
        self.accept()

    def _on_failed(self, exc: BaseException):
        self._busy = False
        self.save_btn.setEnabled(True)
        self.cancel_btn.setEnabled(True)
        logger.error("Ошибка при привязке транзакции PayPal", exc_info=exc)
        set_status(self.error_label, error_text(exc, "paypal.link_failed"))

    def reject(self):
        if self._busy:
            return
        super().reject()


class PaypalTableView(BaseTableView):
    SERVICE = "paypal_service"
    PAGE_SIZE = PAYPAL_PAGE_SIZE
    SEARCHABLE = False
    CAN_DELETE = False
    COLUMNS = (
        Column("transaction_date", "field.date"),
        Column("transaction_id", "field.transaction"),
        Column("payer_name", "field.payer", getter=lambda t: t.payer_name or t.payer_email),
        Column("gross_amount", "field.gross", getter=lambda t: format_money(t.gross_amount, t.currency)),
        Column("fee_amount", "field.fee", getter=lambda t: format_money(t.fee_amount, t.currency)),
        Column("net_amount", "field.net", getter=lambda t: format_money(t.net_amount, t.currency)),
        Column("status", "field.status"),
        Column("client_id", "field.client", getter=lambda t: t.client_id or tr("paypal.no_client")),
    )

    def build_extra_actions(self, toolbar):
        self.sync_btn = styled_button(tr("paypal.sync"), icon="🔄", role="primary")
        self.sync_btn.clicked.connect(self.sync)
        toolbar.addWidget(self.sync_btn)
        self.link_btn = styled_button(tr("paypal.link"), icon="🔗")
        self.link_btn.clicked.connect(self.link_selected)
        toolbar.addWidget(self.link_btn)
        self.message_label = status_label("success")
        self.layout.addWidget(self.message_label)

    def sync(self):
        self.sync_btn.setEnabled(False)
        set_status(self.message_label, None)
        self.executor.submit(self.service.sync, self._on_synced, self._on_sync_failed)

    def _on_synced(self, result):
        self.sync_btn.setEnabled(True)
        set_status(
            self.message_label,
            tr("paypal.sync_done", created=result.created, updated=result.updated),
            "success",
        )
        self.refresh()

    def _on_sync_failed(self, exc: BaseException):
        self.sync_btn.setEnabled(True)
        logger.error("Ошибка синхронизации PayPal", exc_info=exc)
        set_status(self.message_label, error_text(exc, "paypal.sync_failed"), "error")

    def link_selected(self):
        transaction = self._require_selection()
        if transaction is None:
            return
        dialog = PaypalLinkDialog(
            self.service,
            self.context.resource("client_service"),
            transaction,
            executor=self.executor,
            parent=self,
        )
        if dialog.exec() == QDialog.Accepted:
            self.refresh()


class PaymentsTab(QWidget):
    data_loaded = Signal(int)

    def __init__(self, parent=None, *, context=None, executor=None, auto_load=True):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.addWidget(header_label(tr("nav.payments")))
        self.tabs = QTabWidget()
        self.payments_view = PaymentTableView(
            context=context, executor=executor, auto_load=auto_load
        )
        self.paypal_view = PaypalTableView(
            context=context, executor=executor, auto_load=auto_load
        )
        self.tabs.addTab(self.payments_view, tr("payments.manual_tab"))
        self.tabs.addTab(self.paypal_view, tr("payments.paypal_tab"))
        layout.addWidget(self.tabs)
        self.payments_view.data_loaded.connect(self.data_loaded)
        self.paypal_view.data_loaded.connect(self.data_loaded)

    def load_data(self):
        self.payments_view.load_data()
        self.paypal_view.load_data()

    def refresh(self):
        self.tabs.currentWidget().refresh()
