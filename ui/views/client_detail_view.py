"""Карточка клиента: данные, лиды, консультации, платежи и анамнез."""

from __future__ import annotations

import logging

from PySide6.QtWidgets import (
    QDialog,
    QFormLayout,
    QLabel,
    QListWidget,
    QPlainTextEdit,
    QTableView,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from ui.base.base_table_model import BaseTableModel, Column
from ui.common.message_boxes import error_text
from ui.common.styled_widgets import header_label, set_status, status_label
from ui.common.workers import Executor, default_executor
from ui.i18n import tr, tr_enum
from utils.money import format_money
from utils.time_utils import format_datetime

logger = logging.getLogger(__name__)

LEAD_COLUMNS = (
    Column("stage", "field.stage", formatter=tr_enum),
    Column("source", "field.source"),
    Column("notes", "field.notes"),
    Column("created_at", "field.created_at"),
)
APPOINTMENT_COLUMNS = (
    Column("procedure", "field.procedure"),
    Column("status", "field.status", formatter=tr_enum),
    Column("start", "field.start"),
    Column("end", "field.end"),
)
PAYMENT_COLUMNS = (
    Column("value", "field.value", formatter=format_money),
    Column("method", "field.method"),
    Column("status", "field.status", formatter=tr_enum),
    Column("created_at", "field.created_at"),
)


def _table(columns, rows) -> QTableView:
    view = QTableView()
    view.setModel(BaseTableModel(list(columns), rows, parent=view))
    view.horizontalHeader().setStretchLastSection(True)
    view.verticalHeader().setVisible(False)
    return view


class ClientDetailDialog(QDialog):
    """Загружает ``GET /clients/:id`` и показывает карточку только для чтения."""

    def __init__(self, service, client_id, *, executor: Executor | None = None, parent=None):
        super().__init__(parent)
        self.service = service
        self.client_id = client_id
        self.executor = executor or default_executor()
        self.client = None
        self.setWindowTitle(tr("clients.detail_title"))
        self.resize(760, 560)

        self.layout = QVBoxLayout(self)
        self.title_label = header_label(tr("common.loading"))
        self.layout.addWidget(self.title_label)
        self.error_label = status_label("error")
        self.layout.addWidget(self.error_label)
        self.tabs = QTabWidget()
        self.layout.addWidget(self.tabs)

        self.executor.submit(
            lambda: self.service.get(self.client_id), self._on_loaded, self._on_failed
        )

    def _on_loaded(self, client) -> None:
        self.client = client
        self.title_label.setText(client.name)
        self.tabs.clear()

        info = QWidget()
        form = QFormLayout(info)
        for key, value in (
            ("field.email", client.email),
            ("field.phone", client.phone),
            ("field.country", client.country),
            ("field.address", client.address),
            ("field.source", client.source),
            ("field.status", client.status),
            ("field.score", client.score),
            ("field.age", client.age),
            ("field.birth_date", client.birth_date),
            ("field.language", client.language),
            ("field.tags", ", ".join(client.tags)),
            ("field.created_at", format_datetime(client.created_at)),
            ("field.notes", client.notes),
        ):
            label = QLabel("-" if value in (None, "") else str(value))
            label.setWordWrap(True)
            form.addRow(tr(key) + ":", label)
        self.tabs.addTab(info, tr("common.details"))

        self.tabs.addTab(_table(LEAD_COLUMNS, client.leads), tr("nav.leads"))
        self.tabs.addTab(
            _table(APPOINTMENT_COLUMNS, client.appointments), tr("nav.appointments")
        )
        self.tabs.addTab(_table(PAYMENT_COLUMNS, client.payments), tr("nav.payments"))

        anamnesis = QPlainTextEdit()
        anamnesis.setReadOnly(True)
        anamnesis.setPlainText(
            "\n".join(f"{q}: {a}" for q, a in client.anamnesis_responses.items()) or "-"
        )
        self.tabs.addTab(anamnesis, tr("clients.anamnesis"))

        photos = QListWidget()
        for image in client.before_after_photos:
            photos.addItem(f"{format_datetime(image.uploaded_at)}  {image.url}")
        for url in client.intimate_assessment_photos:
            photos.addItem(url)
        self.tabs.addTab(photos, tr("clients.photos"))

    def _on_failed(self, exc: BaseException) -> None:
        logger.error("Ошибка при загрузке клиента %s", self.client_id, exc_info=exc)
        self.title_label.setText(tr("clients.detail_title"))
        set_status(self.error_label, error_text(exc))
