from PySide6.QtWidgets import (
    QWidget,
    QHBoxLayout,
    QPushButton,
    QLabel,
)
import math

from ui.i18n import tr


class Paginator(QWidget):
    """Кнопки «назад/вперёд», номер страницы и сводка «Exibindo X-Y de N»."""

    def __init__(self, on_next=None, on_prev=None, parent=None, *, per_page: int = 20):
        super().__init__(parent)
        self.on_next = on_next
        self.on_prev = on_prev
        self.current_page = 1
        self.per_page = per_page

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(10)

        self.summary_label = QLabel("")
        layout.addWidget(self.summary_label)

        layout.addStretch()

        self.prev_btn = QPushButton(f"⬅️ {tr('common.previous')}")
        self.prev_btn.clicked.connect(self.prev_clicked)
        layout.addWidget(self.prev_btn)

        self.page_label = QLabel(tr("common.page", page=1, pages=1))
        layout.addWidget(self.page_label)

        self.next_btn = QPushButton(f"{tr('common.next')} ➡️")
        self.next_btn.clicked.connect(self.next_clicked)
        layout.addWidget(self.next_btn)

    def update(
        self,
        total_count: int,
        page: int,
        per_page: int | None = None,
        *,
        showing_from: int | None = None,
        showing_to: int | None = None,
        busy: bool = False,
    ):
        """Обновить состояние пагинатора с учётом общего числа записей."""
        if per_page is not None:
            self.per_page = per_page
        total_pages = max(1, math.ceil(total_count / self.per_page))
        page = max(1, min(page, total_pages))
        self.current_page = page
        if showing_from is None:
            showing_from = 0 if total_count == 0 else (page - 1) * self.per_page + 1
        if showing_to is None:
            showing_to = 0 if total_count == 0 else min(page * self.per_page, total_count)
        self.page_label.setText(tr("common.page", page=page, pages=total_pages))
        self.summary_label.setText(
            tr("common.showing", start=showing_from, end=showing_to, total=total_count)
        )
        self.prev_btn.setEnabled(not busy and page > 1)
        self.next_btn.setEnabled(not busy and page < total_pages)

    def next_clicked(self):
        if self.on_next:
            self.on_next()

    def prev_clicked(self):
        if self.on_prev:
            self.on_prev()

    def summary_text(self) -> str:
        return self.summary_label.text()
