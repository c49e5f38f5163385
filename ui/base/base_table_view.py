from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Sequence

from PySide6.QtCore import QByteArray, Qt, QTimer, Signal
from PySide6.QtWidgets import (
    QAbstractItemView,
    QCheckBox,
    QComboBox,
    QDateEdit,
    QDialog,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QTableView,
    QVBoxLayout,
    QWidget,
)

from core.app_context import RESOURCES, AppContext, get_app_context
from services.validators import local_to_iso_utc
from ui import settings as ui_settings
from ui.base.base_table_model import BaseTableModel, Column
from ui.base.table_controller import TableController
from ui.common.combo_helpers import create_enum_combo, set_selected_by_id
from ui.common.confirm_dialog import ConfirmDeleteDialog
from ui.common.date_utils import clear_optional_date, get_date_or_none, make_optional_date_edit
from ui.common.message_boxes import show_error
from ui.common.paginator import Paginator
from ui.common.refresh_button import RefreshButton
from ui.common.search_box import SearchBox
from ui.common.styled_widgets import header_label, set_status, status_label, styled_button
from ui.common.workers import Executor, default_executor
from ui.i18n import tr

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterSpec:
    """Фильтр панели инструментов.

    Виды ``kind``:

    * ``choice``: список с «Todos»; ``choices`` содержит коды перечисления
      или пары ``(ключ перевода, значение)``;
    * ``check``: флажок, отмеченный даёт ``True``;
    * ``text``: строка;
    * ``date``: необязательная дата, уходит в API как ISO-8601 UTC
      (начало дня, либо конец дня при ``end_of_day``).
    """

    name: str
    label_key: str
    kind: str = "choice"
    choices: tuple = ()
    default: Any = None
    end_of_day: bool = False


def date_filter_value(value: date | None, *, end_of_day: bool = False) -> str | None:
    if value is None:
        return None
    moment = datetime.combine(value, time.max if end_of_day else time.min)
    return local_to_iso_utc(moment)


class BaseTableView(QWidget):
    """Страница-список: поиск, фильтры, таблица, пагинация и CRUD-кнопки."""

    row_double_clicked = Signal(object)
    data_loaded = Signal(int)

    TITLE_KEY: str = ""
    SERVICE: str = ""
    COLUMNS: Sequence[Column] = ()
    FILTERS: Sequence[FilterSpec] = ()
    PAGE_SIZE = 20
    DEBOUNCE_MS: int | None = None
    FORM_CLASS = None
    SEARCHABLE = True
    CAN_ADD = True
    CAN_EDIT = True
    CAN_DELETE = True

    def __init__(
        self,
        parent=None,
        *,
        context: AppContext | None = None,
        service=None,
        executor: Executor | None = None,
        auto_load: bool = True,
    ):
        super().__init__(parent)
        self.context = context or get_app_context()
        self.service = service if service is not None else self._resolve_service()
        self.executor = executor or default_executor()
        self.settings_id = type(self).__name__
        self.filter_widgets: dict[str, QWidget] = {}

        debounce = self.DEBOUNCE_MS
        if debounce is None:
            debounce = self.context.settings.search_debounce_ms
        self.controller = TableController(
            self.fetch_page,
            page_size=self.PAGE_SIZE,
            default_filters={f.name: f.default for f in self.FILTERS if f.default is not None},
            debounce_ms=debounce,
            executor=self.executor,
            parent=self,
        )

        self.layout = QVBoxLayout(self)
        if self.TITLE_KEY:
            self.layout.addWidget(header_label(tr(self.TITLE_KEY)))

        self._build_toolbar()
        self._build_table()

        self.error_label = status_label("error")
        self.layout.addWidget(self.error_label)
        self.empty_label = QLabel(tr("common.empty"))
        self.empty_label.setAlignment(Qt.AlignCenter)
        self.empty_label.setVisible(False)
        self.layout.addWidget(self.empty_label)

        self.paginator = Paginator(
            self.controller.next_page, self.controller.prev_page, per_page=self.PAGE_SIZE
        )
        self.layout.addWidget(self.paginator)

        self.controller.data_changed.connect(self._on_data_changed)
        self.controller.loading_changed.connect(self._on_loading_changed)
        self.controller.error_changed.connect(self._on_error_changed)

        self._save_settings_timer = QTimer(self)
        self._save_settings_timer.setSingleShot(True)
        self._save_settings_timer.setInterval(250)
        self._save_settings_timer.timeout.connect(self.save_table_settings)
        self.table.horizontalHeader().sectionResized.connect(
            lambda *_: self._save_settings_timer.start()
        )
        self.load_table_settings()
        self._on_data_changed()

        if auto_load:
            self.load_data()

    # --- Построение интерфейса -------------------------------------------
    def _resolve_service(self):
        if not self.SERVICE:
            return None
        if self.SERVICE in RESOURCES:
            return self.context.resource(self.SERVICE)
        return getattr(self.context, self.SERVICE)

    def _build_toolbar(self):
        self.toolbar = QHBoxLayout()
        self.layout.addLayout(self.toolbar)

        self.search_box = None
        if self.SEARCHABLE:
            self.search_box = SearchBox(self.controller.on_search_changed)
            self.toolbar.addWidget(self.search_box, 2)

        for spec in self.FILTERS:
            widget = self._create_filter_widget(spec)
            self.filter_widgets[spec.name] = widget
            if spec.kind != "check":
                self.toolbar.addWidget(QLabel(tr(spec.label_key) + ":"))
            self.toolbar.addWidget(widget)

        if self.FILTERS:
            self.clear_filters_btn = styled_button(tr("common.clear_filters"), icon="🧹")
            self.clear_filters_btn.clicked.connect(self.clear_filters)
            self.toolbar.addWidget(self.clear_filters_btn)

        self.refresh_btn = RefreshButton(self.refresh)
        self.toolbar.addWidget(self.refresh_btn)
        self.toolbar.addStretch()

        self.add_btn = self.edit_btn = self.delete_btn = None
        if self.FORM_CLASS is not None and self.CAN_ADD:
            self.add_btn = styled_button(
                tr("common.add"), icon="➕", role="primary", shortcut="Ctrl+N"
            )
            self.add_btn.clicked.connect(self.add_new)
            self.toolbar.addWidget(self.add_btn)
        if self.FORM_CLASS is not None and self.CAN_EDIT:
            self.edit_btn = styled_button(tr("common.edit"), icon="✏️", shortcut="F2")
            self.edit_btn.clicked.connect(self.edit_selected)
            self.toolbar.addWidget(self.edit_btn)
        if self.CAN_DELETE and self.service is not None:
            self.delete_btn = styled_button(
                tr("common.delete"), icon="🗑️", role="danger", shortcut="Del"
            )
            self.delete_btn.clicked.connect(self.delete_selected)
            self.toolbar.addWidget(self.delete_btn)

        self.build_extra_actions(self.toolbar)

    def build_extra_actions(self, toolbar: QHBoxLayout) -> None:
        """Дополнительные кнопки страницы."""

    def _create_filter_widget(self, spec: FilterSpec) -> QWidget:
        if spec.kind == "check":
            widget = QCheckBox(tr(spec.label_key))
            widget.setChecked(bool(spec.default))
            widget.toggled.connect(
                lambda checked, name=spec.name: self.controller.on_filter_changed(
                    name, True if checked else None
                )
            )
            return widget
        if spec.kind == "date":
            widget = make_optional_date_edit()
            widget.dateChanged.connect(
                lambda _date, name=spec.name, w=widget, end=spec.end_of_day: (
                    self.controller.on_filter_changed(
                        name, date_filter_value(get_date_or_none(w), end_of_day=end)
                    )
                )
            )
            return widget
        if spec.kind == "text":
            widget = QLineEdit()
            widget.setPlaceholderText(tr(spec.label_key))
            widget.setClearButtonEnabled(True)
            if spec.default:
                widget.setText(str(spec.default))
            widget.textChanged.connect(
                lambda text, name=spec.name: self.controller.on_filter_changed(name, text)
            )
            return widget

        enum_values = [c for c in spec.choices if not isinstance(c, tuple)]
        combo = create_enum_combo(enum_values, with_all=True)
        for label_key, value in (c for c in spec.choices if isinstance(c, tuple)):
            combo.addItem(tr(label_key), value)
        set_selected_by_id(combo, spec.default)
        combo.currentIndexChanged.connect(
            lambda _index, name=spec.name, c=combo: self.controller.on_filter_changed(
                name, c.currentData()
            )
        )
        return combo

    def _build_table(self):
        self.model = BaseTableModel(list(self.COLUMNS))
        self.table = QTableView()
        self.table.setModel(self.model)
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SingleSelection)
        self.table.setAlternatingRowColors(True)
        self.table.verticalHeader().setVisible(False)
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.Interactive)
        header.setStretchLastSection(True)
        self.table.doubleClicked.connect(self._on_double_click)
        self.layout.addWidget(self.table, 1)

    # --- Загрузка ----------------------------------------------------------
    def fetch_page(self, page: int, limit: int, search: str | None = None, **filters):
        """Вызывается в рабочем потоке контроллером таблицы."""
        return self.service.get_page(page, limit, search, **filters)

    def load_data(self):
        self.controller.load_data()

    def refresh(self):
        self.controller.refresh()

    def clear_filters(self):
        for spec in self.FILTERS:
            widget = self.filter_widgets[spec.name]
            widget.blockSignals(True)
            if isinstance(widget, QCheckBox):
                widget.setChecked(bool(spec.default))
            elif isinstance(widget, QLineEdit):
                widget.setText("" if spec.default is None else str(spec.default))
            elif isinstance(widget, QComboBox):
                set_selected_by_id(widget, spec.default)
            elif isinstance(widget, QDateEdit):
                clear_optional_date(widget)
            widget.blockSignals(False)
        self.controller.clear_filters()

    def _on_data_changed(self):
        state = self.controller.state
        self.model.set_objects(state.rows)
        self.paginator.update(
            state.total,
            state.effective_page,
            state.page_size,
            showing_from=state.showing_from,
            showing_to=state.showing_to,
            busy=state.loading,
        )
        self.empty_label.setVisible(not state.loading and not state.error and not state.rows)
        self.data_loaded.emit(state.total)

    def _on_loading_changed(self, loading: bool):
        self.refresh_btn.setEnabled(not loading)
        self.refresh_btn.setText(
            f"🔄 {tr('common.loading') if loading else tr('common.refresh')}"
        )
        state = self.controller.state
        self.paginator.prev_btn.setEnabled(state.can_go_previous)
        self.paginator.next_btn.setEnabled(state.can_go_next)
        if loading:
            self.empty_label.setVisible(False)

    def _on_error_changed(self, message: str):
        set_status(self.error_label, message)

    # --- Выбор -------------------------------------------------------------
    def selected_object(self):
        index = self.table.currentIndex()
        if not index.isValid():
            return None
        return self.model.get_item(index.row())

    def _on_double_click(self, index):
        if not index.isValid():
            return
        obj = self.model.get_item(index.row())
        self.row_double_clicked.emit(obj)
        if self.FORM_CLASS is not None and self.CAN_EDIT:
            self.open_form(obj)

    def _require_selection(self):
        obj = self.selected_object()
        if obj is None:
            show_error(tr("common.select_row"), parent=self)
        return obj

    # --- CRUD --------------------------------------------------------------
    def create_form(self, instance=None):
        return self.FORM_CLASS(self.service, instance, executor=self.executor, parent=self)

    def open_form(self, instance=None) -> bool:
        form = self.create_form(instance)
        if form.exec() == QDialog.Accepted:
            self.refresh()
            return True
        return False

    def add_new(self):
        self.open_form(None)

    def edit_selected(self):
        obj = self._require_selection()
        if obj is not None:
            self.open_form(obj)

    def object_label(self, obj) -> str:
        for attr in ("name", "full_name", "title", "display_name", "id"):
            value = getattr(obj, attr, None)
            if value:
                return str(value)
        return ""

    def check_can_delete(self, obj) -> str | None:
        """Сообщение, если удаление запрещено локально."""
        return None

    def create_delete_dialog(self, obj) -> ConfirmDeleteDialog:
        return ConfirmDeleteDialog(
            obj,
            self.object_label(obj),
            lambda target: self.service.delete(target.id),
            executor=self.executor,
            parent=self,
        )

    def delete_selected(self):
        obj = self._require_selection()
        if obj is None:
            return
        blocked = self.check_can_delete(obj)
        if blocked:
            show_error(blocked, parent=self)
            return
        if self.create_delete_dialog(obj).exec() == QDialog.Accepted:
            self.refresh()

    # --- Настройки таблицы -------------------------------------------------
    def save_table_settings(self):
        header_state = bytes(self.table.horizontalHeader().saveState())
        settings = ui_settings.get_table_settings(self.settings_id)
        settings["header_state"] = base64.b64encode(header_state).decode("ascii")
        ui_settings.set_table_settings(self.settings_id, settings)

    def load_table_settings(self):
        encoded = ui_settings.get_table_settings(self.settings_id).get("header_state")
        if not encoded:
            return
        try:
            decoded = base64.b64decode(encoded)
        except (binascii.Error, ValueError):
            logger.debug("Некорректное состояние заголовка %s", self.settings_id)
            return
        self.table.horizontalHeader().restoreState(QByteArray(decoded))
