"""Универсальная модальная форма создания и редактирования.

Форма открывается в режиме создания (``instance is None``) или
редактирования, проверяет поля до отправки (``build_payload`` поднимает
``ValidationError``) и отправляет ``POST``/``PATCH`` через исполнитель.
Во время отправки закрыть форму нельзя; ошибка сервера остаётся в
форме строкой под полями.
"""

from __future__ import annotations

import base64
import logging
from typing import Any

from PySide6.QtCore import QByteArray
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDateTimeEdit,
    QDialog,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QScrollArea,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from core.dialog_state import FormState
from services.validators import ValidationError
from ui import settings as ui_settings
from ui.common.combo_helpers import combo_value, set_selected_by_id
from ui.common.date_utils import get_datetime_or_none, set_datetime
from ui.common.message_boxes import error_text
from ui.common.styled_widgets import set_status, status_label, styled_button
from ui.common.workers import Executor, default_executor
from ui.i18n import tr, tr_validation

logger = logging.getLogger(__name__)


class TwoColumnFormLayout:
    """Менеджер строк, раскладывающий поля формы по двум колонкам."""

    def __init__(self, container: QWidget, columns: int = 2):
        self.container = container
        self.columns = max(1, columns)
        self.grid = QGridLayout(container)
        self.grid.setContentsMargins(0, 0, 0, 0)
        for column in range(self.columns):
            self.grid.setColumnStretch(column * 2 + 1, 1)
        self.grid.setHorizontalSpacing(24)
        self.rows: list[tuple[QWidget, QWidget]] = []

    def _normalize_label(self, label: QLabel | str | QWidget) -> QWidget:
        if isinstance(label, QWidget):
            return label

        text = str(label)
        if text and not text.endswith(":"):
            text = text + ":"
        return QLabel(text, parent=self.container)

    def addRow(self, label: QLabel | str | QWidget, field: QWidget) -> None:
        label_widget = self._normalize_label(label)
        index = len(self.rows)
        self.rows.append((label_widget, field))
        row, column = divmod(index, self.columns)
        self.grid.addWidget(label_widget, row, column * 2)
        self.grid.addWidget(field, row, column * 2 + 1)


class BaseEditForm(QDialog):
    """Базовая форма сущности REST API."""

    ENTITY_KEY = "common.details"
    COLUMNS = 2

    def __init__(
        self,
        service,
        instance=None,
        *,
        executor: Executor | None = None,
        parent=None,
    ):
        super().__init__(parent)
        self.service = service
        self.instance = instance
        self.executor = executor or default_executor()
        self.fields: dict[str, QWidget] = {}
        self.saved_instance = None
        self.state = FormState()
        if instance is not None:
            self.state.open_edit(instance.id)
        else:
            self.state.open_create()

        action = tr("common.edit") if instance is not None else tr("common.add")
        self.setWindowTitle(f"{action}: {tr(self.ENTITY_KEY)}")
        self.setModal(True)
        self.setMinimumWidth(560)

        # ── layout ──
        self.layout = QVBoxLayout(self)
        self.scroll_area = QScrollArea(self)
        self.scroll_area.setWidgetResizable(True)
        self.layout.addWidget(self.scroll_area)

        self.form_widget = QWidget()
        self.scroll_area.setWidget(self.form_widget)
        self.form_layout = TwoColumnFormLayout(self.form_widget, self.COLUMNS)

        self.error_label = status_label("error")
        self.layout.addWidget(self.error_label)

        self.build_form()
        if self.instance is not None:
            self.fill_from_obj(self.instance)
        self._create_button_panel()
        self._restore_geometry()

    # ------------------------------------------------------------------
    # UI helpers
    # ------------------------------------------------------------------
    @property
    def _settings_key(self) -> str:
        return f"form:{type(self).__name__}"

    def _create_button_panel(self):
        btns = QHBoxLayout()
        self.save_btn = styled_button(
            tr("common.save"), icon="💾", role="primary", shortcut="Ctrl+S"
        )
        self.save_btn.setDefault(True)
        self.cancel_btn = styled_button(tr("common.cancel"), icon="❌")

        self.save_btn.clicked.connect(self.save)
        self.cancel_btn.clicked.connect(self.reject)
        btns.addStretch()
        btns.addWidget(self.save_btn)
        btns.addWidget(self.cancel_btn)
        self.layout.addLayout(btns)

    def add_field(self, name: str, widget: QWidget, label: str | None = None) -> QWidget:
        self.fields[name] = widget
        self.form_layout.addRow(label or tr(f"field.{name}"), widget)
        return widget

    def _set_busy(self, busy: bool) -> None:
        self.save_btn.setEnabled(not busy)
        self.cancel_btn.setEnabled(not busy)
        self.form_widget.setEnabled(not busy)
        self.save_btn.setText(f"💾 {tr('common.saving') if busy else tr('common.save')}")

    def show_error(self, message: str | None) -> None:
        set_status(self.error_label, message)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    def _restore_geometry(self) -> None:
        geometry = ui_settings.get_window_settings(self._settings_key).get("geometry")
        if geometry:
            try:
                self.restoreGeometry(QByteArray(base64.b64decode(geometry)))
            except (ValueError, TypeError):
                logger.debug("Некорректная геометрия формы %s", self._settings_key)

    def _save_geometry(self) -> None:
        encoded = base64.b64encode(bytes(self.saveGeometry())).decode("ascii")
        ui_settings.set_window_settings(self._settings_key, {"geometry": encoded})

    # ------------------------------------------------------------------
    # Build / fill / collect
    # ------------------------------------------------------------------
    def build_form(self):
        """Потомки создают виджеты через ``add_field``."""
        raise NotImplementedError

    def fill_from_obj(self, obj):
        for name, widget in self.fields.items():
            self.set_widget_value(widget, getattr(obj, name, None))

    @staticmethod
    def set_widget_value(widget: QWidget, value: Any) -> None:
        if isinstance(widget, QLineEdit):
            if isinstance(value, (list, tuple)):
                value = ", ".join(str(v) for v in value)
            widget.setText("" if value is None else str(value))
        elif isinstance(widget, QPlainTextEdit):
            widget.setPlainText("" if value is None else str(value))
        elif isinstance(widget, QCheckBox):
            widget.setChecked(bool(value))
        elif isinstance(widget, QComboBox):
            set_selected_by_id(widget, value)
        elif isinstance(widget, QDateTimeEdit):
            set_datetime(widget, value)
        elif isinstance(widget, QSpinBox):
            widget.setValue(int(value or 0))
        elif hasattr(widget, "set_client"):
            widget.set_client(value)

    @staticmethod
    def widget_value(widget: QWidget) -> Any:
        if isinstance(widget, QLineEdit):
            return widget.text().strip()
        if isinstance(widget, QPlainTextEdit):
            return widget.toPlainText().strip()
        if isinstance(widget, QCheckBox):
            return widget.isChecked()
        if isinstance(widget, QComboBox):
            return combo_value(widget)
        if isinstance(widget, QDateTimeEdit):
            return get_datetime_or_none(widget)
        if isinstance(widget, QSpinBox):
            return widget.value()
        if hasattr(widget, "selected_id"):
            return widget.selected_id()
        return None

    def collect_data(self) -> dict[str, Any]:
        """Сырые значения виджетов по именам полей."""
        return {name: self.widget_value(widget) for name, widget in self.fields.items()}

    def build_payload(self, data: dict[str, Any]) -> dict[str, Any]:
        """Тело запроса в camelCase; поднимает ``ValidationError``."""
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------
    def save(self):
        if self.state.is_submitting:
            return
        try:
            payload = self.build_payload(self.collect_data())
        except ValidationError as exc:
            message = tr_validation(exc.code, exc.field)
            self.state.invalid(message)
            self.show_error(message)
            widget = self.fields.get(exc.field or "")
            if widget is not None:
                widget.setFocus()
            return

        self.state.start_submit()
        self.show_error(None)
        self._set_busy(True)
        self.executor.submit(
            lambda: self.save_data(payload), self._on_saved, self._on_save_failed
        )

    def save_data(self, payload: dict[str, Any]):
        if self.state.is_edit:
            return self.service.update(self.state.entity_id, payload)
        return self.service.create(payload)

    def _on_saved(self, result) -> None:
        self.state.succeed()
        self.saved_instance = result
        self._set_busy(False)
        self.accept()

    def _on_save_failed(self, exc: BaseException) -> None:
        logger.error("❌ Ошибка при сохранении в %s", self.__class__.__name__, exc_info=exc)
        message = error_text(exc, "error.save")
        self.state.fail(message)
        self._set_busy(False)
        self.show_error(message)

    # ------------------------------------------------------------------
    # Close
    # ------------------------------------------------------------------
    def reject(self):
        if self.state.is_submitting:
            return
        self.state.close()
        super().reject()

    def closeEvent(self, event):
        if self.state.is_submitting:
            event.ignore()
            return
        super().closeEvent(event)

    def done(self, result):
        self._save_geometry()
        super().done(result)


def compact_payload(payload: dict[str, Any]) -> dict[str, Any]:
    """Тело запроса без ключей со значением ``None``."""
    return {key: value for key, value in payload.items() if value is not None}
