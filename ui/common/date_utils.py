"""Виджеты и помощники для полей даты и времени."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from PySide6.QtCore import QDate, QDateTime, QEvent, QObject, QTime, Qt
from PySide6.QtWidgets import QDateEdit, QDateTimeEdit, QLineEdit


# Значение, используемое как «пустая» дата.
OPTIONAL_DATE_MIN = QDate(2000, 1, 1)
OPTIONAL_DATETIME_MIN = QDateTime(OPTIONAL_DATE_MIN, QTime(0, 0))

DATETIME_DISPLAY = "dd/MM/yyyy HH:mm"
DATE_DISPLAY = "dd/MM/yyyy"


def make_datetime_edit(value: datetime | None = None) -> QDateTimeEdit:
    widget = QDateTimeEdit()
    widget.setCalendarPopup(True)
    widget.setDisplayFormat(DATETIME_DISPLAY)
    set_datetime(widget, value or datetime.now().replace(second=0, microsecond=0))
    return widget


def make_optional_datetime_edit() -> QDateTimeEdit:
    widget = make_datetime_edit()
    configure_optional_datetime_edit(widget)
    return widget


def make_optional_date_edit() -> QDateEdit:
    widget = QDateEdit()
    widget.setCalendarPopup(True)
    widget.setDisplayFormat(DATE_DISPLAY)
    configure_optional_datetime_edit(widget)
    return widget


def configure_optional_datetime_edit(widget: QDateTimeEdit | None) -> None:
    """Минимальное значение виджета обозначает «пусто»."""

    if widget is None:
        return
    widget.setMinimumDateTime(OPTIONAL_DATETIME_MIN)
    widget.setSpecialValueText("-")
    widget.setDateTime(widget.minimumDateTime())
    _OptionalDateEditHelper.ensure_for(widget)


def clear_optional_date(widget: QDateTimeEdit | None) -> None:
    if widget is None:
        return
    widget.setDateTime(widget.minimumDateTime())


def is_empty_date(widget: QDateTimeEdit) -> bool:
    return (
        widget.specialValueText() != ""
        and widget.dateTime() == widget.minimumDateTime()
    )


def get_datetime_or_none(widget: QDateTimeEdit | None) -> datetime | None:
    """Наивное локальное время из виджета или ``None`` для пустого."""

    if widget is None or is_empty_date(widget):
        return None
    qdt = widget.dateTime()
    if not qdt.isValid():
        return None
    return qdt.toPython().replace(second=0, microsecond=0)


def get_date_or_none(widget: QDateEdit | None) -> date | None:
    value = get_datetime_or_none(widget)
    return value.date() if value else None


def set_datetime(widget: QDateTimeEdit, value: datetime | date | None) -> None:
    if value is None:
        clear_optional_date(widget)
        return
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone().replace(tzinfo=None)
        widget.setDateTime(
            QDateTime(
                QDate(value.year, value.month, value.day),
                QTime(value.hour, value.minute),
            )
        )
    else:
        widget.setDate(QDate(value.year, value.month, value.day))


class _OptionalDateEditHelper(QObject):
    """Очистка необязательной даты клавишами Delete/Backspace."""

    _ATTRIBUTE = "_optional_date_helper"

    def __init__(self, widget: QDateTimeEdit):
        super().__init__(widget)
        self._widget = widget
        self._line_edit: Optional[QLineEdit] = widget.findChild(QLineEdit)
        widget.installEventFilter(self)
        if self._line_edit is not None:
            self._line_edit.installEventFilter(self)

    @classmethod
    def ensure_for(cls, widget: QDateTimeEdit) -> None:
        if getattr(widget, cls._ATTRIBUTE, None) is not None:
            return
        setattr(widget, cls._ATTRIBUTE, cls(widget))

    def eventFilter(self, obj, event):  # noqa: N802 (Qt signature)
        if event.type() == QEvent.KeyPress and event.key() in (
            Qt.Key_Delete,
            Qt.Key_Backspace,
        ):
            if event.modifiers() in (Qt.NoModifier, Qt.KeypadModifier):
                clear_optional_date(self._widget)
                event.accept()
                return True
        return super().eventFilter(obj, event)
