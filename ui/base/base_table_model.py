import datetime
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable

from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt

from ui.i18n import tr
from utils.time_utils import format_datetime

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Column:
    """Описание колонки: атрибут DTO, ключ заголовка и форматтер."""

    attr: str
    title_key: str
    formatter: Callable[[Any], str] | None = None
    getter: Callable[[Any], Any] | None = None

    def value(self, obj: Any) -> Any:
        if self.getter is not None:
            return self.getter(obj)
        return getattr(obj, self.attr, None)


class BaseTableModel(QAbstractTableModel):
    def __init__(self, columns: list[Column], objects: list | None = None, parent=None):
        super().__init__(parent)
        self.columns = list(columns)
        self.objects: list = list(objects or [])

    def set_objects(self, objects: list) -> None:
        self.beginResetModel()
        self.objects = list(objects)
        self.endResetModel()

    def rowCount(self, parent=QModelIndex()):
        return 0 if parent.isValid() else len(self.objects)

    def columnCount(self, parent=QModelIndex()):
        return 0 if parent.isValid() else len(self.columns)

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole:
            return None
        if orientation == Qt.Horizontal and 0 <= section < len(self.columns):
            return tr(self.columns[section].title_key)
        return super().headerData(section, orientation, role)

    def get_item(self, row):
        return self.objects[row]

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None

        obj = self.objects[index.row()]
        column = self.columns[index.column()]
        try:
            value = column.value(obj)
        except (AttributeError, KeyError, TypeError) as e:
            logger.warning(
                "⚠️ Ошибка при доступе к %s у объекта %s: %s", column.attr, obj, e
            )
            value = None

        if role == Qt.UserRole:
            return value

        if role == Qt.DisplayRole:
            if column.formatter is not None:
                return column.formatter(value)
            return self.format_value(value)

        if role == Qt.ToolTipRole and isinstance(value, str) and len(value) > 40:
            return value

        if role == Qt.TextAlignmentRole:
            if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
                return int(Qt.AlignRight | Qt.AlignVCenter)

        return None

    def format_value(self, value: Any) -> str:
        if value is None or value == "":
            return "-"
        if isinstance(value, bool):
            return tr("common.yes") if value else tr("common.no")
        if isinstance(value, datetime.datetime):
            return format_datetime(value)
        if isinstance(value, (list, tuple)):
            return ", ".join(str(item) for item in value) or "-"
        text = str(value)
        return self.shorten_text(text)

    def shorten_text(self, text, limit=40):
        return text if len(text) <= limit else text[:limit] + "…"

    def flags(self, index):
        if not index.isValid():
            return Qt.ItemIsEnabled
        return Qt.ItemIsSelectable | Qt.ItemIsEnabled
