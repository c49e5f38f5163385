from __future__ import annotations

from typing import Any, Callable, Iterable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QComboBox, QCompleter

from ui.i18n import tr, tr_enum


def populate_combo(
    combo: QComboBox,
    items: Iterable,
    label_func: Callable[[Any], str] = str,
    id_attr: str = "id",
    placeholder: str | None = None,
) -> None:
    """Заполняет существующий QComboBox элементами *items*.

    :param combo: уже созданный QComboBox.
    :param items: iterable DTO/значений.
    :param label_func: функция, превращающая элемент в отображаемую строку.
    :param id_attr: атрибут объекта, который кладётся в userData.
    :param placeholder: необязательный элемент-заглушка (первым, данные ``None``).
    """
    combo.blockSignals(True)
    combo.clear()
    if placeholder:
        combo.addItem(placeholder, None)
    for obj in items:
        combo.addItem(label_func(obj), getattr(obj, id_attr, obj))
    combo.blockSignals(False)


def create_enum_combo(
    values: Iterable[str], *, with_all: bool = False, labels: dict[str, str] | None = None
) -> QComboBox:
    """Список значений перечисления; с ``with_all`` первым идёт «Todos» (``None``)."""
    combo = QComboBox()
    if with_all:
        combo.addItem(tr("common.all"), None)
    for value in values:
        label = (labels or {}).get(value) or tr_enum(value)
        combo.addItem(label, value)
    return combo


def create_editable_combo(options: Iterable[str], *, placeholder: str = "") -> QComboBox:
    """Редактируемый QComboBox: можно выбрать вариант или ввести свой."""
    combo = QComboBox()
    combo.setEditable(True)
    for option in options:
        combo.addItem(option, option)
    combo.setInsertPolicy(QComboBox.NoInsert)
    combo.setCurrentIndex(-1)
    if placeholder:
        combo.lineEdit().setPlaceholderText(placeholder)
    setup_completer(combo)
    return combo


def setup_completer(combo: QComboBox) -> None:
    """Делает выпадающий список ищущим по подстроке (case-insensitive)."""
    if not combo.isEditable():
        combo.setEditable(True)

    completer = QCompleter(combo.model(), combo)
    completer.setCompletionMode(QCompleter.PopupCompletion)
    completer.setFilterMode(Qt.MatchContains)
    completer.setCaseSensitivity(Qt.CaseInsensitive)
    combo.setCompleter(completer)


def combo_value(combo: QComboBox) -> Any:
    """Данные выбранного пункта; для редактируемого списка без данных берётся текст."""
    if combo.isEditable():
        text = combo.currentText().strip()
        index = combo.findText(text)
        if index >= 0 and combo.itemData(index) is not None:
            return combo.itemData(index)
        return text or None
    return combo.currentData()


def set_selected_by_id(combo: QComboBox, value_id: Any) -> None:
    """Установить текущий элемент по userData (например, id или код enum)."""
    for index in range(combo.count()):
        if combo.itemData(index) == value_id:
            combo.setCurrentIndex(index)
            return
    if combo.isEditable():
        combo.setEditText("" if value_id is None else str(value_id))
