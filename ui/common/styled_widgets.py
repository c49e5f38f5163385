from PySide6.QtWidgets import QFrame, QLabel, QPushButton, QSizePolicy, QVBoxLayout
from PySide6.QtGui import QKeySequence


def styled_button(
    label: str, icon: str = "", tooltip: str = "", shortcut: str = "", role: str = None
) -> QPushButton:
    """
    Создаёт стилизованную кнопку с иконкой, подсказкой и шорткатом.

    Parameters
    ----------
    label : str
        Текст кнопки
    icon : str
        Эмоджи или иконка
    tooltip : str
        Всплывающая подсказка
    shortcut : str
        Горячая клавиша, например: "Ctrl+N"
    role : str
        Визуальная роль ("primary", "danger"), используется в style.qss
    """
    btn = QPushButton(f"{icon} {label}".strip())
    if shortcut:
        btn.setShortcut(QKeySequence(shortcut))
        tooltip = f"{tooltip} ({shortcut})".strip() if tooltip else shortcut
    if tooltip:
        btn.setToolTip(tooltip)
    if role:
        btn.setProperty("role", role)
    btn.setMinimumHeight(30)
    btn.setSizePolicy(QSizePolicy.Minimum, QSizePolicy.Fixed)
    return btn


def header_label(text: str) -> QLabel:
    label = QLabel(text)
    label.setProperty("class", "header")
    return label


def status_label(css_class: str = "error") -> QLabel:
    """Метка для встроенных сообщений об ошибке/успехе, скрыта до ``setText``."""
    label = QLabel("")
    label.setProperty("class", css_class)
    label.setWordWrap(True)
    label.setVisible(False)
    return label


def set_status(label: QLabel, text: str | None, css_class: str | None = None) -> None:
    if css_class:
        label.setProperty("class", css_class)
        label.style().unpolish(label)
        label.style().polish(label)
    label.setText(text or "")
    label.setVisible(bool(text))


class MetricCard(QFrame):
    """Карточка показателя: подпись, значение и пояснение."""

    def __init__(self, title: str, value: str = "-", helper: str = "", parent=None):
        super().__init__(parent)
        self.setFrameShape(QFrame.StyledPanel)
        layout = QVBoxLayout(self)
        self.title_label = QLabel(title)
        self.value_label = QLabel(value)
        self.value_label.setProperty("class", "metric")
        layout.addWidget(self.title_label)
        layout.addWidget(self.value_label)
        if helper:
            helper_label = QLabel(helper)
            helper_label.setStyleSheet("color: gray; font-size: 8pt")
            layout.addWidget(helper_label)

    def set_value(self, value) -> None:
        self.value_label.setText(str(value))
