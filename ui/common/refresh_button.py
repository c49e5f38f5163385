from PySide6.QtWidgets import QPushButton

from ui.i18n import tr


class RefreshButton(QPushButton):
    def __init__(self, callback, parent=None):
        super().__init__(f"🔄 {tr('common.refresh')}", parent)
        self.clicked.connect(callback)
        self.setFixedHeight(30)
        self.setMinimumWidth(120)
