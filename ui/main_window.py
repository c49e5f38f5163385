import base64
import binascii
import logging

from PySide6.QtCore import QByteArray, Qt, Signal
from PySide6.QtWidgets import QDialog, QMainWindow, QStatusBar, QTabWidget

from core.app_context import AppContext, get_app_context
from ui import settings as ui_settings
from ui.common.workers import Executor, default_executor
from ui.i18n import tr
from ui.main_menu import MainMenu
from ui.views.appointment_table_view import AppointmentTableView
from ui.views.calendar_table_view import CalendarTableView
from ui.views.campaign_table_view import CampaignTableView
from ui.views.client_table_view import ClientTableView
from ui.views.course_lead_table_view import CourseLeadTableView
from ui.views.home_tab import HomeTab
from ui.views.knowledge_table_view import KnowledgeTableView
from ui.views.lead_table_view import LeadTableView
from ui.views.payment_view import PaymentsTab
from ui.views.reports_tab import ReportsTab
from ui.views.service_table_view import ServiceTableView
from ui.views.student_table_view import StudentTableView
from ui.views.user_table_view import UserTableView
from ui.views.waitlist_table_view import WaitlistTableView
from utils.screen_utils import get_scaled_size

logger = logging.getLogger(__name__)

WINDOW_SETTINGS_KEY = "MainWindow"

# (ключ заголовка, класс страницы); загрузка откладывается до первого показа
PAGES = (
    ("nav.clients", ClientTableView),
    ("nav.leads", LeadTableView),
    ("nav.appointments", AppointmentTableView),
    ("nav.calendar", CalendarTableView),
    ("nav.payments", PaymentsTab),
    ("nav.services", ServiceTableView),
    ("nav.students", StudentTableView),
    ("nav.course_leads", CourseLeadTableView),
    ("nav.waitlist", WaitlistTableView),
    ("nav.knowledge", KnowledgeTableView),
    ("nav.campaigns", CampaignTableView),
)


def apply_main_window_settings(
    settings: dict,
    tab_widget,
    restore_geometry,
    window_state_getter,
    set_window_state,
    *,
    logger_: logging.Logger | None = None,
):
    logger_ = logger_ or logger
    geom = settings.get("geometry")
    if geom:
        try:
            restore_geometry(QByteArray(base64.b64decode(geom)))
        except (binascii.Error, ValueError):
            logger_.warning("Не удалось восстановить геометрию окна")
    idx = settings.get("last_tab")
    if idx is not None:
        try:
            idx_int = int(idx)
        except (TypeError, ValueError):
            idx_int = None
        if idx_int is not None and 0 <= idx_int < tab_widget.count():
            tab_widget.setCurrentIndex(idx_int)
    if "open_maximized" in settings:
        current_state = window_state_getter()
        if settings.get("open_maximized"):
            set_window_state(current_state | Qt.WindowMaximized)
        else:
            set_window_state(current_state & ~Qt.WindowMaximized)


class MainWindow(QMainWindow):
    # сигнал испускается из рабочего потока клиента API, обработчик в GUI-потоке
    unauthorized = Signal()

    def __init__(
        self,
        *,
        context: AppContext | None = None,
        executor: Executor | None = None,
        settings_applier=apply_main_window_settings,
        login_runner=None,
    ):
        super().__init__()
        self._context = context or get_app_context()
        self._executor = executor or default_executor()
        self._settings_applier = settings_applier
        self._login_runner = login_runner or self._run_login_dialog
        self._login_open = False
        self.setWindowTitle(tr("app.title"))
        self.resize(get_scaled_size(1600, 960, ratio=0.95))
        self.setMinimumSize(800, 600)

        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
        self.menu_bar = MainMenu(self)
        self.setMenuBar(self.menu_bar)

        self.tab_widget = QTabWidget(self)
        self.setCentralWidget(self.tab_widget)
        self.tab_widget.currentChanged.connect(self.on_tab_changed)
        self._pending_tab_loads: set[int] = set()
        self.init_tabs()

        self.unauthorized.connect(self.on_unauthorized)
        self._context.api_client.on_unauthorized = self.unauthorized.emit

        self._load_settings()

    # --- вкладки -----------------------------------------------------------
    def init_tabs(self):
        context, executor = self._context, self._executor
        self.tab_widget.blockSignals(True)
        self.home_tab = HomeTab(context=context, executor=executor)
        self.tab_widget.addTab(self.home_tab, tr("nav.dashboard"))

        self.pages = []
        for title_key, page_class in PAGES:
            page = page_class(context=context, executor=executor, auto_load=False)
            self.tab_widget.addTab(page, tr(title_key))
            self.pages.append(page)

        self.reports_tab = ReportsTab(context=context, executor=executor, auto_load=False)
        self.tab_widget.addTab(self.reports_tab, tr("nav.reports"))

        self.users_tab = None
        user = context.session.user
        if user is not None and user.is_admin:
            self.users_tab = UserTableView(context=context, executor=executor, auto_load=False)
            self.tab_widget.addTab(self.users_tab, tr("nav.users"))
            self.pages.append(self.users_tab)

        for page in self.pages:
            page.data_loaded.connect(self.show_count)
        self._pending_tab_loads = {id(page) for page in (*self.pages, self.reports_tab)}
        self.tab_widget.blockSignals(False)

        if user is not None:
            self.status_bar.showMessage(tr("app.signed_in", name=user.name))

    def reset_tabs(self):
        """Пересобрать вкладки после смены пользователя."""
        self.tab_widget.blockSignals(True)
        while self.tab_widget.count():
            widget = self.tab_widget.widget(0)
            self.tab_widget.removeTab(0)
            widget.deleteLater()
        self.tab_widget.blockSignals(False)
        self.init_tabs()

    def show_count(self, count: int):
        self.status_bar.showMessage(tr("app.records", count=count))

    def on_tab_changed(self, index: int):
        widget = self.tab_widget.widget(index)
        if widget is self.home_tab:
            self.home_tab.update_stats()
            self.status_bar.clearMessage()
            return

        widget_id = id(widget)
        if widget_id in self._pending_tab_loads:
            self._pending_tab_loads.discard(widget_id)
            if widget is self.reports_tab:
                widget.load_reports()
            else:
                widget.load_data()

    def refresh_current(self):
        widget = self.tab_widget.currentWidget()
        if widget is self.home_tab:
            self.home_tab.update_stats()
        elif widget is self.reports_tab:
            self.reports_tab.load_reports()
        elif widget is not None:
            widget.refresh()

    # --- сессия ------------------------------------------------------------
    def _run_login_dialog(self) -> bool:
        from ui.forms.auth_dialogs import LoginDialog

        dialog = LoginDialog(self._context.auth_service, executor=self._executor, parent=self)
        return dialog.exec() == QDialog.Accepted

    def on_unauthorized(self):
        """Сессия истекла: просим войти снова либо закрываем окно."""
        if self._login_open:
            return
        logger.warning("🔒 Сессия недействительна, требуется вход")
        self._login_open = True
        try:
            logged_in = self._login_runner()
        finally:
            self._login_open = False
        if logged_in:
            self.reset_tabs()
        else:
            self.close()

    def logout(self):
        self._context.auth_service.logout()
        self.on_unauthorized()

    # --- диалоги -----------------------------------------------------------
    def open_settings(self):
        from ui.forms.settings_dialog import SettingsDialog

        SettingsDialog(self).exec()

    def open_anamnesis(self):
        from ui.forms.anamnesis_dialog import AnamnesisDialog

        AnamnesisDialog(
            self._context.anamnesis_service, executor=self._executor, parent=self
        ).exec()

    # --- настройки окна ----------------------------------------------------
    def _load_settings(self):
        st = ui_settings.get_window_settings(WINDOW_SETTINGS_KEY)
        self._settings_applier(
            st,
            self.tab_widget,
            self.restoreGeometry,
            self.windowState,
            self.setWindowState,
        )

    def closeEvent(self, event):
        st = ui_settings.get_window_settings(WINDOW_SETTINGS_KEY)
        st.update(
            {
                "geometry": base64.b64encode(bytes(self.saveGeometry())).decode("ascii"),
                "last_tab": self.tab_widget.currentIndex(),
                "open_maximized": bool(self.windowState() & Qt.WindowMaximized),
            }
        )
        ui_settings.set_window_settings(WINDOW_SETTINGS_KEY, st)
        super().closeEvent(event)
