import base64

import httpx
import pytest

from config import Settings
from core.app_context import AppContext
from infrastructure.api_client import ApiClient
from services.dto import UserDTO
from ui import settings as ui_settings
from ui.i18n import tr
from ui.main_window import MainWindow, apply_main_window_settings


def _empty_api(request):
    return httpx.Response(200, json={"data": [], "total": 0})


@pytest.fixture
def make_context(session_store):
    def factory(user: UserDTO | None):
        if user is not None:
            session_store.set("tok", user)
        return AppContext(
            Settings(),
            session_factory=lambda: session_store,
            api_client_factory=lambda settings, session: ApiClient(
                settings.api_url, session, transport=httpx.MockTransport(_empty_api)
            ),
        )

    return factory


def _tab_titles(window):
    return [window.tab_widget.tabText(i) for i in range(window.tab_widget.count())]


def test_users_tab_only_for_admin(qapp, make_context, manual_executor, admin_user):
    admin_window = MainWindow(context=make_context(admin_user), executor=manual_executor)
    assert tr("nav.users") in _tab_titles(admin_window)
    assert _tab_titles(admin_window)[0] == tr("nav.dashboard")
    admin_window.close()


def test_regular_user_has_no_users_tab(qapp, make_context, manual_executor):
    user = UserDTO(id="u2", name="Bia", email="bia@clinic.com", role="USER")
    window = MainWindow(context=make_context(user), executor=manual_executor)
    assert tr("nav.users") not in _tab_titles(window)
    window.close()


def test_tabs_load_on_first_show(qapp, make_context, manual_executor, admin_user):
    window = MainWindow(context=make_context(admin_user), executor=manual_executor)
    manual_executor.tasks.clear()

    window.tab_widget.setCurrentIndex(1)
    assert manual_executor.pending == 1
    window.tab_widget.setCurrentIndex(2)
    window.tab_widget.setCurrentIndex(1)
    assert manual_executor.pending == 2
    window.close()


def test_unauthorized_signal_asks_for_login(qapp, make_context, manual_executor, admin_user):
    context = make_context(admin_user)
    answers = []
    window = MainWindow(
        context=context,
        executor=manual_executor,
        login_runner=lambda: answers.append(True) or True,
    )

    first_page = window.pages[0]
    window.unauthorized.emit()
    assert answers == [True]
    assert window.pages[0] is not first_page
    window.close()


def test_geometry_and_tab_restored(qapp, make_context, manual_executor, admin_user):
    window = MainWindow(context=make_context(admin_user), executor=manual_executor)
    window.show()
    window.tab_widget.setCurrentIndex(3)
    window.close()

    stored = ui_settings.get_window_settings("MainWindow")
    assert stored["last_tab"] == 3
    assert base64.b64decode(stored["geometry"])

    again = MainWindow(context=make_context(admin_user), executor=manual_executor)
    assert again.tab_widget.currentIndex() == 3
    again.close()


def test_apply_settings_ignores_bad_values(qapp):
    from PySide6.QtWidgets import QTabWidget, QWidget

    tabs = QTabWidget()
    for i in range(3):
        tabs.addTab(QWidget(), str(i))
    apply_main_window_settings(
        {"geometry": "###", "last_tab": "9"},
        tabs,
        lambda geometry: None,
        lambda: 0,
        lambda state: None,
    )
    assert tabs.currentIndex() == 0
