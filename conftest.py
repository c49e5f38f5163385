import os
import signal
import sys
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# ensure project root is on sys.path when running tests
sys.path.append(str(Path(__file__).resolve().parent))

_TEST_TIMEOUT = int(os.environ.get("PYTEST_TIMEOUT", "60"))


@pytest.fixture(autouse=True)
def watchdog():
    """Fail a test if it hangs longer than the timeout."""
    if not hasattr(signal, "SIGALRM"):
        yield
        return

    def handler(signum, frame):  # pragma: no cover - timeout handler
        pytest.fail("Test timeout exceeded", pytrace=False)

    signal.signal(signal.SIGALRM, handler)
    signal.alarm(_TEST_TIMEOUT)
    try:
        yield
    finally:
        signal.alarm(0)


@pytest.fixture(autouse=True)
def ui_settings_temp_path(tmp_path, monkeypatch):
    """Настройки интерфейса и сессия пишутся во временный файл."""
    from ui import i18n
    from ui import settings as ui_settings

    monkeypatch.setattr(ui_settings, "SETTINGS_PATH", tmp_path / "ui_settings.json")
    ui_settings.reset_cache()
    monkeypatch.setattr(i18n, "_current_language", "pt-BR")
    yield tmp_path / "ui_settings.json"
    ui_settings.reset_cache()


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
