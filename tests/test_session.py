from core.session import SessionStore


def test_reads_are_safe_before_hydrate(session_store):
    assert session_store.get() is None
    assert session_store.token is None
    assert session_store.tenant_key is None
    assert not session_store.is_authenticated


def test_set_persists_and_hydrate_restores(session_store, session_storage, admin_user):
    session_store.set("tok", admin_user)
    assert session_storage.data["token"] == "tok"

    restored = SessionStore(
        load=session_storage.load, save=session_storage.save, erase=session_storage.erase
    )
    session = restored.hydrate()
    assert session is not None
    assert restored.user.email == "ana@clinic.com"
    assert restored.tenant_key == "tenant-1"


def test_hydrate_runs_once(session_storage, admin_user):
    store = SessionStore(
        load=session_storage.load, save=session_storage.save, erase=session_storage.erase
    )
    assert store.hydrate() is None
    session_storage.data = {"token": "late", "user": admin_user.to_storage()}
    assert store.hydrate() is None


def test_corrupted_session_is_erased(session_storage):
    session_storage.data = {"token": "tok", "user": {"name": "sem id"}}
    store = SessionStore(
        load=session_storage.load, save=session_storage.save, erase=session_storage.erase
    )
    assert store.hydrate() is None
    assert session_storage.data == {}


def test_clear(session_store, session_storage, admin_user):
    session_store.set("tok", admin_user)
    session_store.clear()
    assert not session_store.is_authenticated
    assert session_storage.data == {}


def test_default_storage_uses_ui_settings(ui_settings_temp_path, admin_user):
    from ui import settings as ui_settings

    SessionStore().set("tok", admin_user)
    assert ui_settings.get_session_data()["token"] == "tok"
    assert ui_settings_temp_path.exists()
