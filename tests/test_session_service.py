from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

# Garante que o pacote seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from gestor_produtos.core import config as core_config  # noqa: E402
from gestor_produtos.domain.records import UserRecord  # noqa: E402
from gestor_produtos.repositories.local_storage import LocalStorage  # noqa: E402
from gestor_produtos.services.session_service import SESSION_KEY, SessionService  # noqa: E402

USER = UserRecord(name="Ana", email="ana@example.com", password="segredo")


def test_start_persists_full_record(tmp_path):
    storage = LocalStorage(tmp_path / "ls.json")
    svc = SessionService(storage)
    svc.start(USER)
    assert svc.current == USER
    assert json.loads(storage.get_item(SESSION_KEY)) == USER.to_dict()

    other = SessionService(LocalStorage(tmp_path / "ls.json"))
    assert other.restore() == USER


def test_clear_removes_slot(tmp_path):
    storage = LocalStorage(tmp_path / "ls.json")
    svc = SessionService(storage)
    svc.start(USER)
    svc.clear()
    assert svc.current is None
    assert storage.get_item(SESSION_KEY) is None
    assert SessionService(storage).restore() is None


def test_corrupt_slot_is_discarded(tmp_path):
    storage = LocalStorage(tmp_path / "ls.json")
    storage.set_item(SESSION_KEY, "{nao e json")
    svc = SessionService(storage)
    assert svc.restore() is None
    assert storage.get_item(SESSION_KEY) is None


def test_unreadable_storage_file_reads_as_empty(tmp_path):
    path = tmp_path / "ls.json"
    path.write_text("lixo", encoding="utf-8")
    storage = LocalStorage(path)
    assert storage.get_item(SESSION_KEY) is None
    storage.set_item("k", "v")
    assert storage.get_item("k") == "v"


def test_settings_default_paths_follow_data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("LOCAL_STORAGE_PATH", raising=False)
    monkeypatch.setenv("SEED_DEMO_USER", "no")
    core_config.get_settings.cache_clear()
    try:
        settings = core_config.get_settings()
        assert settings.database_url == f"sqlite:///{tmp_path / 'ProductManagementDB.sqlite3'}"
        assert settings.local_storage_path == str(tmp_path / "local_storage.json")
        assert settings.seed_demo_user is False
    finally:
        core_config.get_settings.cache_clear()


def test_save_replaces_file_without_leftovers(tmp_path):
    storage = LocalStorage(tmp_path / "ls.json")
    storage.set_item("a", "1")
    storage.set_item("b", "2")
    assert sorted(p.name for p in tmp_path.iterdir()) == ["ls.json"]
    assert json.loads((tmp_path / "ls.json").read_text(encoding="utf-8")) == {"a": "1", "b": "2"}


def test_failed_save_keeps_previous_file(tmp_path, monkeypatch):
    from gestor_produtos.repositories import local_storage

    storage = LocalStorage(tmp_path / "ls.json")
    svc = SessionService(storage)
    svc.start(USER)

    def broken_dump(*args, **kwargs):
        raise OSError("disco cheio")

    monkeypatch.setattr(local_storage.json, "dump", broken_dump)
    with pytest.raises(OSError):
        storage.set_item("outro", "valor")
    monkeypatch.undo()

    assert SessionService(LocalStorage(tmp_path / "ls.json")).restore() == USER
    assert sorted(p.name for p in tmp_path.iterdir()) == ["ls.json"]
