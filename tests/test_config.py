"""Settings from environment and service construction per storage backend."""

import pytest

from api.config import Settings
from api.main import build_service
from jackut.infrastructure import InMemoryUserRepository


def test_defaults(monkeypatch):
    for name in ("JACKUT_STORAGE", "JACKUT_DATA_DIR", "NEO4J_URI"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings.from_env()
    assert settings.storage == "file"
    assert str(settings.data_dir) == "database"
    assert settings.neo4j_uri == "bolt://localhost:7687"


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("JACKUT_STORAGE", " Memory ")
    monkeypatch.setenv("JACKUT_DATA_DIR", str(tmp_path))
    settings = Settings.from_env()
    assert settings.storage == "memory"
    assert settings.data_dir == tmp_path


def test_unknown_storage_rejected(monkeypatch):
    monkeypatch.setenv("JACKUT_STORAGE", "sqlite")
    with pytest.raises(ValueError, match="JACKUT_STORAGE"):
        Settings.from_env()


def test_build_file_service_writes_under_data_dir(tmp_path):
    service, driver = build_service(Settings(storage="file", data_dir=tmp_path))
    assert driver is None
    service.register_user("Alice", "pw", "alice")
    assert (tmp_path / "users.json").exists()


def test_build_memory_service():
    service, driver = build_service(Settings(storage="memory"))
    assert driver is None
    assert isinstance(service._user_repo, InMemoryUserRepository)
