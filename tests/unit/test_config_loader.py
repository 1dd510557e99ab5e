"""Tests for the settings loader."""

from __future__ import annotations

import pytest

from backend.app.config import Settings, load_settings

pytestmark = [pytest.mark.config]


@pytest.fixture(autouse=True)
def _clear_database_env(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("DB_NAME", raising=False)


def test_load_settings_falls_back_to_defaults(monkeypatch, tmp_path):
    """Missing profiles should default to the built-in dev configuration."""

    monkeypatch.setenv("PASSWORD_MANAGER_CONFIG_PROFILE", "missing")
    monkeypatch.setenv("PASSWORD_MANAGER_CONFIG_DIR", str(tmp_path))
    settings = load_settings()

    assert settings.environment == "dev"
    assert settings.database_url.endswith("/passwords")
    assert settings.database_name is None
    assert settings.effective_database_url == settings.database_url
    assert settings.frontend_dist_dir.name == "dist"
    assert "http://localhost:5173" in settings.cors_allowed_origins
    assert settings.logging["level"] == "INFO"


def test_load_settings_reads_yaml_profile(monkeypatch, tmp_path):
    """Config loader should parse YAML profiles and expose every section."""

    profiles_dir = tmp_path / "profiles"
    profiles_dir.mkdir()
    (profiles_dir / "staging.yaml").write_text(
        """
environment: staging

database:
  url: "postgresql+psycopg://vault:pw@db:5432/ignored"
  name: vault_staging

frontend:
  dist_dir: "/srv/manager/dist"

cors:
  allowed_origins: ["https://vault.example.com"]

logging:
  level: debug
""",
        encoding="utf-8",
    )

    settings = load_settings(profile="staging", config_dir=profiles_dir)

    assert settings.environment == "staging"
    assert settings.database_name == "vault_staging"
    assert (
        settings.effective_database_url
        == "postgresql+psycopg://vault:pw@db:5432/vault_staging"
    )
    assert str(settings.frontend_dist_dir) == "/srv/manager/dist"
    assert settings.cors_allowed_origins == ["https://vault.example.com"]
    assert settings.logging["level"] == "debug"
    assert "format" in settings.logging


def test_environment_overrides_connection_string_and_name(monkeypatch, tmp_path):
    monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg://u:p@remote:5432/base")
    monkeypatch.setenv("DB_NAME", "from_env")

    settings = load_settings(profile="dev", config_dir=tmp_path)

    assert settings.database_url == "postgresql+psycopg://u:p@remote:5432/base"
    assert settings.effective_database_url.endswith("@remote:5432/from_env")


def test_profile_must_be_a_mapping(tmp_path):
    (tmp_path / "dev.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(RuntimeError, match="must be a mapping"):
        load_settings(profile="dev", config_dir=tmp_path)


def test_database_name_applies_to_sqlite_urls():
    settings = Settings(database_url="sqlite+pysqlite:///old.db", database_name="new.db")

    assert settings.effective_database_url == "sqlite+pysqlite:///new.db"
