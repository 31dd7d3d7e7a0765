"""Unit tests for the settings model."""

from __future__ import annotations

from pathlib import Path

from tapas_pos.core.config import Settings


class TestDatabaseSettings:
    def test_default_database_is_under_db_dir(self, monkeypatch):
        monkeypatch.delenv("TAPAS_DB_DIR", raising=False)
        monkeypatch.delenv("TAPAS_DATABASE_URL", raising=False)

        settings = Settings()

        assert settings.db_path == Path("db").resolve() / "tapas.db"
        assert settings.database_url == f"sqlite+aiosqlite:///{settings.db_path.as_posix()}"

    def test_db_dir_and_name_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TAPAS_DB_DIR", str(tmp_path))
        monkeypatch.setenv("TAPAS_DB_NAME", "till.db")

        settings = Settings()

        assert settings.db_path == tmp_path.resolve() / "till.db"

    def test_explicit_url_wins(self, monkeypatch):
        monkeypatch.setenv("TAPAS_DB_DIR", "/somewhere")
        monkeypatch.setenv("TAPAS_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

        assert Settings().database_url == "sqlite+aiosqlite:///:memory:"

    def test_init_by_field_name(self, tmp_path):
        settings = Settings(db_dir=str(tmp_path))

        assert settings.db_path.parent == tmp_path.resolve()


class TestLoggingSettings:
    def test_logging_group_reads_environment(self, monkeypatch):
        monkeypatch.setenv("TAPAS_LOG_LEVEL", "debug")
        monkeypatch.setenv("TAPAS_LOG_FORMAT", "json")
        monkeypatch.setenv("TAPAS_ENABLE_FILE_LOGGING", "true")

        logging_config = Settings().logging

        assert logging_config.level == "debug"
        assert logging_config.format == "json"
        assert logging_config.enable_file is True
        assert logging_config.file_dir == "logs"

    def test_file_logging_off_by_default(self, monkeypatch):
        monkeypatch.delenv("TAPAS_ENABLE_FILE_LOGGING", raising=False)

        assert Settings().logging.enable_file is False
