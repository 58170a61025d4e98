from pathlib import Path

from pydantic import ValidationError
import pytest

from classforge.config import Settings, get_settings


class TestSettings:
    def test_defaults(self, settings):
        assert settings.log_format == "console"
        assert settings.log_level == "INFO"
        assert settings.default_branch == "master"
        assert settings.page_size == 100  # noqa: PLR2004
        assert settings.database_path.name == "classforge.sqlite3"

    def test_load_from_env(self, monkeypatch):
        """Env vars with the CLASSFORGE_ prefix override defaults."""
        monkeypatch.setenv("CLASSFORGE_LOG_LEVEL", "debug")
        monkeypatch.setenv("CLASSFORGE_DEFAULT_BRANCH", "main")
        monkeypatch.setenv("CLASSFORGE_MAX_PAGES", "5")

        settings = Settings(_env_file=None)

        assert settings.log_level == "DEBUG"
        assert settings.default_branch == "main"
        assert settings.max_pages == 5  # noqa: PLR2004

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("CLASSFORGE_LOG_LEVEL", "chatty")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_page_size_bounds(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, page_size=500)

    def test_database_url(self, tmp_path):
        settings = Settings(_env_file=None, database_path=tmp_path / "db.sqlite3")

        assert settings.database_url == f"sqlite:///{tmp_path / 'db.sqlite3'}"

    def test_database_path_expands_user(self):
        settings = Settings(_env_file=None, database_path=Path("~/cf.sqlite3"))

        assert "~" not in settings.database_url

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
