"""Shared fixtures for classforge tests."""

import pytest

from classforge.config import Settings, get_settings
from classforge.schemas import ProjectClass
from classforge.storage import Storage


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; tests that touch env vars need a fresh copy."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def storage(tmp_path):
    """A fresh database file per test."""
    with Storage.open(tmp_path / "classforge.sqlite3") as storage:
        yield storage


@pytest.fixture
def store(storage):
    return storage.classes


@pytest.fixture
def tracker(storage):
    return storage.projects


@pytest.fixture
def python_class() -> ProjectClass:
    return ProjectClass(
        name="Python",
        labels=["zeta", "alpha", "mike"],
        folders={"src": None, "tests": None, "docs": "templates/python/docs"},
        files={
            "README.md": "templates/python/README.md",
            "src/__init__.py": None,
            ".gitignore": "templates/python/gitignore",
        },
        scripts={
            "init_virtualenv.sh": False,
            "install_system_deps.sh": True,
            "git_init.sh": False,
        },
    )
