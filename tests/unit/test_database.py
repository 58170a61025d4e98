"""Tests for schema creation and the storage facade."""

from sqlalchemy import func, select, text

from classforge.models import DEFAULT_STATUSES, ProjectStatus
from classforge.storage import ClassStore, Database, ProjectTracker, Storage


class TestDatabase:
    def test_create_schema_is_idempotent(self, tmp_path):
        database = Database(f"sqlite:///{tmp_path / 'db.sqlite3'}")
        database.create_schema()
        database.create_schema()

        with database.connect() as conn:
            count = conn.scalar(select(func.count()).select_from(ProjectStatus))
        database.close()

        assert count == len(DEFAULT_STATUSES)

    def test_exactly_one_default_status(self, storage):
        with storage.database.connect() as conn:
            titles = list(
                conn.scalars(select(ProjectStatus.title).where(ProjectStatus.is_default.is_(True)))
            )

        assert titles == ["active"]

    def test_foreign_keys_enabled(self, storage):
        with storage.database.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1


class TestStorage:
    def test_open_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "classforge.sqlite3"

        with Storage.open(path) as storage:
            assert isinstance(storage.classes, ClassStore)
            assert isinstance(storage.projects, ProjectTracker)

        assert path.exists()

    def test_open_uses_settings_path(self, tmp_path, monkeypatch):
        path = tmp_path / "from-env.sqlite3"
        monkeypatch.setenv("CLASSFORGE_DATABASE_PATH", str(path))

        with Storage.open():
            pass

        assert path.exists()

    def test_data_survives_reopen(self, tmp_path, python_class):
        path = tmp_path / "classforge.sqlite3"
        with Storage.open(path) as storage:
            storage.classes.save_class(python_class)

        with Storage.open(path) as storage:
            loaded = storage.classes.load_class_by_name("python")

        assert loaded.id == python_class.id
        assert loaded.labels == ["alpha", "mike", "zeta"]

    def test_open_expands_user_path(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))

        with Storage.open("~/cf/classforge.sqlite3") as storage:
            url = storage.database.engine.url

        assert url.database == str(tmp_path / "cf" / "classforge.sqlite3")
