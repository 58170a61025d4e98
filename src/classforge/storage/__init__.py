"""SQLite-backed storage for classes and tracked projects."""

from pathlib import Path

from classforge.config import get_settings
from classforge.logging_config import get_logger

from .class_store import ClassStore
from .database import Database
from .project_tracker import ProjectTracker

logger = get_logger(__name__)


class Storage:
    """Entry point bundling the class store and the project tracker.

    Usage:
        with Storage.open("~/.config/classforge/classforge.sqlite3") as storage:
            storage.classes.save_class(project_class)
            storage.projects.track_project(project)
    """

    def __init__(self, database: Database):
        self.database = database
        self.classes = ClassStore(database)
        self.projects = ProjectTracker(database)

    @classmethod
    def open(cls, path: str | Path | None = None) -> "Storage":
        """Open (and create if needed) the database at ``path``.

        Falls back to ``Settings.database_path``.
        """
        settings = get_settings()
        if path is not None:
            settings = settings.model_copy(update={"database_path": Path(path)})
        db_path = settings.database_path.expanduser()
        db_path.parent.mkdir(parents=True, exist_ok=True)

        database = Database(settings.database_url)
        database.create_schema()
        logger.debug("storage_opened", path=str(db_path))
        return cls(database)

    def close(self) -> None:
        self.database.close()

    def __enter__(self) -> "Storage":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


__all__ = ["ClassStore", "Database", "ProjectTracker", "Storage"]
