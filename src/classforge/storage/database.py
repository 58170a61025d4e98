"""Database connection handling.

A ``Database`` owns one SQLAlchemy engine. Callers open a connection per
operation and begin transactions on it explicitly; nothing transactional is kept
on the ``Database`` itself.
"""

from collections.abc import Iterator
from contextlib import contextmanager
import sqlite3
from typing import Any

from sqlalchemy import Connection, Engine, create_engine, event, insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from classforge.errors import StorageFaultError
from classforge.logging_config import get_logger
from classforge.models import DEFAULT_STATUSES, Base, ProjectStatus

logger = get_logger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    # SQLite ignores REFERENCES clauses unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def is_unique_violation(exc: IntegrityError) -> bool:
    """Tell a UNIQUE/PRIMARY KEY violation apart from other constraint failures."""
    orig = exc.orig
    if isinstance(orig, sqlite3.IntegrityError):
        return getattr(orig, "sqlite_errorname", "") in {
            "SQLITE_CONSTRAINT_UNIQUE",
            "SQLITE_CONSTRAINT_PRIMARYKEY",
        }
    return False


@contextmanager
def storage_errors(event_name: str, **context: Any) -> Iterator[None]:
    """Re-raise SQLAlchemy errors in the block as ``StorageFaultError``."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(event_name, error=str(e), error_type=type(e).__name__, **context)
        raise StorageFaultError(f"{event_name}: {e}") from e


class Database:
    """SQLite database holding classes and projects."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.engine: Engine = create_engine(url, echo=echo)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

    def connect(self) -> Connection:
        """Open a new connection. Use it as a context manager."""
        return self.engine.connect()

    def create_schema(self) -> None:
        """Create all tables and seed project statuses. Safe to call repeatedly."""
        with storage_errors("schema_create_failed", url=self.url):
            Base.metadata.create_all(self.engine)
            with self.engine.begin() as conn:
                existing = set(conn.scalars(select(ProjectStatus.title)))
                missing = [s for s in DEFAULT_STATUSES if s["title"] not in existing]
                if missing:
                    conn.execute(insert(ProjectStatus), missing)

        logger.debug("schema_ready", url=self.url, seeded_statuses=len(missing))

    def close(self) -> None:
        self.engine.dispose()
