"""Project tracking - records which class a project was created from."""

from datetime import datetime

from sqlalchemy import Connection, insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from classforge.errors import NotFoundError, ProjectExistsError, StorageFaultError
from classforge.logging_config import get_logger
from classforge.models import ProjectRecord, ProjectStatus
from classforge.schemas import Project

from .database import Database, is_unique_violation, storage_errors

logger = get_logger(__name__)


def _default_status_id(conn: Connection) -> int:
    status_id = conn.scalar(
        select(ProjectStatus.project_status_id)
        .where(ProjectStatus.is_default.is_(True))
        .order_by(ProjectStatus.project_status_id)
        .limit(1)
    )
    if status_id is None:
        raise StorageFaultError("No default project status, was the schema created?")
    return status_id


PROJECT_COLUMNS = (
    ProjectRecord.name,
    ProjectRecord.class_id,
    ProjectRecord.install_path,
    ProjectRecord.install_date,
    ProjectRecord.project_status_id,
)


def _to_project(row) -> Project:
    return Project(
        name=row.name,
        class_id=row.class_id,
        install_path=row.install_path,
        install_date=row.install_date,
        status_id=row.project_status_id,
    )


class ProjectTracker:
    """Records project instantiations."""

    def __init__(self, database: Database):
        self._db = database

    def track_project(self, project: Project) -> None:
        """Record ``project`` with the current time and the default status.

        Raises:
            ProjectExistsError: A project is already tracked at this install path.
            StorageFaultError: Any other database error, e.g. an unknown class id.
        """
        install_date = datetime.now()
        try:
            with self._db.engine.begin() as conn:
                status_id = _default_status_id(conn)
                conn.execute(
                    insert(ProjectRecord).values(
                        name=project.name,
                        class_id=project.class_id,
                        install_path=project.install_path,
                        install_date=install_date,
                        project_status_id=status_id,
                    )
                )
        except IntegrityError as e:
            if is_unique_violation(e):
                logger.warning(
                    "project_already_tracked",
                    project_name=project.name,
                    install_path=project.install_path,
                )
                raise ProjectExistsError(
                    f"Project at '{project.install_path}' already exists"
                ) from e
            logger.error(
                "project_track_failed",
                project_name=project.name,
                class_id=project.class_id,
                error=str(e),
            )
            raise StorageFaultError(f"Could not track project '{project.name}': {e}") from e
        except SQLAlchemyError as e:
            logger.error(
                "project_track_failed",
                project_name=project.name,
                class_id=project.class_id,
                error=str(e),
            )
            raise StorageFaultError(f"Could not track project '{project.name}': {e}") from e

        project.install_date = install_date
        project.status_id = status_id
        logger.info(
            "project_tracked",
            project_name=project.name,
            class_id=project.class_id,
            install_path=project.install_path,
            status_id=status_id,
        )

    def load_project(self, install_path: str) -> Project:
        """Load the project tracked at ``install_path``."""
        with (
            storage_errors("project_load_failed", install_path=install_path),
            self._db.connect() as conn,
        ):
            row = conn.execute(
                select(*PROJECT_COLUMNS).where(ProjectRecord.install_path == install_path)
            ).first()
        if row is None:
            raise NotFoundError(f"No project tracked at '{install_path}'")
        return _to_project(row)

    def load_all_projects(self) -> list[Project]:
        """Load every tracked project, ordered by name and install path."""
        with storage_errors("project_load_all_failed"), self._db.connect() as conn:
            rows = conn.execute(
                select(*PROJECT_COLUMNS).order_by(ProjectRecord.name, ProjectRecord.install_path)
            ).all()
        return [_to_project(row) for row in rows]
