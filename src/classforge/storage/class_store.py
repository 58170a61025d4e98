"""Class persistence.

Saving a class happens in two phases. The name row is inserted and committed on
its own so the class receives its id. Labels, folders, files and scripts are
then inserted in one transaction. If the second phase fails, it is rolled back
and the name row is deleted again, so a failed save leaves nothing behind.
"""

from sqlalchemy import Connection, RootTransaction, delete, insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from classforge.errors import (
    ClassforgeError,
    DuplicateNameError,
    NotFoundError,
    StorageFaultError,
    TransactionFailureError,
)
from classforge.logging_config import get_logger
from classforge.models import ClassFile, ClassFolder, ClassLabel, ClassRecord, ClassScript
from classforge.schemas import ProjectClass

from .database import Database, is_unique_violation, storage_errors

logger = get_logger(__name__)

CHILD_TABLES = (ClassLabel, ClassFolder, ClassFile, ClassScript)


# === Child row writers (run inside the caller's transaction) ===


def _save_labels(conn: Connection, class_id: int, labels: list[str]) -> None:
    if not labels:
        return
    conn.execute(
        insert(ClassLabel),
        [{"class_id": class_id, "label": label.lower()} for label in labels],
    )


def _save_folders(conn: Connection, class_id: int, folders: dict[str, str | None]) -> None:
    if not folders:
        return
    conn.execute(
        insert(ClassFolder),
        [
            {"class_id": class_id, "target": target, "template": template}
            for target, template in folders.items()
        ],
    )


def _save_files(conn: Connection, class_id: int, files: dict[str, str | None]) -> None:
    if not files:
        return
    conn.execute(
        insert(ClassFile),
        [
            {"class_id": class_id, "target": target, "template": template}
            for target, template in files.items()
        ],
    )


def _save_scripts(conn: Connection, class_id: int, scripts: dict[str, bool]) -> None:
    if not scripts:
        return
    conn.execute(
        insert(ClassScript),
        [
            {"class_id": class_id, "name": name, "run_as_sudo": run_as_sudo}
            for name, run_as_sudo in scripts.items()
        ],
    )


def _delete_class(conn: Connection, class_id: int) -> None:
    """Delete a class row and all of its children."""
    for table in CHILD_TABLES:
        conn.execute(delete(table).where(table.class_id == class_id))
    conn.execute(delete(ClassRecord).where(ClassRecord.class_id == class_id))


# === Readers ===


def _load_labels(conn: Connection, class_id: int) -> list[str]:
    query = (
        select(ClassLabel.label)
        .where(ClassLabel.class_id == class_id)
        .order_by(ClassLabel.label)
    )
    return list(conn.scalars(query))


def _load_folders(conn: Connection, class_id: int) -> dict[str, str | None]:
    query = (
        select(ClassFolder.target, ClassFolder.template)
        .where(ClassFolder.class_id == class_id)
        .order_by(ClassFolder.target)
    )
    return {row.target: row.template for row in conn.execute(query)}


def _load_files(conn: Connection, class_id: int) -> dict[str, str | None]:
    query = (
        select(ClassFile.target, ClassFile.template)
        .where(ClassFile.class_id == class_id)
        .order_by(ClassFile.target)
    )
    return {row.target: row.template for row in conn.execute(query)}


def _load_scripts(conn: Connection, class_id: int) -> dict[str, bool]:
    query = (
        select(ClassScript.name, ClassScript.run_as_sudo)
        .where(ClassScript.class_id == class_id)
        .order_by(ClassScript.run_as_sudo, ClassScript.name)
    )
    return {row.name: bool(row.run_as_sudo) for row in conn.execute(query)}


def _hydrate(conn: Connection, class_id: int, name: str) -> ProjectClass:
    return ProjectClass(
        id=class_id,
        name=name,
        labels=_load_labels(conn, class_id),
        folders=_load_folders(conn, class_id),
        files=_load_files(conn, class_id),
        scripts=_load_scripts(conn, class_id),
    )


def _discard(tx: RootTransaction) -> None:
    """Roll back ``tx`` and release the DBAPI transaction behind it."""
    if tx.is_active:
        tx.rollback()
    else:
        # A failed commit deactivates tx but leaves the SQLite write lock held
        tx.connection.invalidate()


class ClassStore:
    """Saves, loads and removes class templates."""

    def __init__(self, database: Database):
        self._db = database

    def save_class(self, project_class: ProjectClass) -> None:
        """Persist a class with all of its child rows.

        On success ``project_class.id`` is set. On failure nothing of the class
        remains in the database.

        Raises:
            DuplicateNameError: A class with this name already exists.
            StorageFaultError: A child row could not be written.
            TransactionFailureError: Commit or cleanup failed.
        """
        name = project_class.name.lower()
        self._save_name(name)

        try:
            class_id = self.load_class_id(name)
        except ClassforgeError as e:
            logger.error("class_id_lookup_failed", class_name=name, error=str(e))
            self._cancel_save(name)
            raise

        with self._db.connect() as conn:
            tx = conn.begin()
            try:
                _save_labels(conn, class_id, project_class.labels)
                _save_folders(conn, class_id, project_class.folders)
                _save_files(conn, class_id, project_class.files)
                _save_scripts(conn, class_id, project_class.scripts)
            except SQLAlchemyError as e:
                logger.error(
                    "class_save_failed",
                    class_name=name,
                    class_id=class_id,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                self._cancel_save(name, tx)
                raise StorageFaultError(f"Could not save class '{name}': {e}") from e

            try:
                tx.commit()
            except SQLAlchemyError as e:
                logger.error("class_save_commit_failed", class_name=name, error=str(e))
                self._cancel_save(name, tx)
                raise TransactionFailureError(f"Could not commit class '{name}': {e}") from e

        project_class.id = class_id
        logger.info(
            "class_saved",
            class_name=name,
            class_id=class_id,
            labels=len(project_class.labels),
            folders=len(project_class.folders),
            files=len(project_class.files),
            scripts=len(project_class.scripts),
        )

    def _save_name(self, name: str) -> None:
        try:
            with self._db.engine.begin() as conn:
                conn.execute(insert(ClassRecord).values(name=name))
        except IntegrityError as e:
            if is_unique_violation(e):
                logger.warning("class_name_taken", class_name=name)
                raise DuplicateNameError(f"Class '{name}' already exists") from e
            raise StorageFaultError(f"Could not save class name '{name}': {e}") from e
        except SQLAlchemyError as e:
            raise StorageFaultError(f"Could not save class name '{name}': {e}") from e

    def _cancel_save(self, name: str, tx: RootTransaction | None = None) -> None:
        """Undo a partial save: roll back ``tx`` and delete the name row."""
        try:
            if tx is not None:
                _discard(tx)
            with self._db.engine.begin() as conn:
                class_id = conn.scalar(select(ClassRecord.class_id).where(ClassRecord.name == name))
                if class_id is not None:
                    _delete_class(conn, class_id)
        except SQLAlchemyError as e:
            logger.error("class_save_cleanup_failed", class_name=name, error=str(e))
            raise TransactionFailureError(
                f"Could not clean up after failed save of class '{name}': {e}"
            ) from e

        logger.info("class_save_cancelled", class_name=name)

    def load_class_id(self, name: str) -> int:
        """Resolve a class name to its id."""
        name = name.lower()
        with storage_errors("class_id_load_failed", class_name=name), self._db.connect() as conn:
            class_id = conn.scalar(select(ClassRecord.class_id).where(ClassRecord.name == name))
        if class_id is None:
            raise NotFoundError(f"Could not find class '{name}'")
        return class_id

    def load_class_by_name(self, name: str) -> ProjectClass:
        """Load a fully hydrated class by name."""
        name = name.lower()
        with storage_errors("class_load_failed", class_name=name), self._db.connect() as conn:
            class_id = conn.scalar(select(ClassRecord.class_id).where(ClassRecord.name == name))
            if class_id is None:
                raise NotFoundError(f"Could not find class '{name}'")
            return _hydrate(conn, class_id, name)

    def load_class_by_id(self, class_id: int) -> ProjectClass:
        """Load a fully hydrated class by id."""
        with storage_errors("class_load_failed", class_id=class_id), self._db.connect() as conn:
            name = conn.scalar(select(ClassRecord.name).where(ClassRecord.class_id == class_id))
            if name is None:
                raise NotFoundError(f"Could not find class with id {class_id}")
            return _hydrate(conn, class_id, name)

    def load_all_classes(self) -> list[ProjectClass]:
        """Load every class, ordered by name."""
        with storage_errors("class_load_all_failed"), self._db.connect() as conn:
            rows = conn.execute(
                select(ClassRecord.class_id, ClassRecord.name).order_by(ClassRecord.name)
            ).all()
            return [_hydrate(conn, row.class_id, row.name) for row in rows]

    def remove_class(self, name: str) -> None:
        """Delete a class and all of its child rows in one transaction."""
        name = name.lower()
        class_id = self.load_class_id(name)

        with self._db.connect() as conn:
            tx = conn.begin()
            try:
                _delete_class(conn, class_id)
            except SQLAlchemyError as e:
                logger.error(
                    "class_remove_failed",
                    class_name=name,
                    class_id=class_id,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                self._rollback(tx, name)
                raise StorageFaultError(f"Could not remove class '{name}': {e}") from e

            try:
                tx.commit()
            except SQLAlchemyError as e:
                logger.error("class_remove_commit_failed", class_name=name, error=str(e))
                self._rollback(tx, name)
                raise TransactionFailureError(f"Could not commit removal of '{name}': {e}") from e

        logger.info("class_removed", class_name=name, class_id=class_id)

    @staticmethod
    def _rollback(tx: RootTransaction, name: str) -> None:
        try:
            _discard(tx)
        except SQLAlchemyError as e:
            logger.error("class_remove_rollback_failed", class_name=name, error=str(e))
            raise TransactionFailureError(f"Could not roll back removal of '{name}': {e}") from e

    def does_label_exist(self, label: str) -> int:
        """Return the id of a class carrying ``label``.

        Labels may be shared between classes; the lowest class id is returned.
        """
        label = label.lower()
        with storage_errors("label_lookup_failed", label=label), self._db.connect() as conn:
            class_id = conn.scalar(
                select(ClassLabel.class_id)
                .where(ClassLabel.label == label)
                .order_by(ClassLabel.class_id)
                .limit(1)
            )
        if class_id is None:
            raise NotFoundError(f"No class carries label '{label}'")
        return class_id
