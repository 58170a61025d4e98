"""Tests for project tracking."""

from datetime import datetime

import pytest
from sqlalchemy import select

from classforge.errors import (
    DuplicateNameError,
    NotFoundError,
    ProjectExistsError,
    StorageFaultError,
)
from classforge.models import ProjectStatus, ProjectStatusTitle
from classforge.schemas import Project, ProjectClass


@pytest.fixture
def saved_class(store, python_class) -> ProjectClass:
    store.save_class(python_class)
    return python_class


def active_status_id(storage) -> int:
    with storage.database.connect() as conn:
        return conn.scalar(
            select(ProjectStatus.project_status_id).where(
                ProjectStatus.title == ProjectStatusTitle.ACTIVE.value
            )
        )


class TestTrackProject:
    def test_track_sets_date_and_status(self, storage, tracker, saved_class):
        """The accepted record gets a timestamp and the default (active) status."""
        project = Project(name="demo", class_id=saved_class.id, install_path="/tmp/demo")
        before = datetime.now()

        tracker.track_project(project)

        assert project.install_date is not None
        assert project.install_date >= before
        assert project.status_id == active_status_id(storage)

    def test_tracked_row_is_persisted(self, tracker, saved_class):
        tracker.track_project(
            Project(name="demo", class_id=saved_class.id, install_path="/tmp/demo")
        )

        stored = tracker.load_project("/tmp/demo")

        assert stored.name == "demo"
        assert stored.class_id == saved_class.id
        assert stored.install_date is not None
        assert stored.status_id is not None

    def test_second_track_already_exists(self, tracker, saved_class):
        project = Project(name="demo", class_id=saved_class.id, install_path="/tmp/demo")
        tracker.track_project(project)

        with pytest.raises(ProjectExistsError):
            tracker.track_project(
                Project(name="demo", class_id=saved_class.id, install_path="/tmp/demo")
            )

    def test_already_exists_is_a_duplicate_name_error(self, tracker, saved_class):
        """Callers catching DuplicateNameError also see project collisions."""
        tracker.track_project(
            Project(name="demo", class_id=saved_class.id, install_path="/tmp/demo")
        )

        with pytest.raises(DuplicateNameError):
            tracker.track_project(
                Project(name="other", class_id=saved_class.id, install_path="/tmp/demo")
            )

    def test_same_class_many_projects(self, tracker, saved_class):
        for path in ("/srv/a", "/srv/b", "/srv/c"):
            tracker.track_project(Project(name="demo", class_id=saved_class.id, install_path=path))

        assert len(tracker.load_all_projects()) == 3  # noqa: PLR2004

    def test_unknown_class_is_not_already_exists(self, tracker, saved_class):
        """A foreign key miss is a storage fault, not a duplicate."""
        project = Project(name="orphan", class_id=saved_class.id + 100, install_path="/tmp/x")

        with pytest.raises(StorageFaultError) as exc_info:
            tracker.track_project(project)

        assert not isinstance(exc_info.value, ProjectExistsError)
        assert project.install_date is None


class TestLoadProjects:
    def test_load_unknown_path(self, tracker):
        with pytest.raises(NotFoundError):
            tracker.load_project("/nowhere")

    def test_load_all_ordered(self, tracker, saved_class):
        tracker.track_project(Project(name="zulu", class_id=saved_class.id, install_path="/p/1"))
        tracker.track_project(Project(name="alpha", class_id=saved_class.id, install_path="/p/3"))
        tracker.track_project(Project(name="alpha", class_id=saved_class.id, install_path="/p/2"))

        projects = tracker.load_all_projects()

        assert [(p.name, p.install_path) for p in projects] == [
            ("alpha", "/p/2"),
            ("alpha", "/p/3"),
            ("zulu", "/p/1"),
        ]

    def test_load_all_empty(self, tracker):
        assert tracker.load_all_projects() == []
