from pydantic import ValidationError
import pytest

from classforge.schemas import Project, ProjectClass, RepoTree


class TestProjectClass:
    def test_new_class_has_no_id(self):
        assert ProjectClass(name="python").id is None

    def test_empty_template_becomes_none(self):
        project_class = ProjectClass(
            name="python",
            folders={"src": "", "docs": "templates/docs"},
            files={"setup.cfg": ""},
        )

        assert project_class.folders == {"src": None, "docs": "templates/docs"}
        assert project_class.files == {"setup.cfg": None}

    def test_name_required(self):
        with pytest.raises(ValidationError):
            ProjectClass(name="")


class TestProject:
    def test_tracking_fields_unset(self):
        project = Project(name="demo", class_id=1, install_path="/tmp/demo")

        assert project.install_date is None
        assert project.status_id is None


class TestRepoTree:
    def test_iterates_pairs(self):
        tree = RepoTree()
        tree.add("src", "dir")
        tree.add("src/main.py", "file")

        assert len(tree) == 2  # noqa: PLR2004
        assert list(tree) == [("src", "dir"), ("src/main.py", "file")]
        assert tree.truncated is False

    def test_rejects_uneven_sequences(self):
        with pytest.raises(ValueError, match="differ in length"):
            RepoTree(paths=["a", "b"], types=["file"])
