"""classforge - reusable project class templates backed by SQLite."""

from .errors import (
    ClassforgeError,
    DuplicateNameError,
    InvalidIdentifierError,
    NetworkFaultError,
    NotFoundError,
    ProjectExistsError,
    StorageFaultError,
    TransactionFailureError,
)
from .importers import GitHubImporter, GitLabImporter, RepoImporter, importer_from_url
from .schemas import Project, ProjectClass, RepoTree
from .storage import ClassStore, Database, ProjectTracker, Storage

__version__ = "0.1.0"

__all__ = [
    "ClassStore",
    "ClassforgeError",
    "Database",
    "DuplicateNameError",
    "GitHubImporter",
    "GitLabImporter",
    "InvalidIdentifierError",
    "NetworkFaultError",
    "NotFoundError",
    "Project",
    "ProjectClass",
    "ProjectExistsError",
    "ProjectTracker",
    "RepoImporter",
    "RepoTree",
    "Storage",
    "StorageFaultError",
    "TransactionFailureError",
    "importer_from_url",
]
