"""Value types shared by importers and storage."""

from .project import Project
from .project_class import ProjectClass
from .repo_tree import GitHubTree, GitHubTreeItem, GitLabTreeItem, RepoTree

__all__ = [
    "GitHubTree",
    "GitHubTreeItem",
    "GitLabTreeItem",
    "Project",
    "ProjectClass",
    "RepoTree",
]
