"""Pydantic schemas for repository tree responses.

These schemas document the structure of the tree endpoints used by the
importers and the normalized result they produce.

GitLab: https://docs.gitlab.com/ee/api/repositories.html#list-repository-tree
GitHub: https://docs.github.com/en/rest/git/trees
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

EntryType = Literal["file", "dir"]

# Both hosts describe git objects, map them to what the caller creates on disk
GIT_OBJECT_TYPES: dict[str, EntryType] = {"blob": "file", "tree": "dir"}


class GitLabTreeItem(BaseModel):
    """Item from GET /projects/:id/repository/tree."""

    model_config = ConfigDict(extra="allow")

    id: str | None = Field(None, description="Git object SHA")
    name: str | None = Field(None, description="Entry name")
    path: str = Field(..., description="Path within repository")
    type: str = Field(..., description="Type: 'blob', 'tree' or 'commit' (submodule)")
    mode: str | None = Field(None, description="File mode")


class GitHubTreeItem(BaseModel):
    """Entry of the ``tree`` array from GET /repos/{owner}/{repo}/git/trees/{sha}."""

    model_config = ConfigDict(extra="allow")

    path: str = Field(..., description="Path within repository")
    type: str = Field(..., description="Type: 'blob', 'tree' or 'commit' (submodule)")
    sha: str | None = Field(None, description="Git object SHA")
    mode: str | None = Field(None, description="File mode")
    size: int | None = Field(None, description="Size in bytes (blobs only)")


class GitHubTree(BaseModel):
    """Response body of GET /repos/{owner}/{repo}/git/trees/{sha}?recursive=1."""

    model_config = ConfigDict(extra="allow")

    sha: str | None = Field(None, description="Tree SHA")
    tree: list[GitHubTreeItem] = Field(default_factory=list, description="Tree entries")
    truncated: bool = Field(False, description="Whether GitHub cut the listing short")


@dataclass
class RepoTree:
    """Normalized repository tree: parallel ``paths`` and ``types``."""

    paths: list[str] = field(default_factory=list)
    types: list[EntryType] = field(default_factory=list)
    # Set when the host cut the listing short, paths then hold only a prefix
    truncated: bool = False

    def __post_init__(self) -> None:
        if len(self.paths) != len(self.types):
            raise ValueError(
                f"paths and types differ in length ({len(self.paths)} != {len(self.types)})"
            )

    def add(self, path: str, entry_type: EntryType) -> None:
        self.paths.append(path)
        self.types.append(entry_type)

    def __len__(self) -> int:
        return len(self.paths)

    def __iter__(self) -> Iterator[tuple[str, EntryType]]:
        return iter(zip(self.paths, self.types, strict=True))
