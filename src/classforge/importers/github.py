"""GitHub repository importer."""

import re
from urllib.parse import quote

import httpx

from classforge.errors import InvalidIdentifierError
from classforge.logging_config import get_logger
from classforge.schemas import GitHubTree, RepoTree

from .base import Page, RepoImporter, split_url

logger = get_logger(__name__)

# Examples:
#  - https://github.com/pallets/flask              -> user and repo, no branch
#  - https://github.com/pallets/flask/tree/stable  -> user, repo and branch
_URL_PATH = re.compile(r"/(?P<owner>[^/]+)/(?P<repo>[^/]+)(?:/tree/(?P<branch>[^/]+))?")


class GitHubImporter(RepoImporter):
    """Tree importer for github.com.

    Uses the Git Trees API, which returns the whole recursive tree in a single
    response, so the pagination loop always ends after the first page.
    """

    host = "github.com"

    @classmethod
    def from_url(cls, url: str, **kwargs) -> "GitHubImporter":
        _, path = split_url(url)
        match = _URL_PATH.match(path)
        if not match:
            raise InvalidIdentifierError(
                f"Could not extract user and/or repository name from '{url}'. "
                "Please check the URL"
            )
        repo = match["repo"].removesuffix(".git")
        return cls(match["owner"], repo, match["branch"], **kwargs)

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.settings.github_token:
            headers["Authorization"] = f"Bearer {self.settings.github_token}"
        return headers

    def fetch_tree(self) -> RepoTree:
        self._truncated = False
        tree = super().fetch_tree()
        tree.truncated = self._truncated
        return tree

    def _request_page(self, client: httpx.Client, page: str) -> Page:
        resp = client.get(
            f"{self.settings.github_api_url}/repos/{self.owner}/{self.repo}"
            f"/git/trees/{quote(self.branch, safe='')}",
            params={"recursive": "1"},
            headers=self._headers(),
        )
        resp.raise_for_status()
        tree = GitHubTree.model_validate(resp.json())

        self._truncated = tree.truncated
        if tree.truncated:
            logger.warning(
                "github_tree_truncated",
                owner=self.owner,
                repo=self.repo,
                branch=self.branch,
                entries=len(tree.tree),
            )
        return [(item.path, item.type) for item in tree.tree], None
