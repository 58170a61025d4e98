"""GitLab repository importer."""

import re
from urllib.parse import quote

import httpx

from classforge.errors import InvalidIdentifierError
from classforge.schemas import GitLabTreeItem

from .base import Page, RepoImporter, split_url

# Examples:
#  - https://gitlab.com/gitlab-org/gitaly                 -> user and repo, no branch
#  - https://gitlab.com/gitlab-org/gitaly/-/tree/master   -> user, repo and branch
_URL_PATH = re.compile(r"/(?P<owner>[^/]+)/(?P<repo>[^/]+)(?:/-/tree/(?P<branch>[^/]+))?")


class GitLabImporter(RepoImporter):
    """Tree importer for gitlab.com (or a self-hosted instance via settings)."""

    host = "gitlab.com"

    @classmethod
    def from_url(cls, url: str, **kwargs) -> "GitLabImporter":
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
        if self.settings.gitlab_token:
            return {"PRIVATE-TOKEN": self.settings.gitlab_token}
        return {}

    def _request_page(self, client: httpx.Client, page: str) -> Page:
        project = quote(f"{self.owner}/{self.repo}", safe="")
        resp = client.get(
            f"{self.settings.gitlab_api_url}/projects/{project}/repository/tree",
            params={
                "ref": self.branch,
                "recursive": "true",
                "per_page": self.settings.page_size,
                "page": page,
            },
            headers=self._headers(),
        )
        resp.raise_for_status()
        items = [GitLabTreeItem.model_validate(item) for item in resp.json()]

        # GitLab leaves X-Next-Page empty on the last page
        next_page = resp.headers.get("X-Next-Page", "").strip() or None
        if not items:
            next_page = None
        return [(item.path, item.type) for item in items], next_page
