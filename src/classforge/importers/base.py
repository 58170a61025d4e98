"""Common machinery for repository tree importers."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from urllib.parse import urlparse

import httpx

from classforge.config import Settings, get_settings
from classforge.errors import InvalidIdentifierError, NetworkFaultError
from classforge.logging_config import get_logger
from classforge.schemas import RepoTree
from classforge.schemas.repo_tree import GIT_OBJECT_TYPES

logger = get_logger(__name__)

# (path, git object type) pairs of one page and the token of the next page
Page = tuple[list[tuple[str, str]], str | None]


def split_url(url: str) -> tuple[str, str]:
    """Return ``(host, path)`` of a repository URL, tolerating a missing scheme."""
    url = (url or "").strip()
    if not url:
        raise InvalidIdentifierError("Repository URL is empty")
    if "://" not in url:
        url = f"https://{url}"
    parsed = urlparse(url)
    return parsed.netloc.lower(), parsed.path


class RepoImporter(ABC):
    """Fetches the recursive file tree of one branch of a remote repository.

    Subclasses implement ``_request_page`` for their host; the pagination loop,
    error mapping and type normalization are shared.
    """

    host: str = ""
    first_page: str = "1"

    def __init__(
        self,
        owner: str,
        repo: str,
        branch: str | None = None,
        *,
        settings: Settings | None = None,
        client: httpx.Client | None = None,
    ):
        if not owner or not repo:
            raise InvalidIdentifierError(
                "Could not extract user and/or repository name. Please check the URL"
            )
        self.settings = settings or get_settings()
        self.owner = owner
        self.repo = repo
        self.branch = branch or self.settings.default_branch
        self._client = client

    @classmethod
    @abstractmethod
    def from_url(cls, url: str, **kwargs) -> "RepoImporter":
        """Build an importer from a repository web URL."""

    @abstractmethod
    def _request_page(self, client: httpx.Client, page: str) -> Page:
        """Fetch one page of the tree."""

    def _headers(self) -> dict[str, str]:
        return {}

    @contextmanager
    def _http_client(self) -> Iterator[httpx.Client]:
        # An injected client belongs to the caller and stays open
        if self._client is not None:
            yield self._client
            return
        with httpx.Client(timeout=self.settings.request_timeout) as client:
            yield client

    def fetch_tree(self) -> RepoTree:
        """Fetch all pages and return the concatenated tree in page order.

        Raises:
            NetworkFaultError: On HTTP/transport errors, malformed responses, or
                when more than ``Settings.max_pages`` pages would be fetched.
        """
        tree = RepoTree()
        page: str | None = self.first_page
        pages = 0
        log = logger.bind(host=self.host, owner=self.owner, repo=self.repo, branch=self.branch)

        try:
            with self._http_client() as client:
                while page:
                    if pages >= self.settings.max_pages:
                        log.error(
                            "repo_tree_page_limit_exceeded", max_pages=self.settings.max_pages
                        )
                        raise NetworkFaultError(
                            f"Gave up on {self.owner}/{self.repo} after "
                            f"{self.settings.max_pages} pages"
                        )
                    entries, page = self._request_page(client, page)
                    pages += 1
                    for path, git_type in entries:
                        entry_type = GIT_OBJECT_TYPES.get(git_type)
                        if entry_type is None:
                            # Submodules and other non-materializable entries
                            log.debug("repo_tree_entry_skipped", path=path, type=git_type)
                            continue
                        tree.add(path, entry_type)
        except httpx.HTTPError as e:
            log.error("repo_tree_fetch_failed", error=str(e), error_type=type(e).__name__)
            raise NetworkFaultError(
                f"Could not fetch tree of {self.owner}/{self.repo}@{self.branch}: {e}"
            ) from e
        except ValueError as e:
            log.error("repo_tree_malformed_response", error=str(e))
            raise NetworkFaultError(
                f"Malformed tree response for {self.owner}/{self.repo}: {e}"
            ) from e

        log.info("repo_tree_fetched", pages=pages, entries=len(tree))
        return tree
