"""Remote repository tree importers."""

from urllib.parse import urlparse

from classforge.config import get_settings
from classforge.errors import InvalidIdentifierError

from .base import RepoImporter, split_url
from .github import GitHubImporter
from .gitlab import GitLabImporter


def importer_from_url(url: str, **kwargs) -> RepoImporter:
    """Pick the importer matching the host of ``url``.

    Keyword arguments are passed on to the importer (``settings``, ``client``).
    """
    settings = kwargs.get("settings") or get_settings()
    host, _ = split_url(url)
    host = host.removeprefix("www.")

    if host == GitHubImporter.host:
        return GitHubImporter.from_url(url, **kwargs)
    gitlab_hosts = {GitLabImporter.host, urlparse(settings.gitlab_api_url).netloc.lower()}
    if host in gitlab_hosts:
        return GitLabImporter.from_url(url, **kwargs)

    raise InvalidIdentifierError(f"Unsupported repository host '{host}' in '{url}'")


__all__ = ["GitHubImporter", "GitLabImporter", "RepoImporter", "importer_from_url"]
