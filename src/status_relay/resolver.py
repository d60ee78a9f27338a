"""
Resolve the GitHub repository behind a CodePipeline source revision.

CodePipeline points at the source revision in one of two ways, depending
on how the source action is connected:

- directly, with a github.com commit URL
  (``https://github.com/acme/widgets/commit/abc123``)
- indirectly, with a console redirect URL of a CodeStar connection
  (``https://eu-west-1.console.aws.amazon.com/codesuite/settings/connections/redirect?FullRepositoryId=acme/widgets&...``)

Each supported form is a ``LocatorKind``; the host of the URL selects the
kind and the kind selects the extractor.
"""

from collections.abc import Callable
from enum import StrEnum
from urllib.parse import SplitResult, parse_qs, urlsplit

from sanic.log import logger

from status_relay.config import Config
from status_relay.exceptions import ResolutionError
from status_relay.github.models import RepositoryIdentifier

CONNECTION_REDIRECT_PATH = "/codesuite/settings/connections/redirect"
FULL_REPOSITORY_ID_PARAM = "FullRepositoryId"


class LocatorKind(StrEnum):
    source_host = "source_host"
    connection_redirect = "connection_redirect"


def _from_source_host(url: SplitResult) -> RepositoryIdentifier:
    parts = url.path.split("/")
    # parts[0] is the empty segment before the leading slash
    if len(parts) < 3 or not parts[1] or not parts[2]:
        raise ResolutionError("too few path components")
    return RepositoryIdentifier.from_owner_repo(parts[1], parts[2])


def _from_connection_redirect(url: SplitResult) -> RepositoryIdentifier:
    if url.path != CONNECTION_REDIRECT_PATH:
        raise ResolutionError(f"unexpected URL path: {url.path}")

    values = parse_qs(url.query).get(FULL_REPOSITORY_ID_PARAM, [])
    if not values or values[0] == "":
        raise ResolutionError(f"missing {FULL_REPOSITORY_ID_PARAM} URL param")
    return RepositoryIdentifier(full_name=values[0])


EXTRACTORS: dict[LocatorKind, Callable[[SplitResult], RepositoryIdentifier]] = {
    LocatorKind.source_host: _from_source_host,
    LocatorKind.connection_redirect: _from_connection_redirect,
}


def locator_hosts(config: Config) -> dict[str, LocatorKind]:
    return {
        config.GITHUB_HOST: LocatorKind.source_host,
        config.console_host: LocatorKind.connection_redirect,
    }


def url_hostname(url: SplitResult) -> str:
    """Host of ``url`` without userinfo or port, case preserved."""
    host = url.netloc.rpartition("@")[2]
    if host.startswith("["):
        return host[1:].partition("]")[0]
    return host.partition(":")[0]


def classify_locator(url: SplitResult, config: Config) -> LocatorKind:
    host = url_hostname(url)
    kind = locator_hosts(config).get(host)
    if kind is None:
        raise ResolutionError(f"unknown hostname {host}")
    return kind


def resolve_repository(
    revision_url: str, config: Config | None = None
) -> RepositoryIdentifier:
    """
    Extract the ``owner/repo`` identifier from a source revision URL.

    Args:
        revision_url: The ``revisionUrl`` of the source artifact revision
        config: Provides the GitHub host and the console region

    Returns:
        The repository the revision belongs to

    Raises:
        ResolutionError: if the URL is malformed or of an unsupported form
    """
    if config is None:
        config = Config()

    try:
        url = urlsplit(revision_url)
        kind = classify_locator(url, config)
        repo = EXTRACTORS[kind](url)
    except ResolutionError as e:
        raise ResolutionError(e.reason, url=revision_url) from e
    except ValueError as e:
        raise ResolutionError(f"invalid URL: {e}", url=revision_url) from e

    logger.debug("Resolved %s URL %s to %s", kind, revision_url, repo)
    return repo
