import asyncio

import aiohttp
from gidgethub import sansio
from sanic.log import logger

from status_relay import metrics
from status_relay.config import Config
from status_relay.exceptions import NotificationError
from status_relay.github.models import RepositoryIdentifier, StatusReport

# reserved expansion keeps the "/" between owner and repo
STATUSES_URL = "/repos/{+repo}/statuses/{sha}"


def make_status_headers(token: str) -> dict[str, str]:
    return {
        "Accept": "application/json",
        "Authorization": f"token {token}",
        "Content-Type": "application/json; charset=utf-8",
    }


def commit_status_url(repo: RepositoryIdentifier, commit_id: str, config: Config) -> str:
    return sansio.format_url(
        STATUSES_URL,
        {"repo": repo.full_name, "sha": commit_id},
        base_url=config.GITHUB_API_URL,
    )


async def post_commit_status(
    session: aiohttp.ClientSession,
    repo: RepositoryIdentifier,
    commit_id: str,
    report: StatusReport,
    token: str,
    config: Config,
):
    """
    Post a commit status to GitHub.

    GitHub answers a created status with 201, anything else is a failure.
    A single attempt is made.

    Raises:
        NotificationError: on any other response or a transport failure
    """
    url = commit_status_url(repo, commit_id, config)

    logger.info(
        "Setting status for repo=%s, commit=%s to %s", repo, commit_id, report.state
    )

    if config.STERILE:
        logger.info(
            "STERILE mode: Would post status %s to %s",
            report.model_dump_json(exclude_none=True),
            url,
        )
        return

    try:
        async with session.post(
            url,
            data=report.model_dump_json(exclude_none=True).encode(),
            headers=make_status_headers(token),
            timeout=aiohttp.ClientTimeout(total=config.REQUEST_TIMEOUT),
        ) as resp:
            if resp.status != 201:
                body = await resp.text()
                metrics.github_status_update_errors_total.labels(
                    repo.full_name, str(resp.status)
                ).inc()
                raise NotificationError(resp.status, body)
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        metrics.github_status_update_errors_total.labels(repo.full_name, "none").inc()
        raise NotificationError(None, str(e) or type(e).__name__) from e

    logger.debug("Status %s posted for commit %s", report.state, commit_id)
    metrics.github_status_updates_total.labels(repo.full_name, report.state).inc()
