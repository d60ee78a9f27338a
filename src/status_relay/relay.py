import contextlib
import functools
from typing import Any

import aiohttp
from botocore.client import BaseClient
from pydantic import BaseModel
from sanic.log import logger

from status_relay import metrics, utils
from status_relay.codepipeline.utils import (
    execution_console_url,
    fetch_pipeline_execution,
    find_source_revision,
)
from status_relay.config import Config
from status_relay.exceptions import UpstreamError
from status_relay.github.models import CommitState, StatusReport
from status_relay.models import InboundEvent
from status_relay.resolver import resolve_repository
import status_relay.github.utils as github_utils


class RelayResult(BaseModel):
    repository: str
    commit: str
    state: CommitState
    target_url: str


def with_session(func):
    @functools.wraps(func)
    async def wrapper(*args, session: aiohttp.ClientSession | None = None, **kwargs):
        async with contextlib.AsyncExitStack() as stack:
            if session is None:
                session = await stack.enter_async_context(aiohttp.ClientSession())
            return await func(*args, session=session, **kwargs)

    return wrapper


async def relay_status(
    event: InboundEvent,
    *,
    codepipeline: BaseClient,
    session: aiohttp.ClientSession,
    config: Config,
) -> RelayResult:
    """
    Report the state of a pipeline execution as a status on its source commit.

    Steps run strictly in order and the first failure aborts the relay.
    Posting the status is the only side effect and comes last.
    """
    with metrics.track_relay(event.pipeline):
        execution = await fetch_pipeline_execution(
            codepipeline, event.pipeline, event.execution_id
        )
        logger.debug(
            "Execution %s is reported as '%s'", event.execution_id, execution.status
        )

        revision = find_source_revision(execution, config.SOURCE_ARTIFACT_NAME)
        if not revision.revision_id:
            raise UpstreamError(f"{revision.name} has no revisionId")

        logger.info(
            "revision ID: %s URL: %s", revision.revision_id, revision.revision_url
        )

        repo = resolve_repository(revision.revision_url or "", config)

        state = utils.codepipeline_to_github_state(execution.status)
        logger.debug("Status: %s => %s", execution.status, state)

        target_url = execution_console_url(config, event.pipeline, event.execution_id)
        logger.debug("Deep link is %s", target_url)

        report = StatusReport(
            state=state,
            target_url=target_url,
            context=config.STATUS_CONTEXT,
        )

        await github_utils.post_commit_status(
            session,
            repo,
            revision.revision_id,
            report,
            token=event.github_token,
            config=config,
        )

    return RelayResult(
        repository=repo.full_name,
        commit=revision.revision_id,
        state=state,
        target_url=target_url,
    )


@with_session
async def handle_event(
    payload: Any,
    *,
    codepipeline: BaseClient,
    session: aiohttp.ClientSession,
    config: Config,
) -> RelayResult:
    event = InboundEvent.from_payload(payload)
    logger.debug(
        "Relaying execution %s of pipeline %s", event.execution_id, event.pipeline
    )
    return await relay_status(
        event, codepipeline=codepipeline, session=session, config=config
    )
