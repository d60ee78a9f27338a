import asyncio

import boto3
import pydantic
from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError
from sanic.log import logger

from status_relay.codepipeline.models import ArtifactRevision, PipelineExecution
from status_relay.config import Config
from status_relay.exceptions import MissingSourceArtifactError, UpstreamError


def client_for_region(config: Config) -> BaseClient:
    return boto3.client("codepipeline", region_name=config.client_region)


def get_pipeline_execution(
    client: BaseClient, pipeline_name: str, execution_id: str
) -> PipelineExecution:
    logger.debug("Querying execution %s of pipeline %s", execution_id, pipeline_name)
    try:
        response = client.get_pipeline_execution(
            pipelineName=pipeline_name,
            pipelineExecutionId=execution_id,
        )
    except (ClientError, BotoCoreError) as e:
        raise UpstreamError(
            f"failed to get execution {execution_id} of pipeline {pipeline_name}: {e}",
            cause=e,
        ) from e

    try:
        return PipelineExecution.model_validate(response["pipelineExecution"])
    except (KeyError, pydantic.ValidationError) as e:
        raise UpstreamError(
            f"malformed execution {execution_id} of pipeline {pipeline_name}: {e}",
            cause=e,
        ) from e


async def fetch_pipeline_execution(
    client: BaseClient, pipeline_name: str, execution_id: str
) -> PipelineExecution:
    # boto3 is blocking, keep it off the event loop
    return await asyncio.to_thread(
        get_pipeline_execution, client, pipeline_name, execution_id
    )


def find_source_revision(
    execution: PipelineExecution, artifact_name: str = "SourceArtifact"
) -> ArtifactRevision:
    """Return the first artifact revision named ``artifact_name``."""
    for revision in execution.artifact_revisions:
        if revision.name == artifact_name:
            return revision
    raise MissingSourceArtifactError(artifact_name)


def execution_console_url(config: Config, pipeline_name: str, execution_id: str) -> str:
    return (
        f"https://{config.console_host}/codesuite/codepipeline/pipelines/"
        f"{pipeline_name}/executions/{execution_id}"
    )
