from unittest.mock import AsyncMock, MagicMock


def make_execution_response(
    status="Succeeded",
    revision_url="https://github.com/acme/widgets/commit/abc123",
    revision_id="abc123",
    name="SourceArtifact",
):
    """Shape of a boto3 ``get_pipeline_execution`` response."""
    revisions = []
    if name is not None:
        revisions.append(
            {
                "name": name,
                "revisionId": revision_id,
                "revisionSummary": "Merge pull request #1",
                "revisionUrl": revision_url,
            }
        )
    return {
        "pipelineExecution": {
            "pipelineName": "pipe1",
            "pipelineVersion": 3,
            "pipelineExecutionId": "exec1",
            "status": status,
            "artifactRevisions": revisions,
        },
        "ResponseMetadata": {"HTTPStatusCode": 200},
    }


def make_session(status=201, body=""):
    """An aiohttp session stand-in whose ``post`` answers with ``status``."""
    resp = MagicMock()
    resp.status = status
    resp.text = AsyncMock(return_value=body)

    session = MagicMock()
    session.post.return_value.__aenter__.return_value = resp
    return session
