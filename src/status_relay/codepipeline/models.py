from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CodePipelineModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ArtifactRevision(CodePipelineModel):
    name: str
    revision_id: str | None = None
    revision_url: str | None = None
    revision_summary: str | None = None


class PipelineExecution(CodePipelineModel):
    pipeline_name: str | None = None
    pipeline_execution_id: str | None = None
    status: str
    status_summary: str | None = None
    artifact_revisions: list[ArtifactRevision] = []
