import json

import pytest

from status_relay.codepipeline.models import PipelineExecution
from status_relay.exceptions import InvalidEventError
from status_relay.github.models import CommitState, RepositoryIdentifier, StatusReport
from status_relay.models import InboundEvent

from tests.utils import make_execution_response

VALID_EVENT = {"execution-id": "exec1", "github-token": "tok", "pipeline": "pipe1"}


def test_inbound_event_from_payload():
    event = InboundEvent.from_payload(VALID_EVENT)

    assert event.execution_id == "exec1"
    assert event.github_token == "tok"
    assert event.pipeline == "pipe1"


def test_inbound_event_ignores_extra_keys():
    event = InboundEvent.from_payload({**VALID_EVENT, "detail-type": "something"})

    assert event.pipeline == "pipe1"


@pytest.mark.parametrize("param", ["execution-id", "github-token", "pipeline"])
def test_inbound_event_missing_param(param):
    payload = dict(VALID_EVENT)
    del payload[param]

    with pytest.raises(InvalidEventError) as excinfo:
        InboundEvent.from_payload(payload)

    assert excinfo.value.field == param
    assert str(excinfo.value) == f"missing event param {param}"


@pytest.mark.parametrize("param", ["execution-id", "github-token", "pipeline"])
@pytest.mark.parametrize("value", ["", None, 123])
def test_inbound_event_empty_or_wrong_type_param(param, value):
    payload = {**VALID_EVENT, param: value}

    with pytest.raises(InvalidEventError) as excinfo:
        InboundEvent.from_payload(payload)

    assert excinfo.value.field == param


def test_inbound_event_reports_first_missing_param():
    with pytest.raises(InvalidEventError) as excinfo:
        InboundEvent.from_payload({"pipeline": "pipe1"})

    assert excinfo.value.field == "execution-id"


@pytest.mark.parametrize("payload", [None, "exec1", ["exec1", "tok", "pipe1"]])
def test_inbound_event_not_an_object(payload):
    with pytest.raises(InvalidEventError) as excinfo:
        InboundEvent.from_payload(payload)

    assert excinfo.value.field == "execution-id"


def test_inbound_event_hides_token():
    event = InboundEvent.from_payload(VALID_EVENT)

    assert "tok" not in repr(event)


def test_pipeline_execution_model():
    response = make_execution_response(status="InProgress")
    execution = PipelineExecution.model_validate(response["pipelineExecution"])

    assert execution.status == "InProgress"
    assert execution.pipeline_name == "pipe1"
    assert execution.pipeline_execution_id == "exec1"
    assert len(execution.artifact_revisions) == 1

    revision = execution.artifact_revisions[0]
    assert revision.name == "SourceArtifact"
    assert revision.revision_id == "abc123"
    assert revision.revision_url == "https://github.com/acme/widgets/commit/abc123"
    assert revision.revision_summary == "Merge pull request #1"


def test_pipeline_execution_model_without_revisions():
    execution = PipelineExecution.model_validate({"status": "InProgress"})

    assert execution.artifact_revisions == []


def test_repository_identifier():
    repo = RepositoryIdentifier(full_name="acme/widgets")

    assert repo.full_name == "acme/widgets"
    assert str(repo) == "acme/widgets"
    assert f"{repo}" == "acme/widgets"


def test_status_report_omits_unset_description():
    report = StatusReport(
        state=CommitState.success,
        target_url="https://example.com",
        context="continuous-integration/codepipeline",
    )

    assert json.loads(report.model_dump_json(exclude_none=True)) == {
        "state": "success",
        "target_url": "https://example.com",
        "context": "continuous-integration/codepipeline",
    }


@pytest.mark.parametrize("state", CommitState)
def test_status_report_state_serialization(state):
    report = StatusReport(state=state, target_url="u", context="c")

    assert json.loads(report.model_dump_json())["state"] == str(state)
