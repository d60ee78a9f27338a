from status_relay.github.models import CommitState


def codepipeline_to_github_state(execution_status: str) -> CommitState:
    if execution_status == "InProgress":
        state = CommitState.pending
    elif execution_status == "Succeeded":
        state = CommitState.success
    else:
        # Stopped, Stopping, Superseded and Cancelled are reported as failures too
        state = CommitState.failure
    return state
