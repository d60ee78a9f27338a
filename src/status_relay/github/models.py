from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class CommitState(StrEnum):
    pending = "pending"
    success = "success"
    failure = "failure"


class RepositoryIdentifier(BaseModel):
    model_config = ConfigDict(frozen=True)

    # owner/repo as found in the revision URL, kept verbatim
    full_name: str

    @classmethod
    def from_owner_repo(cls, owner: str, repo: str) -> "RepositoryIdentifier":
        return cls(full_name=f"{owner}/{repo}")

    def __str__(self) -> str:
        return self.full_name


class StatusReport(BaseModel):
    state: CommitState
    target_url: str
    description: str | None = None
    context: str
