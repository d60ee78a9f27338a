from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from status_relay.exceptions import InvalidEventError

REQUIRED_EVENT_PARAMS = ("execution-id", "github-token", "pipeline")


class InboundEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    execution_id: str = Field(alias="execution-id", min_length=1)
    github_token: str = Field(alias="github-token", min_length=1, repr=False)
    pipeline: str = Field(min_length=1)

    @classmethod
    def from_payload(cls, payload: Any) -> "InboundEvent":
        """
        Build an event from the trigger's JSON object.

        Params are checked in a fixed order so the first missing one is
        the one reported.

        Raises:
            InvalidEventError: if any param is absent, empty or not a string
        """
        if not isinstance(payload, Mapping):
            payload = {}

        for param in REQUIRED_EVENT_PARAMS:
            value = payload.get(param)
            if not isinstance(value, str) or value == "":
                raise InvalidEventError(param)

        return cls.model_validate({k: payload[k] for k in REQUIRED_EVENT_PARAMS})
