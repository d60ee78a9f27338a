class RelayError(ValueError):
    """Base class for all errors that abort a status relay invocation."""

    pass


class InvalidEventError(RelayError):
    """Raised when a required trigger input field is missing or empty."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"missing event param {field}")


class UpstreamError(RelayError):
    """Raised when the pipeline execution lookup fails or lacks expected data."""

    def __init__(self, message: str, cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message)


class MissingSourceArtifactError(UpstreamError):
    """Raised when no artifact revision carries the source artifact name."""

    def __init__(self, artifact_name: str = "SourceArtifact"):
        self.artifact_name = artifact_name
        super().__init__(f"missing {artifact_name}")


class ResolutionError(RelayError):
    """Raised when a revision URL cannot be turned into an owner/repo name."""

    def __init__(self, reason: str, url: str | None = None):
        self.reason = reason
        self.url = url
        if url is None:
            super().__init__(reason)
        else:
            super().__init__(
                f"failed to extract repo name from artifact url {url}: {reason}"
            )


class NotificationError(RelayError):
    """Raised when GitHub does not accept the commit status."""

    def __init__(self, status_code: int | None, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"unexpected response from GitHub: {status_code} body: {body}")
