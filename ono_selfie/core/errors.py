"""Exception hierarchy shared by every pipeline stage.

Error handling strategy:
    - Each stage raises a typed subclass of `SelfieError` at the failure site.
    - Nothing is retried or recovered inside the pipeline.
    - Adapters (`api.cli`, `api.http_api`) translate these into exit codes or
      HTTP statuses.
"""


class SelfieError(Exception):
    """Base class for all pipeline failures."""


class ConfigurationError(SelfieError):
    """Required configuration (for example the Gemini API key) is missing."""


class InvalidRequestError(SelfieError, ValueError):
    """Caller supplied an unknown mode, ratio, format, transport or a blank value."""


class UpstreamRequestError(SelfieError):
    """Image-generation endpoint failed or returned an unusable response.

    Attributes:
        status_code: HTTP status when the failure came from a response.
        body: Raw response text for diagnosis.
    """

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DecodeError(SelfieError):
    """Base64 image payload is missing, empty or undecodable."""

    def __init__(self, message: str, sample: str | None = None):
        super().__init__(message)
        self.sample = sample


class DispatchError(SelfieError):
    """Messaging gateway rejected the send (non-zero exit or non-2xx status)."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.detail = detail


class MaterializationError(SelfieError):
    """Decoded image could not be written to the temp directory."""
