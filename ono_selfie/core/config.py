"""Runtime configuration for the selfie pipeline.

Architectural role:
    Gathers every environment-sourced setting into one explicit object that is
    built once at the entry point and passed down the pipeline. No stage reads
    `os.environ` on its own.

Relevant environment variables:
    - `GEMINI_API_KEY` (required at call time)
    - `GEMINI_IMAGE_MODEL`
    - `OPENCLAW_GATEWAY_URL`
    - `OPENCLAW_GATEWAY_TOKEN`
    - `OPENCLAW_CLI`
    - `ONO_SELFIE_TIMEOUT`
    - `ONO_SELFIE_TEMP_DIR`

Failure behavior:
    Construction never fails on a missing key; `validate()` raises
    `ConfigurationError` so the caller decides when the check happens (before
    any network activity).
"""

import os
import tempfile
from dataclasses import dataclass, field

from dotenv import load_dotenv

from ono_selfie.core.errors import ConfigurationError


DEFAULT_IMAGE_MODEL = "imagen-4.0-fast-generate-001"
DEFAULT_GATEWAY_URL = "http://localhost:18789"
DEFAULT_MESSAGING_CLI = "openclaw"
DEFAULT_TIMEOUT_SECONDS = 120.0

IMAGE_URL_TEMPLATE = (
    "https://generativelanguage.googleapis.com/v1beta/models/"
    "{model}:predict"
)

API_KEY_HELP_URL = "https://aistudio.google.com/app/apikey"


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class SelfieConfig:
    """Resolved settings for one pipeline invocation.

    Attributes:
        api_key: Gemini API key, sent as the `key` query parameter.
        gateway_url: Base URL of the OpenClaw HTTP gateway.
        gateway_token: Optional bearer token for the gateway.
        image_model: Imagen model name interpolated into the predict URL.
        messaging_cli: Executable used by the command-line transport.
        request_timeout: Seconds passed to every `requests` call.
        temp_dir: Directory receiving materialized image files.
    """

    api_key: str | None = None
    gateway_url: str = DEFAULT_GATEWAY_URL
    gateway_token: str | None = None
    image_model: str = DEFAULT_IMAGE_MODEL
    messaging_cli: str = DEFAULT_MESSAGING_CLI
    request_timeout: float = DEFAULT_TIMEOUT_SECONDS
    temp_dir: str = field(default_factory=tempfile.gettempdir)

    @classmethod
    def from_env(cls, environ=None, load_env_file: bool = True) -> "SelfieConfig":
        """Build a config from the process environment (and `.env` when present).

        Args:
            environ: Mapping to read instead of `os.environ` (tests).
            load_env_file: Whether to call `load_dotenv()` first.
        """
        if environ is None:
            if load_env_file:
                load_dotenv()
            environ = os.environ

        timeout_raw = _clean(environ.get("ONO_SELFIE_TIMEOUT"))
        try:
            timeout = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT_SECONDS
        except ValueError:
            raise ConfigurationError(
                f"ONO_SELFIE_TIMEOUT must be a number of seconds, got {timeout_raw!r}"
            ) from None

        return cls(
            api_key=_clean(environ.get("GEMINI_API_KEY")),
            gateway_url=(_clean(environ.get("OPENCLAW_GATEWAY_URL")) or DEFAULT_GATEWAY_URL).rstrip("/"),
            gateway_token=_clean(environ.get("OPENCLAW_GATEWAY_TOKEN")),
            image_model=_clean(environ.get("GEMINI_IMAGE_MODEL")) or DEFAULT_IMAGE_MODEL,
            messaging_cli=_clean(environ.get("OPENCLAW_CLI")) or DEFAULT_MESSAGING_CLI,
            request_timeout=timeout,
            temp_dir=_clean(environ.get("ONO_SELFIE_TEMP_DIR")) or tempfile.gettempdir(),
        )

    @property
    def image_url(self) -> str:
        return IMAGE_URL_TEMPLATE.format(model=self.image_model)

    def validate(self) -> "SelfieConfig":
        """Raise `ConfigurationError` when the Gemini key is absent; return self."""
        if not self.api_key:
            raise ConfigurationError(
                "GEMINI_API_KEY environment variable not set. "
                f"Get your key from {API_KEY_HELP_URL}"
            )
        return self
