"""OpenClaw gateway senders.

Architectural role:
    Delivers one image reference plus caption to a messaging channel. Two
    interchangeable variants implement `ImageSender`; the caller picks one at
    construction time and the choice never changes mid-call.

Transports:
    - `CliImageSender`: runs the `openclaw` executable with an argument list
      (no shell). Needs a file path, so data URLs are written to disk first.
    - `HttpImageSender`: POSTs JSON to `<gateway>/message`. Sends the media
      reference (data URL, path or remote URL) unchanged.

Retry behavior:
    None. No fallback between transports.

Failure handling:
    Non-zero exit status or non-2xx HTTP status -> `DispatchError` carrying
    whatever diagnostic text the transport returned.
"""

import logging
import subprocess
from typing import Protocol

import requests

from ono_selfie.core.config import DEFAULT_MESSAGING_CLI, DEFAULT_TIMEOUT_SECONDS, SelfieConfig
from ono_selfie.core.errors import DispatchError, InvalidRequestError
from ono_selfie.core.types import DispatchResult, DispatchTarget
from ono_selfie.image.materializer import is_data_url, materialize


logger = logging.getLogger(__name__)


class ImageSender(Protocol):
    """Minimal interface required by `engine.generate_and_send`."""

    transport: str
    requires_file: bool

    def send(self, target: DispatchTarget, media: str) -> DispatchResult:
        """Deliver `media` with `target.caption` to `target.channel`."""
        ...


# =========================================================
# COMMAND-LINE TRANSPORT
# =========================================================

class CliImageSender:
    """Send through `openclaw message send ...`."""

    transport = "cli"
    requires_file = True

    def __init__(self, executable: str = DEFAULT_MESSAGING_CLI, temp_dir: str | None = None):
        self.executable = executable
        self.temp_dir = temp_dir

    def build_command(self, target: DispatchTarget, media_path: str) -> list[str]:
        return [
            self.executable,
            "message",
            "send",
            "--action", "send",
            "--channel", target.channel,
            "--message", target.caption,
            "--media", media_path,
        ]

    def send(self, target: DispatchTarget, media: str) -> DispatchResult:
        """Run the messaging CLI once.

        Data URLs are decoded and written to a temp file before the process
        starts; the handle is returned on the result for the caller to release.
        """
        written = None
        media_path = media
        if is_data_url(media):
            written = materialize(media, self.temp_dir)
            media_path = written.path

        command = self.build_command(target, media_path)

        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as err:
            raise DispatchError(
                f"OpenClaw send failed: could not run {self.executable!r}",
                detail=str(err),
            ) from err

        if completed.returncode != 0:
            detail = (completed.stderr or completed.stdout or "").strip()
            raise DispatchError(
                f"OpenClaw send failed (exit {completed.returncode}): {detail}",
                detail=detail,
            )

        return DispatchResult(
            transport=self.transport,
            channel=target.channel,
            media=media_path,
            detail=(completed.stdout or "").strip(),
            image=written,
        )


# =========================================================
# HTTP TRANSPORT
# =========================================================

class HttpImageSender:
    """Send through the gateway's `/message` endpoint."""

    transport = "http"
    requires_file = False

    def __init__(self, gateway_url: str, token: str | None = None, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        self.gateway_url = gateway_url.rstrip("/")
        self.token = token
        self.timeout = timeout

    @property
    def endpoint(self) -> str:
        return f"{self.gateway_url}/message"

    def build_headers(self) -> dict:
        headers = {
            "Content-Type": "application/json",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def send(self, target: DispatchTarget, media: str) -> DispatchResult:
        body = {
            "action": "send",
            "channel": target.channel,
            "message": target.caption,
            "media": media,
        }

        try:
            response = requests.post(
                self.endpoint,
                json=body,
                headers=self.build_headers(),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as err:
            raise DispatchError(
                f"OpenClaw send failed: {err.__class__.__name__}",
                detail=str(err),
            ) from err

        if not response.ok:
            raise DispatchError(
                f"OpenClaw send failed: {response.status_code} {response.text}",
                detail=response.text,
            )

        return DispatchResult(
            transport=self.transport,
            channel=target.channel,
            media=media,
            detail=response.text,
        )


def build_sender(transport: str, config: SelfieConfig) -> ImageSender:
    """Construct the sender for `transport` (`cli` or `http`)."""
    if transport == "cli":
        return CliImageSender(executable=config.messaging_cli, temp_dir=config.temp_dir)
    if transport == "http":
        return HttpImageSender(
            config.gateway_url,
            token=config.gateway_token,
            timeout=config.request_timeout,
        )
    raise InvalidRequestError(f"Unknown transport {transport!r}; expected cli or http")
