"""Shared pytest fixtures for ono-selfie tests."""

import base64
import json
from pathlib import Path

import pytest

from ono_selfie.core.config import SelfieConfig


SAMPLE_IMAGE_BYTES = b"\xff\xd8\xff\xe0fake-jpeg-body\x00\x01\x02\xff\xd9"

ENV_VARS = (
    "GEMINI_API_KEY",
    "GEMINI_IMAGE_MODEL",
    "OPENCLAW_GATEWAY_URL",
    "OPENCLAW_GATEWAY_TOKEN",
    "OPENCLAW_CLI",
    "ONO_SELFIE_TIMEOUT",
    "ONO_SELFIE_TEMP_DIR",
)


class FakeResponse:
    """Minimal stand-in for `requests.Response`."""

    def __init__(self, status_code=200, payload=None, text=None, reason="OK"):
        self.status_code = status_code
        self._payload = payload
        if text is None:
            text = json.dumps(payload) if payload is not None else ""
        self.text = text
        self.reason = reason

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._payload is None:
            return json.loads(self.text)
        return self._payload


class RecordingPost:
    """Callable replacing `requests.post`; records calls and replays responses by URL."""

    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def __call__(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        for prefix, response in self.responses.items():
            if url.startswith(prefix):
                if isinstance(response, Exception):
                    raise response
                return response
        raise AssertionError(f"Unexpected POST to {url}")

    def calls_to(self, prefix):
        return [c for c in self.calls if c["url"].startswith(prefix)]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's real credentials out of every test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("ono_selfie.core.config.load_dotenv", lambda *a, **k: False)


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    target = tmp_path / "images"
    target.mkdir()
    return target


@pytest.fixture
def test_config(temp_dir: Path) -> SelfieConfig:
    return SelfieConfig(
        api_key="test-key",
        gateway_url="http://gateway.test:18789",
        gateway_token="gw-token",
        request_timeout=5.0,
        temp_dir=str(temp_dir),
    )


@pytest.fixture
def sample_image_bytes() -> bytes:
    return SAMPLE_IMAGE_BYTES


@pytest.fixture
def prediction_payload(sample_image_bytes) -> dict:
    return {
        "predictions": [
            {
                "bytesBase64Encoded": base64.b64encode(sample_image_bytes).decode("ascii"),
                "mimeType": "image/jpeg",
            }
        ]
    }


@pytest.fixture
def fake_post(monkeypatch):
    """Install a `RecordingPost` for the given URL-prefix -> response map."""

    def install(responses):
        recorder = RecordingPost(responses)
        monkeypatch.setattr("requests.post", recorder)
        return recorder

    return install


@pytest.fixture
def make_response():
    """Factory for `FakeResponse` objects."""
    return FakeResponse
