"""Tests for ono_selfie.api.http_api: FastAPI adapter."""

import pytest
from fastapi.testclient import TestClient

from ono_selfie.api import http_api
from ono_selfie.core.errors import DecodeError, MaterializationError
from ono_selfie.core.types import DispatchResult, PipelineResult


@pytest.fixture
def client():
    return TestClient(http_api.app)


@pytest.fixture
def fake_pipeline(monkeypatch):
    calls = []

    def fake_generate_and_send(request, target, config, transport="cli"):
        calls.append({"request": request, "target": target, "transport": transport})
        return PipelineResult(
            channel=target.channel,
            prompt="p",
            mode="direct",
            media="data:image/jpeg;base64,AAAA",
            dispatch=DispatchResult(transport=transport, channel=target.channel, media="data:..."),
        )

    monkeypatch.setattr(http_api, "generate_and_send", fake_generate_and_send)
    return calls


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestCreateSelfie:
    def test_success(self, monkeypatch, client, fake_pipeline):
        monkeypatch.setenv("GEMINI_API_KEY", "k")

        response = client.post("/v1/selfies", json={"context": "a cozy cafe", "channel": "#general"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["transport"] == "http"
        assert fake_pipeline[0]["target"].caption == "Generated with Google Gemini"

    def test_blank_context_is_400(self, client, fake_pipeline):
        response = client.post("/v1/selfies", json={"context": " ", "channel": "#general"})
        assert response.status_code == 400
        assert fake_pipeline == []

    def test_unknown_ratio_is_400(self, client, fake_pipeline):
        response = client.post(
            "/v1/selfies",
            json={"context": "x", "channel": "#general", "aspect_ratio": "2:1"},
        )
        assert response.status_code == 400

    def test_missing_key_is_500(self, client):
        response = client.post("/v1/selfies", json={"context": "x", "channel": "#general"})
        assert response.status_code == 500
        assert "GEMINI_API_KEY" in response.json()["error"]

    def test_upstream_failure_is_502(self, monkeypatch, client):
        monkeypatch.setenv("GEMINI_API_KEY", "k")

        def failing(*args, **kwargs):
            raise DecodeError("Failed to extract image from response")

        monkeypatch.setattr(http_api, "generate_and_send", failing)

        response = client.post("/v1/selfies", json={"context": "x", "channel": "#general"})
        assert response.status_code == 502

    def test_unwritable_temp_dir_is_500(self, monkeypatch, client):
        monkeypatch.setenv("GEMINI_API_KEY", "k")

        def failing(*args, **kwargs):
            raise MaterializationError("Could not write generated image to /x: Not a directory")

        monkeypatch.setattr(http_api, "generate_and_send", failing)

        response = client.post("/v1/selfies", json={"context": "x", "channel": "#general"})
        assert response.status_code == 500
        assert "Could not write" in response.json()["error"]
