"""
HTTP adapter exposing the selfie pipeline.

Endpoint responsibilities:
- `GET /health`: liveness check.
- `POST /v1/selfies`: validate input, run `engine.generate_and_send`, return
  the structured result.

Input validation behavior:
- Blank `context` or `channel` -> HTTP 400.
- Unknown mode / ratio / format / transport -> HTTP 400.

Error handling strategy:
- `ConfigurationError` -> HTTP 500 (server is missing its API key).
- `MaterializationError` -> HTTP 500 (temp directory is not writable).
- Upstream, decode and dispatch failures -> HTTP 502 with the error message.
- Anything else follows FastAPI default exception handling.

Side effects:
- Configuration is read from the environment on every request.
- Temp files written for the CLI transport are left on disk unless
  `cleanup` is set.
"""

import logging

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ono_selfie.core.config import SelfieConfig
from ono_selfie.core.engine import generate_and_send
from ono_selfie.core.errors import (
    ConfigurationError,
    InvalidRequestError,
    MaterializationError,
    SelfieError,
)
from ono_selfie.core.types import DEFAULT_CAPTION, DispatchTarget, GenerationRequest


logger = logging.getLogger(__name__)

app = FastAPI(title="ono-selfie")


class SelfieRequest(BaseModel):
    """Request body for `POST /v1/selfies`."""

    context: str
    channel: str
    mode: str = "auto"
    caption: str = DEFAULT_CAPTION
    aspect_ratio: str = "1:1"
    output_format: str = "jpeg"
    transport: str = "http"
    raw_prompt: bool = False
    cleanup: bool = False


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/v1/selfies")
def create_selfie(body: SelfieRequest):
    """Generate one image and send it to `body.channel`."""
    if not body.context.strip():
        return _error(400, "No context provided")
    if not body.channel.strip():
        return _error(400, "No channel provided")

    try:
        config = SelfieConfig.from_env()
        request = GenerationRequest(
            user_context=body.context,
            mode=body.mode,
            aspect_ratio=body.aspect_ratio,
            output_format=body.output_format,
            raw_prompt=body.raw_prompt,
        )
        target = DispatchTarget(channel=body.channel, caption=body.caption)
        result = generate_and_send(request, target, config, transport=body.transport)
    except InvalidRequestError as e:
        return _error(400, str(e))
    except (ConfigurationError, MaterializationError) as e:
        logger.error("Selfie request rejected: %s", e)
        return _error(500, str(e))
    except SelfieError as e:
        return _error(502, str(e))

    if body.cleanup:
        result.dispose()

    return result.to_dict()
