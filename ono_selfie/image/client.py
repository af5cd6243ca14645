"""Gemini Imagen HTTP client.

Processing flow:
    1. Validate that an API key is configured.
    2. Submit the JSON payload to the model's `:predict` endpoint, key passed
       as the `key` query parameter.
    3. Return parsed JSON or raise on non-200 status.

Base64 and temporary files:
    - This module does not decode Base64 content.
    - This module does not create or manage temporary files.

Retry behavior:
    None. Exactly one POST per call, bounded by `config.request_timeout`.

Security considerations:
    - The request URL carries the API key and is never logged.
    - Exceptions may include upstream provider response bodies.
"""

import logging

import requests

from ono_selfie.core.config import SelfieConfig
from ono_selfie.core.errors import UpstreamRequestError
from ono_selfie.core.types import mime_type_for


logger = logging.getLogger(__name__)


def build_payload(
    prompt: str,
    count: int = 1,
    aspect_ratio: str = "1:1",
    output_format: str = "jpeg",
) -> dict:
    """Build the Imagen predict request body."""
    return {
        "instances": [
            {
                "prompt": prompt,
            },
        ],
        "parameters": {
            "sampleCount": count,
            "aspectRatio": aspect_ratio,
            "outputOptions": {
                "mimeType": mime_type_for(output_format),
            },
        },
    }


def send_image_request(payload: dict, config: SelfieConfig) -> dict:
    """Send one image-generation request to Gemini.

    Args:
        payload: Body produced by `build_payload`.
        config: Resolved settings; must carry an API key.

    Returns:
        Parsed JSON response.

    Error handling:
        - Missing API key -> `ConfigurationError` (no request is issued)
        - Connection/timeout failures -> `UpstreamRequestError`
        - Non-200 HTTP response -> `UpstreamRequestError` with status and body
        - Non-JSON body -> `UpstreamRequestError`
    """
    config.validate()

    logger.info("Calling Gemini API (%s)...", config.image_model)

    try:
        response = requests.post(
            config.image_url,
            params={"key": config.api_key},
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=config.request_timeout,
        )
    except requests.exceptions.RequestException as err:
        raise UpstreamRequestError(
            f"Image generation request failed: {err.__class__.__name__}"
        ) from err

    if response.status_code != 200:
        raise UpstreamRequestError(
            f"Image generation failed: {response.status_code} {response.reason} - {response.text}",
            status_code=response.status_code,
            body=response.text,
        )

    try:
        return response.json()
    except ValueError as err:
        raise UpstreamRequestError(
            "Image generation returned a non-JSON response",
            status_code=response.status_code,
            body=response.text,
        ) from err
