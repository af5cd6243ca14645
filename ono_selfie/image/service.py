"""Image generation service used by the pipeline engine.

Role in pipeline:
    - Builds the provider payload from prompt and generation parameters.
    - Sends it through `client.send_image_request`.
    - Extracts and decodes the first prediction into a `GeneratedImage`.

Multimodal/Base64/temp-file scope:
    - Base64 decoding happens here (via `materializer.decode_base64`).
    - No temporary files are written; that is `materializer.write_temp_file`.

Error handling strategy:
    - Empty/missing `predictions` -> `UpstreamRequestError`.
    - Non-list `predictions` -> `UpstreamRequestError`.
    - Missing/empty/non-string `bytesBase64Encoded` -> `DecodeError`; both
      messages carry a truncated sample of the raw response.
"""

import json
import logging

from ono_selfie.core.config import SelfieConfig
from ono_selfie.core.errors import DecodeError, UpstreamRequestError
from ono_selfie.core.types import GeneratedImage, mime_type_for
from ono_selfie.image.client import build_payload, send_image_request
from ono_selfie.image.materializer import decode_base64


logger = logging.getLogger(__name__)

RESPONSE_SAMPLE_CHARS = 200


def _response_sample(data) -> str:
    try:
        text = json.dumps(data)
    except (TypeError, ValueError):
        text = repr(data)
    return text[:RESPONSE_SAMPLE_CHARS]


def extract_image(data: dict, output_format: str = "jpeg") -> GeneratedImage:
    """Decode the first prediction of an Imagen response.

    Args:
        data: Parsed JSON response.
        output_format: Requested format, used when the prediction omits `mimeType`.
    """
    predictions = data.get("predictions") if isinstance(data, dict) else None
    if not predictions or not isinstance(predictions, list):
        sample = _response_sample(data)
        raise UpstreamRequestError(
            f"No predictions returned from Gemini API. Response sample: {sample}...",
            body=sample,
        )

    first = predictions[0] if isinstance(predictions[0], dict) else {}
    payload = first.get("bytesBase64Encoded")
    if not payload or not isinstance(payload, str):
        sample = _response_sample(data)
        raise DecodeError(
            f"Failed to extract image from response. Response sample: {sample}...",
            sample=sample,
        )

    mime_type = first.get("mimeType")
    if not isinstance(mime_type, str) or not mime_type:
        mime_type = mime_type_for(output_format)
    return GeneratedImage(data=decode_base64(payload), mime_type=mime_type)


def generate_image(
    prompt: str,
    config: SelfieConfig,
    count: int = 1,
    aspect_ratio: str = "1:1",
    output_format: str = "jpeg",
) -> GeneratedImage:
    """Generate one image for `prompt` and return its decoded bytes."""
    payload = build_payload(
        prompt,
        count=count,
        aspect_ratio=aspect_ratio,
        output_format=output_format,
    )
    data = send_image_request(payload, config)
    image = extract_image(data, output_format=output_format)
    logger.info("Image generated successfully (%d bytes, %s).", len(image.data), image.mime_type)
    return image
