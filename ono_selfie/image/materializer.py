"""Turn decoded image bytes into a reference the dispatcher can carry.

Two output forms:
    - data URL (`data:<mime>;base64,<payload>`) for transports that accept
      inline media (HTTP gateway).
    - temporary file for transports that need a path (messaging CLI).

Temp-file lifecycle:
    - Files are named `ono-selfie-<epoch millis>.<ext>` under the configured
      temp directory.
    - They are not removed automatically; the returned `MaterializedImage`
      carries `dispose()` for the caller.
    - Two runs in the same millisecond write the same name.
    - Directory or write failures raise `MaterializationError`.
"""

import base64
import binascii
import logging
import os
import re
import tempfile
import time

from ono_selfie.core.errors import DecodeError, MaterializationError
from ono_selfie.core.types import GeneratedImage, MaterializedImage


logger = logging.getLogger(__name__)

TEMP_FILE_PREFIX = "ono-selfie-"
DATA_URL_PATTERN = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<payload>.*)$", re.DOTALL)


def decode_base64(payload: str) -> bytes:
    """Strictly decode a base64 string, ignoring embedded whitespace."""
    if not payload:
        raise DecodeError("Empty base64 payload")
    if not isinstance(payload, str):
        raise DecodeError(
            f"Base64 payload must be a string, got {type(payload).__name__}"
        )
    compact = "".join(payload.split())
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as err:
        raise DecodeError("Invalid base64 image payload", sample=compact[:200]) from err


def to_data_url(image: GeneratedImage) -> str:
    return f"data:{image.mime_type};base64,{image.to_base64()}"


def is_data_url(media: str) -> bool:
    return isinstance(media, str) and media.startswith("data:")


def parse_data_url(url: str) -> GeneratedImage:
    """Decode a `data:` URL back into a `GeneratedImage`."""
    match = DATA_URL_PATTERN.match(url or "")
    if not match:
        raise DecodeError("Malformed data URL", sample=(url or "")[:50])
    return GeneratedImage(
        data=decode_base64(match.group("payload")),
        mime_type=match.group("mime"),
    )


def temp_file_path(extension: str, directory: str | None = None) -> str:
    directory = directory or tempfile.gettempdir()
    return os.path.join(directory, f"{TEMP_FILE_PREFIX}{int(time.time() * 1000)}.{extension}")


def write_temp_file(image: GeneratedImage, directory: str | None = None) -> MaterializedImage:
    """Write `image` to a timestamped file and return the owned handle."""
    path = temp_file_path(image.extension, directory)

    try:
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "wb") as f:
            f.write(image.data)
    except OSError as err:
        raise MaterializationError(
            f"Could not write generated image to {path}: {err.strerror or err}"
        ) from err

    logger.info("Saved generated image to temporary file: %s", path)
    return MaterializedImage(path=path, mime_type=image.mime_type)


def materialize(media, directory: str | None = None) -> MaterializedImage:
    """Decode-and-write just in time for file-path transports.

    Args:
        media: A `GeneratedImage` or a `data:` URL string.
        directory: Target directory (defaults to the system temp dir).
    """
    if isinstance(media, GeneratedImage):
        return write_temp_file(media, directory)
    if is_data_url(media):
        return write_temp_file(parse_data_url(media), directory)
    raise DecodeError("Only generated images or data URLs can be materialized")


def truncate_reference(reference: str, limit: int = 50) -> str:
    """Shorten a media reference for result echoes and log lines."""
    if reference is None:
        return ""
    if len(reference) <= limit:
        return reference
    return reference[:limit] + "..."
