"""Data contracts passed between pipeline stages.

Architectural role:
    Defines the transient values created and consumed during one
    `engine.generate_and_send` call. Nothing here persists across invocations.

Ownership:
    `MaterializedImage` is the only value tied to an OS resource (a temp file).
    It is handed back to the caller, who decides whether to call `dispose()`.
"""

import base64
import os
from dataclasses import dataclass, field

from ono_selfie.core.errors import InvalidRequestError


MODES = ("mirror", "direct")
ASPECT_RATIOS = ("1:1", "16:9", "4:3", "3:4", "9:16")
OUTPUT_FORMATS = ("jpeg", "png")
TRANSPORTS = ("cli", "http")

DEFAULT_CAPTION = "Generated with Google Gemini"


def mime_type_for(output_format: str) -> str:
    """Map an output format to the MIME type requested from the provider."""
    return "image/png" if output_format == "png" else "image/jpeg"


@dataclass(frozen=True)
class GenerationRequest:
    """Caller input for one generation.

    Attributes:
        user_context: Free text interpolated into the prompt template.
        mode: `mirror`, `direct` or `auto`.
        aspect_ratio: One of `ASPECT_RATIOS`.
        output_format: `jpeg` or `png`.
        count: Provider `sampleCount`; only the first prediction is used.
        raw_prompt: Send `user_context` unchanged instead of a template.
    """

    user_context: str
    mode: str = "auto"
    aspect_ratio: str = "1:1"
    output_format: str = "jpeg"
    count: int = 1
    raw_prompt: bool = False

    def __post_init__(self):
        if not self.user_context or not self.user_context.strip():
            raise InvalidRequestError("user context must not be empty")
        mode = (self.mode or "auto").strip().lower()
        if mode not in MODES + ("auto",):
            raise InvalidRequestError(
                f"Unknown mode {self.mode!r}; expected one of mirror, direct, auto"
            )
        object.__setattr__(self, "mode", mode)
        if self.aspect_ratio not in ASPECT_RATIOS:
            raise InvalidRequestError(
                f"Unsupported aspect ratio {self.aspect_ratio!r}; "
                f"expected one of {', '.join(ASPECT_RATIOS)}"
            )
        if self.output_format not in OUTPUT_FORMATS:
            raise InvalidRequestError(
                f"Unsupported output format {self.output_format!r}; expected jpeg or png"
            )
        if self.count < 1:
            raise InvalidRequestError("count must be at least 1")

    @property
    def mime_type(self) -> str:
        return mime_type_for(self.output_format)


@dataclass(frozen=True)
class DispatchTarget:
    """Destination conversation plus caption. `channel` is passed through opaquely."""

    channel: str
    caption: str = DEFAULT_CAPTION

    def __post_init__(self):
        if not self.channel or not self.channel.strip():
            raise InvalidRequestError("channel must not be empty")


@dataclass(frozen=True)
class GeneratedImage:
    """Decoded image bytes with their MIME type."""

    data: bytes = field(repr=False)
    mime_type: str = "image/jpeg"

    @property
    def extension(self) -> str:
        # image/jpeg -> jpeg, image/png -> png
        _, _, subtype = self.mime_type.partition("/")
        return subtype.split(";", 1)[0].split("+", 1)[0] or "jpeg"

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


@dataclass
class MaterializedImage:
    """A generated image written to disk, released by the caller."""

    path: str
    mime_type: str = "image/jpeg"
    disposed: bool = False

    def dispose(self) -> None:
        """Remove the file. Safe to call more than once."""
        if self.disposed:
            return
        if os.path.exists(self.path):
            os.remove(self.path)
        self.disposed = True


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of one successful gateway send.

    `image` is set when the sender had to write a data URL to disk itself.
    """

    transport: str
    channel: str
    media: str
    detail: str = ""
    image: MaterializedImage | None = None


@dataclass
class PipelineResult:
    """Structured result of `engine.generate_and_send`."""

    channel: str
    prompt: str
    mode: str
    media: str
    dispatch: DispatchResult
    image: MaterializedImage | None = None
    success: bool = True

    def dispose(self) -> None:
        if self.image is not None:
            self.image.dispose()

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "channel": self.channel,
            "prompt": self.prompt,
            "mode": self.mode,
            "media": self.media,
            "transport": self.dispatch.transport,
            "image_path": self.image.path if self.image is not None else None,
        }
