"""Prompt assembly for the two selfie framings.

This module only builds prompt strings. Mode detection lives in
`mode_selector`; the provider call lives in `ono_selfie.image`.

Prompt safety model:
    - User context is interpolated verbatim into a fixed template.
    - No escaping or sanitization is applied here; the image provider's own
      content moderation is the only filter.
"""

from ono_selfie.core.errors import InvalidRequestError
from ono_selfie.core.types import GenerationRequest
from ono_selfie.prompting.mode_selector import select_mode


# =========================================================
# TEMPLATES
# =========================================================

MIRROR_TEMPLATE = (
    "make a pic of this person, but {context}. "
    "the person is taking a mirror selfie"
)

DIRECT_TEMPLATE = (
    "a close-up selfie taken by herself at {context}, "
    "direct eye contact with the camera, "
    "looking straight into the lens, "
    "eyes centered and clearly visible, "
    "not a mirror selfie, "
    "phone held at arm's length, "
    "face fully visible"
)

TEMPLATES = {
    "mirror": MIRROR_TEMPLATE,
    "direct": DIRECT_TEMPLATE,
}

RAW_MODE = "raw"


def build_prompt(mode: str, user_context: str) -> str:
    """Interpolate `user_context` into the template for `mode`.

    Raises:
        InvalidRequestError: when `mode` is not `mirror` or `direct`.
    """
    template = TEMPLATES.get(mode)
    if template is None:
        raise InvalidRequestError(f"No prompt template for mode {mode!r}")
    return template.format(context=user_context)


def build_generation_prompt(request: GenerationRequest) -> tuple[str, str]:
    """Resolve the mode for `request` and return `(mode, prompt)`.

    With `raw_prompt` set the caller's text is sent unchanged and the mode is
    reported as `raw`.
    """
    if request.raw_prompt:
        return RAW_MODE, request.user_context

    mode = select_mode(request.user_context, request.mode)
    return mode, build_prompt(mode, request.user_context)
