"""Keyword-based selfie mode selection.

Classification model:
    - Rule-based only (case-insensitive substring matching).
    - Mirror keywords are evaluated before direct keywords, so text matching
      both sets resolves to `mirror`.
    - Text matching neither set defaults to `mirror`.

Determinism:
    Pure function of its input; no I/O and no global state mutation.

Bypass considerations:
    Substring matching also fires inside longer words ("suitcase" contains
    "suit", "citybound" contains "city").
"""

from ono_selfie.core.errors import InvalidRequestError
from ono_selfie.core.types import MODES


MIRROR_KEYWORDS = [
    "outfit",
    "wearing",
    "clothes",
    "dress",
    "suit",
    "fashion",
    "full-body",
    "mirror",
    "reflection",
]

DIRECT_KEYWORDS = [
    "cafe",
    "restaurant",
    "beach",
    "park",
    "city",
    "close-up",
    "portrait",
    "face",
    "eyes",
    "smile",
]

DEFAULT_MODE = "mirror"


def detect_mode(user_context: str) -> str:
    """Classify free text into `mirror` or `direct`.

    Evaluation order:
        1. Any mirror keyword -> `mirror`.
        2. Any direct keyword -> `direct`.
        3. Otherwise `mirror`.
    """
    if not user_context:
        return DEFAULT_MODE

    text = user_context.lower()

    if any(k in text for k in MIRROR_KEYWORDS):
        return "mirror"

    if any(k in text for k in DIRECT_KEYWORDS):
        return "direct"

    return DEFAULT_MODE


def select_mode(user_context: str, mode: str | None = "auto") -> str:
    """Return the explicit mode when given, otherwise auto-detect it.

    Args:
        user_context: Caller text used for detection.
        mode: `mirror`, `direct`, `auto` or `None` (treated as `auto`).

    Raises:
        InvalidRequestError: for any other mode string.
    """
    requested = (mode or "auto").strip().lower()

    if requested in MODES:
        return requested

    if requested == "auto":
        return detect_mode(user_context)

    raise InvalidRequestError(
        f"Unknown mode {mode!r}; expected one of mirror, direct, auto"
    )
