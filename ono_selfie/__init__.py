"""Ono Selfie - generate selfies with Google Gemini and send them via OpenClaw."""

__version__ = "0.1.0"

from ono_selfie.core.config import SelfieConfig
from ono_selfie.core.engine import generate_and_send
from ono_selfie.core.types import DispatchTarget, GenerationRequest

__all__ = [
    "DispatchTarget",
    "GenerationRequest",
    "SelfieConfig",
    "generate_and_send",
]
