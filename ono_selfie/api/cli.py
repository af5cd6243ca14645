"""
Command-line entrypoint: generate a selfie and send it to a channel.

Usage:
    ono-selfie <user_context> <channel> [mode] [caption]

Examples:
    ono-selfie 'wearing a cowboy hat' '#general' mirror
    ono-selfie 'a cozy cafe' '#general' direct
    ono-selfie 'A cyberpunk city' '#art' --raw-prompt --aspect-ratio 16:9

Request lifecycle:
1. Parse arguments (invalid/missing arguments exit 1).
2. Build `SelfieConfig` from the environment and validate it before any
   network activity.
3. Run `engine.generate_and_send`.
4. Print the result as JSON; optionally dispose the temp file.

Exit codes:
- 0 on success.
- 1 on argument validation failure, missing API key, or any pipeline error.
"""

import argparse
import json
import logging
import sys

from ono_selfie.core.config import SelfieConfig
from ono_selfie.core.engine import generate_and_send
from ono_selfie.core.errors import SelfieError
from ono_selfie.core.types import (
    ASPECT_RATIOS,
    DEFAULT_CAPTION,
    OUTPUT_FORMATS,
    TRANSPORTS,
    DispatchTarget,
    GenerationRequest,
)


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
EXIT_FAILURE = 1


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="ono-selfie",
        description="Generate a selfie with Google Gemini (Imagen) and send it via OpenClaw.",
    )
    parser.add_argument("user_context", help="Scene or outfit description interpolated into the prompt")
    parser.add_argument("channel", help="Target channel, e.g. #general or @user")
    parser.add_argument(
        "mode",
        nargs="?",
        default="auto",
        type=str.lower,
        choices=("mirror", "direct", "auto"),
        help="Prompt framing (default: auto)",
    )
    parser.add_argument(
        "caption",
        nargs="?",
        default=DEFAULT_CAPTION,
        help=f"Message caption (default: '{DEFAULT_CAPTION}')",
    )
    parser.add_argument("--aspect-ratio", default="1:1", choices=ASPECT_RATIOS)
    parser.add_argument("--output-format", default="jpeg", choices=OUTPUT_FORMATS)
    parser.add_argument(
        "--transport",
        default="cli",
        choices=TRANSPORTS,
        help="Deliver through the openclaw CLI or the HTTP gateway (default: cli)",
    )
    parser.add_argument(
        "--raw-prompt",
        action="store_true",
        help="Send user_context to the image API unchanged (no selfie template)",
    )
    parser.add_argument(
        "--cleanup",
        action="store_true",
        help="Delete the temporary image file after a successful send",
    )
    parser.add_argument("--log-level", default="INFO", type=str.upper, choices=LOG_LEVELS)
    return parser


def configure_logging(level_name: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="[%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv=None) -> int:
    """Run one generate-and-send invocation and return the exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if not args.user_context.strip() or not args.channel.strip():
        parser.error("user_context and channel must not be empty")

    try:
        config = SelfieConfig.from_env().validate()
        request = GenerationRequest(
            user_context=args.user_context,
            mode=args.mode,
            aspect_ratio=args.aspect_ratio,
            output_format=args.output_format,
            raw_prompt=args.raw_prompt,
        )
        target = DispatchTarget(channel=args.channel, caption=args.caption)
        result = generate_and_send(request, target, config, transport=args.transport)
    except SelfieError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if args.cleanup:
        result.dispose()

    print(json.dumps(result.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
