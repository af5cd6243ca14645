"""Generate-then-dispatch pipeline used by the CLI and HTTP adapters.

Control-flow model:
    1. Validate configuration (no network activity before this passes).
    2. Select the mode and build the prompt.
    3. Request and decode one image.
    4. Materialize it: temp file for file-path senders, data URL otherwise.
    5. Dispatch once through the chosen sender.

Each stage either completes and hands off or the whole call raises. The
dispatch step never starts before the image is fully decoded and, for file
transports, fully written.

Side effects:
    - One HTTP call to the image provider.
    - At most one temp file, returned to the caller on `PipelineResult.image`.
    - One gateway call (process or HTTP).
"""

import logging

from ono_selfie.core.config import SelfieConfig
from ono_selfie.core.errors import SelfieError
from ono_selfie.core.types import DispatchTarget, GenerationRequest, PipelineResult
from ono_selfie.dispatch.senders import ImageSender, build_sender
from ono_selfie.image.materializer import to_data_url, truncate_reference, write_temp_file
from ono_selfie.image.service import generate_image
from ono_selfie.prompting.prompt_builder import build_generation_prompt


logger = logging.getLogger(__name__)


def generate_and_send(
    request: GenerationRequest,
    target: DispatchTarget,
    config: SelfieConfig,
    sender: ImageSender | None = None,
    transport: str = "cli",
) -> PipelineResult:
    """Run the whole pipeline for one request.

    Args:
        request: Generation input.
        target: Channel and caption.
        config: Resolved settings; validated here before any I/O.
        sender: Pre-built sender. When omitted one is built for `transport`.
        transport: `cli` or `http`, used only when `sender` is `None`.

    Returns:
        `PipelineResult`; its `image` (if any) is owned by the caller.

    Raises:
        SelfieError subclasses, unchanged, from whichever stage failed.
    """
    config.validate()
    if sender is None:
        sender = build_sender(transport, config)

    mode, prompt = build_generation_prompt(request)
    logger.info("Mode: %s", mode)
    logger.info("Prompt: %s", prompt)

    image = None
    try:
        generated = generate_image(
            prompt,
            config,
            count=request.count,
            aspect_ratio=request.aspect_ratio,
            output_format=request.output_format,
        )

        if sender.requires_file:
            image = write_temp_file(generated, config.temp_dir)
            media = image.path
        else:
            media = to_data_url(generated)

        logger.info("Sending to channel: %s via %s", target.channel, sender.transport)
        dispatch = sender.send(target, media)
    except SelfieError as e:
        # Temp file (if any) is left on disk for inspection.
        logger.error("Generation or sending failed for channel %s: %s", target.channel, e)
        raise

    if image is None and dispatch.image is not None:
        image = dispatch.image

    logger.info("Done! Image sent to %s", target.channel)

    return PipelineResult(
        channel=target.channel,
        prompt=prompt,
        mode=mode,
        media=truncate_reference(dispatch.media),
        dispatch=dispatch,
        image=image,
    )
