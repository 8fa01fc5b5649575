"""Image generation pipeline used by `sd <prompt>` commands.

Role in pipeline:
    notify -> content filter -> slug -> build request -> txt2img call ->
    base64 decode -> write `{slug}_{digits}.png`.

Error handling strategy:
    Every failure raises an `SdBotError` subclass and ends the request. Nothing
    is retried. No file is written unless the image decoded cleanly.

Side effects:
    One outbound HTTP call, one optional notification, one file write. Files
    are left on disk for the relay uploader and never cleaned up here.

Determinism:
    Request assembly is deterministic for a fixed prompt and config; the
    filename suffix is random and collisions are accepted.
"""

import base64
import binascii
import logging
import os
import random
from typing import Callable

from sdbot.config import settings
from sdbot.config.runtime import RuntimeConfig
from sdbot.core.errors import DecodeError, StorageError
from sdbot.image.client import send_txt2img_request
from sdbot.image.types import GeneratedImage, GenerationRequest
from sdbot.safety.filter import is_blocked
from sdbot.text.slug import sanitize

logger = logging.getLogger(__name__)

MAX_SUFFIX = 9999


def resolve_prompt(prompt: str, config: RuntimeConfig) -> str:
    """Return the prompt to send, substituting it when a bad word matches."""
    if is_blocked(prompt, config.bad_words):
        logger.info("Prompt matched the bad-word list, substituting configured prompt")
        return config.bad_words_prompt
    return prompt


def output_filename(slug: str) -> str:
    return f"{slug}_{random.randint(0, MAX_SUFFIX)}.png"


def decode_image(payload: str) -> bytes:
    # line-wrapped base64 is accepted, anything else outside the alphabet is not
    payload = payload.replace("\r", "").replace("\n", "")
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Could not decode image payload: {e}") from e


def write_image(path: str, data: bytes) -> None:
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise StorageError(f"Could not write {path}: {e}") from e


def generate_image(
    prompt: str,
    config: RuntimeConfig,
    notify: Callable[[str], None] | None = None,
    output_dir: str | None = None,
) -> GeneratedImage:
    """Generate one image for `prompt` and save it locally.

    Args:
        prompt: Raw prompt text from the chat command.
        config: Runtime settings to build the request from.
        notify: Optional callback receiving the "processing" notice.
        output_dir: Target directory, defaults to `settings.output_dir()`.

    Returns:
        `GeneratedImage` with the absolute path of the written PNG.

    Raises:
        TransportError, StatusError, DecodeError: generation call failed.
        StorageError: the decoded image could not be written.
    """
    if notify is not None:
        notify(f"Processing Stable Diffusion: {prompt}...")

    prompt = resolve_prompt(prompt, config)
    slug = sanitize(prompt)

    request = GenerationRequest.from_config(prompt, config)
    logger.info(
        "Requesting txt2img from %s (steps=%s size=%sx%s sampler=%r)",
        config.host, request.steps, request.width, request.height, request.sampler_index,
    )
    response = send_txt2img_request(config.host, request)

    image_bytes = decode_image(response.first_image())

    directory = output_dir or settings.output_dir()
    path = os.path.abspath(os.path.join(directory, output_filename(slug)))
    write_image(path, image_bytes)
    logger.info("Saved generated image to %s (%d bytes)", path, len(image_bytes))

    return GeneratedImage(path=path, prompt=prompt, slug=slug)
