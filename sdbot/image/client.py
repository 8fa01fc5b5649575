"""HTTP client for the Stable Diffusion txt2img endpoint.

Processing flow:
    1. Resolve `{host}/sdapi/v1/txt2img` from the runtime host.
    2. POST the request payload as JSON.
    3. Return the parsed `GenerationResponse` or raise on failure.

Base64 and files:
    - This module does not decode image payloads.
    - This module does not write files.

Retry behavior:
    No retry loop. Each call is attempted once; the timeout comes from
    `SD_REQUEST_TIMEOUT`.

Error handling strategy:
    - Connection/timeout failures -> `TransportError`
    - Non-200 status -> `StatusError` with the status code
    - Unparsable body -> `DecodeError`
    All carry the generic "host may be down" text as their user message.
"""

import logging

import requests

from sdbot.config import settings
from sdbot.core.errors import (
    GENERIC_SERVICE_FAILURE,
    DecodeError,
    StatusError,
    TransportError,
)
from sdbot.image.types import GenerationRequest, GenerationResponse

logger = logging.getLogger(__name__)


def txt2img_url(host: str) -> str:
    return host.rstrip("/") + settings.TXT2IMG_PATH


def send_txt2img_request(host: str, request: GenerationRequest) -> GenerationResponse:
    """Send one txt2img request and parse the reply.

    Args:
        host: Base URL of the generation service.
        request: Fully built generation request.

    Returns:
        Parsed `GenerationResponse`.
    """
    url = txt2img_url(host)
    payload = request.to_payload()

    if settings.debug_enabled():
        logger.debug("txt2img payload for %s: %r", url, payload)

    try:
        response = requests.post(
            url,
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=settings.request_timeout(),
        )
    except requests.exceptions.RequestException as e:
        raise TransportError(
            f"txt2img request to {url} failed: {e}",
            GENERIC_SERVICE_FAILURE,
        ) from e

    if response.status_code != 200:
        raise StatusError(
            response.status_code,
            f"txt2img request to {url} returned HTTP {response.status_code}",
            f"{GENERIC_SERVICE_FAILURE} (HTTP {response.status_code})",
        )

    try:
        data = response.json()
    except ValueError as e:
        raise DecodeError(
            f"txt2img response from {url} is not valid JSON: {e}",
            GENERIC_SERVICE_FAILURE,
        ) from e

    return GenerationResponse.from_json(data)
