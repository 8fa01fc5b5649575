"""Relay uploader for generated images.

Processing flow:
    1. Open the local file.
    2. POST it as multipart form data (`file`, `expiry`, `url_len`) to the
       relay host.
    3. Return the response body text verbatim inside an `UploadResult`.

Response handling:
    The body is expected to be a sharable URL but is never parsed or
    validated; callers relay it as-is.

Error handling strategy:
    Failures are logged and reported through `UploadResult.ok`/`error` rather
    than raised, so the command handler decides how to phrase them. Whatever
    body text was received is kept even on failure.
"""

import logging
import os
from dataclasses import dataclass

import requests

from sdbot.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadResult:
    """Outcome of one relay upload."""

    ok: bool
    body: str = ""
    error: str | None = None
    status_code: int | None = None


def upload_file(path: str, url: str = settings.DEFAULT_RELAY_URL) -> UploadResult:
    """Upload `path` to the relay host at `url`.

    Args:
        path: Local file to publish.
        url: Relay endpoint.

    Returns:
        `UploadResult` with the verbatim body text. `ok` is False on transport
        errors, unreadable files and non-2xx responses.
    """
    data = {
        "expiry": str(settings.RELAY_EXPIRY_SECONDS),
        "url_len": str(settings.RELAY_URL_LENGTH),
    }

    try:
        f = open(path, "rb")
    except OSError as e:
        logger.error("Could not read %s for relay upload: %s", path, e)
        return UploadResult(ok=False, error=f"Could not read {os.path.basename(path)}")

    with f:
        files = {"file": (os.path.basename(path), f, "image/png")}
        try:
            response = requests.post(
                url,
                files=files,
                data=data,
                timeout=settings.upload_timeout(),
            )
        except requests.exceptions.RequestException as e:
            logger.error("Relay upload of %s to %s failed: %s", path, url, e)
            return UploadResult(ok=False, error=str(e))

    body = response.text
    logger.info("Relay upload of %s returned HTTP %s: %s", path, response.status_code, body.strip())

    if not response.ok:
        return UploadResult(
            ok=False,
            body=body,
            error=f"Relay host returned HTTP {response.status_code}",
            status_code=response.status_code,
        )

    return UploadResult(ok=True, body=body, status_code=response.status_code)
