"""Plain HTTP download helper.

Streams a GET response body into a local file. Not used by the generation
pipeline itself; kept as a reusable primitive next to the uploader.
"""

import logging

import requests

from sdbot.config import settings
from sdbot.core.errors import StatusError, StorageError, TransportError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def download_file(url: str, path: str) -> None:
    """Download `url` into `path`.

    Raises:
        TransportError: the request could not be completed.
        StatusError: the server answered with anything but 200.
        StorageError: `path` could not be created or written.
    """
    try:
        with requests.get(url, stream=True, timeout=settings.download_timeout()) as response:
            if response.status_code != 200:
                raise StatusError(
                    response.status_code,
                    f"Received non 200 response code {response.status_code} from {url}",
                )

            try:
                with open(path, "wb") as f:
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
            except requests.exceptions.RequestException:
                raise
            except OSError as e:
                raise StorageError(f"Could not write {path}: {e}") from e
    except requests.exceptions.RequestException as e:
        raise TransportError(f"Download of {url} failed: {e}") from e

    logger.info("Downloaded %s to %s", url, path)
