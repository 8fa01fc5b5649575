"""Process settings for sdbot.

Architectural role:
    Centralizes environment-driven defaults for the generation service, the
    relay host and the chat trigger. `config.runtime.load_runtime_config` turns
    these into the mutable per-process `RuntimeConfig`.

Resolution:
    `.env` is loaded once at import time via `load_dotenv()`; module constants
    hold static endpoints, while `env_*` helpers read variables at call time so
    a fresh `RuntimeConfig` reflects the current environment.

Failure behavior:
    Unparsable numeric/boolean variables fall back to their defaults with a
    warning instead of aborting startup.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# Generation service (AUTOMATIC1111-compatible sdapi).
DEFAULT_SD_HOST = "http://127.0.0.1:7860"
TXT2IMG_PATH = "/sdapi/v1/txt2img"

# Relay host used to publish generated files.
DEFAULT_RELAY_URL = "https://filehole.org/"
RELAY_EXPIRY_SECONDS = 432000
RELAY_URL_LENGTH = 5

DEFAULT_TRIGGER = "sd"
DEFAULT_BAD_WORDS_PROMPT = "a cute kitten sitting in a basket of flowers"

# Accepted values for `sd set sampler ...`.
SAMPLERS = ("DDIM", "Euler a", "Euler")

TRUE_VALUES = ("1", "true", "yes", "on")


def env_str(name: str, default: str = "") -> str:
    value = os.getenv(name)
    if value is None:
        return default
    return value


def env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("Ignoring invalid integer %s=%r, using %s", name, value, default)
        return default


def env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("Ignoring invalid number %s=%r, using %s", name, value, default)
        return default


def env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in TRUE_VALUES


def env_list(name: str) -> list[str]:
    """Split a comma-separated variable, dropping blank items."""
    value = os.getenv(name, "")
    return [item.strip() for item in value.split(",") if item.strip()]


def env_timeout(name: str, default: float | None) -> float | None:
    """Read a timeout in seconds; `0` or a negative value disables it."""
    value = env_float(name, default if default is not None else 0.0)
    if value <= 0:
        return None
    return value


def trigger_word() -> str:
    return env_str("SD_TRIGGER", DEFAULT_TRIGGER).strip() or DEFAULT_TRIGGER


def request_timeout() -> float | None:
    return env_timeout("SD_REQUEST_TIMEOUT", 300.0)


def upload_timeout() -> float | None:
    return env_timeout("SD_UPLOAD_TIMEOUT", 120.0)


def download_timeout() -> float | None:
    return env_timeout("SD_DOWNLOAD_TIMEOUT", 120.0)


def output_dir() -> str:
    """Directory generated images are written to (cwd unless overridden)."""
    return env_str("SD_OUTPUT_DIR").strip() or os.getcwd()


def debug_enabled() -> bool:
    # Payload debug logging is opt-in.
    return env_str("DEBUG") == "true"


def configure_logging() -> None:
    """Basic root logging setup for the entrypoints, honoring `LOG_LEVEL`."""
    level = env_str("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
