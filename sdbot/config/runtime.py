"""Mutable runtime generation settings.

Architectural role:
    `RuntimeConfig` is the single process-wide settings object. Adapters create
    one with `load_runtime_config()` and pass it explicitly to every command
    handler; the image pipeline reads it, admin commands mutate it.

Concurrency:
    Reads and writes happen on the same single-threaded command path, so no
    locking is used.

Validation:
    `apply_setting` parses and validates a raw chat value per field and either
    mutates the config or raises `ValidationError` leaving it untouched.
"""

import logging
import math
from dataclasses import dataclass, field

from sdbot.config import settings
from sdbot.core.errors import ValidationError

logger = logging.getLogger(__name__)


@dataclass
class RuntimeConfig:
    """Current generation defaults and policy lists."""

    host: str = settings.DEFAULT_SD_HOST
    steps: int = 20
    width: int = 512
    height: int = 512
    cfg_scale: float = 7.0
    sampler: str = "Euler a"
    negative_prompt: str = ""
    restore_faces: bool = False
    tiling: bool = False
    bad_words: list[str] = field(default_factory=list)
    bad_words_prompt: str = settings.DEFAULT_BAD_WORDS_PROMPT
    relay_url: str = settings.DEFAULT_RELAY_URL


def _env_positive_int(name: str, default: int) -> int:
    value = settings.env_int(name, default)
    if value <= 0:
        logger.warning("Ignoring non-positive %s=%r, using %s", name, value, default)
        return default
    return value


def _env_finite_float(name: str, default: float) -> float:
    value = settings.env_float(name, default)
    if not math.isfinite(value):
        logger.warning("Ignoring non-finite %s=%r, using %s", name, value, default)
        return default
    return value


def load_runtime_config() -> RuntimeConfig:
    """Build a `RuntimeConfig` from the environment (`.env` included)."""
    defaults = RuntimeConfig()
    sampler = settings.env_str("SD_SAMPLER", defaults.sampler)
    if sampler not in settings.SAMPLERS:
        logger.warning("Ignoring unknown SD_SAMPLER=%r, using %r", sampler, defaults.sampler)
        sampler = defaults.sampler

    config = RuntimeConfig(
        host=settings.env_str("SD_HOST", defaults.host).rstrip("/"),
        steps=_env_positive_int("SD_STEPS", defaults.steps),
        width=_env_positive_int("SD_WIDTH", defaults.width),
        height=_env_positive_int("SD_HEIGHT", defaults.height),
        cfg_scale=_env_finite_float("SD_CFG_SCALE", defaults.cfg_scale),
        sampler=sampler,
        negative_prompt=settings.env_str("SD_NEGATIVE_PROMPT", defaults.negative_prompt),
        restore_faces=settings.env_bool("SD_RESTORE_FACES", defaults.restore_faces),
        tiling=settings.env_bool("SD_TILING", defaults.tiling),
        bad_words=settings.env_list("SD_BAD_WORDS"),
        bad_words_prompt=settings.env_str("SD_BAD_WORDS_PROMPT", defaults.bad_words_prompt),
        relay_url=settings.env_str("SD_RELAY_URL", defaults.relay_url),
    )
    logger.info(
        "Loaded runtime config: host=%s steps=%s size=%sx%s sampler=%r bad_words=%d",
        config.host, config.steps, config.width, config.height,
        config.sampler, len(config.bad_words),
    )
    return config


def _parse_positive_int(raw_value: str) -> int:
    try:
        value = int(raw_value)
    except ValueError as e:
        raise ValidationError(str(e)) from e
    if value <= 0:
        raise ValidationError(f"Value must be a positive integer, got {value}")
    return value


def _parse_float(raw_value: str) -> float:
    try:
        value = float(raw_value)
    except ValueError as e:
        raise ValidationError(str(e)) from e
    if not math.isfinite(value):
        raise ValidationError(f"Value must be a finite number, got {raw_value}")
    return value


def _parse_sampler(raw_value: str) -> str:
    if raw_value not in settings.SAMPLERS:
        raise ValidationError("Invalid sampler, must be 'DDIM', 'Euler a' or 'Euler'")
    return raw_value


# chat field name -> (RuntimeConfig attribute, parser)
SETTABLE_FIELDS = {
    "steps": ("steps", _parse_positive_int),
    "width": ("width", _parse_positive_int),
    "height": ("height", _parse_positive_int),
    "cfg": ("cfg_scale", _parse_float),
    "sampler": ("sampler", _parse_sampler),
    "NegativePrompt": ("negative_prompt", str),
}


def apply_setting(config: RuntimeConfig, name: str, raw_value: str) -> str:
    """Validate `raw_value` for chat field `name` and store it on `config`.

    Args:
        config: Shared runtime config, mutated in place on success.
        name: Chat-facing field name (`steps`, `width`, `height`, `cfg`,
            `sampler` or `NegativePrompt`; case-sensitive).
        raw_value: Unparsed value text from the chat command.

    Returns:
        Confirmation text for the chat reply.

    Raises:
        ValidationError: unknown field or value rejected by the field parser.
            `config` is left unchanged.
    """
    if name not in SETTABLE_FIELDS:
        raise ValidationError(
            f"Unknown setting '{name}', must be one of: {', '.join(SETTABLE_FIELDS)}"
        )

    attribute, parser = SETTABLE_FIELDS[name]
    value = parser(raw_value)
    setattr(config, attribute, value)
    logger.info("Runtime setting %s changed to %r", attribute, value)

    # The raw text is echoed for cfg so "7.50" reads back the way it was typed.
    shown = raw_value if name == "cfg" else value
    return f"Updated sd {name} to: {shown}"


def describe(config: RuntimeConfig) -> str:
    """Render every config field as `Name: value` pairs on one line."""
    pairs = [
        ("Host", config.host),
        ("Steps", config.steps),
        ("Width", config.width),
        ("Height", config.height),
        ("CfgScale", config.cfg_scale),
        ("Sampler", config.sampler),
        ("NegativePrompt", config.negative_prompt),
        ("RestoreFaces", config.restore_faces),
        ("Tiling", config.tiling),
        ("BadWords", ", ".join(config.bad_words)),
        ("BadWordsPrompt", config.bad_words_prompt),
        ("RelayUrl", config.relay_url),
    ]
    return "{" + " ".join(f"{name}: {value}" for name, value in pairs) + "}"
