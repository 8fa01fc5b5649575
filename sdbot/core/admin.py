"""Admin command handling for `sd vars` and `sd set <field> <value>`.

Input is the message with the trigger word already removed. Replies are
returned as a list of lines; validation failures raise `ValidationError`
for the dispatcher to report.
"""

from sdbot.config.runtime import SETTABLE_FIELDS, RuntimeConfig, apply_setting, describe
from sdbot.core.errors import ValidationError

ADMIN_COMMANDS = ("vars", "set")

SET_USAGE = "Usage: sd set <field> <value> (fields: " + ", ".join(SETTABLE_FIELDS) + ")"


def is_admin_command(message: str) -> bool:
    parts = message.strip().split(" ", 1)
    return parts[0] in ADMIN_COMMANDS


def handle_admin_command(message: str, config: RuntimeConfig) -> list[str]:
    """Run one admin command against `config` and return the reply lines."""
    message = message.strip()
    command, _, rest = message.partition(" ")

    if command == "vars":
        return ["Stable Diffusion Vars: ", describe(config)]

    if command == "set":
        name, _, raw_value = rest.strip().partition(" ")
        if not name or not raw_value.strip():
            raise ValidationError(SET_USAGE)
        return [apply_setting(config, name, raw_value.strip())]

    raise ValidationError(f"Unknown admin command '{command}'")
