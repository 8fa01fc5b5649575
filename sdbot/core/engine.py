"""Command dispatch for chat messages.

Architectural role:
    Entry point used by the CLI and HTTP adapters (and any chat-protocol glue)
    to turn one inbound message into zero or more reply lines.

Control-flow model:
    1. Ignore messages that do not start with the trigger word.
    2. Route `vars` / `set ...` to the admin handler.
    3. Otherwise treat the remainder as a prompt: generate, save, relay upload,
       reply with the relay body addressed to the sender.

Error handling strategy:
    Every `SdBotError` ends the command: it is logged and its user message is
    replied. Unexpected exceptions are logged with traceback and answered with
    a generic line. Nothing propagates to the caller.

Side effects:
    Replies are delivered through the `reply` callback in order; the
    "processing" notice always precedes the result line.
"""

import logging
from typing import Callable

from sdbot.config import settings
from sdbot.config.runtime import RuntimeConfig
from sdbot.core.admin import handle_admin_command, is_admin_command
from sdbot.core.errors import SdBotError
from sdbot.image.service import generate_image
from sdbot.relay.uploader import upload_file

logger = logging.getLogger(__name__)

Reply = Callable[[str], None]

UNEXPECTED_FAILURE = "Something went wrong while handling that command."


def _strip_trigger(message: str, trigger: str) -> str | None:
    """Return the text after the trigger word, or `None` when absent."""
    text = message.strip()
    if text == trigger:
        return ""
    if text.startswith(trigger + " "):
        return text[len(trigger) + 1:].strip()
    return None


def _address(sender: str, text: str) -> str:
    return f"{sender}: {text}" if sender else text


def handle_generate(prompt: str, config: RuntimeConfig, reply: Reply, sender: str = "") -> None:
    """Generate an image for `prompt`, relay it and reply with the link."""
    image = generate_image(prompt, config, notify=reply)

    result = upload_file(image.path, config.relay_url)
    body = result.body.strip()
    if not result.ok:
        logger.warning("Relay upload failed for %s: %s", image.path, result.error)
        message = f"Upload failed ({result.error})"
        if body:
            message += f": {body}"
        reply(_address(sender, message))
        return

    reply(_address(sender, body))


def process_message(
    message: str,
    config: RuntimeConfig,
    reply: Reply,
    sender: str = "",
    trigger: str | None = None,
) -> bool:
    """Handle one chat message.

    Args:
        message: Raw inbound text.
        config: Shared runtime config (read and possibly mutated).
        reply: Callback delivering one outbound line.
        sender: Nick/name of the requester, used to address the result.
        trigger: Command word, defaults to `SD_TRIGGER`.

    Returns:
        True when the message was an `sd` command (whatever its outcome),
        False when it was ignored.
    """
    trigger = trigger or settings.trigger_word()
    command = _strip_trigger(message or "", trigger)
    if command is None:
        return False

    if not command:
        reply(f"Usage: {trigger} <prompt> | {trigger} vars | {trigger} set <field> <value>")
        return True

    try:
        if is_admin_command(command):
            for line in handle_admin_command(command, config):
                reply(line)
        else:
            handle_generate(command, config, reply, sender)
    except SdBotError as e:
        logger.warning("Command %r failed: %s", command, e)
        reply(e.user_message)
    except Exception:
        logger.exception("Unexpected failure handling command %r", command)
        reply(UNEXPECTED_FAILURE)

    return True
