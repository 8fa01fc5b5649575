"""Error taxonomy for command handling.

Architectural role:
    Lower layers (`image`, `relay`, `config`) raise these; `core.engine` catches
    them at the command boundary, logs them and replies with `user_message`.

Content-policy hits are not errors: the generation pipeline substitutes the
configured prompt instead of raising.
"""

GENERIC_SERVICE_FAILURE = (
    "There was an error processing your request, the SD host may be down "
    "or had issues with vram and your request."
)


class SdBotError(Exception):
    """Base class for failures that end a single chat command."""

    def __init__(self, message: str, user_message: str | None = None):
        super().__init__(message)
        self.user_message = user_message or message


class TransportError(SdBotError):
    """Network or connection failure talking to a remote service."""


class StatusError(SdBotError):
    """Remote service answered with a non-success HTTP status."""

    def __init__(self, status_code: int, message: str | None = None, user_message: str | None = None):
        super().__init__(
            message or f"Unexpected HTTP status {status_code}",
            user_message,
        )
        self.status_code = status_code


class DecodeError(SdBotError):
    """Malformed JSON body or base64 image payload."""


class StorageError(SdBotError):
    """Local file could not be opened or written."""


class ValidationError(SdBotError):
    """Rejected admin-command argument."""
