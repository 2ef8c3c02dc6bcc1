"""
Error types raised along the image generation pipeline.
Every error carries a human-readable detail string that is recorded on the
generation record but never shown to the Telegram user.
"""


class BotError(Exception):
    """Base class for pipeline errors"""
    kind = "bot"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(BotError):
    """Prompt rejected before any record is created"""
    kind = "validation"

    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    CONTENT_POLICY = "content_policy"

    def __init__(self, detail: str, reason: str):
        super().__init__(detail)
        self.reason = reason


class GenerationError(BotError):
    """The generative API answered but returned no usable image"""
    kind = "generation"


class DeliveryError(BotError):
    """The image could not be handed over to the requester"""
    kind = "delivery"


class TransportError(BotError):
    """The generative API could not be reached or raised"""
    kind = "transport"


def error_detail(error: BaseException) -> str:
    """Return the detail to record for any exception"""
    if isinstance(error, BotError):
        return error.detail
    return str(error) or type(error).__name__
