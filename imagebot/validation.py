"""Rule-based prompt checks applied before any generation record is created.

Substring matching only; it is easy to bypass with misspellings and is meant
as a first gate, not a moderation system.
"""

from .config import MAX_PROMPT_LENGTH, MIN_PROMPT_LENGTH
from .errors import ValidationError

BLOCKED_KEYWORDS = [
    "violence",
    "violent",
    "gore",
    "explicit",
    "nude",
    "nsfw",
    "inappropriate",
]


def validate_prompt(prompt: str) -> str:
    """Return the prompt unchanged or raise ValidationError with a reason."""
    if len(prompt) < MIN_PROMPT_LENGTH:
        raise ValidationError(
            f"Prompt shorter than {MIN_PROMPT_LENGTH} characters",
            ValidationError.TOO_SHORT,
        )

    if len(prompt) > MAX_PROMPT_LENGTH:
        raise ValidationError(
            f"Prompt longer than {MAX_PROMPT_LENGTH} characters",
            ValidationError.TOO_LONG,
        )

    lowered = prompt.lower()
    if any(keyword in lowered for keyword in BLOCKED_KEYWORDS):
        raise ValidationError("Prompt matched the content denylist", ValidationError.CONTENT_POLICY)

    return prompt
