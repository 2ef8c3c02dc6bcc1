"""Prompt validation tests."""

import pytest

from imagebot.errors import ValidationError
from imagebot.validation import validate_prompt


def test_accepts_prompt_within_limits():
    assert validate_prompt("a red balloon over a city") == "a red balloon over a city"
    assert validate_prompt("abc") == "abc"
    assert validate_prompt("x" * 500) == "x" * 500


@pytest.mark.parametrize("prompt", ["", "hi"])
def test_rejects_short_prompt(prompt):
    with pytest.raises(ValidationError) as exc_info:
        validate_prompt(prompt)
    assert exc_info.value.reason == ValidationError.TOO_SHORT


def test_rejects_long_prompt():
    with pytest.raises(ValidationError) as exc_info:
        validate_prompt("x" * 501)
    assert exc_info.value.reason == ValidationError.TOO_LONG


@pytest.mark.parametrize("prompt", ["a violent scene", "NSFW poster", "some Gore here", "Nude statue"])
def test_rejects_denylisted_content_case_insensitively(prompt):
    with pytest.raises(ValidationError) as exc_info:
        validate_prompt(prompt)
    assert exc_info.value.reason == ValidationError.CONTENT_POLICY
