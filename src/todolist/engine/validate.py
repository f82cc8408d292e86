# src/todolist/engine/validate.py

"""
Draft input validation.

The draft is never rejected on edit: validity is recomputed from the
current text every time it is needed, and the add action is gated on it.

Lengths are counted in code points (`len(str)`), so one emoji counts as
one character regardless of its UTF-16 encoding.
"""

from dataclasses import dataclass
from typing import Final, Optional


MAX_LABEL_LEN: Final[int] = 80

MSG_EMPTY: Final[str] = "Please enter something."
MSG_TOO_LONG: Final[str] = "Keep it under 80 characters."


@dataclass(frozen=True, slots=True)
class Validation:
    """
    Result of validating a draft.

    `message` is an advisory text for the input row; None when valid.
    """

    trimmed: str
    valid: bool
    message: Optional[str] = None


def compute_validation(draft: str) -> Validation:
    """Validate draft text. Pure; never raises for string input."""
    trimmed = draft.strip()

    if not trimmed:
        return Validation(trimmed=trimmed, valid=False, message=MSG_EMPTY)

    if len(trimmed) > MAX_LABEL_LEN:
        return Validation(trimmed=trimmed, valid=False, message=MSG_TOO_LONG)

    return Validation(trimmed=trimmed, valid=True)
