"""Parsing of numeric form input that may arrive as text or as a JSON number."""

import math
from typing import Any, Optional

INVALID_NUMBER_MESSAGE = "Please enter a valid number"


def parse_number(raw: Any) -> Optional[float]:
    """Parse a required-or-optional numeric input.

    Blank input returns None; callers decide whether that is allowed.
    Raises ValueError for anything that is not a finite number.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ValueError(INVALID_NUMBER_MESSAGE)
    if isinstance(raw, (int, float)):
        number = float(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            raise ValueError(INVALID_NUMBER_MESSAGE)
    else:
        raise ValueError(INVALID_NUMBER_MESSAGE)
    if not math.isfinite(number):
        raise ValueError(INVALID_NUMBER_MESSAGE)
    return number


def parse_required_number(raw: Any) -> float:
    number = parse_number(raw)
    if number is None:
        raise ValueError(INVALID_NUMBER_MESSAGE)
    return number


def require_text(raw: Any, label: str) -> str:
    """Strip a required text field; blank is rejected."""
    if raw is None or not str(raw).strip():
        raise ValueError(f"{label} is required")
    return str(raw).strip()
