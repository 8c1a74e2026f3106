from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Optional


class InputFormatError(ValueError):
    """Raised when user-supplied text can't be read as the expected number."""


def _clean(text: str, *, field_name: str) -> str:
    s = (text or "").strip()
    if not s:
        raise InputFormatError(f"{field_name} must not be empty")
    return s


def parse_salary(text: str, *, field_name: str = "Salary") -> Decimal:
    s = _clean(text, field_name=field_name)
    try:
        d = Decimal(s)
    except InvalidOperation as e:
        raise InputFormatError(f"Invalid {field_name.lower()} '{s}'") from e
    if not d.is_finite():
        raise InputFormatError(f"Invalid {field_name.lower()} '{s}'")
    return d


def parse_rating(text: str, *, field_name: str = "Rating") -> float:
    s = _clean(text, field_name=field_name)
    try:
        value = float(s)
    except ValueError as e:
        raise InputFormatError(f"Invalid {field_name.lower()} '{s}'") from e
    if not math.isfinite(value):
        raise InputFormatError(f"Invalid {field_name.lower()} '{s}'")
    return value


def parse_yes_no(text: str) -> Optional[bool]:
    answer = (text or "").strip().lower()
    if answer == "y":
        return True
    if answer == "n":
        return False
    return None
