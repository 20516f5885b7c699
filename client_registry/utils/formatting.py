"""Digit normalization and display masks for stored identifiers."""
from __future__ import annotations

import re
from typing import Optional

_NON_DIGITS = re.compile(r"\D")


def only_digits(value: Optional[str]) -> str:
    """Strip every non-digit character; ``None`` becomes an empty string."""
    if value is None:
        return ""
    return _NON_DIGITS.sub("", value)


def normalize_postal_code(value: Optional[str]) -> str:
    return only_digits(value)


def format_postal_code(value: Optional[str]) -> Optional[str]:
    """12345678 -> 12345-678. Any other length is returned unchanged."""
    digits = only_digits(value)
    if len(digits) == 8:
        return f"{digits[:5]}-{digits[5:]}"
    return value


def normalize_phone(value: Optional[str]) -> str:
    return only_digits(value)


def format_phone(value: Optional[str]) -> Optional[str]:
    """Apply the phone mask by digit count.

    11 digits -> ``(DD) DDDDD-DDDD``, 10 digits -> ``(DD) DDDD-DDDD``;
    anything else comes back untouched.
    """
    digits = only_digits(value)
    if len(digits) == 11:
        return f"({digits[:2]}) {digits[2:7]}-{digits[7:]}"
    if len(digits) == 10:
        return f"({digits[:2]}) {digits[2:6]}-{digits[6:]}"
    return value


def normalize_email(value: Optional[str]) -> str:
    """Comparison key for email uniqueness (case-insensitive)."""
    if value is None:
        return ""
    return value.strip().lower()
