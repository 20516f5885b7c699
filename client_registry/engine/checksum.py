"""
Tax id (CPF) checksum validation and display formatting.

A tax id is 11 digits: nine base digits followed by two check digits, each
computed as a modulo-11 weighted sum of the digits before it.
"""
from __future__ import annotations

from typing import Optional, Sequence

from client_registry.engine.errors import InvalidChecksum
from client_registry.utils.formatting import only_digits

TAX_ID_LENGTH = 11


def normalize_tax_id(raw: Optional[str]) -> str:
    return only_digits(raw)


def format_tax_id(value: Optional[str]) -> Optional[str]:
    """529982247 25 -> 529.982.247-25. Input that is not 11 digits is returned as-is."""
    digits = only_digits(value)
    if len(digits) == TAX_ID_LENGTH:
        return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"
    return value


def _check_digit(digits: Sequence[int]) -> int:
    weight = len(digits) + 1
    total = sum(d * (weight - i) for i, d in enumerate(digits))
    result = 11 - (total % 11)
    return 0 if result >= 10 else result


def _rejection_reason(digits: str) -> Optional[str]:
    if len(digits) != TAX_ID_LENGTH:
        return InvalidChecksum.WRONG_LENGTH
    if len(set(digits)) == 1:
        return InvalidChecksum.REPEATED_DIGITS
    values = [int(c) for c in digits]
    if values[9] != _check_digit(values[:9]):
        return InvalidChecksum.CHECK_DIGIT_MISMATCH
    if values[10] != _check_digit(values[:10]):
        return InvalidChecksum.CHECK_DIGIT_MISMATCH
    return None


def is_valid_tax_id(raw: Optional[str]) -> bool:
    return _rejection_reason(normalize_tax_id(raw)) is None


def validate_tax_id_or_fail(raw: Optional[str]) -> str:
    """Return the canonical digits of ``raw`` or raise :class:`InvalidChecksum`."""
    digits = normalize_tax_id(raw)
    reason = _rejection_reason(digits)
    if reason is not None:
        raise InvalidChecksum(raw, reason)
    return digits
