import pytest

from client_registry.engine import (
    InvalidChecksum,
    format_tax_id,
    is_valid_tax_id,
    normalize_tax_id,
    validate_tax_id_or_fail,
)


def test_known_values():
    assert is_valid_tax_id("529.982.247-25") is True
    assert is_valid_tax_id("111.111.111-11") is False
    assert is_valid_tax_id("529.982.247-24") is False


def test_valid_tax_ids_accepted_raw_and_formatted(valid_tax_ids):
    for digits in valid_tax_ids:
        assert is_valid_tax_id(digits)
        assert is_valid_tax_id(format_tax_id(digits))


def test_check_digit_sensitivity(valid_tax_ids):
    for digits in valid_tax_ids:
        for position in (9, 10):
            for replacement in "0123456789":
                if replacement == digits[position]:
                    continue
                mutated = digits[:position] + replacement + digits[position + 1:]
                assert not is_valid_tax_id(mutated), mutated


@pytest.mark.parametrize("raw", ["", None, "5299822472", "529982247251", "abc"])
def test_wrong_length_rejected(raw):
    assert is_valid_tax_id(raw) is False
    with pytest.raises(InvalidChecksum) as exc:
        validate_tax_id_or_fail(raw)
    assert exc.value.reason == InvalidChecksum.WRONG_LENGTH


@pytest.mark.parametrize("digit", list("0123456789"))
def test_repeated_digits_rejected(digit):
    with pytest.raises(InvalidChecksum) as exc:
        validate_tax_id_or_fail(digit * 11)
    assert exc.value.reason == InvalidChecksum.REPEATED_DIGITS


def test_check_digit_mismatch_reason():
    with pytest.raises(InvalidChecksum) as exc:
        validate_tax_id_or_fail("529.982.247-24")
    assert exc.value.reason == InvalidChecksum.CHECK_DIGIT_MISMATCH
    assert exc.value.kind == "invalid_checksum"
    assert "529.982.247-24" in exc.value.message


def test_validate_returns_canonical_digits():
    assert validate_tax_id_or_fail(" 529.982.247-25 ") == "52998224725"


def test_normalize_strips_non_digits():
    assert normalize_tax_id("529.982.247-25") == "52998224725"
    assert normalize_tax_id(None) == ""


def test_format_only_when_eleven_digits():
    assert format_tax_id("52998224725") == "529.982.247-25"
    assert format_tax_id("1234") == "1234"
    assert format_tax_id(None) is None


@pytest.mark.parametrize("formatted", ["529.982.247-25", "111.444.777-35", "123.456.789-09"])
def test_format_is_idempotent_and_round_trips(formatted):
    assert format_tax_id(normalize_tax_id(formatted)) == format_tax_id(formatted) == formatted
    digits = normalize_tax_id(formatted)
    assert normalize_tax_id(format_tax_id(digits)) == digits
