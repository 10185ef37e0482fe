"""Amount validation tests."""

from __future__ import annotations

import pytest

from fundme.funding.amount import parse_amount

WEI = 10**18


@pytest.mark.parametrize("raw", ["", "   ", "\t\n", None])
def test_empty_input_is_rejected_as_empty(raw) -> None:
    result = parse_amount(raw)
    assert result.ok is False
    assert result.reason == "empty"
    assert result.value is None


@pytest.mark.parametrize("raw", ["-1", "0", "0.0", "-0.5", "abc", "Infinity", "NaN", "."])
def test_non_positive_or_non_numeric_input(raw: str) -> None:
    result = parse_amount(raw)
    assert result.ok is False
    assert result.reason == "nonPositive"


@pytest.mark.parametrize("raw", ["1e3", "1e-3", "+1", "1_000", "١"])
def test_notation_rejected_by_exact_conversion(raw: str) -> None:
    result = parse_amount(raw)
    assert result.ok is False
    assert result.reason == "invalid"


def test_underflow_to_zero_base_units_is_non_positive() -> None:
    result = parse_amount("0." + "0" * 18 + "1")
    assert result.ok is False
    assert result.reason == "nonPositive"


def test_precision_loss_beyond_smallest_unit_is_invalid() -> None:
    result = parse_amount("1." + "0" * 17 + "12")
    assert result.ok is False
    assert result.reason == "invalid"


def test_trailing_zeros_beyond_smallest_unit_are_accepted() -> None:
    result = parse_amount("2." + "0" * 25)
    assert result.ok is True
    assert result.value == 2 * WEI


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("0.001", 10**15),
        ("  1.5 ", 15 * 10**17),
        ("1.", WEI),
        (".25", WEI // 4),
        ("0.000000000000000001", 1),
        ("123456789.123456789012345678", 123456789123456789012345678),
    ],
)
def test_valid_amounts_convert_exactly(raw: str, expected: int) -> None:
    result = parse_amount(raw)
    assert result.ok is True
    assert result.value == expected
    assert result.raw == raw.strip()
    assert result.reason is None


def test_custom_decimals() -> None:
    assert parse_amount("1.23", decimals=2).value == 123
    assert parse_amount("1.234", decimals=2).reason == "invalid"


def test_whole_part_beyond_conversion_limit_is_invalid() -> None:
    result = parse_amount("1" + "0" * 5000)
    assert result.ok is False
    assert result.reason == "invalid"
    assert result.value is None
