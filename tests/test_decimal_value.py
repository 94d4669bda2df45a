from __future__ import annotations

from decimal import Decimal

from yieldsync.domain.services.decimal_value import (
    ZERO,
    is_positive,
    or_zero,
    parse_decimal,
    safe_div,
    to_decimal,
)


def test_parse_decimal_keeps_string_precision():
    value = parse_decimal("123456789012345678901234.000000000000000001")
    assert value == Decimal("123456789012345678901234.000000000000000001")


def test_parse_decimal_routes_floats_through_str():
    assert parse_decimal(0.1) == Decimal("0.1")


def test_parse_decimal_treats_empty_and_garbage_as_absent():
    assert parse_decimal(None) is None
    assert parse_decimal("") is None
    assert parse_decimal("   ") is None
    assert parse_decimal("not-a-number") is None
    assert parse_decimal("NaN") is None
    assert parse_decimal("Infinity") is None
    assert parse_decimal(True) is None
    assert parse_decimal(["1"]) is None


def test_to_decimal_defaults_absent_to_zero():
    assert to_decimal(None) == ZERO
    assert to_decimal("42") == Decimal("42")
    assert or_zero(None) == ZERO
    assert or_zero(Decimal("5")) == Decimal("5")


def test_safe_div_guards_non_positive_denominator():
    assert safe_div(Decimal("10"), Decimal("0")) == ZERO
    assert safe_div(Decimal("10"), None) == ZERO
    assert safe_div(Decimal("10"), Decimal("-2")) == ZERO
    assert safe_div(None, Decimal("2")) == ZERO
    assert safe_div(Decimal("10"), Decimal("4")) == Decimal("2.5")


def test_is_positive():
    assert is_positive(Decimal("0.0001"))
    assert not is_positive(Decimal("0"))
    assert not is_positive(None)
