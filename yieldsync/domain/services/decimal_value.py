from __future__ import annotations

from decimal import Decimal, InvalidOperation
import logging


logger = logging.getLogger(__name__)

ZERO = Decimal("0")
ONE = Decimal("1")


def parse_decimal(value: object) -> Decimal | None:
    """Parse a string-encoded on-chain amount.

    Floats are routed through ``str`` so binary noise never reaches the decimal.
    Absent, empty, unparsable and non-finite inputs all come back as ``None``.
    """
    if value is None:
        return None
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, bool):
        return None
    elif isinstance(value, (int, float, str)):
        text = str(value).strip()
        if not text:
            return None
        try:
            parsed = Decimal(text)
        except InvalidOperation:
            logger.warning("decimal_value: unparsable_value value=%r", value)
            return None
    else:
        logger.warning("decimal_value: unsupported_type type=%s", type(value).__name__)
        return None
    if not parsed.is_finite():
        return None
    return parsed


def or_zero(value: Decimal | None) -> Decimal:
    return value if value is not None else ZERO


def to_decimal(value: object) -> Decimal:
    return or_zero(parse_decimal(value))


def is_positive(value: Decimal | None) -> bool:
    return value is not None and value > 0


def safe_div(numerator: Decimal | None, denominator: Decimal | None) -> Decimal:
    if not is_positive(denominator):
        return ZERO
    return or_zero(numerator) / denominator
