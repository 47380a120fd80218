"""
Minor/major currency unit conversion.

The processor only accepts integer minor units (cents). Callers speak in
major units (dollars). Conversion always uses a factor of 100 and
``Decimal`` arithmetic so float drift never reaches the processor.
"""
from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

from domain.common.exceptions import InvalidRequestException


MINOR_UNITS_PER_MAJOR = Decimal(100)

Number = Union[Decimal, int, float, str]


def to_minor_units(amount: Number) -> int:
    """Convert a major-unit amount into integer minor units.

    Rounds half-up at the half-cent boundary: ``19.995 -> 2000``,
    ``19.994 -> 1999``.
    """
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except InvalidOperation as exc:
        raise InvalidRequestException("Valid amount is required", field="amount") from exc
    if not value.is_finite() or value <= 0:
        raise InvalidRequestException("Valid amount is required", field="amount")
    minor = (value * MINOR_UNITS_PER_MAJOR).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    if minor < 1:
        raise InvalidRequestException(
            "Amount is smaller than the minimum currency unit",
            field="amount",
            details={"amount": str(value)},
        )
    return int(minor)


def to_major_units(minor: int) -> Decimal:
    return Decimal(int(minor)) / MINOR_UNITS_PER_MAJOR
