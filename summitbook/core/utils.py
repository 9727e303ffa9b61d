# summitbook/core/utils.py
import time
import uuid
import secrets
from decimal import Decimal, ROUND_HALF_UP
from typing import Union
import logging

logger = logging.getLogger(__name__)

_BASE36 = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

Number = Union[int, float, str, Decimal]


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("value must be non-negative")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_booking_id() -> str:
    """Return a booking reference of the form ``BK<token>``.

    The token is the current time in milliseconds (base36) followed by a
    random hex suffix, so two attempts within the same millisecond still
    get different references.
    """
    millis = int(time.time() * 1000)
    return f"BK{to_base36(millis)}{secrets.token_hex(3).upper()}"


def generate_unique_id(prefix: str) -> str:
    """Build a provider-looking reference for demo responses."""
    return f"{prefix}_{uuid.uuid4().hex[:14]}"


def to_decimal(amount: Number) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    # str() keeps 19.995 as 19.995 instead of its binary approximation
    return Decimal(str(amount))


def to_minor_units(amount: Number) -> int:
    """Convert a major-unit amount to integer minor units, half rounded up."""
    minor = to_decimal(amount) * 100
    return int(minor.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_minor_units(amount_minor: Union[int, None]) -> Decimal:
    if not amount_minor:
        return Decimal("0.00")
    return (Decimal(int(amount_minor)) / 100).quantize(Decimal("0.01"))
