# summitbook/services/service_fee.py
"""Gateway service fee applied on top of a booking subtotal.

INR:  2% of the amount plus 18% GST on that fee.
USD:  2.9% of the amount plus a fixed 0.30.

Any other currency carries no fee. Unsupported currencies are expected to be
rejected earlier, at payload validation; this function stays permissive so
that callers pricing arbitrary amounts never crash on an unknown code.

All amounts are Decimal, rounded to cents with ROUND_HALF_UP.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from summitbook.core.utils import Number, to_decimal
from summitbook.models.checkout import Currency

CENT = Decimal("0.01")
ZERO = Decimal("0")

INR_FEE_RATE = Decimal("0.02")
INR_FEE_TAX_RATE = Decimal("0.18")
USD_FEE_RATE = Decimal("0.029")
USD_FIXED_FEE = Decimal("0.30")


def _quantize(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def compute_service_fee(currency: Union[Currency, str], amount: Number) -> Decimal:
    amount = to_decimal(amount)
    if amount < 0:
        raise ValueError("amount must be non-negative")

    if currency == Currency.INR:
        base_fee = amount * INR_FEE_RATE
        return _quantize(base_fee + base_fee * INR_FEE_TAX_RATE)

    if currency == Currency.USD:
        return _quantize(amount * USD_FEE_RATE + USD_FIXED_FEE)

    return ZERO


@dataclass(frozen=True)
class PriceQuote:
    currency: Currency
    unit_price: Decimal
    participants: int
    subtotal: Decimal
    service_fee: Decimal
    total: Decimal


def quote_booking(unit_price: Number, participants: int, currency: Union[Currency, str]) -> PriceQuote:
    """Price a selection: per-person price times participants plus the service fee."""
    if participants < 1:
        raise ValueError("participants must be at least 1")
    unit_price = to_decimal(unit_price)
    subtotal = _quantize(unit_price * participants)
    fee = compute_service_fee(currency, subtotal)
    return PriceQuote(
        currency=Currency(currency),
        unit_price=unit_price,
        participants=participants,
        subtotal=subtotal,
        service_fee=fee,
        total=subtotal + fee,
    )
