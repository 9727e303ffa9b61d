from decimal import Decimal
import pytest

from summitbook.models.checkout import Currency
from summitbook.services.service_fee import compute_service_fee, quote_booking


def test_usd_fee():
    assert compute_service_fee("USD", 1000) == Decimal("29.30")


def test_inr_fee_includes_gst():
    assert compute_service_fee("INR", 1000) == Decimal("23.60")


def test_enum_and_string_currency_agree():
    assert compute_service_fee(Currency.INR, 1000) == compute_service_fee("INR", 1000)


@pytest.mark.parametrize("currency", ["EUR", "usd", "", None])
def test_unsupported_currency_has_no_fee(currency):
    assert compute_service_fee(currency, 1000) == Decimal("0")


def test_fee_is_idempotent():
    first = compute_service_fee("USD", "123.45")
    assert all(compute_service_fee("USD", "123.45") == first for _ in range(5))


@pytest.mark.parametrize("amount", [0, "0.01", "0.5", 1, "99.99", 250000])
@pytest.mark.parametrize("currency", ["USD", "INR", "GBP"])
def test_fee_never_negative(currency, amount):
    assert compute_service_fee(currency, amount) >= 0


def test_zero_amount():
    assert compute_service_fee("INR", 0) == Decimal("0.00")
    assert compute_service_fee("USD", 0) == Decimal("0.30")


def test_rounds_half_up_to_cents():
    # 0.25 * 0.02 * 1.18 = 0.0059 -> 0.01
    assert compute_service_fee("INR", "0.25") == Decimal("0.01")
    # 50 * 0.029 + 0.30 = 1.75 exactly
    assert compute_service_fee("USD", 50) == Decimal("1.75")
    # 15 * 0.029 + 0.30 = 0.735 -> 0.74
    assert compute_service_fee("USD", 15) == Decimal("0.74")


def test_float_amount_uses_its_decimal_text():
    assert compute_service_fee("USD", 19.995) == compute_service_fee("USD", "19.995")


def test_negative_amount_rejected():
    with pytest.raises(ValueError):
        compute_service_fee("USD", -1)


def test_quote_adds_fee_to_subtotal():
    quote = quote_booking("500", 2, "USD")
    assert quote.subtotal == Decimal("1000.00")
    assert quote.service_fee == Decimal("29.30")
    assert quote.total == Decimal("1029.30")
    assert quote.currency == Currency.USD


def test_quote_requires_participants():
    with pytest.raises(ValueError):
        quote_booking(100, 0, "INR")
