# summitbook/services/purchase_intent.py
"""Turn a checkout payload into a provider purchase intent.

One pipeline serves every gateway. A ``PaymentProvider`` adapter supplies the
provider specifics: whether credentials are present, currency casing, the
metadata bag, the actual API call and the name of the reference field in the
client response. Without credentials the pipeline answers with a clearly
flagged demo intent and never touches the network.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import urlencode
import logging

import stripe

from summitbook.core.config import RazorpayCredentials, StripeCredentials
from summitbook.core.utils import generate_booking_id, generate_unique_id, to_minor_units
from summitbook.models.checkout import CheckoutMode, CheckoutPayload, PurchaseIntentResponse

logger = logging.getLogger(__name__)


class PurchaseIntentError(Exception):
    """Provider call failed; the message is safe to show to clients."""


@dataclass(frozen=True)
class ProviderOrder:
    reference: str
    amount_minor: int
    currency: str


@dataclass(frozen=True)
class PurchaseIntent:
    booking_id: str
    provider_ref: str
    amount_minor: int
    currency: str
    mode: CheckoutMode
    reference_field: str
    key: Optional[str] = None
    success_url: Optional[str] = None

    @property
    def is_demo(self) -> bool:
        return self.mode == CheckoutMode.DEMO

    def to_response(self) -> PurchaseIntentResponse:
        data: Dict[str, Any] = {
            self.reference_field: self.provider_ref,
            "bookingId": self.booking_id,
            "amount": self.amount_minor,
            "currency": self.currency,
            "key": self.key,
            "successUrl": self.success_url,
        }
        if self.is_demo:
            data["demo"] = True
        return PurchaseIntentResponse(**data)


def reconciliation_metadata(payload: CheckoutPayload) -> Dict[str, str]:
    """Fields echoed to the provider dashboard for audit."""
    return {
        "mountainId": payload.mountain_id,
        "mountainName": payload.mountain_name,
        "date": payload.date.isoformat(),
        "participants": str(payload.participants),
        "customerName": payload.customer_info.name,
        "customerEmail": payload.customer_info.email,
    }


def stripe_object_to_dict(obj: Any) -> Dict[str, Any]:
    """Plain nested dict for a Stripe API object (sessions, webhook payloads)."""
    return obj.to_dict() if hasattr(obj, "to_dict") else dict(obj)


class PaymentProvider(ABC):
    name: str = "base"
    reference_field: str = "orderId"
    demo_prefix: str = "order"
    failure_message: str = "Failed to create order"

    @abstractmethod
    def is_configured(self) -> bool:
        ...

    def format_currency(self, currency: str) -> str:
        return currency.upper()

    def public_key(self, mode: CheckoutMode) -> Optional[str]:
        return None

    def success_url(self, booking_id: str) -> Optional[str]:
        return None

    @abstractmethod
    def create(self, payload: CheckoutPayload, booking_id: str, amount_minor: int) -> ProviderOrder:
        ...


class RazorpayProvider(PaymentProvider):
    name = "razorpay"
    reference_field = "orderId"
    demo_prefix = "order"
    failure_message = "Failed to create order"

    def __init__(self, credentials: RazorpayCredentials, client: Any = None):
        self.credentials = credentials
        self._client = client

    def is_configured(self) -> bool:
        return self.credentials.configured

    def public_key(self, mode: CheckoutMode) -> Optional[str]:
        if mode == CheckoutMode.DEMO:
            return "demo_key"
        return self.credentials.key_id

    @property
    def client(self):
        if self._client is None:
            import razorpay

            self._client = razorpay.Client(
                auth=(self.credentials.key_id, self.credentials.key_secret)
            )
        return self._client

    def create(self, payload: CheckoutPayload, booking_id: str, amount_minor: int) -> ProviderOrder:
        notes = reconciliation_metadata(payload)
        if payload.customer_info.phone:
            notes["customerPhone"] = payload.customer_info.phone
        order = self.client.order.create(
            data={
                "amount": amount_minor,
                "currency": self.format_currency(payload.currency.value),
                "receipt": booking_id,
                "notes": notes,
            }
        )
        return ProviderOrder(
            reference=order["id"],
            amount_minor=int(order["amount"]),
            currency=str(order["currency"]).upper(),
        )


class StripeProvider(PaymentProvider):
    name = "stripe"
    reference_field = "sessionId"
    demo_prefix = "sess"
    failure_message = "Failed to create checkout session"
    payment_method_types = ["card", "upi"]

    def __init__(self, credentials: StripeCredentials, origin: str):
        self.credentials = credentials
        self.origin = origin.rstrip("/")

    def is_configured(self) -> bool:
        return self.credentials.configured

    def format_currency(self, currency: str) -> str:
        return currency.lower()

    def success_url(self, booking_id: str) -> Optional[str]:
        return f"{self.origin}/booking/confirmation/{booking_id}"

    def cancel_url(self, payload: CheckoutPayload) -> str:
        query = urlencode(
            {
                "mountain": payload.mountain_id,
                "date": payload.date.isoformat(),
                "participants": payload.participants,
            }
        )
        return f"{self.origin}/booking/checkout?{query}"

    def create(self, payload: CheckoutPayload, booking_id: str, amount_minor: int) -> ProviderOrder:
        metadata = reconciliation_metadata(payload)
        metadata["bookingId"] = booking_id
        metadata["currency"] = payload.currency.value

        session = stripe.checkout.Session.create(
            api_key=self.credentials.secret_key,
            mode="payment",
            payment_method_types=self.payment_method_types,
            customer_email=payload.customer_info.email,
            line_items=[
                {
                    "price_data": {
                        "currency": self.format_currency(payload.currency.value),
                        "unit_amount": amount_minor,
                        "product_data": {
                            "name": f"{payload.mountain_name} Expedition",
                            "metadata": {"mountainId": payload.mountain_id},
                        },
                    },
                    "quantity": 1,
                }
            ],
            success_url=self.success_url(booking_id),
            cancel_url=self.cancel_url(payload),
            client_reference_id=booking_id,
            metadata=metadata,
        )
        session = stripe_object_to_dict(session)
        amount_total = session.get("amount_total")
        return ProviderOrder(
            reference=session["id"],
            amount_minor=int(amount_total) if amount_total is not None else amount_minor,
            currency=str(session.get("currency") or payload.currency.value).upper(),
        )


def create_purchase_intent(payload: CheckoutPayload, provider: PaymentProvider) -> PurchaseIntent:
    """Create one purchase intent for one checkout attempt.

    The booking id is generated exactly once here and travels with the intent
    whether it is a demo stub or a live provider object.
    """
    booking_id = generate_booking_id()
    amount_minor = to_minor_units(payload.amount)

    if not provider.is_configured():
        logger.info(f"{provider.name} not configured, returning demo intent for booking {booking_id}")
        return PurchaseIntent(
            booking_id=booking_id,
            provider_ref=generate_unique_id(provider.demo_prefix),
            amount_minor=amount_minor,
            currency=payload.currency.value.upper(),
            mode=CheckoutMode.DEMO,
            reference_field=provider.reference_field,
            key=provider.public_key(CheckoutMode.DEMO),
            success_url=provider.success_url(booking_id),
        )

    try:
        order = provider.create(payload, booking_id, amount_minor)
    except Exception as e:
        logger.error(f"{provider.name} purchase intent failed for booking {booking_id}: {e}")
        raise PurchaseIntentError(provider.failure_message) from e

    logger.info(f"{provider.name} purchase intent {order.reference} created for booking {booking_id}")
    return PurchaseIntent(
        booking_id=booking_id,
        provider_ref=order.reference,
        amount_minor=order.amount_minor,
        currency=order.currency,
        mode=CheckoutMode.LIVE,
        reference_field=provider.reference_field,
        key=provider.public_key(CheckoutMode.LIVE),
    )
