from fastapi import APIRouter, HTTPException, Depends, status, Request, Header
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
import stripe
from typing import Optional
from summitbook.core.config import GatewayConfig, get_gateway_config
from summitbook.core.database import get_db_connection
from summitbook.core.utils import from_minor_units, generate_booking_id
from summitbook.models.booking import BookingRecord, PaymentMethod
from summitbook.models.checkout import CheckoutPayload, PurchaseIntentResponse
from summitbook.models.payment import WebhookAck
from summitbook.services.bookings import confirm_booking
from summitbook.services.purchase_intent import (
    PurchaseIntentError,
    StripeProvider,
    create_purchase_intent,
    stripe_object_to_dict,
)
import logging

router = APIRouter()
logger = logging.getLogger(__name__)


def get_stripe_provider(
    request: Request,
    config: GatewayConfig = Depends(get_gateway_config),
) -> StripeProvider:
    origin = request.headers.get("origin") or config.frontend_url
    return StripeProvider(config.stripe, origin)


@router.post(
    "/create-checkout-session",
    response_model=PurchaseIntentResponse,
    response_model_exclude_none=True,
)
async def create_checkout_session(
    payload: CheckoutPayload,
    provider: StripeProvider = Depends(get_stripe_provider),
):
    try:
        intent = await run_in_threadpool(create_purchase_intent, payload, provider)
    except PurchaseIntentError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )
    return intent.to_response()


def booking_from_session(session) -> BookingRecord:
    session = stripe_object_to_dict(session)
    metadata = stripe_object_to_dict(session.get("metadata") or {})
    return BookingRecord(
        booking_id=metadata.get("bookingId") or session.get("client_reference_id") or generate_booking_id(),
        mountain_id=metadata.get("mountainId"),
        mountain_name=metadata.get("mountainName"),
        date=metadata.get("date"),
        participants=int(metadata.get("participants") or 1),
        customer_name=metadata.get("customerName"),
        customer_email=session.get("customer_email") or metadata.get("customerEmail"),
        amount=from_minor_units(session.get("amount_total")),
        currency=(session.get("currency") or "usd").upper(),
        payment_method=PaymentMethod.STRIPE,
        provider_order_id=session.get("id"),
        provider_payment_id=session.get("payment_intent"),
        payment_status=session.get("payment_status"),
    )


@router.post("/webhook", response_model=WebhookAck, status_code=status.HTTP_200_OK)
async def stripe_webhook(
    request: Request,
    conn=Depends(get_db_connection),
    config: GatewayConfig = Depends(get_gateway_config),
    stripe_signature: Optional[str] = Header(None, alias="Stripe-Signature"),
):
    """Handle Stripe webhooks for checkout events"""
    if not config.stripe.webhook_configured:
        # Demo mode: acknowledge without verifying
        return {"received": True}

    payload = await request.body()

    try:
        event = stripe.Webhook.construct_event(
            payload.decode("utf-8"),
            stripe_signature or "",
            config.stripe.webhook_secret,
        )
    except ValueError as e:
        logger.error(f"Invalid payload: {e}")
        raise HTTPException(status_code=400, detail="Invalid payload")
    except stripe.SignatureVerificationError as e:
        logger.error(f"Invalid signature: {e}")
        raise HTTPException(status_code=400, detail="Invalid signature")

    if event["type"] == "checkout.session.completed":
        session = event["data"]["object"]
        try:
            booking = booking_from_session(session)
            await confirm_booking(conn, booking, "stripe_checkout_completed")
        except Exception as e:
            logger.error(f"Error processing checkout.session.completed webhook: {e}")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"received": False},
            )
        logger.info(f"Webhook: checkout completed for booking {booking.booking_id}")

    # For other events, just acknowledge receipt
    return {"received": True}
