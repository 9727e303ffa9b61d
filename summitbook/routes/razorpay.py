from fastapi import APIRouter, HTTPException, Depends, status
from fastapi.concurrency import run_in_threadpool
from summitbook.core.config import GatewayConfig, get_gateway_config
from summitbook.core.database import get_db_connection
from summitbook.core.security import PaymentVerificationError, verify_razorpay_signature
from summitbook.core.utils import from_minor_units, generate_booking_id
from summitbook.models.booking import BookingRecord, PaymentMethod
from summitbook.models.checkout import CheckoutPayload, ConfigStatusResponse, PurchaseIntentResponse
from summitbook.models.payment import RazorpayVerifyRequest, VerifyPaymentResponse
from summitbook.services.bookings import confirm_booking
from summitbook.services.purchase_intent import (
    PurchaseIntentError,
    RazorpayProvider,
    create_purchase_intent,
)
import logging

router = APIRouter()
logger = logging.getLogger(__name__)


def get_razorpay_provider(config: GatewayConfig = Depends(get_gateway_config)) -> RazorpayProvider:
    return RazorpayProvider(config.razorpay)


@router.get("/config", response_model=ConfigStatusResponse)
async def razorpay_config(config: GatewayConfig = Depends(get_gateway_config)):
    """Report whether live Razorpay credentials are present, without exposing them"""
    return {"configured": config.razorpay.configured}


@router.post(
    "/create-order",
    response_model=PurchaseIntentResponse,
    response_model_exclude_none=True,
)
async def create_order(
    payload: CheckoutPayload,
    provider: RazorpayProvider = Depends(get_razorpay_provider),
):
    try:
        intent = await run_in_threadpool(create_purchase_intent, payload, provider)
    except PurchaseIntentError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )
    return intent.to_response()


@router.post(
    "/verify-payment",
    response_model=VerifyPaymentResponse,
    response_model_exclude_none=True,
)
async def verify_payment(
    request: RazorpayVerifyRequest,
    conn=Depends(get_db_connection),
    config: GatewayConfig = Depends(get_gateway_config),
):
    """Confirm a Razorpay payment and record the booking"""
    demo = not config.razorpay.key_secret
    if not demo:
        try:
            verify_razorpay_signature(
                request.razorpay_order_id,
                request.razorpay_payment_id,
                request.razorpay_signature,
                config.razorpay,
            )
        except PaymentVerificationError as e:
            logger.warning(f"Razorpay verification failed for order {request.razorpay_order_id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Payment verification failed"
            )

    details = request.bookingDetails
    booking_id = details.bookingId or generate_booking_id()
    customer = details.customerInfo or {}
    booking = BookingRecord(
        booking_id=booking_id,
        mountain_id=details.mountainId,
        mountain_name=details.mountainName,
        date=details.date,
        participants=details.participants,
        customer_name=customer.get("name"),
        customer_email=customer.get("email"),
        customer_phone=customer.get("phone"),
        amount=from_minor_units(details.amount),
        currency=details.currency.upper(),
        payment_method=PaymentMethod.RAZORPAY_DEMO if demo else PaymentMethod.RAZORPAY,
        provider_order_id=request.razorpay_order_id,
        provider_payment_id=request.razorpay_payment_id,
        payment_status="captured" if not demo else "demo",
    )

    try:
        await confirm_booking(conn, booking, "razorpay_payment_verified")
    except Exception as e:
        logger.error(f"Error recording Razorpay booking {booking_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Payment verification failed"
        )

    response = {"success": True, "bookingId": booking_id}
    if demo:
        response["demo"] = True
    return response
