from fastapi import APIRouter, HTTPException, status
from summitbook.models.checkout import QuoteRequest, QuoteResponse
from summitbook.services.service_fee import quote_booking
import logging

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("/quote", response_model=QuoteResponse)
async def create_quote(request: QuoteRequest):
    """Price a selection: subtotal, gateway service fee and total."""
    try:
        quote = quote_booking(request.unit_price, request.participants, request.currency)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    return {
        "currency": quote.currency,
        "unitPrice": quote.unit_price,
        "participants": quote.participants,
        "subtotal": quote.subtotal,
        "serviceFee": quote.service_fee,
        "total": quote.total,
    }
