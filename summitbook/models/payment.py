from pydantic import BaseModel, Field
from typing import Optional, Any, Dict

class BookingDetails(BaseModel):
    bookingId: Optional[str] = None
    mountainId: Optional[str] = None
    mountainName: Optional[str] = None
    date: Optional[str] = None
    participants: int = 1
    customerInfo: Dict[str, Any] = Field(default_factory=dict)
    # Minor units, as echoed by create-order
    amount: int = 0
    currency: str = "INR"

class RazorpayVerifyRequest(BaseModel):
    razorpay_order_id: str
    razorpay_payment_id: str
    razorpay_signature: Optional[str] = None
    bookingDetails: BookingDetails = Field(default_factory=BookingDetails)

class VerifyPaymentResponse(BaseModel):
    success: bool
    bookingId: str
    demo: Optional[bool] = None

class WebhookAck(BaseModel):
    received: bool
