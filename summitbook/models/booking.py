from pydantic import BaseModel
from typing import Optional
from decimal import Decimal
from enum import Enum

class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"

class PaymentMethod(str, Enum):
    RAZORPAY = "razorpay"
    RAZORPAY_DEMO = "razorpay_demo"
    STRIPE = "stripe"

class BookingRecord(BaseModel):
    booking_id: str
    mountain_id: Optional[str] = None
    mountain_name: Optional[str] = None
    date: Optional[str] = None
    participants: int = 1
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    amount: Decimal
    currency: str
    status: BookingStatus = BookingStatus.CONFIRMED
    payment_method: PaymentMethod
    provider_order_id: Optional[str] = None
    provider_payment_id: Optional[str] = None
    payment_status: Optional[str] = None
