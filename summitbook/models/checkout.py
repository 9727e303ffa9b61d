from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import date as Date
from decimal import Decimal
from enum import Enum

class Currency(str, Enum):
    USD = "USD"
    INR = "INR"

class CheckoutMode(str, Enum):
    DEMO = "demo"
    LIVE = "live"

def _float_as_text(value):
    # Decimal from the float repr, so 19.995 stays 19.995
    if isinstance(value, float):
        return str(value)
    return value

class CustomerInfo(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None

class CheckoutPayload(BaseModel):
    amount: Decimal = Field(..., gt=0)
    currency: Currency
    mountain_id: str = Field(..., alias="mountainId", min_length=1)
    mountain_name: str = Field(..., alias="mountainName", min_length=1)
    date: Date
    participants: int = Field(..., ge=1)
    customer_info: CustomerInfo = Field(..., alias="customerInfo")

    @field_validator("amount", mode="before")
    @classmethod
    def amount_from_float_text(cls, value):
        return _float_as_text(value)

    class Config:
        populate_by_name = True
        frozen = True

class PurchaseIntentResponse(BaseModel):
    demo: Optional[bool] = None
    orderId: Optional[str] = None
    sessionId: Optional[str] = None
    bookingId: str
    amount: int
    currency: str
    key: Optional[str] = None
    successUrl: Optional[str] = None

class ConfigStatusResponse(BaseModel):
    configured: bool

class QuoteRequest(BaseModel):
    unit_price: Decimal = Field(..., alias="unitPrice", ge=0)
    participants: int = Field(..., ge=1)
    currency: Currency

    @field_validator("unit_price", mode="before")
    @classmethod
    def unit_price_from_float_text(cls, value):
        return _float_as_text(value)

    class Config:
        populate_by_name = True

class QuoteResponse(BaseModel):
    currency: Currency
    unitPrice: Decimal
    participants: int
    subtotal: Decimal
    serviceFee: Decimal
    total: Decimal
