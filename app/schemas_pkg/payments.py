from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, field_validator

from .booking import BookingData


class CreateOrderRequest(BaseModel):
    # rupees; integers stay exact at any size, converted to paise downstream
    amount: Union[StrictInt, StrictFloat, Decimal]
    currency: Optional[str] = Field(None, pattern=r"^[A-Za-z]{3}$")
    booking_data: BookingData = Field(..., alias="bookingData")

    @field_validator("amount", mode="before")
    @classmethod
    def amount_must_be_numeric(cls, v):
        if isinstance(v, bool):
            raise ValueError("must be a number")
        return v

    @field_validator("amount")
    @classmethod
    def amount_must_be_positive(cls, v):
        if not v > 0:
            raise ValueError("must be greater than 0")
        return v


class OrderOut(BaseModel):
    id: str
    amount: int  # in paise
    currency: str


class CreateOrderResponse(BaseModel):
    success: bool = True
    order: OrderOut
    key: str


class VerifyPaymentRequest(BaseModel):
    razorpay_order_id: str = Field(..., min_length=1, max_length=64)
    razorpay_payment_id: str = Field(..., min_length=1, max_length=64)
    razorpay_signature: str = Field(..., min_length=1, max_length=256)
    booking_data: BookingData = Field(..., alias="bookingData")


class VerifyPaymentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Payment verified successfully"
    payment_id: str = Field(..., serialization_alias="paymentId")
    notification_sent: bool = Field(..., serialization_alias="notificationSent")
