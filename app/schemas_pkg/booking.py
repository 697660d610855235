from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class BookingData(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr
    service: str = Field(..., min_length=1, max_length=200)
    date: str = Field(..., min_length=1, max_length=40)
    time: str = Field(..., min_length=1, max_length=40)
    format: str = Field(..., min_length=1, max_length=40)  # "Online" / "In-person"
    booking_ref: Optional[str] = Field(None, alias="bookingRef", max_length=64)
    payment_status: Optional[str] = Field(None, alias="paymentStatus", max_length=64)


class BookingCreateRequest(BaseModel):
    booking_data: BookingData = Field(..., alias="bookingData")


class BookingCreateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    booking_ref: str = Field(..., serialization_alias="bookingRef")
    message: str = "Booking confirmed successfully"
