# app/schemas_pkg/__init__.py

# Booking schemas
from .booking import (
    BookingData,
    BookingCreateRequest,
    BookingCreateResponse,
)

# Payment schemas
from .payments import (
    CreateOrderRequest,
    CreateOrderResponse,
    OrderOut,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)

# Assessment schemas
from .assessment import (
    Analysis,
    AssessmentRequest,
    AssessmentResponse,
    ContactInfo,
)

__all__ = [
    # Booking
    "BookingData",
    "BookingCreateRequest",
    "BookingCreateResponse",

    # Payments
    "CreateOrderRequest",
    "CreateOrderResponse",
    "OrderOut",
    "VerifyPaymentRequest",
    "VerifyPaymentResponse",

    # Assessment
    "Analysis",
    "AssessmentRequest",
    "AssessmentResponse",
    "ContactInfo",
]
