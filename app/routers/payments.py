"""
Razorpay checkout endpoints: order creation and payment verification.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.deps import get_order_service, get_verification_service
from app.errors import ServiceError, SignatureMismatch, ValidationError
from app.logging_config import get_logger
from app.schemas_pkg.payments import (
    CreateOrderRequest,
    CreateOrderResponse,
    OrderOut,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from app.services.payments import OrderService, PaymentVerificationService

router = APIRouter()
logger = get_logger(__name__)


def _failure(status_code: int, **body) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, **body})


@router.post("/create-order", response_model=CreateOrderResponse)
async def create_order(body: CreateOrderRequest, service: OrderService = Depends(get_order_service)):
    try:
        created = await service.create_order(
            amount=body.amount,
            currency=body.currency,
            booking=body.booking_data,
        )
    except ValidationError as e:
        return _failure(400, error=e.message)
    except ServiceError as e:
        logger.error("payment_order_error", error=e.detail or e.message)
        return _failure(500, error="Failed to create payment order")
    except Exception:
        logger.exception("payment_order_error")
        return _failure(500, error="Failed to create payment order")

    order = created.order
    return CreateOrderResponse(
        order=OrderOut(id=order.id, amount=order.amount, currency=order.currency),
        key=created.key_id,
    )


@router.post("/verify", response_model=VerifyPaymentResponse)
async def verify_payment(
    body: VerifyPaymentRequest,
    service: PaymentVerificationService = Depends(get_verification_service),
):
    try:
        result = await service.verify_payment(
            order_id=body.razorpay_order_id,
            payment_id=body.razorpay_payment_id,
            signature=body.razorpay_signature,
            booking=body.booking_data,
        )
    except SignatureMismatch as e:
        return _failure(400, message=e.message)
    except ServiceError as e:
        logger.error("payment_verification_error", error=e.detail or e.message)
        return _failure(500, error="Payment verification failed")
    except Exception:
        logger.exception("payment_verification_error")
        return _failure(500, error="Payment verification failed")

    return VerifyPaymentResponse(payment_id=result.payment_id, notification_sent=result.notification_sent)
