"""
Razorpay order creation for session bookings.
"""
from __future__ import annotations

import time
import uuid
from decimal import Decimal, InvalidOperation, localcontext
from typing import Optional, Union

from app.config import Settings
from app.errors import ConfigurationError, GatewayError, ValidationError
from app.logging_config import get_logger
from app.schemas_pkg.booking import BookingData
from .base import CreatedOrder, Order, OrderGateway

logger = get_logger(__name__)

Amount = Union[int, float, str, Decimal]


def to_minor_units(amount: Amount) -> int:
    """
    Convert a major-unit amount (rupees) to minor units (paise).

    Floats go through their shortest repr so 499.99 becomes 49999 exactly.
    Amounts with sub-paise precision are rejected rather than rounded.
    """
    if isinstance(amount, bool):
        raise ValidationError("amount must be a number")
    try:
        value = Decimal(repr(amount)) if isinstance(amount, float) else Decimal(amount)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError("amount must be a number")
    if not value.is_finite() or value <= 0:
        raise ValidationError("amount must be a positive number")
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(value.as_tuple().digits) + 3)
        minor = value * 100
    if minor != minor.to_integral_value():
        raise ValidationError("amount cannot have more than two decimal places")
    return int(minor)


def make_receipt(now_ms: Optional[int] = None) -> str:
    """Receipt id unique per order, even for orders created in the same millisecond"""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"receipt_{now_ms}_{uuid.uuid4().hex[:8]}"


class OrderService:
    def __init__(self, settings: Settings, gateway: OrderGateway):
        self.settings = settings
        self.gateway = gateway

    async def create_order(
        self,
        amount: Amount,
        booking: BookingData,
        currency: Optional[str] = None,
    ) -> CreatedOrder:
        if not self.settings.razorpay_configured:
            raise ConfigurationError("Razorpay not configured")

        minor = to_minor_units(amount)
        currency = (currency or self.settings.DEFAULT_CURRENCY).upper()
        receipt = make_receipt()
        notes = {
            "service": booking.service,
            "customerName": booking.name,
            "customerEmail": booking.email,
            "date": booking.date,
            "time": booking.time,
        }

        res = await self.gateway.create_order(amount=minor, currency=currency, receipt=receipt, notes=notes)
        order_id = res.get("order_id")
        if not order_id:
            raise GatewayError(detail="Invalid order response")

        order = Order(
            id=order_id,
            amount=int(res.get("amount") or minor),
            currency=(res.get("currency") or currency).upper(),
            receipt=receipt,
            notes=notes,
        )
        logger.info("razorpay_order_created", order_id=order.id, amount=order.amount, currency=order.currency)
        return CreatedOrder(order=order, key_id=self.settings.RAZORPAY_KEY_ID)
