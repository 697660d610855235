"""
Payment verification: checks the checkout signature, then sends the booking
confirmation.

Signature verification and notification are reported separately. A payment
whose signature matched is never reported as unpaid just because the email
did not go out, unless VERIFY_REQUIRES_NOTIFICATION is set.
"""
from __future__ import annotations

from dataclasses import dataclass

from app.config import Settings
from app.errors import ConfigurationError, GatewayError, ServiceError, SignatureMismatch
from app.logging_config import get_logger
from app.schemas_pkg.booking import BookingData
from .base import Notifier
from .signature import verify_payment_signature

logger = get_logger(__name__)


@dataclass(frozen=True)
class VerificationResult:
    payment_id: str
    notification_sent: bool


class PaymentVerificationService:
    def __init__(self, settings: Settings, notifier: Notifier):
        self.settings = settings
        self.notifier = notifier

    async def verify_payment(
        self,
        order_id: str,
        payment_id: str,
        signature: str,
        booking: BookingData,
    ) -> VerificationResult:
        secret = self.settings.RAZORPAY_KEY_SECRET
        if not secret:
            raise ConfigurationError("Razorpay not configured")

        if not verify_payment_signature(order_id, payment_id, signature, secret):
            logger.warning("payment_signature_mismatch", order_id=order_id, payment_id=payment_id)
            raise SignatureMismatch()

        logger.info("payment_signature_verified", order_id=order_id, payment_id=payment_id)

        try:
            await self.notifier.send_booking_confirmation(booking, payment_id=payment_id)
        except ServiceError as e:
            logger.error(
                "booking_confirmation_failed",
                order_id=order_id,
                payment_id=payment_id,
                error=e.detail or e.message,
            )
            if self.settings.VERIFY_REQUIRES_NOTIFICATION:
                raise GatewayError("Payment verification failed", detail=e.detail) from e
            return VerificationResult(payment_id=payment_id, notification_sent=False)

        return VerificationResult(payment_id=payment_id, notification_sent=True)
