from .base import CreatedOrder, Notifier, Order, OrderGateway
from .order_service import OrderService, to_minor_units
from .razorpay_adapter import RazorpayAdapter
from .signature import compute_payment_signature, verify_payment_signature
from .verification import PaymentVerificationService, VerificationResult

__all__ = [
    "CreatedOrder",
    "Notifier",
    "Order",
    "OrderGateway",
    "OrderService",
    "to_minor_units",
    "RazorpayAdapter",
    "compute_payment_signature",
    "verify_payment_signature",
    "PaymentVerificationService",
    "VerificationResult",
]
