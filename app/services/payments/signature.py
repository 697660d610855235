from __future__ import annotations

import hashlib
import hmac


def compute_payment_signature(order_id: str, payment_id: str, secret: str) -> str:
    """Hex HMAC-SHA256 of ``order_id|payment_id`` keyed by the Razorpay key secret."""
    message = f"{order_id}|{payment_id}"
    return hmac.new(secret.encode(), message.encode(), hashlib.sha256).hexdigest()


def verify_payment_signature(order_id: str, payment_id: str, signature: str, secret: str) -> bool:
    """
    Check a checkout signature sent back by the client.

    The signature is untrusted input; it is only accepted when it equals the
    recomputed digest exactly (lower-case hex, case-sensitive).
    """
    if not signature or not secret:
        return False
    expected = compute_payment_signature(order_id, payment_id, secret)
    # bytes so non-ASCII input compares as unequal instead of raising TypeError
    return hmac.compare_digest(expected.encode(), signature.encode())
