import time
from typing import Optional

_BASE36 = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("value must be non-negative")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_booking_ref(now_ms: Optional[int] = None) -> str:
    """Booking reference like SSW-MB2K4Z1Q, derived from epoch milliseconds."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"SSW-{to_base36(now_ms)}"
