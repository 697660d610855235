from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol


@dataclass(frozen=True)
class Order:
    id: str
    amount: int  # minor units (paise)
    currency: str
    receipt: str
    notes: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CreatedOrder:
    order: Order
    key_id: str


class OrderGateway(Protocol):
    async def create_order(
        self,
        amount: int,
        currency: str,
        receipt: str,
        notes: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Create a PSP order. Returns at least: { order_id, amount, currency }.
        Raises GatewayError when the provider rejects the request or is unreachable.
        """
        ...


class Notifier(Protocol):
    async def send_booking_confirmation(self, booking: Any, payment_id: Optional[str] = None) -> None:
        """Send the booking confirmation. Raises GatewayError on provider failure."""
        ...
