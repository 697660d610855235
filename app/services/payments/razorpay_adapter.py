from __future__ import annotations

import base64
from typing import Any, Dict, Optional

import httpx

from app.config import Settings
from app.errors import ConfigurationError, GatewayError
from app.logging_config import get_logger

logger = get_logger(__name__)


class RazorpayAdapter:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.key_id = settings.RAZORPAY_KEY_ID
        self.key_secret = settings.RAZORPAY_KEY_SECRET
        self._base = settings.RAZORPAY_API_BASE.rstrip("/")
        self._timeout = settings.OUTBOUND_TIMEOUT_SECONDS
        self._transport = transport

    def _auth_header(self) -> Dict[str, str]:
        if not self.key_id or not self.key_secret:
            raise ConfigurationError("Razorpay not configured")
        token = base64.b64encode(f"{self.key_id}:{self.key_secret}".encode()).decode()
        return {"Authorization": f"Basic {token}"}

    async def _post(self, path: str, json: Dict[str, Any]) -> Dict[str, Any]:
        headers = self._auth_header()
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                r = await client.post(f"{self._base}{path}", json=json, headers=headers)
                r.raise_for_status()
                return r.json()
        except httpx.HTTPStatusError as e:
            # Razorpay puts the reason in {"error": {"code", "description"}}
            try:
                error = e.response.json().get("error") or {}
            except ValueError:
                error = {}
            logger.error(
                "razorpay_request_rejected",
                path=path,
                status_code=e.response.status_code,
                code=error.get("code"),
                description=error.get("description"),
            )
            raise GatewayError(detail=f"Razorpay returned {e.response.status_code}") from e
        except httpx.TimeoutException as e:
            logger.error("razorpay_request_timeout", path=path, timeout=self._timeout)
            raise GatewayError(detail="Razorpay request timed out") from e
        except httpx.HTTPError as e:
            logger.error("razorpay_request_failed", path=path, error=str(e))
            raise GatewayError(detail=str(e)) from e
        except ValueError as e:
            logger.error("razorpay_invalid_response", path=path)
            raise GatewayError(detail="Invalid JSON from Razorpay") from e

    async def create_order(
        self,
        amount: int,
        currency: str,
        receipt: str,
        notes: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        payload = {"amount": int(amount), "currency": currency.upper(), "receipt": receipt}
        if notes:
            payload["notes"] = notes
        data = await self._post("/v1/orders", payload)
        if not data.get("id"):
            raise GatewayError(detail="Invalid order response")
        return {"order_id": data.get("id"), "amount": data.get("amount"), "currency": data.get("currency")}
