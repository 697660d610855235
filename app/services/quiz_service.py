"""
Forwards abundance-quiz submissions to the Google Apps Script webhook that
appends them to the responses sheet.
"""
from typing import Any, Dict, Optional

import httpx

from app.config import Settings
from app.errors import ConfigurationError, GatewayError
from app.logging_config import get_logger

logger = get_logger(__name__)


class QuizForwarder:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.webhook_url = settings.QUIZ_WEBHOOK_URL
        self._timeout = settings.OUTBOUND_TIMEOUT_SECONDS
        self._transport = transport

    async def forward(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        if not self.webhook_url:
            raise ConfigurationError("Quiz webhook URL not configured")

        try:
            # Apps Script answers with a 302 to the script output
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport, follow_redirects=True
            ) as client:
                r = await client.post(self.webhook_url, json=payload)
                result = r.json()
        except httpx.TimeoutException as e:
            logger.error("quiz_webhook_timeout", timeout=self._timeout)
            raise GatewayError("Quiz webhook timed out", detail=str(e)) from e
        except httpx.HTTPError as e:
            logger.error("quiz_webhook_failed", error=str(e))
            raise GatewayError("Failed to submit quiz", detail=str(e)) from e
        except ValueError as e:
            logger.error("quiz_webhook_invalid_response")
            raise GatewayError("Failed to save quiz response", detail="Invalid JSON from webhook") from e

        if not isinstance(result, dict) or not result.get("success"):
            error = result.get("error") if isinstance(result, dict) else None
            logger.error("quiz_webhook_rejected", error=error)
            raise GatewayError(error or "Failed to save quiz response")

        logger.info("quiz_forwarded", recommended_service=payload.get("recommendedService"))
        return result
