"""
Error taxonomy shared by services and routers.

Services raise these; routers and the app-level handlers in ``app.main``
turn them into the ``{"success": false, ...}`` envelope.
"""
from typing import Optional


class ServiceError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, *, detail: Optional[str] = None):
        self.message = message or self.default_message
        # Server-side only, never returned to clients
        self.detail = detail
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Malformed input, e.g. missing bookingData fields or a bad amount."""

    status_code = 400
    default_message = "Invalid request"


class GatewayError(ServiceError):
    """Upstream payment, email or webhook failure."""

    status_code = 500
    default_message = "Upstream service failure"


class ConfigurationError(GatewayError):
    """A required upstream credential or URL is not configured."""

    default_message = "Service not configured"


class SignatureMismatch(ServiceError):
    """Payment confirmation signature did not match the recomputed digest."""

    status_code = 400
    default_message = "Invalid payment signature"
