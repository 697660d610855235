from fastapi import APIRouter, Depends

from app.config import Settings
from app.deps import get_app_settings, get_email_service
from app.errors import ServiceError
from app.logging_config import get_logger
from app.schemas_pkg.booking import BookingCreateRequest, BookingCreateResponse
from app.services.booking_service import generate_booking_ref
from app.services.email_service import EmailService

router = APIRouter()
logger = get_logger(__name__)


@router.post("/create", response_model=BookingCreateResponse)
async def create_booking(
    body: BookingCreateRequest,
    settings: Settings = Depends(get_app_settings),
    email: EmailService = Depends(get_email_service),
):
    """Pay-after-session booking: issue a reference, nothing is charged."""
    booking_ref = generate_booking_ref()
    logger.info("booking_created", booking_ref=booking_ref, service=body.booking_data.service)

    if settings.SEND_BOOKING_EMAILS:
        booking = body.booking_data.model_copy(
            update={"booking_ref": booking_ref, "payment_status": "Pay After Session"}
        )
        try:
            await email.send_booking_confirmation(booking)
        except ServiceError as e:
            # the booking stands even if the mail does not go out
            logger.error("booking_confirmation_failed", booking_ref=booking_ref, error=e.detail or e.message)

    return BookingCreateResponse(booking_ref=booking_ref)
