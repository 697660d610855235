# app/main.py

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# ---------------------------------------------
# LOAD ENVIRONMENT VARIABLES
# ---------------------------------------------
from app.config.load_env import load_env

load_env()

from app.config import Settings, get_settings, validate_settings
from app.errors import ServiceError, SignatureMismatch
from app.logging_config import configure_logging, get_logger
from app.middleware import request_id_middleware

# ---------------------------------------------
# IMPORT ROUTERS
# ---------------------------------------------
from app.routers import (
    health,
    assessment,
    payments,
    booking,
    quiz,
)
from app.services.email_service import EmailService
from app.services.payments import OrderService, PaymentVerificationService, RazorpayAdapter
from app.services.quiz_service import QuizForwarder

logger = get_logger(__name__)

ENDPOINTS = {
    "assessment": "/api/assessment/analyze",
    "createOrder": "/api/payment/create-order",
    "verifyPayment": "/api/payment/verify",
    "createBooking": "/api/booking/create",
    "submitQuiz": "/api/quiz/submit",
}


def _validation_message(exc: RequestValidationError) -> str:
    problems = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "Invalid request: " + "; ".join(problems)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"success": False, "error": _validation_message(exc)})

    @app.exception_handler(SignatureMismatch)
    async def signature_mismatch_handler(request: Request, exc: SignatureMismatch):
        return JSONResponse(status_code=exc.status_code, content={"success": False, "message": exc.message})

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        logger.error("service_error", error=exc.message, detail=exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.message})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error("unhandled_error", exc_info=exc)
        return JSONResponse(status_code=500, content={"success": False, "error": "Internal server error"})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.ENVIRONMENT)

    for issue in validate_settings(settings):
        logger.warning("configuration_incomplete", issue=issue)

    # ---------------------------------------------
    # APP INIT
    # ---------------------------------------------
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
    )

    # Built once; handlers only read them
    email_service = EmailService(settings)
    app.state.settings = settings
    app.state.email_service = email_service
    app.state.order_service = OrderService(settings, RazorpayAdapter(settings))
    app.state.verification_service = PaymentVerificationService(settings, email_service)
    app.state.quiz_forwarder = QuizForwarder(settings)

    # ---------------------------------------------
    # CORS
    # ---------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(request_id_middleware)

    register_exception_handlers(app)

    # ---------------------------------------------
    # ROUTERS
    # ---------------------------------------------

    # Health
    app.include_router(health.router, prefix="/health", tags=["Health"])

    # Assessment
    app.include_router(assessment.router, prefix="/api/assessment", tags=["Assessment"])

    # Payments
    app.include_router(payments.router, prefix="/api/payment", tags=["Payments"])

    # Bookings
    app.include_router(booking.router, prefix="/api/booking", tags=["Booking"])

    # Quiz
    app.include_router(quiz.router, prefix="/api/quiz", tags=["Quiz"])

    # ---------------------------------------------
    # ROOT ENDPOINT
    # ---------------------------------------------
    @app.get("/")
    def root():
        return {
            "message": "Soul Shakti Wellness API - Divine Blessings 🙏",
            "status": "running",
            "endpoints": ENDPOINTS,
        }

    return app


app = create_app()
