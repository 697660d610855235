from fastapi import Request

from .config import Settings
from .services.email_service import EmailService
from .services.payments import OrderService, PaymentVerificationService
from .services.quiz_service import QuizForwarder


# Services are built once in create_app() and stored on app.state


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_order_service(request: Request) -> OrderService:
    return request.app.state.order_service


def get_verification_service(request: Request) -> PaymentVerificationService:
    return request.app.state.verification_service


def get_email_service(request: Request) -> EmailService:
    return request.app.state.email_service


def get_quiz_forwarder(request: Request) -> QuizForwarder:
    return request.app.state.quiz_forwarder
