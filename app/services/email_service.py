# app/services/email_service.py

from html import escape
from typing import Optional, Tuple

import anyio
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from app.config import Settings
from app.errors import ConfigurationError, GatewayError
from app.logging_config import get_logger
from app.schemas_pkg.assessment import Analysis, ContactInfo
from app.schemas_pkg.booking import BookingData
from app.services.booking_service import generate_booking_ref

logger = get_logger(__name__)

BRAND_COLOR = "#ea580c"
PAID_COLOR = "#16a34a"

_HEADER = """
      <div style="background: linear-gradient(135deg, #ea580c 0%, #f59e0b 100%); color: white; padding: 30px; text-align: center; border-radius: 10px 10px 0 0;">
        <h1 style="margin: 0; font-size: 28px;">🦁 Soul Shakti Wellness</h1>
        <p style="margin: 10px 0 0 0;">{tagline}</p>
      </div>
"""

_SIGNATURE = """
        <p style="color: #666; font-size: 14px; margin-top: 30px;">
          With divine blessings,<br>
          <strong>Nagesh</strong><br>
          Founder, Soul Shakti Wellness<br>
          📧 {from_email}{website}
        </p>
"""


class EmailService:
    """SendGrid sender for booking confirmations and assessment results."""

    def __init__(self, settings: Settings):
        self.api_key = settings.SENDGRID_API_KEY
        self.from_email = settings.SENDGRID_FROM_EMAIL
        self.from_name = settings.SENDGRID_FROM_NAME
        self.frontend_url = settings.FRONTEND_URL
        self.timeout = settings.OUTBOUND_TIMEOUT_SECONDS

    def _send_sync(self, to_email: str, subject: str, text: str, html: str) -> int:
        """Core SendGrid wrapper (blocking)"""
        message = Mail(
            from_email=(self.from_email, self.from_name),
            to_emails=to_email,
            subject=subject,
            plain_text_content=text,
            html_content=html,
        )

        sg = SendGridAPIClient(self.api_key)
        # python-http-client passes this to urlopen for every request
        sg.client.timeout = self.timeout
        res = sg.send(message)
        return res.status_code

    async def send_email(self, to_email: str, subject: str, text: str, html: str) -> None:
        if not self.api_key:
            logger.error("email_not_configured", missing="SENDGRID_API_KEY")
            raise ConfigurationError("Email service not configured")

        try:
            status = await anyio.to_thread.run_sync(self._send_sync, to_email, subject, text, html)
        except Exception as e:
            logger.error("sendgrid_send_failed", to_email=to_email, subject=subject, error=str(e))
            raise GatewayError("Failed to send email", detail=str(e)) from e

        if status >= 300:
            logger.error("sendgrid_send_rejected", to_email=to_email, status_code=status)
            raise GatewayError("Failed to send email", detail=f"SendGrid returned {status}")

        logger.info("email_sent", to_email=to_email, subject=subject, status_code=status)

    async def send_booking_confirmation(self, booking: BookingData, payment_id: Optional[str] = None) -> None:
        text, html = build_booking_confirmation_template(booking, payment_id, from_email=self.from_email)
        await self.send_email(
            to_email=booking.email,
            subject="✅ Booking Confirmed - Soul Shakti Wellness",
            text=text,
            html=html,
        )

    async def send_assessment_results(self, contact: ContactInfo, analysis: Analysis) -> None:
        text, html = build_assessment_template(
            contact, analysis, frontend_url=self.frontend_url, from_email=self.from_email
        )
        await self.send_email(
            to_email=contact.email,
            subject="Your Soul Shakti Assessment Results - Divine Guidance 🙏",
            text=text,
            html=html,
        )


def _detail_row(label: str, value: str, color: Optional[str] = None) -> str:
    style = "padding: 8px 0; font-weight: bold;"
    if color:
        style += f" color: {color};"
    return f"""
            <tr>
              <td style="padding: 8px 0; color: #666;">{label}:</td>
              <td style="{style}">{value}</td>
            </tr>"""


def build_booking_confirmation_template(
    booking: BookingData,
    payment_id: Optional[str] = None,
    from_email: str = "soulshaktie@gmail.com",
) -> Tuple[str, str]:
    """Returns plain text + HTML for the booking confirmation mail"""
    booking_ref = booking.booking_ref or generate_booking_ref()
    if payment_id:
        payment_status = "✓ Paid"
    else:
        payment_status = booking.payment_status or "Pay After Session"

    lines = [
        f"Dear {booking.name},",
        "",
        "Your session with Soul Shakti Wellness is confirmed.",
        f"Booking Reference: {booking_ref}",
        f"Service: {booking.service}",
        f"Date & Time: {booking.date} at {booking.time}",
        f"Format: {booking.format}",
    ]
    if payment_id:
        lines.append(f"Payment ID: {payment_id}")
    lines.append(f"Payment Status: {payment_status}")
    lines += ["", "Need to reschedule? Please contact us at least 24 hours in advance."]
    text = "\n".join(lines)

    rows = [
        _detail_row("Booking Reference", escape(booking_ref)),
        _detail_row("Service", escape(booking.service)),
        _detail_row("Date & Time", f"{escape(booking.date)} at {escape(booking.time)}"),
        _detail_row("Format", escape(booking.format)),
    ]
    if payment_id:
        rows.append(_detail_row("Payment ID", escape(payment_id)))
    rows.append(_detail_row("Payment Status", escape(payment_status), PAID_COLOR if payment_id else BRAND_COLOR))

    html = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
      {_HEADER.format(tagline="Your Session is Confirmed!")}
      <div style="background: #fff; padding: 30px; border: 2px solid #fed7aa; border-radius: 0 0 10px 10px;">
        <div style="background: #dcfce7; padding: 15px; border-radius: 10px; margin-bottom: 20px; text-align: center;">
          <h2 style="color: {PAID_COLOR}; margin: 0;">✓ Booking Confirmed!</h2>
        </div>

        <p>Dear {escape(booking.name)},</p>
        <p>Your divine transformation journey begins! Blessed with Maa Durga's grace 🙏</p>

        <div style="background: #fff7ed; padding: 20px; border-radius: 10px; margin: 20px 0;">
          <h3 style="color: {BRAND_COLOR}; margin: 0 0 15px 0;">Booking Details</h3>
          <table style="width: 100%;">{"".join(rows)}
          </table>
        </div>

        <h3 style="color: {BRAND_COLOR};">What's Next?</h3>
        <ul>
          <li style="margin: 10px 0;">You'll receive a reminder 24 hours before your session</li>
          <li style="margin: 10px 0;">Meeting link will be sent 1 hour before (for online sessions)</li>
          <li style="margin: 10px 0;">Prepare any questions or topics you'd like to discuss</li>
          <li style="margin: 10px 0;">Come with an open heart and mind 🙏</li>
        </ul>

        <div style="background: #fff7ed; padding: 15px; border-radius: 10px; margin: 20px 0;">
          <p style="margin: 0; color: #666; font-size: 14px;">
            <strong>Need to reschedule?</strong> Please contact us at least 24 hours in advance.
          </p>
        </div>
        {_SIGNATURE.format(from_email=escape(from_email), website="<br>🌐 www.soulshaktiwellness.com")}
      </div>
    </div>
    """

    return text, html


def build_assessment_template(
    contact: ContactInfo,
    analysis: Analysis,
    frontend_url: str = "https://soulshaktiwellness.com",
    from_email: str = "soulshaktie@gmail.com",
) -> Tuple[str, str]:
    """Returns plain text + HTML for the assessment results mail"""
    booking_url = f"{frontend_url}/booking"

    text = "\n".join(
        [
            f"Dear {contact.name},",
            "",
            f"Your Divine Readiness Score: {analysis.overall_score}%",
            f"Primary Focus Area: {analysis.primary_focus}",
            "",
            "Personalized Recommendations:",
            *[f"- {rec}" for rec in analysis.recommendations],
            "",
            "Your Next Steps:",
            *[f"- {step}" for step in analysis.next_steps],
            "",
            f"Book your first session: {booking_url}",
        ]
    )

    recommendations = "".join(f'<li style="margin: 10px 0;">{escape(rec)}</li>' for rec in analysis.recommendations)
    next_steps = "".join(f'<li style="margin: 10px 0;">{escape(step)}</li>' for step in analysis.next_steps)

    html = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
      {_HEADER.format(tagline="Your Divine Assessment Results")}
      <div style="background: #fff; padding: 30px; border: 2px solid #fed7aa; border-radius: 0 0 10px 10px;">
        <p>Dear {escape(contact.name)},</p>
        <p>Blessed with Maa Durga's divine grace! 🙏</p>

        <div style="background: #fff7ed; padding: 20px; border-radius: 10px; margin: 20px 0;">
          <h2 style="color: {BRAND_COLOR}; margin: 0 0 10px 0;">Your Divine Readiness Score</h2>
          <div style="font-size: 48px; font-weight: bold; color: {BRAND_COLOR}; text-align: center;">
            {analysis.overall_score}%
          </div>
        </div>

        <h3 style="color: {BRAND_COLOR};">Primary Focus Area:</h3>
        <p style="background: #fff7ed; padding: 15px; border-radius: 5px;">
          {escape(analysis.primary_focus)}
        </p>

        <h3 style="color: {BRAND_COLOR};">Personalized Recommendations:</h3>
        <ul>{recommendations}</ul>

        <h3 style="color: {BRAND_COLOR};">Your Next Steps:</h3>
        <ul>{next_steps}</ul>

        <div style="background: {BRAND_COLOR}; color: white; padding: 20px; border-radius: 10px; margin: 30px 0; text-align: center;">
          <h3 style="margin: 0 0 15px 0;">Ready to Begin Your Divine Journey?</h3>
          <a href="{escape(booking_url)}" style="display: inline-block; background: white; color: {BRAND_COLOR}; padding: 15px 30px; text-decoration: none; border-radius: 25px; font-weight: bold;">
            Book Your First Session
          </a>
        </div>
        {_SIGNATURE.format(from_email=escape(from_email), website="")}
      </div>
    </div>
    """

    return text, html
