# ===== app/services/email/email_service.py =====
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import List, Optional
import logging

from app.config.settings import settings

logger = logging.getLogger(__name__)


class EmailService:
    """Service for sending emails via SMTP"""

    @staticmethod
    def _get_smtp_connection():
        """Create and return SMTP connection"""
        try:
            if settings.EMAIL_USE_TLS:
                server = smtplib.SMTP(settings.EMAIL_HOST, settings.EMAIL_PORT)
                server.starttls()
            else:
                server = smtplib.SMTP_SSL(settings.EMAIL_HOST, settings.EMAIL_PORT)

            if settings.EMAIL_USERNAME and settings.EMAIL_PASSWORD:
                server.login(settings.EMAIL_USERNAME, settings.EMAIL_PASSWORD)

            return server
        except Exception as e:
            logger.error(f"Failed to connect to SMTP server: {e}")
            raise

    @staticmethod
    def send_email(
            to_email: str,
            subject: str,
            plain_text: str,
            html_content: Optional[str] = None,
            bcc: Optional[List[str]] = None
    ) -> bool:
        """
        Send an email using SMTP

        Args:
            to_email: Recipient email address
            subject: Email subject
            plain_text: Plain text body
            html_content: Optional HTML alternative
            bcc: List of BCC email addresses

        Returns:
            bool: True if email sent successfully
        """
        try:
            msg = MIMEMultipart('alternative')
            msg['Subject'] = subject
            msg['From'] = f"{settings.EMAIL_FROM_NAME} <{settings.EMAIL_FROM_ADDRESS}>"
            msg['To'] = to_email

            msg.attach(MIMEText(plain_text, 'plain'))
            if html_content:
                msg.attach(MIMEText(html_content, 'html'))

            recipients = [to_email]
            if bcc:
                recipients.extend(bcc)

            server = EmailService._get_smtp_connection()
            server.sendmail(settings.EMAIL_FROM_ADDRESS, recipients, msg.as_string())
            server.quit()

            logger.info(f"Email sent successfully to {to_email}")
            return True

        except Exception as e:
            logger.error(f"Failed to send email to {to_email}: {e}")
            raise

    @staticmethod
    def booking_summary(business_name: str, booking_date: str, start_time: str, end_time: str, party_size: int) -> str:
        return (
            f"{business_name}\n"
            f"Date: {booking_date}\n"
            f"Time: {start_time} - {end_time}\n"
            f"Party size: {party_size}"
        )

    @staticmethod
    def send_business_booking_request(
            to_email: str,
            business_name: str,
            client_name: str,
            client_phone: str,
            summary: str,
            token: str
    ) -> bool:
        """Ask the business to accept or reject a new booking"""
        action_url = f"{settings.PUBLIC_BASE_URL}/api/v1/public/bookings/business-action?token={token}"

        plain_text = (
            f"New booking request from {client_name} ({client_phone})\n\n"
            f"{summary}\n\n"
            f"Accept: {action_url}&action=accept\n"
            f"Reject: {action_url}&action=reject\n"
        )

        return EmailService.send_email(
            to_email=to_email,
            subject=f"New booking request - {client_name}",
            plain_text=plain_text,
        )

    @staticmethod
    def send_client_confirmation_request(
            to_email: str,
            client_name: str,
            summary: str,
            token: str
    ) -> bool:
        """Ask the client to confirm a booking the business accepted"""
        confirm_url = f"{settings.PUBLIC_BASE_URL}/api/v1/public/bookings/confirm?token={token}"

        plain_text = (
            f"Hi {client_name},\n\n"
            f"Your booking has been accepted:\n\n"
            f"{summary}\n\n"
            f"Please confirm your attendance: {confirm_url}\n"
        )

        return EmailService.send_email(
            to_email=to_email,
            subject="Please confirm your booking",
            plain_text=plain_text,
        )
