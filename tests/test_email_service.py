from unittest.mock import patch

from app.services.email.email_service import EmailService


def test_business_request_contains_accept_and_reject_links():
    with patch.object(EmailService, "send_email", return_value=True) as send:
        EmailService.send_business_booking_request(
            to_email="owner@restaurant.example",
            business_name="La Cebra",
            client_name="Lucía",
            client_phone="+34600999888",
            summary="La Cebra\nDate: 2030-01-07",
            token="abc",
        )

    body = send.call_args.kwargs["plain_text"]
    assert "business-action?token=abc&action=accept" in body
    assert "business-action?token=abc&action=reject" in body


def test_send_email_uses_smtp():
    with patch("app.services.email.email_service.smtplib.SMTP") as smtp:
        assert EmailService.send_email("cliente@example.com", "Hola", "body") is True

    server = smtp.return_value
    server.sendmail.assert_called_once()
    assert server.sendmail.call_args.args[1] == ["cliente@example.com"]
    server.quit.assert_called_once()
