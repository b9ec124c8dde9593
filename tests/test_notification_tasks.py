from unittest.mock import Mock, patch

import pytest
from celery.exceptions import Retry

from app.models import ConfirmationMode
from app.tasks import notification_tasks


@pytest.fixture
def task_session(monkeypatch, session_factory):
    monkeypatch.setattr(notification_tasks, "SessionLocal", session_factory)


def manual_booking(make_business, make_booking, email="owner@restaurant.example"):
    business = make_business(
        hours=[(1, "20:00", "23:00")],
        capacities=(4,),
        mode=ConfirmationMode.MANUAL.value,
        email=email,
    )
    return make_booking(
        business,
        table=business.tables[0],
        status="pending",
        business_confirmation_token="biz-token",
        client_confirmation_token="client-token",
        client_email="cliente@example.com",
    )


def test_business_notification_sends_action_links(task_session, make_business, make_booking):
    booking = manual_booking(make_business, make_booking)

    with patch.object(notification_tasks.EmailService, "send_business_booking_request") as send:
        result = notification_tasks.send_business_booking_notification.run(str(booking.id))

    assert result == {"status": "success", "booking_id": str(booking.id)}
    assert send.call_args.kwargs["to_email"] == "owner@restaurant.example"
    assert send.call_args.kwargs["token"] == "biz-token"


def test_business_without_email_is_skipped(task_session, make_business, make_booking):
    booking = manual_booking(make_business, make_booking, email=None)

    with patch.object(notification_tasks.EmailService, "send_business_booking_request") as send:
        result = notification_tasks.send_business_booking_notification.run(str(booking.id))

    assert result["status"] == "skipped"
    send.assert_not_called()


def test_client_confirmation_request(task_session, make_business, make_booking):
    booking = manual_booking(make_business, make_booking)

    with patch.object(notification_tasks.EmailService, "send_client_confirmation_request") as send:
        notification_tasks.send_client_confirmation_request.run(str(booking.id))

    assert send.call_args.kwargs["to_email"] == "cliente@example.com"
    assert send.call_args.kwargs["token"] == "client-token"


def test_smtp_failure_schedules_a_retry(monkeypatch, session_factory, make_business, make_booking):
    booking = manual_booking(make_business, make_booking)
    session = session_factory()
    close = Mock(wraps=session.close)
    monkeypatch.setattr(session, "close", close)
    monkeypatch.setattr(notification_tasks, "SessionLocal", lambda: session)

    task = notification_tasks.send_business_booking_notification
    failure = ConnectionRefusedError("smtp down")

    with patch.object(notification_tasks.EmailService, "send_business_booking_request", side_effect=failure), \
            patch.object(task, "retry", side_effect=Retry("retrying")) as retry:
        with pytest.raises(Retry):
            task.run(str(booking.id))

    retry.assert_called_once_with(exc=failure, countdown=60)
    close.assert_called_once()
