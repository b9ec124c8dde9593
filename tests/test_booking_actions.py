from unittest.mock import Mock

from app.models import Booking, BookingStatus, ConfirmationMode
from tests.conftest import MONDAY

ACTION_URL = "/api/v1/public/bookings/business-action"
CONFIRM_URL = "/api/v1/public/bookings/confirm"


def pending_booking(make_business, make_booking):
    business = make_business(hours=[(1, "20:00", "23:00")], capacities=(4,), mode=ConfirmationMode.MANUAL.value)
    return make_booking(
        business,
        table=business.tables[0],
        status=BookingStatus.PENDING.value,
        business_confirmation_token="biz-token",
        client_email="cliente@example.com",
    )


def refreshed(db, booking):
    db.expire_all()
    return db.get(Booking, booking.id)


def test_accept_then_client_confirms(client, db, make_business, make_booking):
    booking = pending_booking(make_business, make_booking)

    response = client.get(ACTION_URL, params={"token": "biz-token", "action": "accept"})
    assert response.status_code == 200
    assert response.json()["status"] == BookingStatus.PENDING_CONFIRMATION.value

    client_token = refreshed(db, booking).client_confirmation_token
    assert client_token

    response = client.get(CONFIRM_URL, params={"token": client_token})
    assert response.status_code == 200
    assert response.json()["status"] == BookingStatus.CONFIRMED.value

    again = client.get(CONFIRM_URL, params={"token": client_token})
    assert again.status_code == 200
    assert again.json()["message"] == "Booking was already confirmed"


def test_accept_queues_client_confirmation(client, monkeypatch, make_business, make_booking):
    from app.services.booking import booking_service

    task = Mock()
    monkeypatch.setattr(booking_service.settings, "NOTIFICATIONS_ENABLED", True)
    monkeypatch.setattr(booking_service, "send_client_confirmation_request", task)
    booking = pending_booking(make_business, make_booking)

    client.get(ACTION_URL, params={"token": "biz-token", "action": "accept"})

    task.delay.assert_called_once_with(str(booking.id))


def test_reject_releases_the_table(client, db, make_business, make_booking):
    booking = pending_booking(make_business, make_booking)
    url = f"/api/v1/public/businesses/{booking.business_id}/availability"
    params = {"date": MONDAY.isoformat(), "party_size": 2}

    assert client.get(url, params=params).json()["slots"] == ["22:00"]

    response = client.get(ACTION_URL, params={"token": "biz-token", "action": "reject"})
    assert response.status_code == 200
    assert response.json()["status"] == BookingStatus.REJECTED.value
    assert refreshed(db, booking).rejection_reason

    assert client.get(url, params=params).json()["slots"] == ["20:00", "21:00", "22:00"]


def test_only_pending_bookings_can_be_decided(client, make_business, make_booking):
    pending_booking(make_business, make_booking)

    client.get(ACTION_URL, params={"token": "biz-token", "action": "accept"})
    response = client.get(ACTION_URL, params={"token": "biz-token", "action": "reject"})

    assert response.status_code == 400
    assert "pending_confirmation" in response.json()["detail"]


def test_invalid_action_and_unknown_tokens(client, make_business, make_booking):
    pending_booking(make_business, make_booking)

    assert client.get(ACTION_URL, params={"token": "biz-token", "action": "maybe"}).status_code == 400
    assert client.get(ACTION_URL, params={"token": "nope", "action": "accept"}).status_code == 404
    assert client.get(CONFIRM_URL, params={"token": "nope"}).status_code == 404


def test_client_cannot_confirm_a_cancelled_booking(client, db, make_business, make_booking):
    booking = pending_booking(make_business, make_booking)
    client.get(ACTION_URL, params={"token": "biz-token", "action": "accept"})

    booking = refreshed(db, booking)
    client_token = booking.client_confirmation_token
    booking.status = BookingStatus.CANCELLED.value
    db.commit()

    response = client.get(CONFIRM_URL, params={"token": client_token})

    assert response.status_code == 400
    assert response.json()["detail"] == "Booking is already cancelled"
