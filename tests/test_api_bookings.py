import json
from datetime import timedelta
from decimal import Decimal
from unittest import mock

import pytest
from django.db.models import QuerySet

from rentals.models import Booking, Car


def post_json(client, url, payload):
    return client.post(url, data=json.dumps(payload), content_type="application/json")


def booking_payload(car, today, **overrides):
    payload = {
        "car_id": car.pk,
        "start_date": str(today + timedelta(days=2)),
        "end_date": str(today + timedelta(days=5)),
        "pickup_location": "Dubai Marina",
        "return_location": "Business Bay",
        "payment_method": "Card",
        "renter_email": "renter@example.com",
    }
    payload.update(overrides)
    return payload


@pytest.mark.django_db
def test_validate_endpoint_reports_missing_fields(client):
    response = post_json(client, "/api/v1/bookings/validate", {})

    assert response.status_code == 200
    body = response.json()
    assert body["is_valid"] is False
    assert set(body["errors"]) == {
        "start_date",
        "end_date",
        "pickup_location",
        "return_location",
        "payment_method",
    }


@pytest.mark.django_db
def test_validate_endpoint_checks_car_window(client, car, today):
    payload = booking_payload(car, today, end_date=str(today + timedelta(days=45)))

    response = post_json(client, "/api/v1/bookings/validate", payload)

    assert response.status_code == 200
    assert "dates" in response.json()["errors"]


@pytest.mark.django_db
def test_validate_endpoint_unknown_car(client, today):
    response = post_json(client, "/api/v1/bookings/validate", {"car_id": 9999})

    assert response.status_code == 404


@pytest.mark.django_db
def test_quote_uses_car_rate(client, car, today):
    payload = {
        "car_id": car.pk,
        "start_date": str(today + timedelta(days=2)),
        "end_date": str(today + timedelta(days=6)),
    }

    response = post_json(client, "/api/v1/bookings/quote", payload)

    assert response.status_code == 200
    body = response.json()
    assert body["days"] == 4
    assert Decimal(str(body["total_cost"])) == Decimal("600.00")
    assert body["currency"] == "AED"


@pytest.mark.django_db
def test_quote_with_explicit_rate(client):
    payload = {"start_date": "2024-01-01", "end_date": "2024-01-04", "daily_rate": "100"}

    response = post_json(client, "/api/v1/bookings/quote", payload)

    body = response.json()
    assert body["days"] == 3
    assert Decimal(str(body["total_cost"])) == Decimal("300")


@pytest.mark.django_db
def test_quote_without_dates_is_zero(client):
    response = post_json(client, "/api/v1/bookings/quote", {"daily_rate": "100"})

    body = response.json()
    assert body["days"] == 0
    assert Decimal(str(body["total_cost"])) == 0


@pytest.mark.django_db
def test_create_booking(client, car, today):
    response = post_json(client, "/api/v1/bookings", booking_payload(car, today))

    assert response.status_code == 201
    body = response.json()
    assert body["car_id"] == car.pk
    assert body["total_days"] == 3
    assert Decimal(str(body["total_amount"])) == Decimal("450.00")
    assert body["payment_method"] == "Card"
    assert body["payment_method_label"] == "Credit/Debit Card"
    assert body["status"] == "pending"
    assert body["payment_status"] == "pending"
    assert Booking.objects.count() == 1


@pytest.mark.django_db
def test_create_booking_returns_field_errors(client, car, today):
    payload = booking_payload(car, today, pickup_location=" ", payment_method="Bitcoin")

    response = post_json(client, "/api/v1/bookings", payload)

    assert response.status_code == 400
    assert response.json()["errors"] == {
        "pickup_location": "Pickup location is required",
        "payment_method": "Invalid payment method selected",
    }
    assert Booking.objects.count() == 0


@pytest.mark.django_db
def test_create_booking_conflict(client, car, today):
    assert post_json(client, "/api/v1/bookings", booking_payload(car, today)).status_code == 201

    overlapping = booking_payload(
        car,
        today,
        start_date=str(today + timedelta(days=4)),
        end_date=str(today + timedelta(days=8)),
    )
    response = post_json(client, "/api/v1/bookings", overlapping)

    assert response.status_code == 409
    assert response.json()["code"] == "BOOKING_CONFLICT"
    assert Booking.objects.count() == 1


@pytest.mark.django_db
def test_create_booking_locks_the_car_row(client, car, today):
    with mock.patch.object(
        QuerySet, "select_for_update", autospec=True, side_effect=QuerySet.select_for_update
    ) as select_for_update:
        response = post_json(client, "/api/v1/bookings", booking_payload(car, today))

    assert response.status_code == 201
    locked_models = [call.args[0].model for call in select_for_update.call_args_list]
    assert Car in locked_models


@pytest.mark.django_db
def test_create_booking_inactive_car(client, make_car, today):
    car = make_car(is_active=False)

    response = post_json(client, "/api/v1/bookings", booking_payload(car, today))

    assert response.status_code == 400
    assert response.json()["code"] == "CAR_INACTIVE"


@pytest.mark.django_db
def test_create_booking_unknown_car(client, car, today):
    payload = booking_payload(car, today, car_id=car.pk + 100)

    assert post_json(client, "/api/v1/bookings", payload).status_code == 404


@pytest.mark.django_db
def test_create_booking_bad_email(client, car, today):
    payload = booking_payload(car, today, renter_email="not-an-email")

    response = post_json(client, "/api/v1/bookings", payload)

    assert response.status_code == 400
    assert "renter_email" in response.json()["errors"]


@pytest.mark.django_db
def test_get_booking(client, car, today):
    created = post_json(client, "/api/v1/bookings", booking_payload(car, today)).json()

    response = client.get(f"/api/v1/bookings/{created['id']}")

    assert response.status_code == 200
    assert response.json()["id"] == created["id"]


@pytest.mark.django_db
def test_cities_endpoints(client):
    cities = client.get("/api/v1/cities").json()
    assert len(cities) == 49
    assert cities == sorted(cities)

    assert client.get("/api/v1/cities/validate", {"city": "Dubai"}).json() == {
        "city": "Dubai",
        "valid": True,
    }
    assert client.get("/api/v1/cities/validate", {"city": "dubai"}).json()["valid"] is False


@pytest.mark.django_db
def test_payment_methods_endpoint(client):
    methods = {m["code"]: m for m in client.get("/api/v1/payment-methods").json()}

    assert methods["cash"] == {"code": "cash", "label": "Cash on Meet", "icon": "💵"}
    assert methods["paypal"]["label"] == "PayPal"
    assert len(methods) == 7
