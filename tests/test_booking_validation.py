from datetime import date, datetime, timezone as dt_timezone

from django.utils import formats

from rentals.helpers import (
    BookingRequest,
    CarAvailability,
    validate_booking_form,
)

TODAY = date(2025, 3, 10)


def make_booking(**overrides) -> BookingRequest:
    fields = {
        "start_date": "2025-03-12",
        "end_date": "2025-03-15",
        "pickup_location": "Dubai Marina",
        "return_location": "Business Bay",
        "payment_method": "Card",
    }
    fields.update(overrides)
    return BookingRequest(**fields)


def make_car() -> CarAvailability:
    return CarAvailability(availability_from="2025-03-01", availability_to="2025-03-31")


def test_valid_booking_within_availability():
    result = validate_booking_form(make_booking(), make_car(), today=TODAY)

    assert result.is_valid
    assert result.errors == {}


def test_cash_is_accepted():
    result = validate_booking_form(make_booking(payment_method="Cash"), None, today=TODAY)

    assert result.is_valid


def test_empty_booking_reports_every_required_field():
    result = validate_booking_form({}, None)

    assert not result.is_valid
    assert result.errors == {
        "start_date": "Start date is required",
        "end_date": "End date is required",
        "pickup_location": "Pickup location is required",
        "return_location": "Return location is required",
        "payment_method": "Please select a payment method",
    }


def test_start_date_in_the_past():
    result = validate_booking_form(make_booking(start_date="2025-03-09"), None, today=TODAY)

    assert result.errors == {"start_date": "Start date cannot be in the past"}


def test_start_date_today_is_allowed_regardless_of_time_of_day():
    booking = make_booking(start_date=datetime(2025, 3, 10, 0, 0, 1))

    result = validate_booking_form(booking, None, today=TODAY)

    assert "start_date" not in result.errors


def test_end_date_must_follow_start_date():
    result = validate_booking_form(
        make_booking(start_date="2025-03-15", end_date="2025-03-15"), None, today=TODAY
    )

    assert result.errors == {"end_date": "End date must be after start date"}


def test_dates_outside_car_availability_name_both_bounds():
    result = validate_booking_form(
        make_booking(end_date="2025-04-02"), make_car(), today=TODAY
    )

    expected_from = formats.date_format(date(2025, 3, 1), "SHORT_DATE_FORMAT")
    expected_to = formats.date_format(date(2025, 3, 31), "SHORT_DATE_FORMAT")
    assert result.errors == {
        "dates": f"Selected dates must be between {expected_from} and {expected_to}"
    }


def test_car_mapping_is_accepted():
    car = {"availability_from": "2025-03-13", "availability_to": "2025-03-31"}

    result = validate_booking_form(make_booking(), car, today=TODAY)

    assert "dates" in result.errors


def test_car_without_availability_skips_window_check():
    result = validate_booking_form(make_booking(), CarAvailability(), today=TODAY)

    assert result.is_valid


def test_blank_locations_are_rejected():
    result = validate_booking_form(
        make_booking(pickup_location="   ", return_location=""), None, today=TODAY
    )

    assert result.errors == {
        "pickup_location": "Pickup location is required",
        "return_location": "Return location is required",
    }


def test_unknown_payment_method_is_invalid_not_missing():
    result = validate_booking_form(make_booking(payment_method="card"), None, today=TODAY)

    assert result.errors == {"payment_method": "Invalid payment method selected"}


def test_unparseable_dates_are_reported():
    result = validate_booking_form(
        make_booking(start_date="next tuesday", end_date="2025-13-40"), None, today=TODAY
    )

    assert result.errors == {
        "start_date": "Please provide a valid start date",
        "end_date": "Please provide a valid end date",
    }


def test_past_start_and_reversed_range_report_on_their_own_fields():
    result = validate_booking_form(
        make_booking(start_date="2025-03-05", end_date="2025-03-04"),
        make_car(),
        today=TODAY,
    )

    assert result.errors["start_date"] == "Start date cannot be in the past"
    assert result.errors["end_date"] == "End date must be after start date"
    assert "dates" not in result.errors


def test_camel_case_form_keys_are_understood():
    form = {
        "startDate": "2025-03-12",
        "endDate": "2025-03-15",
        "pickupLocation": "Deira",
        "returnLocation": "Deira",
        "paymentMethod": "Cash",
    }

    assert validate_booking_form(form, None, today=TODAY).is_valid


def test_aware_datetimes_are_compared_in_local_time(settings):
    settings.TIME_ZONE = "Asia/Dubai"
    # 2025-03-09T21:00Z is already 2025-03-10 in Dubai (UTC+4)
    booking = make_booking(start_date=datetime(2025, 3, 9, 21, 0, tzinfo=dt_timezone.utc))

    result = validate_booking_form(booking, None, today=TODAY)

    assert "start_date" not in result.errors


def test_as_dict_reflects_validity():
    result = validate_booking_form({}, None)

    payload = result.as_dict()
    assert payload["is_valid"] is False
    assert set(payload["errors"]) == {
        "start_date",
        "end_date",
        "pickup_location",
        "return_location",
        "payment_method",
    }
