from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Union

from rentals.helpers.dates import (
    DateInput,
    days_between,
    display_date,
    parse_iso_date,
    start_of_today,
)
from rentals.helpers.fields import is_blank, read_field
from rentals.helpers.payment_methods import PaymentMethod
from rentals.helpers.validation_result import ValidationResult

Number = Union[int, float, Decimal]


@dataclass(frozen=True)
class BookingRequest:
    """A renter's booking form as submitted."""

    start_date: DateInput = None
    end_date: DateInput = None
    pickup_location: Optional[str] = None
    return_location: Optional[str] = None
    payment_method: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "BookingRequest":
        return cls(
            start_date=read_field(data, "start_date", "startDate"),
            end_date=read_field(data, "end_date", "endDate"),
            pickup_location=read_field(data, "pickup_location", "pickupLocation"),
            return_location=read_field(data, "return_location", "returnLocation"),
            payment_method=read_field(data, "payment_method", "paymentMethod"),
        )


@dataclass(frozen=True)
class CarAvailability:
    availability_from: DateInput = None
    availability_to: DateInput = None


@dataclass(frozen=True)
class BookingCost:
    days: int = 0
    total_cost: Number = 0

    def as_dict(self) -> dict:
        return {"days": self.days, "total_cost": self.total_cost}


def validate_booking_form(
    booking: Union[BookingRequest, Mapping[str, Any]],
    car: Any = None,
    *,
    today: Optional[date] = None,
) -> ValidationResult:
    """
    Validate a booking request, optionally against a car's availability window.

    Args:
        booking: BookingRequest or a plain mapping of form fields.
        car: Anything exposing `availability_from` / `availability_to`
            (a CarAvailability, a Car model instance, or a mapping), or None.
        today: Overrides the current local date for the "not in the past" check.

    Returns:
        ValidationResult: at most one message per field. Never raises.
    """
    if isinstance(booking, Mapping):
        booking = BookingRequest.from_mapping(booking)
    elif booking is None:
        booking = BookingRequest()

    result = ValidationResult()

    if not booking.start_date:
        result.add("start_date", "Start date is required")
    if not booking.end_date:
        result.add("end_date", "End date is required")

    if booking.start_date and booking.end_date:
        start = parse_iso_date(booking.start_date)
        end = parse_iso_date(booking.end_date)

        if start is None:
            result.add("start_date", "Please provide a valid start date")
        if end is None:
            result.add("end_date", "Please provide a valid end date")

        if start is not None and end is not None:
            if start < start_of_today(today):
                result.add("start_date", "Start date cannot be in the past")

            if start >= end:
                result.add("end_date", "End date must be after start date")

            if car is not None:
                available_from = parse_iso_date(read_field(car, "availability_from"))
                available_to = parse_iso_date(read_field(car, "availability_to"))
                if available_from is not None and available_to is not None:
                    if start < available_from or end > available_to:
                        result.add(
                            "dates",
                            f"Selected dates must be between {display_date(available_from)}"
                            f" and {display_date(available_to)}",
                        )

    if is_blank(booking.pickup_location):
        result.add("pickup_location", "Pickup location is required")

    if is_blank(booking.return_location):
        result.add("return_location", "Return location is required")

    if not booking.payment_method:
        result.add("payment_method", "Please select a payment method")
    elif booking.payment_method not in PaymentMethod.values:
        result.add("payment_method", "Invalid payment method selected")

    return result


def _coerce_rate(daily_rate: Any) -> Optional[Number]:
    if isinstance(daily_rate, str):
        try:
            return Decimal(daily_rate.strip())
        except InvalidOperation:
            return None
    return daily_rate


def calculate_booking_cost(
    start_date: DateInput, end_date: DateInput, daily_rate: Any
) -> BookingCost:
    """
    Whole-day rental span and its cost at `daily_rate`.

    The span is ceil(|end - start|) in days, so a reversed range still yields a
    positive count. Missing or unparseable input gives a zero cost. The product
    is returned unrounded.
    """
    if not start_date or not end_date or not daily_rate:
        return BookingCost()

    rate = _coerce_rate(daily_rate)
    start = parse_iso_date(start_date)
    end = parse_iso_date(end_date)
    if rate is None or start is None or end is None:
        return BookingCost()

    days = math.ceil(abs(days_between(start, end)))
    if days <= 0:
        return BookingCost()

    return BookingCost(days=days, total_cost=days * rate)
