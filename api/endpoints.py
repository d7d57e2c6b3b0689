import logging
from dataclasses import asdict
from typing import List

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.shortcuts import get_object_or_404

from payments.services import PaymentError, process_payment
from payments.stripe_config import get_stripe_config
from rentals.helpers import (
    UAE_CITIES,
    calculate_booking_cost,
    format_payment_method,
    get_payment_method_icon,
    validate_booking_form,
    validate_uae_city,
)
from rentals.helpers.dates import parse_iso_date
from rentals.helpers.payment_methods import PAYMENT_METHOD_LABELS
from rentals.models import Booking, BookingStatus, Car
from rentals.services import TransitionError, transition_booking
from .schemas import (
    BookedRangeOut, BookingCreate, BookingOut, BookingValidateIn, CancelIn,
    CarAvailabilityOut, CityCheckOut, PaymentIn, PaymentMethodOut, PaymentOut,
    QuoteIn, QuoteOut, StatusUpdateIn, StripeConfigOut, ValidationOut,
)

logger = logging.getLogger(__name__)


def _booking_out(booking: Booking) -> BookingOut:
    return BookingOut(
        id=booking.pk,
        car_id=booking.car_id,
        car_title=booking.car.title,
        renter_email=booking.renter_email,
        start_date=str(booking.start_date),
        end_date=str(booking.end_date),
        total_days=booking.total_days,
        daily_rate=booking.daily_rate,
        total_amount=booking.total_amount,
        pickup_location=booking.pickup_location,
        return_location=booking.return_location,
        payment_method=booking.payment_method,
        payment_method_label=format_payment_method(booking.payment_method.lower()),
        payment_status=booking.payment_status,
        status=booking.status,
        cancellation_reason=booking.cancellation_reason,
    )


def register_routes(api):
    # --- Bookings ---
    @api.post("/bookings/validate", response=ValidationOut)
    def validate_booking(request, data: BookingValidateIn):
        """
        Run the booking form checks without creating anything.
        With `car_id`, the dates are also checked against the car's availability.
        """
        car = get_object_or_404(Car, pk=data.car_id) if data.car_id else None
        result = validate_booking_form(data.model_dump(exclude={"car_id"}), car)
        return ValidationOut(**result.as_dict())

    @api.post("/bookings/quote", response=QuoteOut)
    def quote_booking(request, data: QuoteIn):
        daily_rate = data.daily_rate
        if data.car_id:
            daily_rate = get_object_or_404(Car, pk=data.car_id).price_per_day

        cost = calculate_booking_cost(data.start_date, data.end_date, daily_rate)
        return QuoteOut(
            days=cost.days,
            total_cost=cost.total_cost,
            currency=settings.RENTALS_CURRENCY,
        )

    @api.post("/bookings", response={201: BookingOut})
    def create_booking(request, data: BookingCreate):
        car = get_object_or_404(Car, pk=data.car_id)
        if not car.is_active:
            return api.create_response(
                request,
                {"detail": "Car is not available for booking", "code": "CAR_INACTIVE"},
                status=400,
            )

        validation = validate_booking_form(data.model_dump(), car)
        if not validation.is_valid:
            return api.create_response(request, {"errors": validation.errors}, status=400)

        start_date = parse_iso_date(data.start_date).date()
        end_date = parse_iso_date(data.end_date).date()

        try:
            with transaction.atomic():
                # concurrent bookings of the same car queue on this lock
                car = Car.objects.select_for_update().get(pk=car.pk)

                if Booking.conflicts_exist(car, start_date, end_date):
                    logger.info(
                        "Booking conflict for car %s (%s -> %s)", car.pk, start_date, end_date
                    )
                    return api.create_response(
                        request,
                        {
                            "detail": "Car is already booked for the selected dates",
                            "code": "BOOKING_CONFLICT",
                        },
                        status=409,
                    )

                booking = Booking.objects.create(
                    car=car,
                    renter_email=data.renter_email,
                    renter_notes=data.renter_notes,
                    start_date=start_date,
                    end_date=end_date,
                    pickup_location=data.pickup_location.strip(),
                    return_location=data.return_location.strip(),
                    payment_method=data.payment_method,
                )
        except ValidationError as e:
            return api.create_response(request, {"errors": e.message_dict}, status=400)

        return 201, _booking_out(booking)

    @api.get("/bookings/{booking_id}", response=BookingOut)
    def get_booking(request, booking_id: int):
        booking = get_object_or_404(Booking.objects.select_related("car"), pk=booking_id)
        return _booking_out(booking)

    def _transition(request, booking_id: int, to_status: str, reason=None):
        get_object_or_404(Booking, pk=booking_id)
        try:
            booking = transition_booking(
                booking_id=booking_id, to_status=to_status, reason=reason
            )
        except TransitionError as e:
            return api.create_response(
                request, {"detail": e.message, "code": e.code}, status=400
            )
        except ValidationError as e:
            return api.create_response(request, {"errors": e.message_dict}, status=400)
        return _booking_out(booking)

    @api.patch("/bookings/{booking_id}/cancel", response=BookingOut)
    def cancel_booking(request, booking_id: int, data: CancelIn):
        return _transition(
            request, booking_id, BookingStatus.CANCELLED, data.cancellation_reason
        )

    @api.patch("/bookings/{booking_id}/status", response=BookingOut)
    def update_booking_status(request, booking_id: int, data: StatusUpdateIn):
        """Move a booking along its lifecycle; see `rentals.services.TRANSITIONS`."""
        return _transition(request, booking_id, data.status)

    # --- Payments ---
    @api.post("/bookings/{booking_id}/payment", response=PaymentOut)
    def pay_booking(request, booking_id: int, data: PaymentIn):
        booking = get_object_or_404(Booking, pk=booking_id)
        cash_details = data.cash_details.model_dump() if data.cash_details else None
        try:
            result = process_payment(booking, data.payment_method, cash_details)
        except PaymentError as e:
            return api.create_response(
                request, {"detail": e.message, "code": e.code}, status=e.status_code
            )
        except ValidationError as e:
            return api.create_response(request, {"errors": e.message_dict}, status=400)
        return PaymentOut(**asdict(result))

    @api.get("/payments/config", response=StripeConfigOut)
    def payment_config(request):
        config = get_stripe_config()
        if not config.publishable_key:
            return api.create_response(
                request,
                {"detail": "Payment system not configured", "code": "STRIPE_NOT_CONFIGURED"},
                status=500,
            )
        return StripeConfigOut(
            publishable_key=config.publishable_key,
            currency=config.currency,
            country=config.country,
        )

    @api.get("/payment-methods", response=List[PaymentMethodOut])
    def payment_methods(request):
        return [
            PaymentMethodOut(
                code=code,
                label=format_payment_method(code),
                icon=get_payment_method_icon(code),
            )
            for code in PAYMENT_METHOD_LABELS
        ]

    # --- Cities ---
    @api.get("/cities", response=List[str])
    def list_cities(request):
        return sorted(UAE_CITIES)

    @api.get("/cities/validate", response=CityCheckOut)
    def check_city(request, city: str):
        return CityCheckOut(city=city, valid=validate_uae_city(city))

    # --- Cars ---
    @api.get("/cars/{car_id}/availability", response=CarAvailabilityOut)
    def car_availability(request, car_id: int):
        """The car's listing window plus the ranges held by blocking bookings."""
        car = get_object_or_404(Car, pk=car_id)
        bookings = car.bookings.filter(status__in=BookingStatus.blocking()).order_by(
            "start_date"
        )
        return CarAvailabilityOut(
            car_id=car.pk,
            availability_from=str(car.availability_from),
            availability_to=str(car.availability_to),
            unavailable_dates=[
                BookedRangeOut(
                    start_date=str(b.start_date),
                    end_date=str(b.end_date),
                    status=b.status,
                )
                for b in bookings
            ],
        )
