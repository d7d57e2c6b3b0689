from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional

import stripe
from django.db import transaction
from django.utils import timezone

from payments.stripe_config import format_amount_for_stripe, get_stripe_config
from rentals.helpers.fields import read_field
from rentals.helpers.payment_methods import PaymentMethod
from rentals.models import Booking, BookingStatus, PaymentStatus

logger = logging.getLogger(__name__)

CARD_METHOD_CODES = (PaymentMethod.CARD.value, "stripe")
CASH_METHOD_CODES = (PaymentMethod.CASH.value, "cash_on_pickup")
PAYABLE_STATUSES = (BookingStatus.PENDING, BookingStatus.APPROVED)
MEETING_LOCATION_MAX_LENGTH = Booking._meta.get_field("pickup_location").max_length


class PaymentError(Exception):
    """A payment could not be processed; `code` is machine readable."""

    def __init__(self, message: str, code: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


@dataclass
class PaymentResult:
    payment_id: str
    payment_method: str
    status: str
    amount: Decimal
    currency: str
    client_secret: Optional[str] = None
    meeting_details: Dict[str, Any] = field(default_factory=dict)


def _process_card_payment(booking: Booking) -> PaymentResult:
    config = get_stripe_config()
    if not config.is_configured:
        raise PaymentError(
            "Card payments not available", "STRIPE_NOT_CONFIGURED", status_code=500
        )

    amount = booking.total_amount
    try:
        intent = stripe.PaymentIntent.create(
            api_key=config.secret_key,
            amount=format_amount_for_stripe(amount),
            currency=config.currency,
            payment_method_types=list(config.payment_methods),
            metadata={
                "booking_id": str(booking.pk),
                "car_id": str(booking.car_id),
                "car_title": booking.car.title,
                "number_of_days": str(booking.total_days),
            },
        )
    except stripe.StripeError as exc:
        logger.warning("Stripe rejected payment for booking %s: %s", booking.pk, exc)
        message = getattr(exc, "user_message", None) or str(exc)
        raise PaymentError(message, "STRIPE_ERROR") from exc

    booking.payment_method = PaymentMethod.CARD
    booking.payment_status = PaymentStatus.PAID
    booking.status = BookingStatus.CONFIRMED
    booking.payment_intent_id = intent.id
    booking.paid_at = timezone.now()
    booking.save(
        update_fields=[
            "payment_method",
            "payment_status",
            "status",
            "payment_intent_id",
            "paid_at",
        ]
    )

    return PaymentResult(
        payment_id=intent.id,
        payment_method=PaymentMethod.CARD.value,
        status="completed",
        amount=amount,
        currency=config.currency,
        client_secret=intent.client_secret,
    )


def _process_cash_payment(booking: Booking, cash_details: Any) -> PaymentResult:
    meeting_location = str(
        read_field(cash_details, "meeting_location", "meetingLocation") or ""
    ).strip()
    if not meeting_location:
        raise PaymentError("Cash payment details are required", "MISSING_CASH_DETAILS")
    if len(meeting_location) > MEETING_LOCATION_MAX_LENGTH:
        raise PaymentError(
            f"Meeting location must be at most {MEETING_LOCATION_MAX_LENGTH} characters",
            "INVALID_CASH_DETAILS",
        )

    amount = booking.total_amount

    booking.payment_method = PaymentMethod.CASH
    booking.payment_status = PaymentStatus.PENDING
    booking.status = BookingStatus.APPROVED
    booking.pickup_location = meeting_location
    booking.save(
        update_fields=["payment_method", "payment_status", "status", "pickup_location"]
    )

    currency = get_stripe_config().currency
    return PaymentResult(
        payment_id=f"cash_{secrets.token_hex(8)}",
        payment_method=PaymentMethod.CASH.value,
        status="pending_pickup",
        amount=amount,
        currency=currency,
        meeting_details={
            "location": meeting_location,
            "time": read_field(cash_details, "meeting_time", "meetingTime"),
            "notes": read_field(cash_details, "notes"),
            "amount": amount,
            "currency": currency,
        },
    )


@transaction.atomic
def process_payment(
    booking: Booking, payment_method: str, cash_details: Any = None
) -> PaymentResult:
    """
    Settle a booking by card (Stripe PaymentIntent) or cash on meeting.

    Card payments mark the booking paid and confirmed once the intent is
    created. Cash payments leave it pending payment, approved, with the pickup
    location moved to the agreed meeting point.

    The booking row is locked for the duration. Only unpaid bookings that are
    pending or approved can be paid.

    Raises:
        PaymentError: booking already paid or no longer payable, unsupported
            method, missing or invalid cash details, Stripe not configured,
            or Stripe rejecting the request.
    """
    booking = (
        Booking.objects.select_for_update()
        .select_related("car")
        .get(pk=booking.pk)
    )

    if booking.payment_status == PaymentStatus.PAID:
        raise PaymentError("Booking is already paid", "ALREADY_PAID", status_code=409)
    if booking.status not in PAYABLE_STATUSES:
        raise PaymentError(
            f"Booking cannot be paid while {booking.status}",
            "INVALID_BOOKING_STATUS",
            status_code=409,
        )

    logger.info(
        "Processing %s payment for booking %s (%s AED)",
        payment_method,
        booking.pk,
        booking.total_amount,
    )

    if payment_method in CARD_METHOD_CODES:
        return _process_card_payment(booking)
    if payment_method in CASH_METHOD_CODES:
        return _process_cash_payment(booking, cash_details)

    raise PaymentError(
        "Unsupported payment method. Only cash and card payments are accepted.",
        "INVALID_PAYMENT_METHOD",
    )
