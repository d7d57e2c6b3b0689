from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from django.db import transaction

from rentals.models import Booking, BookingStatus

logger = logging.getLogger(__name__)


class TransitionError(Exception):
    """Raised when a booking cannot move to the requested status."""

    def __init__(self, message: str, code: str = "INVALID_STATUS_CHANGE") -> None:
        super().__init__(message)
        self.message = message
        self.code = code


@dataclass(frozen=True)
class Transition:
    to_status: str
    allowed_from: Iterable[str]


TRANSITIONS = {
    BookingStatus.APPROVED: Transition(
        to_status=BookingStatus.APPROVED,
        allowed_from=[BookingStatus.PENDING],
    ),
    BookingStatus.REJECTED: Transition(
        to_status=BookingStatus.REJECTED,
        allowed_from=[BookingStatus.PENDING],
    ),
    BookingStatus.ACTIVE: Transition(
        to_status=BookingStatus.ACTIVE,
        allowed_from=[BookingStatus.APPROVED, BookingStatus.CONFIRMED],
    ),
    BookingStatus.COMPLETED: Transition(
        to_status=BookingStatus.COMPLETED,
        allowed_from=[BookingStatus.CONFIRMED, BookingStatus.ACTIVE],
    ),
    BookingStatus.CANCELLED: Transition(
        to_status=BookingStatus.CANCELLED,
        allowed_from=BookingStatus.blocking(),
    ),
}


def _check_cancellable(booking: Booking) -> None:
    if booking.status == BookingStatus.CANCELLED:
        raise TransitionError("Booking is already cancelled", "ALREADY_CANCELLED")
    if booking.status == BookingStatus.COMPLETED:
        raise TransitionError("Cannot cancel a completed booking", "BOOKING_COMPLETED")


@transaction.atomic
def transition_booking(
    *,
    booking_id: int,
    to_status: str,
    reason: Optional[str] = None,
) -> Booking:
    """
    Move a booking to `to_status` under a row lock.

    Cancelling records `reason` when given. Bookings that are cancelled,
    completed, rejected or expired never come back.

    Raises:
        TransitionError: unknown target status, or the booking's current
            status does not allow the move.
        Booking.DoesNotExist: no booking with `booking_id`.
    """
    if to_status not in TRANSITIONS:
        raise TransitionError(f"Unknown booking status '{to_status}'.", "INVALID_STATUS")

    rule = TRANSITIONS[to_status]

    booking = (
        Booking.objects.select_for_update()
        .select_related("car")
        .get(pk=booking_id)
    )

    if rule.to_status == BookingStatus.CANCELLED:
        _check_cancellable(booking)

    if booking.status not in rule.allowed_from:
        raise TransitionError(
            f"Cannot move booking {booking.pk} from {booking.status} to {rule.to_status}."
        )

    update_fields = ["status"]
    booking.status = rule.to_status
    if rule.to_status == BookingStatus.CANCELLED and reason:
        booking.cancellation_reason = reason
        update_fields.append("cancellation_reason")
    booking.save(update_fields=update_fields)

    logger.info("Booking %s moved to %s", booking.pk, booking.status)
    return booking
