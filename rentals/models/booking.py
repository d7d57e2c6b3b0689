from __future__ import annotations

from decimal import Decimal
from typing import Optional

from django.core.exceptions import ValidationError
from django.db import models

from rentals.helpers.booking_validation import calculate_booking_cost
from rentals.helpers.payment_methods import PaymentMethod
from rentals.models.car import Car

PRICING_FIELDS = frozenset(
    {"car", "start_date", "end_date", "daily_rate", "total_days", "total_amount"}
)


class BookingStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    APPROVED = "approved", "Approved"
    CONFIRMED = "confirmed", "Confirmed"
    ACTIVE = "active", "Active"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"
    REJECTED = "rejected", "Rejected"
    EXPIRED = "expired", "Expired"

    @classmethod
    def blocking(cls) -> list[str]:
        return [cls.PENDING, cls.APPROVED, cls.CONFIRMED, cls.ACTIVE]


class PaymentStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    PAID = "paid", "Paid"
    FAILED = "failed", "Failed"
    REFUNDED = "refunded", "Refunded"
    PARTIAL = "partial", "Partial"


class Booking(models.Model):
    car = models.ForeignKey(Car, on_delete=models.CASCADE, related_name="bookings")
    renter_email = models.EmailField(blank=True)

    start_date = models.DateField()
    end_date = models.DateField()
    total_days = models.PositiveIntegerField(default=0)

    daily_rate = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )
    total_amount = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )

    pickup_location = models.CharField(max_length=200)
    return_location = models.CharField(max_length=200)

    payment_method = models.CharField(
        max_length=8, choices=PaymentMethod.choices, default=PaymentMethod.CASH
    )
    payment_status = models.CharField(
        max_length=16, choices=PaymentStatus.choices, default=PaymentStatus.PENDING
    )
    status = models.CharField(
        max_length=16, choices=BookingStatus.choices, default=BookingStatus.PENDING
    )
    payment_intent_id = models.CharField(max_length=255, blank=True)
    paid_at = models.DateTimeField(null=True, blank=True)

    renter_notes = models.TextField(max_length=500, blank=True)
    cancellation_reason = models.TextField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["car", "status"], name="booking_car_status_idx"),
            models.Index(fields=["start_date", "end_date"], name="booking_dates_idx"),
        ]

    def clean(self) -> None:
        super().clean()
        if self.start_date and self.end_date and self.start_date >= self.end_date:
            raise ValidationError({"end_date": "End date must be after start date"})

    @classmethod
    def conflicts_exist(
        cls, car: Car, start_date, end_date, exclude_pk: Optional[int] = None
    ) -> bool:
        """True when a blocking booking of `car` overlaps [start_date, end_date)."""
        overlapping_qs = cls.objects.filter(
            car=car,
            status__in=BookingStatus.blocking(),
            start_date__lt=end_date,
            end_date__gt=start_date,
        )
        if exclude_pk is not None:
            overlapping_qs = overlapping_qs.exclude(pk=exclude_pk)
        return overlapping_qs.exists()

    def save(self, *args, **kwargs):
        self.full_clean()

        # status-only updates keep the price the booking was made at
        update_fields = kwargs.get("update_fields")
        if update_fields is None or PRICING_FIELDS.intersection(update_fields):
            self._compute_total_price()

        return super().save(*args, **kwargs)

    def _compute_total_price(self) -> None:
        self.daily_rate = self.car.price_per_day
        cost = calculate_booking_cost(self.start_date, self.end_date, self.daily_rate)
        self.total_days = cost.days
        self.total_amount = Decimal(cost.total_cost)

    def __str__(self) -> str:
        return f"{self.car} ({self.start_date} -> {self.end_date})"
