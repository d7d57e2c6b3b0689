from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models


class Car(models.Model):
    """A listed car; its availability window bounds every booking of it."""

    title = models.CharField(max_length=100)
    description = models.TextField(max_length=1000)
    city = models.CharField(max_length=64)
    price_per_day = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal("0.00")
    )
    availability_from = models.DateField()
    availability_to = models.DateField()
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.title} ({self.city})"

    def clean(self) -> None:
        super().clean()

        if self.price_per_day is None or self.price_per_day <= 0:
            raise ValidationError(
                {"price_per_day": "Price per day must be greater than 0"}
            )

        if self.availability_from and self.availability_to:
            if self.availability_from >= self.availability_to:
                raise ValidationError(
                    {"availability_to": "End date must be after start date"}
                )


class CarImage(models.Model):
    """Metadata of an image attached to a listing. Files are hosted elsewhere."""

    car = models.ForeignKey(Car, on_delete=models.CASCADE, related_name="images")
    file_name = models.CharField(max_length=255, blank=True)
    content_type = models.CharField(max_length=32)
    size = models.PositiveIntegerField(help_text="Size in bytes")

    def __str__(self) -> str:
        return self.file_name or f"image #{self.pk}"
