from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional, Sequence, Union

from rentals.helpers.dates import DateInput, days_between, parse_iso_date, start_of_today
from rentals.helpers.fields import read_field
from rentals.helpers.validation_result import ValidationResult

MIN_TITLE_LENGTH = 3
MIN_DESCRIPTION_LENGTH = 10
MIN_CITY_LENGTH = 2
MAX_PRICE_PER_DAY = 10000
MAX_LISTING_SPAN_DAYS = 365
MAX_IMAGES = 10
MAX_IMAGE_SIZE_BYTES = 5 * 1024 * 1024
ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/webp"})


@dataclass(frozen=True)
class ImageUpload:
    """Metadata of an attached image. Django's UploadedFile has the same shape."""

    name: str = ""
    content_type: str = ""
    size: int = 0


@dataclass(frozen=True)
class ListingSubmission:
    title: Optional[str] = None
    description: Optional[str] = None
    city: Optional[str] = None
    price_per_day: Any = None
    availability_from: DateInput = None
    availability_to: DateInput = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ListingSubmission":
        return cls(
            title=read_field(data, "title"),
            description=read_field(data, "description"),
            city=read_field(data, "city"),
            price_per_day=read_field(data, "price_per_day", "pricePerDay"),
            availability_from=read_field(data, "availability_from", "availabilityFrom"),
            availability_to=read_field(data, "availability_to", "availabilityTo"),
        )


def _trimmed_length(value: Any) -> int:
    if not value:
        return 0
    return len(str(value).strip())


def _parse_price(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        price = float(str(value).strip())
    except ValueError:
        return None
    if math.isnan(price):
        return None
    return price


def _validate_images(images: Sequence[Any], result: ValidationResult) -> None:
    if not images:
        result.add("images", "At least one image is required")
        return

    if len(images) > MAX_IMAGES:
        result.add("images", f"Maximum {MAX_IMAGES} images allowed")

    for position, image in enumerate(images, start=1):
        content_type = read_field(image, "content_type", "type")
        if content_type not in ALLOWED_IMAGE_TYPES:
            result.add(
                "images",
                f"Image {position}: Only JPEG, PNG, and WebP files are allowed",
            )
            break

        size = read_field(image, "size") or 0
        if size > MAX_IMAGE_SIZE_BYTES:
            result.add("images", f"Image {position}: File size must be less than 5MB")
            break


def validate_car_listing_form(
    form: Union[ListingSubmission, Mapping[str, Any]],
    images: Optional[Sequence[Any]],
    *,
    today: Optional[date] = None,
) -> ValidationResult:
    """
    Validate a car listing submission and its attached images.

    Image checks stop at the first offending image. When several checks hit
    the same field, the last message recorded is the one reported.
    """
    if isinstance(form, Mapping):
        form = ListingSubmission.from_mapping(form)
    elif form is None:
        form = ListingSubmission()

    result = ValidationResult()

    if _trimmed_length(form.title) < MIN_TITLE_LENGTH:
        result.add("title", "Car title must be at least 3 characters")

    if _trimmed_length(form.description) < MIN_DESCRIPTION_LENGTH:
        result.add("description", "Description must be at least 10 characters")

    if _trimmed_length(form.city) < MIN_CITY_LENGTH:
        result.add("city", "City is required")

    price = _parse_price(form.price_per_day)
    if not form.price_per_day or price is None or price <= 0:
        result.add("price_per_day", "Price per day must be greater than 0")
    if price is not None and price > MAX_PRICE_PER_DAY:
        result.add("price_per_day", "Price per day seems too high (max AED 10,000)")

    if not form.availability_from:
        result.add("availability_from", "Start date is required")
    if not form.availability_to:
        result.add("availability_to", "End date is required")

    if form.availability_from and form.availability_to:
        start = parse_iso_date(form.availability_from)
        end = parse_iso_date(form.availability_to)

        if start is None:
            result.add("availability_from", "Please provide a valid availability start date")
        if end is None:
            result.add("availability_to", "Please provide a valid availability end date")

        if start is not None and end is not None:
            if start < start_of_today(today):
                result.add("availability_from", "Start date cannot be in the past")

            if start >= end:
                result.add("availability_to", "End date must be after start date")

            if days_between(start, end) > MAX_LISTING_SPAN_DAYS:
                result.add("availability_to", "Rental period cannot exceed 1 year")

    _validate_images(list(images or []), result)

    return result
