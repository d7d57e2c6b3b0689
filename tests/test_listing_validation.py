from datetime import date

from rentals.helpers import ImageUpload, ListingSubmission, validate_car_listing_form

TODAY = date(2025, 3, 10)
FIVE_MB = 5 * 1024 * 1024


def make_form(**overrides) -> ListingSubmission:
    fields = {
        "title": "Nissan Patrol 2023",
        "description": "Seven seats, desert ready, full insurance included.",
        "city": "Abu Dhabi",
        "price_per_day": "450",
        "availability_from": "2025-03-11",
        "availability_to": "2025-06-11",
    }
    fields.update(overrides)
    return ListingSubmission(**fields)


def jpeg(size=200_000, name="front.jpg") -> ImageUpload:
    return ImageUpload(name=name, content_type="image/jpeg", size=size)


def test_valid_listing():
    result = validate_car_listing_form(make_form(), [jpeg()], today=TODAY)

    assert result.is_valid
    assert result.errors == {}


def test_short_text_fields():
    form = make_form(title=" ab ", description="too short", city="D")

    result = validate_car_listing_form(form, [jpeg()], today=TODAY)

    assert result.errors == {
        "title": "Car title must be at least 3 characters",
        "description": "Description must be at least 10 characters",
        "city": "City is required",
    }


def test_price_must_be_positive_number():
    for price in (None, "", "abc", "0", "-5"):
        result = validate_car_listing_form(make_form(price_per_day=price), [jpeg()], today=TODAY)
        assert result.errors == {"price_per_day": "Price per day must be greater than 0"}


def test_price_ceiling():
    result = validate_car_listing_form(make_form(price_per_day="10000.01"), [jpeg()], today=TODAY)

    assert result.errors == {"price_per_day": "Price per day seems too high (max AED 10,000)"}


def test_price_at_ceiling_is_allowed():
    result = validate_car_listing_form(make_form(price_per_day=10000), [jpeg()], today=TODAY)

    assert result.is_valid


def test_missing_availability_dates():
    form = make_form(availability_from=None, availability_to="")

    result = validate_car_listing_form(form, [jpeg()], today=TODAY)

    assert result.errors == {
        "availability_from": "Start date is required",
        "availability_to": "End date is required",
    }


def test_availability_in_the_past_and_reversed():
    form = make_form(availability_from="2025-03-01", availability_to="2025-02-01")

    result = validate_car_listing_form(form, [jpeg()], today=TODAY)

    assert result.errors == {
        "availability_from": "Start date cannot be in the past",
        "availability_to": "End date must be after start date",
    }


def test_availability_longer_than_a_year():
    form = make_form(availability_from="2025-03-11", availability_to="2026-03-12")

    result = validate_car_listing_form(form, [jpeg()], today=TODAY)

    assert result.errors == {"availability_to": "Rental period cannot exceed 1 year"}


def test_availability_of_exactly_365_days_is_allowed():
    form = make_form(availability_from="2025-03-11", availability_to="2026-03-11")

    assert validate_car_listing_form(form, [jpeg()], today=TODAY).is_valid


def test_unparseable_availability_dates():
    form = make_form(availability_from="soon", availability_to="later")

    result = validate_car_listing_form(form, [jpeg()], today=TODAY)

    assert result.errors == {
        "availability_from": "Please provide a valid availability start date",
        "availability_to": "Please provide a valid availability end date",
    }


def test_at_least_one_image():
    for images in (None, []):
        result = validate_car_listing_form(make_form(), images, today=TODAY)
        assert result.errors == {"images": "At least one image is required"}


def test_more_than_ten_images():
    images = [jpeg(name=f"{i}.jpg") for i in range(11)]

    result = validate_car_listing_form(make_form(), images, today=TODAY)

    assert result.errors == {"images": "Maximum 10 images allowed"}


def test_oversized_image_is_named_by_position():
    result = validate_car_listing_form(make_form(), [jpeg(size=FIVE_MB + 1)], today=TODAY)

    assert result.errors == {"images": "Image 1: File size must be less than 5MB"}


def test_image_of_exactly_five_megabytes_is_allowed():
    result = validate_car_listing_form(make_form(), [jpeg(size=FIVE_MB)], today=TODAY)

    assert result.is_valid


def test_first_offending_image_wins():
    images = [
        jpeg(),
        ImageUpload(name="scan.gif", content_type="image/gif", size=1000),
        jpeg(size=FIVE_MB * 2),
    ]

    result = validate_car_listing_form(make_form(), images, today=TODAY)

    assert result.errors == {"images": "Image 2: Only JPEG, PNG, and WebP files are allowed"}


def test_bad_image_overrides_too_many_images_message():
    images = [jpeg() for _ in range(10)] + [jpeg(size=FIVE_MB + 1)]

    result = validate_car_listing_form(make_form(), images, today=TODAY)

    assert result.errors == {"images": "Image 11: File size must be less than 5MB"}


def test_all_allowed_mime_types_and_mapping_images():
    images = [
        {"type": "image/jpeg", "size": 10},
        {"type": "image/jpg", "size": 10},
        {"content_type": "image/png", "size": 10},
        ImageUpload(content_type="image/webp", size=10),
    ]

    assert validate_car_listing_form(make_form(), images, today=TODAY).is_valid


def test_mapping_form_with_camel_case_keys():
    form = {
        "title": "Kia Picanto",
        "description": "Small, cheap and easy to park anywhere.",
        "city": "Sharjah",
        "pricePerDay": 90,
        "availabilityFrom": "2025-03-10",
        "availabilityTo": "2025-04-10",
    }

    assert validate_car_listing_form(form, [jpeg()], today=TODAY).is_valid
