from rentals.helpers.booking_validation import (
    BookingCost,
    BookingRequest,
    CarAvailability,
    calculate_booking_cost,
    validate_booking_form,
)
from rentals.helpers.cities import UAE_CITIES, validate_uae_city
from rentals.helpers.listing_validation import (
    ImageUpload,
    ListingSubmission,
    validate_car_listing_form,
)
from rentals.helpers.payment_methods import (
    PaymentMethod,
    format_payment_method,
    get_payment_method_icon,
)
from rentals.helpers.validation_result import ValidationResult

__all__ = [
    "BookingCost",
    "BookingRequest",
    "CarAvailability",
    "ImageUpload",
    "ListingSubmission",
    "PaymentMethod",
    "UAE_CITIES",
    "ValidationResult",
    "calculate_booking_cost",
    "format_payment_method",
    "get_payment_method_icon",
    "validate_booking_form",
    "validate_car_listing_form",
    "validate_uae_city",
]
