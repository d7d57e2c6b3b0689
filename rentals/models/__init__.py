from rentals.models.car import Car, CarImage
from rentals.models.booking import Booking, BookingStatus, PaymentStatus

__all__ = ["Booking", "BookingStatus", "Car", "CarImage", "PaymentStatus"]
