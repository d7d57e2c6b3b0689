from decimal import Decimal
from typing import Any, Dict, List, Optional

from ninja import Schema


class BookingIn(Schema):
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    pickup_location: Optional[str] = None
    return_location: Optional[str] = None
    payment_method: Optional[str] = None


class BookingValidateIn(BookingIn):
    car_id: Optional[int] = None


class BookingCreate(BookingIn):
    car_id: int
    renter_email: str = ""
    renter_notes: str = ""


class ValidationOut(Schema):
    is_valid: bool
    errors: Dict[str, str]


class QuoteIn(Schema):
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    car_id: Optional[int] = None
    daily_rate: Optional[Decimal] = None


class QuoteOut(Schema):
    days: int
    total_cost: Decimal
    currency: str


class BookingOut(Schema):
    id: int
    car_id: int
    car_title: str
    renter_email: str
    start_date: str
    end_date: str
    total_days: int
    daily_rate: Decimal
    total_amount: Decimal
    pickup_location: str
    return_location: str
    payment_method: str
    payment_method_label: str
    payment_status: str
    status: str
    cancellation_reason: str = ""


class CancelIn(Schema):
    cancellation_reason: Optional[str] = None


class StatusUpdateIn(Schema):
    status: str


class BookedRangeOut(Schema):
    start_date: str
    end_date: str
    status: str


class CarAvailabilityOut(Schema):
    car_id: int
    availability_from: str
    availability_to: str
    unavailable_dates: List[BookedRangeOut]


class CashDetailsIn(Schema):
    meeting_location: Optional[str] = None
    meeting_time: Optional[str] = None
    notes: Optional[str] = None


class PaymentIn(Schema):
    payment_method: str
    cash_details: Optional[CashDetailsIn] = None


class PaymentOut(Schema):
    payment_id: str
    payment_method: str
    status: str
    amount: Decimal
    currency: str
    client_secret: Optional[str] = None
    meeting_details: Dict[str, Any] = {}


class StripeConfigOut(Schema):
    publishable_key: str
    currency: str
    country: str


class PaymentMethodOut(Schema):
    code: str
    label: str
    icon: str


class CityCheckOut(Schema):
    city: str
    valid: bool


class ErrorOut(Schema):
    detail: str
    code: Optional[str] = None
