from __future__ import annotations

from types import MappingProxyType
from typing import Optional

from django.db.models import TextChoices


class PaymentMethod(TextChoices):
    """Payment methods a renter can pick when booking."""

    CARD = "Card", "Card"
    CASH = "Cash", "Cash"


PAYMENT_METHOD_LABELS = MappingProxyType(
    {
        "credit_card": "Credit Card",
        "debit_card": "Debit Card",
        "card": "Credit/Debit Card",
        "cash_on_delivery": "Cash on Meet",
        "cash": "Cash on Meet",
        "bank_transfer": "Bank Transfer",
        "paypal": "PayPal",
    }
)

PAYMENT_METHOD_ICONS = MappingProxyType(
    {
        "cash_on_delivery": "💵",
        "cash": "💵",
        "paypal": "🅿️",
        "bank_transfer": "🏦",
    }
)

UNKNOWN_PAYMENT_METHOD_LABEL = "Unknown"
DEFAULT_PAYMENT_METHOD_ICON = "💳"


def format_payment_method(method: Optional[str]) -> str:
    """Display label for a payment method code; "Unknown" for anything unrecognized."""
    return PAYMENT_METHOD_LABELS.get(method, UNKNOWN_PAYMENT_METHOD_LABEL)


def get_payment_method_icon(method: Optional[str]) -> str:
    return PAYMENT_METHOD_ICONS.get(method, DEFAULT_PAYMENT_METHOD_ICON)
