from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Tuple

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

FILS_PER_DIRHAM = 100


@dataclass(frozen=True)
class StripeConfig:
    """Stripe settings for AED card payments in the UAE."""

    secret_key: Optional[str]
    publishable_key: Optional[str]
    webhook_secret: Optional[str]
    currency: str = "aed"
    country: str = "AE"
    payment_methods: Tuple[str, ...] = ("card",)
    mode: str = "test"

    @property
    def is_configured(self) -> bool:
        return bool(self.secret_key)


def get_stripe_config() -> StripeConfig:
    return StripeConfig(
        secret_key=getattr(settings, "STRIPE_SECRET_KEY", None) or None,
        publishable_key=getattr(settings, "STRIPE_PUBLISHABLE_KEY", None) or None,
        webhook_secret=getattr(settings, "STRIPE_WEBHOOK_SECRET", None) or None,
        mode="test" if settings.DEBUG else "live",
    )


def validate_stripe_config() -> bool:
    """Raise ImproperlyConfigured unless a Stripe secret key is set."""
    if not get_stripe_config().is_configured:
        raise ImproperlyConfigured("Stripe secret key is not configured")
    return True


def _q2(value: Optional[Decimal]) -> Decimal:
    """
    Quantize a Decimal to two fractional digits using ROUND_HALF_UP.

    Args:
        value: Amount to quantize; None is treated as Decimal("0").

    Returns:
        Decimal: Quantized value with exactly two decimal places.
    """
    if value is None:
        value = Decimal("0")
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def format_amount_for_stripe(amount) -> int:
    """
    Convert an AED amount to integer fils, the unit Stripe charges in.

    Args:
        amount: Decimal, int, float or numeric string; None treated as 0.

    Returns:
        int: Amount in fils, e.g. Decimal("150.255") -> 15026.
    """
    quantized = _q2(Decimal(str(amount)) if amount is not None else None)
    fils = (quantized * FILS_PER_DIRHAM).to_integral_value(rounding=ROUND_HALF_UP)
    return int(fils)


def format_amount_from_stripe(amount_fils: int) -> Decimal:
    return _q2(Decimal(int(amount_fils or 0)) / FILS_PER_DIRHAM)
