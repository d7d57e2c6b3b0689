from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from rentals.models import Car


@pytest.fixture(autouse=True)
def stripe_credentials(settings):
    """Fake Stripe keys so nothing ever reaches the real API."""
    settings.STRIPE_SECRET_KEY = "sk_test_mock"
    settings.STRIPE_PUBLISHABLE_KEY = "pk_test_mock"
    settings.STRIPE_WEBHOOK_SECRET = "whsec_test_mock"
    return settings


@pytest.fixture
def today():
    return timezone.localdate()


@pytest.fixture
def make_car(db, today):
    def _make_car(**overrides):
        fields = {
            "title": "Toyota Camry 2022",
            "description": "Clean sedan, full insurance, Dubai Marina pickup.",
            "city": "Dubai Marina",
            "price_per_day": Decimal("150.00"),
            "availability_from": today + timedelta(days=1),
            "availability_to": today + timedelta(days=30),
        }
        fields.update(overrides)
        return Car.objects.create(**fields)

    return _make_car


@pytest.fixture
def car(make_car):
    return make_car()
