from __future__ import annotations

import logging
from decimal import Decimal

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiResponse
from rest_framework import mixins, status, viewsets
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from rentals.helpers import validate_car_listing_form, validate_uae_city
from rentals.helpers.dates import parse_iso_date
from rentals.models import Car, CarImage
from .serializers import CarListingCreateSerializer, CarListingSerializer

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(summary="List active car listings"),
    retrieve=extend_schema(summary="Get a car listing"),
)
class CarListingViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    queryset = Car.objects.filter(is_active=True).prefetch_related("images")
    serializer_class = CarListingSerializer
    permission_classes = [AllowAny]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    @extend_schema(
        summary="Submit a new car listing",
        request={"multipart/form-data": CarListingCreateSerializer},
        responses={
            201: CarListingSerializer,
            400: OpenApiResponse(description="Field errors keyed by field name"),
        },
    )
    def create(self, request, *args, **kwargs):
        images = request.FILES.getlist("images")
        result = validate_car_listing_form(request.data, images)
        if not result.is_valid:
            raise DjangoValidationError(result.errors)

        city = request.data.get("city")
        if not validate_uae_city(city):
            raise DjangoValidationError({"city": "Please select a valid UAE city"})

        price_value = request.data.get("price_per_day") or request.data.get("pricePerDay")
        from_value = request.data.get("availability_from") or request.data.get("availabilityFrom")
        to_value = request.data.get("availability_to") or request.data.get("availabilityTo")

        with transaction.atomic():
            car = Car(
                title=request.data.get("title").strip(),
                description=request.data.get("description").strip(),
                city=city,
                price_per_day=Decimal(str(price_value).strip()),
                availability_from=parse_iso_date(from_value).date(),
                availability_to=parse_iso_date(to_value).date(),
            )
            car.full_clean()
            car.save()
            CarImage.objects.bulk_create(
                [
                    CarImage(
                        car=car,
                        file_name=getattr(image, "name", "") or "",
                        content_type=image.content_type,
                        size=image.size,
                    )
                    for image in images
                ]
            )

        logger.info("Listing %s created in %s with %d image(s)", car.pk, car.city, len(images))
        serializer = CarListingSerializer(car)
        return Response(serializer.data, status=status.HTTP_201_CREATED)
