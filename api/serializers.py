from __future__ import annotations

from rest_framework import serializers

from rentals.models import Car, CarImage


class CarImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = CarImage
        fields = ["id", "file_name", "content_type", "size"]


class CarListingSerializer(serializers.ModelSerializer):
    images = CarImageSerializer(many=True, read_only=True)

    class Meta:
        model = Car
        fields = [
            "id",
            "title",
            "description",
            "city",
            "price_per_day",
            "availability_from",
            "availability_to",
            "is_active",
            "images",
            "created_at",
        ]


class CarListingCreateSerializer(serializers.Serializer):
    """Multipart body of a new listing; validation itself runs in the view."""

    title = serializers.CharField()
    description = serializers.CharField()
    city = serializers.CharField()
    price_per_day = serializers.DecimalField(max_digits=10, decimal_places=2)
    availability_from = serializers.DateField()
    availability_to = serializers.DateField()
    images = serializers.ListField(child=serializers.FileField(), max_length=10)
