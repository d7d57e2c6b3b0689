from django.contrib import admin

from rentals.models import Booking, Car, CarImage


class CarImageInline(admin.TabularInline):
    model = CarImage
    fields = ("file_name", "content_type", "size")
    extra = 0


@admin.register(Car)
class CarAdmin(admin.ModelAdmin):
    list_display = ("title", "city", "price_per_day", "availability_from", "availability_to", "is_active")
    list_filter = ("city", "is_active")
    search_fields = ("title", "city")
    inlines = [CarImageInline]


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "car",
        "renter_email",
        "start_date",
        "end_date",
        "total_amount",
        "payment_method",
        "payment_status",
        "status",
    )
    list_filter = ("status", "payment_status", "payment_method")
    search_fields = ("renter_email", "car__title")
    readonly_fields = ("total_days", "daily_rate", "total_amount", "payment_intent_id", "paid_at")
