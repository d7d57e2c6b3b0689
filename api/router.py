from ninja import NinjaAPI

from .endpoints import register_routes

api = NinjaAPI(
    title="BorrowMyCar API",
    version="1.0.0",
    description="Booking validation, quotes, bookings and payments for UAE car rentals.",
    urls_namespace="rentals-api",
)

register_routes(api)
