from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import CarListingViewSet

router = DefaultRouter()
router.register(r"listings", CarListingViewSet, basename="listing")

urlpatterns = [
    path("", include(router.urls)),
]
