import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status

logger = logging.getLogger(__name__)


def _normalize_validation_error(err: DjangoValidationError):
    # field -> [errors] when raised with a dict, a flat list otherwise
    if hasattr(err, "error_dict"):
        return err.message_dict
    return {"non_field_errors": err.messages}


def custom_exception_handler(exc, context):
    """
    Maps common server-side exceptions to clean JSON responses.
    Falls back to DRF's default; if still None, logs and returns a generic 500.
    """
    if isinstance(exc, DjangoValidationError):
        return Response({"errors": _normalize_validation_error(exc)}, status=status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, IntegrityError):
        return Response(
            {"errors": {"non_field_errors": ["Operation could not be completed due to a data integrity constraint."]}},
            status=status.HTTP_400_BAD_REQUEST,
        )

    response = exception_handler(exc, context)
    if response is not None:
        if isinstance(response.data, dict) and "detail" in response.data:
            response.data = {"detail": response.data["detail"]}
        return response

    logger.exception("Unhandled error in %s", context.get("view").__class__.__name__)
    return Response({"detail": "Unexpected server error. Please try again later."}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
