# inventory/views/errors.py

"""
API ERROR NORMALIZATION

Every inventory endpoint answers failures with:
    {"error": {"code": "<CODE>", "message": "<text>"}}
"""

from rest_framework import status
from rest_framework.response import Response

from inventory.services.exceptions import InventoryServiceError

ERROR_STATUS = {
    "INVALID_ARGUMENT": status.HTTP_400_BAD_REQUEST,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INSUFFICIENT_STOCK": status.HTTP_400_BAD_REQUEST,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "INTERNAL": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(*, code: str, message: str, http_status: int):
    """
    Canonical API error response.
    """
    return Response(
        {"error": {"code": code, "message": message}},
        status=http_status,
    )


def service_error_response(exc: InventoryServiceError):
    http_status = ERROR_STATUS.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    message = str(exc)
    if http_status >= 500:
        # storage details stay in the logs
        message = "Internal server error"
    return error_response(code=exc.code, message=message, http_status=http_status)


def validation_error_response(errors):
    """Flatten serializer errors into one INVALID_ARGUMENT message."""
    parts = []
    for name, messages in errors.items():
        if isinstance(messages, (list, tuple)):
            text = " ".join(str(m) for m in messages)
        else:
            text = str(messages)
        parts.append(text if name == "non_field_errors" else f"{name}: {text}")

    return error_response(
        code="INVALID_ARGUMENT",
        message="; ".join(parts) or "Invalid request",
        http_status=status.HTTP_400_BAD_REQUEST,
    )
