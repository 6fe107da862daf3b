"""Map domain errors to HTTP responses.

Installed as DRF's EXCEPTION_HANDLER. Error bodies carry the error code and
the user-safe message only.
"""

import logging

from django.http import HttpResponseRedirect
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from theater.domain.errors import DomainError, ErrorCode

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    ErrorCode.SHOWTIME_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.SEAT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ACCOUNT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.MOVIE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.THEATER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_RECORD_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_TICKET_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.SEAT_UNAVAILABLE: status.HTTP_409_CONFLICT,
    ErrorCode.ACCOUNT_EXISTS: status.HTTP_409_CONFLICT,
}

GENERIC_FAILURE = {"code": "INTERNAL_ERROR", "message": "Something went wrong"}


def exception_handler(exc, context):
    """Render DomainErrors; defer everything else to DRF.

    A view with a ``login_url`` sends unauthenticated callers there instead
    of answering 401.
    """
    if not isinstance(exc, DomainError):
        return drf_exception_handler(exc, context)

    view = context.get("view")
    if exc.code is ErrorCode.UNAUTHENTICATED and getattr(view, "login_url", None):
        return HttpResponseRedirect(view.login_url)

    http_status = STATUS_BY_CODE.get(exc.code)
    if http_status is None:
        logger.error("Request failed: %s", exc, exc_info=exc)
        return Response(GENERIC_FAILURE, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response({"code": exc.code.value, "message": exc.message}, status=http_status)
