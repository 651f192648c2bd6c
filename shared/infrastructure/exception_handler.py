"""
API error rendering

Registered as ``REST_FRAMEWORK['EXCEPTION_HANDLER']``. Domain errors become
``{"detail", "code"}`` responses with the status their kind carries;
serializer validation errors share the ``invalid_input`` shape, and
integrity violations that escape validation are reported as duplicates.
Everything else is left to DRF's default handler.
"""

from __future__ import annotations

import logging

from django.db import IntegrityError  # type: ignore
from rest_framework import status  # type: ignore
from rest_framework.exceptions import ValidationError  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler as drf_exception_handler  # type: ignore

from shared.domain.exceptions import DomainError

logger = logging.getLogger(__name__)


def _request_summary(context) -> str:
    request = context.get("request") if context else None
    if request is None:
        return "-"
    user = getattr(request, "user", None)
    who = getattr(user, "email", None) or "anonymous"
    return f"{request.method} {request.path} by {who}"


def api_exception_handler(exc, context):  # type: ignore
    if isinstance(exc, DomainError):
        logger.warning(f"Rejected {_request_summary(context)}: [{exc.code}] {exc.message}")
        data = {"detail": exc.message, "code": exc.code}
        if exc.errors:
            data["errors"] = exc.errors
        return Response(data, status=exc.status_code)

    if isinstance(exc, ValidationError):
        errors = exc.detail
        if not isinstance(errors, dict):
            errors = {"non_field_errors": errors}
        logger.warning(f"Rejected {_request_summary(context)}: [invalid_input] {list(errors)}")
        return Response(
            {"detail": "Validation failed.", "code": "invalid_input", "errors": errors},
            status=status.HTTP_400_BAD_REQUEST,
        )

    if isinstance(exc, IntegrityError):
        logger.warning(f"Integrity error on {_request_summary(context)}: {exc}")
        return Response(
            {"detail": "Duplicate entry found.", "code": "integrity_error"},
            status=status.HTTP_400_BAD_REQUEST,
        )

    response = drf_exception_handler(exc, context)
    if response is None:
        logger.error(f"Unhandled error on {_request_summary(context)}: {exc}", exc_info=exc)
    return response
