from django.db import IntegrityError
from rest_framework.exceptions import NotAuthenticated, ValidationError

from shared.domain.exceptions import Conflict, InvalidInput
from shared.infrastructure.exception_handler import api_exception_handler


def test_domain_error_rendered_with_code_and_status():
    response = api_exception_handler(Conflict(), {})
    assert response.status_code == 409
    assert response.data == {
        "detail": "Vehicle is already booked for the selected dates.",
        "code": "conflict",
    }


def test_field_errors_included():
    exc = InvalidInput("Invalid rental period.", errors={"end_date": ["End date must be after start date."]})
    response = api_exception_handler(exc, {})
    assert response.status_code == 400
    assert response.data["errors"] == {"end_date": ["End date must be after start date."]}


def test_integrity_error_is_bad_request():
    response = api_exception_handler(IntegrityError("UNIQUE constraint failed"), {})
    assert response.status_code == 400
    assert response.data["code"] == "integrity_error"


def test_other_errors_use_drf_defaults():
    response = api_exception_handler(NotAuthenticated(), {})
    assert response.status_code == 401


def test_serializer_errors_rendered_as_invalid_input():
    exc = ValidationError({"payment_method": ['"crypto" is not a valid choice.']})
    response = api_exception_handler(exc, {})
    assert response.status_code == 400
    assert response.data["code"] == "invalid_input"
    assert response.data["detail"] == "Validation failed."
    assert "payment_method" in response.data["errors"]


def test_non_field_validation_errors_are_keyed():
    response = api_exception_handler(ValidationError(["Dates overlap."]), {})
    assert response.data["errors"] == {"non_field_errors": ["Dates overlap."]}
