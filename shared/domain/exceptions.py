"""
Domain Errors

Every rejected booking or payment operation raises one of these. They abort
the enclosing transaction and are rendered for API clients by
``shared.infrastructure.exception_handler``.
"""

from typing import Dict, List, Optional


class DomainError(Exception):
    """Base class for errors surfaced to the caller as a rejected operation."""

    code = 'domain_error'
    status_code = 400
    default_message = 'Operation rejected.'

    def __init__(self, message: Optional[str] = None, errors: Optional[Dict[str, List[str]]] = None):
        self.message = message or self.default_message
        self.errors = errors or {}
        super().__init__(self.message)


class InvalidInput(DomainError):
    """Malformed or semantically invalid request data."""

    code = 'invalid_input'
    status_code = 400
    default_message = 'Validation failed.'


class NotFound(DomainError):
    """Referenced object does not exist or is not visible to the caller."""

    code = 'not_found'
    status_code = 404
    default_message = 'Not found.'


class Unavailable(DomainError):
    """Vehicle is flagged unavailable at booking time."""

    code = 'unavailable'
    status_code = 409
    default_message = 'Vehicle is not available.'


class Conflict(DomainError):
    """Requested period overlaps an existing blocking reservation."""

    code = 'conflict'
    status_code = 409
    default_message = 'Vehicle is already booked for the selected dates.'


class CostMismatch(DomainError):
    """Claimed total cost differs from the computed one beyond tolerance."""

    code = 'cost_mismatch'
    status_code = 400
    default_message = 'Total cost calculation is incorrect.'


class AmountMismatch(DomainError):
    """Payment amount differs from the reservation total beyond tolerance."""

    code = 'amount_mismatch'
    status_code = 400
    default_message = 'Payment amount does not match reservation total.'


class AlreadyExists(DomainError):
    """A payment already exists for the target reservation."""

    code = 'already_exists'
    status_code = 409
    default_message = 'Payment already exists for this reservation.'
