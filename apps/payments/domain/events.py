"""
Payment Domain Events
"""

from dataclasses import dataclass
from decimal import Decimal

from shared.domain.base import DomainEvent


@dataclass(kw_only=True)
class PaymentRecorded(DomainEvent):
    """
    Event: A payment was attached to a reservation

    Triggers:
    - Send receipt email to the customer
    """
    payment_id: int
    reservation_id: int
    amount: Decimal
    status: str
    txn_ref: str


@dataclass(kw_only=True)
class PaymentStatusChanged(DomainEvent):
    """Event: An administrator changed a payment status"""
    payment_id: int
    old_status: str
    new_status: str
    changed_by: int
