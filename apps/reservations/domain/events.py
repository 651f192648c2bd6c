"""
Reservation Domain Events

Published by the message bus once the reservation transaction commits.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from shared.domain.base import DomainEvent


@dataclass(kw_only=True)
class ReservationCreated(DomainEvent):
    """
    Event: A vehicle was booked

    Triggers:
    - Send confirmation email to the customer
    """
    reservation_id: int
    customer_id: int
    vehicle_id: int
    start_date: date
    end_date: date
    total_cost: Decimal


@dataclass(kw_only=True)
class ReservationCancelled(DomainEvent):
    """Event: A pending or confirmed reservation was cancelled"""
    reservation_id: int
    cancelled_by: int


@dataclass(kw_only=True)
class ReservationStatusChanged(DomainEvent):
    """Event: An administrator moved a reservation to another status"""
    reservation_id: int
    old_status: str
    new_status: str
    changed_by: int
