"""Aggregations behind the admin and customer dashboards.

All money figures count only ``completed`` payments, or ``completed``
reservations where revenue is attributed to the fleet.
"""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model  # type: ignore
from django.db.models import Avg, Count, DecimalField, Max, Min, Q, Sum, Value  # type: ignore
from django.db.models.functions import Coalesce, TruncDate, TruncMonth, TruncWeek, TruncYear  # type: ignore
from django.utils import timezone  # type: ignore

from apps.branches.models import Branch
from apps.payments.models import Payment
from apps.reservations.models import Reservation
from apps.vehicles.models import Vehicle

ZERO = Decimal("0.00")

# Reservations that count as a rental for utilisation and popularity.
RENTED_STATUSES = (
    Reservation.Status.COMPLETED,
    Reservation.Status.ACTIVE,
    Reservation.Status.CONFIRMED,
)

REVENUE_PERIODS = {
    "week": (TruncWeek, timedelta(weeks=12)),
    "month": (TruncMonth, timedelta(days=365)),
    "year": (TruncYear, timedelta(days=5 * 365)),
}


def _money_sum(expression: str, **extra):
    return Coalesce(
        Sum(expression, **extra),
        Value(ZERO),
        output_field=DecimalField(max_digits=12, decimal_places=2),
    )


def _money(value) -> Decimal:
    return Decimal(value or 0).quantize(Decimal("0.01"))


def utilisation_rate(rentals: int, created_at, *, now=None) -> Decimal:
    """Rentals per day of fleet membership, as a percentage with 2 decimals."""
    now = now or timezone.now()
    days = max((now - created_at).days, 1)
    return (Decimal(rentals) / Decimal(days) * 100).quantize(Decimal("0.01"))


def completed_payments():
    return Payment.objects.filter(status=Payment.Status.COMPLETED)


def admin_stats() -> dict:
    now = timezone.now()
    month_start = (now - timedelta(days=365)).replace(day=1, hour=0, minute=0, second=0, microsecond=0)

    monthly = (
        completed_payments()
        .filter(payment_date__gte=month_start)
        .annotate(month=TruncMonth("payment_date"))
        .values("month")
        .annotate(revenue=Sum("amount"))
        .order_by("month")
    )

    utilisation = []
    available = Vehicle.objects.filter(status=Vehicle.Status.AVAILABLE).annotate(
        total_rentals=Count("reservations", filter=Q(reservations__status__in=RENTED_STATUSES))
    )
    for vehicle in available:
        utilisation.append(
            {
                "vehicle_id": vehicle.id,
                "make": vehicle.make,
                "model": vehicle.model,
                "year": vehicle.year,
                "total_rentals": vehicle.total_rentals,
                "utilization_rate": utilisation_rate(vehicle.total_rentals, vehicle.created_at, now=now),
            }
        )
    utilisation.sort(key=lambda row: row["utilization_rate"], reverse=True)

    top_vehicles = (
        Reservation.objects.filter(status__in=RENTED_STATUSES)
        .values("vehicle__make", "vehicle__model", "vehicle__year")
        .annotate(rental_count=Count("id"), total_revenue=Sum("total_cost"))
        .order_by("-rental_count")[:10]
    )

    return {
        "totals": {
            "reservations": Reservation.objects.count(),
            "customers": get_user_model().objects.count(),
            "vehicles": Vehicle.objects.count(),
            "branches": Branch.objects.count(),
            "revenue": _money(completed_payments().aggregate(total=Sum("amount"))["total"]),
            "active_reservations": Reservation.objects.filter(
                status__in=[Reservation.Status.ACTIVE, Reservation.Status.CONFIRMED]
            ).count(),
        },
        "monthly_revenue": [
            {"month": row["month"], "revenue": _money(row["revenue"])} for row in monthly
        ],
        "vehicle_utilization": utilisation[:10],
        "top_vehicles": [
            {
                "make": row["vehicle__make"],
                "model": row["vehicle__model"],
                "year": row["vehicle__year"],
                "rental_count": row["rental_count"],
                "total_revenue": _money(row["total_revenue"]),
            }
            for row in top_vehicles
        ],
    }


def customer_stats(customer) -> dict:
    today = timezone.localdate()
    reservations = Reservation.objects.filter(customer=customer)
    recent = reservations.select_related("vehicle__branch").order_by("-created_at")[:5]

    return {
        "totals": {
            "reservations": reservations.count(),
            "upcoming_reservations": reservations.filter(
                status__in=[Reservation.Status.CONFIRMED, Reservation.Status.ACTIVE],
                start_date__gt=today,
            ).count(),
            "completed_reservations": reservations.filter(status=Reservation.Status.COMPLETED).count(),
            "total_spent": _money(
                completed_payments()
                .filter(reservation__customer=customer)
                .aggregate(total=Sum("amount"))["total"]
            ),
        },
        "recent_reservations": [
            {
                "reservation_id": r.id,
                "start_date": r.start_date,
                "end_date": r.end_date,
                "status": r.status,
                "total_cost": r.total_cost,
                "make": r.vehicle.make,
                "model": r.vehicle.model,
                "year": r.vehicle.year,
                "branch_name": r.vehicle.branch.name,
            }
            for r in recent
        ],
    }


def revenue_by_period(period: str) -> tuple[str, list[dict]]:
    """Completed revenue grouped by week, month or year.

    Unknown periods fall back to ``month``.
    """
    if period not in REVENUE_PERIODS:
        period = "month"
    trunc, window = REVENUE_PERIODS[period]

    rows = (
        completed_payments()
        .filter(payment_date__gte=timezone.now() - window)
        .annotate(bucket=trunc("payment_date"))
        .values("bucket")
        .annotate(
            transaction_count=Count("id"),
            total_revenue=Sum("amount"),
            avg_transaction=Avg("amount"),
        )
        .order_by("bucket")
    )
    return period, [
        {
            "period": row["bucket"],
            "transaction_count": row["transaction_count"],
            "total_revenue": _money(row["total_revenue"]),
            "avg_transaction": _money(row["avg_transaction"]),
        }
        for row in rows
    ]


def vehicle_performance() -> list[dict]:
    now = timezone.now()
    completed = Q(reservations__status=Reservation.Status.COMPLETED)
    vehicles = Vehicle.objects.annotate(
        total_bookings=Count("reservations"),
        total_revenue=_money_sum("reservations__total_cost", filter=completed),
        avg_booking_value=Avg("reservations__total_cost", filter=completed),
        first_booking=Min("reservations__start_date"),
        last_booking=Max("reservations__end_date"),
    ).order_by("-total_revenue", "id")

    return [
        {
            "vehicle_id": v.id,
            "make": v.make,
            "model": v.model,
            "year": v.year,
            "daily_rate": v.daily_rate,
            "total_bookings": v.total_bookings,
            "total_revenue": _money(v.total_revenue),
            "avg_booking_value": _money(v.avg_booking_value),
            "first_booking": v.first_booking,
            "last_booking": v.last_booking,
            "utilization_rate": utilisation_rate(v.total_bookings, v.created_at, now=now),
        }
        for v in vehicles
    ]


def branch_performance() -> list[dict]:
    completed = Q(vehicles__reservations__status=Reservation.Status.COMPLETED)
    branches = Branch.objects.annotate(
        total_vehicles=Count("vehicles", distinct=True),
        total_reservations=Count("vehicles__reservations", distinct=True),
        total_revenue=_money_sum("vehicles__reservations__total_cost", filter=completed),
        avg_reservation_value=Avg("vehicles__reservations__total_cost", filter=completed),
    ).order_by("-total_revenue", "name")

    return [
        {
            "branch_id": b.id,
            "name": b.name,
            "location": b.location,
            "total_vehicles": b.total_vehicles,
            "total_reservations": b.total_reservations,
            "total_revenue": _money(b.total_revenue),
            "avg_reservation_value": _money(b.avg_reservation_value),
        }
        for b in branches
    ]


def sales_by_branch() -> list[dict]:
    paid = Q(vehicles__reservations__payment__status=Payment.Status.COMPLETED)
    branches = Branch.objects.annotate(
        reservation_count=Count("vehicles__reservations", distinct=True),
        total_sales=_money_sum("vehicles__reservations__payment__amount", filter=paid),
    ).order_by("-total_sales", "name")

    return [
        {
            "branch_name": b.name,
            "reservation_count": b.reservation_count,
            "total_sales": _money(b.total_sales),
        }
        for b in branches
    ]


def reservations_trend(days: int = 7) -> list[dict]:
    """Reservations created per day over the last ``days`` days, oldest first."""
    since = timezone.now() - timedelta(days=days)
    rows = (
        Reservation.objects.filter(created_at__gte=since)
        .annotate(date=TruncDate("created_at"))
        .values("date")
        .annotate(reservations=Count("id"))
        .order_by("-date")[:days]
    )
    return [{"date": row["date"], "reservations": row["reservations"]} for row in reversed(list(rows))]


def fleet_stats() -> dict:
    return Vehicle.objects.aggregate(
        available=Count("id", filter=Q(status=Vehicle.Status.AVAILABLE)),
        rented=Count("id", filter=Q(status=Vehicle.Status.RENTED)),
        maintenance=Count("id", filter=Q(status=Vehicle.Status.MAINTENANCE)),
        total_vehicles=Count("id"),
    )
