from datetime import date
from decimal import Decimal

import pytest

from apps.reservations.services import (
    calculate_total_cost,
    costs_match,
    rental_days,
    validate_rental_period,
)


def test_five_days_at_45():
    assert calculate_total_cost(date(2024, 6, 1), date(2024, 6, 6), Decimal("45.00")) == Decimal("225.00")


@pytest.mark.parametrize("days", [1, 2, 7, 30, 365])
def test_total_is_days_times_rate(days):
    start = date(2024, 1, 1)
    end = date.fromordinal(start.toordinal() + days)
    assert rental_days(start, end) == days
    assert calculate_total_cost(start, end, Decimal("39.99")) == Decimal("39.99") * days


def test_empty_period_is_not_priced():
    with pytest.raises(ValueError):
        calculate_total_cost(date(2024, 6, 6), date(2024, 6, 6), Decimal("45.00"))


def test_costs_match_uses_one_cent_tolerance(settings):
    settings.RESERVATION_COST_TOLERANCE = Decimal("0.01")
    assert costs_match(Decimal("225.01"), Decimal("225.00"))
    assert costs_match(Decimal("224.99"), Decimal("225.00"))
    assert not costs_match(Decimal("225.02"), Decimal("225.00"))
    assert not costs_match(Decimal("200.00"), Decimal("225.00"))


def test_validate_rental_period_reports_each_field():
    today = date(2024, 6, 10)
    assert validate_rental_period(date(2024, 6, 10), date(2024, 6, 11), today=today) == {}
    errors = validate_rental_period(date(2024, 6, 9), date(2024, 6, 9), today=today)
    assert set(errors) == {"start_date", "end_date"}
