import math
import pytest
from datetime import date
from hr_portal.services import quota_calculator as qc


@pytest.mark.parametrize("year,expected", [(2024, 366), (2023, 365), (2000, 366), (1900, 365)])
def test_days_in_year_leap_rules(year, expected):
    assert qc.days_in_year(year) == expected


def test_days_passed_is_inclusive():
    assert qc.days_passed_in_year(date(2025, 1, 1)) == 1
    assert qc.days_passed_in_year(date(2023, 4, 10)) == 100
    assert qc.days_passed_in_year(date(2025, 12, 31)) == 365
    assert qc.days_passed_in_year(date(2024, 12, 31)) == 366


def test_pro_rated_reaches_full_quota_and_never_decreases():
    total = qc.days_in_year(2023)
    values = [qc.pro_rated(10, day, total) for day in range(1, total + 1)]
    assert values == sorted(values)
    assert qc.pro_rated(10, total, total) == 10


def test_medical_expense_over_pro_rated_budget():
    """Day 100 of 2023: 20,000 * 100 / 365 ~= 5,479 accrued."""
    result = qc.validate_medical_expense(20000, 5000, 3000, as_of=date(2023, 4, 10))
    assert result.remaining_before == pytest.approx(479.45, abs=0.01)
    assert result.remaining_after == pytest.approx(-2520.55, abs=0.01)
    assert result.is_valid is False
    assert result.message == "This expense would exceed your remaining pro-rated budget by ฿2521"


def test_medical_expense_at_year_end():
    result = qc.validate_medical_expense(20000, 0, 100, as_of=date(2023, 12, 31))
    assert result.remaining_before == pytest.approx(20000)
    assert result.remaining_after == pytest.approx(19900)
    assert result.is_valid is True
    assert result.message == "You will have ฿19900 remaining after this expense"


def test_leave_quota_full_year():
    result = qc.validate_leave_quota(10, 2, 0, 0, 5, as_of=date(2023, 12, 31))
    assert result.remaining_before == pytest.approx(12)
    assert result.remaining_after == pytest.approx(7)
    assert result.is_valid is True
    assert result.message == "You will have 7.0 leave days remaining after this request"


def test_leave_quota_credits_are_not_pro_rated():
    result = qc.validate_leave_quota(10, 3, 2, 0, 0, as_of=date(2023, 1, 1))
    assert result.remaining_before == pytest.approx(5 + 10 / 365)


def test_leave_quota_overage_message():
    result = qc.validate_leave_quota(10, 0, 0, 0, 5, as_of=date(2023, 1, 1))
    assert result.is_valid is False
    assert result.message == "This would exceed your remaining pro-rated leave quota by 5.0 days"


def test_exactly_zero_remaining_is_valid():
    result = qc.validate_leave_quota(0, 1, 0, 0, 1, as_of=date(2023, 6, 1))
    assert result.remaining_after == 0
    assert result.is_valid is True


def test_prior_overuse_is_reported_not_rejected_outright():
    result = qc.validate_medical_expense(1000, 5000, 0, as_of=date(2023, 12, 31))
    assert result.remaining_before == pytest.approx(-4000)
    assert result.is_valid is False


def test_negative_quota_returns_result():
    result = qc.validate_leave_quota(-10, 0, 0, 0, 1, as_of=date(2023, 12, 31))
    assert result.remaining_before == pytest.approx(-10)
    assert result.is_valid is False


def test_nan_input_is_never_valid():
    result = qc.validate_medical_expense(float("nan"), 0, 100, as_of=date(2023, 6, 1))
    assert math.isnan(result.remaining_after)
    assert result.is_valid is False


def test_calls_are_idempotent():
    first = qc.validate_leave_quota(12, 1.5, 0.5, 3, 2, as_of=date(2024, 2, 29))
    second = qc.validate_leave_quota(12, 1.5, 0.5, 3, 2, as_of=date(2024, 2, 29))
    assert first == second


def test_accrual_date_clamps_into_record_year():
    today = date(2025, 4, 10)
    assert qc.accrual_date(2025, today) == today
    assert qc.accrual_date(2024, today) == date(2024, 12, 31)
    assert qc.accrual_date(2026, today) == date(2026, 1, 1)
