"""
Pro-rated quota calculator.

Annual allowances accrue linearly over the calendar year: by a given date an
employee is entitled to ``quota * days_passed / days_in_year``. Rollover and
worked-on-holiday vacation credits are granted at full value immediately and
are not pro-rated.

Every function here is pure. Nothing is sanitized: negative quotas yield
negative remaining values and NaN propagates (``nan >= 0`` is False, so such
a check is never valid). Callers are expected to exclude malformed input.
"""
from datetime import date
from typing import Optional

from hr_portal.schemas.quota import QuotaCheckResult


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def days_passed_in_year(day: Optional[date] = None) -> int:
    """Days from Jan 1 through ``day`` inclusive, in [1, days_in_year]."""
    day = day or date.today()
    return (day - date(day.year, 1, 1)).days + 1


def pro_rated(quota: float, days_passed: int, total_days: int) -> float:
    return quota * days_passed / total_days


def remaining_medical_budget(
    quota_medical_expense_baht: float,
    used_amount: float,
    days_passed: int,
    total_days: int
) -> float:
    """Pro-rated budget minus usage. Negative when already overspent."""
    return pro_rated(quota_medical_expense_baht, days_passed, total_days) - used_amount


def remaining_vacation_days(
    quota_vacation_days: float,
    rollover_vacation_days: float,
    worked_on_holiday_days: float,
    used_vacation_days: float,
    days_passed: int,
    total_days: int
) -> float:
    return (
        rollover_vacation_days
        + worked_on_holiday_days
        + pro_rated(quota_vacation_days, days_passed, total_days)
        - used_vacation_days
    )


def validate_medical_expense(
    quota_medical_expense_baht: float,
    current_used_amount: float,
    new_expense_amount: float,
    as_of: Optional[date] = None
) -> QuotaCheckResult:
    """
    Check whether a new medical expense fits the pro-rated budget.

    Args:
        quota_medical_expense_baht: Total annual medical budget in baht
        current_used_amount: Amount already claimed this year
        new_expense_amount: Amount of the expense being submitted
        as_of: Accrual date (defaults to today)

    Returns:
        QuotaCheckResult with the balance before and after the expense
    """
    as_of = as_of or date.today()
    remaining_before = remaining_medical_budget(
        quota_medical_expense_baht,
        current_used_amount,
        days_passed_in_year(as_of),
        days_in_year(as_of.year)
    )
    remaining_after = remaining_before - new_expense_amount
    is_valid = remaining_after >= 0

    if is_valid:
        message = f"You will have ฿{remaining_after:.0f} remaining after this expense"
    else:
        message = f"This expense would exceed your remaining pro-rated budget by ฿{abs(remaining_after):.0f}"

    return QuotaCheckResult(
        is_valid=is_valid,
        remaining_before=remaining_before,
        remaining_after=remaining_after,
        message=message
    )


def validate_leave_quota(
    quota_vacation_days: float,
    rollover_vacation_days: float,
    worked_on_holiday_days: float,
    used_vacation_days: float,
    new_leave_days: float,
    as_of: Optional[date] = None
) -> QuotaCheckResult:
    """
    Check whether new vacation leave fits the remaining quota.

    Only the plan's base quota is pro-rated; rollover and holiday-work
    credits count in full from Jan 1.
    """
    as_of = as_of or date.today()
    remaining_before = remaining_vacation_days(
        quota_vacation_days,
        rollover_vacation_days,
        worked_on_holiday_days,
        used_vacation_days,
        days_passed_in_year(as_of),
        days_in_year(as_of.year)
    )
    remaining_after = remaining_before - new_leave_days
    is_valid = remaining_after >= 0

    if is_valid:
        message = f"You will have {remaining_after:.1f} leave days remaining after this request"
    else:
        message = f"This would exceed your remaining pro-rated leave quota by {abs(remaining_after):.1f} days"

    return QuotaCheckResult(
        is_valid=is_valid,
        remaining_before=remaining_before,
        remaining_after=remaining_after,
        message=message
    )


def accrual_date(year: int, today: Optional[date] = None) -> date:
    """
    Date at which a record for ``year`` is pro-rated: today, clamped into
    that calendar year. Past years are fully accrued, future years have
    accrued a single day.
    """
    today = today or date.today()
    start, end = date(year, 1, 1), date(year, 12, 31)
    return min(max(today, start), end)
