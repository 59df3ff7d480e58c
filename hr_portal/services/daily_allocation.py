"""
Daily allocation guard.

Task work and leave share one day unit per user per calendar date. This is
the single implementation used by every write path and by the preview
endpoint; logs are any objects exposing ``id``, ``date`` and ``worked_day``.
"""
from datetime import date
from typing import Any, Iterable, Optional

from hr_portal.schemas.quota import AllocationCheck

DAY_CAPACITY = 1.0

# Absorbs binary rounding, e.g. 0.6 + 0.3 + 0.1
_TOLERANCE = 1e-9


def _leave_amount(log: Any) -> float:
    worked_day = getattr(log, "worked_day", None)
    return 1.0 if worked_day is None else worked_day


def allocated_for_date(
    task_logs: Iterable[Any],
    leave_logs: Iterable[Any],
    day: date,
    exclude_task_log_id: Optional[int] = None,
    exclude_leave_log_id: Optional[int] = None
) -> float:
    """Sum of day units already logged on ``day``, skipping the log under edit."""
    task_total = sum(
        log.worked_day for log in task_logs
        if log.date == day and (exclude_task_log_id is None or log.id != exclude_task_log_id)
    )
    leave_total = sum(
        _leave_amount(log) for log in leave_logs
        if log.date == day and (exclude_leave_log_id is None or log.id != exclude_leave_log_id)
    )
    return task_total + leave_total


def remaining_for_date(
    task_logs: Iterable[Any],
    leave_logs: Iterable[Any],
    day: date,
    exclude_task_log_id: Optional[int] = None,
    exclude_leave_log_id: Optional[int] = None
) -> float:
    allocated = allocated_for_date(task_logs, leave_logs, day, exclude_task_log_id, exclude_leave_log_id)
    return max(0.0, DAY_CAPACITY - allocated)


def check_allocation(
    task_logs: Iterable[Any],
    leave_logs: Iterable[Any],
    day: date,
    proposed: float,
    exclude_task_log_id: Optional[int] = None,
    exclude_leave_log_id: Optional[int] = None
) -> AllocationCheck:
    allocated = allocated_for_date(task_logs, leave_logs, day, exclude_task_log_id, exclude_leave_log_id)
    return AllocationCheck(
        date=day,
        allocated=allocated,
        proposed=proposed,
        remaining=max(0.0, DAY_CAPACITY - allocated),
        is_valid=allocated + proposed <= DAY_CAPACITY + _TOLERANCE
    )
