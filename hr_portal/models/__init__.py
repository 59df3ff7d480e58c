# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import (
    user, quota_plan, annual_record, holiday,
    task_category, task, task_estimate,
    task_log, leave_log, medical_expense
)

# Explicit class exports for cleaner imports
from .user import User, UserType
from .quota_plan import QuotaPlan
from .annual_record import AnnualRecord
from .holiday import Holiday
from .task_category import TaskCategory
from .task import Task
from .task_estimate import TaskEstimate
from .task_log import TaskLog
from .leave_log import LeaveLog, LeaveType
from .medical_expense import MedicalExpense

__all__ = [
    "User",
    "UserType",
    "QuotaPlan",
    "AnnualRecord",
    "Holiday",
    "TaskCategory",
    "Task",
    "TaskEstimate",
    "TaskLog",
    "LeaveLog",
    "LeaveType",
    "MedicalExpense",
]
