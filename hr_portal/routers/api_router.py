from fastapi import APIRouter
from hr_portal.routers import (
    users, quota_plans, annual_records, holidays,
    task_categories, tasks, task_estimates,
    task_logs, leave_logs, medical_expenses, validation
)

# Centralized API router hub
# Routers are aggregated here, and main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(users.router, tags=["Users"])
api_router.include_router(quota_plans.router, tags=["Quota Plans"])
api_router.include_router(annual_records.router, tags=["Annual Records"])
api_router.include_router(holidays.router, tags=["Holidays"])
api_router.include_router(task_categories.router, tags=["Task Categories"])
api_router.include_router(tasks.router, tags=["Tasks"])
api_router.include_router(task_estimates.router, tags=["Task Estimates"])
api_router.include_router(task_logs.router, tags=["Task Logs"])
api_router.include_router(leave_logs.router, tags=["Leave Logs"])
api_router.include_router(medical_expenses.router, tags=["Medical Expenses"])
api_router.include_router(validation.router, tags=["Validation"])
