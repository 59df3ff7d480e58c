import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from hr_portal.core.config import settings
from hr_portal.database import SessionLocal
from hr_portal.models.quota_plan import QuotaPlan

logger = logging.getLogger(__name__)


def ensure_default_plan(db: Session, year: int) -> QuotaPlan:
    """Return the year's default quota plan, creating it from settings if missing."""
    plan = db.query(QuotaPlan).filter(
        QuotaPlan.year == year,
        QuotaPlan.plan_name == settings.quota.plan_name
    ).first()
    if plan:
        return plan

    plan = QuotaPlan(
        plan_name=settings.quota.plan_name,
        year=year,
        quota_vacation_day=settings.quota.quota_vacation_day,
        quota_medical_expense_baht=settings.quota.quota_medical_expense_baht
    )
    db.add(plan)
    db.flush()
    logger.info(f"✓ Created default quota plan for {year}")
    return plan


def init_system_data(year: Optional[int] = None):
    """
    Seeds the current year's default quota plan when SEED_DEFAULT_PLAN is set.
    """
    if not settings.quota.seed_on_startup:
        return
    db = SessionLocal()
    try:
        ensure_default_plan(db, year or date.today().year)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Error during system initialization check: {str(e)}", exc_info=True)
    finally:
        db.close()
