import sys
from datetime import date

from hr_portal.core.init_system import ensure_default_plan
from hr_portal.database import SessionLocal, init_db
from hr_portal.services import annual_record_service

def seed(year: int):
    init_db()
    db = SessionLocal()
    try:
        plan = ensure_default_plan(db, year)
        db.commit()
        print(f"Quota plan '{plan.plan_name}' for {year}: {plan.quota_vacation_day} vacation days, "
              f"฿{plan.quota_medical_expense_baht:.0f} medical")
        touched = annual_record_service.assign_plan_to_all_users(db, plan)
        print(f"Assigned to {touched} annual record(s)")
    finally:
        db.close()

if __name__ == "__main__":
    seed(int(sys.argv[1]) if len(sys.argv) > 1 else date.today().year)
