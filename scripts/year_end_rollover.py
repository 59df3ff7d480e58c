import sys
from datetime import date

from hr_portal.database import SessionLocal, init_db
from hr_portal.services import annual_record_service

def rollover(year: int):
    init_db()
    db = SessionLocal()
    try:
        # Bring usage up to date before computing what carries over
        annual_record_service.sync_all_records(db, year)
        result = annual_record_service.rollover_year(db, year)
        print(f"Rolled over {result.from_year} -> {result.to_year}: {result.created} record(s) created")
    finally:
        db.close()

if __name__ == "__main__":
    rollover(int(sys.argv[1]) if len(sys.argv) > 1 else date.today().year)
