from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from hr_portal.core.config import settings

DATABASE_URL = settings.database_url

if DATABASE_URL.startswith("postgresql"):
    engine = create_engine(DATABASE_URL, pool_pre_ping=True)
else:
    engine = create_engine(
        DATABASE_URL, connect_args={"check_same_thread": False}
    )

    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # Annual records, logs and expenses reference users and plans
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    """
    Request-scoped session. Services commit their own writes; anything left
    uncommitted (e.g. a rejected quota check) is discarded on close.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db():
    """Create the schema for every model. Called from the app lifespan and the scripts."""
    from hr_portal.models import (  # noqa: F401
        user, quota_plan, annual_record, holiday,
        task_category, task, task_estimate,
        task_log, leave_log, medical_expense
    )
    Base.metadata.create_all(bind=engine)

def commit_or_rollback(db):
    """Commit the session, rolling back before re-raising on failure."""
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
