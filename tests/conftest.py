import pytest
import os
from datetime import date
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SEED_DEFAULT_PLAN"] = "false"

from hr_portal.database import Base, get_db
from hr_portal.main import app
from hr_portal.routers.auth_deps import get_today
from fastapi.testclient import TestClient

# Day 100 of a 365-day year
TODAY = date(2025, 4, 10)

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Create tables once for the whole test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture(scope="function")
def db_session():
    """Get a clean database session for each test function with rollback safety."""
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()

@pytest.fixture(scope="function")
def admin_user(db_session):
    """Create a default admin user for tests."""
    from hr_portal.models.user import User, UserType

    user = User(username="admin", email="admin@example.com", user_type=UserType.ADMIN.value, is_active=True)
    db_session.add(user)
    db_session.commit()
    return user

@pytest.fixture(scope="function")
def employee(db_session):
    """Create a regular employee for tests."""
    from hr_portal.models.user import User, UserType

    user = User(username="somchai", email="somchai@example.com", user_type=UserType.USER.value, is_active=True)
    db_session.add(user)
    db_session.commit()
    return user

@pytest.fixture(scope="function")
def default_plan(db_session):
    """Default quota plan for the year of TODAY: 10 vacation days, 20,000 baht."""
    from hr_portal.models.quota_plan import QuotaPlan

    plan = QuotaPlan(plan_name="Default", year=TODAY.year, quota_vacation_day=10.0, quota_medical_expense_baht=20000.0)
    db_session.add(plan)
    db_session.commit()
    return plan

@pytest.fixture(scope="function")
def auth_headers():
    """Helper fixture building the gateway identity header for a user."""
    def _auth_headers(user):
        return {"X-User-Id": str(user.id)}
    return _auth_headers

@pytest.fixture(scope="function")
def client(db_session):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = lambda: TODAY
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()

@pytest.fixture(scope="function")
def task(db_session):
    """A task that work can be logged against."""
    from hr_portal.models.task import Task

    task = Task(title="Payroll export", status="in progress")
    db_session.add(task)
    db_session.commit()
    return task
