import os
import logging
from pydantic import BaseModel, Field
from typing import List
from dotenv import load_dotenv

load_dotenv()

class QuotaDefaults(BaseModel):
    plan_name: str = Field(default=os.getenv("DEFAULT_PLAN_NAME", "Default"))
    quota_vacation_day: float = Field(default=float(os.getenv("DEFAULT_QUOTA_VACATION_DAY", "10")))
    quota_medical_expense_baht: float = Field(default=float(os.getenv("DEFAULT_QUOTA_MEDICAL_EXPENSE_BAHT", "20000")))
    seed_on_startup: bool = Field(default=os.getenv("SEED_DEFAULT_PLAN", "false").lower() == "true")

class Config(BaseModel):
    app_name: str = "HR Self-Service Portal"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./database.db")

    # Identity is asserted by the upstream gateway
    user_id_header: str = "X-User-Id"
    request_id_header: str = "X-Request-ID"

    # Quota plans
    quota: QuotaDefaults = QuotaDefaults()

    version: str = "1.0.0"

    # CORS — comma-separated origins loaded from env.
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            o.strip()
            for o in os.getenv(
                "CORS_ORIGINS",
                "http://localhost:3000,http://127.0.0.1:3000,"
                "http://localhost:5173,http://127.0.0.1:5173",
            ).split(",")
            if o.strip()
        ]
    )

settings = Config()

_logger = logging.getLogger(__name__)
if settings.environment == "production" and settings.database_url.startswith("sqlite"):
    _logger.warning("⚠ Running production against SQLite — set DATABASE_URL to a PostgreSQL instance.")
