import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger
from contextvars import ContextVar

from hr_portal.core.config import settings

# Per-request context, filled by CorrelationIdMiddleware
request_id_var: ContextVar[str] = ContextVar("request_id", default="")
user_id_var: ContextVar[Optional[str]] = ContextVar("user_id", default=None)

_configured = False

class CustomJsonFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super(CustomJsonFormatter, self).add_fields(log_record, record, message_dict)

        req_id = request_id_var.get()
        if req_id:
            log_record["request_id"] = req_id

        user_id = user_id_var.get()
        if user_id:
            log_record["user_id"] = user_id

        if not log_record.get("timestamp"):
            log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["environment"] = settings.environment

def setup_logging():
    """Route all loggers through one JSON handler on stdout. Safe to call twice."""
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(CustomJsonFormatter("%(timestamp) %(level) %(name) %(message)"))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(settings.log_level.upper())

    # Request timing is logged by LoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    _configured = True
