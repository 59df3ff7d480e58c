from typing import Any, Dict, Optional

class AppException(Exception):
    def __init__(
        self,
        message: str,
        status_code: int = 400,
        error_code: str = "BUSINESS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)

class NotFoundError(AppException):
    def __init__(self, entity: str, identifier: Any = None):
        message = f"{entity} not found" if identifier is None else f"{entity} {identifier} not found"
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND"
        )

class ConflictError(AppException):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT",
            details=details
        )

class QuotaExceededError(AppException):
    """Raised when a leave or medical expense would overdraw the pro-rated quota."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=422,
            error_code="QUOTA_EXCEEDED",
            details=details
        )

class DailyAllocationExceededError(AppException):
    """Raised when task and leave logs for one date would exceed a full day."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=422,
            error_code="DAILY_ALLOCATION_EXCEEDED",
            details=details
        )

class AuthenticationError(AppException):
    def __init__(self, message: str = "Could not identify the current user"):
        super().__init__(
            message=message,
            status_code=401,
            error_code="AUTH_FAILED"
        )

class AccessDeniedError(AppException):
    """Custom permission error. Named AccessDeniedError to avoid shadowing Python's built-in PermissionError."""
    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(
            message=message,
            status_code=403,
            error_code="PERMISSION_DENIED"
        )
