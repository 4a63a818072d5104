from typing import Any, Dict, Optional
from fastapi import HTTPException, status

class BoligscoreException(Exception):
    """Base exception for Boligscore application."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

class ValidationException(BoligscoreException):
    """Exception for data validation errors."""
    pass

class PropertyNotFoundException(BoligscoreException):
    """Raised when a property id is not held by the catalog."""

    def __init__(self, property_id: str):
        super().__init__(
            f"Property {property_id} not found",
            error_code="PROPERTY_NOT_FOUND",
            details={"property_id": property_id}
        )

class ConfigurationException(BoligscoreException):
    """Exception for configuration-related errors."""
    pass

# HTTP Exception handlers
def create_http_exception(
    status_code: int,
    message: str,
    error_code: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None
) -> HTTPException:
    """Create an HTTP exception with structured error response."""

    error_detail = {
        "message": message,
        "error_code": error_code,
        "details": details or {}
    }

    return HTTPException(
        status_code=status_code,
        detail=error_detail
    )

def from_domain_exception(exc: BoligscoreException) -> HTTPException:
    """Map a domain exception onto the matching HTTP error."""
    if isinstance(exc, PropertyNotFoundException):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, ValidationException):
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return create_http_exception(
        status_code=status_code,
        message=exc.message,
        error_code=exc.error_code,
        details=exc.details
    )
