"""Painting estimator error handling.

Custom exceptions and error codes for the pricing functions.
"""

from typing import Optional, Dict, Any


# Error Codes
class ErrorCode:
    """Error code constants."""

    # Request Validation Errors (1xxx)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_SCHEMA = "INVALID_SCHEMA"
    MISSING_FIELD = "MISSING_FIELD"
    INVALID_FIELD = "INVALID_FIELD"

    # Estimate Completeness (2xxx)
    ESTIMATE_INCOMPLETE = "ESTIMATE_INCOMPLETE"
    PROJECT_ADDRESS_REQUIRED = "PROJECT_ADDRESS_REQUIRED"
    AT_LEAST_ONE_ROOM_REQUIRED = "AT_LEAST_ONE_ROOM_REQUIRED"
    ROOM_NAME_REQUIRED = "ROOM_NAME_REQUIRED"
    AT_LEAST_ONE_SERVICE_REQUIRED = "AT_LEAST_ONE_SERVICE_REQUIRED"
    SERVICE_TYPE_REQUIRED = "SERVICE_TYPE_REQUIRED"
    UNKNOWN_SERVICE_TYPE = "UNKNOWN_SERVICE_TYPE"

    # Pricing Errors (3xxx)
    PRICING_LOAD_FAILED = "PRICING_LOAD_FAILED"
    PRICING_SAVE_FAILED = "PRICING_SAVE_FAILED"

    # Calculation Errors (4xxx)
    CALCULATION_FAILED = "CALCULATION_FAILED"


class EstimatorError(Exception):
    """Base exception for estimator errors.

    Provides structured error information for API responses.

    Attributes:
        code: Error code from ErrorCode constants
        message: Human-readable error message
        details: Additional error context
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize EstimatorError.

        Args:
            code: Error code from ErrorCode constants
            message: Human-readable error message
            details: Additional error context
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for API response.

        Returns:
            Dictionary with code, message, and details.
        """
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }

    def __repr__(self) -> str:
        return f"EstimatorError(code={self.code!r}, message={self.message!r})"


class ValidationError(EstimatorError):
    """Validation-specific error."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict] = None,
        code: str = ErrorCode.VALIDATION_ERROR
    ):
        super().__init__(
            code=code,
            message=message,
            details={**(details or {}), "field": field} if field else details
        )
        self.field = field


class PricingError(EstimatorError):
    """Pricing configuration load/save error."""

    def __init__(
        self,
        code: str,
        message: str,
        user_id: str,
        details: Optional[Dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            details={**(details or {}), "user_id": user_id}
        )
        self.user_id = user_id
