"""Painting estimator configuration.

This package contains:
- settings: Environment variables and configuration
- errors: Custom exceptions and error codes
"""

from config.settings import settings, Settings
from config.errors import EstimatorError, ErrorCode, ValidationError, PricingError

__all__ = [
    "settings",
    "Settings",
    "EstimatorError",
    "ErrorCode",
    "ValidationError",
    "PricingError",
]
