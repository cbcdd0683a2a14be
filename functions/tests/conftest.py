"""Pytest configuration and shared fixtures for painting estimator tests."""

import os
import sys
import pytest
import structlog
from unittest.mock import MagicMock
from typing import Any, Dict, Optional


# ============================================================================
# Ensure local imports work (models/, services/, config/, ...)
# ============================================================================
#
# Our codebase uses absolute imports like `from models...` / `from services...`.
# This guarantees that `functions/` is importable as the top-level module root.
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


from tests.fixtures.mock_estimate_data import (  # noqa: E402
    REFERENCE_PRICING,
    DECIMAL_PRICING,
    living_room,
    small_room_with_invalid_line,
    multi_room_estimate,
)


# ============================================================================
# Pricing Fixtures
# ============================================================================

@pytest.fixture
def reference_pricing():
    """Whole-number pricing used by the reference cost stack."""
    from models.pricing import Pricing

    return Pricing.model_validate(REFERENCE_PRICING)


@pytest.fixture
def decimal_pricing():
    """Pricing with a fractional wall material rate."""
    from models.pricing import Pricing

    return Pricing.model_validate(DECIMAL_PRICING)


# ============================================================================
# Room Fixtures
# ============================================================================

@pytest.fixture
def living_room_data():
    """Living room with prep hours and one service of each type."""
    return living_room()


@pytest.fixture
def small_room_data():
    """Room with a NaN-quantity line."""
    return small_room_with_invalid_line()


@pytest.fixture
def multi_room_data():
    """Three rooms with mixed service types."""
    return multi_room_estimate()


# ============================================================================
# Repository Mocks
# ============================================================================

class FakePricingRepository:
    """In-memory pricing repository."""

    def __init__(self, stored: Optional[Dict[str, Any]] = None):
        self.stored = stored
        self.saved: Optional[Dict[str, Any]] = None
        self.saved_user_id: Optional[str] = None

    async def get_by_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        return self.stored

    async def save_by_user(self, user_id: str, pricing: Dict[str, Any]) -> None:
        self.saved_user_id = user_id
        self.saved = pricing
        self.stored = pricing


@pytest.fixture
def fake_pricing_repository():
    """Empty in-memory pricing repository."""
    return FakePricingRepository()


@pytest.fixture
def pricing_service(fake_pricing_repository):
    """PricingService over the in-memory repository."""
    from services.pricing_service import PricingService

    return PricingService(fake_pricing_repository)


# ============================================================================
# HTTP Mocks
# ============================================================================

@pytest.fixture
def make_request():
    """Build a mock Cloud Functions request with a JSON body."""
    def _make(body: Any = None, method: str = "POST"):
        req = MagicMock()
        req.method = method
        req.headers = {"Content-Type": "application/json"}
        req.get_json.return_value = body
        return req

    return _make


# ============================================================================
# Environment Setup
# ============================================================================

@pytest.fixture(autouse=True)
def mock_settings(monkeypatch):
    """Pin settings for all tests regardless of the local environment."""
    from config.settings import settings

    monkeypatch.setattr(settings, "log_level", "INFO")
    monkeypatch.setattr(settings, "strict_service_types", False)
    yield settings


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration done by the CLI between tests."""
    yield
    structlog.reset_defaults()
