"""Unit tests for pricing sanitization and PricingService."""

import pytest
from unittest.mock import AsyncMock

from config.errors import ErrorCode, PricingError
from models.pricing import Pricing
from services.pricing_service import (
    DEFAULT_PRICING,
    PricingService,
    merge_pricing,
    resolve_pricing,
    sanitize_pricing,
)


DIRTY_PRICING = {
    "laborRate": 0,
    "overheadRate": -0.25,
    "profitMarginRate": "0.3",
    "materialRates": {
        "wallPainting": -1,
        "ceilingPainting": "oops",
        "trims": 0,
    },
    "productionRates": {
        "wallPainting": 0,
        "ceilingPainting": -10,
        "trims": 90,
    },
}


class TestSanitizePricing:
    """Field-by-field validation with per-field fallback."""

    def test_invalid_fields_fall_back_to_defaults(self):
        pricing = sanitize_pricing(DIRTY_PRICING)

        assert pricing.labor_rate == DEFAULT_PRICING.labor_rate
        assert pricing.overhead_rate == DEFAULT_PRICING.overhead_rate
        assert pricing.profit_margin_rate == 0.3
        assert pricing.material_rates.wall_painting == DEFAULT_PRICING.material_rates.wall_painting
        assert pricing.material_rates.ceiling_painting == DEFAULT_PRICING.material_rates.ceiling_painting
        assert pricing.material_rates.trims == 0
        assert pricing.production_rates.wall_painting == DEFAULT_PRICING.production_rates.wall_painting
        assert pricing.production_rates.ceiling_painting == DEFAULT_PRICING.production_rates.ceiling_painting
        assert pricing.production_rates.trims == 90

    @pytest.mark.parametrize("data", [None, "pricing", 42, []])
    def test_non_mapping_input_gives_defaults(self, data):
        assert sanitize_pricing(data) == DEFAULT_PRICING

    def test_non_finite_rates_rejected(self):
        pricing = sanitize_pricing({
            "laborRate": float("inf"),
            "overheadRate": float("nan"),
            "productionRates": {"trims": float("inf")},
        })

        assert pricing.labor_rate == DEFAULT_PRICING.labor_rate
        assert pricing.overhead_rate == DEFAULT_PRICING.overhead_rate
        assert pricing.production_rates.trims == DEFAULT_PRICING.production_rates.trims

    def test_accepts_pricing_model(self, reference_pricing):
        assert sanitize_pricing(reference_pricing) == reference_pricing


class TestMergePricing:
    """Stored partial pricing is overlaid on the defaults."""

    def test_nested_tables_merge_key_by_key(self):
        merged = merge_pricing({
            "overheadRate": 0.25,
            "materialRates": {"wallPainting": 1.1},
        })

        assert merged["overheadRate"] == 0.25
        assert merged["laborRate"] == DEFAULT_PRICING.labor_rate
        assert merged["materialRates"] == {
            "wallPainting": 1.1,
            "ceilingPainting": DEFAULT_PRICING.material_rates.ceiling_painting,
            "trims": DEFAULT_PRICING.material_rates.trims,
        }
        assert merged["productionRates"] == DEFAULT_PRICING.production_rates.model_dump(by_alias=True)

    def test_does_not_mutate_stored_document(self):
        stored = {"materialRates": {"trims": 0.9}}

        merge_pricing(stored)

        assert stored == {"materialRates": {"trims": 0.9}}

    def test_resolve_pricing_of_nothing_is_default(self):
        assert resolve_pricing(None) == DEFAULT_PRICING


class TestPricingService:
    """Tests for PricingService."""

    @pytest.mark.asyncio
    async def test_load_pricing_defaults_when_nothing_stored(self, pricing_service):
        loaded = await pricing_service.load_pricing("user-1")

        assert loaded == DEFAULT_PRICING

    @pytest.mark.asyncio
    async def test_load_pricing_merges_partial_document(self, pricing_service, fake_pricing_repository):
        fake_pricing_repository.stored = {
            "overheadRate": 0.25,
            "materialRates": {"wallPainting": 1.1},
        }

        loaded = await pricing_service.load_pricing("user-1")

        assert loaded.overhead_rate == 0.25
        assert loaded.material_rates.wall_painting == 1.1
        assert loaded.material_rates.ceiling_painting == DEFAULT_PRICING.material_rates.ceiling_painting
        assert loaded.material_rates.trims == DEFAULT_PRICING.material_rates.trims
        assert loaded.production_rates == DEFAULT_PRICING.production_rates

    @pytest.mark.asyncio
    async def test_load_pricing_sanitizes_stored_document(self, pricing_service, fake_pricing_repository):
        fake_pricing_repository.stored = {"laborRate": -5, "productionRates": {"trims": 0}}

        loaded = await pricing_service.load_pricing("user-1")

        assert loaded.labor_rate == DEFAULT_PRICING.labor_rate
        assert loaded.production_rates.trims == DEFAULT_PRICING.production_rates.trims

    @pytest.mark.asyncio
    async def test_save_pricing_sanitizes_before_persisting(self, pricing_service, fake_pricing_repository):
        saved = await pricing_service.save_pricing("user-1", DIRTY_PRICING)

        assert isinstance(saved, Pricing)
        assert saved.labor_rate == DEFAULT_PRICING.labor_rate
        assert saved.profit_margin_rate == 0.3
        assert saved.production_rates.trims == 90
        assert fake_pricing_repository.saved == saved.to_dict()
        assert fake_pricing_repository.saved_user_id == "user-1"

    @pytest.mark.asyncio
    async def test_saved_pricing_round_trips(self, pricing_service, reference_pricing):
        await pricing_service.save_pricing("user-1", reference_pricing)

        loaded = await pricing_service.load_pricing("user-1")

        assert loaded == reference_pricing

    @pytest.mark.asyncio
    async def test_load_failure_raises_pricing_error(self):
        repository = AsyncMock()
        repository.get_by_user.side_effect = RuntimeError("firestore unavailable")
        service = PricingService(repository)

        with pytest.raises(PricingError) as exc_info:
            await service.load_pricing("user-9")

        assert exc_info.value.code == ErrorCode.PRICING_LOAD_FAILED
        assert exc_info.value.details["user_id"] == "user-9"
        assert "firestore unavailable" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_save_failure_raises_pricing_error(self):
        repository = AsyncMock()
        repository.save_by_user.side_effect = RuntimeError("permission denied")
        service = PricingService(repository)

        with pytest.raises(PricingError) as exc_info:
            await service.save_pricing("user-9", DEFAULT_PRICING)

        assert exc_info.value.code == ErrorCode.PRICING_SAVE_FAILED
        assert exc_info.value.to_dict()["details"] == {"user_id": "user-9"}

    def test_default_pricing(self, pricing_service):
        assert pricing_service.default_pricing() == DEFAULT_PRICING
        assert pricing_service.default_pricing() is not DEFAULT_PRICING
