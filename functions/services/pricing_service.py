"""Pricing configuration service.

Loads and saves the per-account pricing configuration through a repository
and guarantees that whatever reaches the calculator is usable: every rate is
finite, overhead/profit/material rates are >= 0, and the labor rate and the
production rates are > 0. Invalid values fall back to DEFAULT_PRICING field
by field.
"""

from typing import Any, Dict, Mapping, Optional, Protocol

import structlog

from config.errors import ErrorCode, PricingError
from models.pricing import Pricing, ServiceRates
from utils.numbers import to_positive, to_rate

logger = structlog.get_logger(__name__)


DEFAULT_PRICING = Pricing(
    labor_rate=60.0,
    overhead_rate=0.15,
    profit_margin_rate=0.2,
    material_rates=ServiceRates(
        wall_painting=0.55,
        ceiling_painting=0.5,
        trims=0.3,
    ),
    production_rates=ServiceRates(
        wall_painting=150,
        ceiling_painting=160,
        trims=70,
    ),
)

_RATE_TABLES = ("materialRates", "productionRates")


def _as_mapping(value: Any) -> Mapping[str, Any]:
    if isinstance(value, Pricing):
        return value.to_dict()
    if isinstance(value, ServiceRates):
        return value.model_dump(by_alias=True)
    return value if isinstance(value, Mapping) else {}


def merge_pricing(stored: Any) -> Dict[str, Any]:
    """Overlay a stored (possibly partial) pricing document on the defaults.

    Top-level fields replace the defaults; the nested rate tables are merged
    key by key so a document with only ``materialRates.wallPainting`` keeps
    the default ceiling and trim rates.

    Args:
        stored: Stored pricing document, Pricing model, or None.

    Returns:
        camelCase pricing dict, not yet sanitized.
    """
    defaults = DEFAULT_PRICING.to_dict()
    overrides = _as_mapping(stored)

    merged: Dict[str, Any] = {**defaults, **overrides}
    for table in _RATE_TABLES:
        merged[table] = {**defaults[table], **_as_mapping(overrides.get(table))}
    return merged


def sanitize_pricing(data: Any) -> Pricing:
    """Validate every pricing field independently, falling back to defaults.

    Args:
        data: Pricing dict (camelCase), Pricing model, or anything else.

    Returns:
        A Pricing safe to hand to the calculator.
    """
    source = _as_mapping(data)
    materials = _as_mapping(source.get("materialRates"))
    production = _as_mapping(source.get("productionRates"))
    default_materials = DEFAULT_PRICING.material_rates
    default_production = DEFAULT_PRICING.production_rates

    return Pricing(
        labor_rate=to_positive(source.get("laborRate"), DEFAULT_PRICING.labor_rate),
        overhead_rate=to_rate(source.get("overheadRate"), DEFAULT_PRICING.overhead_rate),
        profit_margin_rate=to_rate(
            source.get("profitMarginRate"), DEFAULT_PRICING.profit_margin_rate
        ),
        material_rates=ServiceRates(
            wall_painting=to_rate(materials.get("wallPainting"), default_materials.wall_painting),
            ceiling_painting=to_rate(
                materials.get("ceilingPainting"), default_materials.ceiling_painting
            ),
            trims=to_rate(materials.get("trims"), default_materials.trims),
        ),
        production_rates=ServiceRates(
            wall_painting=to_positive(
                production.get("wallPainting"), default_production.wall_painting
            ),
            ceiling_painting=to_positive(
                production.get("ceilingPainting"), default_production.ceiling_painting
            ),
            trims=to_positive(production.get("trims"), default_production.trims),
        ),
    )


def resolve_pricing(stored: Any) -> Pricing:
    """Merge a partial pricing document over the defaults and sanitize it."""
    return sanitize_pricing(merge_pricing(stored))


class PricingRepository(Protocol):
    """Storage for per-account pricing documents (users/{uid}/configs/pricing)."""

    async def get_by_user(self, user_id: str) -> Optional[Mapping[str, Any]]:
        ...

    async def save_by_user(self, user_id: str, pricing: Dict[str, Any]) -> None:
        ...


class PricingService:
    """Service for loading and saving pricing configurations.

    The repository is injected; the service keeps no state of its own.
    """

    def __init__(self, repository: PricingRepository):
        """Initialize PricingService.

        Args:
            repository: Pricing document storage.
        """
        self.repository = repository

    async def load_pricing(self, user_id: str) -> Pricing:
        """Load the pricing for an account.

        Args:
            user_id: Account owner ID.

        Returns:
            Stored pricing merged over the defaults and sanitized, or the
            defaults when nothing is stored.

        Raises:
            PricingError: If the repository read fails.
        """
        try:
            stored = await self.repository.get_by_user(user_id)
        except Exception as e:
            logger.error("pricing_load_failed", user_id=user_id, error=str(e))
            raise PricingError(
                code=ErrorCode.PRICING_LOAD_FAILED,
                message=f"Failed to load pricing: {str(e)}",
                user_id=user_id
            ) from e

        pricing = resolve_pricing(stored) if stored else self.default_pricing()
        logger.info("pricing_loaded", user_id=user_id, has_stored=bool(stored))
        return pricing

    async def save_pricing(self, user_id: str, pricing: Any) -> Pricing:
        """Sanitize and persist a pricing configuration.

        Args:
            user_id: Account owner ID.
            pricing: Pricing model or camelCase dict, possibly invalid.

        Returns:
            The sanitized pricing that was stored.

        Raises:
            PricingError: If the repository write fails.
        """
        sanitized = sanitize_pricing(pricing)
        try:
            await self.repository.save_by_user(user_id, sanitized.to_dict())
        except Exception as e:
            logger.error("pricing_save_failed", user_id=user_id, error=str(e))
            raise PricingError(
                code=ErrorCode.PRICING_SAVE_FAILED,
                message=f"Failed to save pricing: {str(e)}",
                user_id=user_id
            ) from e

        logger.info("pricing_saved", user_id=user_id)
        return sanitized

    def default_pricing(self) -> Pricing:
        """Sanitized copy of DEFAULT_PRICING."""
        return sanitize_pricing(DEFAULT_PRICING)
