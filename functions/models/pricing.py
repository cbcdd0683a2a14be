"""Pricing configuration models.

The pricing document is stored per account (users/{uid}/configs/pricing) with
camelCase keys. Models accept either the camelCase wire names or the Python
field names.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class ServiceRates(BaseModel):
    """Per-service-type rate table (material $/unit or production units/hour)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    wall_painting: float = Field(
        ...,
        alias="wallPainting",
        description="Rate for wall painting (per sq ft)"
    )
    ceiling_painting: float = Field(
        ...,
        alias="ceilingPainting",
        description="Rate for ceiling painting (per sq ft)"
    )
    trims: float = Field(
        ...,
        alias="trims",
        description="Rate for trim work (per linear foot)"
    )


class Pricing(BaseModel):
    """Pricing configuration fed to the estimate calculator.

    Ranges (labor rate > 0, production rates > 0, other rates >= 0) are not
    enforced here; values coming from storage go through
    services.pricing_service.sanitize_pricing first.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    labor_rate: float = Field(
        ...,
        alias="laborRate",
        description="Labor cost per hour"
    )
    overhead_rate: float = Field(
        ...,
        alias="overheadRate",
        description="Overhead fraction applied to material + labor"
    )
    profit_margin_rate: float = Field(
        ...,
        alias="profitMarginRate",
        description="Profit fraction applied to base + overhead"
    )
    material_rates: ServiceRates = Field(
        ...,
        alias="materialRates",
        description="Material cost per unit, by service type"
    )
    production_rates: ServiceRates = Field(
        ...,
        alias="productionRates",
        description="Units produced per labor hour, by service type"
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase document shape."""
        return self.model_dump(by_alias=True)
