"""Estimate calculation result models.

EstimateResult is what the calculator returns and what the contract/invoice
generators and the estimate editor consume, serialized with camelCase keys.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


PREP_SERVICE_ID = -1
PREP_SERVICE_TYPE = "prep"
PREP_LINE_NAME = "Room Preparation"


class BreakdownLine(BaseModel):
    """A single priced line inside a room."""

    model_config = ConfigDict(populate_by_name=True)

    service_id: Optional[Union[int, str]] = Field(
        default=None,
        alias="serviceId",
        description="Source service ID (-1 for the prep line)"
    )
    service_type: str = Field(
        ...,
        alias="serviceType",
        description="Service type tag, or 'prep'"
    )
    name: Optional[str] = Field(default=None, description="Display name")
    total: float = Field(..., description="Line total, rounded to cents")

    @property
    def is_prep(self) -> bool:
        return self.service_type == PREP_SERVICE_TYPE


class DetailedBreakdownItem(BaseModel):
    """Per-room breakdown."""

    model_config = ConfigDict(populate_by_name=True)

    room_id: Optional[Union[int, str]] = Field(default=None, alias="roomId")
    room_name: Optional[str] = Field(default=None, alias="roomName")
    room_total: float = Field(
        ...,
        alias="roomTotal",
        description="Rounded sum of the unrounded line amounts"
    )
    services: List[BreakdownLine] = Field(default_factory=list)


class EstimateResult(BaseModel):
    """Aggregate totals plus the per-room breakdown. All amounts in cents precision."""

    model_config = ConfigDict(populate_by_name=True)

    total: float = Field(..., description="Base + overhead + profit")
    breakdown: List[DetailedBreakdownItem] = Field(default_factory=list)
    material_cost: float = Field(..., alias="materialCost")
    labor_cost: float = Field(..., alias="laborCost")
    overhead_cost: float = Field(..., alias="overheadCost")
    profit_amount: float = Field(..., alias="profitAmount")
    base_cost: float = Field(..., alias="baseCost", description="Material + labor")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return self.model_dump(by_alias=True)
