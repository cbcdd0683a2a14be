"""Room and service models for painting estimates.

A room holds a prep-hours allowance and an ordered list of services. Services
are a tagged union on ``type``; each known type has its own model and any
other type lands in UnknownService so it survives parsing.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Raw numeric field as entered in the estimator forms
NumericInput = Optional[Union[float, str]]


class ServiceType(str, Enum):
    """Known billable service types."""

    WALL_PAINTING = "wallPainting"
    CEILING_PAINTING = "ceilingPainting"
    TRIMS = "trims"
    ADDITIONAL = "additional"


KNOWN_SERVICE_TYPES = frozenset(t.value for t in ServiceType)


# =============================================================================
# SERVICES
# =============================================================================


class BaseService(BaseModel):
    """Fields shared by every service line."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[Union[int, str]] = Field(default=None, description="Service ID")
    type: str = Field(..., description="Service type tag")
    name: Optional[str] = Field(default=None, description="Display name")


class WallPaintingService(BaseService):
    type: str = ServiceType.WALL_PAINTING.value
    surface_area: NumericInput = Field(
        default=None,
        alias="surfaceArea",
        description="Wall area in sq ft"
    )


class CeilingPaintingService(BaseService):
    type: str = ServiceType.CEILING_PAINTING.value
    surface_area: NumericInput = Field(
        default=None,
        alias="surfaceArea",
        description="Ceiling area in sq ft"
    )


class TrimService(BaseService):
    type: str = ServiceType.TRIMS.value
    ln_ft: NumericInput = Field(
        default=None,
        alias="lnFt",
        description="Trim length in linear feet"
    )


class AdditionalService(BaseService):
    """Flat line item: quantity x unit cost, material only."""

    type: str = ServiceType.ADDITIONAL.value
    quantity: NumericInput = Field(default=None, description="Number of units")
    cost: NumericInput = Field(default=None, description="Cost per unit")


class UnknownService(BaseService):
    """Service whose type tag is missing or not recognised."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    type: Any = None


Service = Union[
    WallPaintingService,
    CeilingPaintingService,
    TrimService,
    AdditionalService,
    UnknownService,
]

SERVICE_MODELS: Dict[str, Type[BaseService]] = {
    ServiceType.WALL_PAINTING.value: WallPaintingService,
    ServiceType.CEILING_PAINTING.value: CeilingPaintingService,
    ServiceType.TRIMS.value: TrimService,
    ServiceType.ADDITIONAL.value: AdditionalService,
}


def parse_service(data: Any) -> Any:
    """Build the service model matching ``data["type"]``.

    Model instances are returned unchanged. Values that are not mappings are
    returned as-is and left for pydantic to reject.
    """
    if isinstance(data, BaseService) or not isinstance(data, dict):
        return data

    type_value = data.get("type")
    model = SERVICE_MODELS.get(type_value) if isinstance(type_value, str) else None
    if model is None:
        return UnknownService.model_validate(data)
    return model.model_validate(data)


# =============================================================================
# ROOM
# =============================================================================


class Room(BaseModel):
    """A named space with a prep allowance and its services."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[Union[int, str]] = Field(default=None, description="Room ID")
    name: Optional[str] = Field(default="", description="Room name")
    prep_hours: NumericInput = Field(
        default=0,
        alias="prepHours",
        description="Preparation labor hours"
    )
    height: NumericInput = Field(default=None, description="Ceiling height in ft")
    services: List[BaseService] = Field(
        default_factory=list,
        description="Services in display order"
    )

    @field_validator("services", mode="before")
    @classmethod
    def parse_services(cls, value: Any) -> Any:
        """Dispatch raw service dicts to their typed models."""
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [parse_service(item) for item in value]
        return value
