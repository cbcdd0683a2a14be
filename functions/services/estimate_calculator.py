"""Estimate pricing engine.

Turns rooms and a pricing configuration into material, labor, overhead and
profit totals plus a per-room breakdown.

Rounding: line totals, room totals and aggregates are each rounded to cents
for reporting, but every sum is accumulated from unrounded amounts. Overhead
is computed from the unrounded base cost, profit from the unrounded
base + overhead.
"""

from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

import structlog

from models.estimate_result import (
    PREP_LINE_NAME,
    PREP_SERVICE_ID,
    PREP_SERVICE_TYPE,
    BreakdownLine,
    DetailedBreakdownItem,
    EstimateResult,
)
from models.pricing import Pricing
from models.room import (
    AdditionalService,
    BaseService,
    CeilingPaintingService,
    Room,
    TrimService,
    WallPaintingService,
)
from utils.numbers import round2, to_number

logger = structlog.get_logger(__name__)

RoomLike = Union[Room, Mapping[str, Any]]
PricingLike = Union[Pricing, Mapping[str, Any]]


def _area_costs(
    quantity: float,
    material_rate: float,
    production_rate: float,
    labor_rate: float
) -> Tuple[float, float]:
    material = quantity * material_rate
    if production_rate == 0:
        # Unsanitized pricing; no hours can be derived
        logger.warning("zero_production_rate", quantity=quantity)
        return material, 0.0
    labor = (quantity / production_rate) * labor_rate
    return material, labor


def service_costs(service: BaseService, pricing: Pricing) -> Optional[Tuple[float, float]]:
    """Compute unrounded (material, labor) for one service.

    Args:
        service: Typed service model.
        pricing: Pricing configuration.

    Returns:
        (material, labor) tuple, or None when the service type is not priced.
    """
    materials = pricing.material_rates
    production = pricing.production_rates

    if isinstance(service, WallPaintingService):
        return _area_costs(
            to_number(service.surface_area),
            materials.wall_painting,
            production.wall_painting,
            pricing.labor_rate,
        )
    if isinstance(service, CeilingPaintingService):
        return _area_costs(
            to_number(service.surface_area),
            materials.ceiling_painting,
            production.ceiling_painting,
            pricing.labor_rate,
        )
    if isinstance(service, TrimService):
        return _area_costs(
            to_number(service.ln_ft),
            materials.trims,
            production.trims,
            pricing.labor_rate,
        )
    if isinstance(service, AdditionalService):
        return to_number(service.quantity) * to_number(service.cost), 0.0

    # Unknown types are dropped from totals and breakdown alike
    return None


def _coerce_rooms(rooms: Optional[Sequence[RoomLike]]) -> List[Room]:
    return [
        room if isinstance(room, Room) else Room.model_validate(room)
        for room in (rooms or [])
    ]


def _coerce_pricing(pricing: PricingLike) -> Pricing:
    return pricing if isinstance(pricing, Pricing) else Pricing.model_validate(pricing)


def calculate_estimate(rooms: Sequence[RoomLike], pricing: PricingLike) -> EstimateResult:
    """Price an estimate.

    Malformed numeric fields (NaN, None, non-numeric strings) count as 0;
    negative values flow through arithmetically. Inputs are never mutated and
    a fresh result is built on every call.

    Args:
        rooms: Rooms in display order (models or camelCase dicts).
        pricing: Pricing configuration (model or camelCase dict).

    Returns:
        EstimateResult with every amount rounded to cents.
    """
    pricing = _coerce_pricing(pricing)

    total_material_cost = 0.0
    total_labor_cost = 0.0
    breakdown: List[DetailedBreakdownItem] = []

    for room in _coerce_rooms(rooms):
        room_total = 0.0
        room_lines: List[BreakdownLine] = []

        prep_hours = to_number(room.prep_hours)
        if prep_hours > 0:
            prep_labor_cost = prep_hours * pricing.labor_rate
            total_labor_cost += prep_labor_cost
            room_total += prep_labor_cost
            room_lines.append(BreakdownLine(
                service_id=PREP_SERVICE_ID,
                service_type=PREP_SERVICE_TYPE,
                name=PREP_LINE_NAME,
                total=round2(prep_labor_cost),
            ))

        for service in room.services:
            costs = service_costs(service, pricing)
            if costs is None:
                logger.warning(
                    "unknown_service_type_skipped",
                    room_id=room.id,
                    service_id=service.id,
                    service_type=service.type,
                )
                continue

            material, labor = costs
            total_material_cost += material
            total_labor_cost += labor
            room_total += material + labor
            room_lines.append(BreakdownLine(
                service_id=service.id,
                service_type=service.type,
                name=service.name,
                total=round2(material + labor),
            ))

        breakdown.append(DetailedBreakdownItem(
            room_id=room.id,
            room_name=room.name,
            room_total=round2(room_total),
            services=room_lines,
        ))

    base_cost = total_material_cost + total_labor_cost
    overhead_cost = base_cost * pricing.overhead_rate
    profit_amount = (base_cost + overhead_cost) * pricing.profit_margin_rate
    total = base_cost + overhead_cost + profit_amount

    result = EstimateResult(
        total=round2(total),
        breakdown=breakdown,
        material_cost=round2(total_material_cost),
        labor_cost=round2(total_labor_cost),
        overhead_cost=round2(overhead_cost),
        profit_amount=round2(profit_amount),
        base_cost=round2(base_cost),
    )

    logger.debug(
        "estimate_calculated",
        room_count=len(breakdown),
        base_cost=result.base_cost,
        total=result.total,
    )
    return result
