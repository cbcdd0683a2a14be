"""Estimate input model.

The subset of an estimate document the calculator and the completeness
validator work from.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.room import Room


class EstimateInput(BaseModel):
    """Estimate as submitted by the estimate editor."""

    model_config = ConfigDict(populate_by_name=True)

    project_address: Optional[str] = Field(
        default=None,
        alias="projectAddress",
        description="Job site address"
    )
    rooms: List[Room] = Field(
        default_factory=list,
        description="Rooms in display order"
    )
