"""Estimate completeness checks.

Run before calculating or saving an estimate. The calculator itself never
rejects input; this module decides whether an estimate is complete enough
to price and send.

STRICT SERVICE TYPES: by default services with an unrecognised type are
accepted (the calculator drops them). In strict mode they are reported as
UNKNOWN_SERVICE_TYPE issues. The default comes from
settings.strict_service_types and can be overridden per call.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import structlog

from config.errors import ErrorCode, ValidationError
from config.settings import settings
from models.estimate import EstimateInput
from models.room import KNOWN_SERVICE_TYPES, BaseService, Room

logger = structlog.get_logger(__name__)

UNNAMED_ROOM = "Unnamed room"


@dataclass
class EstimateValidationIssue:
    """A single completeness problem."""
    field: str
    code: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "code": self.code, "message": self.message}


@dataclass
class EstimateValidationResult:
    """Result of estimate validation."""
    is_valid: bool = True
    issues: List[EstimateValidationIssue] = field(default_factory=list)

    @property
    def codes(self) -> List[str]:
        return [issue.code for issue in self.issues]

    def raise_if_invalid(self) -> None:
        """Raise ValidationError carrying every issue when invalid.

        Raises:
            ValidationError: If any issue was found.
        """
        if self.is_valid:
            return
        raise ValidationError(
            message=self.issues[0].message,
            code=ErrorCode.ESTIMATE_INCOMPLETE,
            details={"issues": [issue.to_dict() for issue in self.issues]}
        )


def _has_text(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


def _is_missing_type(value: Any) -> bool:
    if isinstance(value, str):
        return not value.strip()
    return not value


def _is_known_type(value: Any) -> bool:
    return isinstance(value, str) and value in KNOWN_SERVICE_TYPES


def _validate_service(
    service: BaseService,
    room_name: str,
    strict_service_types: bool
) -> List[EstimateValidationIssue]:
    if _is_missing_type(service.type):
        return [EstimateValidationIssue(
            field="services",
            code=ErrorCode.SERVICE_TYPE_REQUIRED,
            message=f'A service in "{room_name}" is missing a service type.',
        )]

    if strict_service_types and not _is_known_type(service.type):
        return [EstimateValidationIssue(
            field="services",
            code=ErrorCode.UNKNOWN_SERVICE_TYPE,
            message=f'Service type "{service.type}" in "{room_name}" is not supported.',
        )]

    return []


def _validate_room(room: Room, strict_service_types: bool) -> List[EstimateValidationIssue]:
    issues: List[EstimateValidationIssue] = []
    room_name = room.name if _has_text(room.name) else UNNAMED_ROOM

    if not _has_text(room.name):
        issues.append(EstimateValidationIssue(
            field="rooms",
            code=ErrorCode.ROOM_NAME_REQUIRED,
            message="Every room needs a name.",
        ))

    if not room.services:
        issues.append(EstimateValidationIssue(
            field="services",
            code=ErrorCode.AT_LEAST_ONE_SERVICE_REQUIRED,
            message=f'Room "{room_name}" must include at least one service.',
        ))
    else:
        for service in room.services:
            issues.extend(_validate_service(service, room_name, strict_service_types))

    return issues


def validate_estimate_for_calculation(
    estimate: Union[EstimateInput, Dict[str, Any]],
    strict_service_types: Optional[bool] = None
) -> EstimateValidationResult:
    """Check that an estimate has an address, rooms, names and service types.

    Args:
        estimate: EstimateInput or camelCase dict with projectAddress and rooms.
        strict_service_types: Report unknown service types. None uses the
            configured default.

    Returns:
        EstimateValidationResult listing every issue found.
    """
    if not isinstance(estimate, EstimateInput):
        estimate = EstimateInput.model_validate(estimate or {})
    if strict_service_types is None:
        strict_service_types = settings.strict_service_types

    issues: List[EstimateValidationIssue] = []

    if not _has_text(estimate.project_address):
        issues.append(EstimateValidationIssue(
            field="projectAddress",
            code=ErrorCode.PROJECT_ADDRESS_REQUIRED,
            message="Project address is required.",
        ))

    if not estimate.rooms:
        issues.append(EstimateValidationIssue(
            field="rooms",
            code=ErrorCode.AT_LEAST_ONE_ROOM_REQUIRED,
            message="Add at least one room before calculating or saving.",
        ))
    else:
        for room in estimate.rooms:
            issues.extend(_validate_room(room, strict_service_types))

    if issues:
        logger.info(
            "estimate_validation_failed",
            codes=[issue.code for issue in issues],
            strict_service_types=strict_service_types
        )

    return EstimateValidationResult(is_valid=not issues, issues=issues)
