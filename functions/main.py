"""Cloud Function entry points for the painting estimator.

Provides HTTP endpoints for:
- Calculating an estimate from rooms and a pricing configuration
- Getting the default pricing configuration
"""

import json
from typing import Dict, Any

import structlog
from firebase_functions import https_fn, options
from pydantic import ValidationError as PydanticValidationError

from config.settings import settings
from config.errors import EstimatorError, ErrorCode, ValidationError
from services.estimate_calculator import calculate_estimate as run_calculation
from services.pricing_service import resolve_pricing, DEFAULT_PRICING, sanitize_pricing
from validators.estimate_validator import validate_estimate_for_calculation

logger = structlog.get_logger()

# ============================================================================
# Helper Functions
# ============================================================================


def success_response(data: Dict[str, Any]) -> Dict[str, Any]:
    """Build success response."""
    return {"success": True, "data": data}


def error_response(code: str, message: str, details: Dict[str, Any] = None) -> Dict[str, Any]:
    """Build error response."""
    return {
        "success": False,
        "error": {
            "code": code,
            "message": message,
            "details": details or {}
        }
    }


def get_request_json(req: https_fn.Request) -> Dict[str, Any]:
    """Extract JSON from request body.

    Args:
        req: HTTP request object.

    Returns:
        Parsed JSON data.

    Raises:
        ValidationError: If JSON is invalid.
    """
    try:
        data = req.get_json(force=True) or {}
    except Exception as e:
        raise ValidationError(
            message=f"Invalid JSON in request body: {str(e)}"
        )
    if not isinstance(data, dict):
        raise ValidationError(message="Request body must be a JSON object")
    return data


CORS_HEADERS = {
    "Access-Control-Allow-Origin": settings.cors_allow_origin,
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Max-Age": "3600"
}


def _cors_response() -> https_fn.Response:
    """Return CORS preflight response."""
    return https_fn.Response(
        "",
        status=204,
        headers=CORS_HEADERS
    )


def _json_response(data: dict, status: int = 200) -> https_fn.Response:
    """Return JSON response with CORS headers."""
    return https_fn.Response(
        json.dumps(data),
        status=status,
        mimetype="application/json",
        headers=CORS_HEADERS
    )


# ============================================================================
# Estimate Endpoints
# ============================================================================


@https_fn.on_request(
    timeout_sec=30,
    memory=options.MemoryOption.MB_256,
    region=settings.function_region
)
def calculate_estimate(req: https_fn.Request) -> https_fn.Response:
    """Price an estimate.

    Request body:
    {
        "rooms": [...],              // Rooms with services
        "pricing": {...},            // Optional: partial pricing, merged over defaults
        "projectAddress": "...",     // Optional: checked when validate=true
        "validate": false,           // Optional: run completeness checks first
        "strict": null               // Optional: report unknown service types
    }

    Response:
    {
        "success": true,
        "data": {
            "total": 1287.0,
            "baseCost": 975.0,
            "breakdown": [...],
            ...
        }
    }
    """
    if req.method == "OPTIONS":
        return _cors_response()

    try:
        data = get_request_json(req)
        rooms = data.get("rooms")

        if rooms is None:
            return _json_response(
                error_response(
                    ErrorCode.MISSING_FIELD,
                    "Missing rooms in request"
                ),
                status=400
            )

        if not isinstance(rooms, list):
            return _json_response(
                error_response(
                    ErrorCode.INVALID_FIELD,
                    "rooms must be a list",
                    {"field": "rooms"}
                ),
                status=400
            )

        if data.get("validate") is True:
            strict = data.get("strict")
            validation = validate_estimate_for_calculation(
                {"projectAddress": data.get("projectAddress"), "rooms": rooms},
                # Non-boolean values fall back to settings
                strict_service_types=strict if isinstance(strict, bool) else None
            )
            validation.raise_if_invalid()

        pricing = resolve_pricing(data.get("pricing"))
        result = run_calculation(rooms, pricing)

        logger.info(
            "estimate_request_calculated",
            room_count=len(rooms),
            total=result.total
        )

        return _json_response(success_response(result.to_dict()))

    except PydanticValidationError as e:
        return _json_response(
            error_response(
                ErrorCode.INVALID_SCHEMA,
                "Invalid estimate payload",
                {"errors": [f"{err['loc']}: {err['msg']}" for err in e.errors()]}
            ),
            status=400
        )
    except ValidationError as e:
        return _json_response(
            error_response(e.code, e.message, e.details),
            status=400
        )
    except EstimatorError as e:
        logger.error("estimate_request_error", error=e.message, code=e.code)
        return _json_response(
            error_response(e.code, e.message, e.details),
            status=500
        )
    except Exception as e:
        logger.exception("estimate_request_exception", error=str(e))
        return _json_response(
            error_response(
                ErrorCode.CALCULATION_FAILED,
                f"Failed to calculate estimate: {str(e)}"
            ),
            status=500
        )


@https_fn.on_request(
    timeout_sec=10,
    memory=options.MemoryOption.MB_256,
    region=settings.function_region
)
def get_default_pricing(req: https_fn.Request) -> https_fn.Response:
    """Return the sanitized default pricing configuration.

    Response:
    {
        "success": true,
        "data": {"laborRate": 60.0, "overheadRate": 0.15, ...}
    }
    """
    if req.method == "OPTIONS":
        return _cors_response()

    return _json_response(success_response(sanitize_pricing(DEFAULT_PRICING).to_dict()))
