"""Console report for estimate results.

Prints a banner-framed, per-room breakdown that stands out in terminal
output, and mirrors the headline numbers to the structured log.
"""

from typing import List, Optional, TextIO
import sys

import structlog

from models.estimate_result import EstimateResult

logger = structlog.get_logger()

BANNER_WIDTH = 80
REPORT_BANNER_CHAR = "═"
ROOM_BANNER_CHAR = "─"


def _create_banner(char: str, text: str, width: int = BANNER_WIDTH) -> str:
    """Create a centered banner with given character."""
    text_with_spaces = f" {text} "
    padding = (width - len(text_with_spaces)) // 2
    return char * padding + text_with_spaces + char * (width - padding - len(text_with_spaces))


def _money(amount: float) -> str:
    return f"${amount:,.2f}"


def _line(label: str, amount: float, width: int = BANNER_WIDTH) -> str:
    value = _money(amount)
    return f"║ {label:<{width - len(value) - 4}} {value}"


def format_estimate_report(result: EstimateResult, title: str = "ESTIMATE") -> List[str]:
    """Render the report as a list of lines."""
    lines = [
        REPORT_BANNER_CHAR * BANNER_WIDTH,
        _create_banner(REPORT_BANNER_CHAR, title),
        REPORT_BANNER_CHAR * BANNER_WIDTH,
    ]

    for room in result.breakdown:
        lines.append(_create_banner(ROOM_BANNER_CHAR, room.room_name or f"Room {room.room_id}"))
        if not room.services:
            lines.append("║ (no priced services)")
        for entry in room.services:
            label = entry.name or entry.service_type
            if not entry.is_prep and entry.name:
                label = f"{entry.name} [{entry.service_type}]"
            lines.append(_line(f"  {label}", entry.total))
        lines.append(_line("Room total", room.room_total))

    lines.extend([
        REPORT_BANNER_CHAR * BANNER_WIDTH,
        _line("Material", result.material_cost),
        _line("Labor", result.labor_cost),
        _line("Base cost", result.base_cost),
        _line("Overhead", result.overhead_cost),
        _line("Profit", result.profit_amount),
        _line("TOTAL", result.total),
        REPORT_BANNER_CHAR * BANNER_WIDTH,
    ])
    return lines


def print_estimate_report(
    result: EstimateResult,
    title: str = "ESTIMATE",
    stream: Optional[TextIO] = None
) -> None:
    """Print the report and log its summary."""
    stream = stream or sys.stdout
    for line in format_estimate_report(result, title):
        print(line, file=stream)

    logger.info(
        "estimate_report_printed",
        title=title,
        room_count=len(result.breakdown),
        total=result.total
    )
