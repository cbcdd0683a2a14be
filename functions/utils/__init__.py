"""Utility modules for the painting estimator functions."""

from utils.numbers import parse_number, to_number, to_positive, to_rate, round2
from utils.estimate_report import format_estimate_report, print_estimate_report

__all__ = [
    "parse_number",
    "to_number",
    "to_positive",
    "to_rate",
    "round2",
    "format_estimate_report",
    "print_estimate_report",
]
