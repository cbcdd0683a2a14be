"""Painting Estimator - Cloud Functions.

This package contains the Python Cloud Functions for the painting
contractor estimator: the estimate pricing engine and its supporting
pieces.

Architecture:
- Estimate Calculator: pure pricing of rooms and services
- Pricing Service: per-account pricing, merged over defaults and sanitized
- Estimate Validator: completeness checks run before pricing
- HTTP endpoints (main.py) and a CLI (scripts/calculate_estimate.py)
"""

__version__ = "1.0.0"
