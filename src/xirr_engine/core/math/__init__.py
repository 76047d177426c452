"""
Core math modules для xirr-engine

Математические примитивы дисконтирования с гарантией стабильности.
"""

# Numerical Safeguards
from xirr_engine.core.math.numerical_safeguards import (
    # Constants
    DAYS_IN_YEAR,
    ROUNDING_MAGNITUDE_LIMIT,
    # Float checks
    is_valid_float,
    validate_positive,
    # Power / rounding / sums
    exact_sum,
    round_half_away,
    signed_fractional_power,
)

# Day fractions
from xirr_engine.core.math.fraction import DayFraction

__all__ = [
    # Numerical Safeguards: Constants
    "DAYS_IN_YEAR",
    "ROUNDING_MAGNITUDE_LIMIT",
    # Numerical Safeguards: Float checks
    "is_valid_float",
    "validate_positive",
    # Numerical Safeguards: Power / rounding / sums
    "exact_sum",
    "round_half_away",
    "signed_fractional_power",
    # Fraction
    "DayFraction",
]
