"""
Domain models and value objects.

Contains cash-flow entities and typed XIRR results.
"""

from xirr_engine.core.domain.cash_flow import (
    CashFlow,
    CompactedSeries,
    DateLike,
    to_date,
)
from xirr_engine.core.domain.result import (
    REASON_ARITHMETIC_FAULT,
    REASON_BISECTION_EXHAUSTED,
    REASON_COULD_NOT_CONVERGE,
    REASON_INVALID_SIGN,
    REASON_NEWTON_GAVE_UP,
    REASON_NO_VALID_ENTRIES,
    REASON_SIZE_MISMATCH,
    REASON_ZERO_RATE,
    AbsoluteRateResult,
    XirrError,
    XirrMethod,
    XirrResult,
)

__all__ = [
    # Cash flows
    "CashFlow",
    "CompactedSeries",
    "DateLike",
    "to_date",
    # Results
    "AbsoluteRateResult",
    "XirrError",
    "XirrMethod",
    "XirrResult",
    # Reasons
    "REASON_ARITHMETIC_FAULT",
    "REASON_BISECTION_EXHAUSTED",
    "REASON_COULD_NOT_CONVERGE",
    "REASON_INVALID_SIGN",
    "REASON_NEWTON_GAVE_UP",
    "REASON_NO_VALID_ENTRIES",
    "REASON_SIZE_MISMATCH",
    "REASON_ZERO_RATE",
]
