"""Cash flow normalization — компакция и начальная ставка."""

from .compactor import CashFlowCompactor, CompactionResult
from .rate_guess import (
    BISECTION_GUESS_DECIMALS,
    FALLBACK_MULTIPLE,
    NEWTON_GUESS_DECIMALS,
    RateGuesser,
)

__all__ = [
    "CashFlowCompactor",
    "CompactionResult",
    "BISECTION_GUESS_DECIMALS",
    "FALLBACK_MULTIPLE",
    "NEWTON_GUESS_DECIMALS",
    "RateGuesser",
]
