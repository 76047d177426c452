"""
Result — Типизированные результаты XIRR и absolute rate

Ошибки нормальной работы не бросаются как exceptions: каждый отказ
возвращается как результат с фиксированным кодом XirrError и
стабильной строкой reason.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final, Optional


# =============================================================================
# ERROR CODES
# =============================================================================


class XirrError(str, Enum):
    """Фиксированный набор причин отказа."""

    INPUT_SIZE_MISMATCH = "INPUT_SIZE_MISMATCH"
    NO_VALID_ENTRIES = "NO_VALID_ENTRIES"
    INVALID_CASH_FLOW_SIGN = "INVALID_CASH_FLOW_SIGN"
    CONVERGENCE_FAILURE = "CONVERGENCE_FAILURE"
    ITERATION_EXHAUSTED = "ITERATION_EXHAUSTED"
    ZERO_RATE = "ZERO_RATE"
    ARITHMETIC_FAULT = "ARITHMETIC_FAULT"


# Стабильные строки причин
REASON_SIZE_MISMATCH: Final[str] = "Date and Value collections must have the same size"
REASON_NO_VALID_ENTRIES: Final[str] = "No valid date-value pairs after filtering nil values"
REASON_INVALID_SIGN: Final[str] = "Values should have at least one positive or negative value."
REASON_COULD_NOT_CONVERGE: Final[str] = "Could not converge"
REASON_NEWTON_GAVE_UP: Final[str] = "I give up"
REASON_BISECTION_EXHAUSTED: Final[str] = "Unable to converge"
REASON_ZERO_RATE: Final[str] = "Rate is 0"
REASON_ARITHMETIC_FAULT: Final[str] = "Arithmetic fault"


class XirrMethod(str, Enum):
    """Выбор солвера."""

    AUTO = "auto"
    NEWTON = "newton"
    BISECTION = "bisection"


# =============================================================================
# RESULTS
# =============================================================================


@dataclass(frozen=True)
class XirrResult:
    """Результат xirr()."""

    ok: bool
    rate: Optional[float]  # Rounded to 6 decimals
    error: Optional[XirrError]
    reason: str

    # Диагностика
    method: Optional[XirrMethod] = None
    iterations: int = 0
    details: str = ""

    @classmethod
    def success(
        cls, rate: float, method: XirrMethod, iterations: int, details: str = ""
    ) -> "XirrResult":
        return cls(
            ok=True,
            rate=rate,
            error=None,
            reason="",
            method=method,
            iterations=iterations,
            details=details,
        )

    @classmethod
    def failure(
        cls,
        error: XirrError,
        reason: str,
        method: Optional[XirrMethod] = None,
        iterations: int = 0,
        details: str = "",
    ) -> "XirrResult":
        return cls(
            ok=False,
            rate=None,
            error=error,
            reason=reason,
            method=method,
            iterations=iterations,
            details=details or reason,
        )


@dataclass(frozen=True)
class AbsoluteRateResult:
    """Результат absolute_rate()."""

    ok: bool
    percent: Optional[float]  # Rounded to 2 decimals
    error: Optional[XirrError]
    reason: str
    details: str = ""
