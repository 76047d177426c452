"""
xirr-engine — XIRR для нерегулярных cash flows

Newton-Raphson и bisection солверы за одним фасадом:

    >>> from xirr_engine import xirr
    >>> xirr([(2015, 11, 1), (2015, 10, 1), (2015, 6, 1)], [-800_000, -2_200_000, 1_000_000]).rate
    21.118359
"""

from xirr_engine.core.domain.result import (
    AbsoluteRateResult,
    XirrError,
    XirrMethod,
    XirrResult,
)
from xirr_engine.facade import (
    XirrConfig,
    XirrFacade,
    absolute_rate,
    xirr,
    xirr_from_payload,
)
from xirr_engine.solvers.base import SolverConfig

__all__ = [
    # Functions
    "xirr",
    "absolute_rate",
    "xirr_from_payload",
    # Facade
    "XirrFacade",
    "XirrConfig",
    "SolverConfig",
    # Results
    "XirrResult",
    "AbsoluteRateResult",
    "XirrError",
    "XirrMethod",
]
