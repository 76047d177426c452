"""Solvers — взаимозаменяемые стратегии поиска XIRR.

- NewtonSolver: Newton-Raphson (основной путь, >= 10 записей)
- BisectionSolver: bisection с расширяемым bracket (< 10 записей)
"""

from .base import (
    DIVERGENCE_SENTINEL,
    MAX_ITERATIONS,
    Solver,
    SolverConfig,
    SolverOutcome,
    SolverState,
    SolverStatus,
    net_present_value,
    net_present_value_derivative,
)
from .bisection import BisectionSolver
from .newton import NewtonSolver

__all__ = [
    "DIVERGENCE_SENTINEL",
    "MAX_ITERATIONS",
    "Solver",
    "SolverConfig",
    "SolverOutcome",
    "SolverState",
    "SolverStatus",
    "net_present_value",
    "net_present_value_derivative",
    "BisectionSolver",
    "NewtonSolver",
]
