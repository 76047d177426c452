"""
Contract Validation Module

Модуль для валидации JSON контрактов xirr-engine.
"""

from .validators import (
    CashFlowSeriesValidator,
    ContractValidator,
    SchemaLoader,
    parse_cashflow_series,
    validate_cashflow_series,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "CashFlowSeriesValidator",
    # Functions
    "validate_cashflow_series",
    "parse_cashflow_series",
]
