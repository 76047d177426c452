"""
JSON Schema Contract Validators

Модуль для валидации JSON документов cash-flow серий согласно формальным
JSON Schema контрактам (Draft 2020-12), библиотека jsonschema.

Схемы:
- cashflow_series.json: {"dates": [...], "amounts": [...], "method": ...}
"""

import json
from datetime import date
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import jsonschema
from jsonschema import Draft202012Validator

from xirr_engine.core.domain.result import XirrMethod


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат в каталоге schema/ рядом с этим модулем.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'cashflow_series')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Mapping[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Mapping[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Mapping[str, Any]):
        return self.validator.iter_errors(data)


class CashFlowSeriesValidator(ContractValidator):
    """Валидатор для cashflow_series контракта."""

    def __init__(self):
        super().__init__("cashflow_series")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_cashflow_series(data: Mapping[str, Any]) -> None:
    """
    Валидация cashflow_series документа.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    CashFlowSeriesValidator().validate(data)


def parse_cashflow_series(
    data: Mapping[str, Any],
) -> tuple[list[date], list[Optional[float]], XirrMethod]:
    """
    Валидация и разбор cashflow_series документа.

    Длины dates и amounts здесь не сравниваются: несовпадение
    возвращается фасадом как INPUT_SIZE_MISMATCH.

    Returns:
        (dates, amounts, method)

    Raises:
        ValidationError: Если данные не соответствуют схеме
        ValueError: Если строка даты не является календарной датой
    """
    validate_cashflow_series(data)

    dates = [date.fromisoformat(value) for value in data["dates"]]
    amounts = list(data["amounts"])
    method = XirrMethod(data.get("method", XirrMethod.AUTO.value))

    return dates, amounts, method
