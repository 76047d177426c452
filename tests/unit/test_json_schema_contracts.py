"""
Tests for JSON Schema Contract Validators

Тестирование cashflow_series контракта:
- Валидность самой схемы
- Валидация правильных документов
- Детекция нарушений required полей, типов и enum
- Разбор документа и интеграция с фасадом
"""

from datetime import date

import pytest
from jsonschema import Draft202012Validator, ValidationError

from xirr_engine import XirrError, XirrMethod, xirr_from_payload
from xirr_engine.core.contracts import (
    CashFlowSeriesValidator,
    SchemaLoader,
    parse_cashflow_series,
    validate_cashflow_series,
)


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_series():
    """Валидный cashflow_series документ."""
    return {
        "dates": ["2015-11-01", "2015-10-01", "2015-06-01"],
        "amounts": [-800000, -2200000, 1000000],
    }


# =============================================================================
# SCHEMA LOADING
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузчика схем."""

    def test_schema_is_valid_draft_2020_12(self):
        schema = SchemaLoader().load_schema("cashflow_series")
        Draft202012Validator.check_schema(schema)
        assert schema["title"] == "cashflow_series"

    def test_schema_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("cashflow_series") is loader.load_schema("cashflow_series")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(RuntimeError):
            SchemaLoader(schema_dir=tmp_path / "absent")

    def test_invalid_schema_rejected(self, tmp_path):
        (tmp_path / "broken.json").write_text('{"type": 42}', encoding="utf-8")
        with pytest.raises(ValueError):
            SchemaLoader(schema_dir=tmp_path).load_schema("broken")


# =============================================================================
# VALIDATION
# =============================================================================


class TestCashFlowSeriesValidator:
    """Тесты валидации cashflow_series."""

    def test_valid_document(self, valid_series):
        validate_cashflow_series(valid_series)
        assert CashFlowSeriesValidator().is_valid(valid_series)

    def test_null_amounts_allowed(self, valid_series):
        valid_series["amounts"] = [-800000, None, 1000000]
        validate_cashflow_series(valid_series)

    @pytest.mark.parametrize("missing", ["dates", "amounts"])
    def test_required_fields(self, valid_series, missing):
        del valid_series[missing]
        with pytest.raises(ValidationError):
            validate_cashflow_series(valid_series)

    def test_string_amount_rejected(self, valid_series):
        valid_series["amounts"] = ["-800000", -2200000, 1000000]
        with pytest.raises(ValidationError):
            validate_cashflow_series(valid_series)

    def test_date_pattern(self, valid_series):
        valid_series["dates"] = ["01/11/2015", "2015-10-01", "2015-06-01"]
        with pytest.raises(ValidationError):
            validate_cashflow_series(valid_series)

    def test_method_enum(self, valid_series):
        valid_series["method"] = "secant"
        with pytest.raises(ValidationError):
            validate_cashflow_series(valid_series)

    def test_additional_properties_rejected(self, valid_series):
        valid_series["currency"] = "USD"
        with pytest.raises(ValidationError):
            validate_cashflow_series(valid_series)

    def test_schema_version_not_part_of_contract(self, valid_series):
        """Неизвестные поля (включая schema_version) отклоняются."""
        valid_series["schema_version"] = "1"
        assert not CashFlowSeriesValidator().is_valid(valid_series)

    def test_iter_errors_reports_all(self, valid_series):
        valid_series["amounts"] = ["a", "b", 1.0]
        errors = list(CashFlowSeriesValidator().iter_errors(valid_series))
        assert len(errors) == 2


# =============================================================================
# PARSING & FACADE INTEGRATION
# =============================================================================


class TestParseCashFlowSeries:
    """Разбор документа и вызов xirr."""

    def test_parse(self, valid_series):
        dates, amounts, method = parse_cashflow_series(valid_series)

        assert dates == [date(2015, 11, 1), date(2015, 10, 1), date(2015, 6, 1)]
        assert amounts == [-800000, -2200000, 1000000]
        assert method == XirrMethod.AUTO

    def test_parse_method(self, valid_series):
        valid_series["method"] = "newton"
        _, _, method = parse_cashflow_series(valid_series)
        assert method == XirrMethod.NEWTON

    def test_calendar_invalid_date(self, valid_series):
        """Паттерн проходит, но календарной даты нет."""
        valid_series["dates"] = ["2015-02-30", "2015-10-01", "2015-06-01"]
        with pytest.raises(ValueError):
            parse_cashflow_series(valid_series)

    def test_xirr_from_payload(self, valid_series):
        result = xirr_from_payload(valid_series)

        assert result.ok
        assert result.rate == 21.118359

    def test_xirr_from_payload_size_mismatch(self, valid_series):
        """Длины не проверяются схемой: отказ приходит от фасада."""
        valid_series["amounts"] = [-800000, 1000000]
        result = xirr_from_payload(valid_series)

        assert not result.ok
        assert result.error == XirrError.INPUT_SIZE_MISMATCH

    def test_xirr_from_payload_invalid(self, valid_series):
        valid_series["amounts"] = "not-a-list"
        with pytest.raises(ValidationError):
            xirr_from_payload(valid_series)
