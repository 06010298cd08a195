"""
Tests for JSON Schema Contract Validators

Тестирование контракта канонической строки fixed-point значения:
- Валидность самих схем (meta-validation)
- Валидация канонических строк
- Детекция неканонических форм (лишние нули, "-0", число вместо строки)
- Согласованность со строковым отображением FixedDecimal
"""

import pytest
from jsonschema import Draft202012Validator, ValidationError

from fxdecimal import I64, I128, DecimalStringValidator, FixedDecimal, decimal_string_schema
from fxdecimal.contracts import canonical_pattern, validate_decimal_string

Amount = FixedDecimal[I64, 2]
Whole = FixedDecimal[I64, 0]


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def amount_validator():
    """Валидатор для FixedDecimal[i64, 2]."""
    return DecimalStringValidator(Amount)


@pytest.fixture
def whole_validator():
    """Валидатор для FixedDecimal[i64, 0]."""
    return DecimalStringValidator(Whole)


# =============================================================================
# SCHEMA
# =============================================================================


class TestDecimalStringSchema:
    """Тесты построения схемы"""

    def test_schema_is_valid(self) -> None:
        """Сама схема соответствует Draft 2020-12"""
        Draft202012Validator.check_schema(decimal_string_schema(Amount))

    def test_schema_fields(self) -> None:
        schema = decimal_string_schema(Amount)
        assert schema["type"] == "string"
        assert schema["title"] == "FixedDecimal[i64, 2]"
        assert schema["pattern"] == canonical_pattern(2)
        assert "i64" in schema["description"]

    def test_schema_is_fresh_copy(self) -> None:
        schema = decimal_string_schema(Amount)
        schema["pattern"] = "x"
        assert decimal_string_schema(Amount)["pattern"] == canonical_pattern(2)

    def test_backing_in_description(self) -> None:
        schema = decimal_string_schema(FixedDecimal[I128, 2])
        assert "i128" in schema["description"]

    def test_unparametrized_rejected(self) -> None:
        with pytest.raises(TypeError):
            decimal_string_schema(FixedDecimal)


# =============================================================================
# VALIDATION
# =============================================================================


class TestDecimalStringValidator:
    """Тесты валидатора канонической строки"""

    @pytest.mark.parametrize("data", ["0.00", "1.50", "-1.50", "123.45", "-0.01"])
    def test_canonical_strings_valid(self, amount_validator, data) -> None:
        amount_validator.validate(data)
        assert amount_validator.is_valid(data)

    @pytest.mark.parametrize(
        "data",
        [
            "-0.00",
            "1.5",
            "1.500",
            "01.50",
            "+1.50",
            ".50",
            "1.",
            "1",
            " 1.50",
            1.5,
            150,
            None,
        ],
    )
    def test_non_canonical_rejected(self, amount_validator, data) -> None:
        with pytest.raises(ValidationError):
            amount_validator.validate(data)
        assert not amount_validator.is_valid(data)

    @pytest.mark.parametrize("data", ["0", "7", "-7", "123"])
    def test_scale_zero_valid(self, whole_validator, data) -> None:
        assert whole_validator.is_valid(data)

    @pytest.mark.parametrize("data", ["-0", "007", "1.0", "1."])
    def test_scale_zero_invalid(self, whole_validator, data) -> None:
        assert not whole_validator.is_valid(data)

    def test_iter_errors(self, amount_validator) -> None:
        assert list(amount_validator.iter_errors("1.50")) == []
        assert len(list(amount_validator.iter_errors(1.5))) == 1

    def test_convenience_function(self) -> None:
        validate_decimal_string("1.50", Amount)
        with pytest.raises(ValidationError):
            validate_decimal_string("1.5", Amount)


class TestDisplayMatchesContract:
    """Строковое отображение всегда удовлетворяет контракту"""

    @pytest.mark.parametrize(
        "text", ["0", "-0", "1234.", ".5", "-.25", "+7.1", "92233720368547758.07"]
    )
    def test_display_is_canonical(self, amount_validator, text) -> None:
        amount_validator.validate(str(Amount.parse(text)))

    def test_canonical_string_parses_back(self) -> None:
        assert str(Amount.parse("-0.01")) == "-0.01"
