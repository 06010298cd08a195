"""
JSON Schema Contract Validators

Контракт канонической строковой формы fixed-point значения для внешних
JSON-документов (ledger-записи, курсы, конфигурации).

Каноническая строка при SCALE = S:
- ровно S дробных цифр, '.' только при S > 0
- без ведущих нулей в целой части (кроме единственного "0")
- '-' только у строго отрицательных значений ("-0.00" не канонична)

Схема проверяет только форму; диапазон backing-типа проверяется разбором.
Использует библиотеку jsonschema (Draft 2020-12).
"""

from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"


# =============================================================================
# SCHEMA BUILDER
# =============================================================================


def canonical_pattern(scale: int) -> str:
    """
    Регулярное выражение канонической формы при данном SCALE.

    Examples:
        >>> canonical_pattern(0)
        '^(0|-?[1-9][0-9]*)$'
        >>> canonical_pattern(2)
        '^(?!-0\\\\.0{2}$)-?(0|[1-9][0-9]*)\\\\.[0-9]{2}$'
    """
    if scale == 0:
        return "^(0|-?[1-9][0-9]*)$"
    return f"^(?!-0\\.0{{{scale}}}$)-?(0|[1-9][0-9]*)\\.[0-9]{{{scale}}}$"


def decimal_string_schema(decimal_type: Any) -> Dict[str, Any]:
    """
    JSON Schema канонической строки для класса FixedDecimal[backing, scale].

    Args:
        decimal_type: Конкретный класс FixedDecimal

    Returns:
        Новая схема как dict (можно изменять)

    Raises:
        TypeError: Класс не параметризован
    """
    scale = getattr(decimal_type, "SCALE", None)
    backing = getattr(decimal_type, "BACKING", None)
    if scale is None or backing is None:
        raise TypeError(f"{decimal_type!r} is not a parametrized FixedDecimal type")

    return {
        "$schema": SCHEMA_DIALECT,
        "title": decimal_type.__name__,
        "description": (
            f"Canonical fixed-point decimal with exactly {scale} fractional "
            f"digits, {backing.name} backing"
        ),
        "type": "string",
        "pattern": canonical_pattern(scale),
    }


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class DecimalStringValidator:
    """
    Валидатор канонической строки для одного класса FixedDecimal.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, decimal_type: Any):
        """
        Инициализация валидатора.

        Args:
            decimal_type: Конкретный класс FixedDecimal

        Raises:
            ValueError: Если построенная схема невалидна (meta-validation)
        """
        self.decimal_type = decimal_type
        self.schema = decimal_string_schema(decimal_type)

        try:
            Draft202012Validator.check_schema(self.schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema for {decimal_type.__name__}: {e}")

        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any) -> Iterator[ValidationError]:
        """
        Итератор по всем ошибкам валидации.

        Yields:
            ValidationError объекты для каждой найденной ошибки
        """
        return self.validator.iter_errors(data)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_decimal_string(data: Any, decimal_type: Any) -> None:
    """
    Валидация канонической строки для класса decimal_type.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    DecimalStringValidator(decimal_type).validate(data)
