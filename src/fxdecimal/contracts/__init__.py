"""
Contract Validation Module

JSON Schema контракт канонической строковой формы fixed-point значений.
"""

from .validators import (
    SCHEMA_DIALECT,
    DecimalStringValidator,
    canonical_pattern,
    decimal_string_schema,
    validate_decimal_string,
)

__all__ = [
    # Constants
    "SCHEMA_DIALECT",
    # Classes
    "DecimalStringValidator",
    # Functions
    "canonical_pattern",
    "decimal_string_schema",
    "validate_decimal_string",
]
