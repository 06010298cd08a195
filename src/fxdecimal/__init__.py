"""
fxdecimal — fixed-point десятичные числа с контролируемым округлением

Точная арифметика для денежных и измеряемых величин без ошибок
представления двоичного float. SCALE (число дробных цифр) и ширина
backing-целого — часть типа значения:

    from fxdecimal import FixedDecimal, I64, RoundingMode

    Amount = FixedDecimal[I64, 2]
    Rate = FixedDecimal[I64, 4]

    Amount("10.00").mul(Rate("0.0125"), RoundingMode.HALF_UP)   # 0.13
"""

import logging

from fxdecimal.config import DecimalConfig, load_config
from fxdecimal.contracts import DecimalStringValidator, decimal_string_schema
from fxdecimal.domain import FixedDecimal, fixed_type
from fxdecimal.errors import (
    DecimalError,
    DecimalOverflowError,
    DivisionByZeroError,
    EmptyInputError,
    InvalidFormatError,
    OverflowFault,
    TooManyFractionalDigitsError,
)
from fxdecimal.math import I64, I128, MAX_SCALE, BackingInt, RoundingMode

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Value type
    "FixedDecimal",
    "fixed_type",
    # Backing integers
    "BackingInt",
    "I64",
    "I128",
    "MAX_SCALE",
    # Rounding
    "RoundingMode",
    # Errors
    "DecimalError",
    "DecimalOverflowError",
    "DivisionByZeroError",
    "EmptyInputError",
    "InvalidFormatError",
    "OverflowFault",
    "TooManyFractionalDigitsError",
    # Config
    "DecimalConfig",
    "load_config",
    # Contracts
    "DecimalStringValidator",
    "decimal_string_schema",
]
