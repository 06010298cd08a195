"""
Math primitives для fxdecimal

Backing-целые, промежуточная 128-битная арифметика и процедура округления.
"""

# Backing integers
from fxdecimal.math.backing import (
    BACKINGS,
    I64,
    I128,
    MAX_SCALE,
    WIDE,
    BackingInt,
    backing_for,
    pow10,
    wide_check,
    wide_mul,
)

# Rounding
from fxdecimal.math.rounding import (
    FLOAT_TIE_TOLERANCE,
    RoundingMode,
    round_float_magnitude,
    round_quotient,
    should_adjust,
    trunc_divmod,
)

__all__ = [
    # Backing: Constants
    "BACKINGS",
    "I64",
    "I128",
    "MAX_SCALE",
    "WIDE",
    # Backing: Types
    "BackingInt",
    # Backing: Functions
    "backing_for",
    "pow10",
    "wide_check",
    "wide_mul",
    # Rounding: Constants
    "FLOAT_TIE_TOLERANCE",
    # Rounding: Types
    "RoundingMode",
    # Rounding: Functions
    "round_float_magnitude",
    "round_quotient",
    "should_adjust",
    "trunc_divmod",
]
