"""
Domain: fixed-point значение и его операции.

FixedDecimal, фабрика типов, разбор, отображение, арифметика и конверсии.
"""

from fxdecimal.domain.display import render_minor_units
from fxdecimal.domain.fixed import FixedDecimal, fixed_type, validate_scale
from fxdecimal.domain.parsing import parse_minor_units

__all__ = [
    # Value type
    "FixedDecimal",
    "fixed_type",
    "validate_scale",
    # Text
    "parse_minor_units",
    "render_minor_units",
]
