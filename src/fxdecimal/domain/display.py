"""
Display — minor units → каноническая строка

Каноническая форма:
- ровно SCALE дробных цифр, дополненных нулями
- одна '.' при SCALE > 0, без точки при SCALE == 0
- ведущий '-' только для строго отрицательных значений

Модуль вычисляется в промежуточном типе, поэтому минимальное значение
backing-типа отображается без переполнения.
"""

from fxdecimal.math.backing import pow10


def render_minor_units(minor_units: int, scale: int) -> str:
    """
    Каноническое отображение minor units.

    Args:
        minor_units: Целое значение × 10^scale
        scale: Количество дробных цифр

    Returns:
        Каноническая строка, которая разбирается обратно в то же значение

    Examples:
        >>> render_minor_units(5, 2)
        '0.05'
        >>> render_minor_units(-25, 3)
        '-0.025'
        >>> render_minor_units(123, 0)
        '123'
    """
    if scale == 0:
        return str(minor_units)

    sign = "-" if minor_units < 0 else ""
    int_part, frac_part = divmod(abs(minor_units), pow10(scale))
    return f"{sign}{int_part}.{frac_part:0{scale}d}"
