"""
Rounding — режимы округления и общая процедура деления с округлением

Одна процедура используется умножением, делением, rescale и round:
по паре (numerator, denominator) вычисляется частное с усечением к нулю
и остаток, после чего частное корректируется согласно режиму.

Режимы:
- TRUNCATE  — к нулю, без коррекции
- HALF_UP   — половина от нуля: коррекция при 2|r| >= |d|
- HALF_EVEN — банковское округление: коррекция при 2|r| > |d|,
              при точной половине — только если частное нечётное

Коррекция всегда на одну единицу от нуля в сторону знака истинного
(неокруглённого) частного: знак = XOR знаков числителя и знаменателя.
"""

import math
from enum import Enum
from typing import Final

from fxdecimal.math.backing import wide_check

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Абсолютная толерантность детекции точной половины для float-входа.
# Двоичный float в общем случае не представляет десятичное .5 точно.
FLOAT_TIE_TOLERANCE: Final[float] = 1e-12


# =============================================================================
# ТИПЫ
# =============================================================================


class RoundingMode(str, Enum):
    """Режим округления"""

    TRUNCATE = "truncate"
    HALF_UP = "half_up"
    HALF_EVEN = "half_even"


# =============================================================================
# ЦЕЛОЧИСЛЕННОЕ ОКРУГЛЕНИЕ
# =============================================================================


def trunc_divmod(numerator: int, denominator: int) -> tuple[int, int]:
    """
    Деление с усечением к нулю.

    В отличие от divmod (floor division), знак остатка совпадает со знаком
    числителя, а частное усечено к нулю.

    Examples:
        >>> trunc_divmod(7, 2)
        (3, 1)
        >>> trunc_divmod(-7, 2)
        (-3, -1)
        >>> trunc_divmod(7, -2)
        (-3, 1)
    """
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        quotient = -quotient
    return quotient, numerator - quotient * denominator


def should_adjust(base: int, remainder: int, denominator: int, mode: RoundingMode) -> bool:
    """
    Нужно ли сдвигать усечённое частное на единицу от нуля.

    Args:
        base: Частное, усечённое к нулю
        remainder: Остаток деления (ненулевой)
        denominator: Делитель
        mode: Режим округления

    Returns:
        True если требуется коррекция
    """
    if mode is RoundingMode.TRUNCATE:
        return False

    twice = 2 * abs(remainder)
    magnitude = abs(denominator)

    if mode is RoundingMode.HALF_UP:
        return twice >= magnitude

    # HALF_EVEN: при точной половине решает чётность частного
    if twice != magnitude:
        return twice > magnitude
    return base % 2 != 0


def round_quotient(numerator: int, denominator: int, mode: RoundingMode) -> int:
    """
    Частное numerator / denominator, округлённое по режиму.

    Все шаги проверяются по диапазону промежуточного типа WIDE.

    Args:
        numerator: Числитель (промежуточное целое)
        denominator: Знаменатель (ненулевой)
        mode: Режим округления

    Returns:
        Округлённое частное (промежуточное целое)

    Raises:
        DecimalOverflowError: Если результат коррекции вне WIDE
        ZeroDivisionError: Если denominator == 0

    Examples:
        >>> round_quotient(125, 10, RoundingMode.HALF_UP)
        13
        >>> round_quotient(125, 10, RoundingMode.HALF_EVEN)
        12
        >>> round_quotient(-125, 10, RoundingMode.HALF_UP)
        -13
        >>> round_quotient(129, 10, RoundingMode.TRUNCATE)
        12
    """
    if denominator == 0:
        raise ZeroDivisionError("round_quotient denominator is zero")

    base, remainder = trunc_divmod(numerator, denominator)
    if remainder == 0 or not should_adjust(base, remainder, denominator, mode):
        return wide_check(base)

    negative = (numerator < 0) != (denominator < 0)
    return wide_check(base - 1 if negative else base + 1)


# =============================================================================
# ОКРУГЛЕНИЕ FLOAT
# =============================================================================


def round_float_magnitude(magnitude: float, mode: RoundingMode) -> float:
    """
    Округление неотрицательного float до целого по режиму.

    Для HALF_EVEN точная половина детектируется с абсолютной толерантностью
    FLOAT_TIE_TOLERANCE вокруг границы 0.5.

    Args:
        magnitude: Неотрицательное конечное значение
        mode: Режим округления

    Returns:
        Целое значение в виде float

    Examples:
        >>> round_float_magnitude(112.5, RoundingMode.HALF_UP)
        113.0
        >>> round_float_magnitude(112.5, RoundingMode.HALF_EVEN)
        112.0
        >>> round_float_magnitude(112.9, RoundingMode.TRUNCATE)
        112.0
    """
    floor = math.floor(magnitude)
    frac = magnitude - floor

    if mode is RoundingMode.TRUNCATE:
        return float(floor)

    if mode is RoundingMode.HALF_UP:
        return float(floor + 1 if frac >= 0.5 else floor)

    if abs(frac - 0.5) <= FLOAT_TIE_TOLERANCE:
        return float(floor if floor % 2 == 0 else floor + 1)
    return float(floor if frac < 0.5 else floor + 1)
