"""
Arithmetic — сложение, вычитание, умножение и деление с перемасштабированием

Сложение/вычитание (одинаковый тип):
- checked_add / checked_sub — None при переполнении
- add_exact / sub_exact (операторы + и -) — DecimalOverflowError при переполнении
- add / sub — unchecked путь, OverflowFault при переполнении (фатально)

Умножение mul_rescale(lhs[S1], rhs[S2]) → result[SOUT]:
    product = lhs × rhs в промежуточном типе, in_scale = S1 + S2
    SOUT == in_scale → сужение
    SOUT >  in_scale → × 10^(SOUT − in_scale)
    SOUT <  in_scale → округлённое деление на 10^(in_scale − SOUT)

Деление div_rescale(lhs[S1], rhs[S2]) → result[SOUT]:
    rhs == 0 → DivisionByZeroError до любых вычислений
    numerator   = lhs × 10^(S2 + SOUT)
    denominator = rhs × 10^S1
    result      = round_quotient(numerator, denominator, mode)
"""

import logging
from typing import TYPE_CHECKING

from fxdecimal.errors import DecimalOverflowError, DivisionByZeroError, OverflowFault
from fxdecimal.math.backing import pow10, wide_mul
from fxdecimal.math.rounding import RoundingMode, round_quotient

if TYPE_CHECKING:
    from fxdecimal.domain.fixed import FixedDecimal

logger = logging.getLogger(__name__)


# =============================================================================
# ПРОВЕРКИ ТИПОВ
# =============================================================================


def _require_same_type(lhs: "FixedDecimal", rhs: "FixedDecimal") -> None:
    if type(lhs) is not type(rhs):
        raise TypeError(
            f"cannot combine {type(lhs).__name__} with {type(rhs).__name__}, "
            "convert explicitly with rescale/convert_backing"
        )


def _require_same_backing(lhs: "FixedDecimal", rhs: "FixedDecimal") -> None:
    if getattr(rhs, "BACKING", None) is not lhs.BACKING:
        raise TypeError(
            f"cannot combine {type(lhs).__name__} with {type(rhs).__name__}: "
            "backing integers differ"
        )


# =============================================================================
# СЛОЖЕНИЕ / ВЫЧИТАНИЕ
# =============================================================================


def checked_add(lhs: "FixedDecimal", rhs: "FixedDecimal") -> "FixedDecimal | None":
    """
    Сложение с проверкой переполнения.

    Returns:
        Сумма или None, если она не помещается в backing-тип
    """
    _require_same_type(lhs, rhs)
    minor = lhs.BACKING.checked_add(lhs._minor_units, rhs._minor_units)
    return None if minor is None else type(lhs)._from_wide(minor)


def checked_sub(lhs: "FixedDecimal", rhs: "FixedDecimal") -> "FixedDecimal | None":
    """
    Вычитание с проверкой переполнения.

    Returns:
        Разность или None, если она не помещается в backing-тип
    """
    _require_same_type(lhs, rhs)
    minor = lhs.BACKING.checked_sub(lhs._minor_units, rhs._minor_units)
    return None if minor is None else type(lhs)._from_wide(minor)


def add_exact(lhs: "FixedDecimal", rhs: "FixedDecimal") -> "FixedDecimal":
    """
    Сложение для операторов + и +=.

    Raises:
        DecimalOverflowError: Сумма вне диапазона backing-типа
    """
    result = checked_add(lhs, rhs)
    if result is None:
        raise DecimalOverflowError(f"{lhs} + {rhs} is out of range")
    return result


def sub_exact(lhs: "FixedDecimal", rhs: "FixedDecimal") -> "FixedDecimal":
    """
    Вычитание для операторов - и -=.

    Raises:
        DecimalOverflowError: Разность вне диапазона backing-типа
    """
    result = checked_sub(lhs, rhs)
    if result is None:
        raise DecimalOverflowError(f"{lhs} - {rhs} is out of range")
    return result


def add(lhs: "FixedDecimal", rhs: "FixedDecimal") -> "FixedDecimal":
    """
    Unchecked сложение для мест, где диапазон уже доказан.

    Raises:
        OverflowFault: При переполнении backing-типа
    """
    result = checked_add(lhs, rhs)
    if result is None:
        logger.error("unchecked add overflowed: %s + %s", lhs, rhs)
        raise OverflowFault(f"attempt to add with overflow: {lhs} + {rhs}")
    return result


def sub(lhs: "FixedDecimal", rhs: "FixedDecimal") -> "FixedDecimal":
    """
    Unchecked вычитание для мест, где диапазон уже доказан.

    Raises:
        OverflowFault: При переполнении backing-типа
    """
    result = checked_sub(lhs, rhs)
    if result is None:
        logger.error("unchecked sub overflowed: %s - %s", lhs, rhs)
        raise OverflowFault(f"attempt to subtract with overflow: {lhs} - {rhs}")
    return result


# =============================================================================
# УМНОЖЕНИЕ / ДЕЛЕНИЕ
# =============================================================================


def mul_rescale(
    lhs: "FixedDecimal",
    rhs: "FixedDecimal",
    out_scale: int,
    mode: RoundingMode,
) -> "FixedDecimal":
    """
    Произведение lhs × rhs, выраженное в SCALE = out_scale.

    Args:
        lhs: Левый операнд (SCALE = S1)
        rhs: Правый операнд (SCALE = S2, тот же backing-тип)
        out_scale: SCALE результата
        mode: Режим округления при уменьшении SCALE

    Returns:
        Значение класса FixedDecimal[backing, out_scale]

    Raises:
        DecimalOverflowError: Произведение или результат вне диапазона
        TypeError: Разные backing-типы

    Examples:
        10.00@2 × 0.0125@4, out_scale=2, HALF_UP   → 0.13
        10.00@2 × 0.0125@4, out_scale=6, TRUNCATE  → 0.125000
    """
    _require_same_backing(lhs, rhs)
    result_type = type(lhs).with_scale(out_scale)

    product = wide_mul(lhs.BACKING.widen(lhs._minor_units), rhs.BACKING.widen(rhs._minor_units))
    in_scale = lhs.SCALE + rhs.SCALE

    if out_scale == in_scale:
        return result_type._from_wide(product)

    if out_scale > in_scale:
        return result_type._from_wide(wide_mul(product, pow10(out_scale - in_scale)))

    divisor = pow10(in_scale - out_scale)
    return result_type._from_wide(round_quotient(product, divisor, mode))


def div_rescale(
    lhs: "FixedDecimal",
    rhs: "FixedDecimal",
    out_scale: int,
    mode: RoundingMode,
) -> "FixedDecimal":
    """
    Частное lhs / rhs, выраженное в SCALE = out_scale.

    Числитель масштабируется на 10^(S2 + SOUT), знаменатель — на 10^S1,
    так что их частное сразу выражено в minor units при SCALE = SOUT.

    Raises:
        DivisionByZeroError: rhs равен нулю (до любых вычислений)
        DecimalOverflowError: Промежуточное значение или результат вне диапазона
        TypeError: Разные backing-типы

    Examples:
        1.00@2 / 8.0000@4, out_scale=2, HALF_EVEN → 0.12  (точная половина, 12 чётное)
    """
    _require_same_backing(lhs, rhs)
    if rhs._minor_units == 0:
        raise DivisionByZeroError()

    result_type = type(lhs).with_scale(out_scale)

    numerator = wide_mul(lhs.BACKING.widen(lhs._minor_units), pow10(rhs.SCALE + out_scale))
    denominator = wide_mul(rhs.BACKING.widen(rhs._minor_units), pow10(lhs.SCALE))

    return result_type._from_wide(round_quotient(numerator, denominator, mode))
