"""
Conversion — смена SCALE, округление, float/int и смена backing-типа

- try_rescale   — точный rescale: вверх × 10^k, вниз только без потери цифр
- rescale       — rescale с округлением при уменьшении SCALE
- round_to      — округление до decimals дробных цифр внутри того же типа
- to_float      — minor_units / 10^SCALE
- from_float    — NaN/Inf → InvalidFormatError, округление модуля по режиму
- from_int      — любое целое (через __index__) × 10^SCALE
- convert_backing — I64 → I128 без потерь, I128 → I64 с проверкой диапазона
"""

import logging
import math
import operator
from typing import TYPE_CHECKING, Any

from fxdecimal.errors import DecimalOverflowError, InvalidFormatError
from fxdecimal.math.backing import WIDE, BackingInt, pow10, wide_check, wide_mul
from fxdecimal.math.rounding import RoundingMode, round_float_magnitude, round_quotient

if TYPE_CHECKING:
    from fxdecimal.domain.fixed import FixedDecimal

logger = logging.getLogger(__name__)


# =============================================================================
# SCALE
# =============================================================================


def try_rescale(value: "FixedDecimal", to_scale: int) -> "FixedDecimal":
    """
    Точная смена SCALE.

    Args:
        value: Исходное значение (SCALE = FROM)
        to_scale: Целевой SCALE (TO)

    Returns:
        Значение класса с SCALE = to_scale

    Raises:
        InvalidFormatError: При уменьшении SCALE отбрасываемые цифры ненулевые
        DecimalOverflowError: При увеличении SCALE результат вне диапазона

    Examples:
        1.23@2 → 1.2300@4 → 1.23@2
        1.234@3 → @2: InvalidFormatError
    """
    target = type(value).with_scale(to_scale)
    minor = value.BACKING.widen(value._minor_units)

    if to_scale >= value.SCALE:
        return target._from_wide(wide_mul(minor, pow10(to_scale - value.SCALE)))

    quotient, remainder = divmod(minor, pow10(value.SCALE - to_scale))
    if remainder != 0:
        raise InvalidFormatError(
            f"cannot rescale {value} to scale {to_scale} without losing digits"
        )
    return target._from_wide(quotient)


def rescale(value: "FixedDecimal", to_scale: int, mode: RoundingMode) -> "FixedDecimal":
    """
    Смена SCALE с округлением при уменьшении.

    Raises:
        DecimalOverflowError: Результат вне диапазона backing-типа

    Examples:
        1.245@3 → @2 HALF_EVEN → 1.24
        1.255@3 → @2 HALF_EVEN → 1.26
        -1.235@3 → @2 HALF_UP  → -1.24
    """
    if to_scale >= value.SCALE:
        return try_rescale(value, to_scale)

    target = type(value).with_scale(to_scale)
    minor = value.BACKING.widen(value._minor_units)
    return target._from_wide(round_quotient(minor, pow10(value.SCALE - to_scale), mode))


def round_to(value: "FixedDecimal", decimals: int, mode: RoundingMode) -> "FixedDecimal":
    """
    Округление до decimals дробных цифр без смены типа.

    При decimals >= SCALE значение возвращается без изменений.

    Raises:
        ValueError: decimals отрицательный
        DecimalOverflowError: Округление вывело значение за диапазон
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")
    if decimals >= value.SCALE:
        return value

    factor = pow10(value.SCALE - decimals)
    rounded = round_quotient(value.BACKING.widen(value._minor_units), factor, mode)
    return type(value)._from_wide(wide_mul(rounded, factor))


# =============================================================================
# FLOAT
# =============================================================================


def to_float(value: "FixedDecimal") -> float:
    """Приближение значения двоичным float."""
    return value.BACKING.widen(value._minor_units) / pow10(value.SCALE)


def from_float(
    cls: type["FixedDecimal"], value: float, mode: RoundingMode
) -> "FixedDecimal":
    """
    Float → fixed-point значение.

    Алгоритм:
    1. NaN/Inf → InvalidFormatError
    2. scaled = value × 10^SCALE
    3. Модуль округляется по режиму (HALF_EVEN — с толерантностью к половине)
    4. Знак восстанавливается, результат сужается до backing-типа

    Raises:
        InvalidFormatError: Значение не конечное
        DecimalOverflowError: Округлённый модуль вне диапазона
        TypeError: Вход не является числом

    Examples:
        1.125 → @2 HALF_UP   → 1.13
        1.125 → @2 HALF_EVEN → 1.12
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected float, got {type(value).__name__}")

    try:
        value = float(value)
    except OverflowError as exc:
        raise DecimalOverflowError() from exc

    if not math.isfinite(value):
        logger.debug("rejected non-finite float input %r", value)
        raise InvalidFormatError(f"cannot convert non-finite float {value!r}")

    scaled = value * 10.0 ** cls.SCALE
    if not math.isfinite(scaled):
        raise DecimalOverflowError()
    rounded = round_float_magnitude(abs(scaled), mode)

    if rounded > WIDE.max_value:
        raise DecimalOverflowError()

    magnitude = int(rounded)
    return cls._from_wide(-magnitude if math.copysign(1.0, scaled) < 0 else magnitude)


# =============================================================================
# INTEGER
# =============================================================================


def whole_to_wide(value: Any) -> int:
    """
    Целое любого стандартного типа → промежуточное целое.

    Принимается всё, что поддерживает __index__ (int, numpy-целые);
    bool отклоняется. Значение должно помещаться в промежуточный тип,
    как самое широкое стандартное целое.

    Raises:
        TypeError: Не целое или bool
        DecimalOverflowError: Значение вне промежуточного типа
    """
    if isinstance(value, bool):
        raise TypeError("bool is not accepted as an integer amount")
    return wide_check(operator.index(value))


def from_int(cls: type["FixedDecimal"], value: Any) -> "FixedDecimal":
    """
    Целое → значение value × 10^SCALE.

    Examples:
        12 → @2 → 12.00
        -7 → @3 → -7.000
        10 → i64@18 → DecimalOverflowError
    """
    return cls._from_whole(whole_to_wide(value))


# =============================================================================
# BACKING
# =============================================================================


def convert_backing(value: "FixedDecimal", backing: BackingInt) -> "FixedDecimal":
    """
    Перенос значения в другой backing-тип с тем же SCALE.

    Расширение (I64 → I128) всегда успешно; сужение проверяет диапазон.

    Raises:
        DecimalOverflowError: Значение не помещается в целевой тип
    """
    target = type(value).with_backing(backing)
    wide = value.BACKING.widen(value._minor_units)
    if not backing.contains(wide):
        logger.debug("value %s does not fit backing %s", value, backing.name)
        raise DecimalOverflowError()
    return target._from_wide(wide)
