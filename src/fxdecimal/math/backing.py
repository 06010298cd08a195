"""
Backing Integers — контракт целого, хранящего minor units

Fixed-point значение хранит целое minor_units = value × 10^SCALE.
Диапазон этого целого задаётся backing-типом:

- I64  — знаковое 64-битное (быстрое, узкое)
- I128 — знаковое 128-битное (широкий диапазон)

Все промежуточные вычисления (произведения, масштабирование, округление)
выполняются в широком 128-битном промежуточном типе WIDE и сужаются до
backing-типа только в конце, с явной ошибкой при выходе за диапазон.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. narrow() никогда не усекает молча: вне диапазона → DecimalOverflowError
2. checked_add/checked_sub возвращают None вместо переполнения
3. Любое промежуточное значение вне WIDE → DecimalOverflowError
"""

from dataclasses import dataclass
from typing import Final

from fxdecimal.errors import DecimalOverflowError

# =============================================================================
# ПАРАМЕТРЫ МАСШТАБА
# =============================================================================

# Максимальный SCALE: 10^18 помещается в знаковое 64-битное целое
MAX_SCALE: Final[int] = 18

# Степени десяти 10^0 .. 10^38 (10^38 < i128 max)
_POW10: Final[tuple[int, ...]] = tuple(10**k for k in range(39))


# =============================================================================
# BACKING INTEGER
# =============================================================================


@dataclass(frozen=True)
class BackingInt:
    """
    Знаковое целое фиксированной ширины.

    Immutable описание backing-типа: имя и разрядность. Сами значения
    остаются обычными Python int, а этот объект проверяет их диапазон.
    """

    name: str
    bits: int

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1))

    @property
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1

    def contains(self, value: int) -> bool:
        """Проверка, что value представимо в этом типе."""
        return self.min_value <= value <= self.max_value

    def widen(self, value: int) -> int:
        """
        Расширение до промежуточного 128-битного типа.

        Всегда безопасно: ни один backing-тип не шире WIDE.
        """
        return value

    def narrow(self, wide: int) -> int:
        """
        Сужение промежуточного значения до этого типа.

        Args:
            wide: Значение в промежуточном типе

        Returns:
            То же значение, если оно представимо

        Raises:
            DecimalOverflowError: Если значение вне [min_value, max_value]
        """
        if not self.contains(wide):
            raise DecimalOverflowError()
        return wide

    def checked_add(self, lhs: int, rhs: int) -> int | None:
        """Сложение с проверкой диапазона; None при переполнении."""
        result = lhs + rhs
        return result if self.contains(result) else None

    def checked_sub(self, lhs: int, rhs: int) -> int | None:
        """Вычитание с проверкой диапазона; None при переполнении."""
        result = lhs - rhs
        return result if self.contains(result) else None

    def __repr__(self) -> str:
        return self.name


I64: Final[BackingInt] = BackingInt("i64", 64)
I128: Final[BackingInt] = BackingInt("i128", 128)

# Промежуточный тип для всех вычислений с перемасштабированием
WIDE: Final[BackingInt] = I128

BACKINGS: Final[dict[str, BackingInt]] = {I64.name: I64, I128.name: I128}


# =============================================================================
# ПРОМЕЖУТОЧНАЯ АРИФМЕТИКА (WIDE)
# =============================================================================


def pow10(exponent: int) -> int:
    """
    10^exponent как промежуточное целое.

    Raises:
        DecimalOverflowError: Если 10^exponent не помещается в WIDE
        ValueError: Если exponent отрицательный
    """
    if exponent < 0:
        raise ValueError(f"exponent must be non-negative, got {exponent}")
    if exponent >= len(_POW10):
        raise DecimalOverflowError()
    return _POW10[exponent]


def wide_check(value: int) -> int:
    """Проверка, что промежуточное значение помещается в WIDE."""
    return WIDE.narrow(value)


def wide_mul(lhs: int, rhs: int) -> int:
    """
    Умножение в промежуточном типе с проверкой переполнения.

    Examples:
        >>> wide_mul(10**18, 10**18)
        1000000000000000000000000000000000000
        >>> wide_mul(10**20, 10**20)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        DecimalOverflowError: value out of range
    """
    return wide_check(lhs * rhs)


def backing_for(name: str | BackingInt) -> BackingInt:
    """
    Разрешение backing-типа по имени ("i64"/"i128") или объекту.

    Raises:
        ValueError: Если имя неизвестно
    """
    if isinstance(name, BackingInt):
        return name
    try:
        return BACKINGS[name]
    except KeyError:
        raise ValueError(
            f"unknown backing integer {name!r}, expected one of {sorted(BACKINGS)}"
        ) from None
