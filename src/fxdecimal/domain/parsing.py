"""
Parsing — текст → minor units

Грамматика (регистрозависимая, только ASCII-цифры):

    decimal  := sign? (int frac? | frac)
    sign     := '+' | '-'
    int      := digit+
    frac     := '.' digit*

Порядок проверок:
1. Пустая строка → EmptyInputError
2. Снимается один ведущий знак; остаток не может начинаться со знака
3. Разбиение по первой '.'; обе части пустые → InvalidFormatError
4. Дробная часть длиннее SCALE → TooManyFractionalDigitsError
5. Части разбираются независимо; модуль ограничен 2^127 − 1 (2^127 для
   отрицательных, так что минимальное значение I128 разбирается)
6. minor = int × 10^SCALE + frac × 10^(SCALE − len(frac)), затем знак

Пробелы не допускаются нигде: " 1.0" и "1.0 " невалидны.
"""

from typing import Final

from fxdecimal.errors import (
    DecimalOverflowError,
    EmptyInputError,
    InvalidFormatError,
    TooManyFractionalDigitsError,
)
from fxdecimal.math.backing import WIDE, pow10, wide_check

_DIGITS: Final[frozenset[str]] = frozenset("0123456789")
_SIGNS: Final[tuple[str, str]] = ("+", "-")
_WIDE_DIGITS: Final[int] = len(str(WIDE.max_value))


def _parse_component(part: str, limit: int) -> int:
    """
    Разбор неотрицательной последовательности ASCII-цифр.

    Пустая часть трактуется как ноль. int() сам по себе принимает пробелы,
    '_' и не-ASCII цифры, поэтому алфавит проверяется заранее. Ведущие нули
    отбрасываются до int(), длина строки цифр не ограничена.
    """
    if not part:
        return 0
    if not _DIGITS.issuperset(part):
        raise InvalidFormatError()
    digits = part.lstrip("0") or "0"
    if len(digits) > _WIDE_DIGITS:
        raise DecimalOverflowError()
    value = int(digits)
    if value > limit:
        raise DecimalOverflowError()
    return value


def parse_minor_units(text: str, scale: int) -> int:
    """
    Разбор десятичной строки в minor units при заданном SCALE.

    Результат — промежуточное целое; сужение до backing-типа выполняет
    вызывающий код.

    Args:
        text: Входная строка
        scale: Количество дробных цифр типа

    Returns:
        minor units (промежуточное целое)

    Raises:
        EmptyInputError: Пустая строка
        InvalidFormatError: Нарушение грамматики
        TooManyFractionalDigitsError: Дробных цифр больше, чем scale
        DecimalOverflowError: Выход за диапазон промежуточного типа
        TypeError: Вход не является строкой

    Examples:
        >>> parse_minor_units("1.23", 2)
        123
        >>> parse_minor_units("-.25", 2)
        -25
        >>> parse_minor_units("1234.", 2)
        123400
    """
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")

    if not text:
        raise EmptyInputError()

    negative = text.startswith("-")
    unsigned = text[1:] if text.startswith(_SIGNS) else text

    int_part, _, frac_part = unsigned.partition(".")

    if not int_part and not frac_part:
        raise InvalidFormatError()

    if int_part.startswith(_SIGNS) or frac_part.startswith(_SIGNS):
        raise InvalidFormatError()

    if len(frac_part) > scale:
        raise TooManyFractionalDigitsError(provided=len(frac_part), allowed=scale)

    # Модуль отрицательного значения может достигать |WIDE.min_value|
    limit = -WIDE.min_value if negative else WIDE.max_value

    int_value = _parse_component(int_part, limit)
    frac_value = _parse_component(frac_part, limit)

    minor = int_value * pow10(scale) + frac_value * pow10(scale - len(frac_part))
    if minor > limit:
        raise DecimalOverflowError()

    return wide_check(-minor) if negative else minor
