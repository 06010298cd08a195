"""
Errors — таксономия ошибок fixed-point арифметики

Каждая операция, которая может завершиться неудачей, поднимает одно из
исключений семейства DecimalError. Ни одна операция не восстанавливается
внутри себя: ошибка всегда уходит вызывающему коду.

Иерархия:
    DecimalError (ValueError)
    ├── EmptyInputError               пустая строка на входе парсера
    ├── InvalidFormatError            некорректный текст, неточный rescale, NaN/Inf
    ├── TooManyFractionalDigitsError  дробных цифр больше, чем SCALE
    ├── DivisionByZeroError           делитель равен нулю (+ ZeroDivisionError)
    └── DecimalOverflowError          выход за диапазон (+ OverflowError)

    OverflowFault (ArithmeticError)   фатальное переполнение в unchecked add/sub,
                                      НЕ входит в DecimalError
"""


class DecimalError(ValueError):
    """Базовая ошибка fixed-point операций."""

    default_message = "decimal error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class EmptyInputError(DecimalError):
    """Парсер получил пустую строку."""

    default_message = "empty input"


class InvalidFormatError(DecimalError):
    """
    Некорректные данные.

    Используется для:
    - синтаксически неверного текста
    - точного rescale вниз с ненулевым остатком
    - NaN/Inf на входе from_float
    """

    default_message = "invalid format"


class TooManyFractionalDigitsError(DecimalError):
    """
    Во входной строке больше дробных цифр, чем допускает SCALE типа.

    Это жёсткий отказ: усечение никогда не выполняется молча.
    """

    def __init__(self, provided: int, allowed: int) -> None:
        self.provided = provided
        self.allowed = allowed
        super().__init__(
            f"too many fractional digits (provided {provided}, allowed {allowed})"
        )


class DivisionByZeroError(DecimalError, ZeroDivisionError):
    """Делитель (minor units) равен нулю."""

    default_message = "division by zero"


class DecimalOverflowError(DecimalError, OverflowError):
    """Промежуточное или итоговое значение вышло за диапазон backing-целого."""

    default_message = "value out of range"


class OverflowFault(ArithmeticError):
    """
    Фатальное переполнение в unchecked операции add/sub.

    Не является частью таксономии DecimalError: вызывающий код, которому
    нужна безопасность, обязан использовать checked_add/checked_sub.
    """
