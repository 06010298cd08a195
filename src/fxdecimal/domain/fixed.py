"""
FixedDecimal — fixed-point десятичное значение

Значение — immutable пара (SCALE, minor_units), где minor_units = value × 10^SCALE
хранится в backing-целом (I64 или I128).

SCALE и backing-тип — часть идентичности типа: для каждой пары
(backing, scale) фабрика создаёт и кэширует отдельный класс:

    Amount = FixedDecimal[I64, 2]          # то же, что fixed_type(2, I64)
    Rate = FixedDecimal[I64, 4]

    Amount("10.00").mul(Rate("0.0125"), RoundingMode.HALF_UP)   # Amount('0.13')

Значения разных классов не равны друг другу, не упорядочиваются и не
складываются: переход между ними — только явной операцией
(rescale/try_rescale/convert_backing/mul_rescale/div_rescale).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. minor_units — единственное представление значения при данном SCALE
2. SCALE фиксирован для класса и никогда не меняется (instances frozen)
3. Переполнение поднимает DecimalError; OverflowFault — только у явных add/sub
4. Публичного конструктора из сырых minor units нет
"""

import threading
from dataclasses import dataclass
from typing import Any, ClassVar, Final

from pydantic_core import core_schema

from fxdecimal.contracts.validators import decimal_string_schema
from fxdecimal.domain import arithmetic, conversion
from fxdecimal.domain.display import render_minor_units
from fxdecimal.domain.parsing import parse_minor_units
from fxdecimal.math.backing import (
    I64,
    I128,
    MAX_SCALE,
    BackingInt,
    backing_for,
    pow10,
    wide_mul,
)
from fxdecimal.math.rounding import RoundingMode

# =============================================================================
# FIXED DECIMAL
# =============================================================================


@dataclass(frozen=True, order=True, init=False, repr=False)
class FixedDecimal:
    """
    Базовый класс fixed-point значений.

    Сам по себе абстрактен: экземпляры создаются только у конкретных
    классов FixedDecimal[backing, scale].

    Конструктор конкретного класса принимает строку (разбор по грамматике)
    или целое (масштабирование на 10^SCALE):

        >>> Amount = FixedDecimal[I64, 2]
        >>> Amount("1.5")
        FixedDecimal[i64, 2]('1.50')
        >>> Amount(7)
        FixedDecimal[i64, 2]('7.00')
    """

    __slots__ = ("_minor_units",)

    _minor_units: int

    SCALE: ClassVar[int]
    BACKING: ClassVar[BackingInt]

    def __init__(self, value: str | int = 0) -> None:
        cls = _concrete(type(self))
        if isinstance(value, str):
            wide = parse_minor_units(value, cls.SCALE)
        else:
            wide = wide_mul(conversion.whole_to_wide(value), pow10(cls.SCALE))
        object.__setattr__(self, "_minor_units", cls.BACKING.narrow(wide))

    # -------------------------------------------------------------------------
    # Параметризация
    # -------------------------------------------------------------------------

    def __class_getitem__(cls, params: Any) -> type["FixedDecimal"]:
        if getattr(cls, "SCALE", None) is not None:
            raise TypeError(f"{cls.__name__} is already parametrized")
        if isinstance(params, tuple):
            if len(params) != 2:
                raise TypeError("expected FixedDecimal[backing, scale]")
            backing, scale = params
        else:
            backing, scale = I64, params
        return fixed_type(scale, backing)

    @classmethod
    def with_scale(cls, scale: int) -> type["FixedDecimal"]:
        """Класс с тем же backing-типом и другим SCALE."""
        return fixed_type(scale, _concrete(cls).BACKING)

    @classmethod
    def with_backing(cls, backing: BackingInt | str) -> type["FixedDecimal"]:
        """Класс с тем же SCALE и другим backing-типом."""
        return fixed_type(_concrete(cls).SCALE, backing)

    # -------------------------------------------------------------------------
    # Внутренние конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def _from_wide(cls, wide: int) -> "FixedDecimal":
        """
        Значение из уже масштабированного промежуточного целого.

        Raises:
            DecimalOverflowError: Если wide не помещается в backing-тип
        """
        concrete = _concrete(cls)
        instance = object.__new__(concrete)
        object.__setattr__(instance, "_minor_units", concrete.BACKING.narrow(wide))
        return instance

    @classmethod
    def _from_whole(cls, whole: int) -> "FixedDecimal":
        """Значение из целого числа единиц: whole × 10^SCALE с проверкой."""
        return cls._from_wide(wide_mul(whole, pow10(_concrete(cls).SCALE)))

    # -------------------------------------------------------------------------
    # Публичные конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> "FixedDecimal":
        """
        Разбор десятичной строки.

        Raises:
            EmptyInputError, InvalidFormatError, TooManyFractionalDigitsError,
            DecimalOverflowError
        """
        return cls._from_wide(parse_minor_units(text, _concrete(cls).SCALE))

    @classmethod
    def zero(cls) -> "FixedDecimal":
        return cls._from_wide(0)

    @classmethod
    def one(cls) -> "FixedDecimal":
        return cls._from_whole(1)

    @classmethod
    def from_int(cls, value: int) -> "FixedDecimal":
        """Целое → значение (value × 10^SCALE), DecimalOverflowError вне диапазона."""
        return conversion.from_int(cls, value)

    @classmethod
    def from_float(cls, value: float, mode: RoundingMode) -> "FixedDecimal":
        """Float → значение с округлением по режиму."""
        return conversion.from_float(cls, value, RoundingMode(mode))

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    @property
    def scale(self) -> int:
        return self.SCALE

    @property
    def backing(self) -> BackingInt:
        return self.BACKING

    def is_zero(self) -> bool:
        return self._minor_units == 0

    def is_positive(self) -> bool:
        return self._minor_units > 0

    def is_negative(self) -> bool:
        return self._minor_units < 0

    def __bool__(self) -> bool:
        return self._minor_units != 0

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def checked_add(self, rhs: "FixedDecimal") -> "FixedDecimal | None":
        """Сложение; None при переполнении backing-типа."""
        return arithmetic.checked_add(self, rhs)

    def checked_sub(self, rhs: "FixedDecimal") -> "FixedDecimal | None":
        """Вычитание; None при переполнении backing-типа."""
        return arithmetic.checked_sub(self, rhs)

    def add(self, rhs: "FixedDecimal") -> "FixedDecimal":
        """
        Unchecked сложение.

        Raises:
            OverflowFault: При переполнении (фатально, не DecimalError)
        """
        return arithmetic.add(self, rhs)

    def sub(self, rhs: "FixedDecimal") -> "FixedDecimal":
        """
        Unchecked вычитание.

        Raises:
            OverflowFault: При переполнении (фатально, не DecimalError)
        """
        return arithmetic.sub(self, rhs)

    def __add__(self, rhs: Any) -> "FixedDecimal":
        if type(rhs) is not type(self):
            return NotImplemented
        return arithmetic.add_exact(self, rhs)

    def __sub__(self, rhs: Any) -> "FixedDecimal":
        if type(rhs) is not type(self):
            return NotImplemented
        return arithmetic.sub_exact(self, rhs)

    def mul_rescale(
        self, rhs: "FixedDecimal", out_scale: int, mode: RoundingMode
    ) -> "FixedDecimal":
        """Произведение с результатом в SCALE = out_scale."""
        return arithmetic.mul_rescale(self, rhs, out_scale, RoundingMode(mode))

    def mul(self, rhs: "FixedDecimal", mode: RoundingMode) -> "FixedDecimal":
        """Произведение с SCALE левого операнда (применение ставки)."""
        return arithmetic.mul_rescale(self, rhs, self.SCALE, RoundingMode(mode))

    def div_rescale(
        self, rhs: "FixedDecimal", out_scale: int, mode: RoundingMode
    ) -> "FixedDecimal":
        """Частное с результатом в SCALE = out_scale."""
        return arithmetic.div_rescale(self, rhs, out_scale, RoundingMode(mode))

    def div(self, rhs: "FixedDecimal", mode: RoundingMode) -> "FixedDecimal":
        """Частное с SCALE левого операнда."""
        return arithmetic.div_rescale(self, rhs, self.SCALE, RoundingMode(mode))

    # -------------------------------------------------------------------------
    # Конверсии
    # -------------------------------------------------------------------------

    def round(self, decimals: int, mode: RoundingMode) -> "FixedDecimal":
        """Округление до decimals дробных цифр внутри того же типа."""
        return conversion.round_to(self, decimals, RoundingMode(mode))

    def try_rescale(self, to_scale: int) -> "FixedDecimal":
        """Точный rescale; InvalidFormatError при потере цифр."""
        return conversion.try_rescale(self, to_scale)

    def rescale(self, to_scale: int, mode: RoundingMode) -> "FixedDecimal":
        """Rescale с округлением при уменьшении SCALE."""
        return conversion.rescale(self, to_scale, RoundingMode(mode))

    def to_float(self) -> float:
        return conversion.to_float(self)

    def __float__(self) -> float:
        return conversion.to_float(self)

    def convert_backing(self, backing: BackingInt | str) -> "FixedDecimal":
        """Перенос в другой backing-тип с тем же SCALE."""
        return conversion.convert_backing(self, backing_for(backing))

    def widen(self) -> "FixedDecimal":
        """Перенос в I128 (всегда без потерь)."""
        return conversion.convert_backing(self, I128)

    # -------------------------------------------------------------------------
    # Отображение и сериализация
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        return render_minor_units(self._minor_units, self.SCALE)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    def __reduce__(self) -> tuple[Any, ...]:
        return (_restore, (self.SCALE, self.BACKING.name, self._minor_units))

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> Any:
        concrete = _concrete(cls)
        return core_schema.no_info_plain_validator_function(
            concrete._coerce,
            serialization=core_schema.to_string_ser_schema(),
        )

    @classmethod
    def __get_pydantic_json_schema__(cls, schema: Any, handler: Any) -> dict[str, Any]:
        json_schema = decimal_string_schema(cls)
        json_schema.pop("$schema", None)
        return json_schema

    @classmethod
    def _coerce(cls, value: Any) -> "FixedDecimal":
        """Приведение входа pydantic-поля: экземпляр, строка или целое."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, int) and not isinstance(value, bool):
            return cls.from_int(value)
        raise ValueError(
            f"{cls.__name__} expects a decimal string or integer, "
            f"got {type(value).__name__}"
        )


# =============================================================================
# ФАБРИКА ТИПОВ
# =============================================================================

_TYPES: Final[dict[tuple[str, int], type[FixedDecimal]]] = {}
_TYPES_LOCK: Final = threading.Lock()


def _concrete(cls: type[FixedDecimal]) -> type[FixedDecimal]:
    if getattr(cls, "SCALE", None) is None:
        raise TypeError(
            f"{cls.__name__} is not parametrized, "
            "use FixedDecimal[backing, scale] or fixed_type(scale, backing)"
        )
    return cls


def validate_scale(scale: int) -> int:
    """
    Проверка SCALE: целое в диапазоне [0, MAX_SCALE].

    Raises:
        ValueError: Если scale вне диапазона или не целое
    """
    if isinstance(scale, bool) or not isinstance(scale, int):
        raise ValueError(f"scale must be an integer, got {scale!r}")
    if not 0 <= scale <= MAX_SCALE:
        raise ValueError(f"scale must be in [0, {MAX_SCALE}], got {scale}")
    return scale


def fixed_type(scale: int, backing: BackingInt | str = I64) -> type[FixedDecimal]:
    """
    Класс fixed-point значений для пары (backing, scale).

    Повторный вызов с теми же параметрами возвращает тот же класс.

    Args:
        scale: Количество дробных цифр (0..18)
        backing: Backing-тип (I64/I128 или "i64"/"i128")

    Returns:
        Конкретный подкласс FixedDecimal

    Raises:
        ValueError: Некорректный scale или неизвестный backing

    Examples:
        >>> fixed_type(2) is FixedDecimal[I64, 2]
        True
        >>> fixed_type(2, "i128").__name__
        'FixedDecimal[i128, 2]'
    """
    scale = validate_scale(scale)
    backing = backing_for(backing)
    key = (backing.name, scale)

    with _TYPES_LOCK:
        cls = _TYPES.get(key)
        if cls is None:
            name = f"FixedDecimal[{backing.name}, {scale}]"
            cls = type(
                name,
                (FixedDecimal,),
                {
                    "__slots__": (),
                    "__module__": __name__,
                    "__qualname__": name,
                    "SCALE": scale,
                    "BACKING": backing,
                },
            )
            _TYPES[key] = cls
    return cls


def _restore(scale: int, backing_name: str, minor_units: int) -> FixedDecimal:
    return fixed_type(scale, backing_name)._from_wide(minor_units)
