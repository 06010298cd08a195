"""
DecimalConfig — конфигурация fixed-point типа

Immutable Pydantic модель, которая фиксирует SCALE, backing-тип и режим
округления по умолчанию для одной границы приложения (ledger, курсы,
единицы измерения) и служит фабрикой значений этого типа.

    usd = DecimalConfig(scale=2, backing="i64", rounding="half_up")
    usd.parse("10.00")               # FixedDecimal[i64, 2]('10.00')
    usd.from_float(1.125)            # режим из конфигурации → 1.13

Все значения, созданные через одну конфигурацию, принадлежат одному классу,
поэтому смешение несовместимых типов обнаруживается на первой же операции.
"""

import logging
from typing import Any, Literal, Mapping

from pydantic import BaseModel, Field, field_validator

from fxdecimal.domain.fixed import FixedDecimal, fixed_type
from fxdecimal.math.backing import MAX_SCALE
from fxdecimal.math.rounding import RoundingMode

logger = logging.getLogger(__name__)


class DecimalConfig(BaseModel):
    """
    Конфигурация fixed-point типа.

    Immutable модель (frozen=True): изменение конфигурации создаёт новый
    экземпляр.
    """

    scale: int = Field(..., ge=0, le=MAX_SCALE, description="Количество дробных цифр")
    backing: Literal["i64", "i128"] = Field(
        default="i64", description="Backing-целое для minor units"
    )
    rounding: RoundingMode = Field(
        default=RoundingMode.HALF_EVEN,
        description="Режим округления по умолчанию",
    )

    model_config = {"frozen": True}  # Immutable

    @field_validator("scale", mode="before")
    @classmethod
    def reject_bool_scale(cls, v: Any) -> Any:
        """bool — подкласс int, но SCALE=True не имеет смысла."""
        if isinstance(v, bool):
            raise ValueError("scale must be an integer, not bool")
        return v

    @property
    def decimal_type(self) -> type[FixedDecimal]:
        """Класс значений FixedDecimal[backing, scale]."""
        return fixed_type(self.scale, self.backing)

    def _mode(self, mode: RoundingMode | None) -> RoundingMode:
        return self.rounding if mode is None else RoundingMode(mode)

    def parse(self, text: str) -> FixedDecimal:
        return self.decimal_type.parse(text)

    def from_int(self, value: int) -> FixedDecimal:
        return self.decimal_type.from_int(value)

    def from_float(self, value: float, mode: RoundingMode | None = None) -> FixedDecimal:
        """Float → значение; без mode используется режим конфигурации."""
        return self.decimal_type.from_float(value, self._mode(mode))

    def rescale(self, value: FixedDecimal, mode: RoundingMode | None = None) -> FixedDecimal:
        """
        Приведение значения другого SCALE (того же backing) к этой конфигурации.

        Raises:
            TypeError: backing-тип значения отличается от конфигурации
        """
        if value.BACKING.name != self.backing:
            raise TypeError(
                f"{type(value).__name__} uses {value.BACKING.name} backing, "
                f"config expects {self.backing}"
            )
        return value.rescale(self.scale, self._mode(mode))


def load_config(data: Mapping[str, Any]) -> DecimalConfig:
    """
    Загрузка конфигурации из mapping (JSON/YAML/env-словарь).

    Raises:
        pydantic.ValidationError: Если данные не соответствуют модели
    """
    config = DecimalConfig.model_validate(dict(data))
    logger.debug(
        "loaded decimal config scale=%d backing=%s rounding=%s",
        config.scale,
        config.backing,
        config.rounding.value,
    )
    return config
