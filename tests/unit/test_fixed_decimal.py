"""
Тесты типа FixedDecimal

Проверяет:
- Фабрику типов и кэширование классов (backing, scale)
- Абстрактность непараметризованного FixedDecimal
- Равенство, порядок и hash только внутри одного класса
- Immutability (frozen)
- repr, pickle, copy
- Интеграцию с Pydantic V2 моделями (валидация, JSON, JSON Schema)
"""

import copy
import dataclasses
import pickle

import pytest
from pydantic import BaseModel, ValidationError

from fxdecimal import I64, I128, FixedDecimal, fixed_type
from fxdecimal.contracts.validators import canonical_pattern

Amount = FixedDecimal[I64, 2]
Rate = FixedDecimal[I64, 4]


# =============================================================================
# FIXTURES
# =============================================================================


class LedgerEntry(BaseModel):
    """Запись журнала с fixed-point полями."""

    account: str
    amount: FixedDecimal[I64, 2]
    rate: FixedDecimal[I64, 4]

    model_config = {"frozen": True}


class WideBalance(BaseModel):
    """Баланс с 128-битным backing-целым."""

    balance: FixedDecimal[I128, 2]


@pytest.fixture
def valid_entry_data():
    """Валидные данные записи журнала."""
    return {"account": "ACC-1", "amount": "10.00", "rate": "0.0125"}


# =============================================================================
# TYPE FACTORY
# =============================================================================


class TestTypeFactory:
    """Тесты фабрики типов"""

    def test_same_parameters_same_class(self) -> None:
        assert fixed_type(2) is Amount
        assert fixed_type(2, "i64") is Amount
        assert FixedDecimal[2] is Amount

    def test_backing_is_part_of_identity(self) -> None:
        assert FixedDecimal[I128, 2] is not Amount
        assert FixedDecimal[I128, 2] is fixed_type(2, I128)

    def test_class_attributes(self) -> None:
        assert Amount.SCALE == 2
        assert Amount.BACKING is I64
        assert Amount.__name__ == "FixedDecimal[i64, 2]"
        assert issubclass(Amount, FixedDecimal)

    def test_with_scale_and_backing(self) -> None:
        assert Amount.with_scale(4) is Rate
        assert Amount.with_backing("i128") is FixedDecimal[I128, 2]

    @pytest.mark.parametrize("scale", [-1, 19, True, "2", 2.0])
    def test_invalid_scale(self, scale) -> None:
        with pytest.raises(ValueError):
            fixed_type(scale)

    def test_max_scale(self) -> None:
        assert fixed_type(18).SCALE == 18

    def test_unknown_backing(self) -> None:
        with pytest.raises(ValueError):
            fixed_type(2, "u64")

    def test_already_parametrized(self) -> None:
        with pytest.raises(TypeError):
            Amount[3]

    def test_wrong_parameter_count(self) -> None:
        with pytest.raises(TypeError):
            FixedDecimal[I64, 2, 3]

    def test_unparametrized_is_abstract(self) -> None:
        """Экземпляры создаются только у конкретных классов"""
        with pytest.raises(TypeError):
            FixedDecimal("1.00")
        with pytest.raises(TypeError):
            FixedDecimal.parse("1.00")
        with pytest.raises(TypeError):
            FixedDecimal.zero()


# =============================================================================
# VALUE SEMANTICS
# =============================================================================


class TestValueSemantics:
    """Тесты семантики значения"""

    def test_constants(self) -> None:
        assert str(Amount.zero()) == "0.00"
        assert str(Amount.one()) == "1.00"
        assert str(FixedDecimal[I64, 0].one()) == "1"

    def test_properties(self) -> None:
        value = Amount("1.00")
        assert value.scale == 2
        assert value.backing is I64

    def test_predicates(self) -> None:
        assert Amount.zero().is_zero()
        assert Amount("0.01").is_positive()
        assert Amount("-0.01").is_negative()
        assert not Amount.zero()
        assert Amount("0.01")

    def test_equality_within_class(self) -> None:
        assert Amount("1.5") == Amount("1.50")
        assert Amount("1.5") != Amount("1.51")

    def test_not_equal_across_classes(self) -> None:
        """1.00@2 и 1.000@3 — разные типы, не равны"""
        assert Amount("1.00") != FixedDecimal[I64, 3]("1.000")
        assert Amount("1.00") != FixedDecimal[I128, 2]("1.00")
        assert Amount("1.00") != "1.00"

    def test_ordering(self) -> None:
        values = [Amount("2.00"), Amount("-1.00"), Amount("0.50")]
        assert [str(v) for v in sorted(values)] == ["-1.00", "0.50", "2.00"]
        assert Amount("1.00") < Amount("1.01")
        assert max(values) == Amount("2.00")

    def test_ordering_across_classes_rejected(self) -> None:
        with pytest.raises(TypeError):
            Amount("1.00") < Rate("1.0000")  # noqa: B015

    def test_hash(self) -> None:
        assert len({Amount("1.00"), Amount("1.0"), Amount("1")}) == 1
        assert hash(Amount("2.50")) == hash(Amount("2.5"))

    def test_immutable(self) -> None:
        """Frozen: изменение экземпляра запрещено"""
        value = Amount("1.00")
        with pytest.raises(dataclasses.FrozenInstanceError):
            value._minor_units = 5  # type: ignore[misc]
        with pytest.raises(AttributeError):
            value.extra = 1  # type: ignore[attr-defined]

    def test_repr(self) -> None:
        assert repr(Amount("-0.5")) == "FixedDecimal[i64, 2]('-0.50')"

    def test_pickle_roundtrip(self) -> None:
        value = FixedDecimal[I128, 4]("-12.3456")
        restored = pickle.loads(pickle.dumps(value))
        assert restored == value
        assert type(restored) is FixedDecimal[I128, 4]

    @pytest.mark.parametrize("scale", [0, 2, 18])
    def test_pickle_range_boundaries(self, scale) -> None:
        """Границы диапазона I128 восстанавливаются без переполнения"""
        Wide = FixedDecimal[I128, scale]
        largest = Wide._from_wide(I128.max_value)
        smallest = Wide.zero().checked_sub(largest).checked_sub(Wide._from_wide(1))
        assert smallest._minor_units == I128.min_value
        for value in (smallest, largest):
            restored = pickle.loads(pickle.dumps(value))
            assert restored == value
            assert type(restored) is Wide

    def test_copy(self) -> None:
        value = Amount("3.14")
        assert copy.copy(value) == value
        assert copy.deepcopy(value) == value


# =============================================================================
# PYDANTIC INTEGRATION
# =============================================================================


class TestPydanticField:
    """Тесты FixedDecimal как поля Pydantic модели"""

    def test_strings_are_parsed(self, valid_entry_data) -> None:
        entry = LedgerEntry(**valid_entry_data)
        assert entry.amount == Amount("10.00")
        assert entry.rate == Rate("0.0125")
        assert type(entry.amount) is Amount

    def test_instance_passthrough(self) -> None:
        entry = LedgerEntry(account="A", amount=Amount("1.50"), rate=Rate("1"))
        assert str(entry.amount) == "1.50"

    def test_integers_are_scaled(self) -> None:
        entry = LedgerEntry(account="A", amount=5, rate=1)
        assert str(entry.amount) == "5.00"
        assert str(entry.rate) == "1.0000"

    def test_too_many_digits_rejected(self, valid_entry_data) -> None:
        valid_entry_data["amount"] = "1.234"
        with pytest.raises(ValidationError):
            LedgerEntry(**valid_entry_data)

    def test_overflow_rejected(self, valid_entry_data) -> None:
        valid_entry_data["amount"] = "92233720368547758.08"
        with pytest.raises(ValidationError):
            LedgerEntry(**valid_entry_data)

    @pytest.mark.parametrize("bad", [1.5, True, None, "abc"])
    def test_invalid_inputs_rejected(self, valid_entry_data, bad) -> None:
        valid_entry_data["amount"] = bad
        with pytest.raises(ValidationError):
            LedgerEntry(**valid_entry_data)

    def test_other_decimal_type_rejected(self, valid_entry_data) -> None:
        """Значение другого SCALE не приводится неявно"""
        valid_entry_data["amount"] = Rate("1.0000")
        with pytest.raises(ValidationError):
            LedgerEntry(**valid_entry_data)

    def test_json_serialization(self, valid_entry_data) -> None:
        entry = LedgerEntry(**valid_entry_data)
        assert entry.model_dump_json() == (
            '{"account":"ACC-1","amount":"10.00","rate":"0.0125"}'
        )

    def test_json_roundtrip(self, valid_entry_data) -> None:
        entry = LedgerEntry(**valid_entry_data)
        restored = LedgerEntry.model_validate_json(entry.model_dump_json())
        assert restored == entry

    def test_python_dump_keeps_instances(self, valid_entry_data) -> None:
        dumped = LedgerEntry(**valid_entry_data).model_dump()
        assert dumped["amount"] == Amount("10.00")

    def test_json_roundtrip_at_i128_boundaries(self) -> None:
        """Минимальное и максимальное I128 проходят через JSON без потерь"""
        Wide = FixedDecimal[I128, 2]
        for minor in (I128.min_value, I128.max_value):
            entry = WideBalance(balance=Wide._from_wide(minor))
            restored = WideBalance.model_validate_json(entry.model_dump_json())
            assert restored.balance == entry.balance

    def test_json_schema_has_canonical_pattern(self) -> None:
        schema = LedgerEntry.model_json_schema()
        amount = schema["properties"]["amount"]
        assert amount["type"] == "string"
        assert amount["pattern"] == canonical_pattern(2)
        assert schema["properties"]["rate"]["pattern"] == canonical_pattern(4)
