import pytest

from rolemap.data_types import BUILTIN_REGISTRY, DataType, DataTypeRegistry
from rolemap.exceptions import DuplicateTypeError, UnknownTypeError


def test_builtin_hierarchy() -> None:
    number = BUILTIN_REGISTRY.resolve("number")
    assert [t.id for t in number.ancestors()] == ["number", "simple", "element", "value"]
    assert number.is_subtype_of(BUILTIN_REGISTRY.resolve("element"))
    assert number.is_subtype_of(number)
    assert not BUILTIN_REGISTRY.resolve("element").is_subtype_of(number)
    assert BUILTIN_REGISTRY.root.id == "value"


def test_register_custom_type() -> None:
    registry = DataTypeRegistry(seed=BUILTIN_REGISTRY)
    currency = registry.register("currency", "number")

    assert currency.is_subtype_of(registry.resolve("simple"))
    assert "currency" in registry
    # The seed registry is not affected
    assert "currency" not in BUILTIN_REGISTRY


def test_register_rejects_duplicates_and_unknown_bases() -> None:
    registry = DataTypeRegistry()
    with pytest.raises(DuplicateTypeError):
        registry.register("number")
    with pytest.raises(UnknownTypeError):
        registry.register("money", "decimal")


def test_resolve_unknown_reference() -> None:
    registry = DataTypeRegistry()
    with pytest.raises(UnknownTypeError, match="Unknown data type 'decimal'"):
        registry.resolve("decimal")
    with pytest.raises(UnknownTypeError):
        registry.resolve(DataType(id="number"))


def test_data_types_are_immutable_values() -> None:
    registry = DataTypeRegistry()
    assert registry.resolve("string") == BUILTIN_REGISTRY.resolve("string")
    assert str(registry.resolve("string")) == "string"
