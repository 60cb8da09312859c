import pytest

from rolemap.context import TypeContext
from rolemap.exceptions import DuplicateTypeError, SchemaError
from rolemap.schema import RoleSchema
from rolemap.type_node import MappingType


def test_extend_builds_tree(schema: RoleSchema) -> None:
    a = schema.root.extend("a", is_abstract=True)
    b = a.extend("b")

    assert a.parent is schema.root
    assert b.parent is a
    assert a.children == [b]
    assert schema.root.parent is None
    assert b.depth == 2
    assert [node.id for node in b.ancestors()] == ["b", "a", schema.root.id]
    assert b.is_subtype_of(a)
    assert b.is_subtype_of(b)
    assert not a.is_subtype_of(b)
    assert a.is_abstract
    assert not b.is_abstract


def test_extend_rejects_duplicate_ids(schema: RoleSchema) -> None:
    schema.root.extend("a")
    with pytest.raises(DuplicateTypeError):
        schema.root.extend("a")


def test_root_requires_context() -> None:
    with pytest.raises(SchemaError):
        MappingType("orphan")


def test_create_root_rejects_duplicates() -> None:
    context = TypeContext()
    root = MappingType.create_root("root", context)
    assert context.types["root"] is root
    with pytest.raises(DuplicateTypeError):
        MappingType.create_root("root", context)


def test_generation_increments_on_local_change(schema: RoleSchema) -> None:
    node = schema.root.extend("a")
    start = node.generation

    node.set_levels(["nominal"])
    node.set_data_type("string")

    assert node.generation == start + 2
