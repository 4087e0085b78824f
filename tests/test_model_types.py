"""Tests for the input model dataclasses."""
import pytest

from entitygen.model.types import (
    AssociationModel,
    Cardinality,
    DatabaseType,
    InjectedField,
    parse_injected_field,
)


@pytest.mark.parametrize("descriptor,expected", [
    ("books(title)", InjectedField("books", "title")),
    ("books", InjectedField("books", "id")),
    ("books()", InjectedField("books", "id")),
    (None, InjectedField("", "id")),
    ("", InjectedField("", "id")),
])
def test_parse_injected_field(descriptor, expected):
    assert parse_injected_field(descriptor) == expected


def test_cardinality_accepts_values_and_names():
    assert Cardinality.parse("one-to-many") == Cardinality.ONE_TO_MANY
    assert Cardinality.parse("MANY_TO_MANY") == Cardinality.MANY_TO_MANY
    assert Cardinality.parse(Cardinality.ONE_TO_ONE) == Cardinality.ONE_TO_ONE
    with pytest.raises(KeyError):
        Cardinality.parse("none")


def test_association_decodes_descriptors_once():
    association = AssociationModel(
        source="c1", destination="c2", type="many-to-many",
        injected_field_in_from="tags(label)", injected_field_in_to="posts",
    )
    assert association.type == Cardinality.MANY_TO_MANY
    assert association.from_field == InjectedField("tags", "label")
    assert association.to_field == InjectedField("posts", "id")
    assert association.injected_field_in_from == "tags(label)"


def test_nosql_database_types():
    assert DatabaseType.MONGODB.is_nosql
    assert DatabaseType.CASSANDRA.is_nosql
    assert not DatabaseType.SQL.is_nosql
    assert not DatabaseType("postgresql").is_nosql
