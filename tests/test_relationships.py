"""Tests for relationship resolution across association cardinalities."""
import pytest

from conftest import BASE_TIME, association, library_document
from entitygen.core.errors import InvalidAssociationError
from entitygen.entities.creator import EntityCreator, create_entities
from entitygen.entities.relationships import get_related_associations
from entitygen.model.loader import parse_model
from entitygen.model.types import AssociationModel, Cardinality, ClassModel, ParsedModel


def _create(associations, snapshot_dir):
    creator = EntityCreator(
        parse_model(library_document(associations)),
        "sql",
        snapshot_dir=snapshot_dir,
        base_time=BASE_TIME,
    )
    return creator.run(), creator.context


def test_one_to_many_without_inverse_synthesizes_many_to_one(snapshot_dir):
    """A One-to-Many named only on its source adds a Many-to-One on the target."""
    entities, context = _create(
        {"a1": association("c_author", "c_book", "one-to-many", from_field="books")},
        snapshot_dir,
    )

    author_relationships = [r.to_dict() for r in entities["c_author"].relationships]
    assert author_relationships == [{
        "relationshipId": 1,
        "relationshipType": "one-to-many",
        "relationshipName": "books",
        "otherEntityName": "book",
        "otherEntityRelationshipName": "author",
    }]

    book_relationships = [r.to_dict() for r in entities["c_book"].relationships]
    assert book_relationships == [{
        "relationshipId": 1,
        "relationshipType": "many-to-one",
        "relationshipName": "author",
        "otherEntityName": "author",
        "otherEntityField": "id",
    }]

    assert context.effective_cardinality("a1") == Cardinality.MANY_TO_ONE
    assert context.associations["a1"].synthesized
    # The input association is left untouched
    assert context.model.get_association("a1").type == Cardinality.ONE_TO_MANY


def test_one_to_many_without_source_name_uses_target_name(snapshot_dir):
    entities, _ = _create(
        {"a1": association("c_author", "c_book", "ONE_TO_MANY")},
        snapshot_dir,
    )
    assert entities["c_author"].relationships[0].relationship_name == "book"
    assert entities["c_book"].relationships[0].relationship_name == "author"


def test_bidirectional_one_to_many(snapshot_dir):
    """Both sides named: the target sees a Many-to-One with the decoded other field."""
    entities, context = _create(
        {"a1": association("c_author", "c_book", "one-to-many",
                           from_field="books", to_field="writer(name)")},
        snapshot_dir,
    )

    author = entities["c_author"].relationships
    assert len(author) == 1
    assert author[0].relationship_type == Cardinality.ONE_TO_MANY
    assert author[0].other_entity_relationship_name == "writer"

    book = entities["c_book"].relationships
    assert len(book) == 1
    assert book[0].relationship_type == Cardinality.MANY_TO_ONE
    assert book[0].relationship_name == "writer"
    assert book[0].other_entity_name == "author"
    assert book[0].other_entity_field == "name"

    assert context.effective_cardinality("a1") == Cardinality.ONE_TO_MANY


def test_one_to_one_both_sides(snapshot_dir):
    entities, _ = _create(
        {"a1": association("c_author", "c_genre", "one-to-one",
                           from_field="favoriteGenre(name)", to_field="fan")},
        snapshot_dir,
    )

    assert entities["c_author"].relationships[0].to_dict() == {
        "relationshipId": 1,
        "relationshipType": "one-to-one",
        "relationshipName": "favoriteGenre",
        "otherEntityName": "genre",
        "otherEntityField": "name",
        "ownerSide": True,
        "otherEntityRelationshipName": "fan",
    }
    assert entities["c_genre"].relationships[0].to_dict() == {
        "relationshipId": 1,
        "relationshipType": "one-to-one",
        "relationshipName": "fan",
        "otherEntityName": "author",
        "ownerSide": False,
        "otherEntityRelationshipName": "favoriteGenre",
    }


def test_one_to_one_without_inverse_defaults_to_target_name(snapshot_dir):
    entities, _ = _create(
        {"a1": association("c_author", "c_genre", "one-to-one", from_field="genre")},
        snapshot_dir,
    )
    relationship = entities["c_author"].relationships[0]
    assert relationship.other_entity_relationship_name == "genre"
    assert relationship.other_entity_field == "id"
    assert entities["c_genre"].relationships == []


def test_many_to_many(snapshot_dir):
    entities, _ = _create(
        {"a1": association("c_book", "c_genre", "many-to-many",
                           from_field="genres(name)", to_field="books")},
        snapshot_dir,
    )

    assert entities["c_book"].relationships[0].to_dict() == {
        "relationshipId": 1,
        "relationshipType": "many-to-many",
        "relationshipName": "genres",
        "otherEntityName": "genre",
        "otherEntityField": "name",
        "ownerSide": True,
    }
    assert entities["c_genre"].relationships[0].to_dict() == {
        "relationshipId": 1,
        "relationshipType": "many-to-many",
        "relationshipName": "books",
        "otherEntityName": "book",
        "ownerSide": False,
        "otherEntityRelationshipName": "genres",
    }


def test_many_to_one_named_on_source(snapshot_dir):
    entities, _ = _create(
        {"a1": association("c_book", "c_genre", "many-to-one", from_field="genre(name)")},
        snapshot_dir,
    )
    assert entities["c_book"].relationships[0].to_dict() == {
        "relationshipId": 1,
        "relationshipType": "many-to-one",
        "relationshipName": "genre",
        "otherEntityName": "genre",
        "otherEntityField": "name",
    }
    assert entities["c_genre"].relationships == []


def test_many_to_one_named_on_target_only(snapshot_dir):
    """Only the named side gets a record; the source stays silent."""
    entities, _ = _create(
        {"a1": association("c_book", "c_genre", "many-to-one", to_field="books")},
        snapshot_dir,
    )
    assert entities["c_book"].relationships == []
    assert entities["c_genre"].relationships[0].to_dict() == {
        "relationshipId": 1,
        "relationshipType": "many-to-one",
        "relationshipName": "books",
        "otherEntityName": "book",
        "otherEntityField": "id",
    }


def test_relationship_ids_are_contiguous_in_emission_order(snapshot_dir):
    entities, _ = _create(
        {
            "a1": association("c_author", "c_book", "one-to-many", from_field="books"),
            "a2": association("c_book", "c_genre", "many-to-many",
                              from_field="genres", to_field="books"),
            "a3": association("c_genre", "c_book", "many-to-one", to_field="mainGenre"),
            "a4": association("c_book", "c_author", "many-to-one", from_field="editor"),
        },
        snapshot_dir,
    )

    book = entities["c_book"].relationships
    assert [r.relationship_id for r in book] == [1, 2, 3, 4]
    # Synthesized while Author was processed, then Book's own from-side, then its to-side
    assert [r.relationship_name for r in book] == ["author", "genres", "editor", "mainGenre"]

    for entity in entities.values():
        ids = [r.relationship_id for r in entity.relationships]
        assert ids == list(range(1, len(ids) + 1))


def test_each_association_yields_one_or_two_records(snapshot_dir):
    associations = {
        "a1": association("c_author", "c_book", "one-to-many", from_field="books"),
        "a2": association("c_author", "c_genre", "one-to-many", from_field="genres", to_field="author"),
        "a3": association("c_book", "c_genre", "many-to-many", from_field="genres", to_field="books"),
        "a4": association("c_genre", "c_author", "many-to-one", from_field="curator"),
        "a5": association("c_book", "c_author", "one-to-one", from_field="preface", to_field="prefacedBook"),
    }
    entities, _ = _create(associations, snapshot_dir)

    total = sum(len(entity.relationships) for entity in entities.values())
    assert total == 2 + 2 + 2 + 1 + 2


def test_self_referencing_one_to_many(snapshot_dir):
    entities, _ = _create(
        {"a1": association("c_genre", "c_genre", "one-to-many", from_field="subGenres")},
        snapshot_dir,
    )
    genre = entities["c_genre"].relationships
    assert [r.relationship_id for r in genre] == [1, 2]
    assert genre[0].relationship_type == Cardinality.ONE_TO_MANY
    assert genre[1].relationship_type == Cardinality.MANY_TO_ONE
    assert genre[1].relationship_name == "genre"


def test_related_associations_need_a_named_target_side():
    """An association whose "to" side is unnamed is only seen from its source."""
    doc = library_document({
        "a1": association("c_author", "c_book", "one-to-many", from_field="books"),
        "a2": association("c_genre", "c_book", "many-to-many", from_field="books", to_field="genres"),
    })
    model = parse_model(doc)

    related = get_related_associations("c_book", model.associations)
    assert related.from_ids == []
    assert related.to_ids == ["a2"]

    related = get_related_associations("c_author", model.associations)
    assert related.from_ids == ["a1"]
    assert related.to_ids == []


@pytest.mark.parametrize("cardinality,from_field,to_field", [
    ("many-to-many", "genres", None),
    ("many-to-many", None, "books"),
    ("one-to-one", None, "book"),
    ("many-to-one", "genre", "books"),
    ("many-to-one", None, None),
])
def test_invalid_associations_abort_creation(snapshot_dir, cardinality, from_field, to_field):
    with pytest.raises(InvalidAssociationError) as exc_info:
        create_entities(
            parse_model(library_document({
                "a1": association("c_book", "c_genre", cardinality, from_field, to_field),
            })),
            "sql",
            snapshot_dir=snapshot_dir,
            base_time=BASE_TIME,
        )
    assert "Book" in str(exc_info.value)
    assert "Genre" in str(exc_info.value)


def test_association_from_unknown_class_is_invalid(snapshot_dir):
    """A hand-built model whose association starts at a missing class fails cleanly."""
    model = ParsedModel(
        classes={"c_book": ClassModel(name="Book")},
        associations={"a1": AssociationModel(
            source="c_missing", destination="c_book", type="many-to-one",
            injected_field_in_to="books",
        )},
    )

    with pytest.raises(InvalidAssociationError) as exc_info:
        create_entities(model, "sql", snapshot_dir=snapshot_dir, base_time=BASE_TIME)
    assert "c_missing" in str(exc_info.value)
    assert "Book" in str(exc_info.value)


def test_association_to_unknown_class_is_invalid(snapshot_dir):
    model = ParsedModel(
        classes={"c_book": ClassModel(name="Book")},
        associations={"a1": AssociationModel(
            source="c_book", destination="c_missing", type="many-to-one",
            injected_field_in_from="publisher",
        )},
    )

    with pytest.raises(InvalidAssociationError) as exc_info:
        create_entities(model, "sql", snapshot_dir=snapshot_dir, base_time=BASE_TIME)
    assert "Book" in str(exc_info.value)
