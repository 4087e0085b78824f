"""Shared model documents for the entity creation tests."""
from datetime import datetime, timezone
from typing import Dict, Any, Optional

import pytest

from entitygen.model.loader import parse_model

BASE_TIME = datetime(2024, 5, 1, 12, 30, 10, tzinfo=timezone.utc)


def library_document(associations: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Author, Book and Genre (in that order) plus whatever associations are given."""
    return {
        "classes": {
            "c_author": {
                "name": "Author",
                "tableName": "Author",
                "comment": "The author of a book.",
                "fields": ["f_author_name", "f_author_birth"],
            },
            "c_book": {
                "name": "Book",
                "tableName": "BookItem",
                "fields": ["f_book_title", "f_book_cover", "f_book_language"],
            },
            "c_genre": {
                "name": "Genre",
                "tableName": "genre",
                "fields": ["f_genre_name"],
            },
        },
        "fields": {
            "f_author_name": {"name": "name", "type": "t_string", "validations": ["v_required"]},
            "f_author_birth": {"name": "birth_date", "type": "t_local_date"},
            "f_book_title": {
                "name": "title",
                "type": "t_string",
                "comment": "Title shown in listings.",
                "validations": ["v_required", "v_minlength", "v_maxlength"],
            },
            "f_book_cover": {"name": "cover", "type": "t_image_blob"},
            "f_book_language": {"name": "language", "type": "e_language"},
            "f_genre_name": {"name": "name", "type": "t_string"},
        },
        "types": {
            "t_string": {"name": "String"},
            "t_local_date": {"name": "LocalDate"},
            "t_image_blob": {"name": "ImageBlob"},
            "t_blob": {"name": "Blob"},
            "t_any_blob": {"name": "AnyBlob"},
        },
        "enums": {
            "e_language": {"name": "Language", "values": ["FRENCH", "ENGLISH", "SPANISH"]},
        },
        "validations": {
            "v_required": {"name": "required"},
            "v_minlength": {"name": "minlength", "value": 3},
            "v_maxlength": {"name": "maxlength", "value": 50},
        },
        "associations": associations or {},
    }


def association(source: str, destination: str, cardinality: str,
                from_field: Optional[str] = None, to_field: Optional[str] = None) -> Dict[str, Any]:
    data = {"from": source, "to": destination, "type": cardinality}
    if from_field is not None:
        data["injectedFieldInFrom"] = from_field
    if to_field is not None:
        data["injectedFieldInTo"] = to_field
    return data


@pytest.fixture
def library_model():
    return parse_model(library_document())


@pytest.fixture
def snapshot_dir(tmp_path):
    return tmp_path / ".jhipster"
