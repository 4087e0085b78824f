"""Load a parsed class model from a JSON or YAML document."""
import json
import logging
from pathlib import Path
from typing import Dict, List, Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from entitygen.core.errors import ModelLoadError
from entitygen.model.types import (
    AssociationModel,
    Cardinality,
    ClassModel,
    EnumModel,
    FieldModel,
    ParsedModel,
    TypeModel,
    ValidationModel,
)

log = logging.getLogger(__name__)


class _Document(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class ClassDocument(_Document):
    name: str
    table_name: Optional[str] = None
    comment: Optional[str] = None
    fields: List[str] = Field(default_factory=list)
    dto: str = "no"
    pagination: str = "no"
    service: str = "no"
    microservice_name: Optional[str] = None
    search_engine: Optional[str] = None


class FieldDocument(_Document):
    name: str
    type: str
    comment: Optional[str] = None
    validations: List[str] = Field(default_factory=list)


class TypeDocument(_Document):
    name: str


class EnumDocument(_Document):
    name: str
    values: List[str] = Field(default_factory=list)


class ValidationDocument(_Document):
    name: str
    value: Any = None


class AssociationDocument(_Document):
    source: str = Field(alias="from")
    destination: str = Field(alias="to")
    type: Cardinality
    injected_field_in_from: Optional[str] = None
    injected_field_in_to: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def parse_cardinality(cls, value: Any) -> Cardinality:
        try:
            return Cardinality.parse(value)
        except (KeyError, ValueError):
            raise ValueError(f"unsupported cardinality {value!r}")


class ModelDocument(_Document):
    """Top-level model document: every section maps an id to a record."""
    classes: Dict[str, ClassDocument] = Field(default_factory=dict)
    fields: Dict[str, FieldDocument] = Field(default_factory=dict)
    types: Dict[str, TypeDocument] = Field(default_factory=dict)
    enums: Dict[str, EnumDocument] = Field(default_factory=dict)
    validations: Dict[str, ValidationDocument] = Field(default_factory=dict)
    associations: Dict[str, AssociationDocument] = Field(default_factory=dict)


def _check_references(document: ModelDocument) -> List[str]:
    problems = []
    for class_id, class_doc in document.classes.items():
        for field_id in class_doc.fields:
            if field_id not in document.fields:
                problems.append(f"class '{class_id}' lists unknown field '{field_id}'")
    for field_id, field_doc in document.fields.items():
        for validation_id in field_doc.validations:
            if validation_id not in document.validations:
                problems.append(f"field '{field_id}' lists unknown validation '{validation_id}'")
    for association_id, association in document.associations.items():
        for end in (association.source, association.destination):
            if end not in document.classes:
                problems.append(f"association '{association_id}' points at unknown class '{end}'")
    return problems


def parse_model(data: Dict[str, Any]) -> ParsedModel:
    """
    Validate an in-memory model document and build a ParsedModel.

    Args:
        data: Mapping with classes/fields/types/enums/validations/associations sections

    Returns:
        ParsedModel ready for entity creation
    """
    try:
        document = ModelDocument.model_validate(data)
    except ValidationError as e:
        raise ModelLoadError(f"Invalid model document: {e}") from e

    problems = _check_references(document)
    if problems:
        raise ModelLoadError("Invalid model document: " + "; ".join(problems))

    return ParsedModel(
        classes={cid: ClassModel(**doc.model_dump()) for cid, doc in document.classes.items()},
        fields={fid: FieldModel(**doc.model_dump()) for fid, doc in document.fields.items()},
        types={tid: TypeModel(**doc.model_dump()) for tid, doc in document.types.items()},
        enums={eid: EnumModel(**doc.model_dump()) for eid, doc in document.enums.items()},
        validations={
            vid: ValidationModel(**doc.model_dump()) for vid, doc in document.validations.items()
        },
        associations={
            aid: AssociationModel(**doc.model_dump()) for aid, doc in document.associations.items()
        },
    )


def load_model(path: Path) -> ParsedModel:
    """Read a model document from a .json, .yml or .yaml file."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in (".yml", ".yaml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ModelLoadError(f"Cannot read model file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ModelLoadError(f"Model file {path} must contain a mapping at the top level")

    model = parse_model(data)
    log.info("Loaded model from %s: %d classes, %d associations",
             path, len(model.classes), len(model.associations))
    return model
