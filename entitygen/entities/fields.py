"""Map class fields and their validations onto entity field records."""
import logging
from typing import List

from entitygen.entities.types import Entity, FieldRecord
from entitygen.entities.utils import camel_case, capitalize, format_comment
from entitygen.model.types import FieldModel, ParsedModel

log = logging.getLogger(__name__)

BYTE_ARRAY = "byte[]"
IMAGE_BLOB_TYPES = {"ImageBlob"}
ANY_BLOB_TYPES = {"Blob", "AnyBlob"}
REQUIRED_RULE = "required"


def _resolve_type(record: FieldRecord, field_model: FieldModel, model: ParsedModel) -> None:
    type_model = model.get_type(field_model.type)
    enum_model = model.get_enum(field_model.type)
    if type_model is not None:
        record.field_type = type_model.name
    elif enum_model is not None:
        record.field_type = enum_model.name
        record.field_values = ",".join(enum_model.values)
    else:
        log.warning("Field '%s' has unknown type '%s'", field_model.name, field_model.type)

    if record.field_type in IMAGE_BLOB_TYPES:
        record.field_type = BYTE_ARRAY
        record.field_type_blob_content = "image"
    elif record.field_type in ANY_BLOB_TYPES:
        record.field_type = BYTE_ARRAY
        record.field_type_blob_content = "any"


def _apply_validations(record: FieldRecord, field_model: FieldModel, model: ParsedModel) -> None:
    if not field_model.validations:
        return
    rules: List[str] = []
    for validation_id in field_model.validations:
        validation = model.get_validation(validation_id)
        if validation is None:
            log.warning("Field '%s' references unknown validation '%s'", field_model.name, validation_id)
            continue
        rules.append(validation.name)
        if validation.name != REQUIRED_RULE:
            record.field_validate_rules_params[capitalize(validation.name)] = validation.value
    if rules:
        record.field_validate_rules = rules


def build_field_record(field_id: int, field_model: FieldModel, model: ParsedModel) -> FieldRecord:
    record = FieldRecord(
        field_id=field_id,
        field_name=camel_case(field_model.name),
        javadoc=format_comment(field_model.comment),
    )
    _resolve_type(record, field_model, model)
    _apply_validations(record, field_model, model)
    return record


def assemble_fields(class_id: str, model: ParsedModel, entity: Entity) -> None:
    """Append one field record per class field, in declaration order."""
    for field_id in model.get_class(class_id).fields:
        entity.fields.append(build_field_record(entity.next_field_id(), model.get_field(field_id), model))
