from entitygen.model.types import (
    AssociationModel,
    Cardinality,
    ClassModel,
    DatabaseType,
    EnumModel,
    FieldModel,
    InjectedField,
    ParsedModel,
    TypeModel,
    ValidationModel,
    parse_injected_field,
)
from entitygen.model.loader import load_model, parse_model

__all__ = [
    "AssociationModel",
    "Cardinality",
    "ClassModel",
    "DatabaseType",
    "EnumModel",
    "FieldModel",
    "InjectedField",
    "ParsedModel",
    "TypeModel",
    "ValidationModel",
    "load_model",
    "parse_injected_field",
    "parse_model",
]
