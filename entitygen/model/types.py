"""Dataclasses for the parsed class model consumed by the entity creator."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Any, Optional


class Cardinality(str, Enum):
    ONE_TO_ONE = "one-to-one"
    ONE_TO_MANY = "one-to-many"
    MANY_TO_ONE = "many-to-one"
    MANY_TO_MANY = "many-to-many"

    @classmethod
    def parse(cls, value: Any) -> "Cardinality":
        """Accept either the value (``one-to-many``) or the member name (``ONE_TO_MANY``)."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        try:
            return cls(text.lower().replace("_", "-"))
        except ValueError:
            return cls[text.upper().replace("-", "_")]


class DatabaseType(str, Enum):
    SQL = "sql"
    MYSQL = "mysql"
    POSTGRESQL = "postgresql"
    MARIADB = "mariadb"
    ORACLE = "oracle"
    MSSQL = "mssql"
    MONGODB = "mongodb"
    CASSANDRA = "cassandra"

    @property
    def is_nosql(self) -> bool:
        return self in (DatabaseType.MONGODB, DatabaseType.CASSANDRA)


@dataclass(frozen=True)
class InjectedField:
    """Decoded ``<relationshipName>(<otherEntityField>)`` descriptor."""
    relationship_name: str = ""
    other_entity_field: str = "id"


def parse_injected_field(descriptor: Optional[str]) -> InjectedField:
    """
    Decode a relationship descriptor string.

    ``"books(title)"`` gives ``InjectedField("books", "title")``, ``"books"``
    gives ``InjectedField("books", "id")`` and a missing descriptor gives an
    empty relationship name with the default ``id`` field.
    """
    if not descriptor:
        return InjectedField()
    chunks = descriptor.replace("(", "/", 1).replace(")", "", 1).split("/")
    if len(chunks) > 1 and chunks[1]:
        return InjectedField(relationship_name=chunks[0], other_entity_field=chunks[1])
    return InjectedField(relationship_name=chunks[0])


@dataclass
class ValidationModel:
    name: str
    value: Any = None


@dataclass
class TypeModel:
    name: str


@dataclass
class EnumModel:
    name: str
    values: List[str] = field(default_factory=list)


@dataclass
class FieldModel:
    name: str
    type: str
    comment: Optional[str] = None
    validations: List[str] = field(default_factory=list)  # validation ids, ordered


@dataclass
class ClassModel:
    name: str
    table_name: Optional[str] = None
    comment: Optional[str] = None
    fields: List[str] = field(default_factory=list)  # field ids, declaration order
    dto: str = "no"
    pagination: str = "no"
    service: str = "no"
    microservice_name: Optional[str] = None
    search_engine: Optional[str] = None


@dataclass
class AssociationModel:
    """A directed association; descriptors are decoded once at construction."""
    source: str  # class id of the "from" end
    destination: str  # class id of the "to" end
    type: Cardinality
    injected_field_in_from: Optional[str] = None
    injected_field_in_to: Optional[str] = None
    from_field: InjectedField = field(init=False)
    to_field: InjectedField = field(init=False)

    def __post_init__(self):
        self.type = Cardinality.parse(self.type)
        self.from_field = parse_injected_field(self.injected_field_in_from)
        self.to_field = parse_injected_field(self.injected_field_in_to)


@dataclass
class ParsedModel:
    """Everything extracted from the modeling tool, keyed by identifier."""
    classes: Dict[str, ClassModel] = field(default_factory=dict)
    fields: Dict[str, FieldModel] = field(default_factory=dict)
    types: Dict[str, TypeModel] = field(default_factory=dict)
    enums: Dict[str, EnumModel] = field(default_factory=dict)
    validations: Dict[str, ValidationModel] = field(default_factory=dict)
    associations: Dict[str, AssociationModel] = field(default_factory=dict)

    def get_class(self, class_id: str) -> Optional[ClassModel]:
        return self.classes.get(class_id)

    def get_field(self, field_id: str) -> Optional[FieldModel]:
        return self.fields.get(field_id)

    def get_type(self, type_id: str) -> Optional[TypeModel]:
        return self.types.get(type_id)

    def has_type(self, type_id: str) -> bool:
        return type_id in self.types

    def get_enum(self, enum_id: str) -> Optional[EnumModel]:
        return self.enums.get(enum_id)

    def get_validation(self, validation_id: str) -> Optional[ValidationModel]:
        return self.validations.get(validation_id)

    def get_association(self, association_id: str) -> Optional[AssociationModel]:
        return self.associations.get(association_id)
