"""Dataclasses for the entity descriptors handed to the code generator."""
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional

from entitygen.model.types import Cardinality


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


@dataclass
class FieldRecord:
    """One field of an entity; field_id is 1-based in declaration order."""
    field_id: int
    field_name: str
    field_type: Optional[str] = None
    javadoc: Optional[str] = None
    field_values: Optional[str] = None
    field_type_blob_content: Optional[str] = None
    # None means "no constraints"; an empty list is never produced
    field_validate_rules: Optional[List[str]] = None
    # Keyed by capitalized rule name, e.g. {"Minlength": 3}
    field_validate_rules_params: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = _drop_none({
            "fieldId": self.field_id,
            "fieldName": self.field_name,
            "javadoc": self.javadoc,
            "fieldType": self.field_type,
            "fieldValues": self.field_values,
            "fieldTypeBlobContent": self.field_type_blob_content,
        })
        if self.field_validate_rules is not None:
            data["fieldValidateRules"] = list(self.field_validate_rules)
            for rule, value in _drop_none(self.field_validate_rules_params).items():
                data[f"fieldValidateRules{rule}"] = value
        return data


@dataclass
class RelationshipRecord:
    """One association endpoint as seen from the entity that owns the record."""
    relationship_id: int
    relationship_type: Cardinality
    relationship_name: Optional[str] = None
    other_entity_name: Optional[str] = None
    other_entity_field: Optional[str] = None
    owner_side: Optional[bool] = None
    other_entity_relationship_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "relationshipId": self.relationship_id,
            "relationshipType": self.relationship_type.value,
            "relationshipName": self.relationship_name,
            "otherEntityName": self.other_entity_name,
            "otherEntityField": self.other_entity_field,
            "ownerSide": self.owner_side,
            "otherEntityRelationshipName": self.other_entity_relationship_name,
        })


@dataclass
class EntityOptions:
    dto: str = "no"
    pagination: str = "no"
    service: str = "no"
    microservice_name: Optional[str] = None
    search_engine: Optional[str] = None


@dataclass
class Entity:
    """Entity descriptor; ``name`` is the class name and is not serialized."""
    name: str
    changelog_date: str
    options: EntityOptions = field(default_factory=EntityOptions)
    javadoc: Optional[str] = None
    entity_table_name: Optional[str] = None
    fields: List[FieldRecord] = field(default_factory=list)
    relationships: List[RelationshipRecord] = field(default_factory=list)

    def next_field_id(self) -> int:
        return len(self.fields) + 1

    def next_relationship_id(self) -> int:
        return len(self.relationships) + 1

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "relationships": [r.to_dict() for r in self.relationships],
            "fields": [f.to_dict() for f in self.fields],
            "changelogDate": self.changelog_date,
            "dto": self.options.dto,
            "pagination": self.options.pagination,
            "service": self.options.service,
            "microserviceName": self.options.microservice_name,
            "searchEngine": self.options.search_engine,
            "javadoc": self.javadoc,
            "entityTableName": self.entity_table_name,
        })
