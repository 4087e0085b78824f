from entitygen.entities.creator import EntityCreator, create_entities
from entitygen.entities.types import Entity, EntityOptions, FieldRecord, RelationshipRecord

__all__ = [
    "Entity",
    "EntityCreator",
    "EntityOptions",
    "FieldRecord",
    "RelationshipRecord",
    "create_entities",
]
