"""Per-entity generation options: class defaults overridden by user lists."""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from entitygen.entities.types import EntityOptions
from entitygen.model.types import ClassModel

DTO_MAPPER = "mapstruct"
SEARCH_ENGINE = "elasticsearch"


@dataclass
class EntityOverrides:
    """User-supplied overrides, all keyed by entity (class) name."""
    dto_entities: List[str] = field(default_factory=list)
    pagination: Dict[str, str] = field(default_factory=dict)
    service: Dict[str, str] = field(default_factory=dict)
    microservice_names: Dict[str, str] = field(default_factory=dict)
    search_engine_entities: List[str] = field(default_factory=list)

    @classmethod
    def build(
        cls,
        dto_entities: Optional[Iterable[str]] = None,
        pagination: Optional[Dict[str, str]] = None,
        service: Optional[Dict[str, str]] = None,
        microservice_names: Optional[Dict[str, str]] = None,
        search_engine_entities: Optional[Iterable[str]] = None,
    ) -> "EntityOverrides":
        """Create overrides, treating every missing collection as empty."""
        return cls(
            dto_entities=list(dto_entities or []),
            pagination=dict(pagination or {}),
            service=dict(service or {}),
            microservice_names=dict(microservice_names or {}),
            search_engine_entities=list(search_engine_entities or []),
        )


def resolve_options(class_model: ClassModel, overrides: EntityOverrides) -> EntityOptions:
    """Apply overrides for this class name on top of the class defaults."""
    name = class_model.name
    options = EntityOptions(
        dto=class_model.dto,
        pagination=class_model.pagination,
        service=class_model.service,
        microservice_name=class_model.microservice_name,
        search_engine=class_model.search_engine,
    )
    if name in overrides.dto_entities:
        options.dto = DTO_MAPPER
    options.pagination = overrides.pagination.get(name, options.pagination)
    options.service = overrides.service.get(name, options.service)
    options.microservice_name = overrides.microservice_names.get(name, options.microservice_name)
    if name in overrides.search_engine_entities:
        options.search_engine = SEARCH_ENGINE
    return options
