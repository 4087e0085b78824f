"""Per-run state of an entity creation."""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Any

from entitygen.core.logging import log_context
from entitygen.entities.options import EntityOverrides
from entitygen.entities.types import Entity
from entitygen.model.types import AssociationModel, Cardinality, DatabaseType, ParsedModel


@dataclass
class NormalizedAssociation:
    """An association plus the cardinality it has once its inverse side is synthesized."""
    association_id: str
    association: AssociationModel
    effective_type: Cardinality

    @property
    def original_type(self) -> Cardinality:
        return self.association.type

    @property
    def synthesized(self) -> bool:
        return self.effective_type != self.original_type


@dataclass
class EntityCreationContext:
    """Everything one run reads and writes; rebuilt for every call."""
    model: ParsedModel
    database_type: DatabaseType
    overrides: EntityOverrides
    snapshot_dir: Path
    base_time: datetime
    run_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    entities: Dict[str, Entity] = field(default_factory=dict)
    on_disk_entities: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    entities_to_suppress: List[str] = field(default_factory=list)
    associations: Dict[str, NormalizedAssociation] = field(default_factory=dict)

    def __post_init__(self):
        self.associations = {
            association_id: NormalizedAssociation(association_id, association, association.type)
            for association_id, association in self.model.associations.items()
        }

    def effective_cardinality(self, association_id: str) -> Cardinality:
        return self.associations[association_id].effective_type

    def mark_synthesized(self, association_id: str, cardinality: Cardinality) -> None:
        self.associations[association_id].effective_type = cardinality

    def log_extra(self, stage) -> Dict[str, str]:
        return log_context(self.run_id, stage)
