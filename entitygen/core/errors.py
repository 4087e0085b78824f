"""Errors raised while loading a model or creating entities."""
from typing import Optional
from entitygen.core.workflow import PipelineStage


class EntityCreationError(Exception):
    """Base class for every fatal error of an entity creation run."""

    def __init__(self, message: str, stage: Optional[PipelineStage] = None):
        super().__init__(message)
        self.message = message
        self.stage = stage


class MissingInputError(EntityCreationError):
    """The parsed model or the database types were not supplied."""


class UnsupportedModelingError(EntityCreationError):
    """Associations were declared for a NoSQL database."""


class InvalidAssociationError(EntityCreationError):
    """An association is structurally invalid for its cardinality."""

    def __init__(self, message: str, source_name: Optional[str] = None,
                 destination_name: Optional[str] = None):
        super().__init__(message, stage=PipelineStage.FILL_ENTITIES)
        self.source_name = source_name
        self.destination_name = destination_name


class SnapshotError(EntityCreationError):
    """A previously written entity file exists but cannot be read."""


class ModelLoadError(EntityCreationError):
    """A model document could not be read or validated."""
