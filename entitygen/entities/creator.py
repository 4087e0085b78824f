"""Orchestrator for entity creation."""
from __future__ import annotations
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from entitygen.core.config import settings
from entitygen.core.errors import MissingInputError, UnsupportedModelingError
from entitygen.core.workflow import PipelineStage
from entitygen.entities.changelog import allocate_changelog_date, utc_now_seconds
from entitygen.entities.context import EntityCreationContext
from entitygen.entities.fields import assemble_fields
from entitygen.entities.options import EntityOverrides, resolve_options
from entitygen.entities.relationships import resolve_relationships
from entitygen.entities.snapshots import read_snapshots
from entitygen.entities.types import Entity
from entitygen.entities.utils import format_comment, snake_case
from entitygen.model.types import DatabaseType, ParsedModel

log = logging.getLogger(__name__)

# A class with this name (any case) maps onto the generator's built-in user entity
USER_ENTITY_NAME = "user"


def _coerce_database_type(value: Union[DatabaseType, str]) -> DatabaseType:
    if isinstance(value, DatabaseType):
        return value
    try:
        return DatabaseType(str(value).lower())
    except ValueError:
        raise MissingInputError(f"Unknown database type '{value}'.", stage=PipelineStage.CHECK_INPUT)


class EntityCreator:
    """
    Build entity descriptors from a parsed model.

    Each call to ``run`` starts from a fresh EntityCreationContext, so an
    instance can be reused and nothing leaks between runs. After a
    successful run the context stays available on ``self.context``.
    """

    def __init__(
        self,
        parsed_model: Optional[ParsedModel],
        database_type: Optional[Union[DatabaseType, str]],
        dto_entities: Optional[Iterable[str]] = None,
        pagination: Optional[Dict[str, str]] = None,
        service: Optional[Dict[str, str]] = None,
        microservice_names: Optional[Dict[str, str]] = None,
        search_engines: Optional[Iterable[str]] = None,
        snapshot_dir: Optional[Union[Path, str]] = None,
        base_time: Optional[datetime] = None,
    ):
        self.parsed_model = parsed_model
        self.database_type = database_type
        self.overrides = EntityOverrides.build(
            dto_entities=dto_entities,
            pagination=pagination,
            service=service,
            microservice_names=microservice_names,
            search_engine_entities=search_engines,
        )
        self.snapshot_dir = Path(snapshot_dir if snapshot_dir is not None else settings.snapshot_dir)
        self.base_time = base_time
        self.context: Optional[EntityCreationContext] = None

    def _build_context(self) -> EntityCreationContext:
        if self.parsed_model is None or self.database_type is None:
            raise MissingInputError(
                "The parsed data and database types are mandatory.",
                stage=PipelineStage.CHECK_INPUT,
            )
        base_time = self.base_time or utc_now_seconds()
        return EntityCreationContext(
            model=self.parsed_model,
            database_type=_coerce_database_type(self.database_type),
            overrides=self.overrides,
            snapshot_dir=self.snapshot_dir,
            base_time=base_time.replace(microsecond=0),
        )

    def _check_nosql_modeling(self, ctx: EntityCreationContext) -> None:
        if ctx.database_type.is_nosql and ctx.model.associations:
            raise UnsupportedModelingError(
                "NoSQL entities don't have relationships.",
                stage=PipelineStage.CHECK_NOSQL,
            )

    def _read_snapshots(self, ctx: EntityCreationContext) -> None:
        ctx.on_disk_entities = read_snapshots(ctx.model, ctx.snapshot_dir)
        if ctx.on_disk_entities:
            log.info("Found %d existing entity files in %s", len(ctx.on_disk_entities),
                     ctx.snapshot_dir, extra=ctx.log_extra(PipelineStage.READ_SNAPSHOTS))

    def _initialize_entities(self, ctx: EntityCreationContext) -> None:
        for index, (class_id, class_model) in enumerate(ctx.model.classes.items()):
            ctx.entities[class_id] = Entity(
                name=class_model.name,
                changelog_date=allocate_changelog_date(
                    class_id, index, ctx.base_time, ctx.on_disk_entities
                ),
                options=resolve_options(class_model, ctx.overrides),
                javadoc=format_comment(class_model.comment),
                entity_table_name=snake_case(class_model.table_name or class_model.name),
            )

    def _fill_entities(self, ctx: EntityCreationContext) -> None:
        for class_id, class_model in ctx.model.classes.items():
            if class_model.name.lower() == USER_ENTITY_NAME:
                log.warning(
                    "An Entity called 'User' was defined: 'User' is an entity created by "
                    "default by the generator. All relationships toward it will be kept but "
                    "all attributes and relationships from it will be disregarded.",
                    extra=ctx.log_extra(PipelineStage.FILL_ENTITIES),
                )
                ctx.entities_to_suppress.append(class_id)
            assemble_fields(class_id, ctx.model, ctx.entities[class_id])
            resolve_relationships(class_id, ctx)

    def _suppress_entities(self, ctx: EntityCreationContext) -> None:
        for class_id in ctx.entities_to_suppress:
            ctx.entities.pop(class_id, None)

    def run(self) -> Dict[str, Entity]:
        """
        Create the entities.

        Returns:
            Entities keyed by class id, without any suppressed 'User' entity

        Raises:
            MissingInputError: parsed model or database type missing
            UnsupportedModelingError: associations declared for a NoSQL database
            InvalidAssociationError: an association is malformed
            SnapshotError: an existing entity file cannot be read
        """
        ctx = self._build_context()
        stages = [
            (PipelineStage.CHECK_NOSQL, self._check_nosql_modeling),
            (PipelineStage.READ_SNAPSHOTS, self._read_snapshots),
            (PipelineStage.INITIALIZE_ENTITIES, self._initialize_entities),
            (PipelineStage.FILL_ENTITIES, self._fill_entities),
            (PipelineStage.SUPPRESS_ENTITIES, self._suppress_entities),
        ]
        for stage, step in stages:
            log.debug("Running stage", extra=ctx.log_extra(stage))
            step(ctx)

        self.context = ctx
        log.info("Created %d entities from %d classes", len(ctx.entities), len(ctx.model.classes),
                 extra=ctx.log_extra(PipelineStage.DONE))
        return ctx.entities


def create_entities(
    parsed_model: Optional[ParsedModel],
    database_type: Optional[Union[DatabaseType, str]],
    dto_entities: Optional[Iterable[str]] = None,
    pagination: Optional[Dict[str, str]] = None,
    service: Optional[Dict[str, str]] = None,
    microservice_names: Optional[Dict[str, str]] = None,
    search_engines: Optional[Iterable[str]] = None,
    snapshot_dir: Optional[Union[Path, str]] = None,
    base_time: Optional[datetime] = None,
) -> Dict[str, Entity]:
    """
    Create entity descriptors for every class of a parsed model.

    Args:
        parsed_model: Classes, fields, types, enums, validations and associations
        database_type: Target database; NoSQL types reject associations
        dto_entities: Entity names generated with a mapstruct DTO
        pagination: Entity name -> pagination strategy
        service: Entity name -> service layer option
        microservice_names: Entity name -> microservice name
        search_engines: Entity names indexed by elasticsearch
        snapshot_dir: Directory of previously written entity files (settings default)
        base_time: Run start used for new changelog dates (current UTC time by default)

    Returns:
        Entities keyed by class id
    """
    return EntityCreator(
        parsed_model,
        database_type,
        dto_entities=dto_entities,
        pagination=pagination,
        service=service,
        microservice_names=microservice_names,
        search_engines=search_engines,
        snapshot_dir=snapshot_dir,
        base_time=base_time,
    ).run()
