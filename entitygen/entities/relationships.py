"""
Resolve directed associations into relationship records on both entities.

Associations arrive directed and partially named. Every entity must end up
with one record per association endpoint it takes part in, so each
association is looked at twice: once while its "from" class is processed
and, when the "to" side is named, once while its "to" class is processed.
A One-to-Many named only on its "from" side gets its Many-to-One inverse
synthesized directly on the target entity.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from entitygen.core.errors import InvalidAssociationError
from entitygen.entities.associations import check_validity_of_association
from entitygen.entities.context import EntityCreationContext
from entitygen.entities.types import RelationshipRecord
from entitygen.entities.utils import camel_case, lower_first
from entitygen.model.types import AssociationModel, Cardinality, ClassModel, InjectedField

log = logging.getLogger(__name__)


@dataclass
class RelatedAssociations:
    """Association ids a class takes part in, split by the end it sits on."""
    from_ids: List[str] = field(default_factory=list)
    to_ids: List[str] = field(default_factory=list)


def get_related_associations(class_id: str, associations: Dict[str, AssociationModel]) -> RelatedAssociations:
    """
    Partition the associations touching a class.

    An association belongs to the "to" group only when its "to" side is
    named; otherwise the record for the target is produced while the source
    class is processed.
    """
    related = RelatedAssociations()
    for association_id, association in associations.items():
        if association.source == class_id:
            related.from_ids.append(association_id)
        if association.destination == class_id and association.injected_field_in_to:
            related.to_ids.append(association_id)
    return related


def entity_reference(class_model: ClassModel) -> str:
    """Name used to point at an entity from another entity (``BookAuthor`` -> ``bookAuthor``)."""
    return lower_first(camel_case(class_model.name))


def _from_side_record(
    association: AssociationModel,
    source: ClassModel,
    destination: ClassModel,
    context: EntityCreationContext,
) -> Optional[RelationshipRecord]:
    entity = context.entities[association.source]
    cardinality = association.type
    from_field = association.from_field
    to_field = association.to_field
    record = RelationshipRecord(
        relationship_id=entity.next_relationship_id(),
        relationship_type=cardinality,
    )

    if cardinality == Cardinality.ONE_TO_ONE:
        record.relationship_name = camel_case(from_field.relationship_name)
        record.other_entity_name = entity_reference(destination)
        record.other_entity_field = lower_first(from_field.other_entity_field)
        record.owner_side = True
        record.other_entity_relationship_name = lower_first(
            to_field.relationship_name or destination.name
        )
    elif cardinality == Cardinality.ONE_TO_MANY:
        record.relationship_name = lower_first(
            camel_case(from_field.relationship_name or destination.name)
        )
        record.other_entity_name = entity_reference(destination)
        if association.injected_field_in_to:
            record.other_entity_relationship_name = lower_first(to_field.relationship_name)
        else:
            record.other_entity_relationship_name = lower_first(source.name)
    elif cardinality == Cardinality.MANY_TO_ONE:
        if not association.injected_field_in_from:
            return None
        record.relationship_name = camel_case(from_field.relationship_name)
        record.other_entity_name = entity_reference(destination)
        record.other_entity_field = lower_first(from_field.other_entity_field)
    elif cardinality == Cardinality.MANY_TO_MANY:
        record.relationship_name = camel_case(from_field.relationship_name)
        record.other_entity_name = entity_reference(destination)
        record.other_entity_field = lower_first(from_field.other_entity_field)
        record.owner_side = True
    return record


def _synthesize_many_to_one(
    association_id: str,
    association: AssociationModel,
    source: ClassModel,
    context: EntityCreationContext,
) -> None:
    target = context.entities[association.destination]
    target.relationships.append(RelationshipRecord(
        relationship_id=target.next_relationship_id(),
        relationship_type=Cardinality.MANY_TO_ONE,
        relationship_name=camel_case(lower_first(source.name)),
        other_entity_name=entity_reference(source),
        other_entity_field=lower_first(association.to_field.other_entity_field),
    ))
    context.mark_synthesized(association_id, Cardinality.MANY_TO_ONE)
    log.debug("Synthesized many-to-one '%s' on %s for association %s",
              source.name, target.name, association_id)


def _to_side_record(
    association_id: str,
    association: AssociationModel,
    source: ClassModel,
    context: EntityCreationContext,
) -> Optional[RelationshipRecord]:
    entity = context.entities[association.destination]
    cardinality = context.effective_cardinality(association_id)
    from_field = association.from_field
    to_field = association.to_field
    record = RelationshipRecord(
        relationship_id=entity.next_relationship_id(),
        relationship_type=Cardinality.MANY_TO_ONE if cardinality == Cardinality.ONE_TO_MANY else cardinality,
    )

    if cardinality == Cardinality.ONE_TO_ONE:
        record.relationship_name = camel_case(to_field.relationship_name)
        record.other_entity_name = entity_reference(source)
        record.owner_side = False
        record.other_entity_relationship_name = lower_first(from_field.relationship_name)
    elif cardinality == Cardinality.ONE_TO_MANY:
        if not association.injected_field_in_to:
            to_field = InjectedField(relationship_name=lower_first(source.name))
        record.relationship_name = lower_first(camel_case(to_field.relationship_name or source.name))
        record.other_entity_name = entity_reference(source)
        record.other_entity_field = lower_first(to_field.other_entity_field)
    elif cardinality == Cardinality.MANY_TO_ONE:
        if not association.injected_field_in_to:
            return None
        record.relationship_name = camel_case(to_field.relationship_name)
        record.other_entity_name = entity_reference(source)
        record.other_entity_field = lower_first(to_field.other_entity_field)
    elif cardinality == Cardinality.MANY_TO_MANY:
        record.relationship_name = camel_case(to_field.relationship_name)
        record.other_entity_name = entity_reference(source)
        record.owner_side = False
        record.other_entity_relationship_name = lower_first(from_field.relationship_name)
    return record


def resolve_relationships(class_id: str, context: EntityCreationContext) -> None:
    """
    Append the relationship records of every association touching a class.

    "From" side records go first, then "to" side records, each taking the
    next sequence id of the entity it is appended to.

    Raises:
        InvalidAssociationError: an association touching this class is malformed
            or points at an unknown class
    """
    model = context.model
    related = get_related_associations(class_id, model.associations)

    for association_id in related.from_ids:
        association = model.get_association(association_id)
        source = model.get_class(association.source)
        destination = model.get_class(association.destination)
        check_validity_of_association(
            association,
            source.name if source else None,
            destination.name if destination else None,
        )
        record = _from_side_record(association, source, destination, context)
        if record is not None:
            context.entities[class_id].relationships.append(record)
        if association.type == Cardinality.ONE_TO_MANY and not association.injected_field_in_to:
            _synthesize_many_to_one(association_id, association, source, context)

    for association_id in related.to_ids:
        association = model.get_association(association_id)
        source = model.get_class(association.source)
        if source is None:
            destination = model.get_class(association.destination)
            raise InvalidAssociationError(
                f"The association {association_id} from unknown class '{association.source}' "
                f"to {destination.name} must have an existing source.",
                association.source, destination.name,
            )
        record = _to_side_record(association_id, association, source, context)
        if record is not None:
            context.entities[class_id].relationships.append(record)
