"""Structural checks run on an association before its relationships are built."""
import logging
from typing import Optional

from entitygen.core.errors import InvalidAssociationError
from entitygen.model.types import AssociationModel, Cardinality

log = logging.getLogger(__name__)


def check_validity_of_association(
    association: Optional[AssociationModel],
    source_name: Optional[str],
    destination_name: Optional[str],
) -> None:
    """
    Raise InvalidAssociationError when the association cannot be resolved.

    A One-to-Many declared from one side only is accepted with a warning:
    the other side is synthesized by the relationship resolver.
    """
    if association is None or association.type is None or not source_name or not destination_name:
        raise InvalidAssociationError(
            f"The association from {source_name} to {destination_name}, its type, "
            "its source and its destination must not be nil.",
            source_name, destination_name,
        )

    from_named = bool(association.injected_field_in_from)
    to_named = bool(association.injected_field_in_to)
    cardinality = association.type

    if cardinality == Cardinality.ONE_TO_ONE:
        if not from_named:
            raise InvalidAssociationError(
                f"In the One-to-One relationship from {source_name} to {destination_name}, "
                "the source entity must possess the destination, or you must invert "
                "the direction of the relationship.",
                source_name, destination_name,
            )
    elif cardinality == Cardinality.ONE_TO_MANY:
        if not from_named or not to_named:
            log.warning(
                "In the One-to-Many relationship from %s to %s, only bidirectionality is "
                "supported for a One-to-Many association. The other side will be "
                "automatically added.", source_name, destination_name,
            )
    elif cardinality == Cardinality.MANY_TO_ONE:
        if from_named and to_named:
            raise InvalidAssociationError(
                f"In the Many-to-One relationship from {source_name} to {destination_name}, "
                "only unidirectionality is supported for a Many-to-One relationship, "
                "you should create a bidirectional One-to-Many relationship instead.",
                source_name, destination_name,
            )
        if not from_named and not to_named:
            raise InvalidAssociationError(
                f"In the Many-to-One relationship from {source_name} to {destination_name}, "
                "one side of the relationship must be named.",
                source_name, destination_name,
            )
    elif cardinality == Cardinality.MANY_TO_MANY:
        if not from_named or not to_named:
            raise InvalidAssociationError(
                f"In the Many-to-Many relationship from {source_name} to {destination_name}, "
                "only bidirectionality is supported for a Many-to-Many relationship.",
                source_name, destination_name,
            )
    else:
        raise InvalidAssociationError(
            f"The association type {cardinality} from {source_name} to {destination_name} "
            "isn't supported.",
            source_name, destination_name,
        )
