"""Changelog dates: stable, per-entity ordering identifiers."""
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, Optional

CHANGELOG_DATE_FORMAT = "%Y%m%d%H%M%S"


def utc_now_seconds() -> datetime:
    """Current UTC time truncated to whole seconds."""
    return datetime.now(timezone.utc).replace(microsecond=0)


def format_changelog_date(base_time: datetime, increment: int) -> str:
    """Format ``base_time + increment seconds`` as YYYYMMDDHHMMSS."""
    return (base_time.replace(microsecond=0) + timedelta(seconds=increment)).strftime(
        CHANGELOG_DATE_FORMAT
    )


def allocate_changelog_date(
    class_id: str,
    index: int,
    base_time: datetime,
    on_disk_entities: Dict[str, Dict[str, Any]],
) -> str:
    """
    Return the changelog date for a class.

    Args:
        class_id: Class identifier
        index: 0-based position of the class in the model's class iteration order
        base_time: Start time of the run (UTC, whole seconds)
        on_disk_entities: Previously written entity snapshots keyed by class id

    Returns:
        The persisted date when the entity was generated before, otherwise
        ``base_time + index`` seconds
    """
    previous: Optional[str] = (on_disk_entities.get(class_id) or {}).get("changelogDate")
    if previous:
        return str(previous)
    return format_changelog_date(base_time, index)
