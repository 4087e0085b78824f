"""Read and write the per-entity JSON files kept between generations."""
import json
import logging
from pathlib import Path
from typing import Dict, List, Any

from entitygen.core.errors import SnapshotError
from entitygen.core.workflow import PipelineStage
from entitygen.entities.types import Entity
from entitygen.model.types import ParsedModel

log = logging.getLogger(__name__)


def snapshot_path(snapshot_dir: Path, class_name: str) -> Path:
    return Path(snapshot_dir) / f"{class_name}.json"


def read_snapshots(model: ParsedModel, snapshot_dir: Path) -> Dict[str, Dict[str, Any]]:
    """
    Load previously written entity files.

    Args:
        model: Parsed model whose class names select the files to read
        snapshot_dir: Directory holding one <ClassName>.json per entity

    Returns:
        Snapshot contents keyed by class id; classes without a file are absent
    """
    snapshots = {}
    for class_id, class_model in model.classes.items():
        path = snapshot_path(snapshot_dir, class_model.name)
        if not path.exists():
            continue
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SnapshotError(f"Cannot read entity file {path}: {e}",
                                stage=PipelineStage.READ_SNAPSHOTS) from e
        if not isinstance(data, dict):
            raise SnapshotError(f"Entity file {path} must contain a JSON object",
                                stage=PipelineStage.READ_SNAPSHOTS)
        snapshots[class_id] = data
    return snapshots


def entities_equal(on_disk: Dict[str, Any], entity: Entity) -> bool:
    """True when a snapshot already holds exactly what would be written for the entity."""
    return on_disk == entity.to_dict()


def filter_unchanged_entities(
    entities: Dict[str, Entity],
    snapshots: Dict[str, Dict[str, Any]],
) -> Dict[str, Entity]:
    """Keep the entities that are new or differ from their snapshot."""
    changed = {}
    for class_id, entity in entities.items():
        on_disk = snapshots.get(class_id)
        if on_disk is None or not entities_equal(on_disk, entity):
            changed[class_id] = entity
    return changed


def write_entities(entities: Dict[str, Entity], snapshot_dir: Path) -> List[Path]:
    """
    Write one JSON file per entity.

    Args:
        entities: Entities keyed by class id
        snapshot_dir: Output directory, created when missing

    Returns:
        Paths of the written files
    """
    snapshot_dir = Path(snapshot_dir)
    snapshot_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for entity in entities.values():
        path = snapshot_path(snapshot_dir, entity.name)
        path.write_text(json.dumps(entity.to_dict(), indent=4) + "\n", encoding="utf-8")
        written.append(path)
        log.debug("Wrote entity file %s", path)
    return written
