import logging
import sys
from typing import Dict, Optional
from entitygen.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [run_id=%(run_id)s stage=%(stage)s] - %(message)s"


class ContextFormatter(logging.Formatter):
    """Custom formatter that handles optional run_id and stage fields."""
    def format(self, record):
        # Records logged outside an entity creation run carry neither field
        if not hasattr(record, 'run_id'):
            record.run_id = '-'
        if not hasattr(record, 'stage'):
            record.stage = '-'
        return super().format(record)


def log_context(run_id: Optional[str] = None, stage=None) -> Dict[str, str]:
    """Build the ``extra`` mapping for a record; stage may be a PipelineStage or a string."""
    return {
        "run_id": run_id or '-',
        "stage": str(getattr(stage, "value", stage) or '-'),
    }


def configure_logging(level: Optional[str] = None) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ContextFormatter(LOG_FORMAT))
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper(), logging.INFO),
        handlers=[handler],
    )
