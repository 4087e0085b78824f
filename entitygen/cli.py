"""
Command line entry point.
Usage: entitygen model.yaml --db postgresql --dto Author --pagination Book=pager
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from entitygen.core.config import settings
from entitygen.core.errors import EntityCreationError
from entitygen.core.logging import configure_logging, log_context
from entitygen.entities.creator import EntityCreator
from entitygen.entities.snapshots import filter_unchanged_entities, write_entities
from entitygen.model.loader import load_model

log = logging.getLogger(__name__)


def _parse_pairs(values: List[str], option: str) -> Dict[str, str]:
    pairs = {}
    for value in values:
        name, sep, setting = value.partition("=")
        if not sep or not name or not setting:
            raise argparse.ArgumentTypeError(f"{option} expects NAME=VALUE, got '{value}'")
        pairs[name] = setting
    return pairs


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="entitygen",
        description="Create entity files from a class model document (JSON or YAML).",
    )
    parser.add_argument("model", type=Path, help="Model document to read")
    parser.add_argument("--db", default=settings.database_type,
                        help="Database type (sql, mysql, postgresql, mongodb, cassandra, ...)")
    parser.add_argument("--dto", nargs="*", default=[], metavar="NAME",
                        help="Entities generated with a mapstruct DTO")
    parser.add_argument("--pagination", nargs="*", default=[], metavar="NAME=VALUE")
    parser.add_argument("--service", nargs="*", default=[], metavar="NAME=VALUE")
    parser.add_argument("--microservice", nargs="*", default=[], metavar="NAME=VALUE")
    parser.add_argument("--search-engine", nargs="*", default=[], metavar="NAME",
                        help="Entities indexed by elasticsearch")
    parser.add_argument("--snapshot-dir", type=Path, default=Path(settings.snapshot_dir))
    parser.add_argument("--force", action="store_true", default=settings.write_unchanged,
                        help="Write every entity, even unchanged ones")
    parser.add_argument("--log-level", default=None)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        pagination = _parse_pairs(args.pagination, "--pagination")
        service = _parse_pairs(args.service, "--service")
        microservice_names = _parse_pairs(args.microservice, "--microservice")
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    try:
        model = load_model(args.model)
        creator = EntityCreator(
            model,
            args.db,
            dto_entities=args.dto,
            pagination=pagination,
            service=service,
            microservice_names=microservice_names,
            search_engines=args.search_engine,
            snapshot_dir=args.snapshot_dir,
        )
        entities = creator.run()
        to_write = entities
        if not args.force:
            to_write = filter_unchanged_entities(entities, creator.context.on_disk_entities)
        written = write_entities(to_write, args.snapshot_dir)
    except EntityCreationError as e:
        log.error("Entity creation failed: %s", e.message,
                  extra=log_context(stage=e.stage))
        return 1

    log.info("Wrote %d of %d entity files to %s", len(written), len(entities), args.snapshot_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
