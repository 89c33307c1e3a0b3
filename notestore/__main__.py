import argparse
import json
import logging
import os
import sys

from aiohttp import web

from .api import create_app
from .constants import APP_NAME, COLLECTIONS, SCHEMA_VERSION, VERSION
from .db import DocumentStore
from .errors import StoreError
from .migration import migrate_legacy_storage
from .utils import format_bytes

logger = logging.getLogger("NoteStore")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="notestore", description=f"{APP_NAME} document store")
    parser.add_argument("--db", help="database file (default: application data directory)")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8765)
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=os.environ.get("NOTESTORE_LOG_LEVEL", "INFO"),
        help="logging level (default: $NOTESTORE_LOG_LEVEL or INFO)",
    )
    parser.add_argument("--import-legacy", metavar="FILE", help="JSON file of legacy storage keys to import")
    args = parser.parse_args(argv)
    # argparse does not check defaults against choices.
    if args.log_level not in LOG_LEVELS:
        parser.error(f"invalid NOTESTORE_LOG_LEVEL: {args.log_level!r} (choose from {', '.join(LOG_LEVELS)})")
    return args


def _import_legacy(store, path):
    with open(path, encoding="utf-8") as f:
        legacy = json.load(f)
    result = migrate_legacy_storage(store, legacy)
    if result.skipped:
        logger.info("Legacy file %s not imported: database is not empty", path)
    else:
        logger.info("Imported %d collection(s) from %s", len(result.migrated), path)


def main(argv=None):
    args = _parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    _banner = f" {APP_NAME} Document Store "
    logger.info("=" * 20 + _banner + "=" * 20)
    logger.info(f"Version: {VERSION}")
    logger.info(f"Schema version: {SCHEMA_VERSION}")
    logger.info(f"Collections: {', '.join(COLLECTIONS)}")

    try:
        store = DocumentStore(args.db)
    except StoreError as exc:
        logger.error(f"failed to start {APP_NAME}: {exc}")
        return 1

    logger.info(f"Database: {store.db_path} ({format_bytes(store.get_database_size())})")

    if args.import_legacy:
        try:
            _import_legacy(store, args.import_legacy)
        except (OSError, ValueError, TypeError, StoreError):
            logger.exception("Legacy import from %s failed", args.import_legacy)
            store.close()
            return 1

    web.run_app(create_app(store), host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
