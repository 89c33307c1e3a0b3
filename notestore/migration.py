import logging
from dataclasses import dataclass, field

from .constants import COLLECTIONS, EMPTY_DOCUMENT, LEGACY_STORAGE_KEYS

logger = logging.getLogger("NoteStore")


@dataclass
class MigrationResult:
    migrated: list = field(default_factory=list)
    skipped: bool = False

    def to_dict(self):
        return {"migrated": list(self.migrated), "skipped": self.skipped}


def migrate_legacy_storage(store, legacy):
    """Copy collections saved by the pre-database app into an empty store.

    ``legacy`` maps browser storage keys (``pulm-notes`` and friends) to the
    JSON text they held. Runs only while the store has neither notes nor
    categories, so a second call is a no-op.
    """
    if not isinstance(legacy, dict):
        raise TypeError("legacy storage must be a mapping of storage keys to strings")

    result = MigrationResult()
    if store.load("notes") != EMPTY_DOCUMENT or store.load("categories") != EMPTY_DOCUMENT:
        result.skipped = True
        logger.info("Legacy import skipped: database already holds data")
        return result

    for name in COLLECTIONS:
        value = legacy.get(LEGACY_STORAGE_KEYS[name])
        if not isinstance(value, str) or not value or value == EMPTY_DOCUMENT:
            continue
        store.save(name, value)
        result.migrated.append(name)
        logger.info("Migrated %s from legacy storage to database", name)

    if result.migrated:
        logger.info("Migration from legacy storage to database completed")
    return result
