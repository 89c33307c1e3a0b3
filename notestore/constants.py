APP_NAME = "Pulm Notes"

VERSION = "1.0.0"

# Stored in PRAGMA user_version. Bump together with a migration path.
SCHEMA_VERSION = 1

COLLECTIONS = ("notes", "categories", "subcategories", "assets", "reflections")

EMPTY_DOCUMENT = "[]"

DB_FILENAME = "pulm_notes.db"

DATA_DIR_NAME = "pulm-notes"

# Browser storage keys used before collections moved into the database.
LEGACY_STORAGE_KEYS = {
    "notes": "pulm-notes",
    "categories": "pulm-categories",
    "subcategories": "pulm-subcategories",
    "assets": "pulm-assets",
    "reflections": "pulm-reflections",
}
