from .constants import APP_NAME, COLLECTIONS, EMPTY_DOCUMENT, SCHEMA_VERSION, VERSION
from .db import DocumentStore
from .errors import MigrationRequired, OpenFailure, QueryFailure, SchemaTooNew, StoreError

__all__ = [
    "APP_NAME",
    "COLLECTIONS",
    "EMPTY_DOCUMENT",
    "SCHEMA_VERSION",
    "VERSION",
    "DocumentStore",
    "MigrationRequired",
    "OpenFailure",
    "QueryFailure",
    "SchemaTooNew",
    "StoreError",
]
