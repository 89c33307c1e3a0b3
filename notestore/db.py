import logging
import os
import sqlite3
import threading

logger = logging.getLogger("NoteStore")

from .constants import COLLECTIONS, EMPTY_DOCUMENT, SCHEMA_VERSION
from .errors import MigrationRequired, OpenFailure, QueryFailure, SchemaTooNew, StoreError
from .paths import get_db_path
from .schema import PRAGMA_SQL, SCHEMA_SQL
from .utils import file_size


def _check_collection(name):
    if name not in COLLECTIONS:
        raise ValueError(f"unknown collection: {name!r}")
    return name


class DocumentStore:
    """Single-connection SQLite store holding one JSON document per collection.

    The connection is shared by every caller and guarded by ``self._lock``;
    nothing outside this class touches it. Documents are stored verbatim and
    never parsed.
    """

    _instance = None
    _instance_lock = threading.Lock()

    @classmethod
    def get(cls):
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    def __init__(self, db_path=None):
        self.db_path = os.fspath(db_path or get_db_path())
        self._lock = threading.Lock()
        self._conn = None
        parent = os.path.dirname(os.path.abspath(self.db_path))
        try:
            os.makedirs(parent, exist_ok=True)
        except OSError as exc:
            raise OpenFailure(f"cannot create directory {parent}: {exc}") from exc
        self._conn = self._connect()
        try:
            self._check_schema_version()
            self._init_tables()
        except BaseException:
            self._conn.close()
            self._conn = None
            raise

    def _connect(self):
        try:
            conn = sqlite3.connect(self.db_path, check_same_thread=False)
        except sqlite3.Error as exc:
            raise OpenFailure(f"cannot open database {self.db_path}: {exc}") from exc
        try:
            conn.executescript(PRAGMA_SQL)
        except sqlite3.Error as exc:
            conn.close()
            raise OpenFailure(f"cannot configure database {self.db_path}: {exc}") from exc
        return conn

    def _check_schema_version(self):
        with self._lock:
            try:
                current = self._conn.execute("PRAGMA user_version").fetchone()[0]
            except sqlite3.Error as exc:
                raise OpenFailure(f"cannot read schema version: {exc}") from exc

            if current == 0:
                try:
                    # PRAGMA does not accept bound parameters.
                    self._conn.execute(f"PRAGMA user_version = {int(SCHEMA_VERSION)}")
                    self._conn.commit()
                except sqlite3.Error as exc:
                    raise OpenFailure(f"cannot write schema version: {exc}") from exc
                logger.info("Initialized new database with schema version %d", SCHEMA_VERSION)
            elif current > SCHEMA_VERSION:
                logger.error(
                    "Database schema version %d is newer than app version %d; refusing to open",
                    current,
                    SCHEMA_VERSION,
                )
                raise SchemaTooNew(current, SCHEMA_VERSION)
            elif current < SCHEMA_VERSION:
                logger.warning(
                    "Database schema version %d is older than app version %d. Migrations not yet implemented.",
                    current,
                    SCHEMA_VERSION,
                )
                raise MigrationRequired(current, SCHEMA_VERSION)

    def _init_tables(self):
        with self._lock:
            try:
                self._conn.executescript(SCHEMA_SQL)
                self._conn.commit()
            except sqlite3.Error as exc:
                raise OpenFailure(f"cannot create tables: {exc}") from exc

    def _require_conn(self):
        if self._conn is None:
            raise QueryFailure("database connection is closed")
        return self._conn

    # ── generic load/save ──

    def load(self, collection):
        table = _check_collection(collection)
        with self._lock:
            conn = self._require_conn()
            try:
                row = conn.execute(f"SELECT data FROM {table} WHERE id = ?", (table,)).fetchone()
            except sqlite3.Error as exc:
                raise QueryFailure(f"failed to load {table}: {exc}") from exc
        if row is None:
            logger.debug("load %s: no row, returning default", table)
            return EMPTY_DOCUMENT
        logger.debug("load %s: %d chars", table, len(row[0]))
        return row[0]

    def save(self, collection, data):
        table = _check_collection(collection)
        if not isinstance(data, str):
            raise TypeError(f"document for {table} must be str, got {type(data).__name__}")
        with self._lock:
            conn = self._require_conn()
            try:
                conn.execute(f"INSERT OR REPLACE INTO {table} (id, data) VALUES (?, ?)", (table, data))
                conn.commit()
            except (sqlite3.Error, UnicodeEncodeError) as exc:
                # Lone surrogates cannot be bound as UTF-8 text.
                try:
                    conn.rollback()
                except sqlite3.Error:
                    logger.exception("rollback after failed save of %s also failed", table)
                raise QueryFailure(f"failed to save {table}: {exc}") from exc
        logger.debug("save %s: %d chars", table, len(data))

    # ── per-collection operations ──

    def load_notes(self):
        return self.load("notes")

    def save_notes(self, data):
        self.save("notes", data)

    def load_categories(self):
        return self.load("categories")

    def save_categories(self, data):
        self.save("categories", data)

    def load_subcategories(self):
        return self.load("subcategories")

    def save_subcategories(self, data):
        self.save("subcategories", data)

    def load_assets(self):
        return self.load("assets")

    def save_assets(self, data):
        self.save("assets", data)

    def load_reflections(self):
        return self.load("reflections")

    def save_reflections(self, data):
        self.save("reflections", data)

    # ── metadata ──

    def get_database_size(self):
        return file_size(self.db_path)

    def schema_version(self):
        with self._lock:
            conn = self._require_conn()
            try:
                return conn.execute("PRAGMA user_version").fetchone()[0]
            except sqlite3.Error as exc:
                raise QueryFailure(f"failed to read schema version: {exc}") from exc

    def close(self):
        with self._lock:
            if self._conn is None:
                return
            try:
                self._conn.close()
            except sqlite3.Error as exc:
                raise StoreError(f"failed to close database: {exc}") from exc
            finally:
                self._conn = None
        logger.debug("closed %s", self.db_path)
