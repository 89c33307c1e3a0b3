from .constants import COLLECTIONS

PRAGMA_SQL = r"""
PRAGMA journal_mode = WAL;
PRAGMA synchronous = NORMAL;
"""

# One singleton row per collection table, keyed by the collection name.
TABLE_SQL = r"""
CREATE TABLE IF NOT EXISTS {table} (
  id TEXT PRIMARY KEY,
  data TEXT NOT NULL
);
"""

SCHEMA_SQL = "".join(TABLE_SQL.format(table=name) for name in COLLECTIONS)
