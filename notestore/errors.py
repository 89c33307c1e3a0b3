class StoreError(Exception):
    """Base class for every failure raised by the document store."""


class OpenFailure(StoreError):
    """The database file could not be opened, created or configured."""


class SchemaTooNew(StoreError):
    def __init__(self, stored, expected):
        self.stored = stored
        self.expected = expected
        super().__init__(
            f"database schema version {stored} is newer than supported version {expected}; "
            "it was written by a newer release of the application"
        )


class MigrationRequired(StoreError):
    def __init__(self, stored, expected):
        self.stored = stored
        self.expected = expected
        super().__init__(
            f"database schema version {stored} is older than app version {expected}; "
            "migrations are not implemented"
        )


class QueryFailure(StoreError):
    """A load or save statement failed. Not retried."""
