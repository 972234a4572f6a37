class DatabaseError(Exception):
    """Errors raised when the database side of the mapper cannot be used."""


class ApplicationError(Exception):
    """Errors raised in the mapping logic itself (not DB-related)."""


class ConfigurationError(DatabaseError):
    """The connection string or database name was rejected."""


class MappingError(ApplicationError):
    """An entity type cannot be described, encoded or decoded."""


class MissingIdentityError(ApplicationError):
    """An entity carries no `_id` field where one is required."""
