"""
Central place for package-wide constants.
Keep this module dependency-free to avoid circular imports.
"""

from typing import FrozenSet

# --- Identity ----------------------------------------------------------------

ID_FIELD = "_id"

# Attribute names on an entity class that hold the document identity
IDENTITY_ATTRIBUTES: FrozenSet[str] = frozenset({"id", "Id", ID_FIELD})

# --- Connection --------------------------------------------------------------

DEFAULT_CONNECTION_STRING = "mongodb://localhost:27017"

ENV_MONGO_URI = "MONGO_URI"
ENV_MONGO_DB_NAME = "MONGO_DB_NAME"
