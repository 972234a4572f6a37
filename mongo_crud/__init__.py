# mongo_crud/__init__.py

"""Typed CRUD helper over pymongo.

Contains:
    - SimpleCrud: maps entity classes to pluralized collections
    - MongoSettings: connection string and database name
    - DatabaseError / ApplicationError and their subclasses
    - pluralize: default English pluralizer used for collection names
"""

from .errors import (
    ApplicationError,
    ConfigurationError,
    DatabaseError,
    MappingError,
    MissingIdentityError,
)
from .mapper import SimpleCrud
from .naming import pluralize, pluralized_lowercase
from .settings import MongoSettings

__all__ = [
    "SimpleCrud",
    "MongoSettings",
    "DatabaseError",
    "ApplicationError",
    "ConfigurationError",
    "MappingError",
    "MissingIdentityError",
    "pluralize",
    "pluralized_lowercase",
]
