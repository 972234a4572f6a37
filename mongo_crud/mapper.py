"""Typed CRUD helper over pymongo.

This module defines:
- `SimpleCrud`: maps entity classes to collections by pluralized class name
  and runs single-field-filtered get / insert / update / delete.

Notes:
    - Collection for `Person` is `people`, for `Order` is `orders`.
    - This module must be import-safe (no DB side effects on import).
    - pymongo exceptions are not wrapped; they reach the caller as raised.
"""

from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

import pandas as pd
from loguru import logger
from pymongo import MongoClient

from . import codec
from .base import BaseRepository
from .connection import ClientFactory, ConnectionHandle, open_connection
from .constants import ID_FIELD
from .errors import MissingIdentityError
from .fields import describe
from .naming import NamingStrategy, pluralized_lowercase
from .settings import MongoSettings

T = TypeVar("T")


class SimpleCrud:
    """Entity mapper for one MongoDB database.

    Entities are dataclasses, pydantic models, or plain classes with public
    annotations. The instance holds only the connection handle and the
    naming strategy, so it can be shared between threads.
    """

    # --------------------
    # Database connection
    # --------------------

    def __init__(
        self,
        database: str,
        connection_string: Optional[str] = None,
        *,
        naming: Optional[NamingStrategy] = None,
        client_factory: ClientFactory = MongoClient,
    ):
        self.handle: ConnectionHandle = open_connection(connection_string, database, client_factory)
        self.naming: NamingStrategy = naming or pluralized_lowercase

    @classmethod
    def from_settings(cls, settings: Optional[MongoSettings] = None, **kwargs: Any) -> "SimpleCrud":
        """Build from `MongoSettings` (environment defaults when omitted)."""
        settings = settings or MongoSettings()
        return cls(settings.db_name, settings.uri, **kwargs)

    @classmethod
    def from_secrets(cls, secrets: Mapping[str, Any], **kwargs: Any) -> "SimpleCrud":
        return cls.from_settings(MongoSettings.from_secrets(secrets), **kwargs)

    @property
    def db(self):
        return self.handle.db

    def close(self) -> None:
        self.handle.close()

    def __enter__(self) -> "SimpleCrud":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # -------------------
    # Naming and filters
    # -------------------

    def collection_name(self, entity_type: type) -> str:
        return self.naming(entity_type)

    def _repo(self, entity_type: type) -> BaseRepository:
        return BaseRepository(self.db, self.collection_name(entity_type))

    @staticmethod
    def _filter(key: Optional[str], value: Any) -> Dict[str, Any]:
        if not key:
            key = ID_FIELD
        if key == ID_FIELD:
            oid = codec.as_object_id(value)
            # a 24-hex string may be stored either as ObjectId or as the string itself
            if oid is not value:
                return {key: {"$in": [oid, value]}}
        return {key: value}

    # -----
    # Read
    # -----

    def get(self, entity_type: Type[T], object_id: Any) -> Optional[T]:
        """Fetch by `_id`. Same as `get_by(entity_type, "_id", object_id)`."""
        return self.get_by(entity_type, ID_FIELD, object_id)

    def get_by(self, entity_type: Type[T], key: Optional[str], value: Any) -> Optional[T]:
        """Fetch the first document where `key == value`.

        Returns:
            The decoded entity, or None when nothing matches.

        Raises:
            MappingError: if the document cannot be turned into `entity_type`.
        """
        doc = self._repo(entity_type).find_one(self._filter(key, value))
        if doc is None:
            return None
        return codec.decode(entity_type, doc)

    def get_list(self, entity_type: Type[T], key: Optional[str], value: Any) -> List[T]:
        """Fetch every document where `key == value` (empty list when none)."""
        docs = self._repo(entity_type).find(self._filter(key, value))
        if not docs:
            return []
        specs = describe(entity_type)
        return [codec.decode(entity_type, d, specs) for d in docs]

    def get_list_df(
        self,
        entity_type: type,
        key: Optional[str],
        value: Any,
        include_id: bool = False,
    ) -> pd.DataFrame:
        """`get_list` as a DataFrame, one column per stored field.

        `_id` is dropped unless `include_id` is set.
        """
        entities = self.get_list(entity_type, key, value)
        specs = describe(entity_type)
        rows = [codec.encode(e, specs) for e in entities]
        columns = [s.storage for s in specs if include_id or not s.is_identity]
        df = pd.DataFrame(rows, columns=columns)
        if include_id and ID_FIELD in df.columns:
            df[ID_FIELD] = df[ID_FIELD].map(lambda v: None if v is None else str(v))
        return df

    # ------
    # Write
    # ------

    def insert(self, entity: Any) -> Optional[str]:
        """Insert `entity` and return its identity as a string.

        A missing identity is generated by the driver.
        """
        doc = codec.encode(entity)
        self._repo(type(entity)).insert_one(doc)
        return codec.identity_of(doc)

    def update(self, entity: Any, strict: bool = False) -> bool:
        """Update the stored document matching the entity's `_id`.

        Returns:
            True if an update was issued, False if the entity has no `_id`.

        Raises:
            MissingIdentityError: with `strict=True`, instead of returning False.
        """
        doc = codec.encode(entity)
        if ID_FIELD in doc:
            self.update_by(entity, ID_FIELD, doc[ID_FIELD])
            return True

        if strict:
            raise MissingIdentityError(f"update: {type(entity).__name__} has no '_id' value.")
        logger.warning(f"update: {type(entity).__name__} has no '_id' value, nothing written")
        return False

    def update_by(self, entity: Any, key: Optional[str], value: Any, per_field: bool = False) -> None:
        """Overwrite every public field of the document where `key == value`.

        All fields go out in one `$set`. With `per_field=True` each field is
        written by its own `update_one`, in declaration order; earlier writes
        stay if a later one fails.
        """
        repo = self._repo(type(entity))
        filt = self._filter(key, value)
        fields = {k: v for k, v in codec.encode(entity).items() if k != ID_FIELD}
        if not fields:
            return

        if not per_field:
            repo.update_one(filt, fields)
            return
        for name, field_value in fields.items():
            repo.update_one(filt, {name: field_value})

    # -------
    # Delete
    # -------

    def delete_one(self, entity_type: type, key: Optional[str], value: Any) -> bool:
        """Delete the first match. True only if exactly one document went."""
        return self._repo(entity_type).delete_one(self._filter(key, value)) == 1

    def delete_many(self, entity_type: type, key: Optional[str], value: Any) -> int:
        """Delete every match and return how many went (0 is fine)."""
        return self._repo(entity_type).delete_many(self._filter(key, value))
