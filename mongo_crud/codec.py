"""Entity <-> raw document conversion.

Encoding produces a pymongo-ready dict keyed by storage names. A `None`
identity is left out so the driver generates an `ObjectId` on insert; a
string identity that is a valid `ObjectId` hex is stored as `ObjectId`.

Decoding reconciles field casing (see `fields.reconcile`) and builds the
entity. An `ObjectId` identity is handed to the entity as its hex string.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Dict, List, Optional, Type, TypeVar

from bson import ObjectId
from pydantic import ValidationError

from .constants import ID_FIELD
from .errors import MappingError
from .fields import FieldSpec, describe, is_pydantic_model, reconcile, storage_names

T = TypeVar("T")


def as_object_id(value: Any) -> Any:
    """Return `ObjectId(value)` for a valid hex string, else `value` unchanged."""
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return value


def _attribute_values(entity: Any) -> Dict[str, Any]:
    entity_type = type(entity)
    if dataclasses.is_dataclass(entity_type):
        return dataclasses.asdict(entity)
    if is_pydantic_model(entity_type):
        return entity.model_dump()
    return {s.attribute: getattr(entity, s.attribute) for s in describe(entity_type) if hasattr(entity, s.attribute)}


def encode(entity: Any, specs: Optional[List[FieldSpec]] = None) -> Dict[str, Any]:
    """Encode `entity` into a raw document keyed by storage names."""
    if specs is None:
        specs = describe(type(entity))
    values = _attribute_values(entity)

    doc: Dict[str, Any] = {}
    for spec in specs:
        if spec.attribute not in values:
            continue
        value = values[spec.attribute]
        if spec.is_identity:
            if value is None:
                continue
            value = as_object_id(value)
        doc[spec.storage] = value
    return doc


def decode(entity_type: Type[T], raw: Dict[str, Any], specs: Optional[List[FieldSpec]] = None) -> T:
    """Decode a raw document into `entity_type`.

    Raises:
        MappingError: if the filtered document cannot build the type.
    """
    if specs is None:
        specs = describe(entity_type)
    kept = reconcile(raw, storage_names(specs))

    by_storage = {s.storage: s for s in specs}
    kwargs: Dict[str, Any] = {}
    for storage, value in kept.items():
        spec = by_storage[storage]
        if spec.is_identity and isinstance(value, ObjectId):
            value = str(value)
        kwargs[spec.init_name] = value

    try:
        if is_pydantic_model(entity_type):
            return entity_type.model_validate(kwargs)
        if dataclasses.is_dataclass(entity_type):
            return entity_type(**kwargs)
        obj = entity_type()
    except (TypeError, ValidationError) as e:
        raise MappingError(f"Cannot decode {entity_type.__name__}: {e}") from e

    for name, value in kwargs.items():
        setattr(obj, name, value)
    return obj


def identity_of(doc: Dict[str, Any]) -> Optional[str]:
    """String form of `_id`, falling back to the first `ObjectId` value in `doc`."""
    if ID_FIELD in doc:
        return str(doc[ID_FIELD])
    for value in doc.values():
        if isinstance(value, ObjectId):
            return str(value)
    return None
