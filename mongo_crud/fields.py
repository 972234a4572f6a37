"""Field descriptors for entity types and raw-document reconciliation.

An entity type is described by a list of `FieldSpec`:

    attribute  - name on the Python object
    storage    - name in the MongoDB document
    init_name  - keyword accepted by the constructor / pydantic validator

Supported types are dataclasses, pydantic models and plain classes with
public annotations. The identity attribute (`id`, `Id`, `_id`, or a pydantic
field aliased `_id`) is always stored as `_id`.
"""

from __future__ import annotations

import dataclasses
import inspect
import typing
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping

from pydantic import BaseModel

from .constants import ID_FIELD, IDENTITY_ATTRIBUTES
from .errors import MappingError


@dataclass(frozen=True)
class FieldSpec:
    attribute: str
    storage: str
    init_name: str

    @property
    def is_identity(self) -> bool:
        return self.storage == ID_FIELD


def is_pydantic_model(entity_type: type) -> bool:
    return isinstance(entity_type, type) and issubclass(entity_type, BaseModel)


def _storage_name(attribute: str, alias: str | None = None) -> str:
    if attribute in IDENTITY_ATTRIBUTES or alias == ID_FIELD:
        return ID_FIELD
    return alias or attribute


def _annotated_attributes(entity_type: type) -> List[str]:
    names: List[str] = []
    for klass in reversed(entity_type.__mro__):
        for name, annotation in inspect.get_annotations(klass).items():
            if name in names:
                continue
            if name.startswith("_") and name != ID_FIELD:
                continue
            if typing.get_origin(annotation) is typing.ClassVar or annotation is typing.ClassVar:
                continue
            if isinstance(annotation, str) and annotation.startswith(("ClassVar", "typing.ClassVar")):
                continue
            names.append(name)
    return names


def describe(entity_type: type) -> List[FieldSpec]:
    """Return the field descriptors of `entity_type` in declaration order.

    Raises:
        MappingError: if the type exposes no public fields.
    """
    if dataclasses.is_dataclass(entity_type):
        specs = [
            FieldSpec(f.name, _storage_name(f.name), f.name)
            for f in dataclasses.fields(entity_type)
            if f.init
        ]
    elif is_pydantic_model(entity_type):
        specs = []
        for name, info in entity_type.model_fields.items():
            alias = info.alias
            specs.append(FieldSpec(name, _storage_name(name, alias), alias or name))
    else:
        specs = [FieldSpec(n, _storage_name(n), n) for n in _annotated_attributes(entity_type)]

    if not specs:
        raise MappingError(f"{entity_type.__name__}: no public fields to map.")
    return specs


def storage_names(specs: Iterable[FieldSpec]) -> List[str]:
    return [s.storage for s in specs]


def title_case(name: str) -> str:
    """Title-case each whitespace-separated word; all-caps words are kept."""
    words = name.split(" ")
    out = []
    for w in words:
        if not w or w.isupper():
            out.append(w)
        else:
            out.append(w[:1].upper() + w[1:].lower())
    return " ".join(out)


def reconcile(raw: Mapping[str, Any], names: Iterable[str]) -> Dict[str, Any]:
    """Keep only raw fields that match a target storage name.

    The title-cased form of a raw field wins over its original form, so a
    stored `name` lands on a `Name` field. Unmatched fields are dropped.
    """
    targets = set(names)
    kept: Dict[str, Any] = {}
    for key, value in raw.items():
        titled = title_case(key)
        if titled in targets:
            kept[titled] = value
        elif key in targets:
            kept[key] = value
    return kept
