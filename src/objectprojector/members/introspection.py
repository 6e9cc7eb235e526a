"""Enumerate the readable, public members of arbitrary Python objects.

Members come in two kinds:

- properties: ``property`` objects with a getter, and ``functools.cached_property``
  attributes, found on the source's class (MRO order, nearest class wins).
- fields: passive instance state, i.e. dataclass fields, set ``__slots__`` and
  the remaining public keys of the instance ``__dict__``.

Mappings are treated as key/value sources: every non-empty string key is a
field, underscore-prefixed keys included. Named tuples expose their
``_fields`` as fields.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property, lru_cache
from typing import Any, Callable, Iterator, Optional

Getter = Callable[[Any], Any]

_MISSING = object()
_CLASS_CACHE_SIZE = 512


class MemberKind(str, Enum):
    PROPERTY = "property"
    FIELD = "field"


@dataclass(frozen=True)
class MemberAccessor:
    name: str
    kind: MemberKind
    getter: Getter

    def read(self, obj: Any) -> Any:
        return self.getter(obj)


@dataclass(frozen=True)
class MemberTable:
    """Readable members of one source object, split by kind."""

    properties: Mapping[str, Getter] = field(default_factory=dict)
    fields: Mapping[str, Getter] = field(default_factory=dict)

    def lookup(self, name: str, kind: Optional[MemberKind] = None) -> Optional[MemberAccessor]:
        """Resolve ``name``; without ``kind`` a property wins over a field."""
        if kind in (None, MemberKind.PROPERTY):
            getter = self.properties.get(name)
            if getter is not None:
                return MemberAccessor(name, MemberKind.PROPERTY, getter)
        if kind in (None, MemberKind.FIELD):
            getter = self.fields.get(name)
            if getter is not None:
                return MemberAccessor(name, MemberKind.FIELD, getter)
        return None

    def accessors(self) -> Iterator[MemberAccessor]:
        """Yield every property, then every field."""
        for name, getter in self.properties.items():
            yield MemberAccessor(name, MemberKind.PROPERTY, getter)
        for name, getter in self.fields.items():
            yield MemberAccessor(name, MemberKind.FIELD, getter)


def is_public(name: Any) -> bool:
    return isinstance(name, str) and bool(name) and not name.startswith("_")


@lru_cache(maxsize=_CLASS_CACHE_SIZE)
def declared_properties(cls: type) -> tuple[tuple[str, ...], frozenset[str]]:
    """Return (property names, cached_property names) declared along the MRO."""
    seen: set[str] = set()
    properties: list[str] = []
    cached: set[str] = set()
    for klass in cls.__mro__:
        for name, attr in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            if not is_public(name):
                continue
            if isinstance(attr, property):
                if attr.fget is not None:
                    properties.append(name)
            elif isinstance(attr, cached_property):
                properties.append(name)
                cached.add(name)
    return tuple(properties), frozenset(cached)


def _slot_names(cls: type) -> list[str]:
    names: list[str] = []
    for klass in reversed(cls.__mro__):
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if is_public(name) and name not in names:
                names.append(name)
    return names


def _attribute_getter(name: str) -> Getter:
    def _get(obj: Any) -> Any:
        return getattr(obj, name)

    return _get


def state_getter(name: str) -> Getter:
    # Instance state first, so a field stays readable when a property shadows it.
    def _get(obj: Any) -> Any:
        state = getattr(obj, "__dict__", None)
        if state is not None and name in state:
            return state[name]
        return getattr(obj, name)

    return _get


def _item_getter(key: str) -> Getter:
    def _get(obj: Mapping[str, Any]) -> Any:
        return obj[key]

    return _get


def _has_value(obj: Any, name: str) -> bool:
    state = getattr(obj, "__dict__", None)
    if state is not None and name in state:
        return True
    return getattr(obj, name, _MISSING) is not _MISSING


def _is_named_tuple(obj: Any) -> bool:
    return isinstance(obj, tuple) and isinstance(getattr(type(obj), "_fields", None), tuple)


def introspect(obj: Any) -> MemberTable:
    """Build the member table for ``obj`` from its class and instance state."""
    if isinstance(obj, Mapping):
        return MemberTable(
            fields={
                key: _item_getter(key)
                for key in obj.keys()
                if isinstance(key, str) and key
            },
        )

    cls = type(obj)
    property_names, cached = declared_properties(cls)
    properties = {name: _attribute_getter(name) for name in property_names}
    if _is_named_tuple(obj):
        return MemberTable(
            properties=properties,
            fields={name: _attribute_getter(name) for name in cls._fields},
        )

    fields: dict[str, Getter] = {}
    if dataclasses.is_dataclass(obj):
        for dc_field in dataclasses.fields(obj):
            name = dc_field.name
            if is_public(name) and _has_value(obj, name):
                fields[name] = state_getter(name)
    for name in _slot_names(cls):
        if name not in fields and _has_value(obj, name):
            fields[name] = _attribute_getter(name)
    state = getattr(obj, "__dict__", None)
    if isinstance(state, Mapping):
        for name in state:
            if name in fields or name in cached or not is_public(name):
                continue
            fields[name] = state_getter(name)

    return MemberTable(properties=properties, fields=fields)
