from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from pydantic import BaseModel

from objectprojector.members.introspection import (
    Getter,
    MemberTable,
    declared_properties,
    state_getter,
    introspect,
    is_public,
)

logger = logging.getLogger(__name__)

# Adapter builds the member table for one source object.
MemberAdapter = Callable[[Any], MemberTable]


class MemberRegistry:
    """Resolve member tables per source type, falling back to introspection.

    The nearest registered class along ``type(obj).__mro__`` wins.
    """

    def __init__(
        self,
        adapters: Optional[Mapping[type, MemberAdapter]] = None,
        *,
        fallback: MemberAdapter = introspect,
    ) -> None:
        self._adapters: dict[type, MemberAdapter] = dict(adapters or {})
        self._fallback = fallback

    def register_adapter(self, cls: type, adapter: MemberAdapter) -> None:
        self._adapters[cls] = adapter
        logger.debug("Registered member adapter for %s", cls.__qualname__)

    def register(
        self,
        cls: type,
        *,
        properties: Optional[Mapping[str, Getter]] = None,
        fields: Optional[Mapping[str, Getter]] = None,
    ) -> None:
        """Register a fixed set of accessors for instances of ``cls``."""
        table = MemberTable(
            properties=dict(properties or {}),
            fields=dict(fields or {}),
        )
        self.register_adapter(cls, lambda _obj: table)

    def unregister(self, cls: type) -> None:
        self._adapters.pop(cls, None)

    def adapter_for(self, cls: type) -> MemberAdapter:
        for klass in cls.__mro__:
            adapter = self._adapters.get(klass)
            if adapter is not None:
                return adapter
        return self._fallback

    def members_for(self, obj: Any) -> MemberTable:
        return self.adapter_for(type(obj))(obj)

    def __call__(self, obj: Any) -> MemberTable:
        return self.members_for(obj)


def pydantic_members(model: BaseModel) -> MemberTable:
    """Members of a pydantic model: declared fields, extras and user properties."""
    cls = type(model)
    base_properties, _ = declared_properties(BaseModel)
    properties = {
        name: getter
        for name, getter in introspect(model).properties.items()
        if name not in base_properties
    }
    fields: dict[str, Getter] = {
        name: state_getter(name) for name in cls.model_fields if is_public(name)
    }
    for name in model.model_extra or {}:
        if is_public(name) and name not in fields:
            fields[name] = state_getter(name)
    return MemberTable(properties=properties, fields=fields)


_DEFAULT_REGISTRY: Optional[MemberRegistry] = None


def default_registry() -> MemberRegistry:
    """Return the process-wide registry used by projectors without ``members=``."""
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        registry = MemberRegistry()
        registry.register_adapter(BaseModel, pydantic_members)
        _DEFAULT_REGISTRY = registry
    return _DEFAULT_REGISTRY
