"""Project selected members of an object into a flat mapping.

A projection is the last step before handing data to a serializer that accepts
plain mappings: it trims members that are not needed or must not leave the
process, and optionally renames the ones that remain.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, MutableMapping
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from objectprojector.domain.behavior import (
    IncludeBehavior,
    NullValueBehavior,
    coerce_behavior,
)
from objectprojector.domain.projection import Projection, merge_projection
from objectprojector.errors import MemberNotFoundError, NullSourceError
from objectprojector.members.introspection import MemberAccessor, MemberKind, MemberTable
from objectprojector.members.registry import default_registry

if TYPE_CHECKING:
    from objectprojector.config.rules import ProjectionRules

logger = logging.getLogger(__name__)

MemberSource = Callable[[Any], MemberTable]
Names = Union[str, Iterable[str]]


def _as_names(names: Names) -> list[str]:
    if isinstance(names, str):
        return [names]
    return list(names)


class Projector:
    """Holds member-selection rules and builds projections from source objects.

    Rules accumulate through the ``include_*``/``exclude_*``/``rename_as`` calls
    and are never consumed, so one projector can be reused for many sources.
    Instances are not synchronized; configure them from a single thread.
    """

    def __init__(
        self,
        source: Any = None,
        *,
        members: Optional[MemberSource] = None,
    ) -> None:
        self._source = source
        self._members: MemberSource = members or default_registry()
        self._include_behavior = IncludeBehavior.INCLUDE_NONE
        self._null_value_behavior = NullValueBehavior.EXCLUDE_NULLS

        # Ordered sets (dict keys) so projections come out in registration order.
        self._included_member_names: dict[str, None] = {}
        self._excluded_member_names: dict[str, None] = {}
        self._included_property_names: dict[str, None] = {}
        self._excluded_property_names: dict[str, None] = {}
        self._included_field_names: dict[str, None] = {}
        self._excluded_field_names: dict[str, None] = {}
        self._rename_map: dict[str, str] = {}

    @classmethod
    def from_rules(cls, rules: "ProjectionRules", source: Any = None) -> "Projector":
        projector = cls(source)
        rules.apply_to(projector)
        return projector

    # -- policy -----------------------------------------------------------

    @property
    def source(self) -> Any:
        return self._source

    @source.setter
    def source(self, value: Any) -> None:
        self._source = value

    @property
    def include_behavior(self) -> IncludeBehavior:
        return self._include_behavior

    @include_behavior.setter
    def include_behavior(self, value: Union[IncludeBehavior, str]) -> None:
        self._include_behavior = coerce_behavior(IncludeBehavior, value)

    @property
    def null_value_behavior(self) -> NullValueBehavior:
        return self._null_value_behavior

    @null_value_behavior.setter
    def null_value_behavior(self, value: Union[NullValueBehavior, str]) -> None:
        self._null_value_behavior = coerce_behavior(NullValueBehavior, value)

    # -- rule snapshots ---------------------------------------------------

    @property
    def included_member_names(self) -> tuple[str, ...]:
        return tuple(self._included_member_names)

    @property
    def excluded_member_names(self) -> tuple[str, ...]:
        return tuple(self._excluded_member_names)

    @property
    def included_property_names(self) -> tuple[str, ...]:
        return tuple(self._included_property_names)

    @property
    def excluded_property_names(self) -> tuple[str, ...]:
        return tuple(self._excluded_property_names)

    @property
    def included_field_names(self) -> tuple[str, ...]:
        return tuple(self._included_field_names)

    @property
    def excluded_field_names(self) -> tuple[str, ...]:
        return tuple(self._excluded_field_names)

    @property
    def rename_map(self) -> dict[str, str]:
        return dict(self._rename_map)

    # -- member rules -----------------------------------------------------

    def include(self, names: Names) -> None:
        """Include one member name or an iterable of them."""
        self.include_members(_as_names(names))

    def exclude(self, names: Names) -> None:
        """Exclude one member name or an iterable of them."""
        self.exclude_members(_as_names(names))

    def include_member(self, name: str) -> None:
        self._included_member_names[name] = None

    def exclude_member(self, name: str) -> None:
        self._excluded_member_names[name] = None

    def include_members(self, names: Iterable[str]) -> None:
        for name in names:
            self.include_member(name)

    def exclude_members(self, names: Iterable[str]) -> None:
        for name in names:
            self.exclude_member(name)

    def rename_as(self, name: str, output_name: str) -> None:
        """Emit member ``name`` under ``output_name``, whichever rule included it."""
        self._rename_map[name] = output_name

    def include_as(self, name: str, output_name: str) -> None:
        self.include_member(name)
        self.rename_as(name, output_name)

    # -- property rules ---------------------------------------------------

    def include_property(self, name: str) -> None:
        self._included_property_names[name] = None

    def exclude_property(self, name: str) -> None:
        self._excluded_property_names[name] = None

    def include_properties(self, names: Iterable[str]) -> None:
        for name in names:
            self.include_property(name)

    def exclude_properties(self, names: Iterable[str]) -> None:
        for name in names:
            self.exclude_property(name)

    # -- field rules ------------------------------------------------------

    def include_field(self, name: str) -> None:
        self._included_field_names[name] = None

    def exclude_field(self, name: str) -> None:
        self._excluded_field_names[name] = None

    def include_fields(self, names: Iterable[str]) -> None:
        for name in names:
            self.include_field(name)

    def exclude_fields(self, names: Iterable[str]) -> None:
        for name in names:
            self.exclude_field(name)

    # -- projections ------------------------------------------------------

    def create_projection(self, source_object: Any = None) -> Projection:
        """Project ``source_object``, or the configured ``source`` when omitted."""
        if source_object is None:
            source_object = self._source
        return self._project(source_object)

    def create_projections(self, source_objects: Iterable[Any]) -> list[Projection]:
        """Project each source in order; the first failure propagates."""
        return [self._project(source_object) for source_object in source_objects]

    def project_into(self, target: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
        """Merge the projection of ``source`` into ``target`` and return it."""
        return merge_projection(self.create_projection(), target)

    def _project(self, source_object: Any) -> Projection:
        if source_object is None:
            raise NullSourceError()
        if self._include_behavior is IncludeBehavior.INCLUDE_NONE:
            projection = self._create_exclusive_projection(source_object)
        else:
            projection = self._create_inclusive_projection(source_object)
        logger.debug(
            "Projected %s (%s): %d key(s)",
            type(source_object).__name__,
            self._include_behavior.value,
            len(projection),
        )
        return projection

    def _create_exclusive_projection(self, source_object: Any) -> Projection:
        # Only inclusion sets matter here; exclusions are ignored.
        members = self._members(source_object)
        projection: Projection = {}
        passes = (
            (self._included_member_names, None),
            (self._included_property_names, MemberKind.PROPERTY),
            (self._included_field_names, MemberKind.FIELD),
        )
        for names, kind in passes:
            for name in names:
                accessor = members.lookup(name, kind)
                if accessor is None:
                    raise MemberNotFoundError(name, type(source_object), kind)
                self._emit(projection, accessor, source_object)
        return projection

    def _create_inclusive_projection(self, source_object: Any) -> Projection:
        members = self._members(source_object)
        projection: Projection = {}
        for accessor in members.accessors():
            if self._is_excluded(accessor):
                continue
            self._emit(projection, accessor, source_object)
        return projection

    def _is_excluded(self, accessor: MemberAccessor) -> bool:
        if accessor.name in self._excluded_member_names:
            return True
        if accessor.kind is MemberKind.PROPERTY:
            return accessor.name in self._excluded_property_names
        return accessor.name in self._excluded_field_names

    def _emit(self, projection: Projection, accessor: MemberAccessor, source_object: Any) -> None:
        value = accessor.read(source_object)
        if value is None and self._null_value_behavior is NullValueBehavior.EXCLUDE_NULLS:
            logger.debug("Skipping null %s %r", accessor.kind.value, accessor.name)
            return
        projection[self._rename_map.get(accessor.name, accessor.name)] = value


def create_projection(source_object: Any, member_names: Names) -> Projection:
    """Project ``member_names`` of ``source_object`` with default behaviours."""
    projector = Projector()
    projector.include(member_names)
    return projector.create_projection(source_object)
