"""Declarative projection rules, typically loaded from YAML.

Example::

    include_behavior: include_all
    null_values: include_nulls
    exclude:
      members: [Salt, PasswordHash]
    rename:
      UserId: id
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator, model_validator

from objectprojector.domain.behavior import (
    IncludeBehavior,
    NullValueBehavior,
    coerce_behavior,
)
from objectprojector.projector import Projector
from objectprojector.utils.load import load_yaml


def _require_name(value: str) -> str:
    text = value.strip()
    if not text:
        raise ValueError("member names must be non-empty strings")
    return text


class NameSets(BaseModel):
    """Member, property and field names for one side (include or exclude)."""

    model_config = ConfigDict(extra="forbid")

    members: List[str] = Field(default_factory=list)
    properties: List[str] = Field(default_factory=list)
    fields: List[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _coerce_shorthand(cls, value: Any) -> Any:
        """Accept null as empty and a bare list as member names."""
        if value is None:
            return {}
        if isinstance(value, (list, tuple, str)):
            return {"members": value}
        return value

    @field_validator("members", "properties", "fields", mode="before")
    @classmethod
    def _coerce_names(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("members", "properties", "fields")
    @classmethod
    def _validate_names(cls, value: List[str]) -> List[str]:
        return [_require_name(name) for name in value]

    def is_empty(self) -> bool:
        return not (self.members or self.properties or self.fields)


class ProjectionRules(BaseModel):
    model_config = ConfigDict(extra="forbid")

    include_behavior: IncludeBehavior = IncludeBehavior.INCLUDE_NONE
    null_values: NullValueBehavior = NullValueBehavior.EXCLUDE_NULLS
    include: NameSets = Field(default_factory=NameSets)
    exclude: NameSets = Field(default_factory=NameSets)
    rename: Dict[str, str] = Field(default_factory=dict)

    @field_validator("include_behavior", mode="before")
    @classmethod
    def _normalize_include_behavior(cls, value: Any) -> Any:
        if value is None:
            return IncludeBehavior.INCLUDE_NONE
        return coerce_behavior(IncludeBehavior, value)

    @field_validator("null_values", mode="before")
    @classmethod
    def _normalize_null_values(cls, value: Any) -> Any:
        if value is None:
            return NullValueBehavior.EXCLUDE_NULLS
        return coerce_behavior(NullValueBehavior, value)

    @field_validator("include", "exclude", mode="before")
    @classmethod
    def _allow_empty_sets(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("rename", mode="before")
    @classmethod
    def _allow_empty_rename(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("rename")
    @classmethod
    def _validate_rename(cls, value: Dict[str, str]) -> Dict[str, str]:
        return {_require_name(name): _require_name(output) for name, output in value.items()}

    def apply_to(self, projector: Projector) -> Projector:
        """Register every rule on ``projector`` (rules accumulate) and return it."""
        projector.include_behavior = self.include_behavior
        projector.null_value_behavior = self.null_values
        projector.include_members(self.include.members)
        projector.include_properties(self.include.properties)
        projector.include_fields(self.include.fields)
        projector.exclude_members(self.exclude.members)
        projector.exclude_properties(self.exclude.properties)
        projector.exclude_fields(self.exclude.fields)
        for name, output_name in self.rename.items():
            projector.rename_as(name, output_name)
        return projector

    def build_projector(self, source: Any = None) -> Projector:
        return Projector.from_rules(self, source)


class ProjectionCatalog(RootModel[Dict[str, ProjectionRules]]):
    """Named projection rules, e.g. ``public_user`` / ``admin_user``."""

    @model_validator(mode="before")
    @classmethod
    def allow_empty(cls, value: Any) -> Any:
        if value is None:
            return {}
        return value

    def names(self) -> List[str]:
        return list(self.root)

    def rules(self, name: str) -> ProjectionRules:
        try:
            return self.root[name]
        except KeyError:
            available = ", ".join(sorted(self.root)) or "(none)"
            raise KeyError(
                f"Unknown projection {name!r}. Available: {available}"
            ) from None

    def projector(self, name: str, source: Optional[Any] = None) -> Projector:
        return self.rules(name).build_projector(source)


def load_projection_rules(path: Union[str, Path]) -> ProjectionRules:
    return ProjectionRules.model_validate(load_yaml(path))


def load_projection_catalog(path: Union[str, Path]) -> ProjectionCatalog:
    return ProjectionCatalog.model_validate(load_yaml(path))
