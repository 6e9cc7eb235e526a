"""Project selected members of Python objects into flat mappings."""

from objectprojector.domain.behavior import IncludeBehavior, NullValueBehavior
from objectprojector.domain.projection import Projection, merge_projection
from objectprojector.errors import MemberNotFoundError, NullSourceError, ProjectionError
from objectprojector.members.introspection import MemberKind, MemberTable, introspect
from objectprojector.members.registry import MemberRegistry, default_registry
from objectprojector.projector import Projector, create_projection

__all__ = [
    "IncludeBehavior",
    "MemberKind",
    "MemberNotFoundError",
    "MemberRegistry",
    "MemberTable",
    "NullSourceError",
    "NullValueBehavior",
    "Projection",
    "ProjectionError",
    "Projector",
    "create_projection",
    "default_registry",
    "introspect",
    "merge_projection",
]
