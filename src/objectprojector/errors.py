from __future__ import annotations

from typing import Optional

from objectprojector.members.introspection import MemberKind


class ProjectionError(Exception):
    """Base class for errors raised while building projections."""


class MemberNotFoundError(ProjectionError, AttributeError):
    """Raised when an explicitly included name does not resolve on the source."""

    def __init__(
        self,
        name: str,
        source_type: type,
        kind: Optional[MemberKind] = None,
    ) -> None:
        label = "member" if kind is None else kind.value
        super().__init__(
            f"{source_type.__name__} has no readable {label} named {name!r}"
        )
        # AttributeError.__init__ resets ``name``; assign after it.
        self.name = name
        self.source_type = source_type
        self.kind = kind


class NullSourceError(ProjectionError, ValueError):
    """Raised when a projection is requested without a source object."""

    def __init__(self, message: str = "projector has no source object") -> None:
        super().__init__(message)
