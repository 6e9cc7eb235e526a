from __future__ import annotations

from enum import Enum


class IncludeBehavior(str, Enum):
    """How a projector decides whether a member belongs in a projection."""

    # Nothing is projected unless explicitly included.
    INCLUDE_NONE = "include_none"
    # Everything is projected unless explicitly excluded.
    INCLUDE_ALL = "include_all"


class NullValueBehavior(str, Enum):
    """How a projector treats members whose value is None."""

    # Skip the member; the key is absent from the projection.
    EXCLUDE_NULLS = "exclude_nulls"
    # Keep the key and map it to None.
    INCLUDE_NULLS = "include_nulls"


def coerce_behavior(enum_cls, value):
    """Return ``value`` as a member of ``enum_cls``, accepting its string value."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        try:
            return enum_cls(text)
        except ValueError:
            pass
    choices = ", ".join(member.value for member in enum_cls)
    raise ValueError(f"{enum_cls.__name__} must be one of {choices}, got {value!r}")
