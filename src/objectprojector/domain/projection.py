from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any, Dict

# Flat, insertion-ordered key -> value mapping handed to a serializer.
Projection = Dict[str, Any]


def merge_projection(
    projection: Mapping[str, Any],
    target: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Copy every key of ``projection`` into ``target``.

    Colliding keys are overwritten; keys only present in ``target`` are kept.
    """
    for key, value in projection.items():
        target[key] = value
    return target
