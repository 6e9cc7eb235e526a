from .rules import (
    NameSets,
    ProjectionCatalog,
    ProjectionRules,
    load_projection_catalog,
    load_projection_rules,
)

__all__ = [
    "NameSets",
    "ProjectionCatalog",
    "ProjectionRules",
    "load_projection_catalog",
    "load_projection_rules",
]
