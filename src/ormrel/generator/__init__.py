"""
ORM to Rel constraint generation.

This module provides:
- Naming and data type inference helpers
- Relation inference for fact types (reference modes, named roles)
- Integrity constraint synthesis per fact type and per concept hierarchy
- The per-diagram driver that renders and writes .rel files
"""

from .constraints import (
    fact_type_constraints,
    many_one_constraint,
    mandatory_constraint,
    subset_constraint,
    type_constraint,
)
from .driver import (
    CONCEPT_NAME_PATTERN,
    GenerationResult,
    RelArtifact,
    SchemaGenerator,
    central_concept,
    concept_token,
    generate,
    resolve_central_concept,
    write_artifacts,
)
from .hierarchy import SubtypeHierarchyWalker, entity_type_constraints
from .naming import infer_primitive, reference_mode_token, role_type, to_snake_case
from .relations import (
    ReferenceModePattern,
    ReferenceModeRelations,
    match_reference_mode,
    reference_mode_relations,
    relations_for,
)

__all__ = [
    "fact_type_constraints",
    "many_one_constraint",
    "mandatory_constraint",
    "subset_constraint",
    "type_constraint",
    "CONCEPT_NAME_PATTERN",
    "GenerationResult",
    "RelArtifact",
    "SchemaGenerator",
    "central_concept",
    "concept_token",
    "generate",
    "resolve_central_concept",
    "write_artifacts",
    "SubtypeHierarchyWalker",
    "entity_type_constraints",
    "infer_primitive",
    "reference_mode_token",
    "role_type",
    "to_snake_case",
    "ReferenceModePattern",
    "ReferenceModeRelations",
    "match_reference_mode",
    "reference_mode_relations",
    "relations_for",
]
