"""
Rel target language: AST and text emission.
"""

from .ast import (
    Atom,
    Clause,
    Conjunction,
    Formula,
    Functional,
    Implication,
    IntegrityConstraint,
    Predicate,
    Relation,
    RelType,
    Unsupported,
    bind_role,
    first_occurrence,
    fresh_variables,
)
from .emitter import emit_clause, emit_formula, emit_section

__all__ = [
    "Atom",
    "Clause",
    "Conjunction",
    "Formula",
    "Functional",
    "Implication",
    "IntegrityConstraint",
    "Predicate",
    "Relation",
    "RelType",
    "Unsupported",
    "bind_role",
    "first_occurrence",
    "fresh_variables",
    "emit_clause",
    "emit_formula",
    "emit_section",
]
