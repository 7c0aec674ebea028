"""
Deterministic text emission for the Rel AST.
"""

from ormrel.exceptions import EmissionError

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
)


def relation_name(relation: Relation) -> str:
    if isinstance(relation, (Predicate, RelType)):
        return relation.name
    raise EmissionError(f"Unknown relation variant: {type(relation).__name__}")


def param_seq(params) -> str:
    if not params:
        raise EmissionError("Cannot currently emit code for relations with no columns")
    return ", ".join(str(p) for p in params)


def emit_formula(formula: Formula) -> str:
    if isinstance(formula, Atom):
        return f"{relation_name(formula.relation)}({param_seq(formula.args)})"
    if isinstance(formula, Implication):
        return (
            f"{emit_formula(formula.antecedent)} implies "
            f"{emit_formula(formula.consequent)}"
        )
    if isinstance(formula, Conjunction):
        return " and ".join(emit_formula(f) for f in formula.conjuncts)
    if isinstance(formula, Functional):
        return f"function({relation_name(formula.relation)})"
    raise EmissionError(f"Unknown formula variant: {type(formula).__name__}")


def emit_clause(clause: Clause) -> str:
    if isinstance(clause, IntegrityConstraint):
        head = (
            f"{clause.name}({param_seq(clause.variables)})"
            if clause.variables
            else clause.name
        )
        return f"ic {head} {{ {emit_formula(clause.body)} }}"
    if isinstance(clause, Unsupported):
        return f"// Error: {clause.message}"
    raise EmissionError(f"Unknown clause variant: {type(clause).__name__}")


def emit_section(header: str, clauses) -> list[str]:
    """Comment header followed by one line per clause"""
    return [f"// {header}", *(emit_clause(c) for c in clauses)]
