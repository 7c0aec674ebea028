"""
Synthesis of Rel integrity constraints for the relations of a fact type.

For each relation determined by a fact type, and for each ORM constraint that
pertains to the roles of that relation, an integrity constraint is generated.
Clause names follow fixed templates so regenerated output diffs cleanly:

- ``{pred}_types``
- ``{type}_mandatory_in_{pred}``
- ``{pred}_many_one``
- ``{pred}_subset``
"""

from typing import Optional

from loguru import logger

from ormrel.diagnostics import DiagnosticCode, Diagnostics
from ormrel.orm.models import FactType, MandatoryConstraint, ORMModel
from ormrel.rel.ast import (
    Atom,
    Clause,
    Conjunction,
    Functional,
    Implication,
    IntegrityConstraint,
    Predicate,
    Unsupported,
    bind_role,
    first_occurrence,
    fresh_variables,
)

from .naming import role_type
from .relations import match_reference_mode, reference_mode_relations, relations_for


def is_unary_relation(predicate: Predicate, model: ORMModel) -> bool:
    """A single key column whose value column is an implicit boolean role"""
    return (
        len(predicate.key_role_ids) == 1
        and len(predicate.value_role_ids) > 0
        and model.is_implicit_boolean(predicate.value_role_ids[0])
    )


def type_constraint(predicate: Predicate, model: ORMModel) -> IntegrityConstraint:
    variables = fresh_variables(len(predicate.role_ids))
    conjuncts = tuple(
        Atom(role_type(role_id, model), (var,))
        for role_id, var in zip(predicate.role_ids, variables)
    )
    return IntegrityConstraint(
        f"{predicate.name}_types",
        variables,
        Implication(Atom(predicate, variables), Conjunction(conjuncts)),
    )


def subset_constraint(predicate: Predicate, model: ORMModel) -> IntegrityConstraint:
    key_type = role_type(predicate.key_role_ids[0], model)
    return IntegrityConstraint(
        f"{predicate.name}_subset",
        (),
        Implication(Atom(predicate, ("v",)), Atom(key_type, ("v",))),
    )


def mandatory_constraint(
    mc: MandatoryConstraint, predicate: Predicate, model: ORMModel
) -> Optional[IntegrityConstraint]:
    """
    Requires every instance of the role player to appear in the column of
    the first predicate role covered by the MC. Returns None when the
    predicate has no such column.
    """
    var = "v"
    role_id = first_occurrence(mc.role_ids, predicate)
    if role_id is None:
        return None

    player_type = role_type(role_id, model)
    return IntegrityConstraint(
        f"{player_type.name.lower()}_mandatory_in_{predicate.name}",
        (var,),
        Implication(Atom(player_type, (var,)), bind_role(predicate, role_id, var)),
    )


def many_one_constraint(uc_id: str, predicate: Predicate) -> Clause:
    # A UC over exactly the key roles of the predicate is expressed by
    # declaring the predicate functional
    if predicate.uc_id == uc_id:
        return IntegrityConstraint(
            f"{predicate.name}_many_one", (), Functional(predicate)
        )
    return Unsupported(
        "TBD: Many to one constraint for non-generating uniqueness constraint "
        f"of relation {predicate.name}"
    )


def fact_type_constraints(
    fact_type: FactType, model: ORMModel, diagnostics: Diagnostics
) -> list[Clause]:
    """
    All clauses for the relations modeled by a fact type, in emission order.

    Relation-level clauses (functional or subset) come first, followed by the
    type and mandatory constraints of each relation.
    """
    relations: list[Predicate] = []
    clauses: list[Clause] = []

    pattern = match_reference_mode(fact_type, model)
    if pattern is not None:
        logger.debug(
            f"Fact type {fact_type.name}: reference mode of {pattern.entity.name}"
        )
        refmode = reference_mode_relations(pattern, model)
        relations.extend([refmode.forward, refmode.inverse])
        clauses.append(many_one_constraint(pattern.identifier_uc_id, refmode.inverse))
        clauses.append(many_one_constraint(pattern.entity_uc_id, refmode.forward))
    else:
        for predicate in relations_for(fact_type, model, diagnostics):
            relations.append(predicate)
            if is_unary_relation(predicate, model):
                clauses.append(subset_constraint(predicate, model))
            else:
                clauses.extend(
                    many_one_constraint(uc_id, predicate)
                    for uc_id in fact_type.uniqueness_ids
                )

    mandatory = model.mandatory_constraints_of(fact_type)
    for predicate in relations:
        if not is_unary_relation(predicate, model):
            clauses.append(type_constraint(predicate, model))
        for mc in mandatory:
            clause = mandatory_constraint(mc, predicate, model)
            if clause is None:
                diagnostics.warn(
                    DiagnosticCode.UNBOUND_MANDATORY_ROLE,
                    f"Mandatory constraint {mc.id} covers no column of relation "
                    f"{predicate.name} in fact type {fact_type.name}",
                    mc.id,
                )
                continue
            clauses.append(clause)
    return clauses
