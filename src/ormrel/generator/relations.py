"""
Inference of the Rel relations a fact type gives rise to.

Roles of an ORM fact type are unordered, while the columns of a Rel relation
are not. The internal uniqueness constraints of a fact type fix the column
order: the roles a UC spans become the key columns and the remaining roles
the value columns. When a fact type has non-spanning UCs we often need to
associate a UC with the role it does not span and vice versa.
"""

from dataclasses import dataclass
from typing import Optional

from loguru import logger

from ormrel.diagnostics import DiagnosticCode, Diagnostics
from ormrel.orm.models import FactType, ObjectType, ORMModel, Role
from ormrel.rel.ast import Predicate

from .naming import reference_mode_token, role_player_name, to_snake_case


@dataclass(frozen=True)
class ReferenceModePattern:
    """The roles and UCs of a fact type that identifies an entity type"""

    entity: ObjectType
    entity_role: Role
    identifier_role: Role
    entity_uc_id: str  # spans the entity role
    identifier_uc_id: str  # preferred identifier, spans the identifier role


@dataclass(frozen=True)
class ReferenceModeRelations:
    forward: Predicate  # entity -> identifier value
    inverse: Predicate  # identifier value -> entity


def match_reference_mode(
    fact_type: FactType, model: ORMModel
) -> Optional[ReferenceModePattern]:
    """
    Recognizes a fact type that provides the preferred identifier of an entity.

    The fact type must have two roles and two UCs over one distinct role each.
    One UC is the preferred identifier of an entity type E and spans the role
    *not* played by E; the other role must be played by E and be mandatory.
    """
    if len(fact_type.roles) != 2 or len(fact_type.uniqueness_ids) != 2:
        return None

    for uc_id in fact_type.uniqueness_ids:
        entity = model.entity_identified_by(uc_id)
        if entity is None:
            continue
        identifier_role_id = model.lone_role_of(uc_id)
        if identifier_role_id is None:
            continue

        for role in fact_type.roles:
            if role.id == identifier_role_id:
                continue
            player = model.entity_that_plays(role.id)
            if player is None or player.id != entity.id:
                continue

            other_uc_id = next(u for u in fact_type.uniqueness_ids if u != uc_id)
            if model.lone_role_of(other_uc_id) != role.id:
                continue
            if not any(
                model.lone_role_of(mc_id) == role.id
                for mc_id in fact_type.mandatory_ids
            ):
                continue

            return ReferenceModePattern(
                entity=entity,
                entity_role=role,
                identifier_role=fact_type.role(identifier_role_id),
                entity_uc_id=other_uc_id,
                identifier_uc_id=uc_id,
            )
    return None


def is_reference_mode_fact_type(fact_type: FactType, model: ORMModel) -> bool:
    return match_reference_mode(fact_type, model) is not None


def _identifier_label(pattern: ReferenceModePattern, model: ORMModel) -> str:
    return reference_mode_token(pattern.entity) or role_player_name(
        pattern.identifier_role.id, model
    )


def reference_mode_relations(
    pattern: ReferenceModePattern, model: ORMModel
) -> ReferenceModeRelations:
    """
    Builds the refmode predicate (entity to identifier) and its inverse
    (identifier to entity). Explicit role names take precedence over the
    generated ones.
    """
    entity_name = to_snake_case(pattern.entity.name)

    forward_name = pattern.identifier_role.name or (
        f"{entity_name}_{_identifier_label(pattern, model)}"
    )
    inverse_name = pattern.entity_role.name or (
        f"{_identifier_label(pattern, model)}_to_{entity_name}"
    )

    forward = Predicate(
        forward_name,
        pattern.entity_uc_id,
        (pattern.entity_role.id,),
        (pattern.identifier_role.id,),
    )
    inverse = Predicate(
        inverse_name,
        pattern.identifier_uc_id,
        (pattern.identifier_role.id,),
        (pattern.entity_role.id,),
    )
    return ReferenceModeRelations(forward=forward, inverse=inverse)


def user_named_relations(
    fact_type: FactType, model: ORMModel, diagnostics: Diagnostics
) -> list[Predicate]:
    """
    Relations designated by role names: each named role becomes the value
    column of a relation keyed by the UC that does not span it.
    """
    relations = []
    is_unary = any(model.is_implicit_boolean(r) for r in fact_type.role_ids)
    for role in fact_type.roles:
        if not role.name:
            continue
        key_uc = model.uniqueness_excluding_role(role.id, fact_type)
        if key_uc is None:
            # The implicit boolean role of a unary fact type is never
            # independently keyed
            if not is_unary:
                diagnostics.warn(
                    DiagnosticCode.UNKEYED_NAMED_ROLE,
                    f"Cannot generate relation for role with name {role.name} "
                    f"in fact type {fact_type.name} because model lacks a "
                    "non-spanning UC that excludes this role.",
                    role.id,
                )
            continue
        relations.append(Predicate(role.name, key_uc.id, key_uc.role_ids, (role.id,)))
    return relations


def system_named_relations(
    fact_type: FactType, model: ORMModel, diagnostics: Diagnostics
) -> list[Predicate]:
    """Relation named after the fact type, keyed by its only UC"""
    ucs = model.uniqueness_constraints_of(fact_type)
    if len(ucs) > 1:
        diagnostics.warn(
            DiagnosticCode.AMBIGUOUS_FACT_TYPE,
            f"Cannot generate relations for fact type '{fact_type.name}' because "
            "there is more than one UC and none of the roles are named.",
            fact_type.id,
        )
        return []
    if not ucs:
        diagnostics.warn(
            DiagnosticCode.MISSING_UNIQUENESS,
            f"Cannot generate relations for fact type '{fact_type.name}' because "
            "it has no uniqueness constraint.",
            fact_type.id,
        )
        return []

    uc = ucs[0]
    return [
        Predicate(
            to_snake_case(fact_type.name),
            uc.id,
            uc.role_ids,
            model.roles_excluded_by(uc, fact_type),
        )
    ]


def relations_for(
    fact_type: FactType, model: ORMModel, diagnostics: Diagnostics
) -> list[Predicate]:
    """Relations of a fact type that is not a reference mode pattern"""
    if fact_type.has_named_roles:
        logger.debug(f"Fact type {fact_type.name}: user-named relations")
        return user_named_relations(fact_type, model, diagnostics)
    logger.debug(f"Fact type {fact_type.name}: system-named relation")
    return system_named_relations(fact_type, model, diagnostics)
