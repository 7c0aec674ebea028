"""Tests for relation inference and the reference mode recognizer."""

import pytest

from ormrel.diagnostics import DiagnosticCode
from ormrel.generator.relations import (
    is_reference_mode_fact_type,
    match_reference_mode,
    reference_mode_relations,
    relations_for,
)
from ormrel.orm import (
    FactType,
    MandatoryConstraint,
    ObjectKind,
    ObjectType,
    ORMModel,
    Role,
    UniquenessConstraint,
)


def binary_model(
    uc_roles,
    mc_roles=(),
    role_names=("", ""),
    implicit_boolean=False,
    identifier_uc=None,
):
    """Order(_E) -- OrderHasTotal -- Total(_V) with the given constraints"""
    ucs = [
        UniquenessConstraint(
            id=f"_UC{i}",
            role_ids=roles,
            preferred_identifier_for="_E" if i == identifier_uc else None,
            order=i,
        )
        for i, roles in enumerate(uc_roles)
    ]
    mcs = [
        MandatoryConstraint(id=f"_MC{i}", role_ids=roles, order=i)
        for i, roles in enumerate(mc_roles)
    ]
    fact_type = FactType(
        id="_F",
        name="OrderHasTotal",
        roles=(
            Role("_RE", "_F", "_E", role_names[0]),
            Role("_RV", "_F", "_V", role_names[1]),
        ),
        uniqueness_ids=tuple(uc.id for uc in ucs),
        mandatory_ids=tuple(mc.id for mc in mcs),
    )
    objects = [
        ObjectType(id="_E", name="Order", kind=ObjectKind.ENTITY),
        ObjectType(
            id="_V",
            name="Total",
            kind=ObjectKind.VALUE,
            order=1,
            is_implicit_boolean=implicit_boolean,
        ),
    ]
    model = ORMModel(
        objects=objects,
        fact_types=[fact_type],
        uniqueness_constraints=ucs,
        mandatory_constraints=mcs,
    )
    return model, fact_type


class TestReferenceMode:
    def test_identifying_fact_types_match(self, orm_model, fact_type):
        pattern = match_reference_mode(fact_type("PersonHasPersonId"), orm_model)
        assert pattern.entity.name == "Person"
        assert pattern.entity_role.id == "_R7"
        assert pattern.identifier_role.id == "_R8"
        assert pattern.entity_uc_id == "_UC_PI1"
        assert pattern.identifier_uc_id == "_UC_PI2"

    @pytest.mark.parametrize(
        "name", ["EventHasEventDate", "EventIsCancelled", "PersonHasBadgeNumber"]
    )
    def test_other_fact_types_do_not_match(self, orm_model, fact_type, name):
        assert not is_reference_mode_fact_type(fact_type(name), orm_model)

    def test_requires_mandatory_entity_role(self):
        model, ft = binary_model(
            [("_RE",), ("_RV",)], mc_roles=[("_RE",)], identifier_uc=1
        )
        assert match_reference_mode(ft, model).entity.name == "Order"

        model, ft = binary_model([("_RE",), ("_RV",)], identifier_uc=1)
        assert match_reference_mode(ft, model) is None

    def test_identifier_uc_must_span_the_value_role(self):
        model, ft = binary_model(
            [("_RV",), ("_RE",)], mc_roles=[("_RE",)], identifier_uc=1
        )
        assert match_reference_mode(ft, model) is None

    def test_predicates_use_reference_mode(self, orm_model, fact_type):
        pattern = match_reference_mode(fact_type("PersonHasPersonId"), orm_model)
        relations = reference_mode_relations(pattern, orm_model)

        assert relations.forward.name == "person_id"
        assert relations.forward.key_role_ids == ("_R7",)
        assert relations.forward.value_role_ids == ("_R8",)
        assert relations.forward.uc_id == "_UC_PI1"

        assert relations.inverse.name == "id_to_person"
        assert relations.inverse.key_role_ids == ("_R8",)
        assert relations.inverse.value_role_ids == ("_R7",)
        assert relations.inverse.uc_id == "_UC_PI2"

    def test_predicates_fall_back_to_identifier_name(self, orm_model, fact_type):
        pattern = match_reference_mode(fact_type("EventHasEventCode"), orm_model)
        relations = reference_mode_relations(pattern, orm_model)
        assert relations.forward.name == "event_event_code"
        assert relations.inverse.name == "event_code_to_event"


class TestRelationsFor:
    def test_system_named_relation(self, diagnostics):
        model, ft = binary_model([("_RE",)])
        [predicate] = relations_for(ft, model, diagnostics)
        assert predicate.name == "order_has_total"
        assert predicate.key_role_ids == ("_RE",)
        assert predicate.value_role_ids == ("_RV",)
        assert predicate.uc_id == "_UC0"
        assert len(diagnostics) == 0

    def test_spanning_uc_has_no_value_columns(self, diagnostics):
        model, ft = binary_model([("_RE", "_RV")])
        [predicate] = relations_for(ft, model, diagnostics)
        assert predicate.key_role_ids == ("_RE", "_RV")
        assert predicate.value_role_ids == ()

    def test_ambiguous_fact_type(self, diagnostics):
        model, ft = binary_model([("_RE",), ("_RV",)])
        assert relations_for(ft, model, diagnostics) == []
        [warning] = diagnostics.warnings
        assert warning.code == DiagnosticCode.AMBIGUOUS_FACT_TYPE
        assert "more than one UC" in warning.message

    def test_fact_type_without_uniqueness(self, diagnostics):
        model, ft = binary_model([])
        assert relations_for(ft, model, diagnostics) == []
        assert diagnostics.by_code(DiagnosticCode.MISSING_UNIQUENESS)

    def test_user_named_relations(self, diagnostics):
        model, ft = binary_model([("_RE",), ("_RV",)], role_names=("order", "total"))
        relations = relations_for(ft, model, diagnostics)
        assert [(p.name, p.key_role_ids, p.value_role_ids) for p in relations] == [
            ("order", ("_RV",), ("_RE",)),
            ("total", ("_RE",), ("_RV",)),
        ]
        assert len(diagnostics) == 0

    def test_named_role_without_key(self, diagnostics):
        model, ft = binary_model([("_RE",)], role_names=("order", ""))
        # The only UC spans the named role
        assert relations_for(ft, model, diagnostics) == []
        [warning] = diagnostics.warnings
        assert warning.code == DiagnosticCode.UNKEYED_NAMED_ROLE
        assert warning.element_id == "_RE"

    def test_named_boolean_role_is_not_reported(self, diagnostics):
        model, ft = binary_model(
            [("_RE",)], role_names=("", "is_paid"), implicit_boolean=True
        )
        [predicate] = relations_for(ft, model, diagnostics)
        assert predicate.name == "is_paid"
        model, ft = binary_model(
            [("_RE",)], role_names=("order", ""), implicit_boolean=True
        )
        assert relations_for(ft, model, diagnostics) == []
        assert len(diagnostics) == 0
