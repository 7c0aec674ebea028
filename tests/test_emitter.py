"""Tests for Rel text emission."""

import pytest

from ormrel.exceptions import EmissionError
from ormrel.rel import (
    Atom,
    Conjunction,
    Functional,
    Implication,
    IntegrityConstraint,
    Predicate,
    RelType,
    Unsupported,
    emit_clause,
    emit_formula,
    emit_section,
)

KNOWS = Predicate("knows", "_UC", ("_R1",), ("_R2",))


def test_atom():
    assert emit_formula(Atom(KNOWS, ("a", "b"))) == "knows(a, b)"
    assert emit_formula(Atom(RelType("Person"), ("v",))) == "Person(v)"


def test_atom_without_arguments():
    with pytest.raises(EmissionError, match="no columns"):
        emit_formula(Atom(KNOWS, ()))


def test_implication_and_conjunction():
    formula = Implication(
        Atom(KNOWS, ("v1", "v2")),
        Conjunction((Atom(RelType("Person"), ("v1",)), Atom(RelType("Person"), ("v2",)))),
    )
    assert emit_formula(formula) == "knows(v1, v2) implies Person(v1) and Person(v2)"


def test_functional():
    assert emit_formula(Functional(KNOWS)) == "function(knows)"


def test_clause_with_head_variables():
    clause = IntegrityConstraint(
        "person_is_entity",
        ("v",),
        Implication(Atom(RelType("Person"), ("v",)), Atom(RelType("Entity"), ("v",))),
    )
    assert emit_clause(clause) == (
        "ic person_is_entity(v) { Person(v) implies Entity(v) }"
    )


def test_clause_without_head_variables():
    clause = IntegrityConstraint("knows_many_one", (), Functional(KNOWS))
    assert emit_clause(clause) == "ic knows_many_one { function(knows) }"


def test_unsupported():
    assert emit_clause(Unsupported("TBD: something")) == "// Error: TBD: something"


def test_unknown_variants():
    with pytest.raises(EmissionError):
        emit_formula("knows(a, b)")
    with pytest.raises(EmissionError):
        emit_clause(Functional(KNOWS))


def test_section():
    assert emit_section("Header", [Unsupported("later")]) == [
        "// Header",
        "// Error: later",
    ]
    assert emit_section("Empty", []) == ["// Empty"]
