"""
Abstract syntax for the subset of Rel emitted by the generator.

Relations, formulas and clauses are closed sets of frozen dataclasses; the
emitter handles every variant explicitly.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class RelType:
    """A nominal type: an entity type name or a primitive such as String"""

    name: str


@dataclass(frozen=True)
class Predicate:
    """A named relation derived from a fact type

    Columns are the key roles followed by the value roles. ``uc_id`` is the
    uniqueness constraint that generated the key.
    """

    name: str
    uc_id: str
    key_role_ids: tuple[str, ...]
    value_role_ids: tuple[str, ...] = ()

    @property
    def role_ids(self) -> tuple[str, ...]:
        return self.key_role_ids + self.value_role_ids


Relation = Union[RelType, Predicate]


@dataclass(frozen=True)
class Atom:
    relation: Relation
    args: tuple[str, ...]


@dataclass(frozen=True)
class Conjunction:
    conjuncts: tuple["Formula", ...]


@dataclass(frozen=True)
class Implication:
    antecedent: "Formula"
    consequent: "Formula"


@dataclass(frozen=True)
class Functional:
    relation: Relation


Formula = Union[Atom, Conjunction, Implication, Functional]


@dataclass(frozen=True)
class IntegrityConstraint:
    name: str
    variables: tuple[str, ...]
    body: Formula


@dataclass(frozen=True)
class Unsupported:
    """Placeholder for a constraint the generator knowingly cannot express"""

    message: str


Clause = Union[IntegrityConstraint, Unsupported]


def fresh_variables(count: int) -> tuple[str, ...]:
    """Generates the variable names v1 .. v<count>"""
    return tuple(f"v{n}" for n in range(1, count + 1))


def first_occurrence(role_ids, predicate: Predicate) -> Optional[str]:
    """First column role of the predicate that belongs to role_ids"""
    for role_id in predicate.role_ids:
        if role_id in role_ids:
            return role_id
    return None


def bind_role(predicate: Predicate, role_id: str, var: str) -> Atom:
    """
    Atom over the predicate binding only the column of role_id to var;
    every other column is left anonymous.
    """
    return Atom(
        predicate,
        tuple(var if r == role_id else "_" for r in predicate.role_ids),
    )
