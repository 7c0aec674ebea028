from typing import Optional

from ormrel.diagnostics import DiagnosticCode, Diagnostics
from ormrel.exceptions import InvalidNamingError
from ormrel.orm.models import Diagram, ObjectType, ORMModel
from ormrel.rel.ast import Atom, Clause, Implication, IntegrityConstraint, RelType

from .naming import to_snake_case

ENTITY_TYPE = RelType("Entity")


def top_level_entity_constraint(concept: ObjectType) -> IntegrityConstraint:
    """Type constraint placing a top-level concept under Entity"""
    var = "v"
    return IntegrityConstraint(
        f"{to_snake_case(concept.name)}_is_entity",
        (var,),
        Implication(Atom(RelType(concept.name), (var,)), Atom(ENTITY_TYPE, (var,))),
    )


def entity_subtype_constraint(
    concept: ObjectType, supertype: ObjectType
) -> IntegrityConstraint:
    """Type constraint for a concept known to be a subtype of supertype"""
    var = "v"
    return IntegrityConstraint(
        f"{to_snake_case(concept.name)}_is_subtype_of_{to_snake_case(supertype.name)}",
        (var,),
        Implication(
            Atom(RelType(concept.name), (var,)), Atom(RelType(supertype.name), (var,))
        ),
    )


class SubtypeHierarchyWalker:
    """
    Collects the type constraints for a concept and all of its subtypes that
    are drawn on a diagram.

    Subtypes are visited whether or not they are drawn, so drawn descendants
    of undrawn intermediate types are still reached. An entity reachable
    along several inheritance paths is visited once.
    """

    def __init__(
        self,
        model: ORMModel,
        diagram: Diagram,
        diagnostics: Optional[Diagnostics] = None,
    ):
        self.model = model
        self.diagram = diagram
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.visited: set[str] = set()

    def walk(
        self, concept: ObjectType, clauses: Optional[list[Clause]] = None
    ) -> list[Clause]:
        if clauses is None:
            clauses = []
        if concept.id in self.visited:
            return clauses
        self.visited.add(concept.id)

        if self.model.is_drawn_on(concept, self.diagram):
            try:
                clauses.extend(self._concept_constraints(concept))
            except InvalidNamingError as e:
                self.diagnostics.warn(DiagnosticCode.INVALID_NAME, str(e), concept.id)

        for sub_concept in self.model.sub_types(concept):
            self.walk(sub_concept, clauses)
        return clauses

    def _concept_constraints(self, concept: ObjectType) -> list[Clause]:
        supertypes = self.model.super_types(concept)
        if not supertypes:
            return [top_level_entity_constraint(concept)]
        return [
            entity_subtype_constraint(concept, supertype) for supertype in supertypes
        ]


def entity_type_constraints(
    concept: ObjectType,
    diagram: Diagram,
    model: ORMModel,
    diagnostics: Optional[Diagnostics] = None,
) -> list[Clause]:
    return SubtypeHierarchyWalker(model, diagram, diagnostics).walk(concept)
