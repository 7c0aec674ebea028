from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Union


class ObjectKind(Enum):
    """Kinds of ORM object types handled by the generator"""

    ENTITY = "EntityType"
    VALUE = "ValueType"


@dataclass(frozen=True)
class DataType:
    """Represents a conceptual data type declared in the model"""

    id: str
    kind: str  # NORMA element name, e.g. "VariableLengthTextDataType"
    order: int = 0


@dataclass(frozen=True)
class ObjectType:
    """Represents an entity type or a value type"""

    id: str
    name: str
    kind: ObjectKind
    order: int = 0
    reference_mode: str = ""
    preferred_identifier: Optional[str] = None  # UC id, entity types only
    data_type: Optional[str] = None  # DataType id, value types only
    is_implicit_boolean: bool = False
    played_roles: tuple[str, ...] = ()

    @property
    def is_entity(self) -> bool:
        return self.kind is ObjectKind.ENTITY


@dataclass(frozen=True)
class Role:
    """Represents a role of a fact type"""

    id: str
    fact_type_id: str
    player_id: Optional[str] = None
    name: str = ""


@dataclass(frozen=True)
class FactType:
    """Represents a fact type with its ordered roles and internal constraints"""

    id: str
    name: str
    roles: tuple[Role, ...] = ()
    uniqueness_ids: tuple[str, ...] = ()
    mandatory_ids: tuple[str, ...] = ()
    order: int = 0

    @property
    def role_ids(self) -> tuple[str, ...]:
        return tuple(role.id for role in self.roles)

    @property
    def has_named_roles(self) -> bool:
        return any(role.name for role in self.roles)

    def role(self, role_id: str) -> Optional[Role]:
        for role in self.roles:
            if role.id == role_id:
                return role
        return None


@dataclass(frozen=True)
class UniquenessConstraint:
    """Represents a uniqueness constraint spanning a role sequence"""

    id: str
    role_ids: tuple[str, ...]
    name: str = ""
    preferred_identifier_for: Optional[str] = None  # entity id
    order: int = 0

    def spans(self, role_id: str) -> bool:
        return role_id in self.role_ids


@dataclass(frozen=True)
class MandatoryConstraint:
    """Represents a mandatory role constraint"""

    id: str
    role_ids: tuple[str, ...]
    name: str = ""
    order: int = 0


@dataclass(frozen=True)
class SubtypeFact:
    """Links a subtype entity to its supertype"""

    id: str
    subtype_id: str
    supertype_id: str
    name: str = ""
    subtype_role_id: Optional[str] = None
    supertype_role_id: Optional[str] = None
    order: int = 0


@dataclass(frozen=True)
class Diagram:
    """Represents an ORM diagram and the subjects of its shapes"""

    id: str
    name: str
    subject_refs: tuple[str, ...] = ()
    fact_type_refs: tuple[str, ...] = ()
    order: int = 0


Constraint = Union[UniquenessConstraint, MandatoryConstraint]


class ORMModel:
    """
    Immutable, indexed snapshot of an ORM model.

    All queries are pure functions of the loaded elements. Wherever several
    elements could match, the one declared first in the source document wins.
    """

    def __init__(
        self,
        objects: Iterable[ObjectType] = (),
        fact_types: Iterable[FactType] = (),
        subtype_facts: Iterable[SubtypeFact] = (),
        uniqueness_constraints: Iterable[UniquenessConstraint] = (),
        mandatory_constraints: Iterable[MandatoryConstraint] = (),
        data_types: Iterable[DataType] = (),
        diagrams: Iterable[Diagram] = (),
        name: str = "",
    ):
        self.name = name
        self.objects = tuple(sorted(objects, key=lambda o: o.order))
        self.fact_types = tuple(sorted(fact_types, key=lambda f: f.order))
        self.subtype_facts = tuple(sorted(subtype_facts, key=lambda s: s.order))
        self.uniqueness_constraints = tuple(
            sorted(uniqueness_constraints, key=lambda c: c.order)
        )
        self.mandatory_constraints = tuple(
            sorted(mandatory_constraints, key=lambda c: c.order)
        )
        self.data_types = tuple(sorted(data_types, key=lambda d: d.order))
        self.diagrams = tuple(sorted(diagrams, key=lambda d: d.order))

        self._objects = {o.id: o for o in self.objects}
        self._entities_by_name: dict[str, ObjectType] = {}
        for obj in self.objects:
            if obj.is_entity:
                self._entities_by_name.setdefault(obj.name, obj)

        self._fact_types = {f.id: f for f in self.fact_types}
        self._roles: dict[str, Role] = {}
        self._fact_type_of_role: dict[str, FactType] = {}
        for fact_type in self.fact_types:
            for role in fact_type.roles:
                self._roles.setdefault(role.id, role)
                self._fact_type_of_role.setdefault(role.id, fact_type)

        # Role players come from the role itself, falling back to the
        # PlayedRoles listing of the object types
        self._players: dict[str, str] = {}
        for obj in self.objects:
            for role_id in obj.played_roles:
                self._players.setdefault(role_id, obj.id)
        for role in self._roles.values():
            if role.player_id:
                self._players[role.id] = role.player_id

        self._uniqueness = {c.id: c for c in self.uniqueness_constraints}
        self._mandatory = {c.id: c for c in self.mandatory_constraints}
        self._data_types = {d.id: d for d in self.data_types}

        self._identified_entity: dict[str, str] = {}
        for obj in self.objects:
            if obj.is_entity and obj.preferred_identifier:
                self._identified_entity.setdefault(obj.preferred_identifier, obj.id)
        for uc in self.uniqueness_constraints:
            if uc.preferred_identifier_for:
                self._identified_entity.setdefault(uc.id, uc.preferred_identifier_for)

    # Lookups by id / name

    def object_by_id(self, object_id: Optional[str]) -> Optional[ObjectType]:
        return self._objects.get(object_id) if object_id else None

    def entity_by_id(self, object_id: Optional[str]) -> Optional[ObjectType]:
        obj = self.object_by_id(object_id)
        return obj if obj is not None and obj.is_entity else None

    def entity_by_name(self, name: str) -> Optional[ObjectType]:
        return self._entities_by_name.get(name)

    def fact_type_by_id(self, fact_type_id: Optional[str]) -> Optional[FactType]:
        return self._fact_types.get(fact_type_id) if fact_type_id else None

    def fact_type_with_role(self, role_id: str) -> Optional[FactType]:
        return self._fact_type_of_role.get(role_id)

    def uniqueness_by_id(self, uc_id: Optional[str]) -> Optional[UniquenessConstraint]:
        return self._uniqueness.get(uc_id) if uc_id else None

    def mandatory_by_id(self, mc_id: Optional[str]) -> Optional[MandatoryConstraint]:
        return self._mandatory.get(mc_id) if mc_id else None

    def constraint_by_id(self, constraint_id: str) -> Optional[Constraint]:
        return self._uniqueness.get(constraint_id) or self._mandatory.get(
            constraint_id
        )

    def data_type_by_id(self, data_type_id: Optional[str]) -> Optional[DataType]:
        return self._data_types.get(data_type_id) if data_type_id else None

    # Role players

    def role_player(self, role_id: str) -> Optional[ObjectType]:
        return self.object_by_id(self._players.get(role_id))

    def entity_that_plays(self, role_id: str) -> Optional[ObjectType]:
        player = self.role_player(role_id)
        return player if player is not None and player.is_entity else None

    def data_type_of_player(self, role_id: str) -> Optional[DataType]:
        player = self.role_player(role_id)
        if player is None or player.is_entity:
            return None
        return self.data_type_by_id(player.data_type)

    def is_implicit_boolean(self, role_id: str) -> bool:
        player = self.role_player(role_id)
        return player is not None and player.is_implicit_boolean

    # Subtype edges

    def super_types(self, entity: ObjectType) -> list[ObjectType]:
        """Direct supertypes of an entity, in subtype fact declaration order"""
        return [
            supertype
            for sf in self.subtype_facts
            if sf.subtype_id == entity.id
            and (supertype := self.entity_by_id(sf.supertype_id)) is not None
        ]

    def sub_types(self, entity: ObjectType) -> list[ObjectType]:
        """Direct subtypes of an entity, in subtype fact declaration order"""
        return [
            subtype
            for sf in self.subtype_facts
            if sf.supertype_id == entity.id
            and (subtype := self.entity_by_id(sf.subtype_id)) is not None
        ]

    def is_top_level(self, entity: ObjectType) -> bool:
        return not self.super_types(entity)

    # Diagrams

    def is_drawn_on(self, element, diagram: Diagram) -> bool:
        if element is None:
            return False
        element_id = element if isinstance(element, str) else element.id
        return element_id in diagram.subject_refs

    def fact_types_in_diagram(self, diagram: Diagram) -> list[FactType]:
        fact_types: list[FactType] = []
        for ref in diagram.fact_type_refs:
            fact_type = self.fact_type_by_id(ref)
            if fact_type is not None and fact_type not in fact_types:
                fact_types.append(fact_type)
        return fact_types

    # Constraints

    def uniqueness_constraints_of(
        self, fact_type: FactType
    ) -> list[UniquenessConstraint]:
        return [
            uc
            for uc_id in fact_type.uniqueness_ids
            if (uc := self.uniqueness_by_id(uc_id)) is not None
        ]

    def mandatory_constraints_of(self, fact_type: FactType) -> list[MandatoryConstraint]:
        return [
            mc
            for mc_id in fact_type.mandatory_ids
            if (mc := self.mandatory_by_id(mc_id)) is not None
        ]

    def entity_identified_by(self, uc_id: str) -> Optional[ObjectType]:
        """Entity type for which the UC is the preferred identifier, if any"""
        return self.entity_by_id(self._identified_entity.get(uc_id))

    def lone_role_of(self, constraint_id: str) -> Optional[str]:
        """The single role spanned by a constraint, or None"""
        constraint = self.constraint_by_id(constraint_id)
        if constraint is None or len(constraint.role_ids) != 1:
            return None
        return constraint.role_ids[0]

    def identifying_fact_type(self, entity: ObjectType) -> Optional[FactType]:
        """
        Fact type realizing the preferred identifier of an entity type.

        Only simple identifiers (a UC over exactly one role) are realized by a
        single fact type; composite identifiers return None.
        """
        uc = self.uniqueness_by_id(entity.preferred_identifier)
        if uc is None or len(uc.role_ids) != 1:
            return None
        return self.fact_type_with_role(uc.role_ids[0])

    def uniqueness_excluding_role(
        self, role_id: str, fact_type: FactType
    ) -> Optional[UniquenessConstraint]:
        """First UC of the fact type that does not span the given role"""
        for uc in self.uniqueness_constraints_of(fact_type):
            if not uc.spans(role_id):
                return uc
        return None

    def roles_excluded_by(
        self, uc: UniquenessConstraint, fact_type: FactType
    ) -> tuple[str, ...]:
        """Roles of the fact type not spanned by the UC, in fact type order"""
        return tuple(r for r in fact_type.role_ids if not uc.spans(r))

    def get_model_summary(self) -> dict[str, int]:
        return {
            "entity_types": sum(1 for o in self.objects if o.is_entity),
            "value_types": sum(1 for o in self.objects if not o.is_entity),
            "fact_types": len(self.fact_types),
            "subtype_facts": len(self.subtype_facts),
            "uniqueness_constraints": len(self.uniqueness_constraints),
            "mandatory_constraints": len(self.mandatory_constraints),
            "diagrams": len(self.diagrams),
        }
