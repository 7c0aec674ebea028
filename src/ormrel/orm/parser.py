"""
NORMA document parser that converts an .orm file into an ORMModel snapshot.

The document is read once with ElementTree; every element the generator needs
is copied into the frozen dataclasses of ormrel.orm.models together with its
document position, so later queries never go back to the XML.
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from ormrel.exceptions import ModelParseError

from .models import (
    DataType,
    Diagram,
    FactType,
    MandatoryConstraint,
    ObjectKind,
    ObjectType,
    ORMModel,
    Role,
    SubtypeFact,
    UniquenessConstraint,
)

DEFAULT_NAMESPACES = {
    "orm": "http://schemas.neumont.edu/ORM/2006-04/ORMCore",
    "ormDiagram": "http://schemas.neumont.edu/ORM/2006-04/ORMDiagram",
}


class ORMDocumentParser:
    """Reads a NORMA XML document into an ORMModel."""

    def __init__(
        self,
        source: Union[str, Path, None] = None,
        namespaces: Optional[dict[str, str]] = None,
        text: Optional[str] = None,
    ):
        """
        Initialize the parser with either a file path or the document text.

        Args:
            source: Path to the .orm file
            namespaces: Prefix -> URI map for the "orm" and "ormDiagram" prefixes
            text: XML document content, used instead of source when given
        """
        if source is None and text is None:
            raise ValueError("Either a source path or document text is required")
        self.source = Path(source) if source is not None else None
        self.text = text
        self.ns = {**DEFAULT_NAMESPACES, **(namespaces or {})}
        self.root: Optional[ET.Element] = None

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def open(self):
        """Read and parse the XML document."""
        try:
            if self.text is not None:
                self.root = ET.fromstring(self.text)
            else:
                logger.info(f"Opening ORM model: {self.source}")
                if not self.source.exists():
                    raise ModelParseError(f"ORM model not found: {self.source}")
                self.root = ET.parse(self.source).getroot()
        except ET.ParseError as e:
            raise ModelParseError(f"Invalid ORM document: {e}") from e

    def close(self):
        self.root = None

    def _tag(self, prefix: str, local: str) -> str:
        return f"{{{self.ns[prefix]}}}{local}"

    def _find_model(self) -> ET.Element:
        model_tag = self._tag("orm", "ORMModel")
        if self.root.tag == model_tag:
            return self.root
        model = self.root.find(f".//{model_tag}")
        if model is None:
            raise ModelParseError("Document does not contain an orm:ORMModel element")
        return model

    def parse(self) -> ORMModel:
        """
        Parse the opened document into an ORMModel.

        Returns:
            ORMModel snapshot of objects, facts, constraints, data types and diagrams
        """
        if self.root is None:
            raise RuntimeError(
                "Document not opened. Use context manager or call open() first."
            )

        model = self._find_model()

        objects = self._parse_objects(model)
        fact_types, subtype_facts = self._parse_facts(model)
        uniqueness, mandatory = self._parse_constraints(model)
        data_types = self._parse_data_types(model)
        diagrams = self._parse_diagrams()

        orm_model = ORMModel(
            objects=objects,
            fact_types=fact_types,
            subtype_facts=subtype_facts,
            uniqueness_constraints=uniqueness,
            mandatory_constraints=mandatory,
            data_types=data_types,
            diagrams=diagrams,
            name=model.get("Name", ""),
        )
        logger.debug(f"ORM model parsed: {orm_model.get_model_summary()}")
        return orm_model

    def _ref(self, element: ET.Element, path: str) -> Optional[str]:
        child = element.find(path, self.ns)
        return child.get("ref") if child is not None else None

    def _refs(self, element: ET.Element, path: str) -> tuple[str, ...]:
        return tuple(
            child.get("ref")
            for child in element.findall(path, self.ns)
            if child.get("ref")
        )

    def _parse_objects(self, model: ET.Element) -> list[ObjectType]:
        objects = []
        container = model.find("orm:Objects", self.ns)
        if container is None:
            return objects

        kinds = {self._tag("orm", kind.value): kind for kind in ObjectKind}
        for order, element in enumerate(container):
            kind = kinds.get(element.tag)
            if kind is None:
                # Objectified types and other object kinds are not translated
                continue
            objects.append(
                ObjectType(
                    id=element.get("id"),
                    name=element.get("Name", ""),
                    kind=kind,
                    order=order,
                    reference_mode=element.get("_ReferenceMode", ""),
                    preferred_identifier=self._ref(element, "orm:PreferredIdentifier"),
                    data_type=self._ref(element, "orm:ConceptualDataType"),
                    is_implicit_boolean=element.get("IsImplicitBooleanValue")
                    == "true",
                    played_roles=self._refs(element, "orm:PlayedRoles/*"),
                )
            )
        return objects

    def _parse_facts(
        self, model: ET.Element
    ) -> tuple[list[FactType], list[SubtypeFact]]:
        fact_types: list[FactType] = []
        subtype_facts: list[SubtypeFact] = []
        facts = model.find("orm:Facts", self.ns)
        if facts is None:
            return fact_types, subtype_facts

        fact_tag = self._tag("orm", "Fact")
        subtype_tag = self._tag("orm", "SubtypeFact")
        for order, element in enumerate(facts):
            if element.tag == fact_tag:
                fact_types.append(self._parse_fact(element, order))
            elif element.tag == subtype_tag:
                subtype_fact = self._parse_subtype_fact(element, order)
                if subtype_fact is not None:
                    subtype_facts.append(subtype_fact)
        return fact_types, subtype_facts

    def _parse_fact(self, element: ET.Element, order: int) -> FactType:
        fact_id = element.get("id")
        roles = tuple(
            Role(
                id=role.get("id"),
                fact_type_id=fact_id,
                player_id=self._ref(role, "orm:RolePlayer"),
                name=role.get("Name", ""),
            )
            for role in element.findall("orm:FactRoles/orm:Role", self.ns)
        )
        return FactType(
            id=fact_id,
            name=element.get("_Name", ""),
            roles=roles,
            uniqueness_ids=self._refs(
                element, "orm:InternalConstraints/orm:UniquenessConstraint"
            ),
            mandatory_ids=self._refs(
                element, "orm:InternalConstraints/orm:MandatoryConstraint"
            ),
            order=order,
        )

    def _parse_subtype_fact(
        self, element: ET.Element, order: int
    ) -> Optional[SubtypeFact]:
        sub_role = element.find("orm:FactRoles/orm:SubtypeMetaRole", self.ns)
        super_role = element.find("orm:FactRoles/orm:SupertypeMetaRole", self.ns)
        if sub_role is None or super_role is None:
            logger.warning(f"Subtype fact {element.get('id')} lacks meta roles, ignored")
            return None

        subtype_id = self._ref(sub_role, "orm:RolePlayer")
        supertype_id = self._ref(super_role, "orm:RolePlayer")
        if subtype_id is None or supertype_id is None:
            logger.warning(
                f"Subtype fact {element.get('id')} lacks role players, ignored"
            )
            return None

        return SubtypeFact(
            id=element.get("id"),
            subtype_id=subtype_id,
            supertype_id=supertype_id,
            name=element.get("_Name", ""),
            subtype_role_id=sub_role.get("id"),
            supertype_role_id=super_role.get("id"),
            order=order,
        )

    def _parse_constraints(
        self, model: ET.Element
    ) -> tuple[list[UniquenessConstraint], list[MandatoryConstraint]]:
        uniqueness: list[UniquenessConstraint] = []
        mandatory: list[MandatoryConstraint] = []
        constraints = model.find("orm:Constraints", self.ns)
        if constraints is None:
            return uniqueness, mandatory

        uc_tag = self._tag("orm", "UniquenessConstraint")
        mc_tag = self._tag("orm", "MandatoryConstraint")
        for order, element in enumerate(constraints):
            role_ids = self._refs(element, "orm:RoleSequence/orm:Role")
            if element.tag == uc_tag:
                uniqueness.append(
                    UniquenessConstraint(
                        id=element.get("id"),
                        role_ids=role_ids,
                        name=element.get("Name", ""),
                        preferred_identifier_for=self._ref(
                            element, "orm:PreferredIdentifierFor"
                        ),
                        order=order,
                    )
                )
            elif element.tag == mc_tag:
                mandatory.append(
                    MandatoryConstraint(
                        id=element.get("id"),
                        role_ids=role_ids,
                        name=element.get("Name", ""),
                        order=order,
                    )
                )
        return uniqueness, mandatory

    def _parse_data_types(self, model: ET.Element) -> list[DataType]:
        data_types = model.find("orm:DataTypes", self.ns)
        if data_types is None:
            return []
        prefix = f"{{{self.ns['orm']}}}"
        return [
            DataType(
                id=element.get("id"),
                kind=element.tag[len(prefix) :]
                if element.tag.startswith(prefix)
                else element.tag,
                order=order,
            )
            for order, element in enumerate(data_types)
        ]

    def _parse_diagrams(self) -> list[Diagram]:
        diagrams = []
        fact_shape_tag = self._tag("ormDiagram", "FactTypeShape")
        for order, element in enumerate(
            self.root.iter(self._tag("ormDiagram", "ORMDiagram"))
        ):
            subject_refs = []
            fact_type_refs = []
            for shape in element.findall("ormDiagram:Shapes/*", self.ns):
                ref = self._ref(shape, "ormDiagram:Subject")
                if ref is None:
                    continue
                subject_refs.append(ref)
                if shape.tag == fact_shape_tag:
                    fact_type_refs.append(ref)
            diagrams.append(
                Diagram(
                    id=element.get("id", ""),
                    name=element.get("Name", ""),
                    subject_refs=tuple(subject_refs),
                    fact_type_refs=tuple(fact_type_refs),
                    order=order,
                )
            )
        return diagrams


def parse_orm_file(
    path: Union[str, Path], namespaces: Optional[dict[str, str]] = None
) -> ORMModel:
    """
    Convenience function to parse a NORMA .orm file.

    Args:
        path: Path to the .orm file
        namespaces: Optional namespace URI overrides

    Returns:
        ORMModel snapshot
    """
    with ORMDocumentParser(path, namespaces=namespaces) as parser:
        return parser.parse()


def parse_orm_string(
    text: str, namespaces: Optional[dict[str, str]] = None
) -> ORMModel:
    """Parse a NORMA document held in memory."""
    with ORMDocumentParser(text=text, namespaces=namespaces) as parser:
        return parser.parse()
