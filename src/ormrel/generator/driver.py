"""
Per-diagram generation of Rel schema files.

Certain diagrams of an ORM model designate a central concept and the
"constellation" of relations keyed by that concept. Such diagrams are named
after the convention "X:concept" where X is the name of the entity type that
represents the concept (e.g. "Location:concept" or
"Subscription (billing):concept"). Every such diagram yields one Rel file.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from ormrel.config.models import AppConfig, GeneratorConfig
from ormrel.diagnostics import DiagnosticCode, Diagnostics
from ormrel.exceptions import (
    ConceptResolutionError,
    EmissionError,
    InvalidNamingError,
    OrmRelError,
)
from ormrel.orm.models import Diagram, FactType, ObjectType, ORMModel
from ormrel.orm.parser import parse_orm_file
from ormrel.rel.emitter import emit_section

from .constraints import fact_type_constraints
from .hierarchy import entity_type_constraints

CONCEPT_NAME_PATTERN = re.compile(r"^(?P<concept>[^(:| )]+)(?:.*):concept$")


@dataclass
class RelArtifact:
    """Generated Rel source for one concept diagram"""

    concept: str
    diagram: str
    filename: str
    lines: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(self.lines) + "\n"


@dataclass
class GenerationResult:
    artifacts: list[RelArtifact] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


def concept_token(diagram_name: str) -> Optional[str]:
    """Concept name encoded in a diagram name, or None if it follows no convention"""
    match = CONCEPT_NAME_PATTERN.match(diagram_name)
    return match.group("concept") if match else None


def resolve_central_concept(diagram: Diagram, model: ORMModel) -> ObjectType:
    """
    Entity type that defines the concept of a diagram.

    Raises:
        ConceptResolutionError: if the name does not follow the convention, the
            entity does not exist or it is not drawn on the diagram
    """
    token = concept_token(diagram.name)
    if token is None:
        raise ConceptResolutionError(
            diagram.name, "name does not follow the 'X:concept' convention"
        )
    entity = model.entity_by_name(token)
    if entity is None:
        raise ConceptResolutionError(diagram.name, f"no entity type named '{token}'")
    if not model.is_drawn_on(entity, diagram):
        raise ConceptResolutionError(
            diagram.name, f"entity type '{token}' is not drawn on the diagram"
        )
    return entity


def central_concept(diagram: Diagram, model: ORMModel) -> Optional[ObjectType]:
    try:
        return resolve_central_concept(diagram, model)
    except ConceptResolutionError:
        return None


class SchemaGenerator:
    """Builds one RelArtifact per concept diagram of a model."""

    def __init__(
        self,
        model: ORMModel,
        config: Optional[GeneratorConfig] = None,
        diagnostics: Optional[Diagnostics] = None,
    ):
        self.model = model
        self.config = config or GeneratorConfig()
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    def generate_all(self) -> list[RelArtifact]:
        artifacts = []
        producers: dict[str, str] = {}
        for diagram in self.model.diagrams:
            artifact = self.generate_for_diagram(diagram)
            if artifact is None:
                continue
            if artifact.filename in producers:
                self.diagnostics.warn(
                    DiagnosticCode.DUPLICATE_ARTIFACT,
                    f"Diagrams '{producers[artifact.filename]}' and "
                    f"'{diagram.name}' both produce {artifact.filename}, "
                    "the later one overwrites the earlier",
                    diagram.id,
                )
            producers[artifact.filename] = diagram.name
            artifacts.append(artifact)
        return artifacts

    def generate_for_diagram(self, diagram: Diagram) -> Optional[RelArtifact]:
        if concept_token(diagram.name) is None:
            logger.debug(f"Diagram '{diagram.name}' is not a concept diagram, skipped")
            return None
        try:
            concept = resolve_central_concept(diagram, self.model)
        except ConceptResolutionError as e:
            self.diagnostics.error(DiagnosticCode.UNRESOLVED_CONCEPT, str(e), diagram.id)
            return None

        logger.info(f"Generating constraints for concept '{concept.name}'")
        lines = [""]
        lines.extend(
            emit_section(
                f"Constraints for the '{concept.name}' concept and its subtypes",
                entity_type_constraints(concept, diagram, self.model, self.diagnostics),
            )
        )
        for fact_type in self.fact_types_for(concept, diagram):
            lines.append("")
            lines.extend(self._fact_type_section(fact_type))

        return RelArtifact(
            concept=concept.name,
            diagram=diagram.name,
            filename=self.config.filename_for(concept.name),
            lines=lines,
        )

    def fact_types_for(self, concept: ObjectType, diagram: Diagram) -> list[FactType]:
        """Fact types drawn on the diagram, plus the concept's identifying one"""
        fact_types = self.model.fact_types_in_diagram(diagram)
        if concept.reference_mode:
            # The identifying fact type is included even though it is
            # usually not displayed on the diagram
            identifying = self.model.identifying_fact_type(concept)
            if identifying is None:
                self.diagnostics.warn(
                    DiagnosticCode.MISSING_IDENTIFYING_FACT_TYPE,
                    f"Concept '{concept.name}' has reference mode "
                    f"'{concept.reference_mode}' but no simple identifying fact type",
                    concept.id,
                )
            elif identifying not in fact_types:
                fact_types.append(identifying)
        return fact_types

    def _fact_type_section(self, fact_type: FactType) -> list[str]:
        header = f"Constraints for relations modeled by the '{fact_type.name}' fact type"
        try:
            return emit_section(
                header, fact_type_constraints(fact_type, self.model, self.diagnostics)
            )
        except InvalidNamingError as e:
            self.diagnostics.warn(DiagnosticCode.INVALID_NAME, str(e), fact_type.id)
        except EmissionError as e:
            self.diagnostics.error(
                DiagnosticCode.EMPTY_RELATION,
                f"Fact type '{fact_type.name}': {e}",
                fact_type.id,
            )
        except OrmRelError as e:
            self.diagnostics.error(
                DiagnosticCode.MALFORMED_FACT_TYPE,
                f"Fact type '{fact_type.name}': {e}",
                fact_type.id,
            )
        return emit_section(header, [])


def write_artifacts(
    artifacts: list[RelArtifact], output_dir: Path, encoding: str = "utf-8"
) -> list[Path]:
    output_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for artifact in artifacts:
        path = output_dir / artifact.filename
        path.write_text(artifact.text, encoding=encoding)
        logger.info(f"Wrote {path} (diagram '{artifact.diagram}')")
        written.append(path)
    return written


def generate(
    model_path: Union[str, Path],
    output_dir: Union[str, Path, None] = None,
    config: Optional[AppConfig] = None,
) -> GenerationResult:
    """
    Generate Rel schema files for every concept diagram of an ORM model.

    Args:
        model_path: Path to the NORMA .orm file
        output_dir: Directory receiving the .rel files, created if absent
            (default: generator.output_dir from the configuration)
        config: Application configuration (default: built-in defaults)

    Returns:
        GenerationResult with the artifacts, written paths and diagnostics
    """
    config = config or AppConfig()
    output_dir = Path(output_dir) if output_dir else config.generator.output_dir
    logger.info(f"Generating schemas for: {model_path} in {output_dir}")

    model = parse_orm_file(model_path, namespaces=config.namespaces.as_dict())
    result = GenerationResult()
    generator = SchemaGenerator(model, config.generator, result.diagnostics)
    result.artifacts = generator.generate_all()
    result.written = write_artifacts(
        result.artifacts, output_dir, encoding=config.generator.encoding
    )
    logger.info(
        f"Generated {len(result.written)} schema file(s) with "
        f"{len(result.diagnostics)} diagnostic(s)"
    )
    return result
