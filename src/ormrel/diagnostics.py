"""
Structured diagnostics collected while translating a model.

Every warning or error raised during translation is recorded here (and logged
through loguru) so callers and tests can inspect them after the run instead of
scraping console output.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from loguru import logger


class Severity(Enum):
    """Severity of a diagnostic"""

    WARNING = "warning"
    ERROR = "error"


class DiagnosticCode:
    """Stable identifiers for the diagnostics the generator can emit"""

    AMBIGUOUS_FACT_TYPE = "ambiguous-fact-type"
    MISSING_UNIQUENESS = "missing-uniqueness"
    UNKEYED_NAMED_ROLE = "unkeyed-named-role"
    INVALID_NAME = "invalid-name"
    UNBOUND_MANDATORY_ROLE = "unbound-mandatory-role"
    MISSING_IDENTIFYING_FACT_TYPE = "missing-identifying-fact-type"
    UNRESOLVED_CONCEPT = "unresolved-concept"
    EMPTY_RELATION = "empty-relation"
    MALFORMED_FACT_TYPE = "malformed-fact-type"
    DUPLICATE_ARTIFACT = "duplicate-artifact"


@dataclass(frozen=True)
class Diagnostic:
    """A single warning or error tied to a model element"""

    severity: Severity
    code: str
    message: str
    element_id: Optional[str] = None

    def __str__(self) -> str:
        return f"[{self.severity.value}] {self.code}: {self.message}"


@dataclass
class Diagnostics:
    """Ordered collection of diagnostics for one translation run"""

    entries: list[Diagnostic] = field(default_factory=list)

    def warn(self, code: str, message: str, element_id: Optional[str] = None):
        self._record(Diagnostic(Severity.WARNING, code, message, element_id))

    def error(self, code: str, message: str, element_id: Optional[str] = None):
        self._record(Diagnostic(Severity.ERROR, code, message, element_id))

    def _record(self, diagnostic: Diagnostic):
        self.entries.append(diagnostic)
        if diagnostic.severity is Severity.ERROR:
            logger.error(f"{diagnostic.code}: {diagnostic.message}")
        else:
            logger.warning(f"{diagnostic.code}: {diagnostic.message}")

    def by_code(self, code: str) -> list[Diagnostic]:
        return [d for d in self.entries if d.code == code]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.entries if d.severity is Severity.WARNING]

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.entries if d.severity is Severity.ERROR]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
