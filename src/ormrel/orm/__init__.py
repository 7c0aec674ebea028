"""
ORM model access for ormrel.

This module provides:
- Frozen dataclasses for the ORM elements the generator understands
- The ORMModel snapshot with its read-only queries
- A parser for NORMA .orm documents
"""

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
from .parser import (
    DEFAULT_NAMESPACES,
    ORMDocumentParser,
    parse_orm_file,
    parse_orm_string,
)

__all__ = [
    "DataType",
    "Diagram",
    "FactType",
    "MandatoryConstraint",
    "ObjectKind",
    "ObjectType",
    "ORMModel",
    "Role",
    "SubtypeFact",
    "UniquenessConstraint",
    "DEFAULT_NAMESPACES",
    "ORMDocumentParser",
    "parse_orm_file",
    "parse_orm_string",
]
