"""
ormrel - generate Rel integrity constraints from Object-Role Modeling schemas.

This package provides tools for working with NORMA .orm models, including:
- Reading the ORM elements a generator needs into an immutable snapshot
- Inferring the Rel relations modeled by each fact type
- Synthesizing and emitting Rel integrity constraints per concept diagram
- A command line interface to write one .rel file per concept
"""

__docformat__ = "numpy"

from ormrel._version import __version__

from ormrel import config, diagnostics, exceptions, generator, orm, rel

__all__ = [
    "__version__",
    "config",
    "diagnostics",
    "exceptions",
    "generator",
    "orm",
    "rel",
]
