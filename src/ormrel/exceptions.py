# src/ormrel/exceptions.py
"""
Exceptions raised by the ORM to Rel translation pipeline
"""


class OrmRelError(Exception):
    """Base exception for ormrel failures"""

    pass


class ModelParseError(OrmRelError):
    """Raised when an ORM document cannot be read into a model snapshot"""

    pass


class InvalidNamingError(OrmRelError):
    """Raised when an ORM name does not follow the PascalCase convention"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Expected string '{name}' to be in PascalCase")


class EmissionError(OrmRelError):
    """Raised when a Rel construct cannot be rendered to text"""

    pass


class ConceptResolutionError(OrmRelError):
    """Raised when a diagram's central concept cannot be resolved"""

    def __init__(self, diagram_name: str, reason: str):
        self.diagram_name = diagram_name
        self.reason = reason
        super().__init__(f"Diagram '{diagram_name}': {reason}")
