"""
Core declarative models for the rolemap project.
This package contains the Pydantic definitions and vocabularies shared by the
type hierarchy and the mapping instances.
"""

from .config import ResolutionConfig
from .type_spec import DataTypeSpec, MappingTypeSpec, SchemaDocument
from .types import Aggregation, LevelCompatibility, MeasurementLevel

__all__ = [
    "Aggregation",
    "DataTypeSpec",
    "LevelCompatibility",
    "MappingTypeSpec",
    "MeasurementLevel",
    "ResolutionConfig",
    "SchemaDocument",
]
