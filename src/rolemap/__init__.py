"""
Rolemap: visual role mapping types and their measurement level resolution.
This is the root package containing the type hierarchy, the resolver and the mappings.
"""

from rolemap.binding import AttributeBinding
from rolemap.catalog import StaticLevelCatalog
from rolemap.data_types import DataType, DataTypeRegistry
from rolemap.levels import LEVEL_ORDERING, LevelOrdering
from rolemap.mapping import Mapping
from rolemap.resolver import EffectiveLevelResolver
from rolemap.schema import RoleSchema
from rolemap.type_node import MappingType

__all__ = [
    "LEVEL_ORDERING",
    "AttributeBinding",
    "DataType",
    "DataTypeRegistry",
    "EffectiveLevelResolver",
    "LevelOrdering",
    "Mapping",
    "MappingType",
    "RoleSchema",
    "StaticLevelCatalog",
]
