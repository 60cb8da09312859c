from typing import Final

from role_models.types import Aggregation, LevelCompatibility, MeasurementLevel

# Ascending order of expressiveness
LEVEL_ORDER: Final[tuple[MeasurementLevel, ...]] = (
    MeasurementLevel.NOMINAL,
    MeasurementLevel.ORDINAL,
    MeasurementLevel.QUANTITATIVE,
)

# Data types each level naturally applies to (ids in the data type registry)
LEVEL_NATURAL_DATA_TYPES: Final[dict[MeasurementLevel, tuple[str, ...]]] = {
    MeasurementLevel.NOMINAL: ("element",),
    MeasurementLevel.ORDINAL: ("element",),
    MeasurementLevel.QUANTITATIVE: ("number", "date"),
}

DEFAULT_AGGREGATION: Final[Aggregation] = Aggregation.SUM
DEFAULT_LEVEL_COMPATIBILITY: Final[LevelCompatibility] = LevelCompatibility.MEMBER

# Root of the mapping type hierarchy
ROOT_TYPE_ID: Final[str] = "rolemap/mapping"
ROOT_DATA_TYPE_ID: Final[str] = "value"

# Built-in data types as (id, base id), parents first
BUILTIN_DATA_TYPES: Final[tuple[tuple[str, str | None], ...]] = (
    ("value", None),
    ("element", "value"),
    ("list", "value"),
    ("simple", "element"),
    ("complex", "element"),
    ("string", "simple"),
    ("number", "simple"),
    ("boolean", "simple"),
    ("date", "simple"),
)

# Environment variables
ENV_LEVEL_COMPATIBILITY: Final[str] = "ROLEMAP_LEVEL_COMPATIBILITY"
ENV_REQUIRE_CONCRETE_LEVELS: Final[str] = "ROLEMAP_REQUIRE_CONCRETE_LEVELS"

# Messages
WARN_CONCRETE_WITHOUT_LEVELS = "Concrete mapping type '{}' has no effective measurement levels."
