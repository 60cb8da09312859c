from enum import StrEnum
from typing import TypeAlias


class MeasurementLevel(StrEnum):
    """
    Levels of measurement a visual role can operate on.
    Declared in ascending order of expressiveness.
    """

    NOMINAL = "nominal"
    ORDINAL = "ordinal"
    QUANTITATIVE = "quantitative"


class Aggregation(StrEnum):
    """Aggregation operations applicable to a mapped attribute."""

    SUM = "sum"
    AVG = "avg"
    MIN = "min"
    MAX = "max"


class LevelCompatibility(StrEnum):
    """
    How a candidate level is matched against an attribute's natural levels
    when inferring the automatic level of a mapping.
    """

    MEMBER = "member"  # candidate is one of the natural levels
    DEGRADABLE = "degradable"  # candidate is at or below the highest natural level


# Ordered, duplicate-free sequence of levels.
LevelTuple: TypeAlias = tuple[MeasurementLevel, ...]
