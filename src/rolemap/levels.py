"""
Total order over measurement levels and their compatibility with data types.
"""

import logging
from collections.abc import Iterable
from typing import Final

from role_models.constants import LEVEL_NATURAL_DATA_TYPES, LEVEL_ORDER
from role_models.types import LevelTuple, MeasurementLevel
from rolemap.data_types import BUILTIN_REGISTRY, DataType
from rolemap.exceptions import DomainError

logger = logging.getLogger(__name__)


class LevelOrdering:
    """
    An immutable, ascending order of measurement levels.

    Each level names the data types it naturally applies to. A level is
    compatible with a data type when that type and one of the level's natural
    types are related by subtyping, in either direction.
    """

    def __init__(
        self,
        levels: Iterable[MeasurementLevel],
        natural_types: dict[MeasurementLevel, tuple[DataType, ...]],
    ) -> None:
        self._levels: LevelTuple = tuple(levels)
        self._ranks = {level: rank for rank, level in enumerate(self._levels)}
        self._natural_types = dict(natural_types)

    @property
    def levels(self) -> LevelTuple:
        return self._levels

    def parse(self, value: MeasurementLevel | str) -> MeasurementLevel:
        """
        Convert a level identifier to a MeasurementLevel.

        Raises:
            DomainError: If the value is not one of the known levels.
        """
        try:
            level = MeasurementLevel(value)
        except ValueError as e:
            msg = f"Unknown measurement level {value!r}. Allowed: {[str(lv) for lv in self._levels]}"
            raise DomainError(msg) from e
        if level not in self._ranks:
            msg = f"Measurement level '{level}' is not part of this ordering."
            raise DomainError(msg)
        return level

    def rank(self, level: MeasurementLevel | str) -> int:
        return self._ranks[self.parse(level)]

    def sort(self, levels: Iterable[MeasurementLevel | str]) -> LevelTuple:
        """Parse, dedupe and sort levels in ascending order."""
        parsed = {self.parse(level) for level in levels}
        return tuple(sorted(parsed, key=self._ranks.__getitem__))

    def descending(self, levels: Iterable[MeasurementLevel | str]) -> LevelTuple:
        return tuple(reversed(self.sort(levels)))

    def highest(self, levels: Iterable[MeasurementLevel | str]) -> MeasurementLevel | None:
        ordered = self.sort(levels)
        return ordered[-1] if ordered else None

    def is_compatible(self, level: MeasurementLevel | str, data_type: DataType) -> bool:
        """Check whether data of `data_type` can be consumed at `level`."""
        natural = self._natural_types.get(self.parse(level), ())
        return any(
            data_type.is_subtype_of(candidate) or candidate.is_subtype_of(data_type)
            for candidate in natural
        )


LEVEL_ORDERING: Final[LevelOrdering] = LevelOrdering(
    LEVEL_ORDER,
    {
        level: tuple(BUILTIN_REGISTRY.resolve(type_id) for type_id in type_ids)
        for level, type_ids in LEVEL_NATURAL_DATA_TYPES.items()
    },
)
