import logging
from collections.abc import Iterable

from role_models.types import LevelTuple, MeasurementLevel
from rolemap.exceptions import DomainError
from rolemap.levels import LEVEL_ORDERING

logger = logging.getLogger(__name__)


class StaticLevelCatalog:
    """
    A natural level source backed by a fixed table of attribute names.

    Instances are callable and can be given to a mapping as its
    `natural_levels` capability.
    """

    def __init__(self, levels_by_name: dict[str, Iterable[MeasurementLevel | str]] | None = None) -> None:
        self._levels: dict[str, LevelTuple] = {}
        for name, levels in (levels_by_name or {}).items():
            self.register(name, levels)

    def register(self, name: str, levels: Iterable[MeasurementLevel | str]) -> None:
        """
        Register the natural levels of an attribute.

        Raises:
            DomainError: If a level is unknown.
        """
        if isinstance(levels, str):
            levels = (levels,)
        self._levels[name] = LEVEL_ORDERING.sort(levels)

    @classmethod
    def from_entries(cls, entries: Iterable[str]) -> "StaticLevelCatalog":
        """
        Build a catalog from `NAME=LEVEL[,LEVEL...]` entries.

        Raises:
            DomainError: If an entry is malformed or names an unknown level.
        """
        catalog = cls()
        for entry in entries:
            name, sep, raw_levels = entry.partition("=")
            if not sep or not name.strip():
                msg = f"Invalid attribute entry {entry!r}. Expected NAME=LEVEL[,LEVEL...]."
                raise DomainError(msg)
            levels = [part.strip() for part in raw_levels.split(",") if part.strip()]
            catalog.register(name.strip(), levels)
        return catalog

    def __call__(self, name: str) -> LevelTuple | None:
        return self._levels.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._levels

    def __len__(self) -> int:
        return len(self._levels)
