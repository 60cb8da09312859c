import logging
import weakref
from typing import TYPE_CHECKING, NamedTuple

from role_models.types import LevelTuple
from rolemap.levels import LEVEL_ORDERING, LevelOrdering
from rolemap.monotonic import DATA_TYPE, LEVELS

if TYPE_CHECKING:
    from rolemap.type_node import MappingType

logger = logging.getLogger(__name__)


class _CacheEntry(NamedTuple):
    generation: int
    levels: LevelTuple


class ResolverStats(NamedTuple):
    hits: int
    misses: int


class EffectiveLevelResolver:
    """
    Computes and caches the levels a mapping type can effectively operate on.

    The effective levels are the type's levels that are compatible with its
    data type, in ascending order. Results are cached per type together with
    the type's generation, so any change to the type's own local levels or data
    type forces a recomputation. Ancestors are sealed once subtyped, so their
    values cannot go stale underneath a cached entry.
    """

    def __init__(self, ordering: LevelOrdering = LEVEL_ORDERING) -> None:
        self.ordering = ordering
        self._cache: weakref.WeakKeyDictionary[MappingType, _CacheEntry] = (
            weakref.WeakKeyDictionary()
        )
        self._hits = 0
        self._misses = 0

    @property
    def stats(self) -> ResolverStats:
        return ResolverStats(hits=self._hits, misses=self._misses)

    def levels_effective(self, node: "MappingType") -> LevelTuple:
        """
        Get the effective levels of `node`.

        The returned tuple is shared; the same object is returned until the
        type's local levels or data type change.
        """
        entry = self._cache.get(node)
        if entry is not None and entry.generation == node.generation:
            self._hits += 1
            return entry.levels

        with node.context.lock:
            generation = node.generation
            levels = LEVELS.effective(node)
            data_type = DATA_TYPE.effective(node)
            result = tuple(
                level for level in self.ordering.sort(levels)
                if self.ordering.is_compatible(level, data_type)
            )
            self._cache[node] = _CacheEntry(generation, result)
            self._misses += 1

        logger.debug(
            f"Computed effective levels of '{node.id}' (generation {generation}): "
            f"{[str(level) for level in result]}"
        )
        return result

    def invalidate(self, node: "MappingType") -> None:
        """Drop the cached effective levels of `node`."""
        self._cache.pop(node, None)
