"""
Hierarchical attributes whose local value can only move in one direction.

An attribute without a local value on a mapping type takes the effective value
of the nearest ancestor that has one, down to the base value of the root.
Once localized, a value may only change in the attribute's monotonic
direction, and it cannot change at all after the type has been subtyped.
"""

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from role_models.types import LevelTuple, MeasurementLevel
from rolemap.data_types import DataType
from rolemap.exceptions import NonMonotonicError, SealedTypeError
from rolemap.levels import LEVEL_ORDERING

if TYPE_CHECKING:
    from rolemap.type_node import MappingType

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MonotonicAttribute(Generic[T]):
    """
    An inherited attribute of mapping types with a monotonic direction of change.

    Args:
        name: Key of the local value on the mapping type.
        base: Returns the value in force when no type in the chain has a local one.
        normalize: Converts a proposed value to the stored representation.
        is_monotonic: `(current, proposed) -> bool`, True when the change is allowed.
        direction: Human readable description of the allowed direction, for errors.
    """

    def __init__(
        self,
        name: str,
        *,
        base: Callable[["MappingType"], T],
        normalize: Callable[["MappingType", Any], T],
        is_monotonic: Callable[[T, T], bool],
        direction: str,
    ) -> None:
        self.name = name
        self._base = base
        self._normalize = normalize
        self._is_monotonic = is_monotonic
        self.direction = direction

    def local(self, node: "MappingType") -> T | None:
        return node.get_local(self.name)

    def effective(self, node: "MappingType") -> T:
        """Walk up the parent chain until a local value is found."""
        current: MappingType | None = node
        last: MappingType = node
        while current is not None:
            value = current.get_local(self.name)
            if value is not None:
                return value
            last = current
            current = current.parent
        return self._base(last)

    def inherited(self, node: "MappingType") -> T:
        """The effective value of the parent, or the base value at the root."""
        parent = node.parent
        return self.effective(parent) if parent is not None else self._base(node)

    def coerce(self, node: "MappingType", value: Any) -> T:
        """
        Normalize `value` and check it against the effective value of `node`.

        Raises:
            NonMonotonicError: If the value moves against the allowed direction.
        """
        proposed = self._normalize(node, value)
        current = self.effective(node)
        if not self._is_monotonic(current, proposed):
            msg = (
                f"Cannot set '{self.name}' of mapping type '{node.id}' to {_describe(proposed)}: "
                f"{self.direction} the current value {_describe(current)}."
            )
            logger.error(msg)
            raise NonMonotonicError(msg)
        return proposed

    def try_set_local(self, node: "MappingType", value: Any) -> None:
        """
        Set the local value of the attribute on `node`.

        A None value is ignored. On failure the stored value is left unchanged.

        Raises:
            SealedTypeError: If the mapping type already has subtypes.
            NonMonotonicError: If the value moves against the allowed direction.
        """
        if value is None:
            logger.debug(f"Ignoring null '{self.name}' for mapping type '{node.id}'.")
            return

        with node.context.lock:
            if node.has_subtypes:
                msg = f"Cannot set '{self.name}' of mapping type '{node.id}': it already has subtypes."
                logger.error(msg)
                raise SealedTypeError(msg)

            proposed = self.coerce(node, value)
            if proposed == self.local(node):
                return

            node.store_local(self.name, proposed)
            logger.debug(f"Set '{self.name}' of mapping type '{node.id}' to {_describe(proposed)}.")


def _describe(value: Any) -> str:
    if isinstance(value, tuple):
        return "[" + ", ".join(str(item) for item in value) + "]"
    return f"'{value}'"


def _normalize_levels(_node: "MappingType", value: Any) -> LevelTuple:
    if isinstance(value, str):
        value = (value,)
    return LEVEL_ORDERING.sort(value)


def _normalize_data_type(node: "MappingType", value: Any) -> DataType:
    return node.context.data_types.resolve(value)


def _is_superset(current: Iterable[MeasurementLevel], proposed: Iterable[MeasurementLevel]) -> bool:
    return set(proposed) >= set(current)


def _is_subtype(current: DataType, proposed: DataType) -> bool:
    return proposed.is_subtype_of(current)


LEVELS: MonotonicAttribute[LevelTuple] = MonotonicAttribute(
    "levels",
    base=lambda _node: (),
    normalize=_normalize_levels,
    is_monotonic=_is_superset,
    direction="levels can only be added, the value must include",
)

DATA_TYPE: MonotonicAttribute[DataType] = MonotonicAttribute(
    "data_type",
    base=lambda node: node.context.data_types.root,
    normalize=_normalize_data_type,
    is_monotonic=_is_subtype,
    direction="the data type can only be narrowed, the value must be a subtype of",
)
