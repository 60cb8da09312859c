import logging
from collections.abc import Iterator
from typing import Final

from pydantic import BaseModel, ConfigDict, Field

from role_models.constants import BUILTIN_DATA_TYPES, ROOT_DATA_TYPE_ID
from rolemap.exceptions import DuplicateTypeError, UnknownTypeError

logger = logging.getLogger(__name__)


class DataType(BaseModel):
    """A node in the data type hierarchy a visual role can require."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(..., min_length=1, description="Identifier of the data type.")
    base: "DataType | None" = Field(default=None, description="The extended data type.")

    def ancestors(self) -> Iterator["DataType"]:
        """Yield this type and each of its bases, nearest first."""
        current: DataType | None = self
        while current is not None:
            yield current
            current = current.base

    def is_subtype_of(self, other: "DataType") -> bool:
        """True if this type is `other` or extends it, directly or not."""
        return any(ancestor.id == other.id for ancestor in self.ancestors())

    def __str__(self) -> str:
        return self.id


class DataTypeRegistry:
    """
    Registry of data types addressable by identifier.
    Seeded with the built-in hierarchy rooted at `value`.
    """

    def __init__(self, seed: "DataTypeRegistry | None" = None) -> None:
        self._types: dict[str, DataType] = {}
        if seed is not None:
            self._types.update(seed._types)
        else:
            for type_id, base_id in BUILTIN_DATA_TYPES:
                base = self._types[base_id] if base_id else None
                self._types[type_id] = DataType(id=type_id, base=base)

    @property
    def root(self) -> DataType:
        """The universal data type every other type extends."""
        return self._types[ROOT_DATA_TYPE_ID]

    def register(self, type_id: str, base: "DataType | str" = "value") -> DataType:
        """
        Add a custom data type extending `base`.

        Raises:
            DuplicateTypeError: If `type_id` is already registered.
            UnknownTypeError: If `base` cannot be resolved.
        """
        if type_id in self._types:
            msg = f"Data type '{type_id}' is already registered."
            logger.error(msg)
            raise DuplicateTypeError(msg)
        data_type = DataType(id=type_id, base=self.resolve(base))
        self._types[type_id] = data_type
        logger.debug(f"Registered data type '{type_id}' extending '{data_type.base}'.")
        return data_type

    def resolve(self, ref: "DataType | str") -> DataType:
        """
        Resolve a data type reference.

        Raises:
            UnknownTypeError: If the reference is not registered.
        """
        type_id = ref.id if isinstance(ref, DataType) else ref
        try:
            resolved = self._types[type_id]
        except KeyError as e:
            msg = f"Unknown data type '{type_id}'."
            raise UnknownTypeError(msg) from e
        if isinstance(ref, DataType) and ref != resolved:
            msg = f"Data type '{type_id}' does not match the registered definition."
            raise UnknownTypeError(msg)
        return resolved

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._types

    def __iter__(self) -> Iterator[DataType]:
        return iter(self._types.values())


BUILTIN_REGISTRY: Final[DataTypeRegistry] = DataTypeRegistry()
