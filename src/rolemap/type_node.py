import logging
import weakref
from collections.abc import Iterable, Iterator
from typing import Any

from role_models.types import LevelTuple, MeasurementLevel
from rolemap.context import TypeContext
from rolemap.data_types import DataType
from rolemap.exceptions import DuplicateTypeError, SchemaError
from rolemap.monotonic import DATA_TYPE, LEVELS

logger = logging.getLogger(__name__)


class MappingType:
    """
    A visual role mapping type: a node in a single-rooted hierarchy of types.

    A mapping type informs about the capabilities of a visual role through two
    monotonic, inherited attributes:

    * `levels` - the measurement levels the role has a mode of operation for.
      Levels can be added but never removed.
    * `data_type` - the type of data properties required by the role.
      It can only be narrowed to a subtype.

    Both become read-only as soon as the type is extended by a subtype.
    The parent is held weakly; each type owns its children, and the shared
    context owns every type of the hierarchy.
    """

    def __init__(
        self,
        type_id: str,
        parent: "MappingType | None" = None,
        *,
        is_abstract: bool = False,
        context: TypeContext | None = None,
    ) -> None:
        if parent is None and context is None:
            msg = f"Root mapping type '{type_id}' requires a context."
            raise SchemaError(msg)

        self.id = type_id
        self.is_abstract = is_abstract
        self.context: TypeContext = context or parent.context  # type: ignore[union-attr]
        self.children: list[MappingType] = []
        self._parent_ref = weakref.ref(parent) if parent is not None else None
        self._locals: dict[str, Any] = {}
        self._generation = 0
        self._has_subtypes = False

    @classmethod
    def create_root(cls, type_id: str, context: TypeContext) -> "MappingType":
        """Create an abstract root with no levels that accepts any data type."""
        with context.lock:
            if type_id in context.types:
                msg = f"Mapping type '{type_id}' is already defined."
                raise DuplicateTypeError(msg)
            root = cls(type_id, is_abstract=True, context=context)
            root.store_local(LEVELS.name, ())
            root.store_local(DATA_TYPE.name, context.data_types.root)
            context.types[type_id] = root
        return root

    # region hierarchy
    @property
    def parent(self) -> "MappingType | None":
        if self._parent_ref is None:
            return None
        parent = self._parent_ref()
        if parent is None:
            msg = f"The parent of mapping type '{self.id}' no longer exists."
            raise SchemaError(msg)
        return parent

    @property
    def has_subtypes(self) -> bool:
        return self._has_subtypes

    @property
    def depth(self) -> int:
        return sum(1 for _ in self.ancestors()) - 1

    def ancestors(self) -> Iterator["MappingType"]:
        """Yield this type and each of its ancestors, nearest first."""
        current: MappingType | None = self
        while current is not None:
            yield current
            current = current.parent

    def is_subtype_of(self, other: "MappingType") -> bool:
        return any(ancestor is other for ancestor in self.ancestors())

    def extend(self, type_id: str, *, is_abstract: bool = False) -> "MappingType":
        """
        Create a subtype of this type.

        The first call permanently seals this type's `levels` and `data_type`.

        Raises:
            DuplicateTypeError: If `type_id` is already used in this hierarchy.
        """
        with self.context.lock:
            if type_id in self.context.types:
                msg = f"Mapping type '{type_id}' is already defined."
                logger.error(msg)
                raise DuplicateTypeError(msg)

            child = MappingType(type_id, self, is_abstract=is_abstract)
            self.children.append(child)
            self.context.types[type_id] = child
            if not self._has_subtypes:
                self._has_subtypes = True
                logger.debug(f"Mapping type '{self.id}' is now sealed by subtype '{type_id}'.")
        return child
    # endregion

    # region local values
    @property
    def generation(self) -> int:
        """Counter incremented on every change of a local value."""
        return self._generation

    def get_local(self, name: str) -> Any:
        return self._locals.get(name)

    def store_local(self, name: str, value: Any) -> None:
        """Store a local value without checks. Use the attribute setters instead."""
        self._locals[name] = value
        self._generation += 1
        self.context.resolver.invalidate(self)
    # endregion

    # region levels
    @property
    def levels(self) -> LevelTuple:
        """
        The effective measurement levels of the type: its local value, or the
        inherited one. Do not modify the returned value.
        """
        return LEVELS.effective(self)

    @property
    def levels_local(self) -> LevelTuple | None:
        return LEVELS.local(self)

    def set_levels(self, value: Iterable[MeasurementLevel | str] | None) -> None:
        """
        Set the measurement levels of the type. Setting None is ignored.

        Raises:
            SealedTypeError: If the type already has subtypes.
            NonMonotonicError: If a level in force would be removed.
            DomainError: If a value is not a measurement level.
        """
        LEVELS.try_set_local(self, value)
    # endregion

    # region data type
    @property
    def data_type(self) -> DataType:
        """The effective data type required by the visual role."""
        return DATA_TYPE.effective(self)

    @property
    def data_type_local(self) -> DataType | None:
        return DATA_TYPE.local(self)

    def set_data_type(self, value: DataType | str | None) -> None:
        """
        Set the data type of the type. Setting None is ignored.
        String references are resolved through the hierarchy's data type registry.

        Raises:
            SealedTypeError: If the type already has subtypes.
            NonMonotonicError: If the value is not a subtype of the current data type.
            UnknownTypeError: If the reference cannot be resolved.
        """
        DATA_TYPE.try_set_local(self, value)
    # endregion

    @property
    def levels_effective(self) -> LevelTuple:
        """
        The levels the visual role effectively supports, once its data type is
        considered: a subset of `levels`, in ascending order.

        An empty result means the type is not usable yet. Do not modify the
        returned value.
        """
        return self.context.resolver.levels_effective(self)

    def __repr__(self) -> str:
        return f"MappingType({self.id!r})"
