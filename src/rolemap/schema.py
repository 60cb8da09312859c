import logging
from collections.abc import Iterable, Iterator
from typing import Any

from role_models.config import ResolutionConfig
from role_models.constants import ROOT_TYPE_ID, WARN_CONCRETE_WITHOUT_LEVELS
from role_models.type_spec import MappingTypeSpec, SchemaDocument
from role_models.types import MeasurementLevel
from rolemap.binding import AttributeBinding
from rolemap.context import TypeContext
from rolemap.data_types import DataType
from rolemap.exceptions import ConcreteTypeError, DuplicateTypeError, UnknownTypeError
from rolemap.interfaces import NaturalLevelSource
from rolemap.mapping import Mapping
from rolemap.monotonic import DATA_TYPE, LEVELS
from rolemap.type_node import MappingType

logger = logging.getLogger(__name__)


class RoleSchema:
    """
    A hierarchy of visual role mapping types.

    Owns the root mapping type, which is abstract, supports no measurement
    levels and accepts any data type, and the context shared by every type
    defined below it.
    """

    def __init__(self, config: ResolutionConfig | None = None) -> None:
        self.context = TypeContext(config=config)
        self.root = MappingType.create_root(ROOT_TYPE_ID, self.context)

    @classmethod
    def from_document(
        cls, document: SchemaDocument | dict[str, Any] | list[Any], config: ResolutionConfig | None = None
    ) -> "RoleSchema":
        schema = cls(config=config)
        schema.load(document)
        return schema

    @property
    def config(self) -> ResolutionConfig:
        return self.context.config

    def get(self, type_ref: MappingType | str) -> MappingType:
        """
        Resolve a mapping type reference.

        Raises:
            UnknownTypeError: If the type is not part of this schema.
        """
        if isinstance(type_ref, MappingType):
            if self.context.types.get(type_ref.id) is not type_ref:
                msg = f"Mapping type '{type_ref.id}' does not belong to this schema."
                raise UnknownTypeError(msg)
            return type_ref
        node = self.context.types.get(type_ref)
        if node is None:
            msg = f"Unknown mapping type '{type_ref}'."
            raise UnknownTypeError(msg)
        return node

    def register_data_type(self, type_id: str, base: DataType | str = "value") -> DataType:
        return self.context.data_types.register(type_id, base)

    def define(self, spec: MappingTypeSpec | dict[str, Any]) -> MappingType:
        """
        Define a mapping type from its declaration record.

        The declaration is checked in full before the base type is extended, so
        a rejected declaration leaves the schema unchanged.

        Raises:
            DuplicateTypeError: If the identifier is already used.
            UnknownTypeError: If the base type or the data type is unknown.
            NonMonotonicError: If levels or data type break monotonicity with the base.
            DomainError: If a level is unknown.
            ConcreteTypeError: In strict mode, if a concrete type has no effective levels.
        """
        if not isinstance(spec, MappingTypeSpec):
            spec = MappingTypeSpec.model_validate(spec)

        with self.context.lock:
            if spec.id in self.context.types:
                msg = f"Mapping type '{spec.id}' is already defined."
                logger.error(msg)
                raise DuplicateTypeError(msg)
            base = self.get(spec.base)

            levels = LEVELS.coerce(base, spec.levels) if spec.levels is not None else base.levels
            data_type = (
                DATA_TYPE.coerce(base, spec.data_type)
                if spec.data_type is not None
                else base.data_type
            )
            if not spec.is_abstract:
                self._check_concrete(spec.id, levels, data_type)

            node = base.extend(spec.id, is_abstract=spec.is_abstract)
            if spec.levels is not None:
                node.set_levels(levels)
            if spec.data_type is not None:
                node.set_data_type(data_type)

        logger.info(
            f"Defined mapping type '{node.id}' extending '{base.id}' "
            f"(levels={[str(level) for level in node.levels]}, data_type={node.data_type})."
        )
        return node

    def load(self, document: SchemaDocument | dict[str, Any] | list[Any]) -> list[MappingType]:
        """Register the custom data types, then define the mapping types, in order."""
        if not isinstance(document, SchemaDocument):
            document = SchemaDocument.model_validate(document)

        for data_type_spec in document.data_types:
            self.register_data_type(data_type_spec.id, data_type_spec.base)
        return [self.define(spec) for spec in document.types]

    def create_mapping(
        self,
        type_ref: MappingType | str,
        *,
        level: MeasurementLevel | str | None = None,
        attrs: Iterable[AttributeBinding | dict[str, Any] | str] = (),
        natural_levels: NaturalLevelSource | None = None,
    ) -> Mapping:
        """
        Create a mapping instance of a concrete mapping type.

        Raises:
            UnknownTypeError: If the mapping type is unknown.
            AbstractTypeError: If the mapping type is abstract.
        """
        return Mapping(
            mapping_type=self.get(type_ref),
            level=level,
            attrs=tuple(attrs),
            natural_levels=natural_levels,
        )

    def _check_concrete(self, type_id: str, levels: Iterable[MeasurementLevel], data_type: DataType) -> None:
        ordering = self.context.resolver.ordering
        if any(ordering.is_compatible(level, data_type) for level in levels):
            return
        msg = WARN_CONCRETE_WITHOUT_LEVELS.format(type_id)
        if self.config.require_concrete_levels:
            logger.error(msg)
            raise ConcreteTypeError(msg)
        logger.warning(msg)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self.context.types

    def __iter__(self) -> Iterator[MappingType]:
        """Iterate over the types depth-first, parents before children."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def __len__(self) -> int:
        return sum(1 for _ in self)
