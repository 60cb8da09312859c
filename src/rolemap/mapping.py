import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from role_models.types import LevelCompatibility, LevelTuple, MeasurementLevel
from rolemap.binding import AttributeBinding
from rolemap.exceptions import AbstractTypeError, DomainError
from rolemap.interfaces import NaturalLevelSource
from rolemap.levels import LEVEL_ORDERING
from rolemap.type_node import MappingType

logger = logging.getLogger(__name__)


class Mapping(BaseModel):
    """
    A visual role mapping: binds data properties ("attributes") to a visual role
    whose capabilities are described by a concrete mapping type.

    Reading the derived properties of a mapping never raises. An invalid mapping,
    such as one with a fixed level the type does not support or with attributes
    that cannot be resolved, reports no effective or automatic level instead.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True, validate_assignment=True, extra="forbid"
    )

    mapping_type: MappingType = Field(
        ..., frozen=True, description="The mapping type describing the visual role."
    )
    level: MeasurementLevel | None = Field(
        default=None,
        description="Fixed measurement level. When None, the automatic level is used.",
    )
    attrs: tuple[AttributeBinding, ...] = Field(
        default=(),
        description="The bound attributes, in binding order. Reassign to change them.",
    )
    natural_levels: NaturalLevelSource | None = Field(
        default=None,
        exclude=True,
        repr=False,
        description="Resolves an attribute name to the levels its data naturally supports.",
    )

    @field_validator("level", mode="before")
    @classmethod
    def parse_level(cls, v: Any) -> MeasurementLevel | None:
        """Restrict the fixed level to the measurement level vocabulary."""
        if v is None:
            return None
        return LEVEL_ORDERING.parse(v)

    @model_validator(mode="after")
    def check_concrete_type(self) -> "Mapping":
        if self.mapping_type.is_abstract:
            msg = f"Cannot create a mapping of abstract mapping type '{self.mapping_type.id}'."
            logger.error(msg)
            raise AbstractTypeError(msg)
        return self

    @property
    def levels_effective(self) -> LevelTuple:
        return self.mapping_type.levels_effective

    @property
    def level_effective(self) -> MeasurementLevel | None:
        """
        The measurement level the visual role will effectively operate on.

        The fixed `level` when it is supported by the mapping type, None when it
        is not, and `level_auto` when no level is fixed.
        """
        if self.level is not None:
            return self.level if self.level in self.levels_effective else None
        return self.level_auto

    @property
    def level_auto(self) -> MeasurementLevel | None:
        """
        The automatically determined measurement level.

        None when the mapping has no attributes or is invalid. Otherwise the
        highest effective level of the mapping type that every bound attribute
        is compatible with, or None if there is no such level.
        """
        if not self.attrs or self.errors():
            return None

        natural = [self._natural_levels_of(binding) or () for binding in self.attrs]
        for candidate in LEVEL_ORDERING.descending(self.levels_effective):
            if all(self._accepts(candidate, levels) for levels in natural):
                return candidate
        return None

    @property
    def is_valid(self) -> bool:
        return not self.errors()

    def errors(self) -> list[str]:
        """List the reasons why the mapping is invalid. Empty when valid."""
        problems: list[str] = []

        if self.level is not None and self.level not in self.levels_effective:
            problems.append(
                f"Level '{self.level}' is not supported by mapping type "
                f"'{self.mapping_type.id}'. "
                f"Supported: {[str(level) for level in self.levels_effective]}"
            )

        seen: set[tuple[Any, str]] = set()
        for binding in self.attrs:
            if binding.key in seen:
                problems.append(
                    f"Attribute '{binding.name}' is bound more than once with "
                    f"aggregation '{binding.aggregation}'."
                )
            seen.add(binding.key)
            if not self._natural_levels_of(binding):
                problems.append(f"Attribute '{binding.name}' cannot be resolved.")

        return problems

    def _natural_levels_of(self, binding: AttributeBinding) -> LevelTuple | None:
        if self.natural_levels is None:
            return None
        try:
            levels = self.natural_levels(binding.name)
            if levels is None:
                return None
            if isinstance(levels, str):
                levels = (levels,)
            return LEVEL_ORDERING.sort(levels)
        except (LookupError, ValueError, TypeError, DomainError) as e:
            logger.warning(f"Failed to resolve natural levels of attribute '{binding.name}': {e}")
            return None

    def _accepts(self, candidate: MeasurementLevel, natural: LevelTuple) -> bool:
        if self.mapping_type.context.config.level_compatibility == LevelCompatibility.DEGRADABLE:
            highest = LEVEL_ORDERING.highest(natural)
            return highest is not None and (
                LEVEL_ORDERING.rank(candidate) <= LEVEL_ORDERING.rank(highest)
            )
        return candidate in natural
