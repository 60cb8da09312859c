import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from role_models.constants import ROOT_TYPE_ID
from role_models.types import MeasurementLevel

logger = logging.getLogger(__name__)


class DataTypeSpec(BaseModel):
    """Declaration of a custom data type extending a registered one."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(..., min_length=1, description="Identifier of the new data type.")
    base: str = Field(default="value", min_length=1, description="Identifier of the base type.")


class MappingTypeSpec(BaseModel):
    """
    Declaration record of a mapping type.

    The type extends `base` (the root mapping type when omitted). When present,
    `levels` and `data_type` are applied as the type's local values.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(..., min_length=1, description="Unique identifier of the mapping type.")
    base: str = Field(
        default=ROOT_TYPE_ID, min_length=1, description="Identifier of the extended type."
    )
    is_abstract: bool = Field(
        default=False, description="Abstract types cannot back mapping instances."
    )
    levels: list[MeasurementLevel] | None = Field(
        default=None, description="Measurement levels supported by the visual role."
    )
    data_type: str | None = Field(
        default=None, description="Identifier of the data type required by the visual role."
    )

    @field_validator("id", "base")
    @classmethod
    def validate_identifier(cls, v: str) -> str:
        """Reject blank identifiers."""
        if not v.strip():
            msg = "Type identifiers cannot be blank."
            raise ValueError(msg)
        return v.strip()

    @model_validator(mode="after")
    def check_not_self_based(self) -> "MappingTypeSpec":
        """A type cannot extend itself."""
        if self.id == self.base:
            msg = f"Mapping type '{self.id}' cannot extend itself."
            logger.error(msg)
            raise ValueError(msg)
        return self


class SchemaDocument(BaseModel):
    """A serialisable set of data type and mapping type declarations, in definition order."""

    model_config = ConfigDict(extra="forbid")

    data_types: list[DataTypeSpec] = Field(default_factory=list)
    types: list[MappingTypeSpec] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def accept_type_list(cls, data: Any) -> Any:
        """Allow a bare list of mapping type declarations."""
        if isinstance(data, list):
            return {"types": data}
        return data
