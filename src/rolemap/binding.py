import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from role_models.constants import DEFAULT_AGGREGATION
from role_models.types import Aggregation
from rolemap.exceptions import DomainError, RequiredFieldError

logger = logging.getLogger(__name__)


class AttributeBinding(BaseModel):
    """
    A data property ("attribute") bound to a visual role mapping.

    Immutable; two bindings with the same values are equal.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., description="Name of the data property.")
    aggregation: Aggregation = Field(
        default=DEFAULT_AGGREGATION, description="Aggregation applied to the data property."
    )
    is_reverse: bool = Field(default=False, description="Whether the ordering is reversed.")

    @model_validator(mode="before")
    @classmethod
    def check_name_and_aggregation(cls, data: Any) -> Any:
        """
        Accept a bare attribute name, require a non-empty name and
        restrict the aggregation to its vocabulary.
        """
        if isinstance(data, str):
            data = {"name": data}
        if not isinstance(data, dict):
            return data

        name = data.get("name")
        if name is None or (isinstance(name, str) and not name.strip()):
            msg = "Attribute binding requires a non-empty 'name'."
            raise RequiredFieldError(msg)

        if data.get("aggregation") is None:
            # A null aggregation falls back to the default
            return {k: v for k, v in data.items() if k != "aggregation"}

        try:
            Aggregation(data["aggregation"])
        except ValueError as e:
            msg = (
                f"Aggregation {data['aggregation']!r} is not allowed. "
                f"Allowed: {[str(a) for a in Aggregation]}"
            )
            raise DomainError(msg) from e
        return data

    @property
    def key(self) -> tuple[Aggregation, str]:
        """Identifies the binding within a mapping: one per aggregation and name."""
        return (self.aggregation, self.name)
