import os
from typing import Self

from pydantic import BaseModel, ConfigDict, Field

from role_models.constants import (
    DEFAULT_LEVEL_COMPATIBILITY,
    ENV_LEVEL_COMPATIBILITY,
    ENV_REQUIRE_CONCRETE_LEVELS,
)
from role_models.types import LevelCompatibility

_TRUTHY = {"1", "true", "yes", "on"}


def _safe_getenv(key: str, default: str) -> str:
    """Safely get environment variable with fallback."""
    val = os.getenv(key)
    if val is None or not val.strip():
        return default
    return val.strip()


class ResolutionConfig(BaseModel):
    """
    Configuration for level resolution and schema checks.

    Defaults are defined directly in the model or via default_factory using os.getenv.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    level_compatibility: LevelCompatibility = Field(
        default_factory=lambda: _safe_getenv(
            ENV_LEVEL_COMPATIBILITY, DEFAULT_LEVEL_COMPATIBILITY
        ).lower(),
        validate_default=True,
        description="Test used to match a candidate level against an attribute's natural levels.",
    )
    require_concrete_levels: bool = Field(
        default_factory=lambda: _safe_getenv(ENV_REQUIRE_CONCRETE_LEVELS, "false").lower()
        in _TRUTHY,
        description="Reject concrete mapping types that end up with no effective levels.",
    )

    @classmethod
    def default(cls) -> Self:
        """
        Returns the default configuration using Pydantic defaults.
        """
        return cls()

    @classmethod
    def strict(cls) -> Self:
        """
        Returns a configuration that rejects unusable concrete types.
        """
        return cls(require_concrete_levels=True)
