from collections.abc import Callable, Iterable
from typing import TypeAlias

from role_models.types import MeasurementLevel

# Resolves an attribute name to the measurement levels its data naturally supports.
# Returning None (or nothing) means the attribute cannot be resolved.
NaturalLevelSource: TypeAlias = Callable[[str], Iterable[MeasurementLevel | str] | None]
