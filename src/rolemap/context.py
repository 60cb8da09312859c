import threading
from typing import TYPE_CHECKING

from role_models.config import ResolutionConfig
from rolemap.data_types import BUILTIN_REGISTRY, DataTypeRegistry
from rolemap.resolver import EffectiveLevelResolver

if TYPE_CHECKING:
    from rolemap.type_node import MappingType


class TypeContext:
    """
    State shared by all mapping types of one hierarchy.

    Holds the schema lock, the effective level resolver, the data type registry
    and the resolution configuration. Types are never deleted: the index keeps
    every type of the hierarchy alive for as long as any of them is reachable.
    """

    def __init__(
        self,
        config: ResolutionConfig | None = None,
        data_types: DataTypeRegistry | None = None,
        resolver: EffectiveLevelResolver | None = None,
    ) -> None:
        self.config = config or ResolutionConfig.default()
        self.data_types = data_types or DataTypeRegistry(seed=BUILTIN_REGISTRY)
        self.resolver = resolver or EffectiveLevelResolver()
        self.lock = threading.RLock()
        self.types: dict[str, MappingType] = {}
