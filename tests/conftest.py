import pytest

from role_models.types import MeasurementLevel
from rolemap.catalog import StaticLevelCatalog
from rolemap.schema import RoleSchema
from rolemap.type_node import MappingType

ALL_LEVELS = [
    MeasurementLevel.NOMINAL,
    MeasurementLevel.ORDINAL,
    MeasurementLevel.QUANTITATIVE,
]


@pytest.fixture
def schema() -> RoleSchema:
    return RoleSchema()


@pytest.fixture
def axis_type(schema: RoleSchema) -> MappingType:
    """A concrete role supporting every level and accepting any data."""
    return schema.define({"id": "axis", "levels": ALL_LEVELS})


@pytest.fixture
def catalog() -> StaticLevelCatalog:
    return StaticLevelCatalog(
        {
            "country": ["nominal"],
            "size": ["nominal", "ordinal"],
            "sales": ["quantitative"],
            "rank": ["nominal", "ordinal", "quantitative"],
        }
    )
