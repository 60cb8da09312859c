from concurrent.futures import ThreadPoolExecutor

import pytest

from role_models.types import MeasurementLevel
from rolemap.catalog import StaticLevelCatalog
from rolemap.exceptions import SealedTypeError
from rolemap.schema import RoleSchema

NOMINAL = MeasurementLevel.NOMINAL
ORDINAL = MeasurementLevel.ORDINAL
QUANTITATIVE = MeasurementLevel.QUANTITATIVE

NUM_THREADS = 4
READS_PER_THREAD = 200


@pytest.fixture
def chart_schema() -> RoleSchema:
    """A small hierarchy of visual roles of a bar chart."""
    schema = RoleSchema()
    schema.load(
        {
            "data_types": [{"id": "currency", "base": "number"}],
            "types": [
                {"id": "discrete_role", "is_abstract": True, "levels": ["nominal"]},
                {"id": "rows", "base": "discrete_role", "levels": ["nominal", "ordinal"]},
                {"id": "color", "base": "discrete_role", "levels": ["nominal", "quantitative"]},
                {
                    "id": "measure_role",
                    "is_abstract": True,
                    "levels": ["quantitative"],
                    "data_type": "number",
                },
                {"id": "measures", "base": "measure_role", "data_type": "currency"},
            ],
        }
    )
    return schema


def test_chart_roles(chart_schema: RoleSchema) -> None:
    catalog = StaticLevelCatalog(
        {"region": ["nominal"], "quarter": ["nominal", "ordinal"], "revenue": ["quantitative"]}
    )

    rows = chart_schema.create_mapping("rows", attrs=["region", "quarter"], natural_levels=catalog)
    color = chart_schema.create_mapping("color", attrs=["revenue"], natural_levels=catalog)
    measures = chart_schema.create_mapping("measures", attrs=["revenue"], natural_levels=catalog)

    assert rows.level_effective == NOMINAL
    assert color.level_effective == QUANTITATIVE
    assert measures.levels_effective == (QUANTITATIVE,)
    assert measures.level_effective == QUANTITATIVE

    # Fixing an unsupported level only invalidates the mapping
    rows.level = QUANTITATIVE
    assert rows.level_effective is None
    rows.level = ORDINAL
    assert rows.level_effective == ORDINAL


def test_sealed_bases_keep_their_values(chart_schema: RoleSchema) -> None:
    discrete = chart_schema.get("discrete_role")

    with pytest.raises(SealedTypeError):
        discrete.set_levels(["nominal", "ordinal"])

    for child in discrete.children:
        assert set(child.levels) >= set(discrete.levels)


def test_concurrent_reads_after_build(chart_schema: RoleSchema) -> None:
    """Once built, the hierarchy can be read from several threads."""
    expected = {node.id: node.levels_effective for node in chart_schema}

    def read_all() -> dict[str, tuple[MeasurementLevel, ...]]:
        result = {}
        for _ in range(READS_PER_THREAD):
            result = {node.id: node.levels_effective for node in chart_schema}
        return result

    with ThreadPoolExecutor(max_workers=NUM_THREADS) as executor:
        futures = [executor.submit(read_all) for _ in range(NUM_THREADS)]
        results = [f.result() for f in futures]

    assert all(result == expected for result in results)


def test_concurrent_definitions(chart_schema: RoleSchema) -> None:
    def define(index: int) -> str:
        node = chart_schema.define(
            {"id": f"detail_{index}", "base": "discrete_role", "levels": ["nominal", "ordinal"]}
        )
        return node.id

    with ThreadPoolExecutor(max_workers=NUM_THREADS) as executor:
        ids = list(executor.map(define, range(NUM_THREADS * 4)))

    assert all(type_id in chart_schema for type_id in ids)
    assert len(chart_schema.get("discrete_role").children) == 2 + NUM_THREADS * 4
