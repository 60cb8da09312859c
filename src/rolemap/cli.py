import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from role_models.config import ResolutionConfig
from role_models.types import LevelCompatibility
from rolemap.catalog import StaticLevelCatalog
from rolemap.exceptions import RoleMapError
from rolemap.schema import RoleSchema
from rolemap.utils.io import read_json

logging.basicConfig(
    level=logging.WARNING, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

app = typer.Typer(
    name="rolemap",
    help="Rolemap: inspect visual role mapping types and resolve their measurement levels.",
    add_completion=False,
)

SchemaFileArg = Annotated[
    Path,
    typer.Argument(
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help="Path to a JSON schema document.",
    ),
]


def _fail_with_error(message: str) -> NoReturn:
    """Centralized error handling: Log error and exit with code 1."""
    typer.echo(message, err=True)
    logger.error(message)
    raise typer.Exit(code=1)


def _load_schema(schema_file: Path, config: ResolutionConfig | None = None) -> RoleSchema:
    try:
        return RoleSchema.from_document(read_json(schema_file), config=config)
    except (RoleMapError, ValueError, FileNotFoundError) as e:
        _fail_with_error(f"Invalid schema document: {e}")


def _join(values: Iterable[object]) -> str:
    items = [str(value) for value in values]
    return ", ".join(items) if items else "-"


@app.command()
def levels(schema_file: SchemaFileArg) -> None:
    """
    List every mapping type with its levels, data type and effective levels.
    """
    schema = _load_schema(schema_file)
    for node in schema:
        parent = node.parent
        flags = " (abstract)" if node.is_abstract else ""
        typer.echo(f"{'  ' * node.depth}{node.id}{flags}")
        typer.echo(f"{'  ' * node.depth}  base: {parent.id if parent else '-'}")
        typer.echo(f"{'  ' * node.depth}  data type: {node.data_type}")
        typer.echo(f"{'  ' * node.depth}  levels: {_join(node.levels)}")
        typer.echo(f"{'  ' * node.depth}  effective: {_join(node.levels_effective)}")


@app.command()
def auto(
    schema_file: SchemaFileArg,
    type_id: Annotated[str, typer.Argument(help="Identifier of a concrete mapping type.")],
    attr: Annotated[
        list[str] | None,
        typer.Option(
            "--attr",
            "-a",
            help="Bound attribute and its natural levels: NAME=LEVEL[,LEVEL...]. Repeatable.",
        ),
    ] = None,
    level: Annotated[
        str | None, typer.Option("--level", "-l", help="Fixed measurement level.")
    ] = None,
    compat: Annotated[
        LevelCompatibility | None,
        typer.Option(
            "--compat",
            help="How attribute levels are matched against candidates. "
            "Defaults to ROLEMAP_LEVEL_COMPATIBILITY, then member.",
        ),
    ] = None,
) -> None:
    """
    Resolve the effective and automatic level of a mapping.
    """
    config = ResolutionConfig(level_compatibility=compat) if compat else None
    schema = _load_schema(schema_file, config)
    entries = attr or []
    try:
        catalog = StaticLevelCatalog.from_entries(entries)
        mapping = schema.create_mapping(
            type_id,
            level=level,
            attrs=[entry.partition("=")[0].strip() for entry in entries],
            natural_levels=catalog,
        )
    except (RoleMapError, ValueError) as e:
        _fail_with_error(f"Invalid mapping: {e}")

    typer.echo(f"levels effective: {_join(mapping.levels_effective)}")
    typer.echo(f"level auto: {mapping.level_auto or '-'}")
    typer.echo(f"level effective: {mapping.level_effective or '-'}")
    for problem in mapping.errors():
        typer.echo(f"invalid: {problem}", err=True)


if __name__ == "__main__":
    app()
