import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from specmatch.core.config import CliConfig, MatchConfig
from specmatch.core.models import Column
from specmatch.decoding.matcher import MatchOutcome
from specmatch.decoding.projector import Projection, project, projection_values
from specmatch.decoding.selector import explain_all, first_matching
from specmatch.decoding.specs import EventSpec, get_event_spec_names
from specmatch.decoding.utils import render_value
from specmatch.loading import load_event, load_spec_files

console = Console()
logger = logging.getLogger(__name__)


@click.group()
def cli() -> None:
    """specmatch — match contract events against event specs."""


def _projection_table(spec: EventSpec, projection: Projection) -> Table:
    table = Table(title=spec.name)
    table.add_column("name", style="bold")
    table.add_column("type")
    table.add_column("value", overflow="fold")
    for name, f in projection.items():
        table.add_row(name, f.type.describe(), render_value(f.value))
    return table


def _print_outcomes(outcomes: list[MatchOutcome]) -> None:
    for o in outcomes:
        if o.matched:
            console.print(f"  [green]{escape(o.spec_name)}[/]: matches")
        else:
            console.print(f"  [red]{escape(o.spec_name)}[/]: {escape(o.reason or '')}", highlight=False)


def _write_parquet(path: Path, spec: EventSpec, contract_id: str | None, projection: Projection) -> None:
    import pyarrow.parquet as pq

    col = Column()
    col.append_projection(spec_name=spec.name, contract_id=contract_id, values=projection_values(projection))
    pq.write_table(col.to_arrow_table(), path)
    logger.info("wrote projection to %s", path)


def run_match(config: CliConfig) -> bool:
    """Load inputs, pick the first matching spec and print its projection."""
    try:
        event = load_event(config.event_path)
        specs = load_spec_files(config.spec_paths)
    except (OSError, ValueError) as e:
        raise click.ClickException(str(e)) from e
    logger.debug("loaded specs %s", get_event_spec_names(specs))

    outcomes = explain_all(event, specs, config.match)
    hit = first_matching(outcomes)
    if config.explain:
        _print_outcomes(outcomes)

    if hit is None:
        console.print("[bold red]no matching spec[/]")
        return False

    spec = next(s for s, o in zip(specs, outcomes) if o is hit)
    projection = project(event, spec)
    console.print(f"[bold]found[/]: {escape(spec.name)}")
    console.print(_projection_table(spec, projection))
    if config.out_path is not None:
        try:
            _write_parquet(config.out_path, spec, event.contract_id, projection)
        except (OSError, ValueError) as e:
            raise click.ClickException(f"cannot write {config.out_path}: {e}") from e
    return True


@cli.command("match")
@click.option(
    "--event",
    "event_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Contract event JSON file",
)
@click.option(
    "--spec",
    "spec_paths",
    required=True,
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Event spec JSON file; repeat for several (first match wins)",
)
@click.option(
    "--strict/--lenient",
    default=False,
    show_default=True,
    help="Require map/vec data to line up exactly with the spec's data params",
)
@click.option("--explain", is_flag=True, default=False, help="Print why each spec does or does not match")
@click.option("--out", "out_path", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write the projection as Parquet")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Debug logging")
@click.pass_context
def match_cmd(
    ctx: click.Context,
    event_path: Path,
    spec_paths: tuple[Path, ...],
    strict: bool,
    explain: bool,
    out_path: Path | None,
    verbose: bool,
) -> None:
    """Find the first spec matching an event and print the projected params."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    config = CliConfig(
        event_path=event_path,
        spec_paths=list(spec_paths),
        match=MatchConfig(strict_data_arity=strict),
        explain=explain,
        out_path=out_path,
    )
    if not run_match(config):
        ctx.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
