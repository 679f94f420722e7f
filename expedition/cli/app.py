"""Command line entry point for running plans from scenario files."""
from __future__ import annotations

from pathlib import Path

import click
from loguru import logger

from ..domain.bosses import BOSSES, label_for
from ..infrastructure.logger import setup_logger
from ..infrastructure.scenarios import load_scenario
from ..presentation import report
from ..services import statistics
from ..services.scheduler import SchedulerService
from ..services.validation import ValidationError

FORMATS = ("json", "csv", "xlsx")


@click.group()
@click.option("--log-level", default="INFO", show_default=True, help="Loguru level for stderr output.")
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Optional rotating log file.")
def cli(log_level: str, log_file: Path | None) -> None:
    """Advent expedition boss assignment planner."""
    setup_logger(level=log_level.upper(), log_file=log_file)


@cli.command("plan")
@click.argument("scenario_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--out", "out_dir", type=click.Path(file_okay=False, path_type=Path), default=None, help="Directory for reports.")
@click.option(
    "--format",
    "formats",
    type=click.Choice(FORMATS),
    multiple=True,
    help="Report formats to write (repeatable). Defaults to all when --out is given.",
)
def plan_command(scenario_path: Path, out_dir: Path | None, formats: tuple[str, ...]) -> None:
    """Simulate SCENARIO_PATH and print the per-boss summary."""
    try:
        scenario = load_scenario(scenario_path)
    except ValidationError as exc:
        click.echo(f"[ERROR] {exc}", err=True)
        raise SystemExit(1) from exc

    service = SchedulerService({"target_day": scenario.target_day, "initial_hp": scenario.initial_hp})
    result = service.plan_scenario(scenario)

    click.echo(f"[plan] {scenario.name}: {result.days_simulated} day(s) simulated")
    damage = statistics.damage_by_boss(result, scenario.members)
    for boss in BOSSES:
        killed = result.summary.get(boss)
        status = f"killed on day {killed}" if killed else "alive"
        click.echo(
            f"  {label_for(boss):<8} entries={result.total_entries_per_boss[boss]:<4} "
            f"damage={damage[boss]:<12} {status}"
        )
    click.echo(
        f"[plan] members={result.total_members} with_scores={result.members_with_scores} "
        f"without_scores={len(result.members_without_scores)}"
    )
    click.echo(f"[plan] estimated day {result.estimated_days} (target {result.target_day})")
    if result.warning_message:
        click.echo(f"[WARN] {result.warning_message}")

    if out_dir is None:
        return
    out_dir.mkdir(parents=True, exist_ok=True)
    stem = f"plan_{scenario.name}"
    written = []
    for fmt in formats or FORMATS:
        if fmt == "json":
            written.append(report.write_json(out_dir / f"{stem}.json", result))
        elif fmt == "csv":
            written.append(report.write_csv_grid(out_dir / f"{stem}_grid.csv", result))
            written.append(report.write_day_metrics_csv(out_dir / f"{stem}_days.csv", result))
        elif fmt == "xlsx":
            written.append(report.write_workbook(out_dir / f"{stem}.xlsx", result, title=scenario.name))
    logger.info("Reports written", scenario=scenario.name, files=[str(p) for p in written])
    click.echo(f"[report] written: {', '.join(str(p) for p in written)}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
