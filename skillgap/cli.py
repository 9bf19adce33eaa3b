"""Command-line entry point for running a gap analysis from a file."""

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from skillgap.config import load_config
from skillgap.engine import analyze
from skillgap.errors import SkillGapError
from skillgap.graph import SkillGraph
from skillgap.logging_config import setup_logging
from skillgap.parsers import read_input_file
from skillgap.report import to_json

console = Console()

IMPACT_STYLES = {"CRITICAL": "red", "HIGH": "yellow", "MEDIUM": "cyan", "LOW": "dim"}


@click.group()
@click.version_option(version="0.1.0")
@click.option("--log-level", default="WARNING", show_default=True, help="Log level for stderr")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON lines")
def cli(log_level: str, json_logs: bool):
    """Skill gap analysis for a target role."""
    setup_logging(json_mode=json_logs, level=log_level)


def _render_table(report) -> None:
    role = report.target_role or "target role"
    console.print(f"[bold]Readiness for {role}:[/] {report.readiness_score}/100")

    table = Table(title="Skill Gaps")
    table.add_column("#", justify="right")
    table.add_column("Skill", style="cyan")
    table.add_column("Level", justify="center")
    table.add_column("Impact", justify="center")
    table.add_column("Weeks", justify="right")
    for gap in report.gaps:
        style = IMPACT_STYLES.get(str(gap.impact_level), "white")
        table.add_row(
            str(gap.priority),
            gap.skill_name,
            f"{gap.current_level:g} -> {gap.target_level:g}",
            f"[{style}]{gap.impact_level}[/{style}]",
            str(gap.estimated_time_weeks),
        )
    console.print(table)

    if report.strengths:
        console.print(f"[green]Strengths:[/] {', '.join(report.strengths)}")
    if report.overall_recommendation:
        console.print(report.overall_recommendation)


@cli.command("analyze")
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file overriding scoring policy",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "table"]),
    default="json",
    show_default=True,
)
def analyze_command(input_path: Path, config_path: Path | None, output_format: str):
    """Analyze the assessment described in INPUT_PATH (JSON or YAML)."""
    try:
        config = load_config(config_path)
        data = read_input_file(input_path)
        graph = SkillGraph.load(data.skills, data.relations, cycle_kinds=config.propagate_kinds)
        report = analyze(
            graph,
            data.current_levels,
            data.requirements,
            assessment_id=data.assessment_id,
            target_role=data.target_role,
            assessment_gaps_id=data.assessment_gaps_id,
            resources=data.resources,
            evidence=data.evidence,
            config=config,
        )
    except (SkillGapError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)

    if output_format == "table":
        _render_table(report)
    else:
        click.echo(to_json(report))


if __name__ == "__main__":
    cli()
