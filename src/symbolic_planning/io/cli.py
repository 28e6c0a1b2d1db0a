"""Define a command-line interface for solving PDDL planning problems."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.markup import escape
from rich.table import Table

from symbolic_planning.errors import PlanningError
from symbolic_planning.ground.plan import Plan
from symbolic_planning.io.configuration import (
    GroundingStrategy,
    PlannerConfiguration,
    SearchStrategy,
)
from symbolic_planning.io.logging import configure_logging, console
from symbolic_planning.pddl.pddl_parser import parse_planning_problem
from symbolic_planning.pipeline import solve


def _render_plan_table(plan: Plan) -> Table:
    """Render a numbered table listing the actions of a plan."""
    table = Table(title=f"Plan ({len(plan)} actions, cost {plan.cost})", show_lines=False)
    table.add_column("#", justify="right", style="cyan", no_wrap=True)
    table.add_column("Action", style="bold")
    table.add_column("Cost", justify="right", style="magenta")

    for step, action in enumerate(plan, start=1):
        table.add_row(str(step), action.name, str(action.cost))
    return table


@click.command()
@click.argument("domain", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("problem", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file of planner options (overridden by the options below).",
)
@click.option(
    "--keep-disjunctions",
    is_flag=True,
    help="Skip DNF conversion and operator splitting.",
)
@click.option(
    "--grounding",
    type=click.Choice([s.value for s in GroundingStrategy]),
    help="Strategy used to instantiate the lifted problem.",
)
@click.option(
    "--search",
    type=click.Choice([s.value for s in SearchStrategy]),
    help="Order in which the forward search expands states.",
)
@click.option("--max-expansions", type=click.IntRange(min=1), help="Limit on expanded states.")
@click.option("--time-limit", type=click.FloatRange(min=0, min_open=True), help="Seconds.")
@click.option("--verbose", "-v", is_flag=True, help="Log debug-level messages.")
def main(
    domain: Path,
    problem: Path,
    config_path: Path | None,
    keep_disjunctions: bool,
    grounding: str | None,
    search: str | None,
    max_expansions: int | None,
    time_limit: float | None,
    verbose: bool,
) -> None:
    """Solve the planning problem defined by the DOMAIN and PROBLEM PDDL files."""
    configure_logging(verbose)

    try:
        base = PlannerConfiguration()
        if config_path is not None:
            base = PlannerConfiguration.from_yaml(config_path)
        config = base.with_overrides(
            keep_disjunctions=keep_disjunctions or None,
            grounding=grounding,
            search=search,
            max_expansions=max_expansions,
            time_limit_s=time_limit,
        )
        lifted_problem = parse_planning_problem(
            domain.read_text(encoding="utf-8"),
            problem.read_text(encoding="utf-8"),
        )
        result = solve(lifted_problem, config)
    except (PlanningError, ValueError) as error:
        console.print(f"[red]{escape(str(error))}[/]")
        sys.exit(1)

    if result.plan is None:
        console.print("[red]No plan found.[/]")
        sys.exit(1)

    console.print(_render_plan_table(result.plan))
    if not result.solved:
        console.print("[red]The plan failed validation.[/]")
        sys.exit(1)


if __name__ == "__main__":
    main()
