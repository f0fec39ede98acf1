"""CLI entry point for CampusMind.

Commands:
    campusmind ask MESSAGE  — Answer one message against a data bundle
    campusmind week         — Show the weekly timetable analysis
    campusmind rules        — Show intent and sub-case rules in precedence order
"""

from __future__ import annotations

import json
import logging
import random
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click
from rich.console import Console
from rich.logging import RichHandler

from campusmind import __version__

if TYPE_CHECKING:
    from campusmind.bot.router import Rule

console = Console()


class CampusMindError(Exception):
    """Raised when CLI input cannot be loaded."""


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _load_bundle_data(path: Path | None) -> dict[str, Any]:
    """Read a JSON request bundle (without the message) from disk."""
    if path is None:
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise CampusMindError(f"Could not read {path}: {e}") from e
    if not isinstance(data, dict):
        raise CampusMindError(f"{path} must contain a JSON object")
    return data


@click.group()
@click.version_option(__version__)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("-c", "--config", type=click.Path(exists=True), help="Config file path")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None) -> None:
    """CampusMind — rule-based campus assistant."""
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config) if config else None


@cli.command()
@click.argument("message")
@click.option(
    "-d",
    "--data",
    "data_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file with timetable, grades, attendance, expenses...",
)
@click.option("--name", default=None, help="User's first name")
@click.option("--seed", default=None, type=int, help="Seed for name personalization")
@click.option("--json", "as_json", is_flag=True, help="Print the full response envelope")
@click.pass_context
def ask(
    ctx: click.Context,
    message: str,
    data_path: Path | None,
    name: str | None,
    seed: int | None,
    as_json: bool,
) -> None:
    """Answer MESSAGE using the data bundle."""
    from campusmind.bot.responder import Responder
    from campusmind.config import load_settings

    settings = load_settings(ctx.obj.get("config_path"))

    try:
        payload = _load_bundle_data(data_path)
    except CampusMindError as e:
        console.print(f"[red]✗[/red] {e}")
        sys.exit(1)

    payload["message"] = message
    if name:
        payload["user"] = {"firstName": name}

    rng = random.Random(seed) if seed is not None else None
    response = Responder(settings, rng=rng).respond(payload)

    if as_json:
        click.echo(json.dumps(response.to_wire(), indent=2, ensure_ascii=False))
        return

    console.print(f"[dim]{response.intent}[/dim]")
    console.print(response.reply, markup=False, highlight=False)


@cli.command()
@click.option(
    "-d",
    "--data",
    "data_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file with a timetable",
)
def week(data_path: Path) -> None:
    """Show classes per day, busiest and lightest day."""
    from pydantic import ValidationError
    from rich.table import Table

    from campusmind.data.models import RequestBundle
    from campusmind.insights.timetable import analyze_week, classes_for_day
    from campusmind.insights.timeutil import DAYS, day_name

    try:
        payload = _load_bundle_data(data_path)
    except CampusMindError as e:
        console.print(f"[red]✗[/red] {e}")
        sys.exit(1)

    payload["message"] = ""
    try:
        bundle = RequestBundle.model_validate(payload)
    except ValidationError as e:
        console.print(f"[red]✗[/red] Invalid data in {data_path}: {e.error_count()} errors")
        sys.exit(1)
    analysis = analyze_week(bundle)

    table = Table(show_header=True, header_style="bold magenta", box=None)
    table.add_column("Day")
    table.add_column("Classes", justify="right")
    table.add_column("Schedule")
    for day in range(len(DAYS)):
        classes = classes_for_day(bundle, day)
        slots = ", ".join(
            f"{c.display_name} {c.start_time}-{c.end_time}" if c.start_time else c.display_name
            for c in classes
        )
        table.add_row(day_name(day), str(len(classes)), slots)
    console.print(table)

    busiest = day_name(analysis.busiest.day) if analysis.busiest else "none"
    lightest = day_name(analysis.lightest.day) if analysis.lightest else "none"
    console.print(
        f"\n[bold]Total:[/bold] {analysis.total_classes} classes on"
        f" {analysis.days_with_classes} days"
        f" • busiest: {busiest} • lightest: {lightest}"
    )


@cli.command()
def rules() -> None:
    """List intent rules and their sub-case rules, first match wins."""
    from campusmind.bot.router import DEFAULT_SUBCASES, INTENT_RULES, SUBCASE_RULES, Intent

    for position, rule in enumerate(INTENT_RULES, start=1):
        intent = Intent(rule.label)
        console.print(f"[bold]{position}. {intent}[/bold]", highlight=False)
        console.print(f"   {_describe(rule)}", markup=False, highlight=False)
        for sub in SUBCASE_RULES.get(intent, ()):
            console.print(f"   [cyan]→ {sub.label}[/cyan]: ", end="", highlight=False)
            console.print(_describe(sub), markup=False, highlight=False)
        default = DEFAULT_SUBCASES.get(intent)
        if default is not None:
            console.print(f"   [cyan]→ {default}[/cyan]: (default)", highlight=False)
    console.print(f"[bold]{len(INTENT_RULES) + 1}. {Intent.GUIDANCE}[/bold]: (default)")


def _describe(rule: Rule) -> str:
    parts: list[str] = []
    if rule.require:
        parts.append("all of " + ", ".join(repr(p) for p in rule.require))
    if rule.keywords:
        parts.append("any of " + ", ".join(repr(k) for k in rule.keywords))
    if rule.pattern is not None:
        parts.append(f"or /{rule.pattern.pattern}/")
    if rule.match_empty:
        parts.append("or empty message")
    return "; ".join(parts)
