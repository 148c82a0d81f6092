"""Command-line front end for clidax."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from clidax.args import Args
from clidax.config import get_settings
from clidax.errors import ClidaxError
from clidax.logging_utils import configure_logging
from clidax.parser import parse, parse_with
from clidax.schema import WILDCARD, OptionSchema

app = typer.Typer(
    name="clidax",
    help="Classify command-line tokens into options and command parameters.",
    add_completion=False,
)


@app.callback()
def main_callback() -> None:
    settings = get_settings()
    configure_logging(profile=settings.log_profile, level=settings.log_level)


def load_schemas(path: Path, *, wildcard: str = WILDCARD) -> list[OptionSchema]:
    """Load option schemas from a JSON file holding a list of schema objects."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"{path.name} is not valid JSON: {exc.msg}") from exc
    if not isinstance(payload, list):
        raise typer.BadParameter(f"{path} must contain a JSON list of option schemas")
    schemas: list[OptionSchema] = []
    for item in payload:
        if not isinstance(item, dict) or "name" not in item:
            raise typer.BadParameter(f"{path}: every schema needs a 'name'")
        if item["name"] == wildcard:
            item = {**item, "name": WILDCARD}
        schemas.append(OptionSchema.from_dict(item))
    return schemas


def _render_table(console: Console, args: Args) -> None:
    table = Table(title="options")
    table.add_column("name", style="cyan")
    table.add_column("params")
    for name in args.opt_names():
        table.add_row(escape(name), escape(", ".join(args.opt_params(name))))
    console.print(table)
    console.print(f"[bold]params:[/bold] {escape(str(args.cmd_params()))}")


@app.command("parse")
def parse_command(
    tokens: list[str] | None = typer.Argument(None, help="Tokens to parse; put them after '--'"),  # noqa: B008
    schema: Path | None = typer.Option(None, "--schema", "-s", help="JSON file of option schemas"),  # noqa: B008
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Parse TOKENS and print the options and command parameters found."""
    settings = get_settings()
    console = Console()
    err_console = Console(stderr=True)
    try:
        if schema is not None:
            args = parse_with(tokens or [], load_schemas(schema, wildcard=settings.wildcard))
        else:
            args = parse(tokens or [])
    except ClidaxError as exc:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(1) from exc

    if as_json:
        typer.echo(json.dumps(args.to_dict(), ensure_ascii=False))
    else:
        _render_table(console, args)
