import getpass
import json
import logging
from typing import List, Optional

import typer
from rich import print
from rich.console import Console
from rich.logging import RichHandler

from .config import load_settings
from .errors import PipelineError
from .service import parse_ai_command
from .templates import TEMPLATES, lookup_template

app = typer.Typer()

LOCAL_UID = "local"


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """Canvaspilot CLI entrypoint."""
    if ctx.invoked_subcommand is None:
        print(ctx.get_help())
        raise typer.Exit(code=0)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _print_json(payload) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def _local_uid() -> str:
    try:
        return getpass.getuser()
    except (OSError, KeyError):
        return LOCAL_UID


@app.command()
def parse(
    text: str,
    select: Optional[List[str]] = typer.Option(
        None,
        "--select",
        help="Id of a currently selected shape (repeatable).",
    ),
    center_x: Optional[float] = typer.Option(None, "--center-x", help="Viewport center x."),
    center_y: Optional[float] = typer.Option(None, "--center-y", help="Viewport center y."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
):
    _configure_logging(verbose)
    try:
        settings = load_settings()
    except ValueError as exc:
        print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2)

    canvas_context: dict = {"selectedShapeIds": select or []}
    if center_x is not None and center_y is not None:
        canvas_context["viewportCenter"] = {"x": center_x, "y": center_y}

    try:
        result = parse_ai_command(
            {"userInput": text, "canvasContext": canvas_context},
            auth_uid=_local_uid(),
            settings=settings,
        )
    except PipelineError as exc:
        _print_json({"success": False, "error": exc.to_dict()})
        raise typer.Exit(code=1)

    _print_json(result["command"])


@app.command("templates")
def list_templates():
    print("[bold]Available templates[/bold]")
    for name, template in TEMPLATES.items():
        print(f"- {name}: {template.description} ({len(template.shapes)} shapes)")


@app.command("template")
def show_template(
    name: str,
    items: Optional[int] = typer.Option(
        None,
        "--items",
        help="Menu item count for navigationBar (clamped to 1-10).",
    ),
):
    template = lookup_template(name, items)
    if template is None:
        print(f"[red]Unknown template '{name}'.[/red]")
        raise typer.Exit(code=1)
    _print_json(template.to_parameters())


if __name__ == "__main__":
    app()
