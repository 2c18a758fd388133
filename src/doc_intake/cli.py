"""Command line interface for DocTool Studio."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from .analytics import summarise_events
from .config import get_settings
from .controller import IntakeController
from .logging_config import get_logger
from .models import FileSource, SelectedFile, SelectionOutcome
from .tools import CATALOG_TOOL_ID, TOOL_RULES, catalog_entries

app = typer.Typer(add_completion=False, no_args_is_help=True)
logger = get_logger(__name__)
APP_SETTINGS = get_settings()


def _resolve_path(path: Path) -> Path:
    path = path.expanduser().resolve()
    if not path.exists():
        raise typer.BadParameter(f"Path not found: {path}")
    return path


@app.command("list-tools")
def list_tools() -> None:
    """List known tools with their accepted file types."""
    for tool_id, rule in TOOL_RULES.items():
        accepted = ", ".join(rule.accepted_extensions) or "any file"
        typer.secho(tool_id, fg=typer.colors.BLUE)
        typer.echo(f"  title: {rule.title}")
        typer.echo(f"  accepts: {accepted}")


@app.command("show-catalog")
def show_catalog() -> None:
    """Print the PDF tool catalog as JSON."""
    entries = [entry.model_dump() for entry in catalog_entries(CATALOG_TOOL_ID)]
    typer.echo(json.dumps(entries, indent=2))


@app.command("check-file")
def check_file(
    tool_id: str = typer.Argument(..., help="Tool identifier, e.g. document-to-pdf."),
    path: Path = typer.Argument(..., help="File to check against the tool's accepted types."),
    source: FileSource = typer.Option(FileSource.BROWSE, help="Acquisition path to simulate (browse or drop)."),
) -> None:
    """Check whether a file would be accepted by a tool's intake screen."""
    file_path = _resolve_path(path)
    controller = IntakeController(tool_id)
    outcome = controller.select_file(SelectedFile(name=file_path.name, handle=str(file_path)), source)

    if outcome is SelectionOutcome.REJECTED:
        typer.secho(controller.error or "File rejected.", fg=typer.colors.RED)
        logger.warning("File rejected", tool_id=tool_id, path=file_path)
        raise typer.Exit(code=1)
    if outcome is SelectionOutcome.IGNORED:
        typer.secho(f"'{tool_id}' is a catalog screen and takes no files.", fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)

    if controller.rule.accepts_anything:
        typer.secho(f"Unrecognized tool '{tool_id}'; any file type is accepted.", fg=typer.colors.YELLOW)
    destination = controller.submit().destination
    typer.secho(f"Accepted {file_path.name} for {controller.title!r}.", fg=typer.colors.GREEN)
    typer.echo(f"Next: {destination}")
    logger.info("File accepted", tool_id=tool_id, path=file_path, destination=destination)


@app.command("analytics-summary")
def analytics_summary() -> None:
    """Summarise opt-in analytics events."""
    summary = summarise_events()
    typer.echo(json.dumps(summary, indent=2))


@app.command("serve")
def serve(
    host: str = typer.Option(APP_SETTINGS.dash_host, help="Host to bind the Dash server."),
    port: int = typer.Option(APP_SETTINGS.dash_port, help="Port to bind the Dash server."),
    debug: bool = typer.Option(APP_SETTINGS.dash_debug, help="Enable Dash debug mode."),
) -> None:
    """Launch the Dash intake screen."""
    from .app import create_app

    typer.echo(f"Starting DocTool Studio on {host}:{port} ...")
    create_app().run(host=host, port=port, debug=debug)


@app.command("serve-api")
def serve_api(
    host: str = typer.Option("0.0.0.0", help="Host to bind the API server."),
    port: int = typer.Option(8000, help="Port to bind the API server."),
    reload: bool = typer.Option(False, help="Enable auto-reload (development only)."),
) -> None:
    """Launch the FastAPI service via uvicorn."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - runtime dependency
        typer.secho("uvicorn is required to serve the API. Install with `pip install uvicorn`.", fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc

    typer.echo(f"Starting DocTool Studio API on {host}:{port} ...")
    uvicorn.run("doc_intake.api:create_app", host=host, port=port, reload=reload, factory=True)


def main() -> None:
    """Entry point for setuptools."""
    app()


if __name__ == "__main__":
    main()
