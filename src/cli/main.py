"""Root typer application: `imsctl`.

Global options configure logging, the message language and the response
format; connection options live on every start/stop leaf command.
"""

from __future__ import annotations

import sys
from typing import Annotated

import typer
from pydantic import ValidationError

from cli import doctor, profile, start, stop
from cli.handlers import CliState
from core.config import load_settings
from core.domain.language import Language
from core.logging import configure_logging
from core.messages import load_catalog

app = typer.Typer(
    name="imsctl",
    no_args_is_help=True,
    help="Start and stop IMS programs, transactions and regions through the IMS REST API.",
)
app.add_typer(start.app, name="start")
app.add_typer(start.app, name="sta", hidden=True)
app.add_typer(stop.app, name="stop")
app.add_typer(stop.app, name="sto", hidden=True)
app.add_typer(profile.app, name="profile")
app.command(name="doctor")(doctor.run)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging on stderr.")] = False,
    json_logs: Annotated[bool, typer.Option("--json-logs", help="Emit logs as JSON lines.")] = False,
    language: Annotated[
        Language | None,
        typer.Option("--language", "-l", help="Language for messages (default from config)."),
    ] = None,
    response_format_json: Annotated[
        bool,
        typer.Option("--response-format-json", "--rfj", help="Print the whole IMS response as JSON."),
    ] = False,
) -> None:
    try:
        settings = load_settings()
    except ValidationError as exc:
        typer.echo("Configuration errors:", err=True)
        for error in exc.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(1) from None

    configure_logging(
        json_output=json_logs or settings.json_logs,
        level="DEBUG" if verbose else settings.log_level,
        log_file=settings.log_file,
    )

    ctx.obj = CliState(
        settings=settings,
        catalog=load_catalog(language or settings.default_language),
        response_format_json=response_format_json,
    )


def run() -> None:
    # Rich box-drawing characters break cp1252 Windows consoles.
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")
    app()
