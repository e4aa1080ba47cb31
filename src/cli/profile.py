"""`imsctl profile`: stored connection defaults.

The profile is the user config .env; every start/stop command falls back to it
for any connection option not given on the command line.
"""

from __future__ import annotations

from typing import Annotated

import typer

from cli.handlers import get_state
from cli.options import ConnectionProtocol
from cli.ui_components import build_profile_table
from core.config import ENV_PREFIX, get_user_env_file, read_user_env_vars, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Manage the stored IMS connection profile.")


def _env_value(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, ConnectionProtocol):
        return value.value
    return str(value)


@app.command("create")
def create(
    ctx: typer.Context,
    host: Annotated[str, typer.Option("--host", "-H", help="Host name of the IMS REST API server.")],
    port: Annotated[int, typer.Option("--port", "-P", min=1, max=65535, help="Port of the IMS REST API server.")],
    user: Annotated[str, typer.Option("--user", "-u", help="Mainframe user name.")],
    password: Annotated[
        str,
        typer.Option("--password", "--pass", prompt=True, hide_input=True, help="Mainframe password."),
    ],
    protocol: Annotated[ConnectionProtocol, typer.Option("--protocol")] = ConnectionProtocol.HTTPS,
    reject_unauthorized: Annotated[
        bool,
        typer.Option("--reject-unauthorized/--no-reject-unauthorized", help="Reject self-signed certificates."),
    ] = True,
    ims_connect_host: Annotated[str | None, typer.Option("--ims-connect-host", "--ich")] = None,
    ims_connect_port: Annotated[int | None, typer.Option("--ims-connect-port", "--icp", min=1, max=65535)] = None,
    plex: Annotated[str | None, typer.Option("--plex", "-x")] = None,
    base_path: Annotated[str | None, typer.Option("--base-path", "--bp")] = None,
    overwrite: Annotated[bool, typer.Option("--overwrite", "--ow", help="Replace an existing profile.")] = False,
) -> None:
    """Store connection defaults in the user config .env."""

    state = get_state(ctx)
    env_path = get_user_env_file()
    if not overwrite and read_user_env_vars().get(f"{ENV_PREFIX}HOST"):
        state.err_console.print(state.catalog.format("profile.exists", path=env_path), style="yellow")
        raise typer.Exit(code=1)

    values = {
        "HOST": host,
        "PORT": port,
        "USER": user,
        "PASSWORD": password,
        "PROTOCOL": protocol,
        "REJECT_UNAUTHORIZED": reject_unauthorized,
        "IMS_CONNECT_HOST": ims_connect_host,
        "IMS_CONNECT_PORT": ims_connect_port,
        "PLEX": plex,
        "BASE_PATH": base_path,
    }
    written = write_user_env_vars({f"{ENV_PREFIX}{key}": _env_value(value) for key, value in values.items()})
    state.console.print(state.catalog.format("profile.created", path=written), style="green", markup=False)


@app.command("show")
def show(ctx: typer.Context) -> None:
    """Print the resolved profile (password masked)."""

    state = get_state(ctx)
    state.console.print(build_profile_table(state.settings, source=str(get_user_env_file())))
