"""`imsctl start {program|transaction|region}`."""

from __future__ import annotations

from typing import Annotated

import typer

from cli.handlers import START_PROGRAM, START_REGION, START_TRANSACTION, get_state, process_with_session
from cli.options import (
    BasePathOption,
    ConnectionOptions,
    HostOption,
    ImsConnectHostOption,
    ImsConnectPortOption,
    PasswordOption,
    PlexOption,
    PortOption,
    ProtocolOption,
    RejectUnauthorizedOption,
    UserOption,
    split_csv,
)
from core.messages import load_catalog

_help = load_catalog()

app = typer.Typer(no_args_is_help=True, help=_help["start.summary"])

StartKeywordsOption = Annotated[
    list[str] | None,
    typer.Option(
        "--start",
        "-s",
        help="Status to start (repeatable or comma separated). Defaults to SCHD.",
    ),
]
RouteOption = Annotated[
    list[str] | None,
    typer.Option("--route", "-r", help="IMS member(s) the command is routed to (repeatable or comma separated)."),
]


@app.command("program", help=_help["start.program.summary"])
def start_program(
    ctx: typer.Context,
    names: Annotated[list[str], typer.Argument(help="Name(s) of the program(s) to start.")],
    start: StartKeywordsOption = None,
    route: RouteOption = None,
    host: HostOption = None,
    port: PortOption = None,
    user: UserOption = None,
    password: PasswordOption = None,
    protocol: ProtocolOption = None,
    reject_unauthorized: RejectUnauthorizedOption = None,
    ims_connect_host: ImsConnectHostOption = None,
    ims_connect_port: ImsConnectPortOption = None,
    plex: PlexOption = None,
    base_path: BasePathOption = None,
) -> None:
    connection = ConnectionOptions(
        host, port, user, password, protocol, reject_unauthorized, ims_connect_host, ims_connect_port, plex, base_path
    )
    args = {"names": list(names), "start": split_csv(start), "route": split_csv(route)}
    process_with_session(get_state(ctx), START_PROGRAM, args, connection)


@app.command("transaction", help=_help["start.transaction.summary"])
def start_transaction(
    ctx: typer.Context,
    names: Annotated[list[str], typer.Argument(help="Name(s) of the transaction(s) to start.")],
    start: StartKeywordsOption = None,
    route: RouteOption = None,
    host: HostOption = None,
    port: PortOption = None,
    user: UserOption = None,
    password: PasswordOption = None,
    protocol: ProtocolOption = None,
    reject_unauthorized: RejectUnauthorizedOption = None,
    ims_connect_host: ImsConnectHostOption = None,
    ims_connect_port: ImsConnectPortOption = None,
    plex: PlexOption = None,
    base_path: BasePathOption = None,
) -> None:
    connection = ConnectionOptions(
        host, port, user, password, protocol, reject_unauthorized, ims_connect_host, ims_connect_port, plex, base_path
    )
    args = {"names": list(names), "start": split_csv(start), "route": split_csv(route)}
    process_with_session(get_state(ctx), START_TRANSACTION, args, connection)


@app.command("region", help=_help["start.region.summary"])
def start_region(
    ctx: typer.Context,
    member_name: Annotated[
        str | None,
        typer.Option("--member-name", "-m", help="Member of the IMS PROCLIB holding the region JCL."),
    ] = None,
    job_name: Annotated[
        str | None,
        typer.Option("--job-name", "-j", help="Job name to give the started region."),
    ] = None,
    local: Annotated[
        bool | None,
        typer.Option(
            "--local/--no-local",
            help="Start the region only on the IMS member the command is routed to.",
            show_default=False,
        ),
    ] = None,
    host: HostOption = None,
    port: PortOption = None,
    user: UserOption = None,
    password: PasswordOption = None,
    protocol: ProtocolOption = None,
    reject_unauthorized: RejectUnauthorizedOption = None,
    ims_connect_host: ImsConnectHostOption = None,
    ims_connect_port: ImsConnectPortOption = None,
    plex: PlexOption = None,
    base_path: BasePathOption = None,
) -> None:
    connection = ConnectionOptions(
        host, port, user, password, protocol, reject_unauthorized, ims_connect_host, ims_connect_port, plex, base_path
    )
    args = {"member_name": member_name, "job_name": job_name, "local": local}
    process_with_session(get_state(ctx), START_REGION, args, connection)
