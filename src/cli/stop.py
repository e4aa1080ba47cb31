"""`imsctl stop {program|transaction|region}`."""

from __future__ import annotations

from typing import Annotated

import typer

from cli.handlers import STOP_PROGRAM, STOP_REGION, STOP_TRANSACTION, get_state, process_with_session
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

app = typer.Typer(no_args_is_help=True, help=_help["stop.summary"])

StopKeywordsOption = Annotated[
    list[str] | None,
    typer.Option(
        "--stop",
        "-s",
        help="Status to stop (repeatable or comma separated). Defaults to SCHD.",
    ),
]
RouteOption = Annotated[
    list[str] | None,
    typer.Option("--route", "-r", help="IMS member(s) the command is routed to (repeatable or comma separated)."),
]


@app.command("program", help=_help["stop.program.summary"])
def stop_program(
    ctx: typer.Context,
    names: Annotated[list[str], typer.Argument(help="Name(s) of the program(s) to stop.")],
    stop: StopKeywordsOption = None,
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
    args = {"names": list(names), "stop": split_csv(stop), "route": split_csv(route)}
    process_with_session(get_state(ctx), STOP_PROGRAM, args, connection)


@app.command("transaction", help=_help["stop.transaction.summary"])
def stop_transaction(
    ctx: typer.Context,
    names: Annotated[list[str], typer.Argument(help="Name(s) of the transaction(s) to stop.")],
    stop: StopKeywordsOption = None,
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
    args = {"names": list(names), "stop": split_csv(stop), "route": split_csv(route)}
    process_with_session(get_state(ctx), STOP_TRANSACTION, args, connection)


@app.command("region", help=_help["stop.region.summary"])
def stop_region(
    ctx: typer.Context,
    reg_num: Annotated[
        list[int] | None,
        typer.Argument(help="Region number(s) to stop. Mutually exclusive with --job-name.", show_default=False),
    ] = None,
    job_name: Annotated[
        str | None,
        typer.Option("--job-name", "-j", help="Job name of the region to stop. Mutually exclusive with region numbers."),
    ] = None,
    abdump: Annotated[
        str | None,
        typer.Option("--abdump", "-a", help="Transaction to abnormally terminate in the region."),
    ] = None,
    transaction: Annotated[
        str | None,
        typer.Option("--transaction", "-t", help="Transaction in WFI mode whose message processing is stopped."),
    ] = None,
    cancel: Annotated[
        bool | None,
        typer.Option(
            "--cancel/--no-cancel",
            help="Cancel a region that could not be stopped with a preceding --abdump.",
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
    args: dict[str, object] = {
        "reg_num": list(reg_num) if reg_num else None,
        "job_name": job_name,
        "abdump": abdump,
        "transaction": transaction,
    }
    if cancel is not None:
        args["cancel"] = cancel
    process_with_session(get_state(ctx), STOP_REGION, args, connection)
