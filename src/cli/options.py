"""Connection options shared by every start/stop leaf command.

Each option defaults to `None`, meaning "use the stored profile value".
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Annotated, Any, Iterable

import typer

CONNECTION_PANEL = "IMS Connection Options"


class ConnectionProtocol(str, Enum):
    HTTP = "http"
    HTTPS = "https"


HostOption = Annotated[
    str | None,
    typer.Option("--host", "-H", help="Host name of the IMS REST API server.", rich_help_panel=CONNECTION_PANEL),
]
PortOption = Annotated[
    int | None,
    typer.Option("--port", "-P", help="Port of the IMS REST API server.", rich_help_panel=CONNECTION_PANEL),
]
UserOption = Annotated[
    str | None,
    typer.Option("--user", "-u", help="Mainframe user name.", rich_help_panel=CONNECTION_PANEL),
]
PasswordOption = Annotated[
    str | None,
    typer.Option("--password", "--pass", help="Mainframe password.", rich_help_panel=CONNECTION_PANEL),
]
ProtocolOption = Annotated[
    ConnectionProtocol | None,
    typer.Option("--protocol", help="Protocol of the IMS REST API.", rich_help_panel=CONNECTION_PANEL),
]
RejectUnauthorizedOption = Annotated[
    bool | None,
    typer.Option(
        "--reject-unauthorized/--no-reject-unauthorized",
        help="Reject self-signed certificates.",
        rich_help_panel=CONNECTION_PANEL,
        show_default=False,
    ),
]
ImsConnectHostOption = Annotated[
    str | None,
    typer.Option("--ims-connect-host", "--ich", help="Host name of IMS Connect.", rich_help_panel=CONNECTION_PANEL),
]
ImsConnectPortOption = Annotated[
    int | None,
    typer.Option("--ims-connect-port", "--icp", help="Port of IMS Connect.", rich_help_panel=CONNECTION_PANEL),
]
PlexOption = Annotated[
    str | None,
    typer.Option("--plex", "-x", help="Name of the IMSplex.", rich_help_panel=CONNECTION_PANEL),
]
BasePathOption = Annotated[
    str | None,
    typer.Option("--base-path", "--bp", help="Path prefix of the IMS REST API.", rich_help_panel=CONNECTION_PANEL),
]


@dataclass(frozen=True)
class ConnectionOptions:
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    protocol: ConnectionProtocol | None = None
    reject_unauthorized: bool | None = None
    ims_connect_host: str | None = None
    ims_connect_port: int | None = None
    plex: str | None = None
    base_path: str | None = None

    def overrides(self) -> dict[str, Any]:
        values = asdict(self)
        if self.protocol is not None:
            values["protocol"] = self.protocol.value
        return {key: value for key, value in values.items() if value is not None}


def split_csv(values: Iterable[str] | None) -> list[str] | None:
    """`["SCHD,TRACE", "Q"]` -> `["SCHD", "TRACE", "Q"]`; nothing given -> `None`."""

    if not values:
        return None
    items = [item.strip() for value in values for item in value.split(",")]
    return [item for item in items if item] or None
