"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.table import Table

from adapters.http_client import build_async_client
from cli.handlers import get_state
from core.config import AppSettings, resolve_session
from core.domain.errors import InvalidArgument
from core.domain.models import ImsSession


async def _check_http(session: ImsSession, settings: AppSettings) -> tuple[bool, str]:
    """Any HTTP answer from the REST endpoint counts as reachable."""

    try:
        async with build_async_client(session, settings) as client:
            response = await client.get(session.base_path or "/")
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, f"{type(exc).__name__}: {exc}"


def run(ctx: typer.Context) -> None:
    """Check the stored profile and the reachability of the IMS REST API."""

    state = get_state(ctx)
    settings = state.settings

    table = Table(title="imsctl doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Language", "OK", settings.default_language.label())
    try:
        session = resolve_session(settings)
    except InvalidArgument as exc:
        table.add_row("Profile", "FAIL", exc.message)
        state.console.print(table)
        raise typer.Exit(code=1) from exc

    table.add_row("Profile", "OK", f"{session.user}@{session.host}:{session.port}")
    table.add_row("Endpoint", "OK", session.base_url + session.base_path)
    if not session.reject_unauthorized:
        table.add_row("TLS", "WARN", "Self-signed certificates are accepted")
    if session.plex or session.ims_connect_host:
        table.add_row(
            "Routing",
            "OK",
            f"plex={session.plex or '-'} ims-connect={session.ims_connect_host or '-'}:{session.ims_connect_port or '-'}",
        )

    ok_http, detail_http = asyncio.run(_check_http(session, settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    state.console.print(table)
    if not ok_http:
        raise typer.Exit(code=1)
