"""CLI UI components (Rich).

Why keep them apart:
- Command handlers stay free of presentation details.
- Tables and panels are reused by start/stop, profile and doctor.
"""

from __future__ import annotations

import json
from typing import Any, Iterable

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import AppSettings
from core.domain.errors import ApplicationLevelFailure, RemoteRequestError
from core.domain.models import ImsApiResponse


def print_response(console: Console, response: ImsApiResponse, success_text: str) -> None:
    """Success text followed by the pretty-printed `data` payload."""

    console.print(Text(success_text, style="green"))
    if response.data is not None:
        console.print_json(data=response.data)


def response_as_json(response: ImsApiResponse) -> str:
    """Whole envelope as stable JSON (for `--rfj`)."""

    payload = response.model_dump(mode="json", by_alias=True)
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)


def build_failed_rows_table(rows: Iterable[dict[str, Any]]) -> Table:
    """Data rows with a non-zero completion code."""

    table = Table(title="Failed resources")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Member", style="white")
    table.add_column("CC", style="red")
    table.add_column("Text", style="dim")
    for row in rows:
        table.add_row(
            str(row.get("name", "")),
            str(row.get("mbr", "")),
            str(row.get("cc", "")),
            str(row.get("ccText") or row.get("cctxt") or ""),
        )
    return table


def build_error_panel(title: str, exc: Exception) -> Panel:
    body = Text(str(exc))
    if isinstance(exc, RemoteRequestError) and exc.body:
        body.append("\n\n")
        body.append(exc.body, style="dim")
    if isinstance(exc, ApplicationLevelFailure) and exc.messages:
        body.append("\n")
        for line in exc.messages:
            body.append(f"\n- {line}")
    return Panel(body, title=Text(title, style="bold red"), border_style="red")


def build_profile_table(settings: AppSettings, *, source: str) -> Table:
    table = Table(title=f"IMS profile ({source})")
    table.add_column("Option", style="bright_green", no_wrap=True)
    table.add_column("Value", style="white")
    rows: list[tuple[str, object]] = [
        ("host", settings.host),
        ("port", settings.port),
        ("user", settings.user),
        ("password", "********" if settings.password else None),
        ("protocol", settings.protocol),
        ("reject-unauthorized", settings.reject_unauthorized),
        ("ims-connect-host", settings.ims_connect_host),
        ("ims-connect-port", settings.ims_connect_port),
        ("plex", settings.plex),
        ("base-path", settings.base_path),
    ]
    for name, value in rows:
        table.add_row(name, "-" if value is None else str(value))
    return table
