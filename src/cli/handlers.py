"""Command handlers for the start/stop groups.

Each handler adapts one API function to `CommandHandler`. The shared
`process_with_session` drives a single invocation:

    resolving_session -> validating -> requesting -> rendering -> done

Any error ends in `failed`: the message goes to stderr and the command exits 1.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping

import typer
from pydantic import BaseModel
from rich.console import Console

from cli.options import ConnectionOptions
from cli.ui_components import (
    build_error_panel,
    build_failed_rows_table,
    print_response,
    response_as_json,
)
from core.config import AppSettings, load_settings, resolve_session
from core.constants import (
    PROGRAM_START_KEYWORDS,
    PROGRAM_STOP_KEYWORDS,
    TRANSACTION_START_KEYWORDS,
    TRANSACTION_STOP_KEYWORDS,
)
from core.domain.errors import ApplicationLevelFailure, ImsError, InvalidArgument, RemoteRequestError
from core.domain.models import (
    ImsApiResponse,
    ImsSession,
    StartRegionParams,
    StopRegionParams,
    UpdateProgramParams,
    UpdateTransactionParams,
    is_zero_code,
)
from core.interfaces.handler import CommandHandler
from core.logging import get_logger
from core.messages import MessageCatalog, load_catalog
from core.services import ims_api
from core.services.ims_api import coerce_params

logger = get_logger(__name__)


class Stage(str, Enum):
    RESOLVING_SESSION = "resolving_session"
    VALIDATING = "validating"
    REQUESTING = "requesting"
    RENDERING = "rendering"
    DONE = "done"
    FAILED = "failed"


@dataclass
class CliState:
    """Per-invocation state shared through `typer.Context.obj`."""

    settings: AppSettings
    catalog: MessageCatalog
    response_format_json: bool = False
    console: Console = field(default_factory=Console)
    err_console: Console = field(default_factory=lambda: Console(stderr=True))


def get_state(ctx: typer.Context) -> CliState:
    """State set up by the root callback, or a default one for sub-apps run alone."""

    root = ctx.find_root()
    if not isinstance(root.obj, CliState):
        settings = load_settings()
        root.obj = CliState(settings=settings, catalog=load_catalog(settings.default_language))
    return root.obj


Operation = Callable[..., Awaitable[ImsApiResponse]]


@dataclass(frozen=True)
class ApiCommandHandler:
    key: str
    params_model: type[BaseModel]
    operation: Operation
    # Parameter field -> status keywords the command line accepts for it.
    allowed_keywords: Mapping[str, frozenset[str]] = field(default_factory=dict)

    def validate(self, params: BaseModel) -> None:
        label = getattr(params, "resource_label", "resource")
        for field_name, allowed in self.allowed_keywords.items():
            unknown = [k for k in (getattr(params, field_name, None) or []) if k not in allowed]
            if unknown:
                raise InvalidArgument(
                    f"Unsupported {field_name} keyword(s) for {label}: "
                    f"{', '.join(unknown)} (allowed: {', '.join(sorted(allowed))})"
                )

    async def handle(
        self,
        session: ImsSession,
        params: BaseModel,
        *,
        settings: AppSettings | None = None,
    ) -> ImsApiResponse:
        return await self.operation(session, params, settings=settings)

    def success_values(self, params: BaseModel) -> Mapping[str, Any]:
        names = getattr(params, "names", None) or []
        return {"names": ", ".join(names)}


START_PROGRAM = ApiCommandHandler(
    "start.program", UpdateProgramParams, ims_api.start_program, {"start": PROGRAM_START_KEYWORDS}
)
START_TRANSACTION = ApiCommandHandler(
    "start.transaction", UpdateTransactionParams, ims_api.start_transaction, {"start": TRANSACTION_START_KEYWORDS}
)
START_REGION = ApiCommandHandler("start.region", StartRegionParams, ims_api.start_region)
STOP_PROGRAM = ApiCommandHandler(
    "stop.program", UpdateProgramParams, ims_api.stop_program, {"stop": PROGRAM_STOP_KEYWORDS}
)
STOP_TRANSACTION = ApiCommandHandler(
    "stop.transaction", UpdateTransactionParams, ims_api.stop_transaction, {"stop": TRANSACTION_STOP_KEYWORDS}
)
STOP_REGION = ApiCommandHandler("stop.region", StopRegionParams, ims_api.stop_region)


def check_return_code(response: ImsApiResponse) -> None:
    """Raise `ApplicationLevelFailure` when IMS reports a failure in the body.

    Checked in order: top-level `returnCode`, each member's `rc`, then the
    per-resource completion code `cc` of the data rows.
    """

    lines = response.message_lines()
    rows = response.failed_entries()
    if not is_zero_code(response.return_code):
        raise ApplicationLevelFailure(
            f"returnCode {response.return_code}",
            messages=lines,
            data=response.data,
            failed_rows=rows,
        )

    failing = [
        f"{member}: {message.describe()}"
        for member, message in response.messages.items()
        if not is_zero_code(message.rc)
    ]
    if failing:
        raise ApplicationLevelFailure("; ".join(failing), messages=lines, data=response.data, failed_rows=rows)

    if rows:
        summary = ", ".join(f"{row.get('name', '?')} cc={row.get('cc')}" for row in rows)
        raise ApplicationLevelFailure(summary, messages=lines, data=response.data, failed_rows=rows)


def _fail(state: CliState, title: str, exc: ImsError) -> None:
    state.err_console.print(build_error_panel(title, exc))
    if isinstance(exc, ApplicationLevelFailure) and exc.failed_rows:
        state.err_console.print(build_failed_rows_table(exc.failed_rows))


def process_with_session(
    state: CliState,
    handler: CommandHandler,
    args: Mapping[str, Any],
    connection: ConnectionOptions,
) -> ImsApiResponse:
    """Run one handler end to end; exits with code 1 on any `ImsError`."""

    catalog = state.catalog
    log = logger.bind(command=handler.key)
    stage = Stage.RESOLVING_SESSION
    try:
        log.debug("stage", stage=stage.value)
        session = resolve_session(state.settings, connection.overrides())

        stage = Stage.VALIDATING
        log.debug("stage", stage=stage.value)
        params = coerce_params(handler.params_model, args)
        handler.validate(params)

        stage = Stage.REQUESTING
        log.debug("stage", stage=stage.value, host=session.host, port=session.port)
        with state.err_console.status(catalog[f"{handler.key}.status"]):
            response = asyncio.run(handler.handle(session, params, settings=state.settings))
        check_return_code(response)

        stage = Stage.RENDERING
        log.debug("stage", stage=stage.value)
        if state.response_format_json:
            typer.echo(response_as_json(response))
        else:
            print_response(
                state.console,
                response,
                catalog.format(f"{handler.key}.success", **handler.success_values(params)),
            )
        log.info("IMS messages", messages=response.message_lines())
    except InvalidArgument as exc:
        log.debug("stage", stage=Stage.FAILED.value, failed_at=stage.value)
        _fail(state, catalog["errors.invalid_argument"], exc)
        raise typer.Exit(code=1) from exc
    except RemoteRequestError as exc:
        log.debug("stage", stage=Stage.FAILED.value, failed_at=stage.value, status_code=exc.status_code)
        _fail(state, catalog["errors.remote"], exc)
        raise typer.Exit(code=1) from exc
    except ApplicationLevelFailure as exc:
        log.debug("stage", stage=Stage.FAILED.value, failed_at=stage.value)
        _fail(state, catalog["errors.application"], exc)
        raise typer.Exit(code=1) from exc

    log.debug("stage", stage=Stage.DONE.value)
    return response
