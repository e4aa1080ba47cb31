"""Start/stop operations against the IMS REST API.

Each function validates its parameter bag, encodes it and issues exactly one
PUT. Validation is local and fail-fast: an `InvalidArgument` is raised before
any connection is opened.

Parameter bags can be passed as models or as plain mappings (snake_case or
the API's camelCase keys).
"""

from __future__ import annotations

import json
from typing import Any, Mapping, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from adapters.ims_rest_client import put_expect_json
from core.config import AppSettings
from core.domain.models import (
    ImsApiResponse,
    ImsSession,
    StartRegionParams,
    StopRegionParams,
    UpdateProgramParams,
    UpdateTransactionParams,
    invalid_argument_from,
)
from core.logging import get_logger
from core.services.query_encoder import (
    ResourceRequest,
    encode_start_program,
    encode_start_region,
    encode_start_transaction,
    encode_stop_program,
    encode_stop_region,
    encode_stop_transaction,
)

logger = get_logger(__name__)

ParamsT = TypeVar("ParamsT", bound=BaseModel)


def coerce_params(model: type[ParamsT], params: ParamsT | Mapping[str, Any]) -> ParamsT:
    """Validate `params` into `model`, translating errors into `InvalidArgument`."""

    if isinstance(params, model):
        return params
    try:
        if isinstance(params, BaseModel):
            return model.model_validate(params.model_dump(exclude_unset=True))
        return model.model_validate(dict(params))
    except ValidationError as exc:
        raise invalid_argument_from(exc) from exc


def _describe(params: BaseModel) -> str:
    payload = params.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(payload, sort_keys=True)


async def _send(
    session: ImsSession,
    params: BaseModel,
    request: ResourceRequest,
    action: str,
    *,
    client: httpx.AsyncClient | None,
    settings: AppSettings | None,
) -> ImsApiResponse:
    logger.debug(
        f"Attempting to {action} with the following parameters",
        parameters=_describe(params),
        resource=request.resource,
    )
    return await put_expect_json(session, request.resource, client=client, settings=settings)


async def start_program(
    session: ImsSession,
    params: UpdateProgramParams | Mapping[str, Any],
    *,
    client: httpx.AsyncClient | None = None,
    settings: AppSettings | None = None,
) -> ImsApiResponse:
    """Start program(s); `start` defaults to SCHD.

    Raises:
        InvalidArgument: program name missing or blank.
        RemoteRequestError: the request failed.
    """

    validated = coerce_params(UpdateProgramParams, params)
    return await _send(
        session, validated, encode_start_program(validated), "start program(s)", client=client, settings=settings
    )


async def stop_program(
    session: ImsSession,
    params: UpdateProgramParams | Mapping[str, Any],
    *,
    client: httpx.AsyncClient | None = None,
    settings: AppSettings | None = None,
) -> ImsApiResponse:
    """Stop program(s); `stop` defaults to SCHD."""

    validated = coerce_params(UpdateProgramParams, params)
    return await _send(
        session, validated, encode_stop_program(validated), "stop program(s)", client=client, settings=settings
    )


async def start_transaction(
    session: ImsSession,
    params: UpdateTransactionParams | Mapping[str, Any],
    *,
    client: httpx.AsyncClient | None = None,
    settings: AppSettings | None = None,
) -> ImsApiResponse:
    validated = coerce_params(UpdateTransactionParams, params)
    return await _send(
        session, validated, encode_start_transaction(validated), "start transaction(s)", client=client, settings=settings
    )


async def stop_transaction(
    session: ImsSession,
    params: UpdateTransactionParams | Mapping[str, Any],
    *,
    client: httpx.AsyncClient | None = None,
    settings: AppSettings | None = None,
) -> ImsApiResponse:
    validated = coerce_params(UpdateTransactionParams, params)
    return await _send(
        session, validated, encode_stop_transaction(validated), "stop transaction(s)", client=client, settings=settings
    )


async def start_region(
    session: ImsSession,
    params: StartRegionParams | Mapping[str, Any],
    *,
    client: httpx.AsyncClient | None = None,
    settings: AppSettings | None = None,
) -> ImsApiResponse:
    validated = coerce_params(StartRegionParams, params)
    return await _send(
        session, validated, encode_start_region(validated), "start a region", client=client, settings=settings
    )


async def stop_region(
    session: ImsSession,
    params: StopRegionParams | Mapping[str, Any],
    *,
    client: httpx.AsyncClient | None = None,
    settings: AppSettings | None = None,
) -> ImsApiResponse:
    """Stop a region identified by number(s) or by job name (not both).

    Raises:
        InvalidArgument: neither or both of region number / job name given,
            or a blank job name.
        RemoteRequestError: the request failed.
    """

    validated = coerce_params(StopRegionParams, params)
    return await _send(
        session, validated, encode_stop_region(validated), "stop a region", client=client, settings=settings
    )
