"""REST invoker for the IMS API.

One PUT per call, empty body, JSON back. No retries: any failure is surfaced
to the caller as `RemoteRequestError`.
"""

from __future__ import annotations

import json

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import RemoteRequestError
from core.domain.models import ImsApiResponse, ImsSession
from core.logging import get_logger

logger = get_logger(__name__)

_BODY_EXCERPT_CHARS = 500


def _excerpt(text: str) -> str:
    text = text.strip()
    if len(text) <= _BODY_EXCERPT_CHARS:
        return text
    return text[:_BODY_EXCERPT_CHARS] + "..."


def _parse_envelope(response: httpx.Response) -> ImsApiResponse:
    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise RemoteRequestError(
            f"IMS returned a body that is not valid JSON (HTTP {response.status_code})",
            status_code=response.status_code,
            body=_excerpt(response.text),
        ) from exc

    if not isinstance(payload, dict):
        raise RemoteRequestError(
            f"IMS returned JSON of type {type(payload).__name__}, expected an object",
            status_code=response.status_code,
            body=_excerpt(response.text),
        )

    try:
        return ImsApiResponse.model_validate(payload)
    except ValidationError as exc:
        raise RemoteRequestError(
            f"IMS returned an unexpected response shape: {exc.errors()[0].get('msg')}",
            status_code=response.status_code,
            body=_excerpt(response.text),
        ) from exc


async def put_expect_json(
    session: ImsSession,
    resource: str,
    *,
    client: httpx.AsyncClient | None = None,
    settings: AppSettings | None = None,
) -> ImsApiResponse:
    """PUT `base_path + resource` and parse the JSON envelope.

    `client` is used as-is when given (its base URL must point at the session
    host); otherwise a client is built for `session` and closed afterwards.
    """

    url = session.base_path + resource
    logger.debug("ims_request", method="PUT", url=session.base_url + url)

    try:
        if client is not None:
            response = await client.put(url, content=b"")
        else:
            async with build_async_client(session, settings) as owned_client:
                response = await owned_client.put(url, content=b"")
    except httpx.HTTPError as exc:
        raise RemoteRequestError(f"{type(exc).__name__}: {exc}") from exc

    logger.debug("ims_response", status_code=response.status_code)

    if not response.is_success:
        raise RemoteRequestError(
            f"IMS REST API returned HTTP {response.status_code} {response.reason_phrase}".rstrip(),
            status_code=response.status_code,
            body=_excerpt(response.text),
        )

    return _parse_envelope(response)
