"""httpx wrapper.

Why a wrapper:
- Standardizes base URL, timeouts, headers, auth and TLS verification for every
  IMS call.
- Easier testing: the builder accepts a custom transport.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings, load_settings
from core.constants import HEADER_IMS_CONNECT_HOST, HEADER_IMS_CONNECT_PORT, HEADER_PLEX
from core.domain.models import ImsSession


def build_ims_headers(session: ImsSession, settings: AppSettings) -> dict[str, str]:
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
        "Content-Type": "application/json",
    }
    if session.ims_connect_host:
        headers[HEADER_IMS_CONNECT_HOST] = session.ims_connect_host
    if session.ims_connect_port is not None:
        headers[HEADER_IMS_CONNECT_PORT] = str(session.ims_connect_port)
    if session.plex:
        headers[HEADER_PLEX] = session.plex
    return headers


def build_async_client(
    session: ImsSession,
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` bound to one IMS session.

    Why a builder:
    - Centralizes timeouts/headers so every command behaves the same.
    - Credentials travel as HTTP basic auth on each request.
    """

    settings = settings or load_settings()
    return httpx.AsyncClient(
        base_url=session.base_url,
        auth=httpx.BasicAuth(session.user, session.password),
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        verify=session.reject_unauthorized,
        follow_redirects=False,
        headers=build_ims_headers(session, settings),
        transport=transport,
    )
