"""Tests for the REST invoker (PUT + JSON envelope parsing)."""

from __future__ import annotations

import base64

import httpx
import pytest
import respx

from adapters.http_client import build_async_client, build_ims_headers
from adapters.ims_rest_client import put_expect_json
from core.config import load_settings
from core.domain.errors import RemoteRequestError
from core.domain.models import ImsSession

IMS_BASE = "https://ims.example.com:8443/api/v1"


@pytest.mark.asyncio
@respx.mock
async def test_put_sends_empty_body_with_basic_auth(session: ImsSession) -> None:
    route = respx.put(f"{IMS_BASE}/program").mock(
        return_value=httpx.Response(200, json={"messages": {}, "data": [{"name": "PGM1", "cc": "0"}]})
    )

    response = await put_expect_json(session, "/program?names=PGM1&stop=SCHD")

    request = route.calls.last.request
    assert request.method == "PUT"
    assert str(request.url) == f"{IMS_BASE}/program?names=PGM1&stop=SCHD"
    assert request.content == b""
    expected_auth = "Basic " + base64.b64encode(b"USER1:secret").decode()
    assert request.headers["Authorization"] == expected_auth
    assert request.headers["Accept"] == "application/json"
    assert response.data == [{"name": "PGM1", "cc": "0"}]


@pytest.mark.asyncio
@respx.mock
async def test_percent_encoding_is_preserved(session: ImsSession) -> None:
    route = respx.put(f"{IMS_BASE}/region/stop").mock(return_value=httpx.Response(200, json={}))

    await put_expect_json(session, "/region/stop?regNum=1%2C2&cancel=true")

    assert str(route.calls.last.request.url) == f"{IMS_BASE}/region/stop?regNum=1%2C2&cancel=true"


@pytest.mark.asyncio
@respx.mock
async def test_non_2xx_raises_remote_request_error(session: ImsSession) -> None:
    respx.put(f"{IMS_BASE}/transaction").mock(return_value=httpx.Response(401, text="Unauthorized user"))

    with pytest.raises(RemoteRequestError) as excinfo:
        await put_expect_json(session, "/transaction?names=TRAN1&stop=SCHD")

    assert excinfo.value.status_code == 401
    assert excinfo.value.body == "Unauthorized user"
    assert "HTTP 401" in excinfo.value.message


@pytest.mark.asyncio
@respx.mock
async def test_connection_error_raises_remote_request_error(session: ImsSession) -> None:
    respx.put(f"{IMS_BASE}/transaction").mock(side_effect=httpx.ConnectError("connection refused"))

    with pytest.raises(RemoteRequestError, match="ConnectError") as excinfo:
        await put_expect_json(session, "/transaction?names=TRAN1&stop=SCHD")

    assert excinfo.value.status_code is None


@pytest.mark.asyncio
@respx.mock
async def test_malformed_json_raises_remote_request_error(session: ImsSession) -> None:
    respx.put(f"{IMS_BASE}/program").mock(return_value=httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(RemoteRequestError, match="not valid JSON") as excinfo:
        await put_expect_json(session, "/program?names=PGM1&stop=SCHD")

    assert excinfo.value.body == "<html>oops</html>"


@pytest.mark.asyncio
@respx.mock
async def test_json_array_body_is_rejected(session: ImsSession) -> None:
    respx.put(f"{IMS_BASE}/program").mock(return_value=httpx.Response(200, json=[1, 2]))

    with pytest.raises(RemoteRequestError, match="expected an object"):
        await put_expect_json(session, "/program?names=PGM1&stop=SCHD")


@pytest.mark.asyncio
@respx.mock
async def test_uses_given_client(session: ImsSession) -> None:
    route = respx.put(f"{IMS_BASE}/program").mock(return_value=httpx.Response(200, json={"returnCode": 0}))

    async with build_async_client(session, load_settings()) as client:
        response = await put_expect_json(session, "/program?names=PGM1&stop=SCHD", client=client)
        assert not client.is_closed

    assert route.called
    assert response.return_code == 0


def test_routing_headers_only_when_configured(session: ImsSession) -> None:
    settings = load_settings()
    assert "plex" not in build_ims_headers(session, settings)

    routed = session.model_copy(update={"ims_connect_host": "icon.example.com", "ims_connect_port": 9999, "plex": "PLEX1"})
    headers = build_ims_headers(routed, settings)

    assert headers["hostname"] == "icon.example.com"
    assert headers["port"] == "9999"
    assert headers["plex"] == "PLEX1"
