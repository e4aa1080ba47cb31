"""Tests for the start/stop API functions."""

from __future__ import annotations

import httpx
import pytest
import respx

from core.domain.errors import InvalidArgument
from core.domain.models import ImsSession, UpdateProgramParams
from core.services import ims_api

IMS_BASE = "https://ims.example.com:8443/api/v1"


@pytest.mark.asyncio
@respx.mock
async def test_stop_transaction_scenario(session: ImsSession) -> None:
    route = respx.put(f"{IMS_BASE}/transaction").mock(return_value=httpx.Response(200, json={"data": []}))

    await ims_api.stop_transaction(session, {"names": ["TRAN1"]})

    assert str(route.calls.last.request.url) == f"{IMS_BASE}/transaction?names=TRAN1&stop=SCHD"


@pytest.mark.asyncio
@respx.mock
async def test_stop_region_scenario(session: ImsSession) -> None:
    route = respx.put(f"{IMS_BASE}/region/stop").mock(return_value=httpx.Response(200, json={"data": []}))

    await ims_api.stop_region(session, {"regNum": [1, 2], "cancel": True})

    assert str(route.calls.last.request.url) == f"{IMS_BASE}/region/stop?regNum=1%2C2&cancel=true"


@pytest.mark.asyncio
@respx.mock
async def test_stop_region_mutual_exclusion_sends_nothing(session: ImsSession) -> None:
    with pytest.raises(InvalidArgument, match="Either region number or job name"):
        await ims_api.stop_region(session, {"regNum": [1], "jobName": "JOB1", "cancel": False})

    assert respx.calls.call_count == 0


@pytest.mark.asyncio
@respx.mock
async def test_stop_program_without_names_sends_nothing(session: ImsSession) -> None:
    with pytest.raises(InvalidArgument):
        await ims_api.stop_program(session, {})

    assert respx.calls.call_count == 0


@pytest.mark.asyncio
@respx.mock
async def test_start_program_accepts_model(session: ImsSession) -> None:
    route = respx.put(f"{IMS_BASE}/program").mock(return_value=httpx.Response(200, json={}))

    await ims_api.start_program(session, UpdateProgramParams(names=["PGM1"], start=["TRACE"], route=["IMS1"]))

    assert str(route.calls.last.request.url) == f"{IMS_BASE}/program?names=PGM1&start=TRACE&route=IMS1"


@pytest.mark.asyncio
@respx.mock
async def test_start_transaction(session: ImsSession) -> None:
    route = respx.put(f"{IMS_BASE}/transaction").mock(return_value=httpx.Response(200, json={}))

    await ims_api.start_transaction(session, {"names": ["TRAN1", "TRAN2"]})

    assert str(route.calls.last.request.url) == f"{IMS_BASE}/transaction?names=TRAN1,TRAN2&start=SCHD"


@pytest.mark.asyncio
@respx.mock
async def test_start_region(session: ImsSession) -> None:
    route = respx.put(f"{IMS_BASE}/region/start").mock(return_value=httpx.Response(200, json={}))

    await ims_api.start_region(session, {"memberName": "DFSMPR", "local": False})

    assert str(route.calls.last.request.url) == f"{IMS_BASE}/region/start?mbr=DFSMPR&local=false"


@pytest.mark.asyncio
@respx.mock
async def test_stop_program_custom_base_path(session: ImsSession) -> None:
    custom = session.model_copy(update={"base_path": "/ims/rest"})
    route = respx.put("https://ims.example.com:8443/ims/rest/program").mock(
        return_value=httpx.Response(200, json={})
    )

    await ims_api.stop_program(custom, {"names": ["PGM1"]})

    assert route.called


@pytest.mark.asyncio
@respx.mock
async def test_stop_program_passes_keywords_through(session: ImsSession) -> None:
    route = respx.put(f"{IMS_BASE}/program").mock(return_value=httpx.Response(200, json={}))

    await ims_api.stop_program(session, {"names": ["PGM1"], "stop": ["SUSPEND"]})

    assert str(route.calls.last.request.url) == f"{IMS_BASE}/program?names=PGM1&stop=SUSPEND"
