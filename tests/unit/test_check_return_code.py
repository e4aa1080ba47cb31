"""Tests for application-level failure detection in IMS responses."""

from __future__ import annotations

import pytest

from cli.handlers import START_TRANSACTION, STOP_PROGRAM, STOP_REGION, check_return_code
from core.domain.errors import ApplicationLevelFailure, InvalidArgument
from core.domain.models import ImsApiResponse, StopRegionParams, UpdateProgramParams, UpdateTransactionParams
from core.interfaces.handler import CommandHandler


def _response(payload: dict) -> ImsApiResponse:
    return ImsApiResponse.model_validate(payload)


def test_successful_response_passes() -> None:
    check_return_code(
        _response(
            {
                "messages": {"IMS1": {"rc": "00000000", "rsn": "00000000"}},
                "data": [{"name": "PGM1", "cc": "0"}],
            }
        )
    )


def test_empty_envelope_passes() -> None:
    check_return_code(_response({}))


def test_non_zero_return_code() -> None:
    with pytest.raises(ApplicationLevelFailure, match="returnCode 8") as excinfo:
        check_return_code(_response({"returnCode": 8, "messages": {"IMS1": {"rc": "00000000"}}}))

    assert excinfo.value.messages == ["IMS1: rc=00000000"]


def test_non_zero_member_rc() -> None:
    payload = {
        "messages": {
            "IMS1": {"rc": "00000000"},
            "IMS2": {"rc": "00000008", "rsn": "00002040", "rsnmsg": "CSLN023I"},
        }
    }

    with pytest.raises(ApplicationLevelFailure, match="IMS2: rc=00000008 rsn=00002040 CSLN023I"):
        check_return_code(_response(payload))


def test_non_zero_completion_code() -> None:
    payload = {"data": [{"name": "PGM1", "cc": "0"}, {"name": "PGM2", "cc": "10"}]}

    with pytest.raises(ApplicationLevelFailure, match="PGM2 cc=10") as excinfo:
        check_return_code(_response(payload))

    assert excinfo.value.data == payload["data"]
    assert excinfo.value.failed_rows == [{"name": "PGM2", "cc": "10"}]


def test_handlers_satisfy_protocol() -> None:
    assert isinstance(STOP_PROGRAM, CommandHandler)
    assert isinstance(STOP_REGION, CommandHandler)


def test_success_values_join_names() -> None:
    params = UpdateProgramParams(names=["PGM1", "PGM2"])

    assert STOP_PROGRAM.success_values(params) == {"names": "PGM1, PGM2"}


@pytest.mark.parametrize("data", [5, {"name": "PGM1", "cc": "10"}, "text", None])
def test_non_list_data_carries_no_failed_rows(data: object) -> None:
    with pytest.raises(ApplicationLevelFailure) as excinfo:
        check_return_code(_response({"returnCode": 8, "data": data}))

    assert excinfo.value.failed_rows == []
    assert excinfo.value.data == data


class TestKeywordVocabulary:
    def test_stop_program_rejects_start_only_keyword(self) -> None:
        params = UpdateProgramParams(names=["PGM1"], stop=["REFRESH"])

        with pytest.raises(InvalidArgument, match="Unsupported stop keyword"):
            STOP_PROGRAM.validate(params)

    def test_known_keywords_pass(self) -> None:
        STOP_PROGRAM.validate(UpdateProgramParams(names=["PGM1"], stop=["schd", "trace"]))
        START_TRANSACTION.validate(UpdateTransactionParams(names=["TRAN1"], start=["suspend"]))

    def test_allowed_list_in_message(self) -> None:
        with pytest.raises(InvalidArgument, match=r"allowed: Q, SCHD, SUSPEND, TRACE"):
            START_TRANSACTION.validate(UpdateTransactionParams(names=["TRAN1"], start=["REFRESH"]))

    def test_region_handler_has_no_vocabulary(self) -> None:
        STOP_REGION.validate(StopRegionParams(reg_num=[1]))
