"""Tests for parameter bag validation and the response envelope."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.domain.errors import InvalidArgument
from core.domain.models import (
    ImsApiResponse,
    ImsSession,
    StartRegionParams,
    StopRegionParams,
    UpdateProgramParams,
    UpdateTransactionParams,
    invalid_argument_from,
    is_zero_code,
)
from core.services.ims_api import coerce_params


class TestUpdateParams:
    def test_names_are_required(self) -> None:
        with pytest.raises(InvalidArgument, match="names"):
            coerce_params(UpdateProgramParams, {})

    @pytest.mark.parametrize("names", [[], [""], ["   "]])
    def test_first_name_must_be_non_blank(self, names: list[str]) -> None:
        with pytest.raises(InvalidArgument, match="IMS program name is required"):
            coerce_params(UpdateProgramParams, {"names": names})

    def test_transaction_label_in_message(self) -> None:
        with pytest.raises(InvalidArgument, match="IMS transaction name is required"):
            coerce_params(UpdateTransactionParams, {"names": [""]})

    def test_keywords_are_upper_cased(self) -> None:
        params = UpdateTransactionParams(names=["TRAN1"], stop=[" q ", "schd"])

        assert params.stop == ["Q", "SCHD"]

    def test_empty_keyword_list_means_absent(self) -> None:
        assert UpdateProgramParams(names=["PGM1"], stop=[]).stop is None

    def test_any_keyword_is_accepted(self) -> None:
        params = coerce_params(UpdateProgramParams, {"names": ["PGM1"], "stop": ["suspend", "xyz"]})

        assert params.stop == ["SUSPEND", "XYZ"]

    def test_unknown_field_is_rejected(self) -> None:
        with pytest.raises(InvalidArgument, match="bogus"):
            coerce_params(UpdateProgramParams, {"names": ["PGM1"], "bogus": True})


class TestStopRegionParams:
    def test_neither_identifier(self) -> None:
        with pytest.raises(InvalidArgument, match="Either region number or job name"):
            coerce_params(StopRegionParams, {"cancel": False})

    def test_both_identifiers(self) -> None:
        with pytest.raises(InvalidArgument, match="Either region number or job name"):
            coerce_params(StopRegionParams, {"regNum": [1], "jobName": "JOB1", "cancel": False})

    def test_blank_job_name(self) -> None:
        with pytest.raises(InvalidArgument, match="job name is specified it must have a value"):
            coerce_params(StopRegionParams, {"jobName": "  "})

    def test_region_numbers_must_be_positive(self) -> None:
        with pytest.raises(InvalidArgument, match="positive"):
            coerce_params(StopRegionParams, {"regNum": [0]})

    def test_camel_case_and_snake_case_keys(self) -> None:
        camel = coerce_params(StopRegionParams, {"regNum": [1, 2], "cancel": True})
        snake = coerce_params(StopRegionParams, {"reg_num": [1, 2], "cancel": True})

        assert camel == snake
        assert camel.reg_num == [1, 2]

    def test_cancel_defaults_to_false_and_is_not_requested(self) -> None:
        params = StopRegionParams(job_name="JOB1")

        assert params.cancel is False
        assert params.cancel_requested is False

    def test_explicit_false_cancel_is_requested(self) -> None:
        assert StopRegionParams(job_name="JOB1", cancel=False).cancel_requested is True


class TestStartRegionParams:
    def test_all_optional(self) -> None:
        assert StartRegionParams().member_name is None

    def test_blank_member_name(self) -> None:
        with pytest.raises(InvalidArgument, match="member name"):
            coerce_params(StartRegionParams, {"memberName": ""})


class TestImsSession:
    def test_base_url(self, session: ImsSession) -> None:
        assert session.base_url == "https://ims.example.com:8443"

    def test_base_path_is_normalized(self) -> None:
        session = ImsSession(host="h", port=1, user="u", password="p", base_path="api/v2/")

        assert session.base_path == "/api/v2"

    def test_password_not_in_repr(self, session: ImsSession) -> None:
        assert "secret" not in repr(session)


class TestImsApiResponse:
    def test_message_lines(self) -> None:
        response = ImsApiResponse.model_validate(
            {"messages": {"IMS1": {"rc": "00000000", "rsn": "00000000"}, "IMS2": {"rc": "0000000C", "rsnmsg": "bad"}}}
        )

        assert response.message_lines() == ["IMS1: rc=00000000 rsn=00000000", "IMS2: rc=0000000C bad"]

    def test_list_of_strings_is_accepted(self) -> None:
        response = ImsApiResponse.model_validate({"messages": ["first", "second"], "data": None})

        assert response.message_lines() == ["0: first", "1: second"]

    def test_return_code_alias(self) -> None:
        assert ImsApiResponse.model_validate({"returnCode": 8}).return_code == 8

    def test_failed_entries(self) -> None:
        response = ImsApiResponse.model_validate(
            {"data": [{"name": "A", "cc": "0"}, {"name": "B", "cc": "10"}, {"name": "C"}, "noise"]}
        )

        assert response.failed_entries() == [{"name": "B", "cc": "10"}]


@pytest.mark.parametrize(("code", "zero"), [(None, True), (0, True), ("0", True), ("00000000", True), ("0000000C", False), (4, False)])
def test_is_zero_code(code: object, zero: bool) -> None:
    assert is_zero_code(code) is zero


def test_invalid_argument_from_type_error() -> None:
    with pytest.raises(ValidationError) as excinfo:
        StopRegionParams.model_validate({"regNum": ["x"]})

    error = invalid_argument_from(excinfo.value)

    assert error.message.startswith("Invalid value for regNum")
