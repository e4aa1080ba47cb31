"""Parameter bag -> REST resource path + query string.

Every encoder is a pure function. Field emission order is fixed, because the
server (and recorded fixtures) expect the canonical form:

- program / transaction: names, start|stop, route
- stop region: regNum, jobname, abdump, transaction, cancel
- start region: mbr, local, jobname
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Literal
from urllib.parse import quote

from core.constants import DEFAULT_STATUS, PROGRAM, REGION, START, STOP, TRANSACTION
from core.domain.models import (
    StartRegionParams,
    StopRegionParams,
    UpdateProgramParams,
    UpdateTransactionParams,
)

# Characters JavaScript's encodeURIComponent leaves alone (besides alphanumerics and `_.-~`).
_URI_COMPONENT_SAFE = "!*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def _encode_list(values: Iterable[str]) -> str:
    return ",".join(encode_uri_component(value) for value in values)


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


@dataclass(frozen=True)
class ResourceRequest:
    """A resource path relative to the API base path, plus its query string."""

    path: str
    query: str = ""

    @property
    def resource(self) -> str:
        return self.path + self.query

    def __str__(self) -> str:
        return self.resource


@dataclass
class _QueryBuilder:
    pairs: list[tuple[str, str]] = field(default_factory=list)

    def add(self, key: str, encoded_value: str) -> None:
        self.pairs.append((key, encoded_value))

    def build(self) -> str:
        # "?" before the first parameter, "&" thereafter.
        return "".join(
            f"{'?' if index == 0 else '&'}{key}={value}"
            for index, (key, value) in enumerate(self.pairs)
        )


Action = Literal["start", "stop"]


def _encode_update(
    resource: str,
    params: UpdateProgramParams | UpdateTransactionParams,
    action: Action,
) -> ResourceRequest:
    query = _QueryBuilder()

    # Only a non-empty list emits `names=`, even though the bag requires it.
    if params.names:
        query.add("names", _encode_list(params.names))

    keywords = params.start if action == START else params.stop
    if keywords:
        query.add(action, _encode_list(keywords))
    else:
        query.add(action, DEFAULT_STATUS)

    if params.route:
        query.add("route", _encode_list(params.route))

    return ResourceRequest(path=f"/{resource}", query=query.build())


def encode_start_program(params: UpdateProgramParams) -> ResourceRequest:
    return _encode_update(PROGRAM, params, START)


def encode_stop_program(params: UpdateProgramParams) -> ResourceRequest:
    return _encode_update(PROGRAM, params, STOP)


def encode_start_transaction(params: UpdateTransactionParams) -> ResourceRequest:
    return _encode_update(TRANSACTION, params, START)


def encode_stop_transaction(params: UpdateTransactionParams) -> ResourceRequest:
    return _encode_update(TRANSACTION, params, STOP)


def encode_stop_region(params: StopRegionParams) -> ResourceRequest:
    query = _QueryBuilder()
    if params.reg_num is not None:
        # The joined list is encoded as one value: 1,2 -> 1%2C2.
        query.add("regNum", encode_uri_component(",".join(str(n) for n in params.reg_num)))
    if params.job_name is not None:
        query.add("jobname", encode_uri_component(params.job_name))
    if params.abdump is not None:
        query.add("abdump", encode_uri_component(params.abdump))
    if params.transaction is not None:
        query.add("transaction", encode_uri_component(params.transaction))
    if params.cancel_requested:
        query.add("cancel", _format_bool(params.cancel))
    return ResourceRequest(path=f"/{REGION}/{STOP}", query=query.build())


def encode_start_region(params: StartRegionParams) -> ResourceRequest:
    query = _QueryBuilder()
    if params.member_name is not None:
        query.add("mbr", encode_uri_component(params.member_name))
    if params.local is not None:
        query.add("local", _format_bool(params.local))
    if params.job_name is not None:
        query.add("jobname", encode_uri_component(params.job_name))
    return ResourceRequest(path=f"/{REGION}/{START}", query=query.build())
