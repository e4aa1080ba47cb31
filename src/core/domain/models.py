"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation at construction time, so a bad parameter bag never reaches
  the network layer.
- Aliases let the same model accept CLI-style snake_case and the REST API's
  camelCase keys (`regNum`, `jobName`).

Note:
- These models describe *what* is sent to IMS and *what* comes back, not *how*.
"""

from __future__ import annotations

from typing import Any, ClassVar, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pydantic.config import ConfigDict

from core.constants import DEFAULT_BASE_PATH
from core.domain.errors import InvalidArgument


def is_zero_code(code: object) -> bool:
    """True for `None`, `0`, `"0"`, `"00000000"` and other all-zero codes."""

    if code is None:
        return True
    return str(code).strip().strip("0") == ""


def normalize_base_path(value: str) -> str:
    """`api/v1/` -> `/api/v1`; empty stays empty (API at the server root)."""

    value = value.strip().rstrip("/")
    if value and not value.startswith("/"):
        value = "/" + value
    return value


def invalid_argument_from(exc: ValidationError) -> InvalidArgument:
    """Translate the first pydantic error into an operator-facing `InvalidArgument`."""

    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ()))
    if error.get("type") == "missing":
        return InvalidArgument(f"Missing required parameter: {location}")
    ctx_error = (error.get("ctx") or {}).get("error")
    if error.get("type") == "value_error" and ctx_error is not None:
        return InvalidArgument(str(ctx_error))
    if location:
        return InvalidArgument(f"Invalid value for {location}: {error.get('msg')}")
    return InvalidArgument(str(error.get("msg")))


class ImsSession(BaseModel):
    """Connection details for one CLI invocation.

    Built from the stored profile plus command-line overrides and discarded
    when the command finishes.
    """

    model_config = ConfigDict(frozen=True)

    host: str = Field(..., min_length=1, description="Host name of the IMS REST API server.")
    port: int = Field(..., ge=1, le=65535, description="Port of the IMS REST API server.")
    user: str = Field(..., min_length=1, description="Mainframe user ID.")
    password: str = Field(..., min_length=1, repr=False, description="Mainframe password.")
    protocol: Literal["http", "https"] = Field(default="https")
    reject_unauthorized: bool = Field(
        default=True,
        description="Reject self-signed or otherwise untrusted TLS certificates.",
    )
    ims_connect_host: str | None = Field(default=None, description="IMS Connect host (routing header).")
    ims_connect_port: int | None = Field(default=None, ge=1, le=65535)
    plex: str | None = Field(default=None, description="IMSplex name (routing header).")
    base_path: str = Field(default=DEFAULT_BASE_PATH)

    @field_validator("base_path", mode="after")
    @classmethod
    def _normalize_base_path(cls, value: str) -> str:
        return normalize_base_path(value)

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://{self.host}:{self.port}"


class _ParamsModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)


class _UpdateResourceParams(_ParamsModel):
    """Shared shape of the program and transaction parameter bags."""

    resource_label: ClassVar[str] = "resource"

    names: list[str] = Field(..., description="Resource names; the first one must be non-blank.")
    start: list[str] | None = Field(default=None, description="Status keywords to start.")
    stop: list[str] | None = Field(default=None, description="Status keywords to stop.")
    route: list[str] | None = Field(default=None, description="IMS members the command is routed to.")

    @field_validator("start", "stop", mode="after")
    @classmethod
    def _normalize_keywords(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        return [keyword.strip().upper() for keyword in value if keyword.strip()] or None

    @field_validator("route", mode="after")
    @classmethod
    def _normalize_route(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        return [member.strip() for member in value if member.strip()] or None

    @model_validator(mode="after")
    def _first_name_required(self) -> "_UpdateResourceParams":
        if not self.names or not self.names[0] or not self.names[0].strip():
            raise ValueError(f"IMS {self.resource_label} name is required")
        return self


class UpdateProgramParams(_UpdateResourceParams):
    resource_label: ClassVar[str] = "program"


class UpdateTransactionParams(_UpdateResourceParams):
    resource_label: ClassVar[str] = "transaction"


class StopRegionParams(_ParamsModel):
    """Parameters for stopping a dependent region.

    A region is identified either by number(s) or by the job name that owns it,
    never both.
    """

    reg_num: list[int] | None = Field(default=None, alias="regNum")
    job_name: str | None = Field(default=None, alias="jobName")
    abdump: str | None = Field(
        default=None,
        description="Transaction to abnormally terminate in the region (the region stays active).",
    )
    transaction: str | None = Field(
        default=None,
        description="Transaction in WFI mode whose message processing is stopped.",
    )
    cancel: bool = Field(
        default=False,
        description="Cancel a region that could not be stopped by a preceding --abdump.",
    )

    @field_validator("reg_num", mode="after")
    @classmethod
    def _positive_numbers(cls, value: list[int] | None) -> list[int] | None:
        if not value:
            return None
        if any(number < 1 for number in value):
            raise ValueError("Region numbers must be positive integers.")
        return value

    @model_validator(mode="after")
    def _exactly_one_identifier(self) -> "StopRegionParams":
        if self.reg_num is None and self.job_name is None:
            raise ValueError("Either region number or job name (but not both) must be specified.")
        if self.reg_num is not None and self.job_name is not None:
            raise ValueError("Either region number or job name (but not both) must be specified.")
        if self.reg_num is None and not (self.job_name or "").strip():
            raise ValueError("If job name is specified it must have a value.")
        return self

    @property
    def cancel_requested(self) -> bool:
        """`cancel` is sent when given explicitly or when true."""

        return self.cancel or "cancel" in self.model_fields_set


class StartRegionParams(_ParamsModel):
    member_name: str | None = Field(
        default=None,
        alias="memberName",
        description="Member of the PROCLIB data set holding the region JCL.",
    )
    job_name: str | None = Field(default=None, alias="jobName")
    local: bool | None = Field(
        default=None,
        description="Start the region only on the IMS member the command is routed to.",
    )

    @model_validator(mode="after")
    def _non_blank(self) -> "StartRegionParams":
        if self.member_name is not None and not self.member_name.strip():
            raise ValueError("If member name is specified it must have a value.")
        if self.job_name is not None and not self.job_name.strip():
            raise ValueError("If job name is specified it must have a value.")
        return self


class ImsCommandMessage(BaseModel):
    """Outcome reported by one IMS member for the issued command."""

    model_config = ConfigDict(extra="allow")

    rc: str | int | None = Field(default=None, description="Return code.")
    rsn: str | int | None = Field(default=None, description="Reason code.")
    rsnmsg: str | None = Field(default=None, description="Reason text.")
    message: str | None = None
    command: str | None = Field(default=None, description="Command text as executed by IMS.")

    def describe(self) -> str:
        parts = []
        if self.rc is not None:
            parts.append(f"rc={self.rc}")
        if self.rsn is not None:
            parts.append(f"rsn={self.rsn}")
        text = self.rsnmsg or self.message
        if text:
            parts.append(text)
        return " ".join(parts)


class ImsApiResponse(BaseModel):
    """Normalized envelope for every IMS REST response.

    `messages` is keyed by IMS member; a bare list of strings is also accepted
    and keyed by position.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    messages: dict[str, ImsCommandMessage] = Field(default_factory=dict)
    data: Any = None
    return_code: int | str | None = Field(default=None, alias="returnCode")

    @field_validator("messages", mode="before")
    @classmethod
    def _messages_from_list(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, list):
            return {
                str(index): ({"message": item} if isinstance(item, str) else item)
                for index, item in enumerate(value)
            }
        return value

    def message_lines(self) -> list[str]:
        lines: list[str] = []
        for member, message in self.messages.items():
            detail = message.describe()
            lines.append(f"{member}: {detail}" if detail else member)
        return lines

    def failed_entries(self) -> list[dict[str, Any]]:
        """Data rows whose completion code (`cc`) is non-zero."""

        rows = self.data if isinstance(self.data, list) else []
        return [row for row in rows if isinstance(row, dict) and not is_zero_code(row.get("cc"))]
