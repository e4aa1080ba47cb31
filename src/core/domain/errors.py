"""Error taxonomy shared by the API layer and the CLI.

Three families, all terminal for the current command:
- `InvalidArgument`: local validation, raised before any request is sent.
- `RemoteRequestError`: the HTTP round trip itself failed.
- `ApplicationLevelFailure`: IMS answered but reported a failure code.
"""

from __future__ import annotations

from typing import Any, Sequence


class ImsError(Exception):
    """Base class for every error surfaced to the operator."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidArgument(ImsError):
    """A required field is missing/blank or mutually exclusive fields collide."""


class RemoteRequestError(ImsError):
    """Transport failure, non-2xx status or an undecodable response body."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ApplicationLevelFailure(ImsError):
    """IMS accepted the request but the JSON body carries a failure code."""

    def __init__(
        self,
        message: str,
        *,
        messages: Sequence[str] = (),
        data: Any = None,
        failed_rows: Sequence[dict[str, Any]] = (),
    ) -> None:
        super().__init__(message)
        self.messages = list(messages)
        self.data = data
        self.failed_rows = list(failed_rows)
