"""Contract for CLI command handlers.

Why Protocol:
- A structural contract (duck typing) instead of a handler base class.
- Session resolution, return-code checks and rendering live in one shared
  helper that accepts any object satisfying this contract.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from pydantic import BaseModel

from core.config import AppSettings
from core.domain.models import ImsApiResponse, ImsSession


@runtime_checkable
class CommandHandler(Protocol):
    """One CLI leaf command.

    Design rules:
    - `key` names the command in the message catalogs (`stop.program`).
    - `params_model` validates the parsed CLI arguments before any request.
    - `validate` applies the command-line-only rules (status keyword vocabulary).
    - `handle` is async because it performs exactly one HTTP round trip.
    """

    key: str
    params_model: type[BaseModel]

    def validate(self, params: BaseModel) -> None:
        ...

    async def handle(
        self,
        session: ImsSession,
        params: BaseModel,
        *,
        settings: AppSettings | None = None,
    ) -> ImsApiResponse:
        ...

    def success_values(self, params: BaseModel) -> Mapping[str, Any]:
        """Values interpolated into the localized success message."""

        ...
