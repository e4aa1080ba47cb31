"""Fixed pieces of the IMS REST API surface."""

from __future__ import annotations

from typing import Final

DEFAULT_BASE_PATH: Final = "/api/v1"

PROGRAM: Final = "program"
TRANSACTION: Final = "transaction"
REGION: Final = "region"
START: Final = "start"
STOP: Final = "stop"

# Used when start/stop is requested without an explicit target state.
DEFAULT_STATUS: Final = "SCHD"

# IMS Connect routing headers understood by the REST server.
HEADER_IMS_CONNECT_HOST: Final = "hostname"
HEADER_IMS_CONNECT_PORT: Final = "port"
HEADER_PLEX: Final = "plex"

# Vocabulary of the IMS UPDATE PGM / UPDATE TRAN commands.
PROGRAM_START_KEYWORDS: Final = frozenset({"SCHD", "TRACE", "REFRESH"})
PROGRAM_STOP_KEYWORDS: Final = frozenset({"SCHD", "TRACE"})
TRANSACTION_START_KEYWORDS: Final = frozenset({"Q", "SCHD", "SUSPEND", "TRACE"})
TRANSACTION_STOP_KEYWORDS: Final = frozenset({"Q", "SCHD", "TRACE"})
