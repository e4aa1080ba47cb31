"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without polluting the CLI.
- The stored connection defaults double as the IMS "profile": the CLI only
  overrides them field by field.
"""

from __future__ import annotations

import os
import re
import sys
from pathlib import Path
from typing import Any, Literal, Mapping

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.constants import DEFAULT_BASE_PATH
from core.domain.errors import InvalidArgument
from core.domain.language import Language
from core.domain.models import ImsSession, invalid_argument_from, normalize_base_path

ENV_PREFIX = "IMSCTL_"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "imsctl"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "imsctl"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "imsctl"
    return Path.home() / ".config" / "imsctl"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n"}
_UNESCAPE = re.compile(r'\\([\\"n])')


def _quote_env_value(value: str) -> str:
    """Double-quote a value the way python-dotenv reads it back."""

    return '"' + "".join(_ESCAPES.get(char, char) for char in value) + '"'


def _unquote_env_value(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return _UNESCAPE.sub(lambda m: "\n" if m.group(1) == "n" else m.group(1), value[1:-1])
    if len(value) >= 2 and value[0] == value[-1] == "'":
        return value[1:-1]
    return value


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if key:
            data[key] = _unquote_env_value(value.strip())
    return data


def read_user_env_vars() -> dict[str, str]:
    env_path = get_user_env_file()
    if not env_path.exists():
        return {}
    return _parse_env_lines(env_path.read_text(encoding="utf-8"))


def write_user_env_vars(values: Mapping[str, str | None]) -> Path:
    """Write/update variables in the user's global .env.

    `None` values are skipped, so callers can pass every known option.
    """

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing = read_user_env_vars()
    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# imsctl user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={_quote_env_value(existing[key])}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    if not sys.platform.startswith("win"):
        # Holds the mainframe password.
        env_path.chmod(0o600)
    return env_path


class AppSettings(BaseSettings):
    """Central application configuration.

    Why pydantic-settings:
    - Typed and validated at the edge (env vars, .env files).
    - A single contract shared by the CLI and the adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
        case_sensitive=False,
        # Order: project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    host: str | None = Field(default=None, description="Host name of the IMS REST API server.")
    port: int | None = Field(default=None, ge=1, le=65535, description="Port of the IMS REST API server.")
    user: str | None = Field(default=None, description="Mainframe user ID.")
    password: str | None = Field(default=None, description="Mainframe password.")
    protocol: Literal["http", "https"] = Field(default="https")
    reject_unauthorized: bool = Field(
        default=True,
        description="Reject self-signed certificates.",
    )
    ims_connect_host: str | None = Field(default=None, description="IMS Connect host name.")
    ims_connect_port: int | None = Field(default=None, ge=1, le=65535, description="IMS Connect port.")
    plex: str | None = Field(default=None, description="Name of the IMSplex.")
    base_path: str = Field(
        default=DEFAULT_BASE_PATH,
        description="Path prefix of the IMS REST API on the server.",
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default="imsctl/0.1",
        min_length=1,
        description="User-Agent sent to the IMS REST API.",
    )

    default_language: Language = Field(
        default=Language.ENGLISH,
        description="Language for operator-facing messages (en/es).",
    )
    log_level: str = Field(default="WARNING", description="Root log level.")
    json_logs: bool = Field(default=False, description="Emit logs as JSON lines.")
    log_file: Path | None = Field(default=None, description="Also write logs to this file.")

    @field_validator("default_language", mode="before")
    @classmethod
    def _language_from_code(cls, value: object) -> object:
        # Accepts locale-style values such as `es_ES.UTF-8`.
        if isinstance(value, str):
            return Language.from_code(value)
        return value

    @field_validator("log_level", mode="after")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level

    @field_validator("base_path", mode="after")
    @classmethod
    def _normalize_base_path(cls, value: str) -> str:
        return normalize_base_path(value)


_REQUIRED_CONNECTION_FIELDS = ("host", "port", "user", "password")


def resolve_session(settings: AppSettings, overrides: Mapping[str, Any] | None = None) -> ImsSession:
    """Merge the stored profile with command-line overrides into an `ImsSession`.

    Overrides set to `None` fall back to the stored value.
    """

    merged: dict[str, Any] = {
        "host": settings.host,
        "port": settings.port,
        "user": settings.user,
        "password": settings.password,
        "protocol": settings.protocol,
        "reject_unauthorized": settings.reject_unauthorized,
        "ims_connect_host": settings.ims_connect_host,
        "ims_connect_port": settings.ims_connect_port,
        "plex": settings.plex,
        "base_path": settings.base_path,
    }
    for key, value in (overrides or {}).items():
        if value is not None and key in merged:
            merged[key] = value

    for key in _REQUIRED_CONNECTION_FIELDS:
        value = merged[key]
        if value is None or (isinstance(value, str) and not value.strip()):
            option = "--" + key.replace("_", "-")
            raise InvalidArgument(
                f"Missing connection option {option}: pass it on the command line, "
                f"set {ENV_PREFIX}{key.upper()} or run `imsctl profile create`."
            )

    try:
        return ImsSession(**merged)
    except ValidationError as exc:
        raise invalid_argument_from(exc) from exc


def load_settings(**overrides: Any) -> AppSettings:
    """Build `AppSettings`, resolving the user .env path at call time."""

    return AppSettings(_env_file=(".env", str(get_user_env_file())), **overrides)
