"""Environment-driven settings for the QBO client.

Local runs can keep credentials in `.env`; blank placeholders in
`.env.example` never override real values.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import dotenv_values, load_dotenv

from qbo_api.credentials import Credentials
from qbo_api.errors import QBOConfigurationError

ENVIRONMENTS = ("sandbox", "production")

_TRUTHY = {"1", "true", "yes", "on"}


def _load_env_files() -> None:
    load_dotenv(override=False)

    # Convenience: allow local runs with only `.env.example` filled.
    if os.environ.get("QBO_ACCESS_TOKEN") or os.environ.get("QBO_TOKEN"):
        return
    example_path = os.path.abspath(".env.example")
    if not os.path.exists(example_path):
        return
    for k, v in (dotenv_values(example_path) or {}).items():
        if not k or not v:
            continue
        if not os.environ.get(k):
            os.environ[k] = v


def _flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _opt(name: str) -> str | None:
    return os.environ.get(name) or None


@dataclass(frozen=True, slots=True)
class QBOSettings:
    credentials: Credentials
    realm_id: str | None = None
    environment: str = "sandbox"
    minor_version: str | None = None
    log: bool = False
    strict: bool = False
    timeout_seconds: float = 30.0

    def __post_init__(self) -> None:
        if self.environment not in ENVIRONMENTS:
            raise QBOConfigurationError(
                f"QBO environment must be one of {ENVIRONMENTS}, got {self.environment!r}"
            )

    @classmethod
    def from_env(cls) -> "QBOSettings":
        _load_env_files()

        credentials = Credentials(
            consumer_key=_opt("QBO_CONSUMER_KEY"),
            consumer_secret=_opt("QBO_CONSUMER_SECRET"),
            token=_opt("QBO_TOKEN"),
            token_secret=_opt("QBO_TOKEN_SECRET"),
            access_token=_opt("QBO_ACCESS_TOKEN"),
        )

        try:
            timeout_seconds = float(os.environ.get("QBO_HTTP_TIMEOUT_SECONDS", "30"))
        except ValueError as e:
            raise QBOConfigurationError("QBO_HTTP_TIMEOUT_SECONDS must be a number") from e

        return cls(
            credentials=credentials,
            realm_id=_opt("QBO_REALM_ID"),
            environment=os.environ.get("QBO_ENVIRONMENT", "sandbox").strip().lower(),
            minor_version=_opt("QBO_MINORVERSION"),
            log=_flag("QBO_API_LOG"),
            strict=_flag("QBO_STRICT_PARSING"),
            timeout_seconds=timeout_seconds,
        )
