from __future__ import annotations

import pytest
from dotenv import dotenv_values

from qbo_api.config import QBOSettings
from qbo_api.credentials import AuthScheme, Credentials
from qbo_api.errors import QBOConfigurationError


def test_from_env_defaults(qbo_env) -> None:
    settings = QBOSettings.from_env()

    assert settings.credentials.scheme is AuthScheme.UNCONFIGURED
    assert settings.environment == "sandbox"
    assert settings.realm_id is None
    assert settings.minor_version is None
    assert settings.log is False
    assert settings.strict is False
    assert settings.timeout_seconds == 30.0


def test_from_env_oauth1_and_flags(qbo_env) -> None:
    qbo_env.setenv("QBO_CONSUMER_KEY", "ck")
    qbo_env.setenv("QBO_CONSUMER_SECRET", "cs")
    qbo_env.setenv("QBO_TOKEN", "tok")
    qbo_env.setenv("QBO_TOKEN_SECRET", "ts")
    qbo_env.setenv("QBO_API_LOG", "true")
    qbo_env.setenv("QBO_STRICT_PARSING", "1")
    qbo_env.setenv("QBO_HTTP_TIMEOUT_SECONDS", "12.5")

    settings = QBOSettings.from_env()

    assert settings.credentials.scheme is AuthScheme.OAUTH1
    assert settings.log is True
    assert settings.strict is True
    assert settings.timeout_seconds == 12.5


def test_from_env_rejects_both_schemes(qbo_env) -> None:
    qbo_env.setenv("QBO_CONSUMER_KEY", "ck")
    qbo_env.setenv("QBO_CONSUMER_SECRET", "cs")
    qbo_env.setenv("QBO_TOKEN", "tok")
    qbo_env.setenv("QBO_TOKEN_SECRET", "ts")
    qbo_env.setenv("QBO_ACCESS_TOKEN", "access")

    with pytest.raises(QBOConfigurationError):
        QBOSettings.from_env()


def test_from_env_rejects_bad_timeout(qbo_env) -> None:
    qbo_env.setenv("QBO_HTTP_TIMEOUT_SECONDS", "soon")
    with pytest.raises(QBOConfigurationError):
        QBOSettings.from_env()


def test_unknown_environment_is_rejected() -> None:
    with pytest.raises(QBOConfigurationError):
        QBOSettings(credentials=Credentials(), environment="staging")


def test_env_example_fills_blanks(qbo_env, monkeypatch, tmp_path) -> None:
    # Blank values so the example file is consulted.
    qbo_env.setenv("QBO_ACCESS_TOKEN", "")
    qbo_env.setenv("QBO_REALM_ID", "")
    (tmp_path / ".env.example").write_text("QBO_ACCESS_TOKEN=from-example\nQBO_REALM_ID=\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("qbo_api.config.dotenv_values", dotenv_values)

    settings = QBOSettings.from_env()

    assert settings.credentials.access_token == "from-example"
    assert settings.realm_id is None

