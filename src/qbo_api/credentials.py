"""Credentials and auth-scheme selection.

QBO accepts two mutually exclusive authorization schemes:

- OAuth1 (legacy): requests are signed with a consumer key/secret and a
  token/token secret.
- OAuth2: a bearer access token.

`Credentials` is an immutable value; `select_auth` is a pure function that
turns it into the auth middleware for a connection.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from qbo_api.errors import QBOConfigurationError
from qbo_api.middleware import BearerToken, Middleware, OAuth1Signing


class AuthScheme(str, enum.Enum):
    UNCONFIGURED = "unconfigured"
    OAUTH1 = "oauth1"
    OAUTH2 = "oauth2"


@dataclass(frozen=True, slots=True)
class Credentials:
    consumer_key: str | None = None
    consumer_secret: str | None = None
    token: str | None = None
    token_secret: str | None = None
    access_token: str | None = None

    def __post_init__(self) -> None:
        oauth1_fields = (self.consumer_key, self.consumer_secret, self.token, self.token_secret)
        if self.token and self.access_token:
            raise QBOConfigurationError(
                "Set either the OAuth1 token or the OAuth2 access_token, not both"
            )
        if self.token and not all(oauth1_fields):
            raise QBOConfigurationError(
                "OAuth1 requires consumer_key, consumer_secret, token and token_secret"
            )

    @classmethod
    def oauth1(
        cls, *, consumer_key: str, consumer_secret: str, token: str, token_secret: str
    ) -> "Credentials":
        return cls(
            consumer_key=consumer_key,
            consumer_secret=consumer_secret,
            token=token,
            token_secret=token_secret,
        )

    @classmethod
    def oauth2(cls, access_token: str) -> "Credentials":
        return cls(access_token=access_token)

    @property
    def scheme(self) -> AuthScheme:
        if self.token:
            return AuthScheme.OAUTH1
        if self.access_token:
            return AuthScheme.OAUTH2
        return AuthScheme.UNCONFIGURED

    def __repr__(self) -> str:
        # Never echo secrets into logs or tracebacks.
        return f"Credentials(scheme={self.scheme.value!r})"


@dataclass(frozen=True, slots=True)
class AuthSelection:
    scheme: AuthScheme
    middleware: Middleware


def select_auth(credentials: Credentials | None) -> AuthSelection:
    """Pick the auth middleware for `credentials`.

    Raises QBOConfigurationError when no credentials are set; that is a
    caller configuration bug and is never retried.
    """

    scheme = credentials.scheme if credentials is not None else AuthScheme.UNCONFIGURED

    if scheme is AuthScheme.OAUTH1:
        return AuthSelection(
            scheme=scheme,
            middleware=OAuth1Signing(
                consumer_key=credentials.consumer_key,
                consumer_secret=credentials.consumer_secret,
                token=credentials.token,
                token_secret=credentials.token_secret,
            ),
        )
    if scheme is AuthScheme.OAUTH2:
        return AuthSelection(scheme=scheme, middleware=BearerToken(credentials.access_token))

    raise QBOConfigurationError(
        "Must set either the token or access_token",
        error_body="Must set either the token or access_token",
    )
