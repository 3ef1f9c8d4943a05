"""QuickBooks Online (QBO) API client.

Purpose
- Dispatch requests through an authorized connection and unwrap the
  response envelope into the entity payload.
- Keep connection construction (auth, encoding, error raising, logging)
  out of the call sites.

OAuth token refresh/storage is not handled here; pass in current credentials.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping
from urllib.parse import urlencode

import requests
from requests.adapters import BaseAdapter

from qbo_api.config import QBOSettings
from qbo_api.connection import (
    Connection,
    authorized_json_connection,
    authorized_multipart_connection,
)
from qbo_api.credentials import Credentials
from qbo_api.errors import QBOConfigurationError
from qbo_api.response import normalize

V3_ENDPOINT_BASE_URL = "https://sandbox-quickbooks.api.intuit.com/v3/company/"
PRODUCTION_V3_ENDPOINT_BASE_URL = "https://quickbooks.api.intuit.com/v3/company/"
APP_CONNECTION_URL = "https://appcenter.intuit.com/api/v1/connection"

READ_METHODS = ("get", "delete")
WRITE_METHODS = ("post", "put")


def finalize_path(
    path: str,
    *,
    params: Mapping[str, Any] | None = None,
    minor_version: str | None = None,
) -> str:
    """Append the query string for a request path.

    `minorversion` comes first so caller params can override it.
    """

    query: dict[str, Any] = {}
    if minor_version:
        query["minorversion"] = minor_version
    if params:
        query.update(params)
    if not query:
        return path

    sep = "&" if "?" in path else "?"
    return f"{path}{sep}{urlencode(query)}"


def _check_method(method: str) -> str:
    verb = str(method).lower()
    if verb not in READ_METHODS + WRITE_METHODS:
        raise ValueError(f"Unhandled request method {method!r}")
    return verb


class QBOApi:
    def __init__(
        self,
        *,
        credentials: Credentials,
        realm_id: str | None = None,
        environment: str = "sandbox",
        minor_version: str | None = None,
        log: bool = False,
        logger: logging.Logger | None = None,
        strict: bool = False,
        timeout_seconds: float | None = 30,
        adapter: BaseAdapter | None = None,
    ) -> None:
        if environment not in ("sandbox", "production"):
            raise QBOConfigurationError(f"Unknown QBO environment: {environment!r}")
        self._credentials = credentials
        self._realm_id = realm_id
        self._environment = environment
        self._minor_version = minor_version
        self._log = log
        self._logger = logger or logging.getLogger("qbo_api")
        self._strict = strict
        self._timeout_seconds = timeout_seconds
        self._adapter = adapter
        self._connection: Connection | None = None
        self._upload_connection: Connection | None = None

    @staticmethod
    def _base_url(environment: str) -> str:
        return (
            PRODUCTION_V3_ENDPOINT_BASE_URL
            if environment == "production"
            else V3_ENDPOINT_BASE_URL
        )

    @classmethod
    def from_env(cls, *, adapter: BaseAdapter | None = None) -> "QBOApi":
        settings = QBOSettings.from_env()
        return cls(
            credentials=settings.credentials,
            realm_id=settings.realm_id,
            environment=settings.environment,
            minor_version=settings.minor_version,
            log=settings.log,
            strict=settings.strict,
            timeout_seconds=settings.timeout_seconds,
            adapter=adapter,
        )

    @property
    def realm_url(self) -> str:
        base = self._base_url(self._environment)
        return f"{base}{self._realm_id}" if self._realm_id else base

    @property
    def connection(self) -> Connection:
        if self._connection is None:
            self._connection = authorized_json_connection(
                self.realm_url,
                self._credentials,
                logger=self._logger,
                log=self._log,
                adapter=self._adapter,
            )
        return self._connection

    @property
    def upload_connection(self) -> Connection:
        if self._upload_connection is None:
            self._upload_connection = authorized_multipart_connection(
                self.realm_url,
                self._credentials,
                logger=self._logger,
                log=self._log,
                adapter=self._adapter,
            )
        return self._upload_connection

    def request(
        self,
        method: str,
        path: str,
        *,
        entity: str | None = None,
        payload: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        _check_method(method)
        raw_response = self.raw_request(
            method, conn=self.connection, path=path, payload=payload, params=params
        )
        return self.response(raw_response, entity=entity)

    def raw_request(
        self,
        method: str,
        *,
        conn: Connection,
        path: str,
        payload: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> requests.Response:
        verb = _check_method(method)

        path = finalize_path(
            path, params=params, minor_version=self._minor_version
        )

        if verb in READ_METHODS:
            return conn.send(verb, path, timeout=self._timeout_seconds)
        return conn.send(verb, path, body=json.dumps(payload), timeout=self._timeout_seconds)

    def response(self, resp: requests.Response, *, entity: str | None = None) -> Any:
        return normalize(resp, entity, log=self._logger, strict=self._strict)

    # Part of the OAuth1 API (legacy app-connection endpoints).
    def disconnect(self) -> Any:
        return self.request("get", f"{APP_CONNECTION_URL}/disconnect")

    def reconnect(self) -> Any:
        return self.request("get", f"{APP_CONNECTION_URL}/reconnect")

    def close(self) -> None:
        for conn in (self._connection, self._upload_connection):
            if conn is not None:
                conn.close()
