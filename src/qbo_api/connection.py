"""Connection construction for the QBO API.

A `Connection` is bound to one base URL, a header set and an ordered
middleware chain. It is built once per configuration and reused.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

import requests
from requests.adapters import BaseAdapter

from qbo_api.credentials import Credentials, select_auth
from qbo_api.middleware import (
    LOG_TAG,
    BodyEncoder,
    DetailedLogger,
    Middleware,
    Multipart,
    RaiseHttpError,
    TransportAdapter,
    UrlEncoded,
)

JSON_ACCEPT = "application/json;charset=UTF-8"
JSON_CONTENT_TYPE = "application/json"
MULTIPART_CONTENT_TYPE = "multipart/form-data"


@dataclass(frozen=True, slots=True)
class Connection:
    url: str
    headers: Mapping[str, str]
    middleware: tuple[Middleware, ...]
    session: requests.Session = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        session = requests.Session()
        session.headers.update(self.headers)
        # Innermost first, so each layer wraps the ones beneath it.
        for layer in reversed(self.middleware):
            layer.install(session)
        object.__setattr__(self, "session", session)

    @property
    def middleware_names(self) -> list[str]:
        return [layer.name for layer in self.middleware]

    @property
    def encoder(self) -> BodyEncoder | None:
        for layer in self.middleware:
            if isinstance(layer, BodyEncoder):
                return layer
        return None

    def url_for(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        if not path:
            return self.url
        return f"{self.url.rstrip('/')}/{path.lstrip('/')}"

    def send(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        timeout: float | None = None,
    ) -> requests.Response:
        kwargs: dict[str, Any] = {}
        if body is not None:
            encoder = self.encoder
            kwargs = encoder.request_kwargs(body) if encoder else {"data": body}
        return self.session.request(
            method.upper(), self.url_for(path), timeout=timeout, **kwargs
        )

    def get(self, path: str, **kwargs: Any) -> requests.Response:
        return self.send("GET", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> requests.Response:
        return self.send("DELETE", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> requests.Response:
        return self.send("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> requests.Response:
        return self.send("PUT", path, **kwargs)

    def close(self) -> None:
        self.session.close()


def build_connection(
    url: str,
    *,
    headers: Mapping[str, str] | None = None,
    middleware: Iterable[Middleware] = (),
    logger: logging.Logger | None = None,
    log: bool = False,
) -> Connection:
    """Assemble a connection.

    Example::

        conn = build_connection(
            "https://oauth.platform.intuit.com",
            headers={"Accept": "application/json"},
            middleware=[RaiseHttpError(), UrlEncoded(), TransportAdapter()],
        )
        conn.post("/oauth2/v1/tokens/bearer", body={"grant_type": "refresh_token"})

    When `log` is set, a DetailedLogger tagged with LOG_TAG is placed outermost.
    """

    chain: list[Middleware] = []
    if log:
        chain.append(DetailedLogger(logger or logging.getLogger("qbo_api"), LOG_TAG))
    chain.extend(middleware)
    return Connection(
        url=url,
        headers=dict(headers or {}),
        middleware=tuple(chain),
    )


def authorized_json_connection(
    url: str,
    credentials: Credentials | None,
    *,
    headers: Mapping[str, str] | None = None,
    logger: logging.Logger | None = None,
    log: bool = False,
    adapter: BaseAdapter | None = None,
) -> Connection:
    # Accept is required by QBO ("only JSON"); Content-Type matters only
    # when the request has a body. Caller headers win per key.
    merged = {"Accept": JSON_ACCEPT, "Content-Type": JSON_CONTENT_TYPE}
    merged.update(headers or {})

    auth = select_auth(credentials)
    return build_connection(
        url,
        headers=merged,
        logger=logger,
        log=log,
        middleware=(auth.middleware, RaiseHttpError(), UrlEncoded(), TransportAdapter(adapter)),
    )


def authorized_multipart_connection(
    url: str,
    credentials: Credentials | None,
    *,
    logger: logging.Logger | None = None,
    log: bool = False,
    adapter: BaseAdapter | None = None,
) -> Connection:
    auth = select_auth(credentials)
    return build_connection(
        url,
        headers={"Content-Type": MULTIPART_CONTENT_TYPE},
        logger=logger,
        log=log,
        middleware=(auth.middleware, RaiseHttpError(), Multipart(), TransportAdapter(adapter)),
    )
