"""Connection middleware layers.

A connection is a `requests.Session` assembled from an ordered list of
middleware, outermost first. Layers install innermost first, so each one
can wrap what is already beneath it:

- DetailedLogger   -> wraps the mounted transport adapters; logs each
                      request before it is sent and the response (or
                      transport exception) after
- OAuth1Signing /
  BearerToken      -> `session.auth`
- RaiseHttpError   -> response hook raising typed errors for status >= 400
- UrlEncoded /
  Multipart        -> body encoding used by `Connection.send`
- TransportAdapter -> mounted `requests` transport adapter
"""

from __future__ import annotations

import abc
import logging
from collections.abc import Mapping
from typing import Any

import requests
from requests.adapters import BaseAdapter, HTTPAdapter
from requests.auth import AuthBase
from requests_oauthlib import OAuth1

from qbo_api.errors import error_for_response

LOG_TAG = "[QuickBooks]"

_FILTERED_HEADERS = {"authorization"}


class Middleware(abc.ABC):
    name: str = "middleware"

    @abc.abstractmethod
    def install(self, session: requests.Session) -> None:
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class BodyEncoder(Middleware):
    """Marks the layer that decides how `Connection.send` passes a body."""

    def install(self, session: requests.Session) -> None:
        return None

    @abc.abstractmethod
    def request_kwargs(self, body: Any) -> dict[str, Any]:
        ...


def _filtered(headers: Mapping[str, str]) -> dict[str, str]:
    return {
        k: ("[FILTERED]" if k.lower() in _FILTERED_HEADERS else v) for k, v in headers.items()
    }


class _LoggedAdapter(BaseAdapter):
    def __init__(self, inner: BaseAdapter, logger: "DetailedLogger") -> None:
        super().__init__()
        self.inner = inner
        self.logger = logger

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        self.logger.log_request(request)
        try:
            resp = self.inner.send(request, **kwargs)
        except Exception as e:
            self.logger.log_exception(request, e)
            raise
        self.logger.log_response(resp)
        return resp

    def close(self) -> None:
        self.inner.close()


class DetailedLogger(Middleware):
    name = "detailed_logger"

    def __init__(self, logger: logging.Logger, tag: str = LOG_TAG) -> None:
        self.logger = logger
        self.tag = tag

    def install(self, session: requests.Session) -> None:
        for prefix, adapter in list(session.adapters.items()):
            session.mount(prefix, _LoggedAdapter(adapter, self))

    def log_request(self, req: requests.PreparedRequest) -> None:
        self.logger.debug("%s %s %s", self.tag, req.method, req.url)
        self.logger.debug("%s %s", self.tag, _filtered(req.headers))
        if req.body:
            self.logger.debug("%s %r", self.tag, req.body)

    def log_response(self, resp: requests.Response) -> None:
        self.logger.debug("%s HTTP %s", self.tag, resp.status_code)
        self.logger.debug("%s %s", self.tag, dict(resp.headers))
        self.logger.debug("%s %r", self.tag, resp.content)

    def log_exception(self, req: requests.PreparedRequest, exc: Exception) -> None:
        self.logger.debug("%s %s %s failed: %r", self.tag, req.method, req.url, exc)


class BearerAuth(AuthBase):
    def __init__(self, access_token: str) -> None:
        self.access_token = access_token

    def __call__(self, r: requests.PreparedRequest) -> requests.PreparedRequest:
        r.headers["Authorization"] = f"Bearer {self.access_token}"
        return r


class OAuth1Signing(Middleware):
    name = "oauth1"

    def __init__(
        self, *, consumer_key: str, consumer_secret: str, token: str, token_secret: str
    ) -> None:
        self.auth = OAuth1(
            client_key=consumer_key,
            client_secret=consumer_secret,
            resource_owner_key=token,
            resource_owner_secret=token_secret,
        )

    def install(self, session: requests.Session) -> None:
        session.auth = self.auth


class BearerToken(Middleware):
    name = "oauth2"

    def __init__(self, access_token: str) -> None:
        self.auth = BearerAuth(access_token)

    def install(self, session: requests.Session) -> None:
        session.auth = self.auth


class RaiseHttpError(Middleware):
    name = "raise_http_error"

    def install(self, session: requests.Session) -> None:
        session.hooks["response"].append(self.check_status)

    @staticmethod
    def check_status(resp: requests.Response, *args: Any, **kwargs: Any) -> None:
        if resp.status_code >= 400:
            raise error_for_response(resp)


class UrlEncoded(BodyEncoder):
    """Strings (pre-serialized JSON) pass through; mappings are form-encoded."""

    name = "url_encoded"

    def request_kwargs(self, body: Any) -> dict[str, Any]:
        return {"data": body}


class Multipart(BodyEncoder):
    name = "multipart"

    def request_kwargs(self, body: Any) -> dict[str, Any]:
        if isinstance(body, Mapping):
            # Drop the static multipart/form-data header so requests can set
            # one that carries the boundary.
            return {"files": body, "headers": {"Content-Type": None}}
        return {"data": body}


class TransportAdapter(Middleware):
    name = "adapter"

    def __init__(self, adapter: BaseAdapter | None = None) -> None:
        self.adapter = adapter or HTTPAdapter()

    def install(self, session: requests.Session) -> None:
        session.mount("https://", self.adapter)
        session.mount("http://", self.adapter)
