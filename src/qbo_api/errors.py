"""Exception types raised by the QBO connection layer.

Configuration and HTTP errors always reach the caller. Response parsing
errors are contained by the normalizer unless strict parsing is enabled.
"""

from __future__ import annotations

import json
from typing import Any

import requests


class QBOError(Exception):
    def __init__(self, message: str = "", *, error_body: Any = None) -> None:
        super().__init__(message or str(error_body or ""))
        self.error_body = error_body


class QBOConfigurationError(QBOError, ValueError):
    """Credentials or settings are missing or inconsistent."""


class QBOResponseParseError(QBOError):
    """A response body could not be parsed or unwrapped (strict mode only)."""


class QBOHTTPError(QBOError):
    """Non-success HTTP status returned by the QBO API."""

    def __init__(
        self,
        message: str,
        *,
        response: requests.Response | None = None,
        fault: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message, error_body=fault)
        self.response = response
        self.fault = fault or []

    @property
    def status_code(self) -> int | None:
        return self.response.status_code if self.response is not None else None


class BadRequest(QBOHTTPError):
    pass


class Unauthorized(QBOHTTPError):
    pass


class Forbidden(QBOHTTPError):
    pass


class NotFound(QBOHTTPError):
    pass


class TooManyRequests(QBOHTTPError):
    pass


class InternalServerError(QBOHTTPError):
    pass


class BadGateway(QBOHTTPError):
    pass


class ServiceUnavailable(QBOHTTPError):
    pass


_STATUS_ERRORS: dict[int, type[QBOHTTPError]] = {
    400: BadRequest,
    401: Unauthorized,
    403: Forbidden,
    404: NotFound,
    429: TooManyRequests,
    500: InternalServerError,
    502: BadGateway,
    503: ServiceUnavailable,
}


def parse_fault(resp: requests.Response) -> list[dict[str, Any]]:
    """Flatten a QBO `Fault` envelope into a list of error dicts.

    QBO error bodies look like::

        {"Fault": {"Error": [{"Message": ..., "Detail": ..., "code": ..., "element": ...}],
                   "type": "ValidationFault"}}

    Bodies that are not JSON (or carry no Fault) yield an empty list.
    """

    content_type = resp.headers.get("Content-Type") or ""
    if "json" not in content_type:
        return []
    try:
        body = json.loads(resp.content or b"{}")
    except ValueError:
        return []

    fault = body.get("Fault") if isinstance(body, dict) else None
    if not isinstance(fault, dict):
        return []

    errors = fault.get("Error") or []
    if isinstance(errors, dict):
        errors = [errors]

    out: list[dict[str, Any]] = []
    for err in errors:
        if not isinstance(err, dict):
            continue
        out.append(
            {
                "fault_type": fault.get("type"),
                "message": err.get("Message"),
                "detail": err.get("Detail"),
                "code": err.get("code"),
                "element": err.get("element"),
            }
        )
    return out


def error_for_response(resp: requests.Response) -> QBOHTTPError:
    """Build the typed error for a failed response (status >= 400)."""

    fault = parse_fault(resp)
    cls = _STATUS_ERRORS.get(resp.status_code, QBOHTTPError)

    if fault:
        details = "; ".join(
            f"{f.get('message') or ''}: {f.get('detail') or ''} (code={f.get('code')})"
            for f in fault
        )
        message = f"HTTP {resp.status_code}: {details}"
    else:
        message = f"HTTP {resp.status_code}: {resp.text}"

    return cls(message, response=resp, fault=fault)
