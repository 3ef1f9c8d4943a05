"""Response body parsing and envelope unwrapping.

QBO is not self-consistent about where the payload lives:

- Query endpoints:      {"QueryResponse": {"Customer": [...], "maxResults": 1}}
- Attachable endpoints: {"AttachableResponse": [{"Attachable": {...}}]}
- Single entities:      {"Customer": {...}, "time": "..."}

`normalize` classifies the envelope and returns the entity payload, or a
best-effort value when the body cannot be unwrapped.

Parse/extraction failures never raise by default: they are logged and the
intermediate value (raw body, or parsed body) is returned. Callers that want
the failure surfaced use `normalize_result(...).unwrap(strict=True)` or
construct `QBOApi(strict=True)`.
"""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping

import requests
from requests.structures import CaseInsensitiveDict

from qbo_api.entities import entity_name
from qbo_api.errors import QBOResponseParseError
from qbo_api.middleware import LOG_TAG

logger = logging.getLogger(__name__)


class Envelope(str, enum.Enum):
    RAW = "raw"
    QUERY_LIST = "query_list"
    ATTACHABLE_LIST = "attachable_list"
    SINGLE_ENTITY = "single_entity"
    GENERIC = "generic"


@dataclass(frozen=True, slots=True)
class RawResponse:
    status: int
    headers: Mapping[str, str]
    body: bytes | str

    @classmethod
    def from_requests(cls, resp: requests.Response) -> "RawResponse":
        return cls(
            status=resp.status_code,
            headers=CaseInsensitiveDict(resp.headers),
            body=resp.content,
        )

    @property
    def content_type(self) -> str:
        headers = self.headers
        if not isinstance(headers, CaseInsensitiveDict):
            headers = CaseInsensitiveDict(headers)
        return headers.get("Content-Type") or ""


@dataclass(frozen=True, slots=True)
class NormalizedResult:
    value: Any
    envelope: Envelope
    error: Exception | None = None

    @property
    def degraded(self) -> bool:
        return self.error is not None

    def unwrap(self, *, strict: bool = False) -> Any:
        if strict and self.error is not None:
            raise QBOResponseParseError(
                f"Could not normalize response: {self.error!r}"
            ) from self.error
        return self.value


def parse_response_body(resp: RawResponse) -> Any:
    body = resp.body
    if "json" in resp.content_type:
        if isinstance(body, bytes):
            body = body.decode("utf-8")
        return json.loads(body)
    return body


def classify_envelope(data: Any, name: str) -> Envelope:
    if not isinstance(data, dict):
        return Envelope.GENERIC
    if "QueryResponse" in data:
        return Envelope.QUERY_LIST
    if "AttachableResponse" in data:
        return Envelope.ATTACHABLE_LIST
    if name in data:
        return Envelope.SINGLE_ENTITY
    return Envelope.GENERIC


def entity_response(data: Any, entity: str, *, log: logging.Logger | None = None) -> tuple[Any, Envelope]:
    """Extract the payload for `entity` from a parsed body.

    Returns (value, envelope).
    """

    log = log or logger
    name = entity_name(entity)
    envelope = classify_envelope(data, name)

    if envelope is Envelope.QUERY_LIST:
        query_body = data["QueryResponse"]
        # Empty result set, not an error.
        if not query_body:
            return None, envelope
        return query_body.get(name, query_body), envelope

    if envelope is Envelope.ATTACHABLE_LIST:
        items = data["AttachableResponse"]
        first = items[0] if items else None
        if first is None:
            return None, envelope
        return first.get(name, first), envelope

    if envelope is Envelope.SINGLE_ENTITY:
        return data[name], envelope

    log.debug(
        "%s entity name not in response body: entity=%r entity_name=%r body=%r",
        LOG_TAG,
        entity,
        name,
        data,
    )
    return data, envelope


def normalize_result(
    resp: RawResponse | requests.Response,
    entity: str | None = None,
    *,
    log: logging.Logger | None = None,
) -> NormalizedResult:
    log = log or logger
    if isinstance(resp, requests.Response):
        resp = RawResponse.from_requests(resp)

    data: Any = resp.body
    try:
        data = parse_response_body(resp)
        if entity is None or not isinstance(data, (dict, list)):
            return NormalizedResult(value=data, envelope=Envelope.RAW)
        value, envelope = entity_response(data, entity, log=log)
        return NormalizedResult(value=value, envelope=envelope)
    except Exception as e:
        log.debug(
            "%s response parsing error: entity=%r body=%r exception=%r",
            LOG_TAG,
            entity,
            resp.body,
            e,
        )
        return NormalizedResult(value=data, envelope=Envelope.GENERIC, error=e)


def normalize(
    resp: RawResponse | requests.Response,
    entity: str | None = None,
    *,
    log: logging.Logger | None = None,
    strict: bool = False,
) -> Any:
    return normalize_result(resp, entity, log=log).unwrap(strict=strict)
