"""QuickBooks Online connection adapter.

Keep this package small and testable:
- Connection construction (auth, encoding, error raising, logging)
- Request dispatch
- Response envelope unwrapping
"""

import logging

from qbo_api.client import APP_CONNECTION_URL, QBOApi, finalize_path
from qbo_api.config import QBOSettings
from qbo_api.connection import (
    Connection,
    authorized_json_connection,
    authorized_multipart_connection,
    build_connection,
)
from qbo_api.credentials import AuthScheme, Credentials, select_auth
from qbo_api.errors import (
    QBOConfigurationError,
    QBOError,
    QBOHTTPError,
    QBOResponseParseError,
)
from qbo_api.middleware import LOG_TAG
from qbo_api.response import Envelope, NormalizedResult, RawResponse, normalize, normalize_result

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "APP_CONNECTION_URL",
    "AuthScheme",
    "Connection",
    "Credentials",
    "Envelope",
    "LOG_TAG",
    "NormalizedResult",
    "QBOApi",
    "QBOConfigurationError",
    "QBOError",
    "QBOHTTPError",
    "QBOResponseParseError",
    "QBOSettings",
    "RawResponse",
    "authorized_json_connection",
    "authorized_multipart_connection",
    "build_connection",
    "finalize_path",
    "normalize",
    "normalize_result",
    "select_auth",
]
