# services/transport.py
import logging
from typing import Any, Dict, Optional, Protocol

import requests

from .deadline import Deadline
from .errors import UpstreamError, DataUnavailable, RequestTimeout, NetworkError

logger = logging.getLogger(__name__)

USER_AGENT = "cityweather/1.0 (+https://open-meteo.com)"


class Response(Protocol):
    ok: bool
    status_code: int

    def json(self) -> Any: ...


class Transport(Protocol):
    def get(self, url: str, params: Optional[Dict[str, Any]] = None,
            timeout: Optional[float] = None) -> Response: ...


class RequestsTransport:
    """
    Plain requests.get per call, so nothing is shared between operations.
    Pass a Session to reuse connections; no retry adapters are mounted.
    """

    headers = {
        "User-Agent": USER_AGENT,
        "Accept": "application/json",
    }

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session

    def get(self, url: str, params: Optional[Dict[str, Any]] = None,
            timeout: Optional[float] = None) -> requests.Response:
        http = self.session or requests
        return http.get(url, params=params, headers=self.headers, timeout=timeout)


def default_transport() -> RequestsTransport:
    return RequestsTransport()


def get_json(transport: Transport, deadline: Deadline, url: str,
             params: Dict[str, Any], api: str) -> Any:
    """
    GET `url` within the deadline and return the decoded body.
    Raises UpstreamError on non-2xx, DataUnavailable on an undecodable body,
    RequestTimeout and NetworkError for transport failures.
    """
    logger.debug("GET %s %s (%.2fs left)", url, params, deadline.remaining())
    try:
        r = deadline.call(transport.get, url, params=params, timeout=deadline.remaining())
    except requests.exceptions.Timeout:
        raise RequestTimeout() from None
    except requests.exceptions.RequestException as e:
        logger.warning("%s request failed: %s", api, e)
        raise NetworkError(str(e)) from e

    if not r.ok:
        logger.warning("%s returned status %s", api, r.status_code)
        raise UpstreamError(r.status_code, api)

    try:
        return r.json()
    except ValueError as e:
        raise DataUnavailable(f"Invalid response from {api}") from e
