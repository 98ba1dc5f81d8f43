# services/errors.py
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    UPSTREAM = "upstream"
    NOT_FOUND = "not_found"
    DATA_UNAVAILABLE = "data_unavailable"
    TIMEOUT = "timeout"
    NETWORK = "network"


class WeatherError(Exception):
    """
    Base of every failure the weather services raise.
    Callers branch on `kind` rather than on the message text.
    """
    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(WeatherError):
    kind = ErrorKind.INVALID_INPUT

    def __init__(self, message: str = "City name is required"):
        super().__init__(message)


class UpstreamError(WeatherError):
    kind = ErrorKind.UPSTREAM

    def __init__(self, status: Optional[int], api: str = "Weather API"):
        super().__init__(f"{api} error: {status}")
        self.status = status
        self.api = api


class NotFound(WeatherError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "City not found"):
        super().__init__(message)


class DataUnavailable(WeatherError):
    kind = ErrorKind.DATA_UNAVAILABLE


class RequestTimeout(WeatherError):
    kind = ErrorKind.TIMEOUT

    def __init__(self, message: str = "Request timed out"):
        super().__init__(message)


class NetworkError(WeatherError):
    kind = ErrorKind.NETWORK

    def __init__(self, reason: str):
        super().__init__(f"Network error: {reason}")
        self.reason = reason
