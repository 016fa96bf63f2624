# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Errors raised by the MAAS API client.

Every failure surfaced by the client is one of the exceptions below.
Library exceptions (from `requests`, `aiohttp`, `json`) are chained as the
`__cause__` and kept on the `cause` attribute where one exists.
"""

__all__ = [
    "ApiError",
    "InvalidKeyFormat",
    "MAASClientError",
    "NetworkError",
    "SerializationError",
    "UrlParseError",
]


class MAASClientError(Exception):
    """Base class for all MAAS API client errors."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class InvalidKeyFormat(MAASClientError, ValueError):
    def __init__(self):
        super().__init__(
            "Invalid API key, expected 3 parts separated in form A:B:C"
        )


class NetworkError(MAASClientError):
    """The request could not be completed at the transport level."""

    def __init__(self, cause: BaseException):
        reason = str(cause) or type(cause).__name__
        super().__init__(f"Network error: {reason}", cause)


class ApiError(MAASClientError):
    """The server answered with a status code outside of 2xx."""

    def __init__(self, status: int, body: str):
        super().__init__(f"MAAS API error {status}: {body}")
        self.status = status
        self.body = body


class SerializationError(MAASClientError):
    def __init__(self, cause: BaseException):
        super().__init__(f"Failed to parse JSON: {cause}", cause)


class UrlParseError(MAASClientError):
    def __init__(self, url: str, reason: str | BaseException):
        super().__init__(
            f"Invalid URL: {url!r}: {reason}",
            reason if isinstance(reason, BaseException) else None,
        )
        self.url = url
