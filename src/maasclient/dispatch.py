# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""HTTP transports for the MAAS API client.

A dispatcher sends one prepared request and hands back the raw response.
It neither signs nor interprets responses, and never retries: that is the
caller's business.  Transport-level failures are raised as `NetworkError`.
"""

__all__ = [
    "AsyncMAASDispatcher",
    "MAASDispatcher",
    "PreparedRequest",
    "TransportResponse",
]

import asyncio
from dataclasses import dataclass, field

import aiohttp
import requests

from maasclient.errors import NetworkError


@dataclass(frozen=True)
class PreparedRequest:
    """A signed request, ready to be put on the wire."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict, repr=False)
    body: str | None = None


@dataclass(frozen=True)
class TransportResponse:
    status: int
    content: bytes = b""
    encoding: str | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def text(self) -> str:
        """The body as text, or an empty string if it can't be decoded."""
        try:
            return self.content.decode(self.encoding or "utf-8")
        except (LookupError, UnicodeDecodeError):
            return ""


class MAASDispatcher:
    """Helper class to connect to a MAAS server using blocking requests.

    Be careful when changing its API: this class is designed so that it
    can be replaced with `AsyncMAASDispatcher`, which has the same shape
    but suspends the calling task instead of blocking.

    :param session: A `requests.Session` to send requests with.  One is
        created if not supplied.
    """

    def __init__(self, session: requests.Session | None = None):
        self.session = requests.Session() if session is None else session

    def dispatch_query(
        self, request: PreparedRequest, timeout: float | None = None
    ) -> TransportResponse:
        """Synchronously dispatch `request`.

        :param timeout: Optional deadline in seconds for this request.
        :raise NetworkError: if the server can't be reached or the
            connection fails mid-way.
        """
        try:
            response = self.session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body,
                timeout=timeout,
            )
        except requests.RequestException as error:
            raise NetworkError(error) from error
        return TransportResponse(
            status=response.status_code,
            content=response.content or b"",
            encoding=response.encoding,
        )

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class AsyncMAASDispatcher:
    """Helper class to connect to a MAAS server using `aiohttp`.

    The `aiohttp.ClientSession` must be created inside a running event loop,
    so when none is supplied it is created on first use.
    """

    def __init__(self, session: aiohttp.ClientSession | None = None):
        self._session = session

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(trust_env=True)
        return self._session

    async def dispatch_query(
        self, request: PreparedRequest, timeout: float | None = None
    ) -> TransportResponse:
        """Asynchronously dispatch `request`.

        :param timeout: Optional deadline in seconds for this request.
        :raise NetworkError: if the server can't be reached, the connection
            fails mid-way or the deadline passes.
        """
        kwargs = {}
        if timeout is not None:
            kwargs["timeout"] = aiohttp.ClientTimeout(total=timeout)
        try:
            async with self.session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body,
                **kwargs,
            ) as response:
                try:
                    content = await response.read()
                except aiohttp.ClientPayloadError:
                    # The body of an error response is informational only.
                    if 200 <= response.status < 300:
                        raise
                    content = b""
                return TransportResponse(
                    status=response.status,
                    content=content,
                    encoding=response.charset,
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as error:
            raise NetworkError(error) from error

    async def close(self):
        if self._session is not None:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()
