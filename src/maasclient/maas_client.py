# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""MAAS OAuth API connection library."""

__all__ = [
    "AsyncMAASClient",
    "create_client",
    "HTTPVerb",
    "MAASClient",
    "MAASClientBase",
]

from enum import Enum
import json
from typing import Any

from maasclient.config import ClientConfig, DEFAULT_API_VERSION
from maasclient.creds import convert_string_to_credentials
from maasclient.dispatch import (
    AsyncMAASDispatcher,
    MAASDispatcher,
    PreparedRequest,
    TransportResponse,
)
from maasclient.errors import ApiError, MAASClientError, SerializationError
from maasclient.logging import get_logger
from maasclient.models import Machine
from maasclient.oauth import MAASOAuth

logger = get_logger(__name__)


class HTTPVerb(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @property
    def accepts_body(self) -> bool:
        return self in (HTTPVerb.POST, HTTPVerb.PUT)


class MAASClientBase:
    """Everything about talking to MAAS that doesn't involve waiting.

    Subclasses only decide how to wait for the dispatcher: `MAASClient`
    blocks, `AsyncMAASClient` suspends the calling task.  All "endpoint"
    parameters are relative to ``{base_url}/api/{api_version}/`` and can be
    either a string or a sequence of path elements.

    Instances hold no mutable state and can be shared between callers.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        api_version: str,
        dispatcher,
        auth: MAASOAuth | None = None,
    ):
        """Initialise the client.

        :param base_url: The base URL for the MAAS server, e.g.
            http://my.maas.com:5240/MAAS/
        :param api_key: The API key, as ``consumer:token:secret``.
        :param api_version: The API version, e.g. "2.0".
        :param dispatcher: The transport sending requests, see
            `maasclient.dispatch`.  Clients never create one themselves;
            `create_client` builds a default.
        :param auth: A `MAASOAuth` to sign requests with.
        :raise InvalidKeyFormat: if `api_key` is not in three parts.
        """
        self.credentials = convert_string_to_credentials(api_key)
        self.config = ClientConfig(base_url, api_version)
        self.dispatcher = dispatcher
        self.auth = MAASOAuth() if auth is None else auth

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def api_version(self) -> str:
        return self.config.api_version

    def prepare(
        self,
        verb: HTTPVerb | str,
        endpoint,
        body: Any = None,
        params: dict | None = None,
    ) -> PreparedRequest:
        """Return a signed request for `endpoint`.

        :param body: A JSON-serializable value, sent only with verbs that
            accept a body.
        :param params: Optional query parameters; these are not signed.
        :raise UrlParseError: if the URL is not a valid HTTP URL.
        :raise SerializationError: if `body` can't be encoded as JSON.
        """
        if not isinstance(verb, HTTPVerb):
            verb = HTTPVerb(verb.upper())
        url = self.config.api_url(endpoint, params)
        headers = {"Content-Type": "application/json"}
        # The signature covers the exact URL requested.
        self.auth.sign_request(verb.value, url, self.credentials, headers)
        data = None
        if body is not None:
            if verb.accepts_body:
                try:
                    data = json.dumps(body)
                except (TypeError, ValueError) as error:
                    raise SerializationError(error) from error
            else:
                logger.warning(
                    "Ignoring request body", method=verb.value, url=url
                )
        return PreparedRequest(verb.value, url, headers, data)

    def process_response(
        self, request: PreparedRequest, response: TransportResponse
    ) -> Any:
        """Return the decoded JSON of a successful response.

        :raise ApiError: if the response status isn't 2xx.
        :raise SerializationError: if the body isn't JSON.
        """
        logger.debug(
            "MAAS API response",
            method=request.method,
            url=request.url,
            status=response.status,
        )
        if not response.ok:
            raise ApiError(response.status, response.text)
        try:
            return json.loads(response.content)
        except ValueError as error:
            raise SerializationError(error) from error

    def log_failure(self, verb, endpoint, error: MAASClientError):
        logger.warning(
            "MAAS API request failed",
            method=getattr(verb, "value", verb),
            endpoint=endpoint,
            error=error.message,
        )


class MAASClient(MAASClientBase):
    """Blocking MAAS API client.

    :param dispatcher: A `MAASDispatcher`, or anything with the same
        ``dispatch_query(request, timeout)`` method.
    """

    def request(
        self,
        verb: HTTPVerb | str,
        endpoint,
        body: Any = None,
        params: dict | None = None,
        timeout: float | None = None,
    ) -> Any:
        try:
            request = self.prepare(verb, endpoint, body, params)
            response = self.dispatcher.dispatch_query(
                request, timeout=timeout
            )
            return self.process_response(request, response)
        except MAASClientError as error:
            self.log_failure(verb, endpoint, error)
            raise

    def get(self, endpoint, params=None, timeout=None):
        """Dispatch a GET, and return the decoded JSON response."""
        return self.request(HTTPVerb.GET, endpoint, None, params, timeout)

    def post(self, endpoint, body=None, params=None, timeout=None):
        """Dispatch a POST of `body`, encoded as JSON."""
        return self.request(HTTPVerb.POST, endpoint, body, params, timeout)

    def put(self, endpoint, body=None, params=None, timeout=None):
        """Dispatch a PUT of `body` on the resource at `endpoint`."""
        return self.request(HTTPVerb.PUT, endpoint, body, params, timeout)

    def delete(self, endpoint, params=None, timeout=None):
        """Dispatch a DELETE on the resource at `endpoint`."""
        return self.request(HTTPVerb.DELETE, endpoint, None, params, timeout)

    def list_machines(self, timeout=None) -> list[Machine]:
        return Machine.from_json_list(self.get("machines/", timeout=timeout))

    def get_machine(self, system_id: str, timeout=None) -> Machine:
        return Machine.from_json(
            self.get(["machines", system_id, ""], timeout=timeout)
        )

    def close(self):
        self.dispatcher.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class AsyncMAASClient(MAASClientBase):
    """MAAS API client for use with asyncio.

    :param dispatcher: An `AsyncMAASDispatcher`, or anything with the same
        ``async dispatch_query(request, timeout)`` method.
    """

    async def request(
        self,
        verb: HTTPVerb | str,
        endpoint,
        body: Any = None,
        params: dict | None = None,
        timeout: float | None = None,
    ) -> Any:
        try:
            request = self.prepare(verb, endpoint, body, params)
            response = await self.dispatcher.dispatch_query(
                request, timeout=timeout
            )
            return self.process_response(request, response)
        except MAASClientError as error:
            self.log_failure(verb, endpoint, error)
            raise

    async def get(self, endpoint, params=None, timeout=None):
        return await self.request(
            HTTPVerb.GET, endpoint, None, params, timeout
        )

    async def post(self, endpoint, body=None, params=None, timeout=None):
        return await self.request(
            HTTPVerb.POST, endpoint, body, params, timeout
        )

    async def put(self, endpoint, body=None, params=None, timeout=None):
        return await self.request(
            HTTPVerb.PUT, endpoint, body, params, timeout
        )

    async def delete(self, endpoint, params=None, timeout=None):
        return await self.request(
            HTTPVerb.DELETE, endpoint, None, params, timeout
        )

    async def list_machines(self, timeout=None) -> list[Machine]:
        data = await self.get("machines/", timeout=timeout)
        return Machine.from_json_list(data)

    async def get_machine(self, system_id: str, timeout=None) -> Machine:
        data = await self.get(["machines", system_id, ""], timeout=timeout)
        return Machine.from_json(data)

    async def close(self):
        await self.dispatcher.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()


def create_client(
    base_url: str,
    api_key: str,
    api_version: str = DEFAULT_API_VERSION,
    asynchronous: bool = False,
) -> MAASClient | AsyncMAASClient:
    """Create a client with a default dispatcher for the chosen mode."""
    if asynchronous:
        return AsyncMAASClient(
            base_url, api_key, api_version, AsyncMAASDispatcher()
        )
    dispatcher = MAASDispatcher()
    try:
        return MAASClient(base_url, api_key, api_version, dispatcher)
    except MAASClientError:
        dispatcher.close()
        raise
