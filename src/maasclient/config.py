# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Configuration of the MAAS API client."""

__all__ = ["ClientConfig", "Settings"]

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
import os
from urllib.parse import urlparse

from maasclient.errors import UrlParseError
from maasclient.utils import flatten, urlencode

DEFAULT_API_VERSION = "2.0"


@dataclass(frozen=True)
class ClientConfig:
    """Where the MAAS API lives.

    Trailing slashes are stripped from `base_url` so that joining it with
    the API path never produces a double slash.
    """

    base_url: str
    api_version: str = DEFAULT_API_VERSION

    def __post_init__(self):
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    def api_url(self, endpoint, params: Mapping | None = None) -> str:
        """Compose the absolute URL of `endpoint` in this API version.

        :param endpoint: Either a string giving a path to the desired
            resource, or a sequence of items that make up the path.  So
            `["machines", system_id, ""]` is equivalent to
            `"machines/%s/" % system_id`.
        :param params: Optional query parameters.
        :raise UrlParseError: if the result is not an absolute HTTP URL, or
            a query parameter can't be encoded.
        """
        assert not isinstance(endpoint, bytes)
        if not isinstance(endpoint, str):
            assert isinstance(endpoint, Sequence)
            endpoint = "/".join(str(element) for element in endpoint)
        # Leading slashes go, a trailing slash is significant to MAAS.
        url = "{}/api/{}/{}".format(
            self.base_url, self.api_version, endpoint.lstrip("/")
        )
        if params:
            try:
                query = urlencode(flatten(params))
            except ValueError as error:
                raise UrlParseError(url, error) from error
            url += "?" + query
        validate_url(url)
        return url


def validate_url(url: str):
    """Check that `url` is an absolute HTTP(S) URL with a host."""
    try:
        parsed = urlparse(url)
        port = parsed.port
    except ValueError as error:
        raise UrlParseError(url, error) from error
    if parsed.scheme not in ("http", "https"):
        raise UrlParseError(url, "scheme must be http or https")
    if not parsed.hostname:
        raise UrlParseError(url, "no host")
    if port == 0:
        raise UrlParseError(url, "port out of range")


def _is_true(value: str | None) -> bool:
    return value is not None and value.lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Client settings, as read from the environment."""

    url: str | None = None
    api_key: str | None = field(default=None, repr=False)
    api_version: str = DEFAULT_API_VERSION
    timeout: float | None = None
    debug: bool = False

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] = os.environ):
        timeout = environ.get("MAAS_TIMEOUT")
        try:
            timeout = float(timeout) if timeout else None
        except ValueError:
            raise ValueError(
                f"MAAS_TIMEOUT must be a number of seconds, not {timeout!r}"
            ) from None
        return cls(
            url=environ.get("MAAS_URL"),
            api_key=environ.get("MAAS_API_KEY"),
            api_version=environ.get("MAAS_API_VERSION", DEFAULT_API_VERSION),
            timeout=timeout,
            debug=_is_true(environ.get("MAAS_DEBUG")),
        )
