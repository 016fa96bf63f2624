# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""OAuth 1.0 (RFC 5849) request signing for the MAAS API.

Only the fixed set of ``oauth_*`` protocol parameters takes part in the
signature: query string and body parameters are never signed, which is
what the MAAS API server expects.
"""

__all__ = ["MAASOAuth"]

from typing import Callable

from oauthlib import oauth1
from oauthlib.common import generate_nonce, generate_timestamp
from oauthlib.oauth1.rfc5849 import signature, utils

from maasclient.creds import Credentials

SIGNATURE_METHOD = "HMAC-SHA1"
OAUTH_VERSION = "1.0"

# Order in which parameters appear in the Authorization header.
HEADER_PARAMETERS = (
    "oauth_consumer_key",
    "oauth_token",
    "oauth_signature_method",
    "oauth_timestamp",
    "oauth_nonce",
    "oauth_version",
    "oauth_signature",
)


class MAASOAuth:
    """Helper class to OAuth-sign an HTTP request.

    :param nonce_factory: Callable returning a fresh nonce for every
        signature.  Defaults to a random nonce.
    :param timestamp_factory: Callable returning the current Unix time, as
        an integer or a string of digits.  Defaults to the system clock.
    """

    def __init__(
        self,
        nonce_factory: Callable[[], str] = generate_nonce,
        timestamp_factory: Callable[[], int | str] = generate_timestamp,
    ):
        self.nonce_factory = nonce_factory
        self.timestamp_factory = timestamp_factory

    def make_oauth_params(self, credentials: Credentials) -> dict[str, str]:
        """Return the protocol parameters for a new signature."""
        return {
            "oauth_consumer_key": credentials.consumer_key,
            "oauth_token": credentials.token_key,
            "oauth_signature_method": SIGNATURE_METHOD,
            "oauth_timestamp": str(self.timestamp_factory()),
            "oauth_nonce": self.nonce_factory(),
            "oauth_version": OAUTH_VERSION,
        }

    @staticmethod
    def base_string(method: str, url: str, oauth_params: dict) -> str:
        """Build the signature base string.

        The URL's query and fragment are dropped and the scheme and host
        lowercased; parameters are encoded and sorted by name, then value.
        """
        normalized_params = signature.normalize_parameters(
            [
                (name, value)
                for name, value in oauth_params.items()
                if name != "oauth_signature"
            ]
        )
        return signature.signature_base_string(
            method, signature.base_string_uri(url), normalized_params
        )

    def sign(self, method: str, url: str, credentials: Credentials) -> str:
        """Return the value of an ``Authorization`` header for a request.

        :param method: The HTTP method, e.g. ``GET``.
        :param url: The exact URL the request is sent to.
        :param credentials: The `Credentials` to sign with.
        """
        oauth_params = self.make_oauth_params(credentials)
        base_string = self.base_string(method, url, oauth_params)
        # The signing key is the escaped consumer secret and token secret
        # joined with "&".
        client = oauth1.Client(
            credentials.consumer_key,
            client_secret=credentials.consumer_secret,
            resource_owner_key=credentials.token_key,
            resource_owner_secret=credentials.token_secret,
        )
        oauth_params["oauth_signature"] = (
            signature.sign_hmac_sha1_with_client(base_string, client)
        )
        return "OAuth " + ", ".join(
            f'{name}="{utils.escape(oauth_params[name])}"'
            for name in HEADER_PARAMETERS
        )

    def sign_request(
        self, method: str, url: str, credentials: Credentials, headers: dict
    ):
        """Sign a request.

        @param url: The URL to which the request is to be sent.
        @param headers: The headers in the request.  These will be updated
            with the signature.
        """
        headers["Authorization"] = self.sign(method, url, credentials)
