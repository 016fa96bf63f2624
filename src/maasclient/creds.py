# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Handling of MAAS API credentials.

The API client deals with credentials consisting of 3 elements: consumer
key, resource token, and resource secret.  These are in OAuth, but the
consumer secret is hardwired to the empty string.

Credentials are handed around as a colon-separated string, the form in
which MAAS presents API keys to its users.
"""

__all__ = [
    "convert_credentials_to_string",
    "convert_string_to_credentials",
    "Credentials",
]

from typing import NamedTuple

from maasclient.errors import InvalidKeyFormat


class Credentials(NamedTuple):
    consumer_key: str
    token_key: str
    token_secret: str

    # Always empty for MAAS.
    consumer_secret = ""

    @classmethod
    def from_string(cls, creds_string: str) -> "Credentials":
        return convert_string_to_credentials(creds_string)

    def __repr__(self):
        return (
            f"Credentials(consumer_key={self.consumer_key!r}, "
            f"token_key={self.token_key!r}, token_secret='***')"
        )

    __str__ = __repr__


def convert_credentials_to_string(credentials: Credentials) -> str:
    """Represent MAAS API credentials as a colon-separated string."""
    return ":".join(credentials)


def convert_string_to_credentials(creds_string: str) -> Credentials:
    """Recreate MAAS API credentials from a colon-separated string.

    Only the number of fields is checked; empty fields are allowed.
    """
    parts = creds_string.split(":")
    if len(parts) != 3:
        raise InvalidKeyFormat()
    return Credentials(*parts)
