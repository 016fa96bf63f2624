# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""A client for the MAAS OAuth-protected HTTP API."""

__all__ = [
    "ApiError",
    "AsyncMAASClient",
    "create_client",
    "Credentials",
    "HTTPVerb",
    "InvalidKeyFormat",
    "Machine",
    "MAASClient",
    "MAASClientError",
    "MAASOAuth",
    "NetworkError",
    "SerializationError",
    "UrlParseError",
]

from maasclient.creds import Credentials
from maasclient.errors import (
    ApiError,
    InvalidKeyFormat,
    MAASClientError,
    NetworkError,
    SerializationError,
    UrlParseError,
)
from maasclient.maas_client import (
    AsyncMAASClient,
    create_client,
    HTTPVerb,
    MAASClient,
)
from maasclient.models import Machine
from maasclient.oauth import MAASOAuth
