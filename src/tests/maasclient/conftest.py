# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

import json
import random
import string

import pytest

from maasclient.dispatch import TransportResponse
from maasclient.maas_client import AsyncMAASClient, MAASClient
from maasclient.oauth import MAASOAuth

FIXED_NONCE = "abc123"
FIXED_TIMESTAMP = 1700000000


def make_name(prefix, size=6):
    """Generate a random name starting with `prefix`."""
    letters = random.choices(string.ascii_letters, k=size)
    return prefix + "-" + "".join(letters)


def make_json_response(data, status=200):
    return TransportResponse(status, json.dumps(data).encode("utf-8"))


class FakeDispatcher:
    """Fake MAASDispatcher.  Records last invocation, returns given result."""

    last_call = None
    closed = False

    def __init__(self, result=None, error=None):
        self.result = make_json_response({}) if result is None else result
        self.error = error
        self.calls = []

    def dispatch_query(self, request, timeout=None):
        self.last_call = {"request": request, "timeout": timeout}
        self.calls.append(self.last_call)
        if self.error is not None:
            raise self.error
        return self.result

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class FakeAsyncDispatcher(FakeDispatcher):
    async def dispatch_query(self, request, timeout=None):
        return super().dispatch_query(request, timeout=timeout)

    async def close(self):
        super().close()


@pytest.fixture
def json_response():
    return make_json_response


@pytest.fixture
def credentials():
    return (
        make_name("consumer-key"),
        make_name("token-key"),
        make_name("token-secret"),
    )


@pytest.fixture
def api_key(credentials):
    return ":".join(credentials)


@pytest.fixture
def fixed_auth():
    return MAASOAuth(
        nonce_factory=lambda: FIXED_NONCE,
        timestamp_factory=lambda: FIXED_TIMESTAMP,
    )


@pytest.fixture
def dispatcher():
    return FakeDispatcher()


@pytest.fixture
def async_dispatcher():
    return FakeAsyncDispatcher()


@pytest.fixture
def client(api_key, dispatcher, fixed_auth):
    return MAASClient(
        "http://maas.example.com:5240/MAAS/",
        api_key,
        "2.0",
        dispatcher,
        auth=fixed_auth,
    )


@pytest.fixture
def async_client(api_key, async_dispatcher, fixed_auth):
    return AsyncMAASClient(
        "http://maas.example.com:5240/MAAS/",
        api_key,
        "2.0",
        async_dispatcher,
        auth=fixed_auth,
    )


@pytest.fixture
def machine_data():
    return {
        "system_id": "x8d7f",
        "hostname": "web-server-01",
        "power_state": "on",
        "architecture": "amd64/generic",
        "memory": 8192,
        "cpu_count": 4,
        "status_name": "Deployed",
        "ip_addresses": ["10.0.0.5"],
        "tag_names": ["virtual", "gpu-node"],
        "fqdn": "web-server-01.maas",
    }
