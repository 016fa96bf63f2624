# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Tests for the HTTP transports."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest
import requests

from maasclient.dispatch import (
    AsyncMAASDispatcher,
    MAASDispatcher,
    PreparedRequest,
    TransportResponse,
)
from maasclient.errors import NetworkError

URL = "http://maas.example.com/MAAS/api/2.0/machines/"


def make_request(method="GET", body=None):
    return PreparedRequest(
        method,
        URL,
        {"Authorization": "OAuth ...", "Content-Type": "application/json"},
        body,
    )


def make_requests_response(status=200, content=b"[]", encoding="utf-8"):
    response = requests.Response()
    response.status_code = status
    response._content = content
    response.encoding = encoding
    return response


def make_aiohttp_session(status=200, content=b"[]", charset=None):
    session = MagicMock()
    session.close = AsyncMock()
    response = MagicMock()
    response.status = status
    response.charset = charset
    response.read = AsyncMock(return_value=content)
    context = session.request.return_value
    context.__aenter__.return_value = response
    context.__aexit__.return_value = False
    return session, response


class TestTransportResponse:
    @pytest.mark.parametrize(
        "status,ok", [(200, True), (204, True), (299, True), (301, False)]
    )
    def test_ok(self, status, ok):
        assert TransportResponse(status).ok is ok

    def test_text_decodes_with_encoding(self):
        response = TransportResponse(200, "café".encode("latin-1"), "latin-1")
        assert response.text == "café"

    def test_text_defaults_to_utf8(self):
        assert TransportResponse(200, "café".encode()).text == "café"

    def test_text_is_empty_when_undecodable(self):
        assert TransportResponse(500, b"\xff\xfe\xfa").text == ""

    def test_text_is_empty_for_unknown_encoding(self):
        assert TransportResponse(500, b"oops", "no-such-codec").text == ""


class TestMAASDispatcher:
    @pytest.fixture
    def session(self, mocker):
        session = requests.Session()
        mocker.patch.object(session, "request")
        mocker.patch.object(session, "close")
        return session

    def test_creates_session(self):
        dispatcher = MAASDispatcher()
        assert isinstance(dispatcher.session, requests.Session)
        dispatcher.close()

    def test_dispatch_query_sends_request(self, session):
        session.request.return_value = make_requests_response()
        request = make_request("POST", '{"hostname": "foo"}')
        MAASDispatcher(session).dispatch_query(request, timeout=3.0)
        session.request.assert_called_once_with(
            "POST",
            URL,
            headers=request.headers,
            data='{"hostname": "foo"}',
            timeout=3.0,
        )

    def test_dispatch_query_returns_response(self, session):
        session.request.return_value = make_requests_response(
            404, b"not found", "ISO-8859-1"
        )
        response = MAASDispatcher(session).dispatch_query(make_request())
        assert response == TransportResponse(404, b"not found", "ISO-8859-1")

    @pytest.mark.parametrize(
        "error",
        [
            requests.ConnectionError("Connection refused"),
            requests.Timeout("Read timed out"),
            requests.exceptions.ChunkedEncodingError("Connection reset"),
        ],
    )
    def test_dispatch_query_raises_network_error(self, session, error):
        session.request.side_effect = error
        with pytest.raises(NetworkError) as info:
            MAASDispatcher(session).dispatch_query(make_request())
        assert info.value.cause is error
        assert info.value.__cause__ is error

    def test_dispatch_query_does_not_retry(self, session):
        session.request.side_effect = requests.ConnectionError()
        with pytest.raises(NetworkError):
            MAASDispatcher(session).dispatch_query(make_request())
        session.request.assert_called_once()

    def test_context_manager_closes_session(self, session):
        with MAASDispatcher(session):
            pass
        session.close.assert_called_once_with()


class TestAsyncMAASDispatcher:
    @pytest.mark.asyncio
    async def test_dispatch_query_sends_request(self):
        session, _ = make_aiohttp_session()
        request = make_request("PUT", '{"zone": "z1"}')
        await AsyncMAASDispatcher(session).dispatch_query(request)
        session.request.assert_called_once_with(
            "PUT", URL, headers=request.headers, data='{"zone": "z1"}'
        )

    @pytest.mark.asyncio
    async def test_dispatch_query_passes_timeout(self):
        session, _ = make_aiohttp_session()
        await AsyncMAASDispatcher(session).dispatch_query(
            make_request(), timeout=5
        )
        assert session.request.call_args.kwargs[
            "timeout"
        ] == aiohttp.ClientTimeout(total=5)

    @pytest.mark.asyncio
    async def test_dispatch_query_returns_response(self):
        session, _ = make_aiohttp_session(403, b"forbidden", "utf-8")
        response = await AsyncMAASDispatcher(session).dispatch_query(
            make_request()
        )
        assert response == TransportResponse(403, b"forbidden", "utf-8")

    @pytest.mark.asyncio
    async def test_unreadable_error_body_is_empty(self):
        session, response = make_aiohttp_session(500)
        response.read.side_effect = aiohttp.ClientPayloadError("truncated")
        result = await AsyncMAASDispatcher(session).dispatch_query(
            make_request()
        )
        assert result == TransportResponse(500, b"", None)

    @pytest.mark.asyncio
    async def test_unreadable_success_body_is_network_error(self):
        session, response = make_aiohttp_session(200)
        response.read.side_effect = aiohttp.ClientPayloadError("truncated")
        with pytest.raises(NetworkError):
            await AsyncMAASDispatcher(session).dispatch_query(make_request())

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            aiohttp.ClientConnectionError("Connection refused"),
            asyncio.TimeoutError(),
        ],
    )
    async def test_dispatch_query_raises_network_error(self, error):
        session, _ = make_aiohttp_session()
        session.request.side_effect = error
        with pytest.raises(NetworkError) as info:
            await AsyncMAASDispatcher(session).dispatch_query(make_request())
        assert info.value.cause is error
        session.request.assert_called_once()

    @pytest.mark.asyncio
    async def test_creates_session_on_first_use(self):
        dispatcher = AsyncMAASDispatcher()
        assert dispatcher._session is None
        session = dispatcher.session
        assert isinstance(session, aiohttp.ClientSession)
        assert dispatcher.session is session
        await dispatcher.close()
        assert session.closed

    @pytest.mark.asyncio
    async def test_close_without_session(self):
        await AsyncMAASDispatcher().close()

    @pytest.mark.asyncio
    async def test_context_manager_closes_session(self):
        session, _ = make_aiohttp_session()
        async with AsyncMAASDispatcher(session):
            pass
        session.close.assert_awaited_once_with()
