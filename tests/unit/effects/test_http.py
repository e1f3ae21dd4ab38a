from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from schemaforms.effects.http import HttpSubmitEffect
from schemaforms.exceptions import SubmitTransportError
from schemaforms.settings import Settings

_URL = "https://forms.example.test/submit"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_http_effect_requires_a_url() -> None:
    with pytest.raises(SubmitTransportError, match="SUBMIT_URL"):
        HttpSubmitEffect(settings=Settings())


def test_http_effect_defaults_to_configured_url() -> None:
    effect = HttpSubmitEffect(settings=Settings(submit_url=_URL))

    assert effect.url == _URL


def test_http_effect_posts_values_as_json() -> None:
    requests: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(201)

    async def _scenario() -> None:
        async with _client(_handler) as client:
            await HttpSubmitEffect(_URL, settings=Settings(), client=client)({"name": "Ada"})

    asyncio.run(_scenario())

    assert len(requests) == 1
    assert requests[0].method == "POST"
    assert str(requests[0].url) == _URL
    assert json.loads(requests[0].content) == {"name": "Ada"}


def test_http_effect_raises_on_error_status() -> None:
    async def _scenario() -> None:
        async with _client(lambda request: httpx.Response(503)) as client:
            await HttpSubmitEffect(_URL, settings=Settings(), client=client)({})

    with pytest.raises(SubmitTransportError, match="status 503") as exc_info:
        asyncio.run(_scenario())
    assert exc_info.value.status_code == 503


def test_http_effect_wraps_transport_errors() -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async def _scenario() -> None:
        async with _client(_handler) as client:
            await HttpSubmitEffect(_URL, settings=Settings(), client=client)({})

    with pytest.raises(SubmitTransportError, match="refused"):
        asyncio.run(_scenario())


def test_http_effect_reports_timeouts() -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    async def _scenario() -> None:
        async with _client(_handler) as client:
            await HttpSubmitEffect(_URL, settings=Settings(), client=client)({})

    with pytest.raises(SubmitTransportError, match="timed out"):
        asyncio.run(_scenario())


def test_http_effect_builds_client_from_settings(mocker) -> None:
    requests: list[httpx.Request] = []
    transport = httpx.MockTransport(lambda request: requests.append(request) or httpx.Response(200))
    real_client = httpx.AsyncClient

    def _factory(**kwargs: object) -> httpx.AsyncClient:
        assert kwargs["timeout"] == 5.0
        return real_client(transport=transport)

    mocker.patch("schemaforms.effects.http.httpx.AsyncClient", side_effect=_factory)
    effect = HttpSubmitEffect(_URL, settings=Settings(submit_timeout=5.0))

    asyncio.run(effect({"a": "b"}))

    assert len(requests) == 1
