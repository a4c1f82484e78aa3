from __future__ import annotations

import asyncio

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp import test_utils

from optionpulse.application.ports.errors import AuthenticationError, ProviderError
from optionpulse.infrastructure.external.tradier_client import TradierClient


async def echo(request: web.Request) -> web.Response:
    if request.headers.get("Authorization") != "Bearer secret":
        return web.json_response({"fault": {"faultstring": "Invalid access token"}}, status=401)
    form = dict(await request.post()) if request.method == "POST" else {}
    return web.json_response({"query": dict(request.query), "form": form})


async def bad_request(request: web.Request) -> web.Response:
    return web.json_response({"errors": {"error": ["Invalid symbol", "Invalid interval"]}}, status=400)


async def not_json(request: web.Request) -> web.Response:
    return web.Response(text="<html>maintenance</html>")


async def slow(request: web.Request) -> web.Response:
    await asyncio.sleep(1)
    return web.json_response({})


@pytest_asyncio.fixture
async def server():
    app = web.Application()
    app.router.add_get("/v1/echo", echo)
    app.router.add_post("/v1/echo", echo)
    app.router.add_get("/v1/bad", bad_request)
    app.router.add_get("/v1/html", not_json)
    app.router.add_get("/v1/slow", slow)
    srv = test_utils.TestServer(app)
    await srv.start_server()
    yield srv
    await srv.close()


@pytest_asyncio.fixture
async def client(server):
    tradier = TradierClient(str(server.make_url("/v1")), access_token="secret", timeout_seconds=0.2)
    yield tradier
    await tradier.close()


@pytest.mark.asyncio
async def test_get_sends_bearer_and_params(client):
    payload = await client.get("/echo", params={"symbol": "SPY"})
    assert payload["query"] == {"symbol": "SPY"}


@pytest.mark.asyncio
async def test_post_is_form_encoded(client):
    payload = await client.post("/echo", data={"class": "option", "quantity": "2"})
    assert payload["form"] == {"class": "option", "quantity": "2"}


@pytest.mark.asyncio
async def test_unauthorized(server):
    tradier = TradierClient(str(server.make_url("/v1")), access_token="wrong")
    try:
        with pytest.raises(AuthenticationError) as exc:
            await tradier.get("/echo")
    finally:
        await tradier.close()
    assert exc.value.status_code == 401
    assert "Invalid access token" in exc.value.message


@pytest.mark.asyncio
async def test_http_error_message(client):
    with pytest.raises(ProviderError) as exc:
        await client.get("/bad")
    assert exc.value.status_code == 400
    assert exc.value.message == "Tradier API error: Invalid symbol; Invalid interval"
    assert client.to_dict()["failures"] == 1


@pytest.mark.asyncio
async def test_non_json_body(client):
    with pytest.raises(ProviderError):
        await client.get("/html")


@pytest.mark.asyncio
async def test_timeout(client):
    with pytest.raises(ProviderError) as exc:
        await client.get("/slow")
    assert exc.value.status_code is None


@pytest.mark.asyncio
async def test_connection_refused():
    tradier = TradierClient("http://127.0.0.1:1/v1", access_token="secret")
    try:
        with pytest.raises(ProviderError):
            await tradier.get("/user/profile")
    finally:
        await tradier.close()
