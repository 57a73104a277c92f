import aiohttp
import pytest
from aiohttp import web
from aiohttp import test_utils

from storefront.http import client as client_mod
from storefront.http.client import fetch_json, post_json


@pytest.fixture(autouse=True)
def no_backoff(monkeypatch):
    monkeypatch.setattr(client_mod, "backoff_seconds", lambda attempt: 0.0)


@pytest.fixture
async def server():
    hits = {"flaky": 0}

    async def flaky(request):
        hits["flaky"] += 1
        if hits["flaky"] < 3:
            return web.Response(status=503)
        return web.json_response([{"id": "a"}])

    async def missing(request):
        return web.Response(status=404)

    async def echo(request):
        payload = await request.json()
        return web.json_response({"type": "SUCCESS", "message": payload["id"]})

    app = web.Application()
    app.router.add_get("/flaky", flaky)
    app.router.add_get("/missing", missing)
    app.router.add_post("/echo", echo)

    srv = test_utils.TestServer(app)
    await srv.start_server()
    srv.hits = hits
    yield srv
    await srv.close()


async def test_retries_server_errors_then_succeeds(server):
    async with aiohttp.ClientSession() as session:
        text = await fetch_json(session, str(server.make_url("/flaky")), retries=2)

    assert text == '[{"id": "a"}]'
    assert server.hits["flaky"] == 3


async def test_gives_up_after_retries(server):
    async with aiohttp.ClientSession() as session:
        with pytest.raises(aiohttp.ClientResponseError) as exc:
            await fetch_json(session, str(server.make_url("/flaky")), retries=1)

    assert exc.value.status == 503


async def test_client_errors_are_not_retried(server):
    async with aiohttp.ClientSession() as session:
        with pytest.raises(aiohttp.ClientResponseError) as exc:
            await fetch_json(session, str(server.make_url("/missing")))

    assert exc.value.status == 404


async def test_post_json_sends_payload(server):
    async with aiohttp.ClientSession() as session:
        text = await post_json(session, str(server.make_url("/echo")), {"id": "p1"})

    assert '"message": "p1"' in text
