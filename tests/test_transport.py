import asyncio
import contextlib
import json
import urllib.parse

import pytest
from aiohttp import web

import gtxtranslate
import gtxtranslate.core.translator as translator_module
from gtxtranslate.core.constants import FORM_CONTENT_TYPE
from gtxtranslate.core.request_builder import PreparedRequest, build_request
from gtxtranslate.core.token import Token
from gtxtranslate.core.transport import AiohttpTransport
from gtxtranslate.core.translator import Translator
from gtxtranslate.utils.config import TranslatorSettings

from conftest import FakeTokenProvider, upper_payload

TOKEN = Token("tk", "123456.654321")


async def echo(request: web.Request) -> web.Response:
    body = await request.text()
    return web.json_response({
        "method": request.method,
        "query_q": request.query.get("q"),
        "form_q": urllib.parse.parse_qs(body).get("q", [None])[0],
        "content_type": request.headers.get("Content-Type"),
    })


async def translate_a_single(request: web.Request) -> web.Response:
    text = request.query.get("q")
    if text is None:
        text = urllib.parse.parse_qs(await request.text())["q"][0]
    return web.json_response(upper_payload(text))


async def limited(request: web.Request) -> web.Response:
    return web.Response(status=429, text="Too Many Requests")


async def html(request: web.Request) -> web.Response:
    return web.Response(text="<html>sorry</html>", content_type="text/html")


def make_app() -> web.Application:
    app = web.Application()
    app.router.add_route("*", "/echo", echo)
    app.router.add_route("*", "/translate_a/single", translate_a_single)
    app.router.add_get("/limited", limited)
    app.router.add_get("/html", html)
    return app


@contextlib.asynccontextmanager
async def serve():
    runner = web.AppRunner(make_app())
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 0)
    await site.start()
    host, port = runner.addresses[0][:2]
    try:
        yield f"http://{host}:{port}"
    finally:
        await runner.cleanup()


@pytest.mark.asyncio
async def test_get_returns_buffered_json():
    transport = AiohttpTransport()
    async with serve() as base:
        response = await transport.request(build_request("en", "fr", "hello", TOKEN, base_url=f"{base}/echo"))
        await transport.close()

    assert response.status == 200
    data = await response.json()
    assert data["method"] == "GET"
    assert data["query_q"] == "hello"


@pytest.mark.asyncio
async def test_post_sends_form_body_and_content_type():
    transport = AiohttpTransport()
    text = "word " * 500
    prepared = build_request("en", "fr", text, TOKEN, base_url="placeholder")
    assert prepared.method == "POST"

    async with serve() as base:
        prepared.url = prepared.url.replace("placeholder", f"{base}/echo", 1)
        response = await transport.request(prepared)
        await transport.close()

    data = await response.json()
    assert data["method"] == "POST"
    assert data["form_q"] == text
    assert data["query_q"] is None
    assert data["content_type"] == FORM_CONTENT_TYPE


@pytest.mark.asyncio
async def test_error_status_is_passed_through():
    transport = AiohttpTransport()
    async with serve() as base:
        response = await transport.request(PreparedRequest("GET", f"{base}/limited"))
        await transport.close()

    assert response.status == 429
    assert await response.text() == "Too Many Requests"


@pytest.mark.asyncio
async def test_non_json_body_is_still_readable_as_text():
    transport = AiohttpTransport()
    async with serve() as base:
        response = await transport.request(PreparedRequest("GET", f"{base}/html"))
        await transport.close()

    with pytest.raises(json.JSONDecodeError):
        await response.json()
    assert await response.text() == "<html>sorry</html>"


@pytest.mark.asyncio
async def test_close_drops_the_session():
    transport = AiohttpTransport()
    async with serve() as base:
        await transport.request(PreparedRequest("GET", f"{base}/echo"))
        session = transport._session
        await transport.close()

    assert session.closed
    assert transport._session is None
    await transport.close()


@pytest.mark.asyncio
async def test_request_log_omits_the_text(caplog):
    transport = AiohttpTransport()
    async with serve() as base:
        prepared = build_request("en", "fr", "my secret words", TOKEN, base_url=f"{base}/echo")
        with caplog.at_level("DEBUG", logger="gtxtranslate.core.transport"):
            await transport.request(prepared)
        await transport.close()

    assert "GET /echo (q=15 chars)" in caplog.text
    assert "secret" not in caplog.text


def test_describe_post_reports_body_length():
    prepared = build_request("en", "fr", "a" * 3000, TOKEN, base_url="https://example.test/translate_a/single")
    assert AiohttpTransport.describe(prepared) == "POST /translate_a/single (q=3000 chars)"


def test_transport_survives_a_new_event_loop():
    transport = AiohttpTransport()

    async def fetch(close: bool) -> int:
        async with serve() as base:
            response = await transport.request(PreparedRequest("GET", f"{base}/echo"))
            if close:
                await transport.close()
        return response.status

    assert asyncio.run(fetch(close=False)) == 200
    assert asyncio.run(fetch(close=True)) == 200


def test_module_level_translate_across_event_loops(monkeypatch):
    settings = TranslatorSettings()
    translator = Translator(token_provider=FakeTokenProvider(), transport=AiohttpTransport(), settings=settings)
    monkeypatch.setattr(translator_module, "_default_translator", translator)

    async def run(text: str, close: bool = False) -> str:
        async with serve() as base:
            settings.base_url = f"{base}/translate_a/single"
            result = await gtxtranslate.translate(text, {"from": "en", "to": "fr"})
            if close:
                await translator.close()
        return result.text

    assert asyncio.run(run("hello")) == "HELLO"
    assert asyncio.run(run("world", close=True)) == "WORLD"
