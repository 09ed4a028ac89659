import json
import urllib.parse
from typing import Callable, List, Optional

import pytest

from gtxtranslate.core.cache import TranslationCache
from gtxtranslate.core.request_builder import PreparedRequest
from gtxtranslate.core.token import Token, TokenProvider
from gtxtranslate.core.transport import Transport, TransportResponse
from gtxtranslate.core.translator import Translator


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class FakeTokenProvider(TokenProvider):
    def __init__(self, token: Optional[Token] = None, error: Optional[Exception] = None):
        self.token = token or Token("tk", "123456.654321")
        self.error = error
        self.calls: List[str] = []

    async def generate(self, text: str) -> Token:
        self.calls.append(text)
        if self.error:
            raise self.error
        return self.token


def request_text(prepared: PreparedRequest) -> str:
    """The `q` value of a prepared request, wherever it was placed."""
    if prepared.method == "POST":
        return urllib.parse.parse_qs(prepared.data, keep_blank_values=True)["q"][0]
    query = urllib.parse.urlsplit(prepared.url).query
    return urllib.parse.parse_qs(query, keep_blank_values=True)["q"][0]


def upper_payload(text: str, detected: str = "en") -> list:
    return [[[text.upper(), text, None, None, 1]], None, detected]


class FakeTransport(Transport):
    """Answers every request with ``responder(prepared)``."""

    def __init__(self, responder: Optional[Callable[[PreparedRequest], TransportResponse]] = None):
        self.responder = responder or (lambda p: json_response(upper_payload(request_text(p))))
        self.requests: List[PreparedRequest] = []
        self.closed = False

    async def request(self, prepared: PreparedRequest) -> TransportResponse:
        self.requests.append(prepared)
        return self.responder(prepared)

    async def close(self):
        self.closed = True


def json_response(payload, status: int = 200) -> TransportResponse:
    return TransportResponse(status=status, body=json.dumps(payload).encode("utf-8"))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def token_provider():
    return FakeTokenProvider()


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def translator(token_provider, transport, clock):
    return Translator(
        token_provider=token_provider,
        transport=transport,
        cache=TranslationCache(clock=clock),
    )
