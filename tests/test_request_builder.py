import urllib.parse

from gtxtranslate.core.constants import FORM_CONTENT_TYPE, MAX_GET_URL_LENGTH, TRANSLATE_URL
from gtxtranslate.core.request_builder import build_request
from gtxtranslate.core.token import Token

TOKEN = Token("tk", "520626.955730")


def _query(url):
    return urllib.parse.parse_qs(urllib.parse.urlsplit(url).query, keep_blank_values=True)


def test_short_text_uses_get_with_inline_text():
    prepared = build_request("auto", "en", "bonjour", TOKEN)
    assert prepared.method == "GET"
    assert prepared.data is None
    assert prepared.url.startswith(TRANSLATE_URL + "?")

    query = _query(prepared.url)
    assert query["client"] == ["gtx"]
    assert query["sl"] == ["auto"]
    assert query["tl"] == ["en"]
    assert query["hl"] == ["en"]
    assert query["dt"] == ["at", "bd", "ex", "ld", "md", "qca", "rw", "rm", "ss", "t"]
    assert query["ie"] == ["UTF-8"]
    assert query["oe"] == ["UTF-8"]
    assert query["otf"] == ["1"]
    assert query["ssel"] == ["0"]
    assert query["tsel"] == ["0"]
    assert query["kc"] == ["7"]
    assert query["q"] == ["bonjour"]
    assert query["tk"] == ["520626.955730"]


def test_token_name_is_dynamic():
    prepared = build_request("fr", "en", "salut", Token("xt", "abc"))
    assert _query(prepared.url)["xt"] == ["abc"]


def test_long_text_switches_to_post():
    text = "mot " * 600
    prepared = build_request("fr", "en", text, TOKEN)

    assert prepared.method == "POST"
    assert "q" not in _query(prepared.url)
    assert _query(prepared.url)["tk"] == ["520626.955730"]
    assert prepared.headers["Content-Type"] == FORM_CONTENT_TYPE
    assert urllib.parse.parse_qs(prepared.data, keep_blank_values=True)["q"] == [text]


def test_get_url_at_threshold_stays_get():
    base = build_request("fr", "en", "", TOKEN).url
    room = MAX_GET_URL_LENGTH - len(base)
    prepared = build_request("fr", "en", "a" * room, TOKEN)
    assert len(prepared.url) == MAX_GET_URL_LENGTH
    assert prepared.method == "GET"

    assert build_request("fr", "en", "a" * (room + 1), TOKEN).method == "POST"
