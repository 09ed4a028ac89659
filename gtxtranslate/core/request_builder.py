# -*- coding: utf-8 -*-
"""
Outbound request construction.

Short texts travel inline in a GET query. When the encoded GET URL would be
longer than MAX_GET_URL_LENGTH the text is moved into a form-encoded POST
body; the decision is made once, before the call.
"""

import urllib.parse
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from gtxtranslate.core.constants import (
    CLIENT_ID,
    DT_FLAGS,
    FORM_CONTENT_TYPE,
    MAX_GET_URL_LENGTH,
    TRANSLATE_URL,
)
from gtxtranslate.core.token import Token


@dataclass
class PreparedRequest:
    method: str
    url: str
    data: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)


def build_params(from_iso: str, to_iso: str, text: Optional[str], token: Token) -> List[Tuple[str, object]]:
    params: List[Tuple[str, object]] = [
        ('client', CLIENT_ID),
        ('sl', from_iso),
        ('tl', to_iso),
        ('hl', to_iso),
        ('dt', DT_FLAGS),
        ('ie', 'UTF-8'),
        ('oe', 'UTF-8'),
        ('otf', 1),
        ('ssel', 0),
        ('tsel', 0),
        ('kc', 7),
    ]
    if text is not None:
        params.append(('q', text))
    params.append((token.name, token.value))
    return params


def _encode(params: List[Tuple[str, object]]) -> str:
    return urllib.parse.urlencode(params, doseq=True, safe='')


def build_request(
    from_iso: str,
    to_iso: str,
    text: str,
    token: Token,
    base_url: str = TRANSLATE_URL,
) -> PreparedRequest:
    url = f"{base_url}?{_encode(build_params(from_iso, to_iso, text, token))}"
    if len(url) <= MAX_GET_URL_LENGTH:
        return PreparedRequest("GET", url)

    return PreparedRequest(
        "POST",
        f"{base_url}?{_encode(build_params(from_iso, to_iso, None, token))}",
        data=urllib.parse.urlencode({'q': text}),
        headers={'Content-Type': FORM_CONTENT_TYPE},
    )
