# -*- coding: utf-8 -*-
"""
Response Parser
===============

The endpoint answers with an untyped nested array whose segments are
addressed by position and may be missing or null. Parsing never raises on
shape drift: each field has a path and a fallback.

Known positions::

    [0]        list of segments, segment[0] is a piece of translated text
    [2]        detected source language (coarse)
    [7][0]     spelling suggestion, corrections wrapped in <b><i>...</i></b>
    [7][5]     True when the suggestion was applied automatically
    [8][0][0]  detected source language (preferred)
"""

import json
import logging
from typing import Any, Optional

from gtxtranslate.core.errors import TranslateError
from gtxtranslate.core.models import LanguageInfo, SourceInfo, TextInfo, TranslateResult

logger = logging.getLogger(__name__)


class PayloadView:
    """Named, fail-soft accessors over a decoded payload."""

    def __init__(self, body: Any):
        self.body = body

    def at(self, *path: int) -> Any:
        node = self.body
        for index in path:
            if not isinstance(node, list) or index >= len(node):
                return None
            node = node[index]
        return node

    @property
    def segments(self) -> list:
        segs = self.at(0)
        return segs if isinstance(segs, list) else []

    @property
    def detected_language(self) -> Optional[str]:
        return self.at(8, 0, 0)

    @property
    def fallback_language(self) -> Optional[str]:
        return self.at(2)

    @property
    def spelling(self) -> Optional[str]:
        block = self.at(7)
        if isinstance(block, list) and block and isinstance(block[0], str) and block[0]:
            return block[0]
        return None

    @property
    def spelling_auto_corrected(self) -> bool:
        return self.at(7, 5) is True


def extract_text(view: PayloadView) -> str:
    pieces = []
    for seg in view.segments:
        if isinstance(seg, list) and seg and seg[0]:
            pieces.append(str(seg[0]))
    return "".join(pieces)


def extract_language(view: PayloadView, from_iso: str) -> LanguageInfo:
    detected = view.detected_language
    if detected is None:
        detected = view.fallback_language
    if detected is None:
        detected = from_iso
    if detected and detected != from_iso:
        return LanguageInfo(did_you_mean=True, iso=detected)
    return LanguageInfo(did_you_mean=False, iso=detected or from_iso)


def extract_spelling(view: PayloadView) -> TextInfo:
    suggestion = view.spelling
    if suggestion is None:
        return TextInfo()
    value = suggestion.replace("<b><i>", "[").replace("</i></b>", "]")
    if view.spelling_auto_corrected:
        return TextInfo(auto_corrected=True, value=value, did_you_mean=False)
    return TextInfo(auto_corrected=False, value=value, did_you_mean=True)


def parse_payload(body: Any, from_iso: str, raw: bool = False) -> TranslateResult:
    view = PayloadView(body)
    return TranslateResult(
        text=extract_text(view),
        source=SourceInfo(language=extract_language(view, from_iso), text=extract_spelling(view)),
        raw=body if raw else "",
    )


async def decode_body(response) -> Any:
    """Decode the response as JSON, retrying once via the text body."""
    try:
        return await response.json()
    except Exception as first:
        logger.warning(f"JSON decode failed ({type(first).__name__}), retrying from text body")
        try:
            return json.loads(await response.text())
        except Exception as e:
            raise TranslateError(502, "Unexpected translate response format", e) from e
