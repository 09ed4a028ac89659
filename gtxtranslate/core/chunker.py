# -*- coding: utf-8 -*-
"""Splitting of oversized input and recombination of per-chunk results."""

import re
from typing import List, Sequence

from gtxtranslate.core.models import SourceInfo, TranslateResult

_WHITESPACE_RUN = re.compile(r"(\s+)")


def chunk_text(text: str, limit: int) -> List[str]:
    """Split ``text`` into pieces of at most ``limit`` characters.

    Splits happen on whitespace runs, which are kept as tokens so that
    ``"".join(chunk_text(t, n)) == t``. A token longer than ``limit`` (a URL,
    a long word) is cut at ``limit``-character boundaries.
    """
    if len(text) <= limit:
        return [text]

    parts: List[str] = []
    current = ""
    for tok in _WHITESPACE_RUN.split(text):
        if not tok:
            continue
        if current and len(current) + len(tok) > limit:
            parts.append(current)
            current = tok
        else:
            current += tok
        while len(current) > limit:
            parts.append(current[:limit])
            current = current[limit:]
    if current:
        parts.append(current)
    return parts


def merge_results(results: Sequence[TranslateResult], raw: bool = False) -> TranslateResult:
    """Concatenate chunk translations in order.

    Detection metadata comes from the first chunk. With ``raw`` the merged
    payload is the ordered list of chunk payloads.
    """
    text = "".join(r.text for r in results)
    source = results[0].source if results else SourceInfo()
    return TranslateResult(
        text=text,
        source=source,
        raw=[r.raw for r in results] if raw else "",
    )
