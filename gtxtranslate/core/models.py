# -*- coding: utf-8 -*-
"""Data types passed through the translation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class TranslateOptions:
    """Per-call options. ``None`` means "use the configured default"."""
    from_lang: Optional[str] = None
    to_lang: Optional[str] = None
    raw: bool = False
    max_chunk_chars: Optional[int] = None

    @classmethod
    def from_mapping(cls, options: Dict[str, Any]) -> "TranslateOptions":
        """Accept the wire-style keys (``from``, ``to``, ``maxChunkChars``) too."""
        return cls(
            from_lang=options.get("from", options.get("from_lang")),
            to_lang=options.get("to", options.get("to_lang")),
            raw=bool(options.get("raw", False)),
            max_chunk_chars=options.get("maxChunkChars", options.get("max_chunk_chars")),
        )


@dataclass(frozen=True)
class LanguageInfo:
    did_you_mean: bool = False
    iso: str = ""


@dataclass(frozen=True)
class TextInfo:
    auto_corrected: bool = False
    value: str = ""
    did_you_mean: bool = False


@dataclass(frozen=True)
class SourceInfo:
    language: LanguageInfo = field(default_factory=LanguageInfo)
    text: TextInfo = field(default_factory=TextInfo)


@dataclass(frozen=True)
class TranslateResult:
    """Translated text plus what the endpoint reported about the source.

    ``raw`` is ``""`` unless raw output was requested; then it holds the
    decoded payload, or a list of payloads for chunked input.
    """
    text: str = ""
    source: SourceInfo = field(default_factory=SourceInfo)
    raw: Any = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "from": {
                "language": {
                    "didYouMean": self.source.language.did_you_mean,
                    "iso": self.source.language.iso,
                },
                "text": {
                    "autoCorrected": self.source.text.auto_corrected,
                    "value": self.source.text.value,
                    "didYouMean": self.source.text.did_you_mean,
                },
            },
            "raw": self.raw,
        }
