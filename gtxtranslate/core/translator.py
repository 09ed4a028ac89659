"""Cached translate client: validation, cache, chunking and the single-request path."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from gtxtranslate.core.cache import TranslationCache, make_key
from gtxtranslate.core.chunker import chunk_text, merge_results
from gtxtranslate.core.constants import DEFAULT_MAX_CHUNK_CHARS
from gtxtranslate.core.errors import TranslateError
from gtxtranslate.core.languages import LanguageTable, get_language_table
from gtxtranslate.core.models import TranslateOptions, TranslateResult
from gtxtranslate.core.request_builder import build_request
from gtxtranslate.core.response_parser import decode_body, parse_payload
from gtxtranslate.core.token import TkTokenProvider, TokenProvider
from gtxtranslate.core.transport import AiohttpTransport, Transport
from gtxtranslate.utils.config import TranslatorSettings

OptionsLike = Union[TranslateOptions, Dict[str, Any], None]


def _resolve_chunk_limit(value: Any, default: int) -> int:
    try:
        limit = int(value)
    except (TypeError, ValueError):
        limit = 0
    if limit <= 0:
        limit = default
    return max(1, limit)


class Translator:
    """Translate text through the gtx endpoint.

    Collaborators are injectable; anything left out gets the default
    implementation (static language table, tk token, aiohttp transport,
    in-memory TTL cache). The translator is the only writer of its cache.
    """

    def __init__(
        self,
        languages: Optional[LanguageTable] = None,
        token_provider: Optional[TokenProvider] = None,
        transport: Optional[Transport] = None,
        cache: Optional[TranslationCache] = None,
        settings: Optional[TranslatorSettings] = None,
    ):
        self.settings = settings or TranslatorSettings()
        self.languages = languages or get_language_table()
        self.token_provider = token_provider or TkTokenProvider(timeout=self.settings.request_timeout)
        self.transport = transport or AiohttpTransport(
            timeout=self.settings.request_timeout,
            user_agent=self.settings.user_agent,
        )
        self.cache = cache if cache is not None else TranslationCache(ttl=self.settings.cache_ttl)
        self.logger = logging.getLogger(__name__)

    async def __aenter__(self) -> "Translator":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        await self.transport.close()
        await self.token_provider.close()

    # ------------------------------------------------------------------ #
    # Validation
    # ------------------------------------------------------------------ #

    def _validate(self, opts: TranslateOptions):
        error = None
        for lang in (opts.from_lang, opts.to_lang):
            if lang and not self.languages.is_supported(lang):
                error = TranslateError(400, f"The language '{lang}' is not supported.")
        if error:
            raise error

    def _normalize(self, lang: Optional[str], default: str) -> str:
        requested = default if lang is None else lang
        iso = self.languages.get_iso_code(requested)
        if not iso:
            raise TranslateError(400, f"The language '{requested}' is not supported.")
        return iso

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    async def translate(self, text: Any, options: OptionsLike = None) -> TranslateResult:
        if isinstance(options, dict):
            opts = TranslateOptions.from_mapping(options)
        else:
            opts = options or TranslateOptions()
        text = str(text)

        self._validate(opts)
        from_iso = self._normalize(opts.from_lang, self.settings.source_language)
        to_iso = self._normalize(opts.to_lang, self.settings.target_language)
        raw = bool(opts.raw)
        limit = _resolve_chunk_limit(opts.max_chunk_chars, self.settings.max_chunk_chars or DEFAULT_MAX_CHUNK_CHARS)

        key = make_key(from_iso, to_iso, text)
        cached = self.cache.get(key)
        if cached:
            self.logger.debug(f"Cache hit {from_iso}->{to_iso} ({len(text)} chars)")
            return cached

        chunks = chunk_text(text, limit)
        if len(chunks) > 1:
            self.logger.debug(f"Splitting {len(text)} chars into {len(chunks)} chunks (limit={limit})")
            results: List[TranslateResult] = []
            for chunk in chunks:
                results.append(await self._translate_piece(chunk, from_iso, to_iso, raw))
            merged = merge_results(results, raw)
            self.cache.set(key, merged)
            return merged

        result = await self._request(text, from_iso, to_iso, raw)
        self.cache.set(key, result)
        return result

    async def load_languages(self, languages: Sequence[str], words: Sequence[str]) -> Dict[str, Dict[str, str]]:
        """Warm the cache for every (language, word) pair.

        Returns ``{language: {word: translated_text}}``.
        """
        if not isinstance(languages, (list, tuple)) or not isinstance(words, (list, tuple)):
            raise TranslateError(400, "Parameters must be arrays")

        translations: Dict[str, Dict[str, str]] = {}
        for lang in languages:
            if not self.languages.is_supported(lang):
                raise TranslateError(400, f"Language '{lang}' is not supported")
            translations[lang] = {}

            for word in words:
                key = f"{lang}-auto-{word}"
                cached = self.cache.get(key)
                if cached:
                    translations[lang][word] = cached.text
                    continue
                result = await self.translate(word, TranslateOptions(to_lang=lang))
                translations[lang][word] = result.text
                self.cache.set(key, result)

        self.logger.info(f'The languages "{", ".join(languages)}" have been loaded successfully.')
        return translations

    def get_cache_stats(self) -> Dict[str, float]:
        return self.cache.stats()

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    async def _translate_piece(self, chunk: str, from_iso: str, to_iso: str, raw: bool) -> TranslateResult:
        """One chunk of a larger text; chunks are cached under their own key."""
        key = make_key(from_iso, to_iso, chunk)
        cached = self.cache.get(key)
        if cached:
            return cached
        result = await self._request(chunk, from_iso, to_iso, raw)
        self.cache.set(key, result)
        return result

    async def _request(self, text: str, from_iso: str, to_iso: str, raw: bool) -> TranslateResult:
        try:
            token = await self.token_provider.generate(text)
        except Exception as e:
            raise TranslateError(503, "Failed to generate translate token", e) from e
        if isinstance(token, Exception) or not token or not token.name or not token.value:
            raise TranslateError(503, "Failed to generate translate token")

        prepared = build_request(from_iso, to_iso, text, token, base_url=self.settings.base_url)
        self.logger.debug(f"Sending {prepared.method} request {from_iso}->{to_iso} ({len(text)} chars)")

        try:
            response = await self.transport.request(prepared)
        except Exception as e:
            raise TranslateError(503, f"Translate request failed: {e}", e) from e
        if response.status and response.status >= 400:
            raise TranslateError(response.status, f"Translate request failed with status {response.status}")

        body = await decode_body(response)
        return parse_payload(body, from_iso, raw)


_default_translator: Optional[Translator] = None


def get_default_translator() -> Translator:
    """Process-wide translator used by the module-level helpers."""
    global _default_translator
    if _default_translator is None:
        _default_translator = Translator()
    return _default_translator


async def translate(text: Any, options: OptionsLike = None) -> TranslateResult:
    return await get_default_translator().translate(text, options)


async def load_languages(languages: Sequence[str], words: Sequence[str]) -> Dict[str, Dict[str, str]]:
    return await get_default_translator().load_languages(languages, words)
