# -*- coding: utf-8 -*-
"""
Translation cache with lazy time-based expiry.

Entries are keyed by the normalized ``from``/``to`` codes and the literal
input text. Expiry is checked on read; nothing sweeps the store in the
background and there is no capacity bound.
"""

import logging
import time
from typing import Callable, Dict, Optional, Tuple

from gtxtranslate.core.constants import CACHE_TTL_SECONDS
from gtxtranslate.core.models import TranslateResult


def make_key(from_iso: str, to_iso: str, text: str) -> str:
    """Cache key for an already normalized language pair."""
    return f"{from_iso}-{to_iso}-{text}"


class TranslationCache:
    def __init__(self, ttl: float = CACHE_TTL_SECONDS, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, Tuple[TranslateResult, float]] = {}
        self.logger = logging.getLogger(__name__)
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[TranslateResult]:
        entry = self._entries.get(key)
        if entry is None:
            self.misses += 1
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            self.misses += 1
            self.logger.debug("Cache entry expired")
            return None
        self.hits += 1
        return value

    def set(self, key: str, value: TranslateResult) -> None:
        self._entries[key] = (value, self._clock() + self.ttl)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        entry = self._entries.get(key)  # type: ignore[arg-type]
        return entry is not None and self._clock() < entry[1]

    def __len__(self) -> int:
        return len(self._entries)

    def stats(self) -> Dict[str, float]:
        total = self.hits + self.misses
        hit_rate = (self.hits / total * 100) if total else 0.0
        return {'size': len(self._entries), 'hits': self.hits, 'misses': self.misses, 'hit_rate': round(hit_rate, 2)}
