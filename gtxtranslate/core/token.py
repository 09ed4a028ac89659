# -*- coding: utf-8 -*-
"""
Request token generation for the translate endpoint.

Every non-chunked request carries a signed query parameter. The default
provider computes the classic ``tk`` value from the text and an hourly TKK
seed scraped from the translate web page.
"""

from __future__ import annotations

import asyncio
import logging
import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Optional

import aiohttp

from gtxtranslate.core.constants import (
    REQUEST_TIMEOUT_TOTAL,
    TKK_REFRESH_SECONDS,
    TKK_SEED,
    TKK_SOURCE_URL,
    USER_AGENT,
)

TKK_PATTERN = re.compile(r"tkk:'(\d+\.\d+)'")


@dataclass(frozen=True)
class Token:
    name: str
    value: str


class TokenProvider(ABC):
    """Produces a fresh, single-use token for a piece of text."""

    @abstractmethod
    async def generate(self, text: str) -> Token: ...

    async def close(self):
        pass


# ---------------------------------------------------------------------------
# tk hashing. Mirrors the endpoint's JavaScript, so every step is done on
# signed 32-bit integers.
# ---------------------------------------------------------------------------

def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _xr(a: int, ops: str) -> int:
    for c in range(0, len(ops) - 2, 3):
        d = ops[c + 2]
        shift = ord(d) - 87 if d >= "a" else int(d)
        if ops[c + 1] == "+":
            d_val = (a & 0xFFFFFFFF) >> shift
        else:
            d_val = _to_int32(a << shift)
        a = _to_int32(a + d_val) if ops[c] == "+" else _to_int32(a ^ d_val)
    return a


def _utf16_units(text: str) -> List[int]:
    data = text.encode("utf-16-le", errors="surrogatepass")
    return [int.from_bytes(data[i:i + 2], "little") for i in range(0, len(data), 2)]


def _utf8_like_bytes(text: str) -> List[int]:
    units = _utf16_units(text)
    out: List[int] = []
    g = 0
    size = len(units)
    while g < size:
        code = units[g]
        if code < 128:
            out.append(code)
        else:
            if code < 2048:
                out.append(code >> 6 | 192)
            else:
                if (code & 0xFC00) == 0xD800 and g + 1 < size and (units[g + 1] & 0xFC00) == 0xDC00:
                    g += 1
                    code = 0x10000 + ((code & 0x3FF) << 10) + (units[g] & 0x3FF)
                    out.append(code >> 18 | 240)
                    out.append(code >> 12 & 63 | 128)
                else:
                    out.append(code >> 12 | 224)
                out.append(code >> 6 & 63 | 128)
            out.append(code & 63 | 128)
        g += 1
    return out


def compute_tk(text: str, tkk: str) -> str:
    """Compute the ``tk`` parameter for ``text`` under the given TKK seed."""
    seed = "" if tkk == "0" else tkk
    parts = seed.split(".")
    head = int(parts[0]) if parts[0] else 0
    tail = int(parts[1]) if len(parts) > 1 and parts[1] else 0

    a = head
    for byte in _utf8_like_bytes(text):
        a += byte
        a = _xr(a, "+-a^+6")
    a = _xr(a, "+-3^+b+-f")
    a = _to_int32(a ^ tail)
    if a < 0:
        a = (a & 0x7FFFFFFF) + 0x80000000
    a %= 1000000
    return f"{a}.{a ^ head}"


class TkTokenProvider(TokenProvider):
    """Default provider producing ``Token("tk", ...)``.

    The TKK seed is refreshed from the web page when its hour number is
    stale, at most once per hour. A page without a seed, or a failed fetch,
    leaves the current one in place.
    """

    def __init__(
        self,
        tkk: Optional[str] = None,
        auto_refresh: bool = True,
        clock: Callable[[], float] = time.time,
        timeout: float = REQUEST_TIMEOUT_TOTAL,
    ):
        self.tkk = tkk or TKK_SEED
        self.auto_refresh = auto_refresh
        self._clock = clock
        self._timeout = timeout
        self.logger = logging.getLogger(__name__)
        self._session: Optional[aiohttp.ClientSession] = None
        self._attempted_hour: Optional[int] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def _current_hour(self) -> int:
        return int(self._clock() // TKK_REFRESH_SECONDS)

    def needs_refresh(self) -> bool:
        if not self.auto_refresh:
            return False
        hour = self._current_hour()
        if self._attempted_hour == hour:
            return False
        head = self.tkk.split(".")[0]
        return not head.isdigit() or int(head) != hour

    async def _get_session(self) -> aiohttp.ClientSession:
        loop = asyncio.get_running_loop()
        if self._session is None or self._session.closed or self._loop is not loop:
            timeout = aiohttp.ClientTimeout(total=self._timeout)
            self._session = aiohttp.ClientSession(timeout=timeout, headers={"User-Agent": USER_AGENT})
            self._loop = loop
        return self._session

    async def refresh(self) -> str:
        session = await self._get_session()
        self._attempted_hour = self._current_hour()
        try:
            async with session.get(TKK_SOURCE_URL) as resp:
                page = await resp.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.warning(f"Could not fetch TKK seed, keeping {self.tkk}: {e!r}")
            return self.tkk
        match = TKK_PATTERN.search(page)
        if match:
            self.tkk = match.group(1)
            self.logger.debug(f"TKK refreshed: {self.tkk}")
        else:
            self.logger.debug("No TKK seed found on page, keeping current seed")
        return self.tkk

    async def generate(self, text: str) -> Token:
        if self.needs_refresh():
            await self.refresh()
        return Token("tk", compute_tk(text, self.tkk))

    async def close(self):
        if self._session:
            if self._loop is asyncio.get_running_loop():
                await self._session.close()
            self._session = None
            self._loop = None
