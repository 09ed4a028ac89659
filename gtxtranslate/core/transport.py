# -*- coding: utf-8 -*-
"""HTTP transport for prepared translate requests."""

from __future__ import annotations

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import parse_qs, urlsplit

import aiohttp

from gtxtranslate.core.constants import REQUEST_TIMEOUT_CONNECT, REQUEST_TIMEOUT_TOTAL, USER_AGENT
from gtxtranslate.core.request_builder import PreparedRequest


@dataclass
class TransportResponse:
    """A fully read response. The connection is already released."""
    status: int
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)
    encoding: str = "utf-8"

    async def json(self) -> Any:
        return json.loads(self.body)

    async def text(self) -> str:
        return self.body.decode(self.encoding or "utf-8", errors="replace")


class Transport(ABC):
    @abstractmethod
    async def request(self, prepared: PreparedRequest) -> TransportResponse: ...

    async def close(self):
        pass


class AiohttpTransport(Transport):
    def __init__(
        self,
        timeout: float = REQUEST_TIMEOUT_TOTAL,
        connect_timeout: float = REQUEST_TIMEOUT_CONNECT,
        user_agent: str = USER_AGENT,
    ):
        self.timeout = timeout
        self.connect_timeout = connect_timeout
        self.user_agent = user_agent
        self.logger = logging.getLogger(__name__)
        self._session: Optional[aiohttp.ClientSession] = None
        self._connector: Optional[aiohttp.TCPConnector] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        # Sessions are bound to the loop that created them; asyncio.run() starts a fresh loop per call.
        loop = asyncio.get_running_loop()
        if self._session is None or self._session.closed or self._loop is not loop:
            self._connector = aiohttp.TCPConnector(limit=64, ttl_dns_cache=300)
            timeout = aiohttp.ClientTimeout(total=self.timeout, connect=self.connect_timeout)
            self._session = aiohttp.ClientSession(
                connector=self._connector,
                timeout=timeout,
                headers={'User-Agent': self.user_agent},
            )
            self._loop = loop
        return self._session

    @staticmethod
    def describe(prepared: PreparedRequest) -> str:
        """Log line for a request: method, path and the length of ``q``, never the text itself."""
        parts = urlsplit(prepared.url)
        query = prepared.data if prepared.method == "POST" else parts.query
        q = parse_qs(query or "", keep_blank_values=True).get("q", [""])[0]
        return f"{prepared.method} {parts.path} (q={len(q)} chars)"

    async def request(self, prepared: PreparedRequest) -> TransportResponse:
        session = await self._get_session()
        self.logger.debug(self.describe(prepared))
        async with session.request(
            prepared.method,
            prepared.url,
            data=prepared.data,
            headers=prepared.headers or None,
        ) as resp:
            body = await resp.read()
            return TransportResponse(
                status=resp.status,
                body=body,
                headers=dict(resp.headers),
                encoding=resp.get_encoding() if body else "utf-8",
            )

    async def close(self):
        if self._session:
            # A session left over from a finished loop cannot be closed from this one.
            if self._loop is asyncio.get_running_loop():
                await self._session.close()
            self._session = None
            self._connector = None
            self._loop = None
