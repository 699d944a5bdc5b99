# deadlink_finder/crawler/fetcher.py
"""
Fetcher module: one-shot HTTP GET / HEAD with a fixed timeout and user agent.

Redirects are followed transparently. There are no retries: every call is a
single best-effort attempt, and transport errors come back as
:class:`FetchFailure` instead of being raised.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional, Union

from aiohttp import ClientConnectorError, ClientError, ClientSession, ClientTimeout

from deadlink_finder.config import ScannerConfig
from deadlink_finder.crawler.models import FailureKind, FetchFailure, PageDocument


class Fetcher:
    """Performs GET (body) and HEAD (status) requests for the crawler."""

    def __init__(self, config: ScannerConfig) -> None:
        self.config = config
        self.session: Optional[ClientSession] = None
        self.logger = logging.getLogger("DeadLinkFinder")

    async def __aenter__(self) -> Fetcher:
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.config.timeout),
            headers={"User-Agent": self.config.user_agent},
            raise_for_status=False,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def fetch_body(self, url: str) -> Union[PageDocument, FetchFailure]:
        """
        GET *url* and return its text.

        The HTTP status is not interpreted: a 404 page still yields its body.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")
        try:
            async with self.session.get(url, allow_redirects=True) as resp:
                text = await resp.text(errors="replace")
                return PageDocument(url, text)
        except (ClientError, asyncio.TimeoutError, ValueError) as exc:
            return self._failure(url, exc)

    async def probe_status(self, url: str) -> Union[int, FetchFailure]:
        """HEAD *url* and return the final status code after redirects."""
        if not self.session:
            raise RuntimeError("Session not initialized")
        try:
            async with self.session.head(url, allow_redirects=True) as resp:
                return resp.status
        except (ClientError, asyncio.TimeoutError, ValueError) as exc:
            return self._failure(url, exc)

    def _failure(self, url: str, exc: BaseException) -> FetchFailure:
        # timeout errors may also be ClientError subclasses, so check them first
        if isinstance(exc, asyncio.TimeoutError):
            kind = FailureKind.TIMEOUT
        elif isinstance(exc, ClientConnectorError):
            kind = FailureKind.CONNECTION
        else:
            kind = FailureKind.TRANSPORT
        self.logger.debug("Request failed %s (%s): %r", url, kind.value, exc)
        return FetchFailure(kind, url, str(exc) or type(exc).__name__)
