# File: tests/conftest.py
from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Union

import pytest

from deadlink_finder.config import ScannerConfig
from deadlink_finder.crawler.models import FailureKind, FetchFailure, PageDocument

SEED = "http://site.test"


class FakeFetcher:
    """
    In-memory stand-in for :class:`deadlink_finder.crawler.fetcher.Fetcher`.

    *pages* maps URL -> HTML. Known pages answer 200, unknown URLs answer 404
    (with a small body), URLs in *unreachable* fail at transport level.
    URLs in *head_failures* fail only on the status request; GET still works.
    """

    def __init__(
        self,
        pages: Dict[str, str],
        statuses: Optional[Dict[str, int]] = None,
        unreachable: Iterable[str] = (),
        head_failures: Iterable[str] = (),
        on_probe: Optional[Callable[[str], None]] = None,
        on_fetch: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.pages = pages
        self.statuses = statuses or {}
        self.unreachable = set(unreachable)
        self.head_failures = set(head_failures)
        self.on_probe = on_probe
        self.on_fetch = on_fetch
        self.fetched: List[str] = []
        self.probed: List[str] = []

    def __call__(self, config: ScannerConfig) -> FakeFetcher:
        # lets an instance act as its own fetcher_factory
        return self

    async def __aenter__(self) -> FakeFetcher:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def fetch_body(self, url: str) -> Union[PageDocument, FetchFailure]:
        self.fetched.append(url)
        if self.on_fetch:
            self.on_fetch(url)
        if url in self.unreachable:
            return FetchFailure(FailureKind.CONNECTION, url, "connection refused")
        return PageDocument(url, self.pages.get(url, "<h1>Not Found</h1>"))

    async def probe_status(self, url: str) -> Union[int, FetchFailure]:
        self.probed.append(url)
        if self.on_probe:
            self.on_probe(url)
        if url in self.unreachable or url in self.head_failures:
            return FetchFailure(FailureKind.TIMEOUT, url, "timed out")
        return self.statuses.get(url, 200 if url in self.pages else 404)


def anchors(*hrefs: str) -> str:
    """Build a page body with one anchor per href."""
    return "<html><body>" + "".join(f'<a href="{h}">{h}</a>' for h in hrefs) + "</body></html>"


@pytest.fixture()
def scanner_config() -> ScannerConfig:
    return ScannerConfig(max_depth=3, max_links=1000, timeout=2.0, user_agent="TestAgent/1.0")

