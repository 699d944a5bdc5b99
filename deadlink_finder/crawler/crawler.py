# === FILE: deadlink_finder/crawler/crawler.py ===
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Iterator, List, Set

from deadlink_finder.config import ScannerConfig
from deadlink_finder.crawler.fetcher import Fetcher
from deadlink_finder.crawler.link_extractor import get_extractor, in_scope, normalize_url
from deadlink_finder.crawler.models import (
    CrawlJob,
    CrawlTarget,
    FetchFailure,
    Finding,
    PageDocument,
    ScanStatus,
)
from deadlink_finder.report.sink import ReportSink

__all__ = ("DeadLinkCrawler",)


@dataclass(slots=True)
class _Frame:
    """Pending candidate links of one fetched page."""
    links: Iterator[CrawlTarget]
    depth: int


class DeadLinkCrawler:
    """
    Depth-first, domain-scoped, deduplicated traversal of one scan.

    The traversal keeps an explicit stack of frames instead of recursing, but
    visits pages and emits findings in the same order as a recursive
    depth-first walk: every candidate is probed, reported if dead, and then
    descended into before the next candidate of the same page.
    """

    def __init__(self, fetcher: Fetcher, sink: ReportSink, config: ScannerConfig) -> None:
        self.fetcher = fetcher
        self.sink = sink
        self.config = config
        self.visited: Set[CrawlTarget] = set()
        self.unreachable: Set[CrawlTarget] = set()
        self.logger = logging.getLogger("DeadLinkFinder")
        self._extract = get_extractor(config.link_parser)

    async def crawl(self, job: CrawlJob) -> ScanStatus:
        self.logger.info("Старт обхода: %s (глубина %d)", job.seed_url, job.max_depth)
        start = time.monotonic()
        stack: List[_Frame] = []
        await self._enter(job, CrawlTarget(job.seed_url), 0, stack)

        while stack and not job.cancelled:
            frame = stack[-1]
            link = next(frame.links, None)
            if link is None:
                stack.pop()
                continue
            status = await self.fetcher.probe_status(link)
            if job.cancelled:
                break
            if isinstance(status, FetchFailure):
                # beyond max_depth no GET follows, so report the failed HEAD itself
                if frame.depth + 1 > job.max_depth:
                    self._report_unreachable(link)
            elif status >= 400:
                self.sink.put(Finding.dead(link, status))
            await self._enter(job, link, frame.depth + 1, stack)

        if job.cancelled:
            result = ScanStatus.STOPPED
            self.sink.put(Finding.stopped())
        else:
            result = ScanStatus.COMPLETED
            self.sink.put(Finding.completed())
        self.logger.info(
            "Обход %s: %d страниц за %.2f с",
            result.value, len(self.visited), time.monotonic() - start,
        )
        return result

    async def _enter(self, job: CrawlJob, url: CrawlTarget, depth: int, stack: List[_Frame]) -> None:
        if job.cancelled or depth > job.max_depth or url in self.visited:
            return
        self.visited.add(url)
        self.logger.debug("Visit %s (depth %d)", url, depth)

        page = await self.fetcher.fetch_body(url)
        if isinstance(page, FetchFailure):
            if not job.cancelled:
                self._report_unreachable(url)
            return
        stack.append(_Frame(iter(self._candidates(page, job)), depth))

    def _report_unreachable(self, url: CrawlTarget) -> None:
        if url in self.unreachable:
            return
        self.unreachable.add(url)
        self.sink.put(Finding.unreachable(url))

    def _candidates(self, page: PageDocument, job: CrawlJob) -> List[CrawlTarget]:
        links: List[CrawlTarget] = []
        for href in self._extract(page.content, job.max_links):
            url = normalize_url(job.origin, href)
            if url is None or not in_scope(job.origin, url):
                continue
            links.append(url)
        return links
